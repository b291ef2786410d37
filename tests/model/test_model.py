# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the feature AST model."""

from featurelang.model import Feature, Scenario, Step

# ###############
# Step
# ###############


class TestStep:
    def test_operator_is_first_sentence(self) -> None:
        step = Step(id="1", sentences=["Given", "a user"])
        assert step.operator == "Given"

    def test_sentences_default_empty(self) -> None:
        assert Step(id="1").sentences == []


# ###############
# Scenario
# ###############


class TestScenario:
    def test_defaults(self) -> None:
        scenario = Scenario()
        assert scenario.name == ""
        assert scenario.outline is False
        assert scenario.breakdown == []
        assert scenario.example_variables == []
        assert scenario.examples == {}
        assert scenario.has_examples is False

    def test_example_rows_in_source_order(self) -> None:
        scenario = Scenario(
            outline=True,
            example_variables=["a", "b"],
            examples={"a": ["1", "3"], "b": ["2", "4"]},
        )
        assert scenario.has_examples is True
        assert scenario.example_rows() == [("1", "2"), ("3", "4")]

    def test_example_rows_follow_variable_order(self) -> None:
        scenario = Scenario(outline=True, example_variables=["b", "a"], examples={"a": ["1"], "b": ["2"]})
        assert scenario.example_rows() == [("2", "1")]

    def test_lists_are_not_shared(self) -> None:
        first = Scenario()
        second = Scenario()
        first.breakdown.append(Step(id="1", sentences=["Given"]))
        assert second.breakdown == []


# ###############
# Feature
# ###############


class TestFeature:
    def test_defaults(self) -> None:
        feature = Feature(name="Login")
        assert feature.description == ""
        assert feature.scenarios == []

    def test_equality_is_structural(self) -> None:
        def build() -> Feature:
            return Feature(name="F", scenarios=[Scenario(name="S", breakdown=[Step(id="1", sentences=["Then", "x"])])])

        assert build() == build()
