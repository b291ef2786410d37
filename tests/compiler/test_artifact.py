# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the compiled AST artifact serialization."""

import json
from pathlib import Path

import pytest

from featurelang.compiler.artifact import (
    ARTIFACT_FORMAT_VERSION,
    deserialize,
    read_artifact,
    serialize,
    write_artifact,
)
from featurelang.compiler.build import compile_source
from featurelang.model import Feature, FeatureMap, Scenario, Step

# ###############
# Helpers
# ###############

SOURCE = """\
Feature: Accounts
  Keeps track of balances.
  Scenario Outline: Withdraw
    Given a balance of <balance>
    Examples:
      | balance |
      | 100     |
Feature: Login
  Scenario: Valid credentials
    Given "a user"
    Then "is logged in"
"""


def _roundtrip(features: FeatureMap) -> FeatureMap:
    """Serialize and deserialize a feature map."""
    return deserialize(serialize(features))


# ###############
# Serialize / Deserialize
# ###############


class TestRoundtrip:
    def test_empty_map(self) -> None:
        assert _roundtrip({}) == {}

    def test_parsed_source(self) -> None:
        features = compile_source(SOURCE)
        assert _roundtrip(features) == features

    def test_key_order_is_preserved(self) -> None:
        features = {"2": Feature(name="b"), "1": Feature(name="a")}
        assert list(_roundtrip(features)) == ["2", "1"]

    def test_plain_scenario_omits_examples(self) -> None:
        scenario = Scenario(name="S", breakdown=[Step(id="1", sentences=["Given"])])
        features = {"1": Feature(name="F", scenarios=[scenario])}
        obj = json.loads(serialize(features))
        assert "examples" not in obj["features"]["1"]["scenarios"][0]

    def test_output_is_compact(self) -> None:
        assert " " not in serialize({"1": Feature(name="F")})


class TestVersion:
    def test_version_is_written(self) -> None:
        assert json.loads(serialize({}))["v"] == ARTIFACT_FORMAT_VERSION

    def test_unknown_version_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported artifact format version"):
            deserialize('{"v":"99","features":{}}')

    def test_missing_version_rejected(self) -> None:
        with pytest.raises(ValueError):
            deserialize('{"features":{}}')


class TestFiles:
    def test_write_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "login.feature.json"
        features = compile_source(SOURCE)
        write_artifact(features, path)
        assert path.exists()
        assert read_artifact(path) == features

    def test_tab_size_is_written(self) -> None:
        assert json.loads(serialize({}, tab_size=2))["tab-size"] == 2

    def test_tab_size_mismatch_rejected(self) -> None:
        with pytest.raises(ValueError, match="tab size"):
            deserialize(serialize({}, tab_size=2), tab_size=4)
