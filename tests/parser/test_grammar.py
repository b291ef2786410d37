# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the parser transition table."""

from collections.abc import Mapping

import pytest

from featurelang.parser.grammar import ANY, TRANSITIONS, BuildAction, State, Transition
from featurelang.parser.lexer import TokenType

T = TokenType


class TestTable:
    def test_every_state_has_an_entry(self) -> None:
        assert set(TRANSITIONS) == set(State)

    def test_finish_is_terminal(self) -> None:
        assert len(TRANSITIONS[State.FINISH]) == 0

    def test_start_accepts_only_feature(self) -> None:
        assert list(TRANSITIONS[State.START]) == [T.FEATURE]

    def test_every_target_is_a_state(self) -> None:
        for transitions in TRANSITIONS.values():
            for transition in transitions.values():
                targets = transition.next.values() if isinstance(transition.next, Mapping) else [transition.next]
                assert all(isinstance(target, State) for target in targets)

    def test_finish_is_reached_only_through_eof(self) -> None:
        for transitions in TRANSITIONS.values():
            for token_type, transition in transitions.items():
                if transition.next == State.FINISH:
                    assert token_type == T.EOF

    @pytest.mark.parametrize("state", [State.STEP_OPERATOR, State.STEP_BODY, State.EXAMPLE_ROWS])
    def test_eof_accepted_from_accumulating_states(self, state: State) -> None:
        assert TRANSITIONS[state][T.EOF].next == State.FINISH

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            TRANSITIONS[State.FINISH] = {}  # type: ignore[index]
        with pytest.raises(TypeError):
            TRANSITIONS[State.START][T.EOF] = Transition(State.FINISH)  # type: ignore[index]
        with pytest.raises(TypeError):
            TRANSITIONS[State.EXAMPLE_ROWS][T.OUTDENT].next[4] = State.FINISH  # type: ignore[index]

    def test_only_feature_creation_appends_features(self) -> None:
        appenders = [
            (state, token_type)
            for state, transitions in TRANSITIONS.items()
            for token_type, transition in transitions.items()
            if transition.action == BuildAction.APPEND_FEATURE
        ]
        assert appenders == [(State.FEATURE, T.SENTENCE)]


class TestTransition:
    def test_any_value_accepts_everything(self) -> None:
        transition = Transition(State.FEATURE)
        assert transition.value is ANY
        assert transition.accepts_value("x")
        assert transition.accepts_value(None)

    def test_literal_value(self) -> None:
        transition = Transition(State.FEATURE, value="Feature")
        assert transition.accepts_value("Feature")
        assert not transition.accepts_value("feature")

    def test_unconstrained_last(self) -> None:
        assert Transition(State.FEATURE).accepts_last(None)

    def test_single_last(self) -> None:
        transition = Transition(State.FEATURE, last=T.TERMINATOR)
        assert transition.accepts_last(T.TERMINATOR)
        assert not transition.accepts_last(T.INDENT)
        assert not transition.accepts_last(None)

    def test_set_of_last(self) -> None:
        transition = Transition(State.FEATURE, last=frozenset({T.TERMINATOR, T.INDENT}))
        assert transition.accepts_last(T.INDENT)
        assert not transition.accepts_last(T.SENTENCE)

    def test_value_dispatched_target(self) -> None:
        transition = TRANSITIONS[State.EXAMPLE_ROWS][T.OUTDENT]
        assert transition.accepts_value(2)
        assert transition.accepts_value(3)
        assert not transition.accepts_value(1)
        assert transition.target(2) == State.FEATURE_DESCRIPTION
        assert transition.target(3) == State.FEATURE_CLOSED

    def test_transitions_are_immutable(self) -> None:
        transition = TRANSITIONS[State.START][T.FEATURE]
        with pytest.raises(AttributeError):
            transition.next = State.FINISH  # type: ignore[misc]
