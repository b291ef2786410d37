# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Transition table of the feature parser's state machine.

The table is static, read-only data shared by every parse. Each state maps an
accepted token type to a :class:`Transition` describing the value the token
must carry, the type the immediately preceding token must have, the state to
enter and the AST mutation to perform.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from featurelang.parser.lexer import (
    EXAMPLES_KEYWORD,
    FEATURE_KEYWORD,
    SCENARIO_KEYWORD,
    SCENARIO_OUTLINE_KEYWORD,
    TokenType,
    TokenValue,
)

# ###############
# Public Interface
# ###############


class State(enum.Enum):
    """Parser states. ``start`` is initial, ``finish`` the only terminal state."""

    START = "start"
    FEATURE = "feature"
    FEATURE_HEADER = "featureHeader"
    FEATURE_DESCRIPTION = "featureDescription"
    SCENARIO = "scenario"
    SCENARIO_HEADER = "scenarioHeader"
    STEP_OPERATOR = "stepOperator"
    STEP_BODY = "stepBody"
    EXAMPLES = "examples"
    EXAMPLE_ROWS = "exampleRows"
    FEATURE_CLOSED = "featureClosed"
    FINISH = "finish"


class BuildAction(enum.Enum):
    """The closed set of AST mutations a transition may perform."""

    NONE = "none"
    APPEND_FEATURE = "append_feature"
    APPEND_DESCRIPTION = "append_description"
    APPEND_SCENARIO = "append_scenario"
    APPEND_OUTLINE = "append_outline"
    NAME_SCENARIO = "name_scenario"
    APPEND_STEP = "append_step"
    APPEND_SENTENCE = "append_sentence"
    OPEN_EXAMPLES = "open_examples"
    APPEND_EXAMPLE_ROW = "append_example_row"


class _Any:
    def __repr__(self) -> str:
        return "ANY"


ANY = _Any()
"""Value constraint accepting any token value."""


@dataclass(frozen=True)
class Transition:
    """Descriptor of one accepted token type in one state.

    Attributes:
        next: The state to enter, or a mapping from token value to state for
            tokens whose value selects the return state (OUTDENT).
        value: ``ANY`` or the exact literal the token value must equal.
        last: Required type(s) of the immediately preceding token, or None
            when unconstrained.
        action: The AST mutation to run once all checks pass.
    """

    next: State | Mapping[TokenValue, State]
    value: object = ANY
    last: TokenType | frozenset[TokenType] | None = None
    action: BuildAction = BuildAction.NONE

    def accepts_value(self, value: TokenValue) -> bool:
        """Return True if *value* satisfies this transition's value constraint."""
        if self.value is not ANY and self.value != value:
            return False
        if isinstance(self.next, Mapping):
            return value in self.next
        return True

    def accepts_last(self, last: TokenType | None) -> bool:
        """Return True if a preceding token of type *last* is acceptable."""
        if self.last is None:
            return True
        if isinstance(self.last, TokenType):
            return last == self.last
        return last in self.last

    def target(self, value: TokenValue) -> State:
        """Return the state entered for a token carrying *value*."""
        if isinstance(self.next, Mapping):
            return self.next[value]
        return self.next


def _any_of(*types: TokenType) -> frozenset[TokenType]:
    return frozenset(types)


_TABLE: dict[State, dict[TokenType, Transition]] = {
    State.START: {
        TokenType.FEATURE: Transition(State.FEATURE, value=FEATURE_KEYWORD),
    },
    State.FEATURE: {
        TokenType.SENTENCE: Transition(
            State.FEATURE_HEADER,
            last=TokenType.FEATURE,
            action=BuildAction.APPEND_FEATURE,
        ),
    },
    State.FEATURE_HEADER: {
        TokenType.TERMINATOR: Transition(
            State.FEATURE_HEADER,
            last=_any_of(TokenType.TERMINATOR, TokenType.SENTENCE),
        ),
        TokenType.INDENT: Transition(State.FEATURE_DESCRIPTION, last=TokenType.TERMINATOR),
    },
    State.FEATURE_DESCRIPTION: {
        TokenType.TERMINATOR: Transition(
            State.FEATURE_DESCRIPTION,
            last=_any_of(TokenType.SENTENCE, TokenType.TERMINATOR),
        ),
        TokenType.SENTENCE: Transition(
            State.FEATURE_DESCRIPTION,
            last=_any_of(TokenType.TERMINATOR, TokenType.INDENT),
            action=BuildAction.APPEND_DESCRIPTION,
        ),
        TokenType.SCENARIO: Transition(
            State.SCENARIO,
            value=SCENARIO_KEYWORD,
            last=_any_of(TokenType.TERMINATOR, TokenType.INDENT, TokenType.OUTDENT),
            action=BuildAction.APPEND_SCENARIO,
        ),
        TokenType.SCENARIO_OUTLINE: Transition(
            State.SCENARIO,
            value=SCENARIO_OUTLINE_KEYWORD,
            last=_any_of(TokenType.TERMINATOR, TokenType.INDENT, TokenType.OUTDENT),
            action=BuildAction.APPEND_OUTLINE,
        ),
    },
    State.SCENARIO: {
        TokenType.SENTENCE: Transition(
            State.SCENARIO_HEADER,
            last=_any_of(TokenType.SCENARIO, TokenType.SCENARIO_OUTLINE),
            action=BuildAction.NAME_SCENARIO,
        ),
    },
    State.SCENARIO_HEADER: {
        TokenType.TERMINATOR: Transition(State.SCENARIO_HEADER, last=TokenType.SENTENCE),
        TokenType.INDENT: Transition(State.STEP_OPERATOR, last=TokenType.TERMINATOR),
    },
    State.STEP_OPERATOR: {
        TokenType.OPERATOR: Transition(
            State.STEP_BODY,
            last=_any_of(TokenType.INDENT, TokenType.TERMINATOR),
            action=BuildAction.APPEND_STEP,
        ),
        # Continuation line of the most recent step.
        TokenType.SENTENCE: Transition(
            State.STEP_BODY,
            last=TokenType.TERMINATOR,
            action=BuildAction.APPEND_SENTENCE,
        ),
        TokenType.EXAMPLES: Transition(
            State.EXAMPLES,
            value=EXAMPLES_KEYWORD,
            last=TokenType.TERMINATOR,
            action=BuildAction.OPEN_EXAMPLES,
        ),
        TokenType.OUTDENT: Transition(
            MappingProxyType({1: State.FEATURE_DESCRIPTION, 2: State.FEATURE_CLOSED}),
            last=TokenType.TERMINATOR,
        ),
        TokenType.EOF: Transition(State.FINISH, last=TokenType.TERMINATOR),
    },
    State.STEP_BODY: {
        TokenType.SENTENCE: Transition(
            State.STEP_BODY,
            last=TokenType.OPERATOR,
            action=BuildAction.APPEND_SENTENCE,
        ),
        TokenType.TERMINATOR: Transition(
            State.STEP_OPERATOR,
            last=_any_of(TokenType.OPERATOR, TokenType.SENTENCE),
        ),
        TokenType.EOF: Transition(State.FINISH, last=TokenType.SENTENCE),
    },
    State.EXAMPLES: {
        TokenType.TERMINATOR: Transition(
            State.EXAMPLES,
            last=_any_of(TokenType.TERMINATOR, TokenType.EXAMPLES),
        ),
        TokenType.INDENT: Transition(State.EXAMPLE_ROWS, last=TokenType.TERMINATOR),
    },
    State.EXAMPLE_ROWS: {
        TokenType.EXAMPLE_ROW: Transition(
            State.EXAMPLE_ROWS,
            last=_any_of(TokenType.INDENT, TokenType.TERMINATOR),
            action=BuildAction.APPEND_EXAMPLE_ROW,
        ),
        TokenType.TERMINATOR: Transition(State.EXAMPLE_ROWS, last=TokenType.EXAMPLE_ROW),
        TokenType.OUTDENT: Transition(
            MappingProxyType({2: State.FEATURE_DESCRIPTION, 3: State.FEATURE_CLOSED}),
            last=TokenType.TERMINATOR,
        ),
        TokenType.EOF: Transition(State.FINISH, last=TokenType.TERMINATOR),
    },
    State.FEATURE_CLOSED: {
        TokenType.FEATURE: Transition(State.FEATURE, value=FEATURE_KEYWORD, last=TokenType.OUTDENT),
        TokenType.EOF: Transition(State.FINISH, last=TokenType.OUTDENT),
    },
    State.FINISH: {},
}

TRANSITIONS: Mapping[State, Mapping[TokenType, Transition]] = MappingProxyType(
    {state: MappingProxyType(transitions) for state, transitions in _TABLE.items()}
)
