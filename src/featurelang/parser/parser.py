# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Table-driven state machine parser for feature token streams.

Walks the token sequence produced by the lexer through the transitions in
:mod:`featurelang.parser.grammar`, checking each token's type, value and the
type of the token before it, and builds the feature AST as a side effect.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from featurelang.model.nodes import Feature, FeatureMap, Scenario, Step
from featurelang.parser.grammar import TRANSITIONS, BuildAction, State, Transition
from featurelang.parser.lexer import Token, TokenType

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Base class for errors raised while parsing a token stream.

    Attributes:
        line: 1-based line number of the offending token.
        token_type: Type of the offending token.
        value: Value of the offending token.
    """

    def __init__(self, message: str, token: Token) -> None:
        super().__init__(f"Line {token.line}: {message}")
        self.line = token.line
        self.token_type = token.type
        self.value = token.value


class UnexpectedTokenKind(ParseError):
    """The current state has no transition for the token's type."""

    def __init__(self, token: Token, state: State) -> None:
        super().__init__(
            f"Unexpected token {token.type.value} in state '{state.value}'",
            token,
        )
        self.state = state


class UnexpectedTokenValue(ParseError):
    """The token's type is accepted but its value fails the transition's constraint."""

    def __init__(self, token: Token, state: State) -> None:
        super().__init__(
            f"Unexpected value {token.value!r} for token {token.type.value} in state '{state.value}'",
            token,
        )
        self.state = state


class MismatchedPrecedingToken(ParseError):
    """The token is acceptable but the token before it has the wrong type.

    Attributes:
        previous_type: Type of the preceding token, or None at the start of input.
        previous_line: Line of the preceding token, or None at the start of input.
    """

    def __init__(self, token: Token, previous: Token | None) -> None:
        if previous is None:
            detail = "at start of input"
        else:
            detail = f"{previous.type.value} at line {previous.line}"
        super().__init__(
            f"Token {token.type.value} cannot follow {detail}",
            token,
        )
        self.previous_type = previous.type if previous is not None else None
        self.previous_line = previous.line if previous is not None else None


class MalformedExampleTable(ParseError):
    """An examples table is inconsistent or attached to a plain scenario."""


class IncompleteInput(ParseError):
    """The token stream ended before the parser reached its terminal state."""


def parse(
    tokens: Iterable[Token],
    consumer_factory: Callable[[FeatureMap], Any] | None = None,
) -> Any:
    """Parse a token stream and hand the completed AST to a consumer.

    Args:
        tokens: Tokens as produced by :func:`featurelang.parser.lexer.tokenize`.
            Consumed exactly once, left to right.
        consumer_factory: Called with the finished AST; its result is returned.
            Defaults to constructing a :class:`~featurelang.generator.Generator`.

    Returns:
        Whatever *consumer_factory* returns for the finished AST.

    Raises:
        ParseError: If the token stream does not conform to the grammar.
    """
    ast = _Cursor().run(tokens)
    if consumer_factory is None:
        from featurelang.generator.scaffold import Generator

        return Generator(ast)
    return consumer_factory(ast)


def build_ast(tokens: Iterable[Token]) -> FeatureMap:
    """Parse a token stream and return the bare AST."""
    return parse(tokens, lambda ast: ast)


# ################
# Implementation
# ################


class _Cursor:
    """Mutable state of a single parse: current state, last token and the AST."""

    def __init__(self) -> None:
        self._state = State.START
        self._last: Token | None = None
        self._builder = _AstBuilder()

    def run(self, tokens: Iterable[Token]) -> FeatureMap:
        """Feed every token through the state machine and return the AST."""
        for token in tokens:
            self._step(token)
            self._last = token
        if self._state != State.FINISH:
            last = self._last or Token(TokenType.EOF, None, 1)
            raise IncompleteInput(f"Input ended in state '{self._state.value}'", last)
        return self._builder.ast

    def _step(self, token: Token) -> None:
        transitions = TRANSITIONS[self._state]
        transition = transitions.get(token.type)
        if transition is None:
            raise UnexpectedTokenKind(token, self._state)
        if not transition.accepts_value(token.value):
            raise UnexpectedTokenValue(token, self._state)
        previous_type = self._last.type if self._last is not None else None
        if not transition.accepts_last(previous_type):
            raise MismatchedPrecedingToken(token, self._last)

        self._builder.apply(transition.action, token)
        self._enter(transition, token)

    def _enter(self, transition: Transition, token: Token) -> None:
        target = transition.target(token.value)
        logger.debug(
            "line %d: %s --%s--> %s",
            token.line,
            self._state.value,
            token.type.value,
            target.value,
        )
        self._state = target


class _AstBuilder:
    """Applies build actions to the AST under construction. Append-only."""

    def __init__(self) -> None:
        self.ast: FeatureMap = {}

    def apply(self, action: BuildAction, token: Token) -> None:
        if action == BuildAction.NONE:
            return
        if action == BuildAction.APPEND_FEATURE:
            feature_id = str(len(self.ast) + 1)
            self.ast[feature_id] = Feature(name=str(token.value))
        elif action == BuildAction.APPEND_DESCRIPTION:
            feature = self._last_feature()
            if feature.description:
                feature.description += "\n" + str(token.value)
            else:
                feature.description = str(token.value)
        elif action == BuildAction.APPEND_SCENARIO:
            self._last_feature().scenarios.append(Scenario(outline=False))
        elif action == BuildAction.APPEND_OUTLINE:
            self._last_feature().scenarios.append(Scenario(outline=True))
        elif action == BuildAction.NAME_SCENARIO:
            self._last_scenario().name = str(token.value)
        elif action == BuildAction.APPEND_STEP:
            scenario = self._last_scenario()
            step_id = str(len(scenario.breakdown) + 1)
            scenario.breakdown.append(Step(id=step_id, sentences=[str(token.value)]))
        elif action == BuildAction.APPEND_SENTENCE:
            self._last_scenario().breakdown[-1].sentences.append(str(token.value))
        elif action == BuildAction.OPEN_EXAMPLES:
            scenario = self._last_scenario()
            if not scenario.outline:
                raise MalformedExampleTable(
                    f"Examples given for scenario {scenario.name!r}, which is not a Scenario Outline",
                    token,
                )
        elif action == BuildAction.APPEND_EXAMPLE_ROW:
            self._append_example_row(token)
        else:
            raise AssertionError(f"Unhandled build action: {action}")

    def _last_feature(self) -> Feature:
        return self.ast[str(len(self.ast))]

    def _last_scenario(self) -> Scenario:
        return self._last_feature().scenarios[-1]

    def _append_example_row(self, token: Token) -> None:
        """The first row names the columns; later rows are appended column-wise."""
        scenario = self._last_scenario()
        value = token.value
        if isinstance(value, str) or not isinstance(value, Sequence) or not all(isinstance(c, str) for c in value):
            raise MalformedExampleTable(f"Example row must be a sequence of strings, got {value!r}", token)
        cells = list(value)
        if not scenario.has_examples:
            if not cells:
                raise MalformedExampleTable("Examples header has no columns", token)
            if len(set(cells)) != len(cells):
                raise MalformedExampleTable(f"Duplicate column names in examples header {cells!r}", token)
            scenario.example_variables = cells
            scenario.examples = {name: [] for name in cells}
            return
        if len(cells) != len(scenario.example_variables):
            raise MalformedExampleTable(
                f"Example row has {len(cells)} column(s), header has {len(scenario.example_variables)}",
                token,
            )
        for name, cell in zip(scenario.example_variables, cells, strict=True):
            scenario.examples[name].append(cell)
