# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-oriented lexer for .feature files.

Converts raw source text into a sequence of tokens for subsequent parsing.
Block structure is expressed by indentation; the lexer synthesizes INDENT and
OUTDENT tokens from changes in leading whitespace.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the feature lexer."""

    # Keywords
    FEATURE = "FEATURE"
    SCENARIO = "SCENARIO"
    SCENARIO_OUTLINE = "SCENARIO_OUTLINE"
    EXAMPLES = "EXAMPLES"

    # Content
    SENTENCE = "SENTENCE"
    OPERATOR = "OPERATOR"
    EXAMPLE_ROW = "EXAMPLE_ROW"

    # Structure
    INDENT = "INDENT"
    OUTDENT = "OUTDENT"
    TERMINATOR = "TERMINATOR"

    # End of file
    EOF = "EOF"


TokenValue = str | tuple[str, ...] | int | None


@dataclass(frozen=True)
class Token:
    """A lexical token with its source line.

    Attributes:
        type: The kind of token.
        value: The keyword literal for keyword tokens, the text for SENTENCE and
            OPERATOR tokens, the cell values for EXAMPLE_ROW tokens, the number
            of closed levels for OUTDENT tokens and None otherwise.
        line: 1-based line number the token was read from.
    """

    type: TokenType
    value: TokenValue
    line: int


class LexError(Exception):
    """Raised when the lexer encounters inconsistent indentation or a malformed line.

    Attributes:
        line: 1-based line number of the error.
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"Line {line}: {message}")
        self.line = line


FEATURE_KEYWORD = "Feature"
SCENARIO_KEYWORD = "Scenario"
SCENARIO_OUTLINE_KEYWORD = "Scenario Outline"
EXAMPLES_KEYWORD = "Examples"

STEP_OPERATORS: frozenset[str] = frozenset({"Given", "When", "Then", "And", "But"})

TABLE_DELIMITER = "|"


def tokenize(source: str, *, tab_size: int = 4) -> list[Token]:
    """Tokenize feature source text into a sequence of tokens.

    Blank lines and ``#`` comment lines produce no tokens. Every other line
    ends with a TERMINATOR. All indentation levels still open at the end of
    the input are closed by a single OUTDENT before the final EOF.

    Args:
        source: The full text of a .feature file.
        tab_size: Column width a tab character advances to.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexError: On a dedent to a width that was never opened, or on a
            malformed or misplaced example table row.
    """
    return _Lexer(source, tab_size).tokenize()


# ################
# Implementation
# ################

# Checked in order: "Scenario Outline:" must win over "Scenario:".
_KEYWORDS: tuple[tuple[str, TokenType], ...] = (
    (FEATURE_KEYWORD, TokenType.FEATURE),
    (SCENARIO_OUTLINE_KEYWORD, TokenType.SCENARIO_OUTLINE),
    (SCENARIO_KEYWORD, TokenType.SCENARIO),
    (EXAMPLES_KEYWORD, TokenType.EXAMPLES),
)


class _Lexer:
    """Internal line scanner with an indentation stack."""

    def __init__(self, source: str, tab_size: int) -> None:
        self._lines = source.splitlines()
        self._tab_size = tab_size
        self._indent_stack: list[int] = [0]
        self._tokens: list[Token] = []
        # Widths of the enclosing "Scenario:" and "Examples:" lines, if any.
        self._scenario_indent: int | None = None
        self._examples_indent: int | None = None

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        for number, raw in enumerate(self._lines, start=1):
            width, text = self._measure(raw)
            if not text or text.startswith("#"):
                continue
            if text[0].isspace():
                raise LexError(f"Unsupported whitespace {text[0]!r} in indentation", number)
            self._handle_indentation(width, number)
            self._scan_line(width, text, number)
            self._tokens.append(Token(TokenType.TERMINATOR, None, number))

        last_line = max(len(self._lines), 1)
        if len(self._indent_stack) > 1:
            self._tokens.append(Token(TokenType.OUTDENT, len(self._indent_stack) - 1, last_line))
            del self._indent_stack[1:]
        self._tokens.append(Token(TokenType.EOF, None, last_line))
        return self._tokens

    # ------------------------------------------------------------------
    # Indentation
    # ------------------------------------------------------------------

    def _measure(self, raw: str) -> tuple[int, str]:
        """Return the indentation width of a line and its content.

        Only spaces and tabs count as indentation; the content keeps any other
        leading whitespace.
        """
        width = 0
        for ch in raw:
            if ch == " ":
                width += 1
            elif ch == "\t":
                width += self._tab_size - width % self._tab_size
            else:
                break
        return width, raw.lstrip(" \t").rstrip()

    def _handle_indentation(self, width: int, line: int) -> None:
        """Emit INDENT or OUTDENT tokens for a change of indentation width."""
        current = self._indent_stack[-1]
        if width > current:
            self._indent_stack.append(width)
            self._tokens.append(Token(TokenType.INDENT, None, line))
        elif width < current:
            closed = 0
            while self._indent_stack[-1] > width:
                self._indent_stack.pop()
                closed += 1
            if self._indent_stack[-1] != width:
                raise LexError(
                    f"Inconsistent indentation (expected {self._indent_stack[-1]} columns, got {width})",
                    line,
                )
            self._tokens.append(Token(TokenType.OUTDENT, closed, line))

        if self._scenario_indent is not None and width <= self._scenario_indent:
            self._scenario_indent = None
        if self._examples_indent is not None and width <= self._examples_indent:
            self._examples_indent = None

    # ------------------------------------------------------------------
    # Line classification
    # ------------------------------------------------------------------

    def _scan_line(self, width: int, text: str, line: int) -> None:
        """Classify one non-blank line and append its tokens."""
        for keyword, token_type in _KEYWORDS:
            prefix = keyword + ":"
            if text.startswith(prefix):
                self._tokens.append(Token(token_type, keyword, line))
                self._append_sentence(text[len(prefix) :], line)
                if token_type in (TokenType.SCENARIO, TokenType.SCENARIO_OUTLINE):
                    self._scenario_indent = width
                elif token_type == TokenType.EXAMPLES:
                    self._examples_indent = width
                return

        if text.startswith(TABLE_DELIMITER):
            self._scan_row(text, line)
            return

        if self._scenario_indent is not None:
            word, *rest = text.split(None, 1)
            if word in STEP_OPERATORS:
                self._tokens.append(Token(TokenType.OPERATOR, word, line))
                self._append_sentence(rest[0] if rest else "", line)
                return

        self._append_sentence(text, line)

    def _scan_row(self, text: str, line: int) -> None:
        """Scan a ``| a | b |`` example table row."""
        if self._examples_indent is None:
            raise LexError("Table row outside of an Examples block", line)
        if len(text) < 2 or not text.endswith(TABLE_DELIMITER):
            raise LexError("Unterminated table row", line)
        cells = tuple(cell.strip() for cell in text[1:-1].split(TABLE_DELIMITER))
        self._tokens.append(Token(TokenType.EXAMPLE_ROW, cells, line))

    def _append_sentence(self, text: str, line: int) -> None:
        """Append a SENTENCE token for *text* unless it is empty."""
        text = text.strip()
        if not text:
            return
        if len(text) >= 2 and text[0] == text[-1] == '"' and '"' not in text[1:-1]:
            text = text[1:-1]
        self._tokens.append(Token(TokenType.SENTENCE, text, line))
