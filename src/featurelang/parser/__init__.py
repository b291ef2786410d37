# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for .feature files."""

from featurelang.parser.lexer import LexError, Token, TokenType, tokenize
from featurelang.parser.parser import (
    IncompleteInput,
    MalformedExampleTable,
    MismatchedPrecedingToken,
    ParseError,
    UnexpectedTokenKind,
    UnexpectedTokenValue,
    build_ast,
    parse,
)

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "LexError",
    "parse",
    "build_ast",
    "ParseError",
    "UnexpectedTokenKind",
    "UnexpectedTokenValue",
    "MismatchedPrecedingToken",
    "MalformedExampleTable",
    "IncompleteInput",
]
