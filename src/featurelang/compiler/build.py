# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Incremental compiler workflow for .feature files.

Implements a CMake-style cache: an artifact is reused when it already exists,
is strictly newer than the corresponding source file and was compiled with
the same tab size. Otherwise the source is tokenized and parsed, and the
resulting AST is written as a JSON artifact under the build directory,
mirroring the source layout.
"""

from __future__ import annotations

import logging
from pathlib import Path

from featurelang.compiler.artifact import ARTIFACT_SUFFIX, read_artifact, write_artifact
from featurelang.model.nodes import FeatureMap
from featurelang.parser.lexer import LexError, tokenize
from featurelang.parser.parser import ParseError, build_ast

logger = logging.getLogger(__name__)

FEATURE_SUFFIX = ".feature"

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a feature file cannot be read, lexed or parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def compile_source(source: str, *, tab_size: int = 4) -> FeatureMap:
    """Tokenize and parse feature source text into its AST.

    Raises:
        LexError: If the source cannot be tokenized.
        ParseError: If the token stream is not a valid feature document.
    """
    return build_ast(tokenize(source, tab_size=tab_size))


def compile_files(
    files: list[Path],
    build_dir: Path,
    root: Path,
    *,
    tab_size: int = 4,
) -> dict[str, FeatureMap]:
    """Compile a list of .feature source files.

    For each file, the compiler reuses an up-to-date artifact if one exists;
    otherwise it parses the source and writes a fresh artifact to *build_dir*.

    Args:
        files: Absolute paths to the .feature source files to compile.
        build_dir: Root directory for compiled artifacts.
        root: Directory the source files are keyed relative to.
        tab_size: Column width of a tab character in indentation.

    Returns:
        A mapping from canonical path keys (e.g. ``"auth/login"``) to the
        compiled feature maps, in the order of *files*.

    Raises:
        CompilerError: If any file cannot be read, or fails to lex or parse.
    """
    compiled: dict[str, FeatureMap] = {}
    for source_file in files:
        key = _rel_key(source_file, root)
        compiled[key] = _compile_file(source_file, _artifact_path(key, build_dir), tab_size)
    return compiled


# ################
# Implementation
# ################


def _rel_key(source_file: Path, root: Path) -> str:
    """Return the canonical key for a source file (relative path without suffix).

    Raises:
        CompilerError: If the file is not under *root*.
    """
    try:
        rel = source_file.relative_to(root)
    except ValueError:
        raise CompilerError(f"Source file '{source_file}' is not under '{root}'") from None
    return str(rel.with_suffix("")).replace("\\", "/")


def _artifact_path(key: str, build_dir: Path) -> Path:
    """Return the artifact path for a canonical key.

    The key segments (split on ``/``) map directly to subdirectory components
    under *build_dir* (e.g. ``"auth/login"`` -> ``build_dir/auth/login.feature.json``).
    """
    parts = key.split("/")
    artifact_dir = build_dir
    for part in parts[:-1]:
        artifact_dir = artifact_dir / part
    return artifact_dir / (parts[-1] + ARTIFACT_SUFFIX)


def _is_up_to_date(source_file: Path, artifact: Path) -> bool:
    """Return True if *artifact* exists and is strictly newer than *source_file*."""
    if not artifact.exists():
        return False
    return artifact.stat().st_mtime > source_file.stat().st_mtime


def _compile_file(source_file: Path, artifact: Path, tab_size: int) -> FeatureMap:
    """Compile one .feature file, reusing its artifact when up to date."""
    if _is_up_to_date(source_file, artifact):
        try:
            features = read_artifact(artifact, tab_size=tab_size)
        except ValueError as exc:
            logger.info("Discarding stale artifact %s: %s", artifact, exc)
        else:
            logger.debug("Cache hit for %s", source_file)
            return features

    try:
        source_text = source_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CompilerError(f"Cannot read source file '{source_file}': {exc}") from exc

    try:
        features = compile_source(source_text, tab_size=tab_size)
    except LexError as exc:
        raise CompilerError(f"Lex error in '{source_file}': {exc}") from exc
    except ParseError as exc:
        raise CompilerError(f"Parse error in '{source_file}': {exc}") from exc

    write_artifact(features, artifact, tab_size=tab_size)
    logger.debug("Wrote artifact %s", artifact)
    return features
