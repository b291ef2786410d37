# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for .feature files: lexing, parsing, and artifact caching."""

from featurelang.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from featurelang.compiler.build import FEATURE_SUFFIX, CompilerError, compile_files, compile_source

__all__ = [
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "FEATURE_SUFFIX",
    "compile_source",
    "compile_files",
    "CompilerError",
]
