# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Code generation from parsed feature ASTs."""

from featurelang.generator.scaffold import Generator

__all__ = [
    "Generator",
]
