# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""AST model for featurelang (features, scenarios, steps)."""

from featurelang.model.nodes import Feature, FeatureMap, Scenario, Step

__all__ = [
    "Feature",
    "FeatureMap",
    "Scenario",
    "Step",
]
