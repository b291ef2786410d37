# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of compiled feature ASTs.

Artifacts are stored as compact JSON files for portability and human-readability.
The format is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from featurelang.model.nodes import Feature, FeatureMap, Scenario, Step

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "2"

ARTIFACT_SUFFIX = ".feature.json"


def serialize(features: FeatureMap, *, tab_size: int = 4) -> str:
    """Serialize a feature map, and the tab size it was lexed with, to compact JSON."""
    obj = {
        "v": ARTIFACT_FORMAT_VERSION,
        "tab-size": tab_size,
        "features": {key: _feature_to_dict(feature) for key, feature in features.items()},
    }
    return json.dumps(obj, separators=(",", ":"))


def deserialize(data: str, *, tab_size: int | None = None) -> FeatureMap:
    """Deserialize a feature map from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.
        tab_size: If given, the tab size the artifact must have been compiled with.

    Returns:
        The reconstructed feature map, keys in their original order.

    Raises:
        ValueError: If the artifact format version is not recognised, or the
            artifact was compiled with a different tab size.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    if tab_size is not None and obj.get("tab-size") != tab_size:
        raise ValueError(f"Artifact compiled with tab size {obj.get('tab-size')!r}, expected {tab_size}")
    return {key: _feature_from_dict(feature) for key, feature in obj.get("features", {}).items()}


def write_artifact(features: FeatureMap, path: Path, *, tab_size: int = 4) -> None:
    """Write a compiled artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(features, tab_size=tab_size), encoding="utf-8")


def read_artifact(path: Path, *, tab_size: int | None = None) -> FeatureMap:
    """Read and deserialize a compiled artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"), tab_size=tab_size)


# ################
# Implementation
# ################


def _feature_to_dict(feature: Feature) -> dict[str, Any]:
    return {
        "name": feature.name,
        "description": feature.description,
        "scenarios": [_scenario_to_dict(s) for s in feature.scenarios],
    }


def _feature_from_dict(obj: dict[str, Any]) -> Feature:
    return Feature(
        name=obj["name"],
        description=obj.get("description", ""),
        scenarios=[_scenario_from_dict(s) for s in obj.get("scenarios", [])],
    )


def _scenario_to_dict(scenario: Scenario) -> dict[str, Any]:
    d: dict[str, Any] = {
        "name": scenario.name,
        "outline": scenario.outline,
        "breakdown": [{"id": step.id, "sentences": step.sentences} for step in scenario.breakdown],
    }
    if scenario.outline:
        d["variables"] = scenario.example_variables
        d["examples"] = scenario.examples
    return d


def _scenario_from_dict(obj: dict[str, Any]) -> Scenario:
    return Scenario(
        name=obj["name"],
        outline=obj.get("outline", False),
        breakdown=[Step(id=s["id"], sentences=s["sentences"]) for s in obj.get("breakdown", [])],
        example_variables=obj.get("variables", []),
        examples=obj.get("examples", {}),
    )
