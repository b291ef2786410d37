# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""AST nodes for parsed .feature files."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Step(BaseModel):
    """One behavior clause of a scenario.

    Attributes:
        id: 1-based position of the step within its scenario.
        sentences: The operator keyword followed by the step's sentences.
    """

    id: str
    sentences: list[str] = _Field(default_factory=list)

    @property
    def operator(self) -> str:
        return self.sentences[0]


class Scenario(BaseModel):
    """A named sequence of steps, optionally parameterized by an examples table."""

    name: str = ""
    outline: bool = False
    breakdown: list[Step] = _Field(default_factory=list)
    example_variables: list[str] = _Field(default_factory=list)
    examples: dict[str, list[str]] = _Field(default_factory=dict)

    @property
    def has_examples(self) -> bool:
        """True once the header row of the examples table has been read."""
        return bool(self.example_variables)

    def example_rows(self) -> list[tuple[str, ...]]:
        """Return the data rows of the examples table in source order."""
        columns = [self.examples[name] for name in self.example_variables]
        return list(zip(*columns, strict=True))


class Feature(BaseModel):
    """Top-level unit of a .feature file, grouping its scenarios under a name."""

    name: str
    description: str = ""
    scenarios: list[Scenario] = _Field(default_factory=list)


# Feature identifier ("1", "2", ...) to feature, in discovery order.
FeatureMap = dict[str, Feature]
