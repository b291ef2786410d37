# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Renders a parsed feature AST as a pytest test module scaffold.

Every scenario becomes one test function whose body lists the scenario's steps
as comments and skips. Scenario outlines are parameterized over the rows of
their examples table.
"""

from __future__ import annotations

import keyword
import re

from featurelang.model.nodes import Feature, FeatureMap, Scenario

# ###############
# Public Interface
# ###############


class Generator:
    """Default consumer of a finished AST.

    Attributes:
        ast: The finalized feature map handed over by the parser.
    """

    def __init__(self, ast: FeatureMap) -> None:
        self.ast = ast

    def render(self, module_name: str = "features") -> str:
        """Return the source text of a pytest module for the whole AST."""
        lines = [f'"""Generated test scaffold for {module_name}."""', "", "import pytest", ""]
        names = iter(self.test_names())
        for feature in self.ast.values():
            lines.extend(["", f"# Feature: {feature.name}"])
            lines.extend(f"#   {line}" for line in feature.description.splitlines())
            for scenario in feature.scenarios:
                lines.extend(_render_scenario(next(names), scenario))
        return "\n".join(lines).rstrip() + "\n"

    def test_names(self) -> list[str]:
        """Return the names of the test functions :meth:`render` emits.

        Names are unique within the module; a name already taken by an earlier
        scenario gets a numeric suffix.
        """
        return _unique(
            [_test_name(feature, scenario) for feature in self.ast.values() for scenario in feature.scenarios]
        )


# ################
# Implementation
# ################

_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z]+")

# Names a parameter must not take inside a generated test body.
_RESERVED = frozenset({"pytest"})


def _slug(text: str) -> str:
    return _NON_IDENTIFIER.sub("_", text).strip("_").lower() or "unnamed"


def _test_name(feature: Feature, scenario: Scenario) -> str:
    return f"test_{_slug(feature.name)}_{_slug(scenario.name)}"


def _param_name(column: str) -> str:
    """Return a valid Python parameter name for an examples column."""
    name = _slug(column)
    if name[0].isdigit():
        name = "p_" + name
    if keyword.iskeyword(name) or name in _RESERVED:
        name += "_"
    return name


def _unique(names: list[str]) -> list[str]:
    """Suffix repeated names with ``_2``, ``_3``, ... keeping the first as is."""
    taken = set(names)
    seen: set[str] = set()
    result = []
    for name in names:
        candidate = name
        counter = 1
        # A suffixed name must not collide with a name used verbatim elsewhere.
        while candidate in seen or (candidate != name and candidate in taken):
            counter += 1
            candidate = f"{name}_{counter}"
        seen.add(candidate)
        result.append(candidate)
    return result


def _render_scenario(name: str, scenario: Scenario) -> list[str]:
    lines = [""]
    params = _unique([_param_name(column) for column in scenario.example_variables])
    if scenario.outline and params:
        values = [row[0] if len(params) == 1 else row for row in scenario.example_rows()]
        rows = ", ".join(repr(value) for value in values)
        lines.append(f"@pytest.mark.parametrize({', '.join(params)!r}, [{rows}])")
    lines.append(f"def {name}({', '.join(params)}):")
    lines.append(f"    {scenario.name!r}")
    for step in scenario.breakdown:
        lines.append(f"    # {' '.join(step.sentences)}")
    lines.append('    pytest.skip("steps not implemented")')
    lines.append("")
    return lines
