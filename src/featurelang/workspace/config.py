# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the featurelang project configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".featurelang.yaml"

DEFAULT_BUILD_DIRECTORY = ".featurelang-build"
DEFAULT_OUTPUT_DIRECTORY = "tests/generated"
DEFAULT_TAB_SIZE = 4


class ProjectConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """The parsed configuration of a featurelang project.

    Attributes:
        build_directory: Relative path (from the project root) for compiled AST artifacts.
        output_directory: Relative path (from the project root) for generated test modules.
        tab_size: Column width of a tab character in feature file indentation.
    """

    build_directory: str = DEFAULT_BUILD_DIRECTORY
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    tab_size: int = DEFAULT_TAB_SIZE


def load_project_config(path: Path) -> ProjectConfig:
    """Load and parse a featurelang project configuration file.

    Args:
        path: Path to the `.featurelang.yaml` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ProjectConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project config file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectConfigError(f"Cannot read project config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


def find_project_config(directory: Path) -> ProjectConfig:
    """Return the configuration of the project rooted at *directory*.

    Falls back to the defaults when the directory has no configuration file.
    """
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return ProjectConfig()
    return load_project_config(path)


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse project config YAML text into a ProjectConfig.

    An empty document yields the defaults.

    Raises:
        ProjectConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: project config must be a YAML mapping")

    unknown = sorted(set(data) - {"build-directory", "output-directory", "tab-size"})
    if unknown:
        raise ProjectConfigError(f"{source_label}: unknown field(s) {', '.join(map(str, unknown))}")

    tab_size = data.get("tab-size", DEFAULT_TAB_SIZE)
    if isinstance(tab_size, bool) or not isinstance(tab_size, int) or tab_size < 1:
        raise ProjectConfigError(f"{source_label}: 'tab-size' must be a positive integer")

    return ProjectConfig(
        build_directory=_optional_string(data, "build-directory", DEFAULT_BUILD_DIRECTORY, source_label),
        output_directory=_optional_string(data, "output-directory", DEFAULT_OUTPUT_DIRECTORY, source_label),
        tab_size=tab_size,
    )


def _optional_string(mapping: dict[str, object], key: str, default: str, source_label: str) -> str:
    """Extract an optional string field from a mapping, raising ProjectConfigError on a wrong type."""
    value = mapping.get(key, default)
    if not isinstance(value, str):
        raise ProjectConfigError(f"{source_label}: '{key}' must be a string")
    return value
