# Copyright 2026 featurelang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for featurelang."""

from featurelang.workspace.config import (
    CONFIG_FILE_NAME,
    ProjectConfig,
    ProjectConfigError,
    find_project_config,
    load_project_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ProjectConfig",
    "ProjectConfigError",
    "find_project_config",
    "load_project_config",
]
