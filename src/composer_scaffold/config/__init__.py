"""
Configuration helpers for the scaffold tooling.
"""

from .models import (
    FILE_MAPPING_KEY,
    SCAFFOLD_EXTRA_KEY,
    WEB_ROOT,
    ConfigError,
    ProjectConfig,
    ScaffoldOptions,
    load_project,
)
from .settings import RuntimeSettings, get_settings

__all__ = [
    "FILE_MAPPING_KEY",
    "SCAFFOLD_EXTRA_KEY",
    "WEB_ROOT",
    "ConfigError",
    "ProjectConfig",
    "ScaffoldOptions",
    "load_project",
    "RuntimeSettings",
    "get_settings",
]
