"""
Pydantic models for validating the root project descriptor and its scaffold options.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

SCAFFOLD_EXTRA_KEY = "composer-scaffold"
FILE_MAPPING_KEY = "file-mapping"
WEB_ROOT = "web-root"
DEFAULT_ROOT_NAME = "__root__"
DEFAULT_VENDOR_DIR = "vendor"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class ScaffoldOptions(BaseModel):
    """
    Scaffold options declared under `extra.composer-scaffold` of the root project.

    Attributes:
        allowed_packages: Package names allowed to contribute files, lowest precedence first.
        locations: Symbolic location name -> raw path (relative paths are project-relative).
        symlink: Create relative symlinks instead of copies.
        file_mapping: Inline mapping owned by the root project; None when not declared.
    """
    allowed_packages: List[str] = Field(default_factory=list, alias="allowed-packages")
    locations: Dict[str, str] = Field(default_factory=dict)
    symlink: bool = False
    file_mapping: Optional[Dict[str, Any]] = Field(default=None, alias=FILE_MAPPING_KEY)

    model_config = {
        "populate_by_name": True,
    }


class ProjectConfig(BaseModel):
    """
    The subset of the root `composer.json` the scaffold run consumes.

    Attributes:
        name: Root package name.
        extra: Free-form extra data; the scaffold options live under `composer-scaffold`.
        config: Composer configuration (only `vendor-dir` is read).
        scripts: Event name -> shell command(s).
    """
    name: str = DEFAULT_ROOT_NAME
    extra: Dict[str, Any] = Field(default_factory=dict)
    config: Dict[str, Any] = Field(default_factory=dict)
    scripts: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)

    @property
    def scaffold_options(self) -> ScaffoldOptions:
        raw = self.extra.get(SCAFFOLD_EXTRA_KEY) or {}
        try:
            return ScaffoldOptions.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

    @property
    def vendor_dir(self) -> str:
        return str(self.config.get("vendor-dir") or DEFAULT_VENDOR_DIR)


def load_project(path: Path | str) -> ProjectConfig:
    """
    Load and validate a `composer.json` file into a ProjectConfig instance.

    Args:
        path: Path to the project descriptor.

    Returns:
        A validated ProjectConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    project_path = Path(path).expanduser().resolve()
    if not project_path.exists():
        raise ConfigError(f"Project file not found: {project_path}")

    try:
        raw_data: Any = json.loads(project_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read project file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in project file: {exc}") from exc

    if not isinstance(raw_data, dict):
        raise ConfigError("Project file root must be a JSON object.")

    try:
        return ProjectConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
