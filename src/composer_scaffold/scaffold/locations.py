"""
Symbolic locations (e.g. `web-root`) and `[name]` tokens in destination paths.
"""

from __future__ import annotations

import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..config import SCAFFOLD_EXTRA_KEY, WEB_ROOT, ConfigError
from ..util import ensure_directory

TOKEN_PATTERN = re.compile(r"\[([^\[\]]+)\]")


def _absolute(raw: str, project_root: Path) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = project_root / path
    return path.resolve()


def require_web_root(locations: Mapping[str, str]) -> None:
    """
    Raises:
        ConfigError: If the web root is not configured.
    """
    if WEB_ROOT not in locations:
        raise ConfigError(f"The extra.{SCAFFOLD_EXTRA_KEY}.locations.{WEB_ROOT} is not set in composer.json.")


def resolve_locations(
    locations: Mapping[str, str],
    *,
    project_root: Path,
    create: bool = True,
) -> Mapping[str, Path]:
    """
    Expand configured locations into absolute directory paths.

    Args:
        locations: Symbolic name -> raw path; relative paths are taken from project_root.
        project_root: Root directory of the project.
        create: Create missing directories. Disabled for previews.

    Returns:
        Read-only mapping of symbolic name -> absolute path.

    Raises:
        ConfigError: If the web root is not configured or a location is not a
            directory. Both are checked before any directory is created.
    """
    require_web_root(locations)

    resolved: Dict[str, Path] = {name: _absolute(raw, project_root) for name, raw in locations.items()}
    for name, path in resolved.items():
        if path.exists() and not path.is_dir():
            raise ConfigError(f"Location {name} points at {path}, which is not a directory.")
    if create:
        for name, path in resolved.items():
            try:
                ensure_directory(path)
            except OSError as exc:
                raise ConfigError(f"Unable to create location {name} at {path}: {exc}") from exc
    return MappingProxyType(resolved)


def interpolate(destination: str, locations: Mapping[str, Path]) -> str:
    """
    Replace `[name]` tokens with resolved location paths.

    Unknown tokens are left untouched.
    """

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in locations:
            return str(locations[name])
        return match.group(0)

    return TOKEN_PATTERN.sub(_replace, destination)


def interpolate_file_mappings(
    consolidated: Mapping[str, Mapping[str, Any]],
    locations: Mapping[str, Path],
) -> Dict[str, Dict[str, Any]]:
    """Return a copy of consolidated with tokens replaced in every string destination."""
    interpolated: Dict[str, Dict[str, Any]] = {}
    for package_name, files in consolidated.items():
        if not isinstance(files, Mapping):
            interpolated[package_name] = files
            continue
        interpolated[package_name] = {
            source: interpolate(destination, locations) if isinstance(destination, str) else destination
            for source, destination in files.items()
        }
    return interpolated
