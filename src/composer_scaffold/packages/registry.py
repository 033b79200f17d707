"""
Read-only view of the packages installed in a Composer vendor directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config import ConfigError

logger = logging.getLogger(__name__)

INSTALLED_MANIFEST = Path("composer") / "installed.json"


@dataclass(frozen=True)
class Package:
    """
    Snapshot of one installed package.

    Attributes:
        name: Unique package name (e.g., "drupal/core").
        extra: The package's declared `extra` data.
        install_path: Absolute install location, when the registry recorded one.
    """
    name: str
    extra: Mapping[str, Any] = field(default_factory=dict)
    install_path: Optional[Path] = None


class PackageRegistry:
    """
    Name-indexed lookup over installed packages.

    Packages without a recorded install path live at `<vendor_dir>/<name>`.
    """

    def __init__(self, packages: Iterable[Package], *, vendor_dir: Path | str) -> None:
        self.vendor_dir = Path(vendor_dir)
        self._packages: Dict[str, Package] = {package.name: package for package in packages}

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def __len__(self) -> int:
        return len(self._packages)

    def find_package(self, name: str) -> Optional[Package]:
        return self._packages.get(name)

    def install_path(self, package: Package) -> Path:
        if package.install_path is not None:
            return Path(package.install_path)
        return self.vendor_dir / package.name

    @classmethod
    def from_installed_json(cls, vendor_dir: Path | str) -> "PackageRegistry":
        """
        Build a registry from `<vendor_dir>/composer/installed.json`.

        Accepts both the Composer 1 layout (a bare list of packages) and the
        Composer 2 layout (`{"packages": [...]}`), where `install-path` entries
        are relative to the `vendor/composer` directory.

        Raises:
            ConfigError: If the manifest exists but cannot be parsed.
        """
        vendor = Path(vendor_dir)
        manifest = vendor / INSTALLED_MANIFEST
        if not manifest.exists():
            logger.warning("No installed packages manifest at %s; only the root project can scaffold.", manifest)
            return cls([], vendor_dir=vendor)

        try:
            raw: Any = json.loads(manifest.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Unable to read installed packages manifest: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {manifest}: {exc}") from exc

        entries = raw.get("packages", []) if isinstance(raw, dict) else raw
        if not isinstance(entries, list):
            raise ConfigError(f"Unexpected layout in {manifest}; expected a list of packages.")

        packages: List[Package] = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("name"):
                logger.debug("Ignoring malformed manifest entry: %r", entry)
                continue
            install_path = entry.get("install-path")
            packages.append(
                Package(
                    name=str(entry["name"]),
                    extra=entry.get("extra") or {},
                    install_path=(manifest.parent / install_path).resolve() if install_path else None,
                )
            )
        logger.debug("Loaded %d installed packages from %s", len(packages), manifest)
        return cls(packages, vendor_dir=vendor)
