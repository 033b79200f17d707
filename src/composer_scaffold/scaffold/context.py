"""
Explicit run state threaded through the scaffold pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Optional

from ..config import FILE_MAPPING_KEY, SCAFFOLD_EXTRA_KEY, ProjectConfig, ScaffoldOptions, get_settings, load_project
from ..packages import Package, PackageRegistry
from .events import EventDispatcher


@dataclass
class ScaffoldContext:
    """
    Everything one scaffold run needs.

    Attributes:
        project_root: Directory of the root project; the root package's files live here.
        project: The parsed root project descriptor.
        registry: Installed packages.
        vendor_dir: Composer vendor directory.
        events: Dispatcher for the lifecycle events.
    """
    project_root: Path
    project: ProjectConfig
    registry: PackageRegistry
    vendor_dir: Path
    events: EventDispatcher = field(default_factory=EventDispatcher)

    @cached_property
    def options(self) -> ScaffoldOptions:
        return self.project.scaffold_options

    @cached_property
    def root_package(self) -> Package:
        """The root project as a package, declaring the validated inline file mapping."""
        extra = dict(self.project.extra)
        scaffold_extra = dict(extra.get(SCAFFOLD_EXTRA_KEY) or {})
        if self.options.file_mapping is None:
            scaffold_extra.pop(FILE_MAPPING_KEY, None)
        else:
            scaffold_extra[FILE_MAPPING_KEY] = self.options.file_mapping
        extra[SCAFFOLD_EXTRA_KEY] = scaffold_extra
        return Package(name=self.project.name, extra=extra, install_path=self.project_root)

    @classmethod
    def from_project_file(cls, project_file: Path | str, *, vendor_dir: Optional[Path | str] = None) -> "ScaffoldContext":
        """
        Load the project descriptor and the installed packages next to it.

        The vendor directory is, in order of preference: the vendor_dir argument,
        the `COMPOSER_VENDOR_DIR` environment variable, then `config.vendor-dir`.

        Raises:
            ConfigError: If the descriptor or the installed packages manifest is invalid.
        """
        project_path = Path(project_file).expanduser().resolve()
        project = load_project(project_path)
        project_root = project_path.parent

        configured_vendor = vendor_dir or get_settings().vendor_dir or project.vendor_dir
        vendor = Path(configured_vendor).expanduser()
        if not vendor.is_absolute():
            vendor = project_root / vendor

        return cls(
            project_root=project_root,
            project=project,
            registry=PackageRegistry.from_installed_json(vendor),
            vendor_dir=vendor,
            events=EventDispatcher(project.scripts, cwd=project_root),
        )
