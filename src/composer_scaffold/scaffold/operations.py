"""
Place scaffold files on disk as copies or symbolic links.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Mapping, Optional

from ..packages import Package, PackageRegistry
from ..util import ensure_parent, relative_path, remove_existing
from .mapping import iter_entries
from .report import ScaffoldOperation, ScaffoldReport, SkippedEntry, record_diagnostic

logger = logging.getLogger(__name__)

COPY = "copy"
SYMLINK = "symlink"


class ScaffoldError(RuntimeError):
    """Raised when a scaffold file could not be placed; aborts the run."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[Path] = None,
        destination: Optional[Path] = None,
        verb: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.destination = destination
        self.verb = verb


def place_file(source: Path, destination: Path, *, symlink: bool) -> str:
    """
    Replace whatever is at destination with a copy of, or a link to, source.

    Links are relative to the destination's directory.

    Returns:
        The verb performed ("copy" or "symlink").

    Raises:
        ScaffoldError: If the file could not be placed.
    """
    verb = SYMLINK if symlink else COPY
    try:
        remove_existing(destination)
        ensure_parent(destination)
        if symlink:
            destination.symlink_to(relative_path(source, destination.parent))
        else:
            shutil.copyfile(source, destination)
    except OSError as exc:
        raise ScaffoldError(
            f"Could not {verb} source file {source} to {destination}: {exc}",
            source=source,
            destination=destination,
            verb=verb,
        ) from exc
    return verb


def _destination_path(destination: str, project_root: Path) -> Path:
    path = Path(destination).expanduser()
    if not path.is_absolute():
        path = project_root / path
    return Path(os.path.normpath(path))


def _skip(report: ScaffoldReport, package_name: str, source: str, reason: str) -> None:
    report.skipped.append(SkippedEntry(package_name, source, reason))


def execute_file_mappings(
    file_mappings: Mapping[str, Mapping[str, Any]],
    allowed_packages: Mapping[str, Package],
    *,
    registry: PackageRegistry,
    project_root: Path,
    symlink: bool,
    report: ScaffoldReport,
) -> ScaffoldReport:
    """
    Copy or link every enabled file of the interpolated file mappings.

    Disabled entries, packages that are not allowed, and missing or directory
    sources are skipped. Any failure to place a file stops the run; files placed
    before the failure stay on disk.

    Args:
        file_mappings: Consolidated mapping with tokens already replaced.
        allowed_packages: Packages allowed to scaffold, keyed by name.
        registry: Resolves package install paths.
        project_root: Base for relative destinations.
        symlink: Link instead of copy.
        report: Report updated with every operation and skip.

    Returns:
        The updated report.

    Raises:
        ScaffoldError: If a copy or symlink fails.
    """
    for entry in iter_entries(file_mappings, report):
        if entry.destination is None:
            logger.debug("Skipping disabled file %s of package %s", entry.source, entry.package_name)
            _skip(report, entry.package_name, entry.source, "disabled")
            continue

        package = allowed_packages.get(entry.package_name)
        if package is None:
            record_diagnostic(
                report,
                logger,
                "Package %s is not in the allowed packages list; skipping %s.",
                entry.package_name,
                entry.source,
            )
            _skip(report, entry.package_name, entry.source, "package not allowed")
            continue

        source_path = registry.install_path(package) / entry.source
        if not source_path.exists():
            record_diagnostic(
                report, logger, "Could not find source file %s for package %s", entry.source, entry.package_name
            )
            _skip(report, entry.package_name, entry.source, "source missing")
            continue
        if not source_path.is_file():
            record_diagnostic(
                report,
                logger,
                "Source %s of package %s is not a regular file; only files can be scaffolded.",
                entry.source,
                entry.package_name,
            )
            _skip(report, entry.package_name, entry.source, "source is not a file")
            continue

        destination = _destination_path(entry.destination, project_root)
        if not destination.is_symlink() and destination.exists() and os.path.samefile(source_path, destination):
            record_diagnostic(
                report, logger, "Destination %s is the source file itself; skipping.", destination
            )
            _skip(report, entry.package_name, entry.source, "destination is the source")
            continue

        verb = place_file(source_path, destination, symlink=symlink)
        operation = ScaffoldOperation(entry.package_name, source_path, destination, verb)
        report.operations.append(operation)
        logger.info("Scaffold %s", operation.describe())
    return report
