"""
Bookkeeping for a scaffold run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional


@dataclass(frozen=True)
class ScaffoldOperation:
    """A file placed on disk: `verb` is "copy" or "symlink"."""
    package_name: str
    source: Path
    destination: Path
    verb: str

    def describe(self) -> str:
        return f"{self.verb} [{self.package_name}] {self.source} -> {self.destination}"


@dataclass(frozen=True)
class SkippedEntry:
    package_name: str
    source: str
    reason: str


@dataclass
class ScaffoldReport:
    """
    Stores what happened when scaffolding ran, in mapping iteration order.

    Attributes:
        project_root: The directory the run was executed for.
        symlink: True when files were linked rather than copied.
        operations: Files copied or linked.
        skipped: Entries that were disabled or could not be scaffolded.
        diagnostics: Non-fatal problems reported to the operator.
        locations: Resolved symbolic locations used for the run.
        autoload_path: Path of the generated autoload shim, if any.
    """
    project_root: Path
    symlink: bool = False
    operations: List[ScaffoldOperation] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)
    locations: Mapping[str, Path] = field(default_factory=dict)
    autoload_path: Optional[Path] = None

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Project root", str(self.project_root))
        yield ("Mode", "symlink" if self.symlink else "copy")
        yield ("Files scaffolded", str(len(self.operations)))
        yield ("Entries skipped", str(len(self.skipped)))
        yield ("Diagnostics", str(len(self.diagnostics)))
        yield ("Autoload", str(self.autoload_path) if self.autoload_path else "not generated")


def record_diagnostic(report: Optional[ScaffoldReport], log: logging.Logger, message: str, *args: object) -> None:
    """Log a non-fatal problem and keep it on the report."""
    log.warning(message, *args)
    if report is not None:
        report.diagnostics.append(message % args if args else message)
