"""
Scaffold pipeline: resolve, merge, interpolate and place package files.
"""

from .allowed import resolve_allowed_packages
from .autoload import generate_autoload
from .context import ScaffoldContext
from .events import POST_SCAFFOLD_CMD, PRE_SCAFFOLD_CMD, EventDispatcher, ScriptError
from .handler import build_plan, post_install, run_scaffold
from .locations import interpolate, interpolate_file_mappings, resolve_locations
from .mapping import (
    FileMappingEntry,
    consolidate_file_mappings,
    merge_mappings,
    read_package_file_mapping,
)
from .operations import ScaffoldError, execute_file_mappings
from .report import ScaffoldOperation, ScaffoldReport, SkippedEntry

__all__ = [
    "resolve_allowed_packages",
    "generate_autoload",
    "ScaffoldContext",
    "POST_SCAFFOLD_CMD",
    "PRE_SCAFFOLD_CMD",
    "EventDispatcher",
    "ScriptError",
    "build_plan",
    "post_install",
    "run_scaffold",
    "interpolate",
    "interpolate_file_mappings",
    "resolve_locations",
    "FileMappingEntry",
    "consolidate_file_mappings",
    "merge_mappings",
    "read_package_file_mapping",
    "ScaffoldError",
    "execute_file_mappings",
    "ScaffoldOperation",
    "ScaffoldReport",
    "SkippedEntry",
]
