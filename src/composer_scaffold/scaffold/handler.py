"""
Sequence the scaffold pipeline: allowed packages, merge, locations, file operations.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..config import WEB_ROOT
from ..util.filesystem import file_lock
from .allowed import resolve_allowed_packages
from .autoload import generate_autoload
from .context import ScaffoldContext
from .events import POST_SCAFFOLD_CMD, PRE_SCAFFOLD_CMD
from .locations import interpolate_file_mappings, require_web_root, resolve_locations
from .mapping import FileMappingEntry, consolidate_file_mappings, iter_entries
from .operations import execute_file_mappings
from .report import ScaffoldReport

logger = logging.getLogger(__name__)

RUN_LOCK_NAME = ".composer-scaffold"


def run_scaffold(context: ScaffoldContext) -> ScaffoldReport:
    """
    Copy or link all scaffold files declared by the allowed packages.

    Fires the pre/post scaffold events around the pipeline.

    Args:
        context: Run state for the project.

    Returns:
        A ScaffoldReport detailing the actions taken.

    Raises:
        ConfigError: If the web root location is not configured.
        ScaffoldError: If a file could not be placed or an event script failed.
    """
    options = context.options
    report = ScaffoldReport(project_root=context.project_root, symlink=options.symlink)

    context.events.dispatch(PRE_SCAFFOLD_CMD)

    allowed = resolve_allowed_packages(options.allowed_packages, context.registry, context.root_package, report)
    logger.debug("Allowed packages in precedence order: %s", ", ".join(allowed))
    file_mappings = consolidate_file_mappings(allowed, report)

    locations = resolve_locations(options.locations, project_root=context.project_root)
    report.locations = locations
    file_mappings = interpolate_file_mappings(file_mappings, locations)

    execute_file_mappings(
        file_mappings,
        allowed,
        registry=context.registry,
        project_root=context.project_root,
        symlink=options.symlink,
        report=report,
    )

    context.events.dispatch(POST_SCAFFOLD_CMD)
    return report


def post_install(context: ScaffoldContext, *, autoload: bool = True) -> ScaffoldReport:
    """
    Run scaffolding, then generate the autoload shim in the web root.

    Holds a lock in the vendor directory so two runs on one project do not interleave.
    The web root is checked before the lock file is created.
    """
    require_web_root(context.options.locations)
    with file_lock(context.vendor_dir / RUN_LOCK_NAME):
        report = run_scaffold(context)
        if autoload:
            report.autoload_path = generate_autoload(report.locations[WEB_ROOT], context.vendor_dir)
            logger.info("Generated %s", report.autoload_path)
    return report


def build_plan(context: ScaffoldContext, report: Optional[ScaffoldReport] = None) -> List[FileMappingEntry]:
    """
    Compute the interpolated file mapping entries without touching the filesystem.
    """
    options = context.options
    allowed = resolve_allowed_packages(options.allowed_packages, context.registry, context.root_package, report)
    file_mappings = consolidate_file_mappings(allowed, report)
    locations = resolve_locations(options.locations, project_root=context.project_root, create=False)
    return list(iter_entries(interpolate_file_mappings(file_mappings, locations), report))
