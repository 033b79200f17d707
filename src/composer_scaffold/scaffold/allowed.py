"""
Determine which packages may contribute scaffold files.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from ..packages import Package, PackageRegistry
from .report import ScaffoldReport, record_diagnostic

logger = logging.getLogger(__name__)


def resolve_allowed_packages(
    names: Iterable[str],
    registry: PackageRegistry,
    root_package: Package,
    report: Optional[ScaffoldReport] = None,
) -> Dict[str, Package]:
    """
    Get the packages allowed to scaffold files, keyed by name.

    Configuration for packages listed later overrides configuration of packages
    listed earlier, so the last listed package has the highest priority. The root
    package is always returned at the end, whether or not it was listed.

    Args:
        names: Configured package names, lowest precedence first.
        registry: Installed packages.
        root_package: The project itself.
        report: Optional report collecting diagnostics.

    Returns:
        Ordered mapping of package name -> Package.
    """
    allowed: Dict[str, Package] = {}
    for name in names:
        if name == root_package.name:
            continue
        package = registry.find_package(name)
        if package is None:
            record_diagnostic(report, logger, "Composer Scaffold could not find installed package `%s`.", name)
            continue
        allowed[name] = package

    allowed[root_package.name] = root_package
    return allowed
