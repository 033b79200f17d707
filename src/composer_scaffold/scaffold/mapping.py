"""
Reading and merging the file mappings declared by scaffold packages.

A package declares, under `extra.composer-scaffold.file-mapping`, a mapping of
source paths (relative to the package) to destinations:

    {
        "assets/robots.txt": "[web-root]/robots.txt",
        "assets/.htaccess": false,
        "drupal/core": {"assets/web.config": false}
    }

Plain entries belong to the declaring package. A nested mapping is keyed by
another package's name and overrides that package's entries, which is how a
higher-precedence package disables or redirects files it does not own.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional

from ..config import FILE_MAPPING_KEY, SCAFFOLD_EXTRA_KEY
from ..packages import Package
from .report import ScaffoldReport, SkippedEntry, record_diagnostic

logger = logging.getLogger(__name__)

ConsolidatedMapping = Dict[str, Dict[str, Any]]


def is_disabled(value: Any) -> bool:
    """`false`, `null` and empty strings switch a file off."""
    return value is None or value is False or value == ""


@dataclass(frozen=True)
class FileMappingEntry:
    """
    One source file of one package and where it goes.

    `destination` is None when the entry is disabled.
    """
    package_name: str
    source: str
    destination: Optional[str]

    @property
    def disabled(self) -> bool:
        return self.destination is None


def read_package_file_mapping(package: Package, report: Optional[ScaffoldReport] = None) -> Dict[str, Any]:
    """
    Get the file mapping declared by a package.

    Args:
        package: Package to inspect.
        report: Optional report collecting diagnostics.

    Returns:
        Source path -> destination mapping; empty when the package declares none.
    """
    scaffold_extra = package.extra.get(SCAFFOLD_EXTRA_KEY)
    if not isinstance(scaffold_extra, Mapping) or FILE_MAPPING_KEY not in scaffold_extra:
        record_diagnostic(
            report,
            logger,
            "The allowed package %s does not provide a file mapping for Composer Scaffold.",
            package.name,
        )
        return {}

    declared = scaffold_extra[FILE_MAPPING_KEY]
    if not isinstance(declared, Mapping):
        record_diagnostic(
            report,
            logger,
            "The file mapping of package %s must be an object; ignoring it.",
            package.name,
        )
        return {}
    return copy.deepcopy(dict(declared))


def qualify_file_mapping(package_name: str, declared: Mapping[str, Any]) -> ConsolidatedMapping:
    """
    Key a declared mapping by package name.

    Plain entries are filed under `package_name`; nested mappings keep the
    package name they were declared for.
    """
    own = {source: value for source, value in declared.items() if not isinstance(value, Mapping)}
    qualified: ConsolidatedMapping = {package_name: own} if own else {}
    for key, value in declared.items():
        if isinstance(value, Mapping):
            qualified = merge_mappings(qualified, {key: value})
    return qualified


def merge_mappings(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base, returning a new mapping.

    Where both sides hold a mapping under the same key the merge recurses;
    otherwise the override value replaces the base value, whatever its type.
    Neither argument is modified and the result shares no mutable state with them.
    """
    merged = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_mappings(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def consolidate_file_mappings(
    allowed_packages: Mapping[str, Package],
    report: Optional[ScaffoldReport] = None,
) -> ConsolidatedMapping:
    """
    Merge the file mappings of all allowed packages in precedence order.

    Args:
        allowed_packages: Packages keyed by name, lowest precedence first.
        report: Optional report collecting diagnostics.

    Returns:
        Package name -> source path -> destination, for example:

            {
                "drupal/core": {"assets/robots.txt": "[web-root]/robots.txt"},
                "some/package": {"assets/.htaccess": False},
            }
    """
    consolidated: ConsolidatedMapping = {}
    for name, package in allowed_packages.items():
        declared = read_package_file_mapping(package, report)
        consolidated = merge_mappings(consolidated, qualify_file_mapping(name, declared))
    return consolidated


def iter_entries(
    consolidated: Mapping[str, Mapping[str, Any]],
    report: Optional[ScaffoldReport] = None,
) -> Iterator[FileMappingEntry]:
    """
    Flatten a consolidated mapping into entries, in iteration order.

    Destinations that are neither strings nor disabled are reported and skipped.
    """
    for package_name, files in consolidated.items():
        if not isinstance(files, Mapping):
            record_diagnostic(report, logger, "Ignoring malformed file mapping for package %s.", package_name)
            continue
        for source, destination in files.items():
            if is_disabled(destination):
                yield FileMappingEntry(package_name, source, None)
            elif isinstance(destination, str):
                yield FileMappingEntry(package_name, source, destination)
            else:
                record_diagnostic(
                    report,
                    logger,
                    "Unsupported destination %r for source file %s of package %s.",
                    destination,
                    source,
                    package_name,
                )
                if report is not None:
                    report.skipped.append(SkippedEntry(package_name, source, "unsupported destination"))
