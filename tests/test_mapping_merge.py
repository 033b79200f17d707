from pathlib import Path
import copy
import logging

import pytest

from composer_scaffold.packages import Package
from composer_scaffold.scaffold import (
    ScaffoldReport,
    consolidate_file_mappings,
    merge_mappings,
    read_package_file_mapping,
)
from composer_scaffold.scaffold.mapping import iter_entries, qualify_file_mapping


def _package(name: str, file_mapping=None) -> Package:
    if file_mapping is None:
        return Package(name)
    return Package(name, extra={"composer-scaffold": {"file-mapping": file_mapping}})


@pytest.mark.parametrize("override", ["web/other.txt", False, {"nested": "value"}])
def test_later_leaf_wins(override) -> None:
    base = {"a/pkg": {"file.txt": "web/file.txt"}}
    merged = merge_mappings(base, {"a/pkg": {"file.txt": override}})

    assert merged["a/pkg"]["file.txt"] == override


def test_merge_recurses_at_any_depth() -> None:
    base = {"a": {"b": {"c": 1, "d": 2}, "e": 3}}
    override = {"a": {"b": {"c": 10}}}

    merged = merge_mappings(base, override)

    assert merged == {"a": {"b": {"c": 10, "d": 2}, "e": 3}}


def test_scalar_replaces_mapping_without_type_check() -> None:
    merged = merge_mappings({"a": {"b": 1}}, {"a": "flat"})

    assert merged == {"a": "flat"}


def test_merge_does_not_modify_or_alias_inputs() -> None:
    base = {"a/pkg": {"file.txt": "one"}}
    override = {"a/pkg": {"other.txt": "two"}, "b/pkg": {"x": "y"}}
    base_before = copy.deepcopy(base)
    override_before = copy.deepcopy(override)

    merged = merge_mappings(base, override)
    merged["a/pkg"]["file.txt"] = "changed"
    merged["b/pkg"]["x"] = "changed"

    assert base == base_before
    assert override == override_before


def test_missing_file_mapping_is_a_diagnostic(caplog: pytest.LogCaptureFixture) -> None:
    report = ScaffoldReport(project_root=Path("/proj"))
    caplog.set_level(logging.WARNING)

    assert read_package_file_mapping(_package("a/pkg"), report) == {}
    assert "does not provide a file mapping" in caplog.text
    assert report.diagnostics


def test_qualify_splits_own_and_targeted_entries() -> None:
    qualified = qualify_file_mapping(
        "acme/site",
        {"robots.txt": "[web-root]/robots.txt", "a/pkg": {"file.txt": False}},
    )

    assert qualified == {
        "acme/site": {"robots.txt": "[web-root]/robots.txt"},
        "a/pkg": {"file.txt": False},
    }


def test_higher_precedence_package_disables_lower_one() -> None:
    allowed = {
        "a/pkg": _package("a/pkg", {"file.txt": "[web-root]/file.txt", "keep.txt": "[web-root]/keep.txt"}),
        "b/pkg": _package("b/pkg", {"a/pkg": {"file.txt": False}}),
    }

    consolidated = consolidate_file_mappings(allowed)

    assert consolidated["a/pkg"] == {"file.txt": False, "keep.txt": "[web-root]/keep.txt"}


def test_iter_entries_marks_disabled_and_skips_unsupported(caplog: pytest.LogCaptureFixture) -> None:
    report = ScaffoldReport(project_root=Path("/proj"))
    caplog.set_level(logging.WARNING)
    consolidated = {"a/pkg": {"one.txt": "web/one.txt", "two.txt": False, "three.txt": None, "four.txt": 4}}

    entries = list(iter_entries(consolidated, report))

    assert [(entry.source, entry.disabled) for entry in entries] == [
        ("one.txt", False),
        ("two.txt", True),
        ("three.txt", True),
    ]
    assert "Unsupported destination" in caplog.text
    assert [skipped.source for skipped in report.skipped] == ["four.txt"]
