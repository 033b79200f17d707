import json
from pathlib import Path

import pytest

from composer_scaffold.config import ConfigError
from composer_scaffold.packages import Package, PackageRegistry


def _write_manifest(vendor: Path, payload) -> None:
    manifest = vendor / "composer" / "installed.json"
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_text(json.dumps(payload), encoding="utf-8")


def test_reads_composer1_list(tmp_path: Path) -> None:
    vendor = tmp_path / "vendor"
    _write_manifest(vendor, [{"name": "a/pkg", "extra": {"k": "v"}}])

    registry = PackageRegistry.from_installed_json(vendor)
    package = registry.find_package("a/pkg")

    assert package is not None
    assert package.extra == {"k": "v"}
    assert registry.install_path(package) == vendor / "a/pkg"


def test_reads_composer2_install_path(tmp_path: Path) -> None:
    vendor = tmp_path / "vendor"
    _write_manifest(
        vendor,
        {"packages": [{"name": "drupal/core", "install-path": "../../web/core"}, {"version": "1.0"}], "dev": True},
    )

    registry = PackageRegistry.from_installed_json(vendor)

    assert len(registry) == 1
    assert registry.install_path(registry.find_package("drupal/core")) == (tmp_path / "web" / "core").resolve()
    assert registry.find_package("missing/pkg") is None


def test_missing_manifest_gives_empty_registry(tmp_path: Path) -> None:
    registry = PackageRegistry.from_installed_json(tmp_path / "vendor")

    assert len(registry) == 0


def test_invalid_manifest_is_a_config_error(tmp_path: Path) -> None:
    manifest = tmp_path / "vendor" / "composer" / "installed.json"
    manifest.parent.mkdir(parents=True)
    manifest.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        PackageRegistry.from_installed_json(tmp_path / "vendor")


def test_recorded_install_path_takes_precedence(tmp_path: Path) -> None:
    registry = PackageRegistry([Package("a/pkg", install_path=tmp_path / "elsewhere")], vendor_dir=tmp_path)

    assert registry.install_path(registry.find_package("a/pkg")) == tmp_path / "elsewhere"
    assert "a/pkg" in registry
