import json
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest
from typer.testing import CliRunner

from composer_scaffold.config import get_settings


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    for name in ("COMPOSER", "COMPOSER_VENDOR_DIR", "SCAFFOLD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """
    Build a project tree: composer.json, vendor/composer/installed.json and package files.

    `packages` maps package name -> {"extra": {...}, "files": {relative path: content}}.
    Returns the path of composer.json.
    """

    def _make(
        *,
        name: str = "acme/site",
        options: Optional[dict] = None,
        packages: Optional[Dict[str, dict]] = None,
        root_files: Optional[Dict[str, str]] = None,
        scripts: Optional[dict] = None,
    ) -> Path:
        project_root = tmp_path / "project"
        project_root.mkdir(exist_ok=True)
        descriptor = {
            "name": name,
            "extra": {"composer-scaffold": options or {}},
        }
        if scripts:
            descriptor["scripts"] = scripts
        composer_json = project_root / "composer.json"
        composer_json.write_text(json.dumps(descriptor, indent=2), encoding="utf-8")

        installed = []
        for package_name, definition in (packages or {}).items():
            installed.append({"name": package_name, "extra": definition.get("extra", {})})
            for relative, content in definition.get("files", {}).items():
                target = project_root / "vendor" / package_name / relative
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
        manifest = project_root / "vendor" / "composer" / "installed.json"
        manifest.parent.mkdir(parents=True, exist_ok=True)
        manifest.write_text(json.dumps({"packages": installed}), encoding="utf-8")

        for relative, content in (root_files or {}).items():
            target = project_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return composer_json

    return _make
