import os
from pathlib import Path

from composer_scaffold.config import settings


def test_project_dotenv_overrides_environment(tmp_path, monkeypatch) -> None:
    project_dir = tmp_path / "project"
    project_env = project_dir / ".env"

    project_dir.mkdir()
    project_env.write_text("COMPOSER_VENDOR_DIR=libraries\n", encoding="utf-8")

    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("COMPOSER_VENDOR_DIR", "env-value")

    settings._load_dotenv()

    assert os.getenv("COMPOSER_VENDOR_DIR") == "libraries"
    settings.get_settings.cache_clear()
    assert settings.get_settings().vendor_dir == "libraries"


def test_settings_defaults_without_environment() -> None:
    loaded = settings.get_settings()

    assert loaded.project_file == "composer.json"
    assert loaded.vendor_dir is None
    assert loaded.log_level is None
