"""
Runtime settings loaded from the environment.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class RuntimeSettings(BaseModel):
    """
    Environment overrides honoured by the scaffold command.

    Attributes:
        project_file: Name of the project descriptor (Composer's `COMPOSER`).
        vendor_dir: Vendor directory override (Composer's `COMPOSER_VENDOR_DIR`).
        log_level: Log level override.
    """
    project_file: str = Field(default="composer.json", alias="COMPOSER")
    vendor_dir: Optional[str] = Field(default=None, alias="COMPOSER_VENDOR_DIR")
    log_level: Optional[str] = Field(default=None, alias="SCAFFOLD_LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> RuntimeSettings:
    """
    Load settings from environment/.env exactly once.

    Returns:
        A RuntimeSettings object populated from environment variables.
    """
    values = {
        field.alias: os.getenv(field.alias)
        for field in RuntimeSettings.model_fields.values()
        if os.getenv(field.alias)
    }
    return RuntimeSettings(**values)
