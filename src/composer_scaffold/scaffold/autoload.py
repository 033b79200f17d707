"""
Generate the project autoload shim in the web root.
"""

from __future__ import annotations

from pathlib import Path

from ..util import ensure_directory, relative_path, write_text_file

AUTOLOAD_FILENAME = "autoload.php"
AUTOLOAD_TEMPLATE = """<?php

/**
 * @file
 * Includes the autoloader created by Composer.
 *
 * This file was generated by composer-scaffold.
 *
 * @see composer.json
 * @see index.php
 */

return require __DIR__ . '/{relative_vendor_path}/autoload.php';
"""


def autoload_contents(relative_vendor_path: str) -> str:
    return AUTOLOAD_TEMPLATE.format(relative_vendor_path=relative_vendor_path.rstrip("/"))


def generate_autoload(web_root: Path | str, vendor_dir: Path | str) -> Path:
    """
    Write `autoload.php` in the web root, requiring Composer's autoloader.

    The vendor path is written relative to the web root so the project can be moved.

    Args:
        web_root: Resolved web root directory.
        vendor_dir: Composer vendor directory (created if missing).

    Returns:
        Path of the written file.
    """
    vendor = ensure_directory(vendor_dir)
    root = ensure_directory(web_root)
    relative_vendor = Path(relative_path(vendor, root)).as_posix()
    return write_text_file(root / AUTOLOAD_FILENAME, autoload_contents(relative_vendor))
