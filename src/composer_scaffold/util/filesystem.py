"""
Filesystem helpers shared across the scaffold modules.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)


def ensure_directory(path: Path | str) -> Path:
    """
    Ensure a directory exists, returning the resolved Path.
    """
    resolved = Path(path).expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


def remove_existing(path: Path | str) -> bool:
    """
    Remove a file or symbolic link so it can be replaced.

    Links are removed without following them, so a link pointing at a package
    file never touches the package file itself.

    Returns:
        True if something was removed, False if nothing existed at path.

    Raises:
        IsADirectoryError: If path is a real directory.
    """
    target = Path(path)
    if target.is_symlink() or target.is_file():
        target.unlink()
        logger.debug("Removed existing %s", target)
        return True
    if target.is_dir():
        raise IsADirectoryError(f"Refusing to replace directory {target}")
    return False


def relative_path(target: Path | str, start: Path | str) -> str:
    """Return target expressed relative to the start directory."""
    return os.path.relpath(os.fspath(target), os.fspath(start))


@contextmanager
def file_lock(path: Path | str):
    """Context manager for a filesystem lock file alongside the target."""
    target = Path(path).expanduser().resolve()
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    ensure_parent(lock_path)
    with FileLock(str(lock_path)):
        yield


def _atomic_write_text(target: Path, content: str, encoding: str) -> None:
    """Write text atomically by staging a temp file and renaming."""
    ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8") -> Path:
    """
    Write text to a file atomically, creating parent directories as needed.
    """
    target = Path(path).expanduser().resolve()
    _atomic_write_text(target, content, encoding=encoding)
    return target
