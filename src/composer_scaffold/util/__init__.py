"""
Shared utility helpers for filesystem operations.
"""

from .filesystem import ensure_directory, ensure_parent, relative_path, remove_existing, write_text_file

__all__ = [
    "ensure_directory",
    "ensure_parent",
    "relative_path",
    "remove_existing",
    "write_text_file",
]
