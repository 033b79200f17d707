"""
Place the scaffold files declared by installed Composer packages into a project.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("composer-scaffold")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
