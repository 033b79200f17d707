"""
Installed package lookup.
"""

from .registry import Package, PackageRegistry

__all__ = ["Package", "PackageRegistry"]
