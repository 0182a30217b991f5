# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for unpacking ZIP archives into a directory tree.

This module defines the `Extractor` class, which recreates the files and
directories stored in an archive under a destination directory while refusing
entries that would be written outside of it.
"""

from .extractor import ArchiveEntryInfo, Extractor

__all__ = [
    "ArchiveEntryInfo",
    "Extractor",
]
