# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for packing a directory tree into a ZIP archive.

This module provides the `Archiver` class, which walks a source directory and
writes every file and directory into a deflate-compressed archive under its
portable, forward-slash separated relative path.
"""

from .archiver import Archiver
from .tree import EntryKind, SourceEntry, walk_tree

__all__ = [
    "Archiver",
    "EntryKind",
    "SourceEntry",
    "walk_tree",
]
