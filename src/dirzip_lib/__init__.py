# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the dirzip command-line tool.

This package packs directory trees into deterministic, deflate-compressed ZIP
archives and reconstructs them on disk. Host applications use the two operations
of `ArchiveService` (`build` and `extract`); the dirzip CLI commands delegate
to the same functionality.
"""

from .dirzip import __version__, cli
from .service import ArchiveService, OperationResult

__all__ = [
    "__version__",
    "cli",
    "ArchiveService",
    "OperationResult",
    "archive",
    "core",
    "extract",
    "listing",
]
