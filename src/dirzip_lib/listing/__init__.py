# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Inspection of archive contents.

This module defines `ListPresenter`, which renders the entries of an archive
as a compact table with a short size summary.
"""

from .presenter import ListPresenter

__all__ = [
    "ListPresenter",
]
