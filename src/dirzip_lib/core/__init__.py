# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for dirzip.

This module collects the foundational helpers used across the dirzip codebase:
configuration, the error taxonomy, structured logging, archive path handling,
user prompts and help formatting for the command-line interface.
"""
