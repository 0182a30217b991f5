# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the dirzip library.

This module provides helpers for converting filesystem paths into portable archive
entry names, validating entry names read from untrusted archives, resolving them
safely under a destination directory, formatting sizes, and prompting the user.
"""

import os
import re
from pathlib import Path, PurePath

import readchar
from rich.live import Live
from rich.text import Text

from .error import DZPathEncodingError, DZPathTraversalError


# Separator used inside archive entry names.
ARCHIVE_SEP = "/"

# Matches Windows drive prefixes such as `C:`.
_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


def normalize_path(path: PurePath | str) -> str:
    """
    Convert a relative filesystem path into its portable archive form.

    The separators of the running platform are replaced by a single forward slash.
    The root of a tree (an empty path or '.') is converted to an empty string.
    A backslash that is not a platform separator is part of a file name on this
    platform and cannot be stored portably.

    Args:
        path (PurePath | str): Path relative to the archived directory.

    Returns:
        str: The normalized, forward-slash separated path.

    Raises:
        DZPathEncodingError: If the path cannot be represented as UTF-8
            or contains a backslash that is not a separator.
    """
    if isinstance(path, PurePath):
        name = ARCHIVE_SEP.join(part for part in path.parts if part != ".")
    else:
        name = path.replace(os.sep, ARCHIVE_SEP)
        if os.altsep:
            name = name.replace(os.altsep, ARCHIVE_SEP)
        if name == ".":
            name = ""

    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise DZPathEncodingError(
            f"Path '{name!r}' cannot be represented as UTF-8: {e}.", path
        ) from e

    if "\\" in name:
        raise DZPathEncodingError(
            f"Path '{name}' contains a backslash, which other systems read as a separator.",
            path,
        )

    return name


def split_entry_name(name: str) -> tuple[str, ...]:
    """
    Validate an archive entry name and split it into path components.

    Backslashes are treated as separators; empty and '.' components are dropped.
    A directory entry naming the root itself (such as './') yields no components.

    Args:
        name (str): Entry name as stored in the archive.

    Returns:
        tuple[str, ...]: The path components of the entry, empty for a root entry.

    Raises:
        DZPathTraversalError: If the name is empty, absolute, contains
            a parent-directory ('..') component, or names the root as a file.
    """
    posix = name.replace("\\", ARCHIVE_SEP)

    if posix.startswith(ARCHIVE_SEP) or _DRIVE_PATTERN.match(posix):
        raise DZPathTraversalError(
            f"Archive entry '{name}' has an absolute path.", name
        )

    parts = []
    for part in posix.split(ARCHIVE_SEP):
        if part in ("", "."):
            continue
        if part == "..":
            raise DZPathTraversalError(
                f"Archive entry '{name}' points outside of the destination directory.",
                name,
            )
        parts.append(part)

    if not parts and not posix.endswith(ARCHIVE_SEP):
        raise DZPathTraversalError(f"Archive entry '{name}' has an empty path.", name)

    return tuple(parts)


def resolve_within(root: Path, parts: tuple[str, ...]) -> Path:
    """
    Join entry components onto a root directory and ensure the result stays inside it.

    Symbolic links already present under `root` are resolved before the check.

    Args:
        root (Path): The destination root directory.
        parts (tuple[str, ...]): Validated entry components (see `split_entry_name`).

    Returns:
        Path: The resolved absolute destination path.

    Raises:
        DZPathTraversalError: If the resolved path lies outside `root`.
    """
    resolved_root = root.resolve()
    target = resolved_root.joinpath(*parts).resolve()

    if target != resolved_root and not target.is_relative_to(resolved_root):
        raise DZPathTraversalError(
            f"Archive entry '{ARCHIVE_SEP.join(parts)}' resolves to '{target}' which is outside of '{resolved_root}'.",
            target,
        )

    return target


def format_size(n_bytes: int) -> str:
    """
    Format a number of bytes in the largest binary unit that keeps the value >= 1.

    Args:
        n_bytes (int): Size in bytes.

    Returns:
        str: Human-readable size, e.g. '512B', '1.5KiB', '3.0MiB'.
    """
    if n_bytes < 1024:
        return f"{n_bytes}B"

    value = float(n_bytes)
    for unit in ("KiB", "MiB", "GiB", "TiB"):
        value /= 1024
        if value < 1024 or unit == "TiB":
            return f"{value:.1f}{unit}"

    # should not get here
    return f"{n_bytes}B"


def yes_or_no_prompt(prompt: str) -> bool:
    """
    Display an interactive yes/no prompt to the user and return the selection.

    The pressed key is highlighted ('y' in green, 'N' in red).
    Any key other than 'y' means 'No'.

    Args:
        prompt (str): The text to display as the question.

    Returns:
        bool: True if the user presses 'y', False otherwise.
    """
    prompt = f"   {prompt} "
    question = Text("PROMPT", style="magenta") + Text(prompt, style="default")

    with Live(question + Text("[y/N]", style="bold default"), refresh_per_second=1) as live:
        key = readchar.readkey().lower()

        if key == "y":
            choice = (
                Text("[", style="bold default")
                + Text("y", style="bold green")
                + Text("/N]", style="bold default")
            )
        else:
            choice = (
                Text("[y/", style="bold default")
                + Text("N", style="bold red")
                + Text("]", style="bold default")
            )

        live.update(question + choice)

    return key == "y"
