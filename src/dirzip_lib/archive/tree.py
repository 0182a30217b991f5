# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dirzip_lib.core.common import ARCHIVE_SEP, normalize_path
from dirzip_lib.core.error import DZIOError
from dirzip_lib.core.logger import get_logger

logger = get_logger(__name__)


class EntryKind(Enum):
    """Type of a filesystem node stored in an archive."""

    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceEntry:
    """
    A single node of the archived directory tree.

    Attributes:
        relative_path (str): Forward-slash separated path relative to the archived directory.
        kind (EntryKind): Whether the node is a file or a directory.
        path (Path): Absolute path to the node on the filesystem.
    """

    relative_path: str
    kind: EntryKind
    path: Path

    @property
    def archive_name(self) -> str:
        """Name of the entry inside the archive. Directory names end with a slash."""
        if self.kind == EntryKind.DIRECTORY:
            return self.relative_path + ARCHIVE_SEP
        return self.relative_path


def walk_tree(root: Path, exclude: Path | None = None) -> Iterator[SourceEntry]:
    """
    Recursively enumerate all files and directories below `root`.

    The traversal is top-down and entries of each directory are sorted by name,
    so a directory is always yielded before its contents and the order does not
    depend on the filesystem. The root itself is not yielded.

    Symbolic links to directories are yielded as directories but not descended into.
    Special files (pipes, sockets, devices) are skipped.

    Args:
        root (Path): The directory to walk.
        exclude (Path | None): A file that should be left out of the walk,
            typically the archive being written into `root`.

    Yields:
        SourceEntry: The discovered nodes.

    Raises:
        DZIOError: If a directory cannot be listed.
        DZPathEncodingError: If a path cannot be represented as UTF-8.
    """
    excluded = exclude.resolve() if exclude else None

    def _on_error(e: OSError) -> None:
        raise DZIOError(
            f"Could not read directory '{e.filename}': {e.strerror}.", e.filename
        ) from e

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        current = Path(dirpath)

        if relative := normalize_path(os.path.relpath(current, root)):
            yield SourceEntry(relative, EntryKind.DIRECTORY, current)

        for name in sorted(filenames):
            path = current / name
            if excluded and name == excluded.name and path.resolve() == excluded:
                logger.debug(f"Skipping '{path}': it is the archive being written.")
                continue

            # broken links are yielded so that reading them reports the error
            if path.exists() and not path.is_file():
                logger.debug(f"Skipping '{path}': it is not a regular file.")
                continue

            yield SourceEntry(
                normalize_path(os.path.relpath(path, root)), EntryKind.FILE, path
            )

        # os.walk does not follow links to directories
        for name in dirnames:
            path = current / name
            if path.is_symlink():
                logger.debug(f"Not descending into symlinked directory '{path}'.")
                yield SourceEntry(
                    normalize_path(os.path.relpath(path, root)),
                    EntryKind.DIRECTORY,
                    path,
                )
