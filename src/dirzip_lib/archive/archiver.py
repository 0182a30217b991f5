# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shutil
import stat
import zipfile
from pathlib import Path

from dirzip_lib.core.config import CFG
from dirzip_lib.core.error import DZError, DZIOError, DZNotFoundError
from dirzip_lib.core.logger import get_logger

from .tree import EntryKind, SourceEntry, walk_tree

logger = get_logger(__name__)

# Modification time stored for every entry (the earliest time representable in ZIP).
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

# `create_system` value identifying Unix-style external attributes.
_UNIX_SYSTEM = 3

# MS-DOS directory attribute.
_DOS_DIRECTORY = 0x10


class Archiver:
    """
    Packs a directory tree into a deflate-compressed ZIP archive.

    Entries are written in a stable order with fixed timestamps and permissions,
    so archiving the same tree twice produces identical archives.
    """

    def __init__(self, source_dir: Path):
        """
        Initialize the Archiver.

        Args:
            source_dir (Path): Directory to archive.
        """
        self._source_dir = source_dir

    def build(self, archive: Path) -> Path:
        """
        Archive the source directory into `archive`, overwriting it if it exists.

        Every file and directory below the source directory is stored under its
        forward-slash separated path relative to the source directory. Empty
        directories are stored as explicit directory entries.

        Args:
            archive (Path): Path of the archive to create.

        Returns:
            Path: Path to the created archive.

        Raises:
            DZNotFoundError: If the source directory does not exist.
            DZIOError: If reading a source file or writing the archive fails.
            DZPathEncodingError: If a path cannot be represented as UTF-8.
        """
        self._ensureSource()

        logger.debug(f"Archiving '{self._source_dir}' into '{archive}'.")

        created = False
        try:
            with zipfile.ZipFile(
                archive,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=CFG.archiver.compress_level,
            ) as zf:
                created = True
                n_entries = 0
                for entry in walk_tree(self._source_dir, exclude=archive):
                    self._writeEntry(zf, entry)
                    n_entries += 1
        except DZError:
            if created:
                Archiver._removePartialArchive(archive)
            raise
        except OSError as e:
            if created:
                Archiver._removePartialArchive(archive)
            raise DZIOError(f"Could not write archive '{archive}': {e}.", archive) from e

        logger.debug(
            f"Archived {n_entries} entries from '{self._source_dir}' into '{archive}'."
        )
        return archive

    def _ensureSource(self) -> None:
        """
        Check that the source directory exists and is a directory.

        Raises:
            DZNotFoundError: If the source directory is missing or is not a directory.
        """
        if not self._source_dir.exists():
            raise DZNotFoundError(
                f"Source path '{self._source_dir}' does not exist.", self._source_dir
            )

        if not self._source_dir.is_dir():
            raise DZNotFoundError(
                f"Source path '{self._source_dir}' is not a directory.",
                self._source_dir,
            )

    def _writeEntry(self, zf: zipfile.ZipFile, entry: SourceEntry) -> None:
        """
        Write a single file or directory entry into the open archive.

        Raises:
            DZIOError: If the source file cannot be read or the entry cannot be written.
        """
        info = Archiver._makeInfo(entry)
        logger.debug(f"Adding {entry.kind} '{info.filename}'.")

        try:
            if entry.kind == EntryKind.DIRECTORY:
                zf.mkdir(info)
                return

            info.file_size = entry.path.stat().st_size
            with entry.path.open("rb") as src, zf.open(info, "w") as dst:
                shutil.copyfileobj(src, dst, CFG.archiver.chunk_size)
        except OSError as e:
            raise DZIOError(
                f"Could not add '{entry.path}' to the archive: {e}.", entry.path
            ) from e

    @staticmethod
    def _makeInfo(entry: SourceEntry) -> zipfile.ZipInfo:
        """
        Create the ZIP metadata of an entry.

        Args:
            entry (SourceEntry): The entry to describe.

        Returns:
            zipfile.ZipInfo: Metadata with a fixed timestamp and permissions.
        """
        info = zipfile.ZipInfo(entry.archive_name, date_time=ZIP_EPOCH)
        info.create_system = _UNIX_SYSTEM

        if entry.kind == EntryKind.DIRECTORY:
            info.compress_type = zipfile.ZIP_STORED
            info.CRC = 0
            info.external_attr = (
                (stat.S_IFDIR | CFG.archiver.dir_mode) << 16
            ) | _DOS_DIRECTORY
        else:
            info.compress_type = zipfile.ZIP_DEFLATED
            if hasattr(info, "compress_level"):
                info.compress_level = CFG.archiver.compress_level
            else:
                # python < 3.13
                info._compresslevel = CFG.archiver.compress_level
            info.external_attr = (stat.S_IFREG | CFG.archiver.file_mode) << 16

        return info

    @staticmethod
    def _removePartialArchive(archive: Path) -> None:
        """
        Delete a partially written archive, if configured to do so.

        Failure to delete the archive is logged and otherwise ignored,
        so that the original error is reported.
        """
        if not CFG.archiver.remove_partial_archive:
            logger.warning(f"Leaving partially written archive '{archive}' on disk.")
            return

        try:
            archive.unlink(missing_ok=True)
            logger.debug(f"Removed partially written archive '{archive}'.")
        except OSError as e:
            logger.warning(f"Could not remove partially written archive '{archive}': {e}.")
