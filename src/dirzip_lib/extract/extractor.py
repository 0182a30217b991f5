# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shutil
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path

from dirzip_lib.archive.tree import EntryKind
from dirzip_lib.core.common import resolve_within, split_entry_name
from dirzip_lib.core.config import CFG
from dirzip_lib.core.error import (
    DZArchiveFormatError,
    DZIOError,
    DZNotFoundError,
)
from dirzip_lib.core.logger import get_logger

logger = get_logger(__name__)

# Errors raised by zipfile when an entry cannot be decoded or decompressed.
_CORRUPT_ENTRY_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    UnicodeDecodeError,
)

# General purpose flag marking an encrypted entry.
_ENCRYPTED_FLAG = 0x1


@dataclass(frozen=True)
class ArchiveEntryInfo:
    """
    Summary of a single archive entry.

    Attributes:
        name (str): Name of the entry as stored in the archive.
        kind (EntryKind): Whether the entry is a file or a directory.
        size (int): Uncompressed size in bytes.
        compressed_size (int): Compressed size in bytes.
    """

    name: str
    kind: EntryKind
    size: int
    compressed_size: int


class Extractor:
    """
    Unpacks a ZIP archive into a destination directory.

    Entry names are validated before anything is written: entries that are
    absolute or that would resolve outside of the destination directory
    cause the whole extraction to be rejected.
    """

    def __init__(self, archive: Path):
        """
        Initialize the Extractor.

        Args:
            archive (Path): Path to the archive to read.
        """
        self._archive = archive

    def extract(self, dest_dir: Path) -> Path:
        """
        Extract all entries of the archive into `dest_dir`.

        The destination directory and any missing parent directories of the
        extracted entries are created as needed. Existing files are overwritten.
        Entries that were extracted before an error occurred are left on disk.

        Args:
            dest_dir (Path): Directory to extract into. Does not need to exist.

        Returns:
            Path: The destination directory.

        Raises:
            DZNotFoundError: If the archive does not exist.
            DZArchiveFormatError: If the archive or one of its entries is corrupted.
            DZPathTraversalError: If an entry would be written outside of `dest_dir`.
            DZIOError: If creating a directory or writing a file fails.
        """
        with self._open() as zf:
            Extractor._makeDir(dest_dir)

            # resolve everything first so that a malicious entry rejects the whole archive
            targets = []
            for info in zf.infolist():
                if not (parts := split_entry_name(info.filename)):
                    logger.debug(f"Skipping root directory entry '{info.filename}'.")
                    continue
                targets.append((info, resolve_within(dest_dir, parts)))

            for info, target in targets:
                self._extractEntry(zf, info, target)

        logger.debug(
            f"Extracted {len(targets)} entries from '{self._archive}' into '{dest_dir}'."
        )
        return dest_dir

    def listEntries(self) -> list[ArchiveEntryInfo]:
        """
        List the entries of the archive in container order without extracting them.

        Returns:
            list[ArchiveEntryInfo]: Summaries of all archive entries.

        Raises:
            DZNotFoundError: If the archive does not exist.
            DZArchiveFormatError: If the archive is not a valid ZIP archive.
            DZIOError: If the archive cannot be read.
        """
        with self._open() as zf:
            return [
                ArchiveEntryInfo(
                    name=info.filename,
                    kind=EntryKind.DIRECTORY if info.is_dir() else EntryKind.FILE,
                    size=info.file_size,
                    compressed_size=info.compress_size,
                )
                for info in zf.infolist()
            ]

    def _open(self) -> zipfile.ZipFile:
        """
        Open the archive for reading.

        Raises:
            DZNotFoundError: If the archive does not exist.
            DZArchiveFormatError: If the file is not a valid ZIP archive.
            DZIOError: If the archive cannot be opened.
        """
        if not self._archive.exists():
            raise DZNotFoundError(
                f"Archive '{self._archive}' does not exist.", self._archive
            )

        try:
            return zipfile.ZipFile(self._archive)
        except (zipfile.BadZipFile, UnicodeDecodeError) as e:
            raise DZArchiveFormatError(
                f"'{self._archive}' is not a valid ZIP archive: {e}.", self._archive
            ) from e
        except OSError as e:
            raise DZIOError(
                f"Could not open archive '{self._archive}': {e}.", self._archive
            ) from e

    def _extractEntry(
        self, zf: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path
    ) -> None:
        """
        Materialize a single archive entry at `target`.

        Raises:
            DZArchiveFormatError: If the entry is encrypted or cannot be decompressed.
            DZIOError: If the entry cannot be written.
        """
        if info.is_dir():
            logger.debug(f"Creating directory '{target}'.")
            Extractor._makeDir(target)
            return

        if info.flag_bits & _ENCRYPTED_FLAG:
            raise DZArchiveFormatError(
                f"Archive entry '{info.filename}' is encrypted, which is not supported.",
                self._archive,
            )

        logger.debug(f"Extracting '{info.filename}' into '{target}'.")
        Extractor._makeDir(target.parent)

        try:
            with zf.open(info) as src, target.open("wb") as dst:
                shutil.copyfileobj(src, dst, CFG.extractor.chunk_size)
        except _CORRUPT_ENTRY_ERRORS as e:
            raise DZArchiveFormatError(
                f"Could not decompress archive entry '{info.filename}': {e}.",
                self._archive,
            ) from e
        except OSError as e:
            raise DZIOError(f"Could not write file '{target}': {e}.", target) from e

    @staticmethod
    def _makeDir(directory: Path) -> None:
        """
        Create a directory including all missing parents.

        Raises:
            DZIOError: If the directory cannot be created.
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DZIOError(
                f"Could not create directory '{directory}': {e}.", directory
            ) from e
