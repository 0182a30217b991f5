# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Entry points for host applications.

`ArchiveService` exposes exactly two operations, `build` and `extract`. Both
take two paths and return an `OperationResult` holding either the destination
path or a human-readable error message. Errors are kept structured everywhere
below this boundary and are only turned into text here.
"""

from dataclasses import dataclass
from pathlib import Path

from dirzip_lib.archive import Archiver
from dirzip_lib.core.error import DZError
from dirzip_lib.core.logger import get_logger
from dirzip_lib.extract import Extractor

logger = get_logger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of an archive operation.

    Exactly one of `path` and `error` is set.
    """

    path: Path | None = None
    error: str | None = None
    # The original exception, for callers that want to inspect the failure.
    cause: DZError | None = None

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.error is None


class ArchiveService:
    """
    Capability interface through which a host packs and unpacks directory trees.
    """

    def build(self, source_dir: Path | str, archive: Path | str) -> OperationResult:
        """
        Archive `source_dir` into `archive`.

        Args:
            source_dir (Path | str): Directory to archive.
            archive (Path | str): Path of the archive to create or overwrite.

        Returns:
            OperationResult: The archive path, or the reason of the failure.
        """
        try:
            return OperationResult(path=Archiver(Path(source_dir)).build(Path(archive)))
        except DZError as e:
            return ArchiveService._failure(e)

    def extract(self, archive: Path | str, dest_dir: Path | str) -> OperationResult:
        """
        Extract `archive` into `dest_dir`.

        Args:
            archive (Path | str): Archive to extract.
            dest_dir (Path | str): Destination directory. Created if missing.

        Returns:
            OperationResult: The destination directory, or the reason of the failure.
        """
        try:
            return OperationResult(
                path=Extractor(Path(archive)).extract(Path(dest_dir))
            )
        except DZError as e:
            return ArchiveService._failure(e)

    @staticmethod
    def _failure(e: DZError) -> OperationResult:
        logger.debug(f"Operation failed ({e.kind}): {e}")
        return OperationResult(error=str(e), cause=e)


_SERVICE = ArchiveService()


def build(source_dir: Path | str, archive: Path | str) -> OperationResult:
    """Archive `source_dir` into `archive`. See `ArchiveService.build`."""
    return _SERVICE.build(source_dir, archive)


def extract(archive: Path | str, dest_dir: Path | str) -> OperationResult:
    """Extract `archive` into `dest_dir`. See `ArchiveService.extract`."""
    return _SERVICE.extract(archive, dest_dir)
