# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout dirzip.

Every failure of an archiving or extraction operation is reported as a subclass
of `DZError`. Each subclass is tagged with an `ErrorKind` and carries the path
that caused the failure, so that callers can inspect errors structurally and only
format them into a message at the outermost boundary.
"""

from enum import Enum
from pathlib import Path

from .config import CFG


class ErrorKind(Enum):
    """Kinds of failures an archive operation may report."""

    NOT_FOUND = "not found"
    IO_FAILURE = "I/O failure"
    PATH_ENCODING_FAILURE = "path encoding failure"
    ARCHIVE_FORMAT_ERROR = "archive format error"
    PATH_TRAVERSAL_REJECTED = "path traversal rejected"

    def __str__(self) -> str:
        return self.value


class DZError(Exception):
    """Common exception type for all dirzip errors."""

    exit_code = CFG.exit_codes.default
    kind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = path


class DZNotFoundError(DZError):
    """Raised when the source directory or the archive does not exist."""

    kind = ErrorKind.NOT_FOUND


class DZIOError(DZError):
    """Raised when reading, writing or creating a file or directory fails."""

    kind = ErrorKind.IO_FAILURE


class DZPathEncodingError(DZError):
    """Raised when a filesystem path cannot be represented as a portable string."""

    kind = ErrorKind.PATH_ENCODING_FAILURE


class DZArchiveFormatError(DZError):
    """Raised when the archive is malformed, truncated or fails integrity checks."""

    kind = ErrorKind.ARCHIVE_FORMAT_ERROR


class DZPathTraversalError(DZError):
    """Raised when an archive entry would be written outside the destination directory."""

    kind = ErrorKind.PATH_TRAVERSAL_REJECTED
