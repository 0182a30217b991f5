# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click

from dirzip_lib.core.click_format import GNUHelpColorsCommand
from dirzip_lib.core.config import CFG
from dirzip_lib.core.error import DZError
from dirzip_lib.core.logger import get_logger
from dirzip_lib.service import ArchiveService

logger = get_logger(__name__)


@click.command(
    short_help="Unpack a ZIP archive into a directory.",
    help=f"""Unpack the specified ZIP archive into a directory.

{click.style("ARCHIVE", fg="green")}    The archive to extract.

{click.style("DEST_DIR", fg="green")}   The directory to extract into. Optional.

If DEST_DIR is not specified, the archive is extracted next to itself into a directory
named after the archive without its suffix. DEST_DIR and any missing parent directories are created.

Files already present in DEST_DIR are overwritten by files from the archive.
Archives containing entries that would be written outside of DEST_DIR are rejected.

If extraction fails, the entries extracted so far are left in DEST_DIR.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "archive",
    type=str,
    metavar=click.style("ARCHIVE", fg="green"),
)
@click.argument(
    "dest",
    type=str,
    metavar=click.style("DEST_DIR", fg="green"),
    required=False,
    default=None,
)
def extract(archive: str, dest: str | None) -> NoReturn:
    """
    Unpack a ZIP archive into a directory.
    """
    try:
        _extract_archive(archive, dest)
        sys.exit(0)
    except DZError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def _extract_archive(archive: str, dest: str | None) -> None:
    """
    Extract the archive into the destination directory.

    Args:
        archive (str): Path to the archive.
        dest (str | None): Destination directory. If None, derived from `archive`.

    Raises:
        DZError: If extraction fails.
    """
    archive_path = Path(archive).resolve()
    dest_dir = Path(dest).resolve() if dest else default_dest_dir(archive_path)

    result = ArchiveService().extract(archive_path, dest_dir)
    if not result.ok:
        raise result.cause

    logger.info(f"Extracted '{archive_path}' into '{result.path}'.")


def default_dest_dir(archive: Path) -> Path:
    """
    Return the destination used when none is given: the archive path without its suffix.

    Archives without a suffix are extracted into `<archive>_extracted`.

    Args:
        archive (Path): Absolute path to the archive.

    Returns:
        Path: Absolute path to the destination directory.
    """
    if archive.suffix:
        return archive.with_suffix("")
    return archive.with_name(f"{archive.name}_extracted")
