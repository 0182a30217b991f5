# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click

from dirzip_lib.core.click_format import GNUHelpColorsCommand
from dirzip_lib.core.common import yes_or_no_prompt
from dirzip_lib.core.config import CFG
from dirzip_lib.core.error import DZError
from dirzip_lib.core.logger import get_logger
from dirzip_lib.service import ArchiveService

logger = get_logger(__name__)


@click.command(
    short_help="Pack a directory into a ZIP archive.",
    help=f"""Pack the specified directory, including all its files and subdirectories, into a ZIP archive.

{click.style("SOURCE_DIR", fg="green")}   The directory to archive.

{click.style("ARCHIVE", fg="green")}      Path of the archive to create. Optional.

If ARCHIVE is not specified, the archive is created next to SOURCE_DIR
and named after it with the `{CFG.archive_suffix}` suffix.

Paths inside the archive are stored relative to SOURCE_DIR with forward slashes.
Empty directories are preserved. File permissions, ownership and timestamps are not stored.

If ARCHIVE already exists, `{CFG.binary_name} archive` asks for confirmation before overwriting it.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "source",
    type=str,
    metavar=click.style("SOURCE_DIR", fg="green"),
)
@click.argument(
    "archive",
    type=str,
    metavar=click.style("ARCHIVE", fg="green"),
    required=False,
    default=None,
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    help="Overwrite an existing archive without confirmation.",
)
def archive(source: str, archive: str | None, yes: bool = False) -> NoReturn:
    """
    Pack a directory into a ZIP archive.
    """
    try:
        _archive_dir(source, archive, yes)
        sys.exit(0)
    except DZError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def _archive_dir(source: str, archive: str | None, yes: bool) -> None:
    """
    Archive the source directory, asking before an existing archive is overwritten.

    Args:
        source (str): Path to the directory to archive.
        archive (str | None): Path to the archive. If None, derived from `source`.
        yes (bool): Whether to overwrite an existing archive without confirmation.

    Raises:
        DZError: If archiving fails.
    """
    source_dir = Path(source).resolve()
    archive_path = (
        Path(archive).resolve() if archive else default_archive_path(source_dir)
    )

    if (
        archive_path.exists()
        and not yes
        and not yes_or_no_prompt(f"Archive '{archive_path}' exists. Overwrite it?")
    ):
        logger.info("Operation aborted.")
        return

    result = ArchiveService().build(source_dir, archive_path)
    if not result.ok:
        raise result.cause

    logger.info(f"Archived '{source_dir}' into '{result.path}'.")


def default_archive_path(source_dir: Path) -> Path:
    """
    Return the archive path used when none is given: `<source_dir><suffix>` next to the directory.

    Args:
        source_dir (Path): Absolute path to the archived directory.

    Returns:
        Path: Absolute path to the archive.
    """
    return source_dir.with_name(source_dir.name + CFG.archive_suffix)
