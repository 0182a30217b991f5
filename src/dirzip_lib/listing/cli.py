# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from dirzip_lib.core.click_format import GNUHelpColorsCommand
from dirzip_lib.core.config import CFG
from dirzip_lib.core.error import DZError
from dirzip_lib.core.logger import get_logger
from dirzip_lib.extract import Extractor
from dirzip_lib.listing.presenter import ListPresenter

logger = get_logger(__name__)


@click.command(
    name="list",
    short_help="List the contents of a ZIP archive.",
    help=f"""List the files and directories stored in the specified ZIP archive without extracting it.

{click.style("ARCHIVE", fg="green")}   The archive to inspect.

Entries are printed in the order in which they are stored in the archive,
together with their uncompressed and compressed sizes.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "archive",
    type=str,
    metavar=click.style("ARCHIVE", fg="green"),
)
def list_(archive: str) -> NoReturn:
    """
    List the contents of a ZIP archive.
    """
    try:
        archive_path = Path(archive).resolve()
        entries = Extractor(archive_path).listEntries()
        ListPresenter(archive_path, entries).printListing(Console())
        sys.exit(0)
    except DZError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
