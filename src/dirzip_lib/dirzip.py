# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click
from click_help_colors import HelpColorsGroup

from dirzip_lib.archive.cli import archive
from dirzip_lib.extract.cli import extract
from dirzip_lib.listing.cli import list_

__version__ = "0.1.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=HelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of dirzip and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any dirzip command.

    dirzip packs directory trees into portable ZIP archives and unpacks them again.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(archive)
cli.add_command(extract)
cli.add_command(list_)
