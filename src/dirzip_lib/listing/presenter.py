# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from rich.console import Console
from rich.text import Text
from tabulate import Line, TableFormat, tabulate

from dirzip_lib.archive.tree import EntryKind
from dirzip_lib.core.common import format_size
from dirzip_lib.core.config import CFG
from dirzip_lib.extract import ArchiveEntryInfo


class ListPresenter:
    """
    Present the entries of an archive as a compact table followed by a summary.
    """

    # Table formatting configuration for `tabulate`.
    _COMPACT_TABLE = TableFormat(
        lineabove=Line("", "", "", ""),
        linebelowheader="",
        linebetweenrows="",
        linebelow=Line("", "", "", ""),
        headerrow=("", "  ", ""),
        datarow=("", "  ", ""),
        padding=0,
        with_header_hide=["lineabove", "linebelow"],
    )

    _HEADERS = ["TYPE", "SIZE", "PACKED", "RATIO", "NAME"]

    def __init__(self, archive: Path, entries: list[ArchiveEntryInfo]):
        self._archive = archive
        self._entries = entries

    def printListing(self, console: Console) -> None:
        """
        Print the table of entries and the summary line.

        Args:
            console (Console): Console to print into.
        """
        if self._entries:
            lines = self._createTable().splitlines()
            console.print(
                Text(lines[0], style=f"{CFG.list_presenter.headers_style} bold")
            )
            for line, entry in zip(lines[1:], self._entries):
                console.print(Text(line, style=ListPresenter._styleFor(entry)))
        else:
            console.print(
                Text(f"Archive '{self._archive}' is empty.", style="default")
            )

        console.print(
            Text(self.createSummary(), style=CFG.list_presenter.summary_style)
        )

    def createSummary(self) -> str:
        """
        Summarize the number of entries and their total sizes.

        Returns:
            str: e.g. '2 files, 1 directory, 10B (packed 12B)'.
        """
        n_dirs = sum(e.kind == EntryKind.DIRECTORY for e in self._entries)
        n_files = len(self._entries) - n_dirs
        size = sum(e.size for e in self._entries)
        packed = sum(e.compressed_size for e in self._entries)

        return (
            f"{n_files} {'file' if n_files == 1 else 'files'}, "
            f"{n_dirs} {'directory' if n_dirs == 1 else 'directories'}, "
            f"{format_size(size)} (packed {format_size(packed)})"
        )

    def _createTable(self) -> str:
        """
        Build a compact tabulated string representation of the entries.

        The header is the first line, followed by one line per entry in archive order.
        """
        rows = [ListPresenter._createRow(entry) for entry in self._entries]

        return tabulate(
            rows,
            headers=ListPresenter._HEADERS,
            tablefmt=ListPresenter._COMPACT_TABLE,
            stralign="left",
            disable_numparse=True,
        )

    @staticmethod
    def _createRow(entry: ArchiveEntryInfo) -> list[str]:
        if entry.kind == EntryKind.DIRECTORY:
            return ["dir", "-", "-", "-", entry.name]

        ratio = f"{entry.compressed_size / entry.size:.0%}" if entry.size else "-"
        return [
            "file",
            format_size(entry.size),
            format_size(entry.compressed_size),
            ratio,
            entry.name,
        ]

    @staticmethod
    def _styleFor(entry: ArchiveEntryInfo) -> str:
        if entry.kind == EntryKind.DIRECTORY:
            return CFG.list_presenter.dir_style
        return CFG.list_presenter.file_style
