# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from dirzip_lib.archive import Archiver
from dirzip_lib.core.config import CFG
from dirzip_lib.core.error import DZPathTraversalError
from dirzip_lib.extract.cli import _extract_archive, default_dest_dir, extract


@pytest.mark.parametrize(
    "archive, expected",
    [
        (Path("/data/project.zip"), Path("/data/project")),
        (Path("/data/project"), Path("/data/project_extracted")),
    ],
)
def test_default_dest_dir(archive, expected):
    assert default_dest_dir(archive) == expected


@patch("dirzip_lib.extract.cli.logger.info")
def test_extract_archive_success(mock_logger_info, source_tree, tmp_path):
    archive_path = Archiver(source_tree).build(tmp_path / "out.zip")
    dest = tmp_path / "dest"

    _extract_archive(str(archive_path), str(dest))

    assert (dest / "sub" / "b.txt").read_text() == "world"
    mock_logger_info.assert_called_with(
        f"Extracted '{archive_path}' into '{dest}'."
    )


@patch("dirzip_lib.extract.cli.logger.info")
def test_extract_archive_default_destination(mock_logger_info, source_tree, tmp_path):
    archive_path = Archiver(source_tree).build(tmp_path / "out.zip")

    _extract_archive(str(archive_path), None)

    assert (tmp_path / "out" / "a.txt").read_text() == "hello"


def test_extract_archive_traversal_raises(tmp_path):
    archive_path = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive_path, "w") as zf:
        zf.writestr("../evil.txt", "evil")

    with pytest.raises(DZPathTraversalError):
        _extract_archive(str(archive_path), str(tmp_path / "dest"))

    assert not (tmp_path / "evil.txt").exists()


def test_extract_command_success(source_tree, tmp_path):
    archive_path = Archiver(source_tree).build(tmp_path / "out.zip")
    dest = tmp_path / "dest"

    with patch("dirzip_lib.extract.cli.logger"):
        result = CliRunner().invoke(extract, [str(archive_path), str(dest)])

    assert result.exit_code == 0
    assert (dest / "sub" / "empty").is_dir()


def test_extract_command_missing_archive_exits_default(tmp_path):
    with patch("dirzip_lib.extract.cli.logger") as mock_logger:
        result = CliRunner().invoke(extract, [str(tmp_path / "missing.zip")])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_extract_command_unexpected_error_exits_99(tmp_path):
    with (
        patch(
            "dirzip_lib.extract.cli._extract_archive", side_effect=RuntimeError("boom")
        ),
        patch("dirzip_lib.extract.cli.logger") as mock_logger,
    ):
        result = CliRunner().invoke(extract, [str(tmp_path / "a.zip")])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()
