# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
import zipfile

import pytest

from dirzip_lib.core.error import (
    DZArchiveFormatError,
    DZNotFoundError,
    DZPathEncodingError,
    DZPathTraversalError,
    ErrorKind,
)
from dirzip_lib.service import ArchiveService, OperationResult, build, extract


def _tree(root):
    return {
        p.relative_to(root).as_posix(): None if p.is_dir() else p.read_bytes()
        for p in root.rglob("*")
    }


@pytest.fixture
def rich_tree(tmp_path):
    """Tree with nested, empty and zero-byte entries and varied content."""
    root = tmp_path / "rich"
    (root / "docs" / "nested" / "deeper").mkdir(parents=True)
    (root / "empty_top").mkdir()
    (root / "docs" / "empty_inner").mkdir()
    (root / "zero.bin").write_bytes(b"")
    (root / "docs" / "readme.md").write_text("# title\n\nsome text\n")
    (root / "docs" / "nested" / "data.bin").write_bytes(bytes(range(256)) * 64)
    (root / "docs" / "nested" / "deeper" / "unicode ž.txt").write_text("příliš žluťoučký")
    return root


def test_round_trip(rich_tree, tmp_path):
    archive = tmp_path / "rich.zip"
    dest = tmp_path / "dest"

    built = build(rich_tree, archive)
    extracted = extract(archive, dest)

    assert built == OperationResult(path=archive)
    assert extracted.ok
    assert extracted.path == dest
    assert _tree(dest) == _tree(rich_tree)
    assert (dest / "empty_top").is_dir()
    assert (dest / "docs" / "empty_inner").is_dir()


def test_round_trip_accepts_string_paths(rich_tree, tmp_path):
    archive = tmp_path / "rich.zip"
    dest = tmp_path / "dest"

    assert build(str(rich_tree), str(archive)).ok
    assert extract(str(archive), str(dest)).ok
    assert _tree(dest) == _tree(rich_tree)


def test_build_missing_source_reports_error(tmp_path):
    archive = tmp_path / "out.zip"

    result = ArchiveService().build(tmp_path / "missing", archive)

    assert not result.ok
    assert result.path is None
    assert "does not exist" in result.error
    assert str(tmp_path / "missing") in result.error
    assert isinstance(result.cause, DZNotFoundError)
    assert result.cause.kind == ErrorKind.NOT_FOUND
    assert not archive.exists()


def test_extract_traversal_reports_error(tmp_path):
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../evil.txt", "evil")
    dest = tmp_path / "dest"

    result = ArchiveService().extract(archive, dest)

    assert not result.ok
    assert isinstance(result.cause, DZPathTraversalError)
    assert "../evil.txt" in result.error
    assert not (tmp_path / "evil.txt").exists()


@pytest.mark.skipif(os.sep == "\\", reason="backslash is a separator on Windows")
@pytest.mark.parametrize("name", ["x\\y.txt", "..\\evil.txt"])
def test_build_backslash_in_name_reports_error(tmp_path, name):
    source = tmp_path / "source"
    source.mkdir()
    (source / "a.txt").write_text("hello")
    (source / name).write_text("content")
    archive = tmp_path / "out.zip"

    result = ArchiveService().build(source, archive)

    assert not result.ok
    assert isinstance(result.cause, DZPathEncodingError)
    assert "backslash" in result.error
    assert not archive.exists()


def test_extract_invalid_utf8_name_reports_error(tmp_path):
    name = "\u00e9bad.txt"
    archive = tmp_path / "bad.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(name, "content")
    encoded = name.encode("utf-8")
    archive.write_bytes(archive.read_bytes().replace(encoded, b"\xff" * len(encoded)))

    result = ArchiveService().extract(archive, tmp_path / "dest")

    assert not result.ok
    assert isinstance(result.cause, DZArchiveFormatError)
    assert result.cause.kind == ErrorKind.ARCHIVE_FORMAT_ERROR
    assert str(archive) in result.error


def test_extract_missing_archive_reports_error(tmp_path):
    result = extract(tmp_path / "missing.zip", tmp_path / "dest")

    assert not result.ok
    assert result.cause.kind == ErrorKind.NOT_FOUND


def test_operation_result_ok():
    assert OperationResult(path=None, error=None).ok
    assert not OperationResult(error="failure").ok
