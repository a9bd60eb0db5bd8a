"""Tests for the directory-backed content index."""

from pathlib import Path

import pytest

from planhound.interfaces.content_index import ContentIndex, FileRecord
from planhound.providers.index.filesystem_index import FileSystemContentIndex


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "src" / "server").mkdir(parents=True)
    (tmp_path / "src" / "server" / "app.ts").write_text("line 1\nline 2\nline 3\n")
    (tmp_path / "src" / "server" / "routes.ts").write_text("export {}\n")
    (tmp_path / "src" / "util.py").write_text("x = 1\n")
    (tmp_path / "node_modules" / "dep").mkdir(parents=True)
    (tmp_path / "node_modules" / "dep" / "index.ts").write_text("ignored\n")
    return tmp_path


@pytest.fixture
def index(workspace: Path) -> FileSystemContentIndex:
    return FileSystemContentIndex(workspace)


def test_satisfies_protocol(index: FileSystemContentIndex) -> None:
    assert isinstance(index, ContentIndex)


def test_read_file(index: FileSystemContentIndex) -> None:
    record = index.read_file("src/server/app.ts")

    assert record.path == "src/server/app.ts"
    assert record.line_count == 3


@pytest.mark.parametrize(
    "text, expected",
    [("", 1), ("a", 1), ("a\nb\n", 2), ("a\n\n\n", 3), ("\n\n", 2)],
)
def test_line_count_keeps_trailing_blank_lines(text: str, expected: int) -> None:
    assert FileRecord(path="f.txt", text=text).line_count == expected


def test_missing_file(index: FileSystemContentIndex) -> None:
    assert index.read_file("src/nope.ts") is None
    assert index.read_file("src/server") is None


def test_paths_outside_root_are_refused(index: FileSystemContentIndex, workspace: Path) -> None:
    (workspace.parent / "secret.txt").write_text("no")

    assert index.read_file("../secret.txt") is None
    assert index.list_files("../") == []


def test_large_files_are_skipped(workspace: Path) -> None:
    index = FileSystemContentIndex(workspace, max_file_bytes=5)

    assert index.read_file("src/server/app.ts") is None


def test_list_directory(index: FileSystemContentIndex) -> None:
    assert index.list_files("src/server") == ["src/server/app.ts", "src/server/routes.ts"]
    assert index.list_files("./src/server/") == ["src/server/app.ts", "src/server/routes.ts"]


def test_list_single_file(index: FileSystemContentIndex) -> None:
    assert index.list_files("src/util.py") == ["src/util.py"]


def test_list_glob(index: FileSystemContentIndex) -> None:
    assert index.list_files("**/*.ts") == ["src/server/app.ts", "src/server/routes.ts"]
    assert index.list_files("src/*.py") == ["src/util.py"]


def test_excluded_directories(index: FileSystemContentIndex) -> None:
    assert "node_modules/dep/index.ts" not in index.list_files("**/*")
    assert index.list_files("node_modules") == []


def test_empty_and_absolute_patterns(index: FileSystemContentIndex, workspace: Path) -> None:
    assert index.list_files("") == []
    assert index.list_files(str(workspace / "src")) == []


def test_symbols_are_not_resolved(index: FileSystemContentIndex) -> None:
    assert index.find_symbol("AuthService") is None
