"""Tests for building the service bundle from configuration."""

from pathlib import Path

from planhound.core.config.config import Config
from planhound.core.config.index_config import IndexConfig
from planhound.providers.index.filesystem_index import FileSystemContentIndex
from planhound.services.factory import create_index, create_services


def test_no_root_means_no_index() -> None:
    assert create_index(Config()) is None
    assert create_services(Config()).index is None


def test_root_directory_builds_filesystem_index(tmp_path: Path) -> None:
    config = Config(index=IndexConfig(root=tmp_path, max_file_bytes=10))

    index = create_index(config)

    assert isinstance(index, FileSystemContentIndex)
    assert create_services(config).chunking is not None


def test_root_that_is_not_a_directory(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "plan.json"
    not_a_dir.write_text("{}")

    assert create_index(Config(index=IndexConfig(root=not_a_dir))) is None
