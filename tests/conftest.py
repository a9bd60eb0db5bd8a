"""Shared pytest fixtures."""

import os

import pytest

from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.models.plan import TaskPlan
from tests.fixtures.sample_plans import bugfix_plan


@pytest.fixture
def plan() -> TaskPlan:
    return bugfix_plan()


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    return ChunkingConfig()


@pytest.fixture(autouse=True)
def _clean_planhound_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer PLANHOUND_* variables out of config tests."""
    for name in list(os.environ):
        if name.startswith("PLANHOUND_"):
            monkeypatch.delenv(name, raising=False)
