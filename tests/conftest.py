"""Shared fixtures for ScreenHound tests."""

import os

import pytest

from screenhound.core.config.config import Config
from screenhound.core.config.figma_config import FigmaConfig
from screenhound.core.config.index_config import IndexConfig
from tests.fixtures.catalog import catalog_provider, seed_index

_ENV_NAMES = (
    "FIGMA_TOKEN",
    "FIGMA_TEAM_ID",
    "FIGMA_COLLECTION_DEPTH",
    "FIGMA_ALLOW_EMPTY_VERSION_OVERWRITE",
    "SCREEN_INDEX_PATH",
    "DEFAULT_PROJECT",
    "DEFAULT_VERSION",
    "SUPPORTED_PROJECTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of configuration tests."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)

    for name in list(os.environ):
        if name.startswith("SCREENHOUND_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def index_path(tmp_path):
    return tmp_path / "data" / "screen-index.json"


@pytest.fixture
def seeded_store(index_path):
    return seed_index(index_path)


@pytest.fixture
def provider():
    return catalog_provider()


@pytest.fixture
def config(index_path):
    return Config(
        figma=FigmaConfig(team_id="team-1"),
        index=IndexConfig(path=index_path),
    )
