"""
Pytest configuration and shared fixtures for bookmark manager tests.
"""

import logging
from pathlib import Path
from typing import Callable, List

import pytest
import yaml

from bookmark_manager.core.data_models import Bookmark
from bookmark_manager.utils.logging_setup import PACKAGE_LOGGER

ENV_VARS = (
    "BOOKMARK_MANAGER_FILE",
    "BOOKMARK_MANAGER_OUTPUT",
    "BOOKMARK_MANAGER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Run every test in an empty working directory with no overrides set."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def store_path(tmp_path) -> Path:
    """Path of a store file that does not exist yet."""
    return tmp_path / "bookmarks"


@pytest.fixture
def write_store(store_path) -> Callable[..., Path]:
    """Write records (list of dicts) or raw text to the store file."""

    def _write(records=None, text=None) -> Path:
        if text is None:
            text = yaml.safe_dump(records, explicit_start=True, sort_keys=False)
        store_path.write_text(text, encoding="utf-8")
        return store_path

    return _write


@pytest.fixture
def read_store(store_path) -> Callable[[], List[dict]]:
    """Load the store file back as a list of plain dicts."""

    def _read() -> List[dict]:
        return yaml.safe_load(store_path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def sample_bookmarks() -> List[Bookmark]:
    """A small sorted collection with unique names."""
    return [
        Bookmark(name="intro", offset=0.0),
        Bookmark(name="alpha", offset=1.0),
        Bookmark(name="beta", offset=2.0),
        Bookmark(name="outro", offset=95.25),
    ]
