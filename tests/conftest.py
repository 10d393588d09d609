"""Shared test fixtures for uispec."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from uispec.config.store import ConfigStore, default_store

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture()
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal Vue project: ``src/`` plus an empty ``.uispec/`` dir."""
    (tmp_path / "src").mkdir()
    (tmp_path / ".uispec").mkdir()
    return tmp_path


@pytest.fixture()
def store(tmp_path: Path) -> ConfigStore:
    """A private config store rooted at ``tmp_path``."""
    return ConfigStore(tmp_path)


@pytest.fixture(autouse=True)
def _reset_default_store() -> Iterator[None]:
    """Keep the process-wide store from leaking between tests."""
    yield
    default_store.set(None)
