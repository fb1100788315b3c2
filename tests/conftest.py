"""Shared pytest fixtures for idxsync tests."""

from pathlib import Path

import pytest

from idxsync.store import CacheStore


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the user's real config and cache directories."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))


@pytest.fixture
def store(tmp_path: Path) -> CacheStore:
    """Return a CacheStore rooted inside the test temporary directory."""
    return CacheStore(tmp_path / "cache")
