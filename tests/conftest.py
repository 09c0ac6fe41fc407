"""Shared pytest fixtures."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from localindex.config import IndexingPolicy
from localindex.engine import IndexEngine
from localindex.store.snapshot import SnapshotStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep config/snapshot lookups and env overrides away from the real home."""
    monkeypatch.setenv("LOCALINDEX_HOME", str(tmp_path / "appdata"))
    monkeypatch.delenv("LOCALINDEX_MAX_DEPTH", raising=False)
    monkeypatch.delenv("LOCALINDEX_MAX_FILE_SIZE", raising=False)
    yield
    logger = logging.getLogger("localindex")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Empty directory used as the home root."""
    root = tmp_path / "home"
    root.mkdir()
    return root


@pytest.fixture
def write() -> Callable[..., Path]:
    """Create a file (and its parents) under a root; returns the path."""

    def _write(root: Path, relative: str, content: str | bytes = "") -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def home_policy(home: Path) -> IndexingPolicy:
    """Policy that only crawls *home*."""
    return IndexingPolicy(
        index_home=True,
        index_documentation=False,
        index_repositories=False,
        home_root=str(home),
        documentation_roots=(),
        repository_search_paths=(),
        excluded_paths=("node_modules",),
        max_depth=10,
        max_file_size_bytes=1_000_000,
    )


@pytest.fixture
def make_engine(tmp_path: Path) -> Callable[..., IndexEngine]:
    """Build an engine whose snapshot and config live under tmp_path/data."""

    def _make(policy: IndexingPolicy, **changes) -> IndexEngine:
        if changes:
            policy = dataclasses.replace(policy, **changes)
        data = tmp_path / "data"
        return IndexEngine(
            policy,
            SnapshotStore.in_dir(data),
            config_path=data / "config.yaml",
        )

    return _make
