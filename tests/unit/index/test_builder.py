"""Tests for inverted index construction."""

from __future__ import annotations

from datetime import datetime, timezone

from localindex.index.builder import build_search_index, file_tokens
from localindex.index.models import FileType, IndexedFile, stable_id

_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _file(path: str, keywords: tuple[str, ...] = (), file_type=FileType.CODE) -> IndexedFile:
    return IndexedFile(
        id=stable_id(path),
        path=path,
        name=path.rsplit("/", 1)[-1],
        file_type=file_type,
        size=10,
        modified=_NOW,
        keywords=keywords,
    )


def test_file_tokens_cover_name_path_and_keywords():
    f = _file("/srv/projects/FileIndexer.swift", keywords=("roadmap", "index"))
    assert file_tokens(f) == {"srv", "projects", "fileindexer", "swift", "roadmap", "index"}


def test_build_maps_tokens_to_paths():
    a = _file("/docs/guide.md", keywords=("install",))
    b = _file("/docs/install.sh")

    index = build_search_index([a, b])

    assert index["install"] == frozenset({a.path, b.path})
    assert index["guide"] == frozenset({a.path})
    assert index["docs"] == frozenset({a.path, b.path})


def test_every_indexed_path_comes_from_the_files():
    files = [_file(f"/data/dir{i}/file{i}.py", keywords=(f"kw{i}x",)) for i in range(5)]
    paths = {f.path for f in files}

    index = build_search_index(files)

    assert index
    for referenced in index.values():
        assert referenced <= paths


def test_build_is_a_full_rebuild():
    old = build_search_index([_file("/old/legacy.py")])
    new = build_search_index([_file("/new/fresh.py")])
    assert "legacy" in old
    assert "legacy" not in new


def test_build_empty():
    assert build_search_index([]) == {}
