"""Tests for the JSON snapshot store."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from localindex.index.models import (
    FileType,
    IndexedFile,
    IndexStatistics,
    RepositoryRecord,
    stable_id,
)
from localindex.store.snapshot import (
    SNAPSHOT_SCHEMA_VERSION,
    IndexSnapshot,
    SnapshotError,
    SnapshotStore,
    encode_snapshot,
)

_WHEN = datetime(2026, 3, 14, 9, 26, 53, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _snapshot() -> IndexSnapshot:
    files = (
        IndexedFile(
            id=stable_id("/home/me/notes.md"),
            path="/home/me/notes.md",
            name="notes.md",
            file_type=FileType.DOCUMENTATION,
            size=42,
            modified=_WHEN,
            content="Café notes — résumé",
            keywords=("café", "notes", "résumé"),
        ),
        IndexedFile(
            id=stable_id("/home/me/photo.png"),
            path="/home/me/photo.png",
            name="photo.png",
            file_type=FileType.IMAGE,
            size=2048,
            modified=_WHEN,
        ),
    )
    repos = (
        RepositoryRecord(
            id=stable_id("/home/me/Projects/app"),
            name="app",
            path="/home/me/Projects/app",
            remote_url="git@example.com:me/app.git",
            discovered_at=_WHEN,
        ),
        RepositoryRecord(
            id=stable_id("/home/me/Projects/lib"),
            name="lib",
            path="/home/me/Projects/lib",
            remote_url=None,
            discovered_at=_WHEN,
        ),
    )
    return IndexSnapshot(
        files=files,
        repositories=repos,
        statistics=IndexStatistics(total_files=2, total_size=2090, last_indexed=_WHEN),
        last_updated=_WHEN,
    )


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    store = SnapshotStore.in_dir(tmp_path / "data")
    original = _snapshot()

    store.save(original)

    assert store.exists()
    assert store.load() == original


def test_save_writes_schema_version(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "index.json")
    store.save(_snapshot())
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data["schema_version"] == SNAPSHOT_SCHEMA_VERSION
    assert data["files"][0]["type"] == "documentation"


def test_save_replaces_previous_snapshot(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "index.json")
    store.save(_snapshot())
    empty = IndexSnapshot(files=(), repositories=(), statistics=IndexStatistics(), last_updated=_WHEN)

    store.save(empty)

    assert store.load() == empty
    assert [p.name for p in tmp_path.iterdir()] == ["index.json"]


# ---------------------------------------------------------------------------
# Load failures
# ---------------------------------------------------------------------------


def test_load_missing_returns_none(tmp_path: Path) -> None:
    assert SnapshotStore(tmp_path / "absent.json").load() is None


def test_load_corrupt_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "index.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError, match="Cannot read snapshot"):
        SnapshotStore(path).load()


def test_load_wrong_schema_version_raises(tmp_path: Path) -> None:
    path = tmp_path / "index.json"
    data = encode_snapshot(_snapshot())
    data["schema_version"] = SNAPSHOT_SCHEMA_VERSION + 1
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(SnapshotError, match="schema version"):
        SnapshotStore(path).load()


def test_load_malformed_entry_raises(tmp_path: Path) -> None:
    path = tmp_path / "index.json"
    data = encode_snapshot(_snapshot())
    data["files"][0]["type"] = "spreadsheet"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(SnapshotError, match="Malformed"):
        SnapshotStore(path).load()


def test_load_non_object_raises(tmp_path: Path) -> None:
    path = tmp_path / "index.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(SnapshotError):
        SnapshotStore(path).load()


# ---------------------------------------------------------------------------
# Write failures
# ---------------------------------------------------------------------------


def test_save_unwritable_directory_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "data"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(SnapshotError, match="Cannot write snapshot"):
        SnapshotStore.in_dir(blocker).save(_snapshot())


def test_failed_replace_keeps_old_snapshot_and_no_temp_file(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "index.json")
    store.save(_snapshot())
    before = store.path.read_bytes()

    with patch("localindex.store.snapshot.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(SnapshotError, match="disk full"):
            store.save(
                IndexSnapshot(
                    files=(), repositories=(), statistics=IndexStatistics(), last_updated=_WHEN
                )
            )

    assert store.path.read_bytes() == before
    assert [p.name for p in tmp_path.iterdir()] == ["index.json"]


@pytest.mark.parametrize(
    ("section", "field"),
    [
        ("statistics", "last_indexed"),
        ("files", "modified"),
        ("repositories", "discovered_at"),
        (None, "last_updated"),
    ],
)
def test_load_naive_timestamp_raises(tmp_path: Path, section, field) -> None:
    path = tmp_path / "index.json"
    data = encode_snapshot(_snapshot())
    if section is None:
        target = data
    elif section == "statistics":
        target = data["statistics"]
    else:
        target = data[section][0]
    target[field] = "2026-01-01T00:00:00"
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(SnapshotError, match="UTC offset"):
        SnapshotStore(path).load()


@pytest.mark.parametrize(
    ("section", "field"),
    [("files", "content"), ("repositories", "remote_url")],
)
def test_load_non_string_optional_field_raises(tmp_path: Path, section, field) -> None:
    path = tmp_path / "index.json"
    data = encode_snapshot(_snapshot())
    data[section][0][field] = 12345
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(SnapshotError, match=field):
        SnapshotStore(path).load()
