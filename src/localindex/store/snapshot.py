"""JSON snapshot store for the file index.

The snapshot is one JSON document::

    {
      "schema_version": 1,
      "last_updated": "2026-01-01T00:00:00+00:00",
      "statistics": {"total_files": ..., "total_size": ..., "last_indexed": ...},
      "files": [...],
      "repositories": [...]
    }

Writes go to a temporary file in the same directory followed by
``os.replace``, so readers see either the old or the new snapshot.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from localindex.index.models import FileType, IndexedFile, IndexStatistics, RepositoryRecord

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA_VERSION = 1
SNAPSHOT_FILENAME = "file_index.json"


class SnapshotError(Exception):
    """Raised when a snapshot cannot be written or parsed."""


@dataclass(frozen=True)
class IndexSnapshot:
    files: tuple[IndexedFile, ...]
    repositories: tuple[RepositoryRecord, ...]
    statistics: IndexStatistics
    last_updated: datetime


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: Any) -> datetime:
    """Parse an ISO timestamp; offset-naive values are rejected."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp without UTC offset: {value!r}")
    return parsed


def _parse_optional_dt(value: Any) -> datetime | None:
    return None if value is None else _parse_dt(value)


def _optional_str(value: Any, field: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"'{field}' must be a string or null, got {value!r}")
    return value


def _file_to_dict(file: IndexedFile) -> dict[str, Any]:
    return {
        "id": file.id,
        "path": file.path,
        "name": file.name,
        "type": file.file_type.value,
        "size": file.size,
        "modified": _dt(file.modified),
        "content": file.content,
        "keywords": list(file.keywords),
    }


def _file_from_dict(data: dict[str, Any]) -> IndexedFile:
    return IndexedFile(
        id=str(data["id"]),
        path=str(data["path"]),
        name=str(data["name"]),
        file_type=FileType(data["type"]),
        size=int(data["size"]),
        modified=_parse_dt(data["modified"]),
        content=_optional_str(data.get("content"), "content"),
        keywords=tuple(str(k) for k in data.get("keywords", [])),
    )


def _repo_to_dict(repo: RepositoryRecord) -> dict[str, Any]:
    return {
        "id": repo.id,
        "name": repo.name,
        "path": repo.path,
        "remote_url": repo.remote_url,
        "discovered_at": _dt(repo.discovered_at),
    }


def _repo_from_dict(data: dict[str, Any]) -> RepositoryRecord:
    return RepositoryRecord(
        id=str(data["id"]),
        name=str(data["name"]),
        path=str(data["path"]),
        remote_url=_optional_str(data.get("remote_url"), "remote_url"),
        discovered_at=_parse_dt(data["discovered_at"]),
    )


def encode_snapshot(snapshot: IndexSnapshot) -> dict[str, Any]:
    stats = snapshot.statistics
    return {
        "schema_version": SNAPSHOT_SCHEMA_VERSION,
        "last_updated": _dt(snapshot.last_updated),
        "statistics": {
            "total_files": stats.total_files,
            "total_size": stats.total_size,
            "last_indexed": _dt(stats.last_indexed),
        },
        "files": [_file_to_dict(f) for f in snapshot.files],
        "repositories": [_repo_to_dict(r) for r in snapshot.repositories],
    }


def decode_snapshot(data: Any) -> IndexSnapshot:
    """Build an *IndexSnapshot* from parsed JSON.

    Raises:
        SnapshotError: Wrong schema version or malformed content.
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot root must be a JSON object")
    version = data.get("schema_version")
    if version != SNAPSHOT_SCHEMA_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot schema version {version!r} "
            f"(expected {SNAPSHOT_SCHEMA_VERSION})"
        )
    try:
        stats = data["statistics"]
        return IndexSnapshot(
            files=tuple(_file_from_dict(f) for f in data["files"]),
            repositories=tuple(_repo_from_dict(r) for r in data["repositories"]),
            statistics=IndexStatistics(
                total_files=int(stats["total_files"]),
                total_size=int(stats["total_size"]),
                last_indexed=_parse_optional_dt(stats.get("last_indexed")),
            ),
            last_updated=_parse_dt(data["last_updated"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SnapshotError(f"Malformed snapshot: {exc}") from exc


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SnapshotStore:
    """Reads and writes the index snapshot at a fixed path."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @classmethod
    def in_dir(cls, directory: Path) -> SnapshotStore:
        return cls(directory / SNAPSHOT_FILENAME)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> IndexSnapshot | None:
        """Return the stored snapshot, or None when no snapshot exists.

        Raises:
            SnapshotError: The file exists but cannot be read or parsed.
        """
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {exc}") from exc
        return decode_snapshot(data)

    def save(self, snapshot: IndexSnapshot) -> None:
        """Atomically replace the snapshot file.

        Raises:
            SnapshotError: The directory or file cannot be written.
        """
        payload = json.dumps(encode_snapshot(snapshot), ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise SnapshotError(f"Cannot write snapshot {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.info("Saved index snapshot to %s (%d files)", self.path, len(snapshot.files))
