"""Durable index snapshots."""

from localindex.store.snapshot import (
    SNAPSHOT_SCHEMA_VERSION,
    IndexSnapshot,
    SnapshotError,
    SnapshotStore,
)

__all__ = ["IndexSnapshot", "SNAPSHOT_SCHEMA_VERSION", "SnapshotError", "SnapshotStore"]
