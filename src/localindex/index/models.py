"""Domain models for the file index."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

# token -> paths of the files that produced it
SearchIndex = Mapping[str, frozenset[str]]


class FileType(str, enum.Enum):
    """Semantic category of an indexed file, derived from its extension."""

    CODE = "code"
    DOCUMENTATION = "documentation"
    CONFIGURATION = "configuration"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    OTHER = "other"


class IndexingState(str, enum.Enum):
    IDLE = "idle"
    INDEXING = "indexing"
    COMPLETE = "complete"
    ERROR = "error"


def stable_id(path: str) -> str:
    """Deterministic identifier for *path* (same path → same id across runs)."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"file://{path}"))


@dataclass(frozen=True)
class IndexedFile:
    """One indexed filesystem entry, keyed by its absolute path.

    Attributes:
        id: Stable UUID5 derived from ``path``.
        path: Absolute path; unique within one index.
        name: Final path segment.
        file_type: Extension-derived category.
        size: Size in bytes.
        modified: Last modification time (timezone-aware).
        content: Decoded text for small text-based files, else None.
        keywords: Up to 20 most frequent content tokens.
    """

    id: str
    path: str
    name: str
    file_type: FileType
    size: int
    modified: datetime
    content: str | None = None
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class RepositoryRecord:
    """A discovered version-controlled project root."""

    id: str
    name: str
    path: str
    remote_url: str | None
    discovered_at: datetime


@dataclass(frozen=True)
class IndexStatistics:
    total_files: int = 0
    total_size: int = 0
    last_indexed: datetime | None = None

    @classmethod
    def from_files(
        cls, files: Mapping[str, IndexedFile], last_indexed: datetime | None
    ) -> IndexStatistics:
        return cls(
            total_files=len(files),
            total_size=sum(f.size for f in files.values()),
            last_indexed=last_indexed,
        )


@dataclass(frozen=True)
class IndexGeneration:
    """An immutable, fully built view of the index.

    The engine swaps whole generations; readers holding a reference never
    observe a partially rebuilt search index.
    """

    files: Mapping[str, IndexedFile] = field(default_factory=dict)
    repositories: tuple[RepositoryRecord, ...] = ()
    search_index: SearchIndex = field(default_factory=dict)
    statistics: IndexStatistics = field(default_factory=IndexStatistics)
