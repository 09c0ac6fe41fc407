"""Indexing orchestrator.

Pipeline (one run at a time, on a background thread):
  home root → documentation roots → repository discovery + repository
  content → search index rebuild → snapshot write

The engine owns all index state. A run builds a complete new
``IndexGeneration`` off to the side and swaps it in under the lock, so
``search`` and the other readers always see the last completed build.
A cancelled or failed crawl commits nothing.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import MappingProxyType

from localindex.config import IndexingPolicy, expand_root, save_policy
from localindex.index.builder import build_search_index
from localindex.index.classifier import classify
from localindex.index.crawler import CrawlEntry, CrawlError, walk
from localindex.index.extractor import extract, should_extract
from localindex.index.models import (
    FileType,
    IndexedFile,
    IndexGeneration,
    IndexingState,
    IndexStatistics,
    RepositoryRecord,
    stable_id,
)
from localindex.index.repositories import REPOSITORY_EXCLUDES, find_repositories
from localindex.index.search import DEFAULT_LIMIT, search
from localindex.store.snapshot import IndexSnapshot, SnapshotError, SnapshotStore

logger = logging.getLogger(__name__)

_PROGRESS_EVERY = 100

_Phase = Callable[
    [IndexingPolicy, dict[str, IndexedFile], list[RepositoryRecord]], None
]


class IndexingCancelled(Exception):
    """Raised inside a run when ``cancel()`` was requested."""


def index_entry(entry: CrawlEntry, policy: IndexingPolicy) -> IndexedFile:
    """Classify *entry* and, when allowed, extract its content."""
    file_type, is_text = classify(entry.path)
    content: str | None = None
    keywords: tuple[str, ...] = ()
    if not entry.oversized and should_extract(is_text, entry.size, policy.max_file_size_bytes):
        extracted = extract(entry.path, entry.size)
        if extracted is not None:
            content = extracted.text
            keywords = extracted.keywords
    path = str(entry.path)
    return IndexedFile(
        id=stable_id(path),
        path=path,
        name=entry.path.name,
        file_type=file_type,
        size=entry.size,
        modified=datetime.fromtimestamp(entry.mtime, tz=timezone.utc),
        content=content,
        keywords=keywords,
    )


def _freeze(
    files: dict[str, IndexedFile],
    repositories: Iterable[RepositoryRecord],
    statistics: IndexStatistics,
) -> IndexGeneration:
    return IndexGeneration(
        files=MappingProxyType(files),
        repositories=tuple(repositories),
        search_index=MappingProxyType(dict(build_search_index(files.values()))),
        statistics=statistics,
    )


class IndexEngine:
    """Owns the file index and runs the indexing pipeline.

    Constructed once by the application and handed to the presentation
    layer; there is no module-level instance.
    """

    def __init__(
        self,
        policy: IndexingPolicy,
        store: SnapshotStore,
        *,
        config_path: Path | None = None,
    ) -> None:
        """Create the engine and synchronously restore the last snapshot.

        Args:
            policy: Initial indexing policy.
            store: Snapshot store used for restore and after every run.
            config_path: Where ``update_policy`` persists changes (default
                config location when None).
        """
        self._policy = policy
        self._store = store
        self._config_path = config_path
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None
        self._state = IndexingState.IDLE
        self._progress = 0.0
        self._operation = ""
        self._error: Exception | None = None
        self._generation = self._restore()

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def policy(self) -> IndexingPolicy:
        with self._lock:
            return self._policy

    @property
    def state(self) -> IndexingState:
        with self._lock:
            return self._state

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    @property
    def current_operation(self) -> str:
        with self._lock:
            return self._operation

    @property
    def error(self) -> Exception | None:
        """Exception that ended the last run in the error state, if any."""
        with self._lock:
            return self._error

    @property
    def is_indexing(self) -> bool:
        return self.state is IndexingState.INDEXING

    def _current(self) -> IndexGeneration:
        with self._lock:
            return self._generation

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[IndexedFile]:
        generation = self._current()
        return search(generation.search_index, generation.files, query, limit)

    def files_by_type(self, file_type: FileType) -> list[IndexedFile]:
        generation = self._current()
        return sorted(
            (f for f in generation.files.values() if f.file_type is file_type),
            key=lambda f: f.path,
        )

    def recent_files(self, limit: int = 20) -> list[IndexedFile]:
        if limit < 1:
            return []
        generation = self._current()
        ordered = sorted(generation.files.values(), key=lambda f: f.path)
        ordered.sort(key=lambda f: f.modified, reverse=True)
        return ordered[:limit]

    def statistics(self) -> IndexStatistics:
        return self._current().statistics

    def repositories(self) -> list[RepositoryRecord]:
        return list(self._current().repositories)

    def get_file(self, path: str) -> IndexedFile | None:
        return self._current().files.get(path)

    def is_stale(self, now: datetime | None = None) -> bool:
        """True when the index was never built or is older than the reindex interval."""
        last = self.statistics().last_indexed
        if last is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now - last >= timedelta(seconds=self.policy.reindex_interval_seconds)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_policy(self, policy: IndexingPolicy) -> None:
        """Replace and persist the policy. Runs already in progress keep theirs."""
        save_policy(policy, self._config_path)
        with self._lock:
            self._policy = policy

    def remove_file(self, path: str) -> bool:
        """Drop *path* from the index and persist the result.

        Returns False when the path is not indexed or a run is in progress
        (the run's own result would replace the change).

        Raises:
            SnapshotError: The updated snapshot cannot be written.
        """
        with self._lock:
            if self._state is IndexingState.INDEXING:
                return False
            current = self._generation
            if path not in current.files:
                return False
            files = {p: f for p, f in current.files.items() if p != path}
            statistics = IndexStatistics.from_files(files, current.statistics.last_indexed)
            generation = _freeze(files, current.repositories, statistics)
            self._generation = generation
        self._store.save(self._snapshot_of(generation))
        logger.info("Removed %s from the index", path)
        return True

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def start_indexing(self, wait: bool = False) -> None:
        """Begin a run unless one is already in progress (then no-op)."""
        with self._lock:
            if self._state is IndexingState.INDEXING:
                logger.debug("Indexing already in progress, ignoring start request")
                return
            self._state = IndexingState.INDEXING
            self._progress = 0.0
            self._operation = "Starting..."
            self._error = None
            self._cancel.clear()
            policy = self._policy
            thread = threading.Thread(
                target=self._run, args=(policy,), name="localindex-indexer", daemon=True
            )
            self._thread = thread
        thread.start()
        if wait:
            thread.join()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the current run ends. Returns False on timeout."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def cancel(self) -> None:
        """Ask the current run to stop at the next file boundary."""
        self._cancel.set()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self, policy: IndexingPolicy) -> None:
        logger.info("Indexing started")
        try:
            generation = self._build(policy)
        except IndexingCancelled:
            with self._lock:
                self._state = IndexingState.IDLE
                self._operation = "Cancelled"
            logger.info("Indexing cancelled; previous index kept")
            return
        except CrawlError as exc:
            self._fail(exc)
            return
        except Exception as exc:  # worker thread boundary: never leave state stuck
            logger.exception("Indexing failed")
            self._fail(exc)
            return

        self._set_progress(self._progress_at_save(policy), "Saving index...")
        with self._lock:
            self._generation = generation
        try:
            self._store.save(self._snapshot_of(generation))
        except SnapshotError as exc:
            self._fail(exc)
            return

        with self._lock:
            self._state = IndexingState.COMPLETE
            self._progress = 1.0
            self._operation = "Complete"
        logger.info("Indexing complete: %d files indexed", generation.statistics.total_files)

    def _phases(self, policy: IndexingPolicy) -> list[tuple[str, _Phase]]:
        """Enabled crawl phases, in their fixed order."""
        phases: list[tuple[str, _Phase]] = []
        if policy.index_home:
            phases.append(("Indexing home directory...", self._index_home))
        if policy.index_documentation:
            phases.append(("Indexing documentation...", self._index_documentation))
        if policy.index_repositories:
            phases.append(("Indexing repositories...", self._index_repositories))
        return phases

    def _progress_at_save(self, policy: IndexingPolicy) -> float:
        steps = len(self._phases(policy)) + 2
        return (steps - 1) / steps

    def _build(self, policy: IndexingPolicy) -> IndexGeneration:
        files: dict[str, IndexedFile] = {}
        repositories: list[RepositoryRecord] = []
        phases = self._phases(policy)
        steps = len(phases) + 2  # crawl phases, build, save

        for step, (label, phase) in enumerate(phases):
            self._check_cancelled()
            self._set_progress(step / steps, label)
            phase(policy, files, repositories)

        self._check_cancelled()
        self._set_progress(len(phases) / steps, "Building search index...")
        statistics = IndexStatistics.from_files(files, datetime.now(timezone.utc))
        return _freeze(files, repositories, statistics)

    def _index_home(
        self,
        policy: IndexingPolicy,
        files: dict[str, IndexedFile],
        repositories: list[RepositoryRecord],
    ) -> None:
        self._index_root(expand_root(policy.home_root), policy, files)

    def _index_documentation(
        self,
        policy: IndexingPolicy,
        files: dict[str, IndexedFile],
        repositories: list[RepositoryRecord],
    ) -> None:
        for root in policy.documentation_roots:
            self._index_root(expand_root(root), policy, files)

    def _index_repositories(
        self,
        policy: IndexingPolicy,
        files: dict[str, IndexedFile],
        repositories: list[RepositoryRecord],
    ) -> None:
        found = find_repositories(policy.repository_search_paths, policy)
        repositories.extend(found)
        for repo in found:
            self._check_cancelled()
            self._set_operation(f"Indexing repository {repo.name}...")
            self._index_root(Path(repo.path), policy, files, REPOSITORY_EXCLUDES)

    def _index_root(
        self,
        root: Path,
        policy: IndexingPolicy,
        files: dict[str, IndexedFile],
        extra_excludes: Iterable[str] = (),
    ) -> None:
        for entry in walk(root, policy, extra_excludes):
            self._check_cancelled()
            try:
                indexed = index_entry(entry, policy)
            except (OSError, ValueError) as exc:
                logger.warning("Skipping %s: %s", entry.path, exc)
                continue
            files[indexed.path] = indexed
            if len(files) % _PROGRESS_EVERY == 0:
                self._set_operation(f"Indexed {len(files)} files...")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_cancelled(self) -> None:
        if self._cancel.is_set():
            raise IndexingCancelled()

    def _set_progress(self, fraction: float, operation: str) -> None:
        with self._lock:
            self._progress = max(self._progress, min(fraction, 1.0))
            self._operation = operation

    def _set_operation(self, operation: str) -> None:
        with self._lock:
            self._operation = operation

    def _fail(self, exc: Exception) -> None:
        logger.error("Indexing failed: %s", exc)
        with self._lock:
            self._state = IndexingState.ERROR
            self._error = exc
            self._operation = f"Error: {exc}"

    @staticmethod
    def _snapshot_of(generation: IndexGeneration) -> IndexSnapshot:
        return IndexSnapshot(
            files=tuple(generation.files.values()),
            repositories=generation.repositories,
            statistics=generation.statistics,
            last_updated=datetime.now(timezone.utc),
        )

    def _restore(self) -> IndexGeneration:
        """Load the stored snapshot; any failure starts from an empty index."""
        try:
            snapshot = self._store.load()
        except SnapshotError as exc:
            logger.warning("Ignoring unreadable snapshot: %s", exc)
            return IndexGeneration()
        if snapshot is None:
            return IndexGeneration()
        files = {f.path: f for f in snapshot.files}
        logger.info("Loaded persisted index: %d files", len(files))
        return _freeze(files, snapshot.repositories, snapshot.statistics)
