"""Policy-bounded, deterministic directory traversal."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from localindex.config import IndexingPolicy

logger = logging.getLogger(__name__)


class CrawlError(RuntimeError):
    """Raised when a walk root exists but cannot be listed."""


@dataclass(frozen=True)
class CrawlEntry:
    """A filesystem entry accepted by the crawler.

    ``depth`` counts path segments below the walked root (direct children
    are depth 1). ``oversized`` marks files above the policy's size limit;
    they are recorded by metadata only.
    """

    path: Path
    relative_path: str
    depth: int
    is_dir: bool
    size: int
    mtime: float
    oversized: bool = False


def is_excluded(relative_path: str, fragments: Iterable[str]) -> bool:
    """True when *relative_path* (with leading '/') contains any fragment."""
    return any(fragment and fragment in relative_path for fragment in fragments)


def _list_dir(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda item: item.name)


def walk(
    root: Path | str,
    policy: IndexingPolicy,
    extra_excludes: Iterable[str] = (),
    *,
    directories_only: bool = False,
    prune: Callable[[CrawlEntry], bool] | None = None,
) -> Iterator[CrawlEntry]:
    """Lazily walk *root* under *policy*.

    Yields files (or, with ``directories_only``, directories) in
    deterministic pre-order. Entries deeper than ``policy.max_depth`` are
    never yielded; hidden and excluded entries are skipped together with
    their subtrees. Symlinks are never followed. When *prune* returns True
    for a directory, the walk does not descend into it.

    A missing root yields nothing; an unreadable root raises ``CrawlError``.
    Unreadable subdirectories are skipped.
    """
    root_path = Path(root).absolute()
    if not root_path.is_dir():
        logger.debug("Walk root does not exist, skipping: %s", root_path)
        return

    excludes = tuple(policy.excluded_paths) + tuple(extra_excludes)
    try:
        top = _list_dir(root_path)
    except OSError as exc:
        raise CrawlError(f"Cannot read {root_path}: {exc}") from exc

    stack: list[tuple[Iterator[os.DirEntry[str]], int]] = [(iter(top), 1)]
    while stack:
        entries, depth = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        if depth > policy.max_depth:
            continue
        if not policy.include_hidden and entry.name.startswith("."):
            continue
        full_path = Path(entry.path)
        try:
            if entry.is_dir(follow_symlinks=False):
                is_dir = True
            elif entry.is_file(follow_symlinks=False):
                is_dir = False
            else:
                continue
        except OSError as exc:
            logger.debug("Cannot stat %s: %s", full_path, exc)
            continue

        # Directories are matched with a trailing '/' so "/build/" prunes a
        # build directory without touching build.gradle.
        relative = "/" + full_path.relative_to(root_path).as_posix()
        if is_excluded(relative + "/" if is_dir else relative, excludes):
            logger.debug("Excluded: %s", full_path)
            continue

        try:
            stat = entry.stat(follow_symlinks=False)
        except OSError as exc:
            logger.debug("Cannot stat %s: %s", full_path, exc)
            continue

        record = CrawlEntry(
            path=full_path,
            relative_path=relative[1:],
            depth=depth,
            is_dir=is_dir,
            size=0 if is_dir else stat.st_size,
            mtime=stat.st_mtime,
            oversized=not is_dir and stat.st_size > policy.max_file_size_bytes,
        )

        if not is_dir:
            if not directories_only:
                yield record
            continue

        if directories_only:
            yield record
        if depth >= policy.max_depth:
            continue
        if prune is not None and prune(record):
            continue
        try:
            children = _list_dir(full_path)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", full_path, exc)
            continue
        stack.append((iter(children), depth + 1))
