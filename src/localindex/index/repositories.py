"""Git repository discovery.

Only the presence of the ``.git`` marker directory and the plain-text
``.git/config`` file are read; no git object parsing, no subprocess calls.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from localindex.config import IndexingPolicy, expand_root
from localindex.index.crawler import walk
from localindex.index.models import RepositoryRecord, stable_id

logger = logging.getLogger(__name__)

REPOSITORY_MARKER = ".git"

# Added to the exclusions when a discovered repository is content-indexed.
REPOSITORY_EXCLUDES: tuple[str, ...] = ("/.git/", "/node_modules/", "/build/", "/.build/")

_SECTION_RE = re.compile(r"^\s*\[\s*([^\]]+?)\s*\]\s*$")
_REMOTE_RE = re.compile(r'^remote\s+"([^"]+)"$')
_URL_RE = re.compile(r"^\s*url\s*=\s*(.+?)\s*$")


def is_repository(directory: Path) -> bool:
    return (directory / REPOSITORY_MARKER).is_dir()


def read_remote_url(repo_root: Path) -> str | None:
    """Best-effort remote URL from ``.git/config``.

    Prefers the ``origin`` remote, otherwise the first remote with a URL.
    Missing or unreadable config yields None.
    """
    config_path = repo_root / REPOSITORY_MARKER / "config"
    try:
        text = config_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None

    remotes: dict[str, str] = {}
    current: str | None = None
    for line in text.splitlines():
        section = _SECTION_RE.match(line)
        if section:
            remote = _REMOTE_RE.match(section.group(1))
            current = remote.group(1) if remote else None
            continue
        if current is None or current in remotes:
            continue
        url = _URL_RE.match(line)
        if url:
            remotes[current] = url.group(1)

    if "origin" in remotes:
        return remotes["origin"]
    return next(iter(remotes.values()), None)


def _make_record(repo_root: Path) -> RepositoryRecord:
    return RepositoryRecord(
        id=stable_id(str(repo_root)),
        name=repo_root.name,
        path=str(repo_root),
        remote_url=read_remote_url(repo_root),
        discovered_at=datetime.now(timezone.utc),
    )


def find_repositories(
    search_roots: Iterable[str | Path], policy: IndexingPolicy
) -> list[RepositoryRecord]:
    """Return one record per top-level repository under *search_roots*.

    The walk stops descending at the first directory holding the marker, so
    repositories nested inside another repository are not reported. Each
    path is recorded at most once even when search roots overlap.
    """
    records: list[RepositoryRecord] = []
    seen: set[str] = set()

    def _add(repo_root: Path) -> None:
        key = str(repo_root)
        if key in seen:
            return
        seen.add(key)
        records.append(_make_record(repo_root))
        logger.debug("Found repository %s", repo_root)

    for raw_root in search_roots:
        root = expand_root(str(raw_root))
        if not root.is_dir():
            continue
        if is_repository(root):
            _add(root)
            continue
        for entry in walk(
            root,
            policy,
            directories_only=True,
            prune=lambda e: is_repository(e.path),
        ):
            if is_repository(entry.path):
                _add(entry.path)

    return records
