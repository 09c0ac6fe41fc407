"""Inverted index construction (full rebuild only)."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from pathlib import PurePath

from localindex.index.models import IndexedFile, SearchIndex
from localindex.index.tokenizer import tokenize


def file_tokens(file: IndexedFile) -> set[str]:
    """All tokens that point at *file*: name, path segments, keywords."""
    tokens = set(tokenize(file.name))
    for segment in PurePath(file.path).parts:
        tokens.update(tokenize(segment))
    for keyword in file.keywords:
        tokens.update(tokenize(keyword))
    return tokens


def build_search_index(files: Iterable[IndexedFile]) -> SearchIndex:
    """Build a fresh token → paths mapping from *files*.

    Every path in the result comes from *files*; nothing from a previous
    index survives.
    """
    index: dict[str, set[str]] = defaultdict(set)
    for file in files:
        for token in file_tokens(file):
            index[token].add(file.path)
    return {token: frozenset(paths) for token, paths in index.items()}
