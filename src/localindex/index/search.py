"""Exact + partial token match scoring over the inverted index.

score(path) = exact hits + partial hits, summed over query tokens, where a
partial hit is an index token that contains, or is contained in, the query
token (the exact token itself is not counted twice). Results are ordered by
descending score, then ascending path.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping

from localindex.index.models import IndexedFile, SearchIndex
from localindex.index.tokenizer import tokenize

DEFAULT_LIMIT = 50


def score_paths(index: SearchIndex, query: str) -> Counter[str]:
    """Accumulate per-path scores for *query* against *index*."""
    scores: Counter[str] = Counter()
    query_tokens = tokenize(query)
    if not query_tokens:
        return scores

    index_tokens = sorted(index)
    for word in query_tokens:
        for path in index.get(word, ()):
            scores[path] += 1
        for token in index_tokens:
            if token == word:
                continue
            if word in token or token in word:
                for path in index[token]:
                    scores[path] += 1
    return scores


def search(
    index: SearchIndex,
    files: Mapping[str, IndexedFile],
    query: str,
    limit: int = DEFAULT_LIMIT,
) -> list[IndexedFile]:
    """Return at most *limit* files ranked for *query*.

    Empty queries, non-positive limits and queries without matches return
    an empty list.
    """
    if limit < 1:
        return []
    scores = score_paths(index, query)
    ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    results: list[IndexedFile] = []
    for path, _ in ranked:
        file = files.get(path)
        if file is None:
            continue
        results.append(file)
        if len(results) >= limit:
            break
    return results
