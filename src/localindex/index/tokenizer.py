"""Tokenizer shared by filenames, path segments, file content and queries."""

from __future__ import annotations

import re
from collections import Counter

_SPLIT_RE = re.compile(r"[\W_]+")
_MIN_TOKEN_LENGTH = 3
KEYWORD_LIMIT = 20


def tokenize(text: str) -> list[str]:
    """Lower-case *text* and split it on any non-alphanumeric character.

    Tokens shorter than three characters are dropped. Order and duplicates
    are preserved.
    """
    return [t for t in _SPLIT_RE.split(text.lower()) if len(t) >= _MIN_TOKEN_LENGTH]


def extract_keywords(text: str, limit: int = KEYWORD_LIMIT) -> tuple[str, ...]:
    """Return the *limit* most frequent tokens of *text*.

    Ties keep first-occurrence order (``Counter`` preserves insertion order
    and ``sorted`` is stable).
    """
    counts = Counter(tokenize(text))
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(token for token, _ in ranked[:limit])
