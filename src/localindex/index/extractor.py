"""Content extraction for small text-based files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from localindex.index.tokenizer import extract_keywords

logger = logging.getLogger(__name__)

# Safety ceiling, independent of the configurable policy limit.
CONTENT_SIZE_CEILING = 1_000_000


@dataclass(frozen=True)
class ExtractedContent:
    text: str
    keywords: tuple[str, ...]


def should_extract(is_text_based: bool, size: int, max_file_size_bytes: int) -> bool:
    """Both the fixed ceiling and the policy limit must allow extraction."""
    return is_text_based and size < CONTENT_SIZE_CEILING and size <= max_file_size_bytes


def extract(path: Path | str, size: int) -> ExtractedContent | None:
    """Read *path* as UTF-8 and compute its keyword summary.

    Returns None when the file is over the ceiling, cannot be read, or is
    not valid UTF-8. The caller still indexes the file by name and path.
    """
    if size >= CONTENT_SIZE_CEILING:
        return None
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Not valid UTF-8, indexing by name only: %s", path)
        return None
    return ExtractedContent(text=text, keywords=extract_keywords(text))
