"""Tests for content extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from localindex.index.extractor import (
    CONTENT_SIZE_CEILING,
    ExtractedContent,
    extract,
    should_extract,
)


def test_extract_text_file(tmp_path: Path):
    path = tmp_path / "notes.md"
    path.write_text("Roadmap roadmap planning for the indexer", encoding="utf-8")

    result = extract(path, path.stat().st_size)

    assert isinstance(result, ExtractedContent)
    assert result.text == "Roadmap roadmap planning for the indexer"
    assert result.keywords[0] == "roadmap"
    assert set(result.keywords) == {"roadmap", "planning", "for", "the", "indexer"}


def test_extract_invalid_utf8_returns_none(tmp_path: Path):
    path = tmp_path / "latin1.txt"
    path.write_bytes("caf\xe9 cr\xe8me".encode("latin-1"))
    assert extract(path, path.stat().st_size) is None


def test_extract_missing_file_returns_none(tmp_path: Path):
    assert extract(tmp_path / "gone.txt", 10) is None


def test_extract_at_ceiling_returns_none(tmp_path: Path):
    path = tmp_path / "big.txt"
    path.write_text("small", encoding="utf-8")
    assert extract(path, CONTENT_SIZE_CEILING) is None


def test_extract_empty_file(tmp_path: Path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    assert extract(path, 0) == ExtractedContent(text="", keywords=())


@pytest.mark.parametrize(
    ("is_text", "size", "policy_limit", "expected"),
    [
        (True, 40, 1_000_000, True),
        (False, 40, 1_000_000, False),
        (True, 2_000, 1_000, False),
        (True, 1_000, 1_000, True),
        (True, CONTENT_SIZE_CEILING, 10_000_000, False),
        (True, CONTENT_SIZE_CEILING - 1, 10_000_000, True),
    ],
)
def test_should_extract_applies_both_limits(is_text, size, policy_limit, expected):
    assert should_extract(is_text, size, policy_limit) is expected
