"""Tests for extension-based classification."""

from __future__ import annotations

from pathlib import Path

import pytest

from localindex.index.classifier import classify, extension_of
from localindex.index.models import FileType


@pytest.mark.parametrize(
    ("name", "expected_type", "text"),
    [
        ("main.swift", FileType.CODE, True),
        ("app.py", FileType.CODE, True),
        ("header.H", FileType.CODE, True),
        ("README.md", FileType.DOCUMENTATION, True),
        ("notes.txt", FileType.DOCUMENTATION, True),
        ("manual.pdf", FileType.DOCUMENTATION, False),
        ("letter.rtf", FileType.DOCUMENTATION, False),
        ("settings.json", FileType.CONFIGURATION, True),
        ("Info.plist", FileType.CONFIGURATION, True),
        ("pyproject.toml", FileType.CONFIGURATION, True),
        ("photo.PNG", FileType.IMAGE, False),
        ("clip.mov", FileType.VIDEO, False),
        ("song.flac", FileType.AUDIO, False),
    ],
)
def test_classify_known_extensions(name: str, expected_type: FileType, text: bool):
    assert classify(name) == (expected_type, text)


@pytest.mark.parametrize(
    "name",
    ["archive.tar.gz", "Makefile", "binary.exe", ".bashrc", "weird.", "data.xyz123", ""],
)
def test_classify_unknown_is_other_and_not_text(name: str):
    assert classify(name) == (FileType.OTHER, False)


def test_classify_accepts_path_objects():
    assert classify(Path("/tmp/project/src/lib.rs")) == (FileType.CODE, True)


def test_classify_uses_last_suffix_only():
    assert classify("backup.md.png")[0] is FileType.IMAGE


def test_extension_of_lowercases():
    assert extension_of("A/B/Photo.JPEG") == "jpeg"
    assert extension_of("noext") == ""
