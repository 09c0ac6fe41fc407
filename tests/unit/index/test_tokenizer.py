"""Tests for the tokenizer and keyword extraction."""

from __future__ import annotations

from localindex.index.tokenizer import extract_keywords, tokenize


def test_tokenize_lowercases_and_splits_on_punctuation():
    assert tokenize("Hello, World-Wide web!") == ["hello", "world", "wide", "web"]


def test_tokenize_drops_short_tokens():
    assert tokenize("a an the of ox fox") == ["the", "fox"]


def test_tokenize_underscore_is_a_separator():
    assert tokenize("file_index_manager") == ["file", "index", "manager"]


def test_tokenize_keeps_digits():
    assert tokenize("v2 build 42x 2024") == ["build", "42x", "2024"]


def test_tokenize_unicode_letters():
    assert tokenize("Café naïve") == ["café", "naïve"]


def test_tokenize_empty_and_separator_only():
    assert tokenize("") == []
    assert tokenize("--- /// ...") == []


def test_tokenize_preserves_order_and_duplicates():
    assert tokenize("beta alpha beta") == ["beta", "alpha", "beta"]


def test_tokenize_camel_case_is_one_token():
    assert tokenize("AuthenticationService.swift") == ["authenticationservice", "swift"]


def test_extract_keywords_orders_by_frequency():
    text = "zeta alpha alpha beta beta beta"
    assert extract_keywords(text) == ("beta", "alpha", "zeta")


def test_extract_keywords_ties_keep_first_occurrence():
    text = "delta gamma beta alpha gamma delta"
    assert extract_keywords(text) == ("delta", "gamma", "beta", "alpha")


def test_extract_keywords_limit():
    words = " ".join(f"word{i:02d}" for i in range(30))
    keywords = extract_keywords(words)
    assert len(keywords) == 20
    assert keywords[0] == "word00"
    assert extract_keywords(words, limit=3) == ("word00", "word01", "word02")


def test_extract_keywords_empty_text():
    assert extract_keywords("") == ()
