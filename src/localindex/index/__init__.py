"""Indexing pipeline — tokenizer, classifier, extractor, crawler, index, search."""

from localindex.index.builder import build_search_index
from localindex.index.classifier import classify
from localindex.index.crawler import CrawlEntry, CrawlError, walk
from localindex.index.extractor import ExtractedContent, extract
from localindex.index.models import (
    FileType,
    IndexedFile,
    IndexGeneration,
    IndexingState,
    IndexStatistics,
    RepositoryRecord,
    SearchIndex,
)
from localindex.index.repositories import find_repositories, read_remote_url
from localindex.index.search import search
from localindex.index.tokenizer import extract_keywords, tokenize

__all__ = [
    "CrawlEntry",
    "CrawlError",
    "ExtractedContent",
    "FileType",
    "IndexGeneration",
    "IndexStatistics",
    "IndexedFile",
    "IndexingState",
    "RepositoryRecord",
    "SearchIndex",
    "build_search_index",
    "classify",
    "extract",
    "extract_keywords",
    "find_repositories",
    "read_remote_url",
    "search",
    "tokenize",
    "walk",
]
