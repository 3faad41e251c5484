"""Data models for the Sefer HaChinukh library."""

from chinukh.models.download import FailedDownload
from chinukh.models.index_entry import IndexEntry
from chinukh.models.mitzvah import (
    MITZVAH_COUNT,
    Mitzvah,
    MitzvahCollection,
    normalize_paragraphs,
)
from chinukh.models.query_result import CollectionStats, SearchResult

__all__ = [
    "MITZVAH_COUNT",
    "CollectionStats",
    "FailedDownload",
    "IndexEntry",
    "Mitzvah",
    "MitzvahCollection",
    "SearchResult",
    "normalize_paragraphs",
]
