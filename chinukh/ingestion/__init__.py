"""Corpus ingestion: downloading and indexing."""

from chinukh.ingestion.downloader import DownloadError, MitzvahDownloader
from chinukh.ingestion.indexer import build_index, extract_preview

__all__ = ["DownloadError", "MitzvahDownloader", "build_index", "extract_preview"]
