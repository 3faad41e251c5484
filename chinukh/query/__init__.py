"""Querying the loaded corpus."""

from chinukh.query.engine import LANGUAGES, MitzvahLibrary, extract_matching_text

__all__ = ["LANGUAGES", "MitzvahLibrary", "extract_matching_text"]
