"""Sefer HaChinukh: download, store and search the 613 mitzvot."""

__version__ = "1.0.0"
