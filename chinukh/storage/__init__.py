"""Local JSON storage for the downloaded corpus."""

from chinukh.storage.store import MitzvahStore, mitzvah_filename

__all__ = ["MitzvahStore", "mitzvah_filename"]
