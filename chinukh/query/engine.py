"""In-memory lookup, search and statistics over a loaded collection."""

import logging
import random

from chinukh.models import (
    MITZVAH_COUNT,
    CollectionStats,
    IndexEntry,
    Mitzvah,
    MitzvahCollection,
    SearchResult,
)
from chinukh.storage import MitzvahStore

logger = logging.getLogger(__name__)

LANGUAGES: tuple[str, ...] = ("english", "hebrew", "both")

ELLIPSIS = "..."


def extract_matching_text(
    text: str, term: str, context_length: int = 100, case_sensitive: bool = False
) -> str:
    """Cut a window of text around the first occurrence of ``term``.

    The window extends ``context_length // 2`` characters on each side of
    the match and is marked with ``"..."`` on each side that was cut.

    Args:
        text: Text to cut from.
        term: Term to locate.
        context_length: Total context around the match.
        case_sensitive: Match exactly instead of ignoring case.

    Returns:
        The snippet. If the term does not occur, the first
        ``context_length`` characters followed by ``"..."``.
    """
    if not text or not term:
        return ""

    if case_sensitive:
        position = text.find(term)
    else:
        position = text.lower().find(term.lower())
    if position == -1:
        return text[:context_length] + ELLIPSIS

    half = context_length // 2
    start = max(0, position - half)
    end = min(len(text), position + len(term) + half)

    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return prefix + text[start:end] + suffix


class MitzvahLibrary:
    """Read-only queries over a collection loaded at session start.

    Every method degrades to an empty list or None, with a logged
    warning, when no collection is loaded or the arguments are invalid.

    Args:
        collection: The loaded collection, or None if nothing is on disk.
        index: Optional pre-built index entries.
        context_length: Snippet size for search results.
        rng: Random source for ``random_mitzvah``.
    """

    def __init__(
        self,
        collection: MitzvahCollection | None,
        index: list[IndexEntry] | None = None,
        context_length: int = 100,
        rng: random.Random | None = None,
    ) -> None:
        self._collection = collection
        self._index = index
        self._context_length = context_length
        self._rng = rng or random.Random()

    @classmethod
    def load(cls, store: MitzvahStore, context_length: int = 100) -> "MitzvahLibrary":
        """Load the collection and index from a data directory.

        Returns an unloaded library if nothing has been downloaded yet or
        the collection cannot be read. An unreadable index is skipped.
        """
        try:
            collection = store.load_collection()
        except (OSError, ValueError) as e:
            logger.error("Error loading data: %s", e)
            return cls(None, context_length=context_length)

        if collection is None:
            logger.warning("No valid data found. Run a download first.")
            return cls(None, context_length=context_length)

        # The index is derived from the collection and can be rebuilt
        try:
            index = store.load_index()
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable search index: %s", e)
            index = None

        logger.info("Loaded %d mitzvot into memory", len(collection))
        if index is not None:
            logger.info("Loaded search index with %d entries", len(index))
        return cls(collection, index=index, context_length=context_length)

    @property
    def is_loaded(self) -> bool:
        return self._collection is not None

    @property
    def index(self) -> list[IndexEntry] | None:
        return self._index

    def _loaded_collection(self) -> MitzvahCollection | None:
        if self._collection is None:
            logger.warning("Data not loaded. Run a download first.")
        return self._collection

    def get_mitzvah(self, number: object) -> Mitzvah | None:
        """Look up a mitzvah by its number (1-613)."""
        collection = self._loaded_collection()
        if collection is None:
            return None

        if not isinstance(number, int) or isinstance(number, bool) or not 1 <= number <= MITZVAH_COUNT:
            logger.warning("Invalid mitzvah number: %r. Must be between 1-%d.", number, MITZVAH_COUNT)
            return None

        mitzvah = collection.get(number)
        if mitzvah is None:
            logger.info("Mitzvah %d not found in loaded data", number)
        return mitzvah

    def search(self, term: object, language: str = "both") -> list[SearchResult]:
        """Substring search over the text and titles of every mitzvah.

        English text and titles match case-insensitively. Hebrew text and
        titles match exactly, since Hebrew script has no case.

        Args:
            term: Text to look for; surrounding whitespace is ignored.
            language: ``"english"``, ``"hebrew"`` or ``"both"``; selects
                which body text is searched. Titles are always searched.

        Returns:
            Matching mitzvot in collection order, each with a snippet.
        """
        collection = self._loaded_collection()
        if collection is None:
            return []

        if not isinstance(term, str) or not term.strip():
            logger.warning("Invalid search term: %r", term)
            return []
        if language not in LANGUAGES:
            logger.warning("Invalid search language: %r. Use one of %s.", language, ", ".join(LANGUAGES))
            return []

        term = term.strip()
        folded = term.lower()
        search_english = language in ("english", "both")
        search_hebrew = language in ("hebrew", "both")

        results: list[SearchResult] = []
        for mitzvah in collection:
            english = mitzvah.english_joined()
            hebrew = mitzvah.hebrew_joined()

            match_source: str | None = None
            exact = False
            if search_english and english and folded in english.lower():
                match_source = english
            elif search_hebrew and hebrew and term in hebrew:
                match_source = hebrew
                exact = True

            title = mitzvah.index_title or mitzvah.title or ""
            he_title = mitzvah.he_title or ""
            title_matched = folded in title.lower() or term in he_title

            if match_source is None and not title_matched:
                continue

            if match_source is None:
                # Matched on a title only; the body text may not contain the term
                match_source = english or hebrew or title or he_title

            results.append(
                SearchResult(
                    number=mitzvah.number,
                    title=mitzvah.display_title,
                    he_title=he_title,
                    match_text=extract_matching_text(match_source, term, self._context_length, case_sensitive=exact),
                    mitzvah=mitzvah,
                )
            )
        return results

    def get_by_category(self, category: object) -> list[Mitzvah]:
        """Return mitzvot with any category containing ``category`` (case-insensitive)."""
        collection = self._loaded_collection()
        if collection is None:
            return []

        if not isinstance(category, str) or not category:
            logger.warning("Invalid category: %r", category)
            return []

        needle = category.lower()
        return [m for m in collection if any(needle in c.lower() for c in m.categories)]

    def random_mitzvah(self) -> Mitzvah | None:
        collection = self._loaded_collection()
        if not collection:
            return None
        return self._rng.choice(list(collection))

    def get_stats(self) -> CollectionStats | None:
        """Compute counts, distinct categories and mean English text length."""
        collection = self._loaded_collection()
        if collection is None:
            return None

        total = len(collection)
        categories = list(dict.fromkeys(c for m in collection for c in m.categories))
        total_length = sum(len(m.english_joined("")) for m in collection)

        return CollectionStats(
            total=total,
            with_english=sum(1 for m in collection if m.has_english),
            with_hebrew=sum(1 for m in collection if m.has_hebrew),
            categories=categories,
            # Half-up rounding
            average_text_length=int(total_length / total + 0.5) if total else 0,
        )
