"""Search index construction from a downloaded collection."""

import logging
from collections.abc import Iterable

from chinukh.models import IndexEntry, Mitzvah

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


def extract_preview(mitzvah: Mitzvah | None, max_length: int = 100) -> str:
    """Return the opening text of a mitzvah for list views.

    Uses the English text when present, otherwise the Hebrew text.

    Args:
        mitzvah: The mitzvah to preview.
        max_length: Maximum characters kept before the ellipsis.

    Returns:
        At most ``max_length`` characters, followed by ``"..."`` when
        the text was truncated. Empty string if there is no text.
    """
    if mitzvah is None:
        return ""

    if mitzvah.has_english:
        text = mitzvah.english_joined()
    else:
        text = mitzvah.hebrew_joined()

    text = text.strip()
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def build_index(mitzvot: Iterable[Mitzvah], preview_length: int = 100) -> list[IndexEntry]:
    """Build one IndexEntry per mitzvah, preserving collection order.

    Args:
        mitzvot: The collection (or any ordered iterable of mitzvot).
        preview_length: Preview size passed to ``extract_preview``.

    Returns:
        The index entries; empty when the collection is empty.
    """
    entries = [
        IndexEntry(
            number=mitzvah.number,
            title=mitzvah.display_title,
            he_title=mitzvah.he_title or "",
            categories=list(mitzvah.categories),
            preview=extract_preview(mitzvah, preview_length),
            has_hebrew=mitzvah.has_hebrew,
            has_english=mitzvah.has_english,
        )
        for mitzvah in mitzvot
    ]
    if not entries:
        logger.warning("No mitzvot to index")
    return entries
