"""Test data builders."""

from typing import Any


def make_payload(number: int, **overrides: Any) -> dict[str, Any]:
    """A Sefaria-shaped payload for one mitzvah, stamped with its number."""
    payload: dict[str, Any] = {
        "ref": f"Sefer HaChinukh {number}",
        "title": f"Sefer HaChinukh {number}",
        "indexTitle": "Sefer HaChinukh",
        "heTitle": "ספר החינוך",
        "categories": ["Halakhah", "Sefer HaChinukh"],
        "text": [f"Mitzvah {number} first paragraph.", "Second paragraph."],
        "he": [f"מצוה {number} פסקה ראשונה.", "פסקה שנייה."],
        "mitzvahNumber": number,
    }
    payload.update(overrides)
    return payload
