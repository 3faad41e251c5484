"""Mitzvah record and collection models."""

from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sefer HaChinukh enumerates exactly 613 mitzvot
MITZVAH_COUNT = 613


def normalize_paragraphs(value: Any) -> list[str]:
    """Flatten a heterogeneous text field into a list of paragraphs.

    Sefaria returns a single string, a list of strings, or a jagged
    (nested) list depending on the text. Blank paragraphs are dropped,
    numbers are stringified and anything else is ignored.

    Args:
        value: Raw ``text`` or ``he`` value from the API payload.

    Returns:
        Ordered list of non-blank paragraph strings (possibly empty).
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return [str(value)]
    if isinstance(value, (list, tuple)):
        paragraphs: list[str] = []
        for item in value:
            paragraphs.extend(normalize_paragraphs(item))
        return paragraphs
    return []


class Mitzvah(BaseModel):
    """A single mitzvah as downloaded from Sefaria.

    Field aliases follow the Sefaria payload (``text``, ``he``, ``heTitle``,
    ``indexTitle``) plus the ``mitzvahNumber`` stamp added on download.
    Unknown payload fields are kept so the stored record is the full
    stamped payload.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    number: int = Field(alias="mitzvahNumber", ge=1, le=MITZVAH_COUNT)
    title: str | None = None
    index_title: str | None = Field(default=None, alias="indexTitle")
    he_title: str | None = Field(default=None, alias="heTitle")
    categories: list[str] = Field(default_factory=list)
    english_text: list[str] = Field(default_factory=list, alias="text")
    hebrew_text: list[str] = Field(default_factory=list, alias="he")

    @field_validator("english_text", "hebrew_text", mode="before")
    @classmethod
    def _normalize_text(cls, value: Any) -> list[str]:
        return normalize_paragraphs(value)

    @field_validator("categories", mode="before")
    @classmethod
    def _normalize_categories(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [str(c) for c in value if c is not None]
        return []

    @field_validator("title", "index_title", "he_title", mode="before")
    @classmethod
    def _optional_string(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @property
    def display_title(self) -> str:
        return self.index_title or self.title or f"Mitzvah {self.number}"

    @property
    def has_english(self) -> bool:
        return bool(self.english_text)

    @property
    def has_hebrew(self) -> bool:
        return bool(self.hebrew_text)

    def english_joined(self, separator: str = " ") -> str:
        return separator.join(self.english_text)

    def hebrew_joined(self, separator: str = " ") -> str:
        return separator.join(self.hebrew_text)

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the Sefaria-shaped JSON object."""
        return self.model_dump(by_alias=True, mode="json")


class MitzvahCollection:
    """Ordered collection of mitzvot keyed by number.

    Numbers need not be contiguous: failed downloads leave gaps.

    Args:
        mitzvot: Initial mitzvot, in order.

    Raises:
        ValueError: If two mitzvot share a number.
    """

    def __init__(self, mitzvot: Iterable[Mitzvah] = ()) -> None:
        self._items: list[Mitzvah] = []
        self._by_number: dict[int, Mitzvah] = {}
        for mitzvah in mitzvot:
            self.add(mitzvah)

    def add(self, mitzvah: Mitzvah) -> None:
        if mitzvah.number in self._by_number:
            raise ValueError(f"Duplicate mitzvah number: {mitzvah.number}")
        self._items.append(mitzvah)
        self._by_number[mitzvah.number] = mitzvah

    def get(self, number: int) -> Mitzvah | None:
        return self._by_number.get(number)

    def numbers(self) -> list[int]:
        return [m.number for m in self._items]

    def to_payload(self) -> list[dict[str, Any]]:
        return [m.to_payload() for m in self._items]

    def __contains__(self, number: object) -> bool:
        return number in self._by_number

    def __iter__(self) -> Iterator[Mitzvah]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position: int) -> Mitzvah:
        return self._items[position]
