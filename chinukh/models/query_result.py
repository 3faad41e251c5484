"""Query result data models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chinukh.models.mitzvah import Mitzvah


class SearchResult(BaseModel):
    """A mitzvah matched by a text search, with a context snippet."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    number: int
    title: str
    he_title: str = ""
    match_text: str = ""
    mitzvah: Mitzvah


class CollectionStats(BaseModel):
    """Aggregate statistics over a loaded collection."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    total: int = 0
    with_english: int = 0
    with_hebrew: int = 0
    categories: list[str] = Field(default_factory=list)
    average_text_length: int = 0  # Mean English characters per mitzvah
