"""Search index entry model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IndexEntry(BaseModel):
    """Compact summary of one mitzvah, rebuilt whenever the collection changes."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    number: int
    title: str
    he_title: str = ""
    categories: list[str] = Field(default_factory=list)
    preview: str = ""  # First characters of the English (else Hebrew) text
    has_hebrew: bool = False
    has_english: bool = False
