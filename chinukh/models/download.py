"""Download bookkeeping models."""

from pydantic import BaseModel


class FailedDownload(BaseModel):
    """A mitzvah number whose download failed, pending retry."""

    number: int
    error: str
