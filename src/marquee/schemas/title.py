"""Pydantic schemas for title parsing."""

from pydantic import BaseModel, ConfigDict


class ParsedTitleResponse(BaseModel):
    """A listing title broken down the way the matcher sees it."""

    model_config = ConfigDict(from_attributes=True)

    original: str
    normalized: str
    year: int | None = None
    is_special_edition: bool
    search_text: str
