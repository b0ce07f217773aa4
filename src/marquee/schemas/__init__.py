"""Pydantic schemas for API requests and responses."""

from marquee.schemas.movie import (
    MovieInfoResponse,
    MovieResponse,
    MoviesResponse,
    ShowtimeDay,
    ShowtimeResponse,
)
from marquee.schemas.title import ParsedTitleResponse

__all__ = [
    "MovieInfoResponse",
    "MovieResponse",
    "MoviesResponse",
    "ParsedTitleResponse",
    "ShowtimeDay",
    "ShowtimeResponse",
]
