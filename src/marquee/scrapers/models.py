"""Data models for scrapers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ScreeningEvent:
    """
    One listing entry as published by the cinema.

    This is the output format that all scrapers must return. Timestamps are
    kept as received; the schedule aggregator parses them and drops entries
    it cannot read.
    """

    title: str  # Film title as it appears on the cinema website
    start_time: str | datetime  # ISO-8601 string or datetime
    end_time: str | datetime | None = None
    image_ref: str | None = None  # Poster/still URL from the listing
