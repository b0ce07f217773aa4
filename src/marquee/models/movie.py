"""Movie records produced from a cinema's schedule."""

import html
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo

from marquee.config import settings

# Timezone the cinema publishes its schedule in
LISTING_TZ = ZoneInfo(settings.listing_timezone)


def _local_date(moment: datetime, tz: tzinfo | None) -> date:
    return moment.astimezone(tz).date() if tz is not None else moment.date()


@dataclass(frozen=True)
class Showtime:
    """One scheduled screening (timezone-aware)."""

    start_time: datetime
    end_time: datetime | None = None


@dataclass(frozen=True)
class MovieInfo:
    """Metadata attached to a movie after a successful TMDb match."""

    tmdb_id: int
    overview: str | None = None
    tagline: str | None = None
    runtime: int | None = None  # Minutes
    rating: float | None = None
    vote_count: int | None = None
    genres: list[str] = field(default_factory=list)
    director: str | None = None
    top_cast: list[str] = field(default_factory=list)
    poster_url: str | None = None
    backdrop_url: str | None = None
    trailer_url: str | None = None
    release_date: str | None = None

    @property
    def formatted_runtime(self) -> str | None:
        """Runtime as "2h 12m" or "45m"."""
        if not self.runtime or self.runtime <= 0:
            return None
        hours, minutes = divmod(self.runtime, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

    @property
    def formatted_rating(self) -> str | None:
        if not self.rating or self.rating <= 0:
            return None
        return f"{self.rating:.1f}"


@dataclass(frozen=True)
class MovieAggregate:
    """
    All screenings of one listing title merged into a single record.

    The title is the grouping key and is kept exactly as the listing
    published it. Showtimes are sorted ascending by start time.
    """

    title: str
    image_ref: str | None = None
    showtimes: list[Showtime] = field(default_factory=list)
    info: MovieInfo | None = None

    @property
    def display_title(self) -> str:
        """Title with HTML entities decoded."""
        return html.unescape(self.title)

    @property
    def best_poster_url(self) -> str | None:
        """TMDb poster when enriched, otherwise the listing's own image."""
        if self.info and self.info.poster_url:
            return self.info.poster_url
        return self.image_ref

    def next_showtime(self, now: datetime) -> Showtime | None:
        """The earliest showtime starting after ``now``."""
        upcoming = [s for s in self.showtimes if s.start_time > now]
        if not upcoming:
            return None
        return min(upcoming, key=lambda s: s.start_time)

    def showtimes_on(self, day: date, tz: tzinfo | None = None) -> list[Showtime]:
        """
        Showtimes whose start falls on ``day``.

        Start times are converted to ``tz`` before comparing dates; without
        it each showtime's own timezone is used.
        """
        return sorted(
            (s for s in self.showtimes if _local_date(s.start_time, tz) == day),
            key=lambda s: s.start_time,
        )

    def showtimes_by_date(
        self, tz: tzinfo | None = LISTING_TZ
    ) -> list[tuple[date, list[Showtime]]]:
        """
        Showtimes grouped by calendar date, both levels in ascending order.

        Dates are taken in ``tz`` (the listing timezone by default), so a
        showing published in UTC lands on the same day ``showtimes_on``
        puts it on.
        """
        grouped: dict[date, list[Showtime]] = {}
        for showtime in self.showtimes:
            grouped.setdefault(_local_date(showtime.start_time, tz), []).append(showtime)
        return [
            (day, sorted(times, key=lambda s: s.start_time))
            for day, times in sorted(grouped.items())
        ]
