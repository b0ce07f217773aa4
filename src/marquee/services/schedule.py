"""Grouping of individual screening events into per-title movie records."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo

from marquee.models.movie import LISTING_TZ, MovieAggregate, Showtime
from marquee.scrapers.models import ScreeningEvent

logger = logging.getLogger(__name__)


@dataclass
class _Group:
    image_ref: str | None = None
    showtimes: list[Showtime] = field(default_factory=list)


def parse_timestamp(value: str | datetime | None, tz: tzinfo = LISTING_TZ) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken to be in ``tz``. Returns None for anything that
    cannot be parsed.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value).strip())
        except ValueError:
            return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz)
    return moment


def aggregate(
    events: list[ScreeningEvent],
    now: datetime | None = None,
    tz: tzinfo = LISTING_TZ,
) -> list[MovieAggregate]:
    """
    Merge screening events into one record per title.

    Titles are grouped by exact, case-sensitive match. Each record keeps the
    first image seen for its title and its showtimes in ascending order;
    identical showtimes listed twice are kept twice. Events whose start time
    cannot be parsed are dropped.

    Args:
        events: Screening events in listing order
        now: Reference time for ordering (defaults to the current time)
        tz: Timezone assumed for naive timestamps

    Returns:
        Movies ordered by their next upcoming showtime (or first showtime
        when none are upcoming), ties broken by title
    """
    now = parse_timestamp(now, tz) or datetime.now(tz)
    groups: dict[str, _Group] = {}
    dropped = 0

    for event in events:
        start_time = parse_timestamp(event.start_time, tz)
        if start_time is None:
            logger.debug(f"Dropping '{event.title}': unparseable start time {event.start_time!r}")
            dropped += 1
            continue

        end_time = parse_timestamp(event.end_time, tz)
        group = groups.setdefault(event.title, _Group())
        group.showtimes.append(Showtime(start_time=start_time, end_time=end_time))

        if group.image_ref is None and event.image_ref:
            group.image_ref = event.image_ref

    if dropped:
        logger.warning(f"Dropped {dropped} of {len(events)} events with unparseable start times")

    movies = [
        MovieAggregate(
            title=title,
            image_ref=group.image_ref,
            showtimes=sorted(group.showtimes, key=lambda s: s.start_time),
        )
        for title, group in groups.items()
    ]

    def sort_key(movie: MovieAggregate) -> tuple[datetime, str]:
        showtime = movie.next_showtime(now) or movie.showtimes[0]
        return showtime.start_time, movie.title

    return sorted(movies, key=sort_key)


def tonight(movies: list[MovieAggregate], now: datetime | None = None) -> list[MovieAggregate]:
    """
    Reduce movies to the showtimes falling on today's date.

    Movies with no showtimes today are removed; the rest are ordered by
    their earliest showtime today.
    """
    now = parse_timestamp(now) or datetime.now(LISTING_TZ)
    today = now.date()

    result: list[MovieAggregate] = []
    for movie in movies:
        showtimes = movie.showtimes_on(today, now.tzinfo)
        if showtimes:
            result.append(replace(movie, showtimes=showtimes))

    return sorted(result, key=lambda m: m.showtimes[0].start_time)
