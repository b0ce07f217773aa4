"""Listing service: fetch the schedule, aggregate it and enrich it."""

import logging
from datetime import datetime

from marquee.models.movie import MovieAggregate
from marquee.scrapers.base import BaseScraper
from marquee.scrapers.calendar import CalendarScraper
from marquee.services.enrichment import MovieEnricher
from marquee.services.schedule import aggregate, tonight

logger = logging.getLogger(__name__)


class ListingService:
    """Produces the display-ordered movie list for a cinema."""

    def __init__(
        self,
        scraper: BaseScraper | None = None,
        enricher: MovieEnricher | None = None,
    ) -> None:
        self.scraper = scraper or CalendarScraper()
        self.enricher = enricher or MovieEnricher()

    async def fetch_movies(
        self, enrich: bool = True, now: datetime | None = None
    ) -> list[MovieAggregate]:
        """
        Fetch the current schedule as one record per title.

        Args:
            enrich: Attach TMDb metadata to each movie
            now: Reference time for ordering

        Returns:
            Movies ordered by next upcoming showtime
        """
        events = await self.scraper.get_events()
        movies = aggregate(events, now=now)
        logger.info(f"Aggregated {len(events)} events into {len(movies)} movies")

        if enrich and movies:
            movies = await self.enricher.enrich(movies)
        return movies

    async def fetch_tonight(
        self, enrich: bool = True, now: datetime | None = None
    ) -> list[MovieAggregate]:
        """Movies showing today, with only today's showtimes."""
        movies = await self.fetch_movies(enrich=False, now=now)
        movies = tonight(movies, now=now)

        if enrich and movies:
            movies = await self.enricher.enrich(movies)
        return movies
