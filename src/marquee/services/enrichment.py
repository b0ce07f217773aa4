"""Movie enrichment service: title matching plus TMDb metadata."""

import asyncio
import logging
from dataclasses import replace

from marquee.config import settings
from marquee.models.movie import MovieAggregate, MovieInfo
from marquee.services.info_cache import MovieInfoCache
from marquee.services.title_matcher import find_best_match
from marquee.services.tmdb_client import TMDbClient
from marquee.utils.text import parse_title

logger = logging.getLogger(__name__)


class MovieEnricher:
    """
    Service for attaching TMDb metadata to listing titles.

    Uses a multi-stage process per title:
    1. Check the injected cache
    2. Parse the listing title and search TMDb with the cleaned text
    3. Score the candidates and pick the best match
    4. Fetch the winner's details and build a MovieInfo
    5. Store the result in the cache
    """

    def __init__(
        self,
        tmdb_client: TMDbClient | None = None,
        cache: MovieInfoCache | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        """
        Initialize the enricher.

        Args:
            tmdb_client: TMDb client (creates default if not provided)
            cache: Result cache (creates an empty one if not provided)
            max_concurrency: Maximum simultaneous TMDb lookups
        """
        self.tmdb_client = tmdb_client or TMDbClient()
        self.cache = cache if cache is not None else MovieInfoCache()
        self.max_concurrency = max_concurrency or settings.tmdb_max_concurrency

    async def fetch_movie_info(self, title: str) -> MovieInfo | None:
        """
        Find TMDb metadata for a listing title.

        Args:
            title: Film title as it appears in the listing

        Returns:
            MovieInfo, or None when TMDb has no usable match
        """
        cached = self.cache.get(title)
        if cached:
            logger.debug(f"Cache hit: '{title}'")
            return cached

        parsed = parse_title(title)
        logger.info(f"Matching film: '{title}' -> '{parsed.normalized}' (year={parsed.year})")

        candidates = await self.tmdb_client.search_movies(parsed.search_text or title)
        best = find_best_match(parsed, candidates)
        if best is None:
            return None

        if best.tmdb_id is None:
            logger.warning(f"Matched '{best.title}' for '{title}' but it has no TMDb id")
            return None

        details = await self.tmdb_client.get_movie_details(best.tmdb_id)
        if not details:
            return None

        info = self.tmdb_client.build_movie_info(details)
        self.cache.set(title, info)
        logger.info(f"Matched '{title}' -> '{best.title}' ({best.release_date or 'no date'})")
        return info

    async def enrich(self, movies: list[MovieAggregate]) -> list[MovieAggregate]:
        """
        Attach metadata to each movie, looking titles up concurrently.

        Args:
            movies: Aggregated movies (left unchanged)

        Returns:
            New movie records in the same order, with ``info`` set where a
            match was found
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def enrich_one(movie: MovieAggregate) -> MovieAggregate:
            async with semaphore:
                try:
                    info = await self.fetch_movie_info(movie.display_title)
                except Exception as e:
                    logger.error(f"Error enriching '{movie.title}': {e}", exc_info=True)
                    return movie
            return replace(movie, info=info) if info else movie

        enriched = await asyncio.gather(*(enrich_one(movie) for movie in movies))
        matched = sum(1 for movie in enriched if movie.info)
        logger.info(f"Enriched {matched} of {len(movies)} movies")
        return list(enriched)
