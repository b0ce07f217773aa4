"""TMDb API client for fetching film metadata."""

import logging
from typing import Any

import httpx

from marquee.config import settings
from marquee.models.movie import MovieInfo
from marquee.models.title import Candidate

logger = logging.getLogger(__name__)

# Lower sorts first when choosing a trailer
_VIDEO_TYPE_PRIORITY = {"Trailer": 0, "Teaser": 1}


class TMDbClient:
    """Client for The Movie Database (TMDb) API."""

    BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

    def __init__(self, api_key: str | None = None) -> None:
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb API key (uses settings if not provided)
        """
        self.api_key = api_key or settings.tmdb_api_key
        if not self.api_key:
            logger.warning("TMDb API key not configured")

    def _log_http_error(self, response: httpx.Response, context: str) -> None:
        if response.status_code == 401:
            logger.error(f"TMDb rejected the API key ({context})")
        elif response.status_code == 429:
            logger.warning(f"TMDb rate limit exceeded ({context})")

    async def search_movies(self, title: str) -> list[Candidate]:
        """
        Search for films by title.

        The release year is left to scoring rather than sent as a filter, so
        a wrong year in the listing cannot hide the right film.

        Args:
            title: Film title

        Returns:
            Candidates in TMDb's order; empty when nothing matched or on error
        """
        if not self.api_key:
            logger.warning("Cannot search TMDb without API key")
            return []

        params: dict[str, Any] = {
            "api_key": self.api_key,
            "query": title,
            "language": settings.tmdb_language,
        }

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                response = await client.get(f"{self.BASE_URL}/search/movie", params=params)
                self._log_http_error(response, f"search '{title}'")
                response.raise_for_status()
                data = response.json()

        except Exception as e:
            logger.error(f"TMDb search error for '{title}': {e}")
            return []

        results = data.get("results", [])
        if not results:
            logger.info(f"No TMDb results for: {title}")
            return []

        return [Candidate.from_tmdb(result) for result in results if result.get("title")]

    async def get_movie_details(self, tmdb_id: int) -> dict[str, Any] | None:
        """
        Get detailed film information including credits and videos.

        Args:
            tmdb_id: TMDb film ID

        Returns:
            Film details or None if error
        """
        if not self.api_key:
            logger.warning("Cannot fetch TMDb details without API key")
            return None

        params = {
            "api_key": self.api_key,
            "language": settings.tmdb_language,
            "append_to_response": "credits,videos",
        }

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                response = await client.get(
                    f"{self.BASE_URL}/movie/{tmdb_id}",
                    params=params,
                )
                self._log_http_error(response, f"details {tmdb_id}")
                response.raise_for_status()
                return response.json()

        except Exception as e:
            logger.error(f"TMDb details error for ID {tmdb_id}: {e}")
            return None

    def build_movie_info(self, details: dict[str, Any]) -> MovieInfo:
        """
        Convert a TMDb details response into a MovieInfo.

        Args:
            details: Response from get_movie_details

        Returns:
            MovieInfo for the film
        """
        credits = details.get("credits") or {}
        return MovieInfo(
            tmdb_id=details["id"],
            overview=details.get("overview") or None,
            tagline=details.get("tagline") or None,
            runtime=details.get("runtime"),
            rating=details.get("vote_average"),
            vote_count=details.get("vote_count"),
            genres=self.extract_genres(details),
            director=self.extract_director(credits),
            top_cast=self.extract_cast(credits),
            poster_url=self.image_url(details.get("poster_path"), settings.tmdb_poster_size),
            backdrop_url=self.image_url(details.get("backdrop_path"), settings.tmdb_backdrop_size),
            trailer_url=self.extract_trailer_url(details.get("videos") or {}),
            release_date=details.get("release_date") or None,
        )

    def extract_director(self, credits: dict[str, Any]) -> str | None:
        """First crew member credited as Director."""
        for person in credits.get("crew") or []:
            if person.get("job") == "Director" and person.get("name"):
                return person["name"]
        return None

    def extract_cast(self, credits: dict[str, Any], n: int = 5) -> list[str]:
        """
        Extract top-billed cast member names from TMDb credits.

        Args:
            credits: TMDb credits data
            n: Maximum number of cast members to return

        Returns:
            List of actor names in billing order (up to n)
        """
        cast = [person for person in credits.get("cast") or [] if person.get("name")]
        # Unordered entries go last
        cast.sort(key=lambda person: (person.get("order") is None, person.get("order") or 0))
        return [person["name"] for person in cast[:n]]

    def extract_genres(self, film_data: dict[str, Any]) -> list[str]:
        return [genre["name"] for genre in film_data.get("genres") or [] if genre.get("name")]

    def extract_trailer_url(self, videos: dict[str, Any]) -> str | None:
        """
        Pick a YouTube trailer, preferring trailers over teasers over anything else.

        Args:
            videos: TMDb ``videos`` block

        Returns:
            YouTube watch URL or None
        """
        youtube = [
            video
            for video in videos.get("results") or []
            if video.get("site") == "YouTube" and video.get("key")
        ]
        if not youtube:
            return None

        best = min(youtube, key=lambda video: _VIDEO_TYPE_PRIORITY.get(video.get("type"), 2))
        return f"https://www.youtube.com/watch?v={best['key']}"

    def image_url(self, path: str | None, size: str) -> str | None:
        if not path:
            return None
        return f"{self.IMAGE_BASE_URL}/{size}{path}"
