"""Movies API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query

from marquee.dependencies import get_listing_service
from marquee.schemas import MovieResponse, MoviesResponse
from marquee.services.listings import ListingService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/movies", response_model=MoviesResponse)
async def get_movies(
    tonight: bool = Query(False, description="Only movies showing today"),
    enrich: bool = Query(True, description="Attach TMDb metadata"),
    service: ListingService = Depends(get_listing_service),
) -> MoviesResponse:
    """
    Get the cinema's current schedule, one entry per movie.

    Movies are ordered by their next upcoming showtime.
    """
    if tonight:
        movies = await service.fetch_tonight(enrich=enrich)
    else:
        movies = await service.fetch_movies(enrich=enrich)

    return MoviesResponse(
        movies=[MovieResponse.from_movie(movie) for movie in movies],
        total_movies=len(movies),
        total_showtimes=sum(len(movie.showtimes) for movie in movies),
    )


@router.post("/cache/invalidate")
async def invalidate_cache(
    service: ListingService = Depends(get_listing_service),
) -> dict[str, int]:
    """Drop cached TMDb matches so the next request looks every title up again."""
    version = service.enricher.cache.invalidate()
    return {"cache_version": version}
