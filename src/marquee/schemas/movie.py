"""Pydantic schemas for movie data."""

from datetime import date, datetime, tzinfo

from pydantic import BaseModel, ConfigDict

from marquee.models.movie import LISTING_TZ, MovieAggregate


class ShowtimeResponse(BaseModel):
    """Individual showtime response."""

    model_config = ConfigDict(from_attributes=True)

    start_time: datetime
    end_time: datetime | None = None


class ShowtimeDay(BaseModel):
    """Showtimes falling on one date."""

    day: date
    times: list[ShowtimeResponse]


class MovieInfoResponse(BaseModel):
    """TMDb metadata attached to a movie."""

    model_config = ConfigDict(from_attributes=True)

    tmdb_id: int
    overview: str | None = None
    tagline: str | None = None
    runtime: int | None = None
    formatted_runtime: str | None = None
    rating: float | None = None
    formatted_rating: str | None = None
    vote_count: int | None = None
    genres: list[str] = []
    director: str | None = None
    top_cast: list[str] = []
    poster_url: str | None = None
    backdrop_url: str | None = None
    trailer_url: str | None = None
    release_date: str | None = None


class MovieResponse(BaseModel):
    """A movie with all of its showtimes."""

    title: str
    display_title: str
    poster_url: str | None = None
    showtimes: list[ShowtimeResponse]
    days: list[ShowtimeDay]
    info: MovieInfoResponse | None = None

    @classmethod
    def from_movie(cls, movie: MovieAggregate, tz: tzinfo = LISTING_TZ) -> "MovieResponse":
        """Build the response, grouping showtimes by date in the listing timezone."""
        return cls(
            title=movie.title,
            display_title=movie.display_title,
            poster_url=movie.best_poster_url,
            showtimes=[ShowtimeResponse.model_validate(s) for s in movie.showtimes],
            days=[
                ShowtimeDay(
                    day=day,
                    times=[ShowtimeResponse.model_validate(s) for s in times],
                )
                for day, times in movie.showtimes_by_date(tz)
            ],
            info=MovieInfoResponse.model_validate(movie.info) if movie.info else None,
        )


class MoviesResponse(BaseModel):
    """Response for the movies endpoint."""

    movies: list[MovieResponse]
    total_movies: int
    total_showtimes: int
