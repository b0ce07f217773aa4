"""Domain value types."""

from marquee.models.movie import MovieAggregate, MovieInfo, Showtime
from marquee.models.title import Candidate, ParsedTitle, ScoredCandidate

__all__ = [
    "Candidate",
    "MovieAggregate",
    "MovieInfo",
    "ParsedTitle",
    "ScoredCandidate",
    "Showtime",
]
