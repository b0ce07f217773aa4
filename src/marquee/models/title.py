"""Value types used when matching listing titles to metadata search results."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParsedTitle:
    """
    A listing title split into a comparable form plus extracted metadata.

    Recomputed on every parse; carries no identity of its own.
    """

    original: str  # Title exactly as received
    normalized: str  # Lowercase, article-stripped, punctuation-free form
    year: int | None = None  # Year taken from the end of the title
    is_special_edition: bool = False  # An edition marker was stripped
    search_text: str = ""  # Cleaned title with its original casing, for search queries


@dataclass(frozen=True)
class Candidate:
    """A single metadata search result being considered for a listing title."""

    title: str
    original_title: str | None = None
    release_date: str | None = None  # "YYYY-MM-DD"
    vote_average: float | None = None
    vote_count: int | None = None
    tmdb_id: int | None = None
    overview: str | None = None
    poster_path: str | None = None

    @property
    def release_year(self) -> int | None:
        """Year from the first four characters of the release date, if any."""
        if not self.release_date or len(self.release_date) < 4:
            return None
        try:
            return int(self.release_date[:4])
        except ValueError:
            return None

    @classmethod
    def from_tmdb(cls, result: dict[str, Any]) -> "Candidate":
        """Build a candidate from a TMDb ``/search/movie`` result entry."""
        return cls(
            title=result.get("title") or "",
            original_title=result.get("original_title") or None,
            release_date=result.get("release_date") or None,
            vote_average=result.get("vote_average"),
            vote_count=result.get("vote_count"),
            tmdb_id=result.get("id"),
            overview=result.get("overview") or None,
            poster_path=result.get("poster_path") or None,
        )


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate paired with its score for one match operation."""

    candidate: Candidate
    score: int
