"""Scoring of metadata search results against a parsed listing title."""

import logging
from dataclasses import dataclass
from datetime import date

from rapidfuzz.distance import Levenshtein

from marquee.models.title import Candidate, ParsedTitle, ScoredCandidate
from marquee.utils.text import normalise_title, parse_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchWeights:
    """
    Tunable scoring constants.

    The defaults are hand-tuned heuristics; change them together with the
    tests that pin the resulting scores.
    """

    exact_title: int = 100
    contained_title: int = 50
    fuzzy_max: int = 40
    fuzzy_threshold: float = 0.7

    year_exact: int = 50
    year_off_by_one: int = 20
    year_mismatch: int = -30

    # Query without a year: favour new releases and old repertory titles
    recent_years: int = 2
    recent_bonus: int = 25
    fairly_recent_years: int = 5
    fairly_recent_bonus: int = 10
    classic_years: int = 30
    classic_bonus: int = 5

    votes_high: int = 1000
    votes_high_bonus: int = 15
    votes_medium: int = 100
    votes_medium_bonus: int = 10
    votes_low: int = 10
    votes_low_bonus: int = 5

    rating_threshold: float = 7.0
    rating_bonus: int = 5


DEFAULT_WEIGHTS = MatchWeights()


def _title_score(query: str, candidate: Candidate, weights: MatchWeights) -> int:
    candidate_title = normalise_title(candidate.title)

    if query == candidate_title:
        return weights.exact_title

    if candidate.original_title and query == normalise_title(candidate.original_title):
        return weights.exact_title

    if query and candidate_title and (query in candidate_title or candidate_title in query):
        return weights.contained_title

    max_len = max(len(query), len(candidate_title))
    if max_len == 0:
        return 0

    similarity = 1.0 - Levenshtein.distance(query, candidate_title) / max_len
    if similarity > weights.fuzzy_threshold:
        return int(similarity * weights.fuzzy_max)
    return 0


def _year_score(
    query_year: int | None, candidate_year: int | None, current_year: int, weights: MatchWeights
) -> int:
    if candidate_year is None:
        return 0

    if query_year is not None:
        if query_year == candidate_year:
            return weights.year_exact
        if abs(query_year - candidate_year) == 1:
            return weights.year_off_by_one
        return weights.year_mismatch

    # No year in the listing; 6-30 years ago deliberately scores nothing
    years_ago = current_year - candidate_year
    if years_ago <= weights.recent_years:
        return weights.recent_bonus
    if years_ago <= weights.fairly_recent_years:
        return weights.fairly_recent_bonus
    if years_ago > weights.classic_years:
        return weights.classic_bonus
    return 0


def _popularity_score(vote_count: int | None, weights: MatchWeights) -> int:
    if vote_count is None:
        return 0
    if vote_count > weights.votes_high:
        return weights.votes_high_bonus
    if vote_count > weights.votes_medium:
        return weights.votes_medium_bonus
    if vote_count > weights.votes_low:
        return weights.votes_low_bonus
    return 0


def score_match(
    query: ParsedTitle,
    candidate: Candidate,
    current_year: int,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> int:
    """
    Score a candidate against a parsed listing title.

    Title similarity, year agreement, popularity and rating are scored
    independently and summed, so a popular candidate with the wrong year
    can still lose to a less popular one with the right year.

    Args:
        query: Parsed listing title
        candidate: Search result to score
        current_year: Year used to judge how recent the candidate is
        weights: Scoring constants

    Returns:
        Integer score; higher is a better match and it may be negative
    """
    score = _title_score(query.normalized, candidate, weights)
    score += _year_score(query.year, candidate.release_year, current_year, weights)
    score += _popularity_score(candidate.vote_count, weights)

    if candidate.vote_average is not None and candidate.vote_average > weights.rating_threshold:
        score += weights.rating_bonus

    return score


def rank_candidates(
    query: ParsedTitle,
    candidates: list[Candidate],
    current_year: int,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> list[ScoredCandidate]:
    """Score every candidate and sort by score, highest first (ties keep input order)."""
    scored = [
        ScoredCandidate(candidate=c, score=score_match(query, c, current_year, weights))
        for c in candidates
    ]
    return sorted(scored, key=lambda s: s.score, reverse=True)


def find_best_match(
    query: ParsedTitle | str,
    candidates: list[Candidate],
    current_year: int | None = None,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> Candidate | None:
    """
    Pick the candidate that best matches a listing title.

    Args:
        query: Parsed title, or a raw listing title to parse first
        candidates: Search results in the order the source returned them
        current_year: Defaults to the current calendar year
        weights: Scoring constants

    Returns:
        The top-scoring candidate when its score is positive, otherwise the
        first candidate as given; None only for an empty list
    """
    if not candidates:
        return None

    parsed = parse_title(query) if isinstance(query, str) else query
    year = current_year if current_year is not None else date.today().year

    best = rank_candidates(parsed, candidates, year, weights)[0]
    if best.score > 0:
        logger.debug(
            f"Best match for '{parsed.original}': '{best.candidate.title}' (score {best.score})"
        )
        return best.candidate

    logger.debug(
        f"No positive score for '{parsed.original}', falling back to '{candidates[0].title}'"
    )
    return candidates[0]
