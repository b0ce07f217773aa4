"""Match report: show how each listing title is parsed and which TMDb film it matches."""

import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import TypedDict

from marquee.models.movie import MovieAggregate
from marquee.services.listings import ListingService
from marquee.services.schedule import tonight
from marquee.services.title_matcher import find_best_match, score_match
from marquee.services.tmdb_client import TMDbClient
from marquee.utils.text import parse_title

logger = logging.getLogger(__name__)


class TitleResult(TypedDict):
    title: str
    normalized: str
    year: int | None
    special_edition: bool
    showtimes: int
    match: str | None
    score: int | None


async def build_report(
    movies: list[MovieAggregate], tmdb: TMDbClient | None
) -> list[TitleResult]:
    """Parse every title and, when a TMDb client is given, report its best TMDb match."""
    results: list[TitleResult] = []
    current_year = date.today().year

    for movie in movies:
        parsed = parse_title(movie.display_title)
        match: str | None = None
        score: int | None = None

        if tmdb:
            candidates = await tmdb.search_movies(parsed.search_text or movie.display_title)
            # Report the film enrichment would attach, with its own score
            best = find_best_match(parsed, candidates, current_year)
            if best is not None:
                score = score_match(parsed, best, current_year)
                year = best.release_year
                match = f"{best.title} ({year})" if year else best.title

        results.append(
            {
                "title": movie.display_title,
                "normalized": parsed.normalized,
                "year": parsed.year,
                "special_edition": parsed.is_special_edition,
                "showtimes": len(movie.showtimes),
                "match": match,
                "score": score,
            }
        )

    return results


async def match_report(enrich: bool, tonight_only: bool) -> bool:
    """Print a match report and return True if every title was matched."""
    service = ListingService()
    movies = await service.fetch_movies(enrich=False)
    if tonight_only:
        movies = tonight(movies)

    if not movies:
        print("No movies found in the listing.")
        return False

    tmdb = TMDbClient() if enrich else None
    if tmdb and not tmdb.api_key:
        logger.error("TMDB_API_KEY not set, reporting parsed titles only")
        tmdb = None

    report = await build_report(movies, tmdb)

    print(f"{len(report)} movie(s) in listing\n")
    for r in report:
        edition = " [edition]" if r["special_edition"] else ""
        year = f" ({r['year']})" if r["year"] else ""
        print(f"  {r['title']:<50} -> {r['normalized']}{year}{edition}")
        if tmdb:
            if r["match"]:
                print(f"      TMDb: {r['match']}  score {r['score']}")
            else:
                print("      TMDb: no match")

    if not tmdb:
        return True

    unmatched = [r["title"] for r in report if not r["match"]]
    if unmatched:
        print(f"\nWARNING: {len(unmatched)} title(s) without a TMDb match:")
        for title in unmatched:
            print(f"  - {title}")
        return False

    print("\nAll titles matched.")
    return True


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    parser = argparse.ArgumentParser(
        description="Show how listing titles are parsed and matched against TMDb."
    )
    parser.add_argument(
        "--no-enrich",
        action="store_true",
        help="Only parse titles; do not query TMDb",
    )
    parser.add_argument(
        "--tonight",
        action="store_true",
        help="Only include movies showing today",
    )
    args = parser.parse_args()

    ok = asyncio.run(match_report(enrich=not args.no_enrich, tonight_only=args.tonight))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
