"""In-memory cache of enrichment results."""

import logging
from dataclasses import dataclass

from marquee.config import settings
from marquee.models.movie import MovieInfo
from marquee.utils.text import parse_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    info: MovieInfo
    version: int


class MovieInfoCache:
    """
    Cache of MovieInfo keyed by normalised (lowercase) listing title.

    Listing titles that differ only in noise ("Dune", "DUNE: Director's Cut")
    share an entry; a trailing year keeps same-named films apart.

    Every entry remembers the cache version it was stored under. Bumping the
    version with ``invalidate()`` turns all earlier entries into misses
    without touching them.
    """

    def __init__(self, version: int | None = None) -> None:
        self.version = version if version is not None else settings.cache_version
        self._entries: dict[str, _Entry] = {}

    @staticmethod
    def key(title: str) -> str:
        """Cache key for a listing title: its normalised form plus any year."""
        parsed = parse_title(title)
        if parsed.year:
            return f"{parsed.normalized} ({parsed.year})"
        return parsed.normalized

    def get(self, title: str) -> MovieInfo | None:
        entry = self._entries.get(self.key(title))
        if entry is None or entry.version != self.version:
            return None
        return entry.info

    def set(self, title: str, info: MovieInfo) -> None:
        self._entries[self.key(title)] = _Entry(info=info, version=self.version)

    def invalidate(self) -> int:
        """Discard all current entries by moving to a new version."""
        self.version += 1
        logger.info(f"Movie info cache invalidated, now at version {self.version}")
        return self.version

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return sum(1 for entry in self._entries.values() if entry.version == self.version)
