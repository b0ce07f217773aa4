"""Base scraper interface for cinema listing sources."""

from abc import ABC, abstractmethod

from marquee.scrapers.models import ScreeningEvent


class BaseScraper(ABC):
    """
    Abstract base class for listing scrapers.

    All scrapers must implement the get_events method.
    """

    @abstractmethod
    async def get_events(self) -> list[ScreeningEvent]:
        """
        Fetch every screening currently published by the cinema.

        Returns:
            List of screening events in listing order

        Raises:
            Should NOT raise exceptions. Return empty list on errors and log warnings.
        """
        pass
