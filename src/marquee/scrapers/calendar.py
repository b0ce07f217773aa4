"""Calendar page scraper using Schema.org JSON-LD event data."""

import html
import json
import logging
from typing import Any

import httpx
from bs4 import BeautifulSoup

from marquee.config import settings
from marquee.scrapers.base import BaseScraper
from marquee.scrapers.models import ScreeningEvent

logger = logging.getLogger(__name__)


class CalendarScraper(BaseScraper):
    """
    Scraper for a cinema calendar page that embeds its screenings as JSON-LD.

    Each screening is a Schema.org ``Event``. Pages either wrap them in an
    ``@graph`` array alongside other object types, list them in a top-level
    array, or carry a single event per script block.
    """

    def __init__(self, url: str | None = None) -> None:
        self.url = url or settings.listing_url

    async def get_events(self) -> list[ScreeningEvent]:
        """Fetch screening events from the calendar page."""
        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout, follow_redirects=True
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                events = self._parse_html(response.text)

        except Exception as e:
            logger.error(f"Calendar scraper error for {self.url}: {e}", exc_info=True)
            return []

        logger.info(f"Calendar: Found {len(events)} screening events")
        return events

    def _parse_html(self, page: str) -> list[ScreeningEvent]:
        """Collect events from every JSON-LD script block on the page."""
        soup = BeautifulSoup(page, "html.parser")
        blocks = soup.find_all("script", type="application/ld+json")
        logger.debug(f"Calendar: {len(blocks)} JSON-LD blocks found")

        events: list[ScreeningEvent] = []
        for block in blocks:
            raw = block.string or block.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.warning(f"Calendar: Skipping invalid JSON-LD block: {e}")
                continue
            events.extend(self._parse_events(data))

        return events

    def _parse_events(self, data: Any) -> list[ScreeningEvent]:
        """Extract Event objects from one decoded JSON-LD document."""
        if isinstance(data, list):
            items = data
        elif isinstance(data, dict) and isinstance(data.get("@graph"), list):
            items = data["@graph"]
        elif isinstance(data, dict):
            items = [data]
        else:
            return []

        events: list[ScreeningEvent] = []
        for item in items:
            event = self._parse_event(item)
            if event:
                events.append(event)
        return events

    def _parse_event(self, item: Any) -> ScreeningEvent | None:
        if not isinstance(item, dict) or item.get("@type") != "Event":
            return None

        name = item.get("name")
        start_date = item.get("startDate")
        if not isinstance(name, str) or not isinstance(start_date, str):
            return None

        end_date = item.get("endDate")

        return ScreeningEvent(
            title=html.unescape(name).strip(),
            start_time=start_date,
            end_time=end_date if isinstance(end_date, str) else None,
            image_ref=self._extract_image(item.get("image")),
        )

    def _extract_image(self, image: Any) -> str | None:
        """Image may be a plain URL string or an ImageObject with a ``url``."""
        if isinstance(image, str):
            return image or None
        if isinstance(image, dict) and isinstance(image.get("url"), str):
            return image["url"] or None
        return None
