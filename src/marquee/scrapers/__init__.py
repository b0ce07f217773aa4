"""Listing scrapers."""

from marquee.scrapers.base import BaseScraper
from marquee.scrapers.calendar import CalendarScraper
from marquee.scrapers.models import ScreeningEvent

__all__ = ["BaseScraper", "CalendarScraper", "ScreeningEvent"]
