"""Text normalization utilities for film title matching.

A listing title passes through a fixed pipeline: event markers are stripped
first, then a trailing year is extracted, then special-edition markers are
removed, and finally the remainder is normalised for comparison. Each step
is a total function and can be used on its own.
"""

import re
import unicodedata

from marquee.models.title import ParsedTitle

# Plain hyphens only count as separators when preceded by whitespace so that
# hyphenated titles like "Spider-Man" survive; en/em dashes always count.
_DASH = r"(?:\s+-|\s*[–—])\s*"

# Promotional suffixes added by the cinema. Each pattern is applied once, in order.
EVENT_MARKER_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Film – Presented by Someone", "Film - with Live Score"
    re.compile(
        _DASH
        + r"(?:presented by|introduced by|hosted by|with|live|special(?!\s+edition))\b.*$",
        re.IGNORECASE,
    ),
    # "Film + Shorts", "Film + Q&A with the Director"
    re.compile(r"\s*\+\s*(?:shorts?|q\s*&\s*a)\b.*$", re.IGNORECASE),
    # "Film (with Q&A)", "Film (Q&A)"
    re.compile(r"\s*\((?:with\s+)?q\s*&\s*a\)", re.IGNORECASE),
    # "Film (Live Commentary)"
    re.compile(r"\s*\(live commentary\)", re.IGNORECASE),
    # "Grease - Sing-Along", "Lord of the Rings — Marathon"
    re.compile(
        _DASH
        + r"(?:sing-?along|double feature|marathon|free screening|sneak preview"
        r"|advance screening)\b.*$",
        re.IGNORECASE,
    ),
    # "Film: The Experience"
    re.compile(r"\s*:\s*the experience\b.*$", re.IGNORECASE),
)

# Years must sit at the very end of the title. "(1922)" / "[1922]" is tried
# before a bare " 1922".
_BRACKETED_YEAR = re.compile(r"\s*[(\[]((?:19|20)\d{2})[)\]]\s*$")
_TRAILING_YEAR = re.compile(r"\s+((?:19|20)\d{2})\s*$")

# Cut/restoration variants, as regex fragments. Longer variants of the same
# word come first so "4K Remastered" is not left half-stripped.
SPECIAL_EDITION_MARKERS: tuple[str, ...] = (
    r"4k restoration",
    r"4k remaster(?:ed)?",
    r"director['’]s cut",
    r"directors cut",
    r"extended cut",
    r"extended edition",
    r"special edition",
    r"final cut",
    r"theatrical cut",
    r"anniversary edition",
    r"collector['’]s edition",
    r"unrated",
    r"remastered",
    r"restored",
    r"reconstructed",
    r"criterion",
)

# Optional "the" / ordinal swallowed with a marker: "The Final Cut", "25th Anniversary Edition"
_MARKER_PREFIX = r"(?:the\s+)?(?:\d+(?:st|nd|rd|th)\s+)?"

_EDITION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(shape.format(prefix=_MARKER_PREFIX, marker=marker), re.IGNORECASE)
    for marker in SPECIAL_EDITION_MARKERS
    for shape in (
        r"\s*[:\-–—]\s*{prefix}{marker}(?=\s*(?:$|[(\[]))",
        r"\s*\(\s*{prefix}{marker}\s*\)",
        r"\s*\[\s*{prefix}{marker}\s*\]",
        r"\s+{prefix}{marker}\s*$",
    )
)

LEADING_ARTICLES: tuple[str, ...] = (
    "the", "a", "an", "le", "la", "les", "el", "los", "das", "der", "die",
)


def strip_event_markers(title: str) -> str:
    """
    Remove cinema event suffixes from a title.

    Examples:
        "The Room – Presented by Greg Sestero" → "The Room"
        "Alien + Q&A" → "Alien"
        "Grease - Sing-Along" → "Grease"

    Args:
        title: Raw film title

    Returns:
        Title without event suffixes
    """
    for pattern in EVENT_MARKER_PATTERNS:
        title = pattern.sub("", title).strip()
    return title


def extract_year(title: str) -> tuple[str, int | None]:
    """
    Split a trailing year off a title.

    Args:
        title: Film title, event markers already removed

    Returns:
        The title without the year, and the year (None when absent)
    """
    for pattern in (_BRACKETED_YEAR, _TRAILING_YEAR):
        match = pattern.search(title)
        if match:
            remaining = title[: match.start()] + title[match.end() :]
            return remaining.strip(), int(match.group(1))
    return title, None


def strip_edition_markers(title: str) -> tuple[str, bool]:
    """
    Remove special-edition markers such as "Director's Cut" or "(Remastered)".

    Returns:
        The cleaned title and whether anything was removed
    """
    original = title
    for pattern in _EDITION_PATTERNS:
        title = pattern.sub("", title).strip()
    return title, title != original


def normalise_title(title: str) -> str:
    """
    Reduce a title to the canonical form used for comparisons.

    Lowercases, drops one leading article, removes punctuation other than
    "&", collapses whitespace and rewrites " and " as " & ".

    Args:
        title: Film title

    Returns:
        Normalised title, e.g. "The Lord of the Rings: The Two Towers"
        → "lord of the rings the two towers"
    """
    text = title.lower().strip()

    for article in LEADING_ARTICLES:
        if text.startswith(article + " "):
            text = text[len(article) + 1 :]
            break

    text = "".join(
        ch for ch in text if ch == "&" or not unicodedata.category(ch).startswith("P")
    )

    text = " ".join(text.split())
    text = text.replace(" and ", " & ")

    return text.strip()


def parse_title(title: str) -> ParsedTitle:
    """
    Parse a raw listing title into its comparable form and metadata.

    Never raises: a title with nothing to strip simply comes back with
    ``year=None`` and ``is_special_edition=False``.

    Args:
        title: Film title as it appears in the cinema's listing

    Returns:
        ParsedTitle for the title
    """
    working = strip_event_markers(title.strip())
    working, year = extract_year(working)
    working, is_special_edition = strip_edition_markers(working)

    return ParsedTitle(
        original=title,
        normalized=normalise_title(working),
        year=year,
        is_special_edition=is_special_edition,
        search_text=working,
    )
