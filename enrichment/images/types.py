"""Type definitions for image enrichment."""

import re
import time
from calendar import timegm
from enum import Enum

from pydantic import BaseModel, Field

YEAR_PATTERN = re.compile(r"\b(19\d{2}|20\d{2})\b")
# A year token, optionally wrapped as "(1994)" or "[1994]" so the brackets go with it
YEAR_TOKEN = re.compile(r"[(\[]\s*(19\d{2}|20\d{2})\s*[)\]]|\b(19\d{2}|20\d{2})\b")

CINEMA = "cinema"
GAME = "game"
MUSIC = "music"
BOOK = "book"
PLACE = "place"
TRAVEL = "travel"
RESTAURANT = "restaurant"
FOOD = "food"
GENERIC = "generic"

# Content types whose search string gets the caller's location appended
PLACE_CONTENT_TYPES = frozenset({PLACE, TRAVEL, RESTAURANT})


class ImageSource(str, Enum):
    """Supported image providers."""

    TMDB = "tmdb"
    IGDB = "igdb"
    SPOTIFY = "spotify"
    GOOGLE_BOOKS = "google_books"
    GOOGLE_PLACES = "google_places"
    UNSPLASH = "unsplash"
    PLACEHOLDER = "placeholder"


class SearchQuery(BaseModel):
    """Free-text search term with an optional release year pulled out of it."""

    text: str = Field(description="Search term with the year token removed")
    year: str | None = Field(default=None, description="4-digit year, 1900-2099")

    @classmethod
    def parse(cls, raw: str) -> "SearchQuery":
        """Split a combined "title [location] [year]" string.

        The last year token is removed from the text, so a year appended after
        a title that itself contains one ("2001: A Space Odyssey 1968") is the
        one taken. Brackets around the year ("Pulp Fiction (1994)") are removed
        with it. A string that is only a year (a book called "1984") is kept as
        text with no year.
        """
        raw = " ".join(raw.split())
        matches = list(YEAR_TOKEN.finditer(raw))
        if not matches:
            return cls(text=raw)

        match = matches[-1]
        text = " ".join((raw[: match.start()] + " " + raw[match.end() :]).split())
        if not text:
            return cls(text=raw)
        return cls(text=text, year=match.group(1) or match.group(2))

    def year_bounds(self) -> tuple[int, int] | None:
        """First and last second of the year as UTC epoch seconds."""
        if not self.year:
            return None
        year = int(self.year)
        start = timegm((year, 1, 1, 0, 0, 0))
        end = timegm((year + 1, 1, 1, 0, 0, 0)) - 1
        return start, end


class AccessToken(BaseModel):
    """OAuth bearer token with its (safety-adjusted) expiry."""

    token: str
    expires_at_ms: int

    def is_valid(self, now_ms: int | None = None) -> bool:
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return now_ms < self.expires_at_ms


class ImageRequest(BaseModel):
    """One image lookup, as produced by the enrichment/suggestion flows."""

    content_type: str = GENERIC
    title: str
    year: str | None = None
    location: str | None = None
