"""Google Books cover provider.

API: https://developers.google.com/books/docs/v1/using
Auth: optional API key (anonymous searches work at a lower daily quota)
"""

import logging

from enrichment.utils.http_errors import safe_http_request

from ..errors import NoResultsError, ProviderError
from ..types import BOOK, ImageSource, SearchQuery
from .base import BaseImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://www.googleapis.com/books/v1"

# Preferred cover sizes, best first
IMAGE_SIZES = ("large", "medium", "thumbnail", "smallThumbnail")


def pick_cover(image_links: dict) -> str | None:
    """Best available cover link, upgraded to HTTPS."""
    for size in IMAGE_SIZES:
        url = image_links.get(size)
        if url:
            return url.replace("http://", "https://", 1)
    return None


class GoogleBooksProvider(BaseImageProvider):
    """Book covers from Google Books."""

    content_type = BOOK
    trusted_hosts = ("books.google.com", "books.googleusercontent.com")
    status_hints = {
        429: "Google Books daily quota exhausted; set GOOGLE_BOOKS_API_KEY for a higher limit.",
    }

    @property
    def source(self) -> ImageSource:
        return ImageSource.GOOGLE_BOOKS

    @property
    def is_available(self) -> bool:
        return self._config.google_books_available

    async def _fetch(self, query: SearchQuery) -> str | None:
        client = await self._get_client()

        params: dict = {
            "q": f"intitle:{query.text}",
            "maxResults": 1,
            "printType": "books",
        }
        if self._config.google_books_api_key:
            params["key"] = self._config.google_books_api_key

        response = await safe_http_request(
            client,
            "GET",
            f"{BASE_URL}/volumes",
            error_class=ProviderError,
            params=params,
        )

        items = response.json().get("items") or []
        if not items:
            raise NoResultsError(f"No book found for query: {query.text}", provider="google_books")

        volume = items[0].get("volumeInfo") or {}
        title = volume.get("title")
        image_links = volume.get("imageLinks")
        if not image_links:
            raise NoResultsError(f"No cover image available for book: {title}", provider="google_books")

        image_url = pick_cover(image_links)
        if not image_url:
            raise NoResultsError(f"No valid image URL for book: {title}", provider="google_books")

        self._log_year_mismatch(query, volume.get("publishedDate"), title)
        return image_url
