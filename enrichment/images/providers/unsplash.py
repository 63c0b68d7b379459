"""Unsplash image provider.

API: https://unsplash.com/documentation
Rate limit: 50 requests/hour (demo), 5000/hour (production)
License: Unsplash License (free, attribution required)
"""

import logging

from enrichment.utils.http_errors import safe_http_request

from ..errors import ConfigurationError, NoResultsError, ProviderError, RateLimitError
from ..types import GENERIC, ImageSource, SearchQuery
from .base import BaseImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://api.unsplash.com"


class UnsplashProvider(BaseImageProvider):
    """Generic photography from Unsplash, the fallback for untyped content."""

    content_type = GENERIC
    trusted_hosts = ("images.unsplash.com",)
    status_hints = {
        401: (
            "Check that UNSPLASH_ACCESS_KEY is set correctly and valid at "
            "https://unsplash.com/oauth/applications"
        ),
        403: (
            "This may indicate the rate limit was exceeded (50 requests/hour for "
            "demo apps) or the app needs approval for production mode."
        ),
    }

    @property
    def source(self) -> ImageSource:
        return ImageSource.UNSPLASH

    @property
    def is_available(self) -> bool:
        return self._config.unsplash_available

    async def _fetch(self, query: SearchQuery) -> str | None:
        if not self.is_available:
            raise ConfigurationError("Unsplash access key not configured", provider="unsplash")

        client = await self._get_client()

        # Photos have no release year; keep it as a search keyword
        search = f"{query.text} {query.year}" if query.year else query.text

        try:
            response = await safe_http_request(
                client,
                "GET",
                f"{BASE_URL}/search/photos",
                error_class=ProviderError,
                params={"query": search, "per_page": 1, "orientation": "landscape"},
                headers={"Authorization": f"Client-ID {self._config.unsplash_access_key}"},
            )
        except ProviderError as e:
            if e.status_code == 429:
                raise RateLimitError(
                    "Unsplash rate limit exceeded", provider="unsplash", status_code=429
                ) from e
            raise

        results = response.json().get("results") or []
        if not results:
            raise NoResultsError(f"No image found on Unsplash for query: {search}", provider="unsplash")

        photo = results[0]
        image_url = (photo.get("urls") or {}).get("regular")
        if not image_url:
            raise NoResultsError(f"Unsplash photo {photo.get('id')} has no regular URL", provider="unsplash")

        # Unsplash requires attribution when the photo is displayed
        user = photo.get("user") or {}
        logger.info(f"Using Unsplash photo by {user.get('name')} (@{user.get('username')})")
        return image_url
