"""Google Places (New) photo provider.

API: https://developers.google.com/maps/documentation/places/web-service/text-search
Auth: API key in the X-Goog-Api-Key header (billing must be enabled)

Two requests per lookup: Text Search finds the place and its photo
references, then Place Photos resolves the first photo to a CDN URI. Resolving
server-side keeps the API key out of the URL handed back to callers.
"""

import logging

from enrichment.utils.http_errors import safe_http_request

from ..errors import ConfigurationError, NoResultsError, ProviderError
from ..types import PLACE, ImageSource, SearchQuery
from .base import BaseImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://places.googleapis.com/v1"
FIELD_MASK = "places.id,places.displayName,places.photos,places.formattedAddress"

FORBIDDEN_HINT = (
    "Common causes:\n"
    "1. Billing not enabled on the Google Cloud project (required even with free credit)\n"
    "2. Places API (New) not enabled at "
    "https://console.cloud.google.com/apis/library/places-backend.googleapis.com\n"
    "3. API key restrictions blocking server-side requests "
    '(use "None" or "IP addresses", not "HTTP referrers")\n'
    "4. Check the API key at https://console.cloud.google.com/apis/credentials"
)


class GooglePlacesProvider(BaseImageProvider):
    """Place photos from Google Places."""

    content_type = PLACE
    trusted_hosts = ("places.googleapis.com", "googleusercontent.com")
    status_hints = {403: FORBIDDEN_HINT}

    @property
    def source(self) -> ImageSource:
        return ImageSource.GOOGLE_PLACES

    @property
    def is_available(self) -> bool:
        return self._config.google_places_available

    async def _fetch(self, query: SearchQuery) -> str | None:
        if not self.is_available:
            raise ConfigurationError("Google Places API key not configured", provider="google_places")

        client = await self._get_client()

        # Places have no release year, so search the full original text
        text_query = f"{query.text} {query.year}" if query.year else query.text

        response = await safe_http_request(
            client,
            "POST",
            f"{BASE_URL}/places:searchText",
            error_class=ProviderError,
            json={"textQuery": text_query, "languageCode": "en", "maxResultCount": 1},
            headers={
                "X-Goog-Api-Key": self._config.google_places_api_key,
                "X-Goog-FieldMask": FIELD_MASK,
            },
        )

        places = response.json().get("places") or []
        if not places:
            raise NoResultsError(f"No place found for query: {text_query}", provider="google_places")

        place = places[0]
        name = (place.get("displayName") or {}).get("text")
        photos = place.get("photos") or []
        if not photos or not photos[0].get("name"):
            raise NoResultsError(f"No photos available for place: {name}", provider="google_places")

        return await self._resolve_photo(photos[0]["name"])

    async def _resolve_photo(self, photo_name: str) -> str:
        """Turn a photo resource name (places/X/photos/Y) into a CDN URI."""
        client = await self._get_client()
        response = await safe_http_request(
            client,
            "GET",
            f"{BASE_URL}/{photo_name}/media",
            error_class=ProviderError,
            params={
                "maxWidthPx": self._config.places_photo_max_width,
                "skipHttpRedirect": "true",
            },
            headers={"X-Goog-Api-Key": self._config.google_places_api_key},
        )

        photo_uri = response.json().get("photoUri")
        if not photo_uri:
            raise NoResultsError(f"No photo URI returned for {photo_name}", provider="google_places")
        return photo_uri
