"""Spotify album cover provider.

API: https://developer.spotify.com/documentation/web-api/reference/search
Auth: OAuth2 client credentials, exchanged with HTTP Basic auth
"""

import logging

import httpx

from enrichment.utils.http_errors import safe_http_request

from ..errors import NoResultsError, ProviderError
from ..types import MUSIC, ImageSource, SearchQuery
from .base import OAuthImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://api.spotify.com/v1"
TOKEN_URL = "https://accounts.spotify.com/api/token"

# Largest rendition we want; Spotify lists 640, 300 and 64 px covers
MAX_IMAGE_HEIGHT = 640


def pick_album_image(images: list[dict]) -> str | None:
    """First image no taller than MAX_IMAGE_HEIGHT, else the first image."""
    for image in images:
        height = image.get("height")
        if height and height <= MAX_IMAGE_HEIGHT and image.get("url"):
            return image["url"]
    return images[0].get("url") if images else None


class SpotifyProvider(OAuthImageProvider):
    """Album covers from the Spotify catalog."""

    content_type = MUSIC
    trusted_hosts = ("i.scdn.co",)
    status_hints = {
        401: "Spotify token rejected; check SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET.",
    }

    @property
    def source(self) -> ImageSource:
        return ImageSource.SPOTIFY

    @property
    def is_available(self) -> bool:
        return self._config.spotify_available

    async def _request_token(self, client: httpx.AsyncClient) -> tuple[str, float | None]:
        response = await safe_http_request(
            client,
            "POST",
            TOKEN_URL,
            error_class=ProviderError,
            auth=(self._config.spotify_client_id, self._config.spotify_client_secret),
            data={"grant_type": "client_credentials"},
        )
        data = response.json()
        return data.get("access_token", ""), data.get("expires_in")

    async def _fetch(self, query: SearchQuery) -> str | None:
        token = await self.get_access_token()
        client = await self._get_client()

        search = query.text
        if query.year:
            search += f" year:{query.year}"

        response = await safe_http_request(
            client,
            "GET",
            f"{BASE_URL}/search",
            error_class=ProviderError,
            params={"q": search, "type": "album", "limit": 1},
            headers={"Authorization": f"Bearer {token}"},
        )

        albums = (response.json().get("albums") or {}).get("items") or []
        if not albums:
            raise NoResultsError(f"No album found for query: {search}", provider="spotify")

        album = albums[0]
        image_url = pick_album_image(album.get("images") or [])
        if not image_url:
            raise NoResultsError(
                f"No cover image available for album: {album.get('name')}", provider="spotify"
            )

        self._log_year_mismatch(query, album.get("release_date"), album.get("name"))
        return image_url
