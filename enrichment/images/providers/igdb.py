"""IGDB game cover provider.

API: https://api-docs.igdb.com/
Auth: Twitch OAuth2 client credentials (IGDB is a Twitch service)
Queries are written in IGDB's Apicalypse language and POSTed as the body.
"""

import logging
from datetime import UTC, datetime

import httpx

from enrichment.utils.http_errors import safe_http_request

from ..errors import NoResultsError, ProviderError
from ..types import GAME, ImageSource, SearchQuery
from .base import OAuthImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://api.igdb.com/v4"
TOKEN_URL = "https://id.twitch.tv/oauth2/token"
# Sizes: cover_small (90x128), cover_big (264x374), 720p, 1080p
COVER_URL = "https://images.igdb.com/igdb/image/upload/t_cover_big/{image_id}.jpg"

FIELDS = "fields name,cover.image_id,first_release_date;"


def _quote(value: str) -> str:
    """Escape a value for use inside an Apicalypse string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_game_query(title: str, year_bounds: tuple[int, int] | None = None) -> str:
    """Build the Apicalypse body for a fuzzy name search.

    With year bounds, results are limited to games first released in that
    range; without, the most popular match wins.
    """
    where = f'where name ~ *"{_quote(title)}"* & cover != null'
    if year_bounds:
        start, end = year_bounds
        where += f" & first_release_date >= {start} & first_release_date <= {end}"
        return f"{FIELDS} {where}; limit 1;"
    return f"{FIELDS} {where}; sort popularity desc; limit 1;"


class IGDBProvider(OAuthImageProvider):
    """Game covers from the Internet Game Database."""

    content_type = GAME
    trusted_hosts = ("images.igdb.com",)
    status_hints = {
        401: "Check IGDB_CLIENT_ID / IGDB_CLIENT_SECRET at https://dev.twitch.tv/console/apps",
        429: "IGDB allows 4 requests per second per client.",
    }

    @property
    def source(self) -> ImageSource:
        return ImageSource.IGDB

    @property
    def is_available(self) -> bool:
        return self._config.igdb_available

    async def _request_token(self, client: httpx.AsyncClient) -> tuple[str, float | None]:
        response = await safe_http_request(
            client,
            "POST",
            TOKEN_URL,
            error_class=ProviderError,
            params={
                "client_id": self._config.igdb_client_id,
                "client_secret": self._config.igdb_client_secret,
                "grant_type": "client_credentials",
            },
        )
        data = response.json()
        return data.get("access_token", ""), data.get("expires_in")

    async def _query_games(self, client: httpx.AsyncClient, token: str, body: str) -> list[dict]:
        response = await safe_http_request(
            client,
            "POST",
            f"{BASE_URL}/games",
            error_class=ProviderError,
            content=body,
            headers={
                "Client-ID": self._config.igdb_client_id,
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )
        data = response.json()
        return data if isinstance(data, list) else []

    async def _fetch(self, query: SearchQuery) -> str | None:
        token = await self.get_access_token()
        client = await self._get_client()

        games: list[dict] = []

        # Year-filtered search first, then fall back to an unfiltered one
        bounds = query.year_bounds()
        if bounds:
            try:
                games = await self._query_games(
                    client, token, build_game_query(query.text, bounds)
                )
            except ProviderError as e:
                logger.warning(f"IGDB query with year failed, trying without year: {e.message}")
            if not games:
                logger.debug(f"No IGDB match for '{query.text}' in {query.year}")

        if not games:
            games = await self._query_games(client, token, build_game_query(query.text))

        if not games:
            raise NoResultsError(f"No game found for query: {query.text}", provider="igdb")

        game = games[0]
        image_id = (game.get("cover") or {}).get("image_id")
        if not image_id:
            raise NoResultsError(f"No cover available for game: {game.get('name')}", provider="igdb")

        released = game.get("first_release_date")
        if released:
            found_year = str(datetime.fromtimestamp(released, tz=UTC).year)
            self._log_year_mismatch(query, found_year, game.get("name"))

        return COVER_URL.format(image_id=image_id)
