"""TMDB movie poster provider.

API: https://developer.themoviedb.org/reference/search-movie
Auth: v3 API key in the query string
"""

import logging

from enrichment.utils.http_errors import safe_http_request

from ..errors import ConfigurationError, NoResultsError, ProviderError
from ..types import CINEMA, ImageSource, SearchQuery
from .base import BaseImageProvider

logger = logging.getLogger(__name__)

BASE_URL = "https://api.themoviedb.org/3"
IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"


class TMDBProvider(BaseImageProvider):
    """Movie posters from The Movie Database."""

    content_type = CINEMA
    trusted_hosts = ("image.tmdb.org",)
    status_hints = {
        401: "Check that TMDB_API_KEY is a valid v3 API key.",
    }

    @property
    def source(self) -> ImageSource:
        return ImageSource.TMDB

    @property
    def is_available(self) -> bool:
        return self._config.tmdb_available

    async def _fetch(self, query: SearchQuery) -> str | None:
        if not self.is_available:
            raise ConfigurationError("TMDB API key not configured", provider="tmdb")

        client = await self._get_client()

        params: dict = {"api_key": self._config.tmdb_api_key, "query": query.text}
        if query.year:
            params["year"] = query.year

        response = await safe_http_request(
            client,
            "GET",
            f"{BASE_URL}/search/movie",
            error_class=ProviderError,
            params=params,
        )

        results = response.json().get("results") or []
        if not results:
            raise NoResultsError(f"No movie found for query: {query.text}", provider="tmdb")

        movie = results[0]
        image_path = movie.get("poster_path") or movie.get("backdrop_path")
        if not image_path:
            raise NoResultsError(
                f"No image available for movie: {movie.get('title')}", provider="tmdb"
            )

        self._log_year_mismatch(query, movie.get("release_date"), movie.get("title"))
        return f"{IMAGE_BASE_URL}{image_path}"
