"""Base provider classes for image sources."""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar
from urllib.parse import urlparse

import httpx

from enrichment.utils.async_context import AsyncContextManager

from ..config import ImageConfig
from ..errors import ConfigurationError, NoResultsError, ProviderError
from ..placeholders import get_placeholder_image_url
from ..tokens import TokenCache
from ..types import GENERIC, ImageSource, SearchQuery

logger = logging.getLogger(__name__)


class BaseImageProvider(AsyncContextManager, ABC):
    """Abstract base for image providers.

    Subclasses implement _fetch() and may raise ImageError subclasses freely;
    fetch_image() turns every failure into the provider's placeholder.
    """

    # Placeholder key for this provider's content domain
    content_type: ClassVar[str] = GENERIC
    # CDN domains whose URLs are returned without a HEAD check
    trusted_hosts: ClassVar[tuple[str, ...]] = ()
    # Extra diagnostics logged for specific upstream status codes
    status_hints: ClassVar[dict[int, str]] = {}

    def __init__(self, config: ImageConfig, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client (lazy initialization)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._config.timeout)
            self._owns_client = True
        return self._client

    @property
    @abstractmethod
    def source(self) -> ImageSource:
        """Provider source identifier."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether provider credentials are configured."""
        pass

    @abstractmethod
    async def _fetch(self, query: SearchQuery) -> str | None:
        """Run the upstream search protocol and return an image URL.

        Raises:
            ConfigurationError: Credentials missing
            ProviderError: Transport failure or non-success status
            NoResultsError: Empty result set or no image on the result
        """
        pass

    def placeholder(self) -> str:
        return get_placeholder_image_url(self.content_type)

    async def fetch_image(self, search_query: str) -> str | None:
        """Fetch an image URL for a free-text query such as "Pulp Fiction 1994".

        Never raises. Returns the provider's placeholder on any failure.
        """
        name = self.source.value
        try:
            query = SearchQuery.parse(search_query)
            return await self._fetch(query)
        except ConfigurationError as e:
            logger.warning(f"{name}: {e.message}")
        except NoResultsError as e:
            logger.warning(f"{name}: {e.message}")
        except ProviderError as e:
            status = f" (status {e.status_code})" if e.status_code else ""
            logger.error(f"{name} request failed{status}: {e.message}")
            hint = self.status_hints.get(e.status_code) if e.status_code else None
            if hint:
                logger.error(f"{name} {e.status_code} error. {hint}")
        except Exception as e:
            logger.error(f"Unexpected error fetching {name} image for '{search_query}': {e}")
        return self.placeholder()

    def is_trusted_url(self, image_url: str) -> bool:
        """Whether the URL's host is one of this provider's reliable CDNs."""
        host = (urlparse(image_url).hostname or "").lower()
        return any(host == domain or host.endswith(f".{domain}") for domain in self.trusted_hosts)

    async def validate_image_url(self, image_url: str) -> bool:
        """Check that an image URL is reachable.

        URLs on trusted CDN hosts skip the network round-trip. Everything else
        gets a HEAD request; any 2xx (after redirects) counts as valid.
        """
        if self.is_trusted_url(image_url):
            return True

        try:
            client = await self._get_client()
            response = await client.head(
                image_url,
                follow_redirects=True,
                timeout=self._config.validation_timeout,
            )
            return response.is_success
        except Exception as e:
            logger.error(f"URL validation failed for {image_url}: {e}")
            return False

    def _log_year_mismatch(self, query: SearchQuery, found: str | None, title: str | None) -> None:
        """Warn when the result's year differs from the requested one.

        The candidate is still used.
        """
        if query.year and found and found[:4] != query.year:
            logger.warning(
                f"Year mismatch: requested {query.year}, found {found[:4]} for \"{title}\""
            )

    async def close(self) -> None:
        """Close HTTP client if this provider created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


class OAuthImageProvider(BaseImageProvider):
    """Provider authenticated with an OAuth2 client-credentials bearer token.

    The token lives in a TokenCache owned by this instance and is only
    re-requested once it is missing or expired.
    """

    def __init__(self, config: ImageConfig, client: httpx.AsyncClient | None = None):
        super().__init__(config, client)
        self._token_cache = TokenCache()

    @abstractmethod
    async def _request_token(self, client: httpx.AsyncClient) -> tuple[str, float | None]:
        """Exchange client credentials for (access_token, expires_in_seconds or None)."""
        pass

    async def get_access_token(self) -> str:
        """Return a valid bearer token, exchanging credentials if needed.

        Raises:
            ConfigurationError: Client credentials not configured
            ProviderError: Token endpoint failed
        """
        token = self._token_cache.get()
        if token:
            return token

        if not self.is_available:
            raise ConfigurationError(
                f"{self.source.value} credentials not configured",
                provider=self.source.value,
            )

        client = await self._get_client()
        access_token, expires_in = await self._request_token(client)
        if not access_token:
            raise ProviderError(
                f"{self.source.value} token response missing access_token",
                provider=self.source.value,
            )
        self._token_cache.store(access_token, expires_in)
        logger.info(f"Obtained {self.source.value} access token")
        return access_token


class PlaceholderImageProvider(BaseImageProvider):
    """Fallback provider with no upstream: always the generic placeholder."""

    def __init__(self, config: ImageConfig | None = None, client: httpx.AsyncClient | None = None):
        super().__init__(config or ImageConfig(), client)

    @property
    def source(self) -> ImageSource:
        return ImageSource.PLACEHOLDER

    @property
    def is_available(self) -> bool:
        return True

    async def _fetch(self, query: SearchQuery) -> str | None:
        return self.placeholder()
