"""Content-type routing for image lookups.

The registry maps content-type tags (cinema, game, place, ...) to provider
instances and runs the fetch -> validate -> fallback pipeline for each
request. It is built once at startup and handed to the request layer:

    registry = build_image_registry()
    url = await registry.get_image("cinema", "Pulp Fiction", "1994")
    ...
    await registry.close()
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from enrichment.utils.async_context import AsyncContextManager

from .config import ImageConfig, get_image_config
from .placeholders import get_placeholder_image_url, is_placeholder_url
from .providers import PROVIDER_REGISTRY, BaseImageProvider, PlaceholderImageProvider
from .types import (
    BOOK,
    CINEMA,
    GAME,
    GENERIC,
    MUSIC,
    PLACE,
    PLACE_CONTENT_TYPES,
    RESTAURANT,
    TRAVEL,
    YEAR_PATTERN,
    ImageRequest,
    ImageSource,
)

logger = logging.getLogger(__name__)

# Content type -> provider source bound by build_image_registry()
DEFAULT_BINDINGS: dict[str, ImageSource] = {
    CINEMA: ImageSource.TMDB,
    GAME: ImageSource.IGDB,
    MUSIC: ImageSource.SPOTIFY,
    BOOK: ImageSource.GOOGLE_BOOKS,
    PLACE: ImageSource.GOOGLE_PLACES,
    TRAVEL: ImageSource.GOOGLE_PLACES,
    RESTAURANT: ImageSource.GOOGLE_PLACES,
    GENERIC: ImageSource.UNSPLASH,
}


def build_search_query(
    content_type: str,
    title: str,
    year: str | None = None,
    location: str | None = None,
) -> str:
    """Combine title, location (place-like types only) and year.

    Providers parse the year back out of the string and apply it as a
    release-date filter where their API has one. A year that is not a
    4-digit 1900-2099 value is logged and left out.
    """
    parts = [title.strip()]
    if location and location.strip() and content_type in PLACE_CONTENT_TYPES:
        parts.append(location.strip())
    if year and year.strip():
        if YEAR_PATTERN.fullmatch(year.strip()):
            parts.append(year.strip())
        else:
            logger.warning(f"Ignoring invalid year '{year}' for {content_type} '{title}'")
    return " ".join(parts)


class ImageToolRegistry(AsyncContextManager):
    """Maps content types to image providers.

    Several content types may share one provider instance. Lookups for
    unregistered types go to the provider registered as "generic", or to a
    placeholder-only provider when none is.
    """

    def __init__(self, fallback: BaseImageProvider | None = None):
        self._providers: dict[str, BaseImageProvider] = {}
        self._fallback = fallback

    def register(self, content_type: str, provider: BaseImageProvider) -> None:
        """Bind a content type to a provider instance."""
        self._providers[content_type] = provider
        logger.debug(f"Registered {provider.source.value} provider for '{content_type}'")

    @property
    def content_types(self) -> list[str]:
        return sorted(self._providers)

    def get_provider(self, content_type: str) -> BaseImageProvider:
        """Provider for a content type, falling back to the generic provider."""
        provider = self._providers.get(content_type)
        if provider is not None:
            return provider

        generic = self._providers.get(GENERIC)
        if generic is not None:
            return generic

        if self._fallback is None:
            self._fallback = PlaceholderImageProvider()
        return self._fallback

    async def get_image(
        self,
        content_type: str,
        title: str,
        year: str | None = None,
        location: str | None = None,
    ) -> str:
        """Image URL for an item, or the content type's placeholder.

        Never raises: image enrichment must not break the caller's flow.

        Args:
            content_type: Category tag, e.g. "cinema" or "restaurant"
            title: Free-text item title
            year: Optional release year, used as a filter where supported
            location: Optional location, appended for place-like types

        Returns:
            A validated provider URL or a placeholder URL
        """
        placeholder = get_placeholder_image_url(content_type)

        if not title or not title.strip():
            return placeholder

        try:
            provider = self.get_provider(content_type)
            search_query = build_search_query(content_type, title, year, location)

            image_url = await provider.fetch_image(search_query)
            if not image_url:
                return placeholder

            # Provider fallbacks are static and need no reachability check
            if is_placeholder_url(image_url):
                return image_url

            if not await provider.validate_image_url(image_url):
                logger.warning(f"Image URL validation failed for {content_type}: {image_url}")
                return placeholder

            logger.debug(f"Resolved {content_type} image for '{title}' via {provider.source.value}")
            return image_url
        except Exception as e:
            logger.error(f"Image lookup failed for {content_type} '{title}': {e}")
            return placeholder

    async def get_images(self, requests: Sequence[ImageRequest]) -> list[str]:
        """Resolve several lookups concurrently, preserving order."""
        return list(
            await asyncio.gather(
                *(
                    self.get_image(r.content_type, r.title, r.year, r.location)
                    for r in requests
                )
            )
        )

    async def close(self) -> None:
        """Close every distinct provider once."""
        providers = {id(p): p for p in self._providers.values()}
        if self._fallback is not None:
            providers[id(self._fallback)] = self._fallback
        for provider in providers.values():
            try:
                await provider.close()
            except Exception as e:
                logger.warning(f"Error closing {provider.source.value} provider: {e}")


def build_image_registry(
    config: ImageConfig | None = None,
    client: httpx.AsyncClient | None = None,
    bindings: dict[str, ImageSource] | None = None,
) -> ImageToolRegistry:
    """Create a registry with one provider instance per source.

    Content types bound to the same source share the instance (and so its
    OAuth token cache).

    Args:
        config: Provider configuration (default: from environment)
        client: Shared HTTP client; providers create their own when omitted
        bindings: Content type -> source map (default: DEFAULT_BINDINGS)
    """
    config = config or get_image_config()
    registry = ImageToolRegistry()
    instances: dict[ImageSource, BaseImageProvider] = {}

    for content_type, source in (bindings or DEFAULT_BINDINGS).items():
        if source not in instances:
            instances[source] = PROVIDER_REGISTRY[source](config, client)
        registry.register(content_type, instances[source])

    available = sorted(s.value for s, p in instances.items() if p.is_available)
    logger.info(f"Image registry ready; configured providers: {', '.join(available) or 'none'}")
    return registry
