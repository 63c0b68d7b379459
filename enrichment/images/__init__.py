"""Content-aware image enrichment.

Attaches a representative image to a free-text title using a provider per
content domain: TMDB (movies), IGDB (games), Spotify (music), Google Books
(books), Google Places (places), Unsplash (everything else).

Example:
    from enrichment.images import build_image_registry

    async with build_image_registry() as registry:
        url = await registry.get_image("cinema", "Pulp Fiction", "1994")
        photo = await registry.get_image("restaurant", "Le Jules Verne", location="Paris")

get_image() always returns a URL: a real image when one is found and
reachable, otherwise a branded placeholder for the content type.

Environment Variables:
    See ImageConfig for the credential and timeout variables.
"""

from .config import ImageConfig, get_image_config
from .errors import (
    ConfigurationError,
    ImageError,
    NoResultsError,
    ProviderError,
    RateLimitError,
)
from .placeholders import PLACEHOLDER_IMAGES, get_placeholder_image_url, is_placeholder_url
from .providers import (
    PROVIDER_REGISTRY,
    BaseImageProvider,
    OAuthImageProvider,
    PlaceholderImageProvider,
)
from .registry import ImageToolRegistry, build_image_registry, build_search_query
from .tokens import TokenCache
from .types import AccessToken, ImageRequest, ImageSource, SearchQuery

__all__ = [
    # Registry
    "ImageToolRegistry",
    "build_image_registry",
    "build_search_query",
    # Providers
    "BaseImageProvider",
    "OAuthImageProvider",
    "PlaceholderImageProvider",
    "PROVIDER_REGISTRY",
    # Types
    "AccessToken",
    "ImageRequest",
    "ImageSource",
    "SearchQuery",
    "TokenCache",
    # Placeholders
    "PLACEHOLDER_IMAGES",
    "get_placeholder_image_url",
    "is_placeholder_url",
    # Config
    "ImageConfig",
    "get_image_config",
    # Errors
    "ImageError",
    "ConfigurationError",
    "NoResultsError",
    "ProviderError",
    "RateLimitError",
]
