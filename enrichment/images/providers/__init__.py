"""Image provider registry."""

from ..types import ImageSource
from .base import BaseImageProvider, OAuthImageProvider, PlaceholderImageProvider
from .google_books import GoogleBooksProvider
from .google_places import GooglePlacesProvider
from .igdb import IGDBProvider
from .spotify import SpotifyProvider
from .tmdb import TMDBProvider
from .unsplash import UnsplashProvider

PROVIDER_REGISTRY: dict[ImageSource, type[BaseImageProvider]] = {
    ImageSource.TMDB: TMDBProvider,
    ImageSource.IGDB: IGDBProvider,
    ImageSource.SPOTIFY: SpotifyProvider,
    ImageSource.GOOGLE_BOOKS: GoogleBooksProvider,
    ImageSource.GOOGLE_PLACES: GooglePlacesProvider,
    ImageSource.UNSPLASH: UnsplashProvider,
    ImageSource.PLACEHOLDER: PlaceholderImageProvider,
}

__all__ = [
    "BaseImageProvider",
    "OAuthImageProvider",
    "PlaceholderImageProvider",
    "TMDBProvider",
    "IGDBProvider",
    "SpotifyProvider",
    "GoogleBooksProvider",
    "GooglePlacesProvider",
    "UnsplashProvider",
    "PROVIDER_REGISTRY",
]
