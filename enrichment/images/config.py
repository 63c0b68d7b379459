"""Configuration for image providers."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env(name: str) -> str | None:
    """Read an environment variable, treating blank values as unset."""
    value = os.environ.get(name, "").strip()
    return value or None


@dataclass
class ImageConfig:
    """Configuration for the image providers.

    Any missing credential degrades that provider to placeholder-only
    behavior; nothing here is required at startup.

    Environment Variables:
        TMDB_API_KEY: TMDB v3 API key (movies)
        IGDB_CLIENT_ID / IGDB_CLIENT_SECRET: Twitch app credentials (games)
        SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET: Spotify app credentials (music)
        GOOGLE_BOOKS_API_KEY: Optional, raises Google Books quota (books)
        GOOGLE_PLACES_API_KEY: Places API (New) key (places)
        UNSPLASH_ACCESS_KEY: Unsplash access key (generic photography)
        IMAGE_TIMEOUT: Per-request timeout in seconds (default: 10)
        IMAGE_VALIDATION_TIMEOUT: HEAD validation timeout in seconds (default: 5)
        GOOGLE_PLACES_PHOTO_MAX_WIDTH: Place photo width in pixels (default: 800)
    """

    tmdb_api_key: str | None = field(default_factory=lambda: _env("TMDB_API_KEY"))
    igdb_client_id: str | None = field(default_factory=lambda: _env("IGDB_CLIENT_ID"))
    igdb_client_secret: str | None = field(
        default_factory=lambda: _env("IGDB_CLIENT_SECRET")
    )
    spotify_client_id: str | None = field(
        default_factory=lambda: _env("SPOTIFY_CLIENT_ID")
    )
    spotify_client_secret: str | None = field(
        default_factory=lambda: _env("SPOTIFY_CLIENT_SECRET")
    )
    google_books_api_key: str | None = field(
        default_factory=lambda: _env("GOOGLE_BOOKS_API_KEY")
    )
    google_places_api_key: str | None = field(
        default_factory=lambda: _env("GOOGLE_PLACES_API_KEY")
    )
    unsplash_access_key: str | None = field(
        default_factory=lambda: _env("UNSPLASH_ACCESS_KEY")
    )
    timeout: float = field(
        default_factory=lambda: float(_env("IMAGE_TIMEOUT") or "10")
    )
    validation_timeout: float = field(
        default_factory=lambda: float(_env("IMAGE_VALIDATION_TIMEOUT") or "5")
    )
    places_photo_max_width: int = field(
        default_factory=lambda: int(_env("GOOGLE_PLACES_PHOTO_MAX_WIDTH") or "800")
    )

    @property
    def tmdb_available(self) -> bool:
        return bool(self.tmdb_api_key)

    @property
    def igdb_available(self) -> bool:
        return bool(self.igdb_client_id and self.igdb_client_secret)

    @property
    def spotify_available(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @property
    def google_books_available(self) -> bool:
        """Google Books allows anonymous searches at a lower quota."""
        return True

    @property
    def google_places_available(self) -> bool:
        return bool(self.google_places_api_key)

    @property
    def unsplash_available(self) -> bool:
        return bool(self.unsplash_access_key)


_config: ImageConfig | None = None


def get_image_config() -> ImageConfig:
    """Get global ImageConfig instance."""
    global _config
    if _config is None:
        _config = ImageConfig()
    return _config
