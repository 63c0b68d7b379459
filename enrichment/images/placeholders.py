"""Branded fallback images, one per content type."""

from types import MappingProxyType

from .types import BOOK, CINEMA, FOOD, GAME, GENERIC, MUSIC, PLACE

PLACEHOLDER_IMAGES = MappingProxyType(
    {
        CINEMA: "https://placehold.co/600x400/4a5568/ffffff?text=Movie",
        MUSIC: "https://placehold.co/600x400/7c3aed/ffffff?text=Music",
        PLACE: "https://placehold.co/600x400/059669/ffffff?text=Place",
        BOOK: "https://placehold.co/600x400/dc2626/ffffff?text=Book",
        FOOD: "https://placehold.co/600x400/ea580c/ffffff?text=Food",
        GAME: "https://placehold.co/600x400/8b5cf6/ffffff?text=Game",
        GENERIC: "https://placehold.co/600x400/64748b/ffffff?text=Item",
    }
)

_PLACEHOLDER_URLS = frozenset(PLACEHOLDER_IMAGES.values())


def get_placeholder_image_url(content_type: str) -> str:
    """Placeholder URL for a content type; unknown types get the generic one."""
    return PLACEHOLDER_IMAGES.get(content_type, PLACEHOLDER_IMAGES[GENERIC])


def is_placeholder_url(url: str) -> bool:
    return url in _PLACEHOLDER_URLS
