"""Exception classes for image providers.

These never escape a provider's fetch_image() or the registry's get_image();
they signal which fallback path to take and how loudly to log it.
"""


class ImageError(Exception):
    """Base image service exception."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(ImageError):
    """Provider credentials are not configured."""

    pass


class NoResultsError(ImageError):
    """No result, or a result without an image field."""

    pass


class ProviderError(ImageError):
    """Upstream transport failure or non-success status."""

    pass


class RateLimitError(ProviderError):
    """API rate limit exceeded."""

    pass
