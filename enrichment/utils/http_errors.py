"""HTTP error handling for provider calls."""

import logging
from typing import Any, Callable

import httpx

logger = logging.getLogger(__name__)


async def safe_http_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    error_class: Callable[..., Exception],
    **kwargs: Any,
) -> httpx.Response:
    """
    Send a request and return the response only if it succeeded.

    Every failure is logged (without the query string, which can carry API
    keys) and re-raised as ``error_class``. Non-2xx responses pass their
    status through as ``status_code`` so callers can attach diagnostics.

    Args:
        client: httpx.AsyncClient instance
        method: HTTP method (GET, POST, HEAD, ...)
        url: Absolute request URL
        error_class: Exception type accepting ``(message, status_code=None)``
        **kwargs: Passed through to ``client.request``

    Raises:
        error_class: On transport errors, timeouts and non-2xx statuses
    """
    target = f"{method} {_redact(url)}"
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"{target} returned HTTP {status}")
        raise error_class(f"HTTP {status}: {e.response.text[:500]}", status_code=status) from e
    except httpx.TimeoutException as e:
        logger.error(f"{target} timed out: {e!r}")
        raise error_class(f"Request timeout: {e!r}") from e
    except httpx.TransportError as e:
        logger.error(f"{target} failed to connect: {e!r}")
        raise error_class(f"Connection failed: {e!r}") from e
    except Exception as e:
        logger.error(f"{target} failed unexpectedly: {e}")
        raise error_class(f"Request failed: {e}") from e
    return response


def _redact(url: str) -> str:
    """Drop the query string."""
    return url.split("?", 1)[0]
