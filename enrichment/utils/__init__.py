"""Core utilities for async resources and HTTP error handling."""

from .async_context import AsyncContextManager
from .http_errors import safe_http_request

__all__ = [
    "AsyncContextManager",
    "safe_http_request",
]
