"""In-memory OAuth token cache owned by a single provider instance."""

import logging
import time
from typing import Callable

from .types import AccessToken

logger = logging.getLogger(__name__)

# Tokens are treated as expired this long before their declared expiry
DEFAULT_SAFETY_MARGIN_S = 300.0
# Lifetime assumed when the issuer omits expires_in, and the shortest one honoured
DEFAULT_TOKEN_LIFETIME_S = 3600.0
MIN_TOKEN_LIFETIME_S = 60.0


class TokenCache:
    """Holds one bearer token and its expiry.

    Not locked: two concurrent callers that both find the token missing will
    both fetch a new one, and the last store wins.
    """

    def __init__(
        self,
        safety_margin_s: float = DEFAULT_SAFETY_MARGIN_S,
        clock: Callable[[], float] = time.time,
    ):
        self._safety_margin_s = safety_margin_s
        self._clock = clock
        self._token: AccessToken | None = None

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def get(self) -> str | None:
        """Cached token, or None when absent or expired."""
        if self._token and self._token.is_valid(self._now_ms()):
            return self._token.token
        return None

    def store(self, token: str, expires_in_s: float | None) -> AccessToken:
        """Cache a token that the issuer says is valid for expires_in_s seconds.

        A missing or zero lifetime counts as DEFAULT_TOKEN_LIFETIME_S. The
        safety margin never takes more than half the lifetime, so a
        short-lived token is still reused.
        """
        lifetime_s = max(MIN_TOKEN_LIFETIME_S, float(expires_in_s or DEFAULT_TOKEN_LIFETIME_S))
        valid_for_s = lifetime_s - min(self._safety_margin_s, lifetime_s / 2)
        expires_at_ms = self._now_ms() + int(valid_for_s * 1000)
        self._token = AccessToken(token=token, expires_at_ms=expires_at_ms)
        logger.debug(f"Cached access token valid for {valid_for_s:.0f}s")
        return self._token

    def clear(self) -> None:
        self._token = None

    @property
    def token(self) -> AccessToken | None:
        return self._token
