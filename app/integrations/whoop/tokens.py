"""Whoop OAuth token storage on top of the shared token cache.

Two keys are used:

- ``whoop:access_token``: JSON ``{"token": ..., "expiresAt": <epoch ms>}``,
  stored with a TTL that ends five minutes before the token expires
- ``whoop:refresh_token``: the latest refresh token, stored without TTL

Whoop rotates the refresh token on every refresh, so the cached copy is
always preferred over the one from configuration.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass

from loguru import logger

from app.core.cache import TokenCache
from app.core.logger import mask_token

ACCESS_TOKEN_KEY = "whoop:access_token"
REFRESH_TOKEN_KEY = "whoop:refresh_token"
EXPIRY_BUFFER_SECONDS = 300


def _now() -> float:
    return time.time()


@dataclass(frozen=True)
class AccessToken:
    token: str
    expires_at: float  # epoch seconds

    def is_fresh(self) -> bool:
        """True while more than five minutes of validity remain."""
        return _now() < self.expires_at - EXPIRY_BUFFER_SECONDS


class WhoopTokenStore:
    """Reads and writes Whoop tokens; every method is a no-op without a cache."""

    def __init__(self, cache: TokenCache | None):
        self._cache = cache

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    async def get_access_token(self) -> AccessToken | None:
        if self._cache is None:
            return None

        raw = await self._cache.get(ACCESS_TOKEN_KEY)
        if not raw:
            return None

        try:
            payload = json.loads(raw)
            token = AccessToken(token=payload["token"], expires_at=payload["expiresAt"] / 1000)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[WHOOP_TOKENS] Ignoring malformed cached access token: {e}")
            return None

        if not token.is_fresh():
            logger.debug("[WHOOP_TOKENS] Cached access token is expiring, ignoring it")
            return None
        return token

    async def get_refresh_token(self) -> str | None:
        if self._cache is None:
            return None
        return await self._cache.get(REFRESH_TOKEN_KEY)

    async def store_tokens(self, access_token: str, refresh_token: str, expires_at: float) -> bool:
        """Cache a freshly issued token pair.

        Args:
            access_token: New access token
            refresh_token: New (rotated) refresh token
            expires_at: Access token expiry, epoch seconds

        Returns:
            True if both writes succeeded
        """
        if self._cache is None:
            return False

        ttl = int(expires_at - _now()) - EXPIRY_BUFFER_SECONDS
        payload = json.dumps({"token": access_token, "expiresAt": int(expires_at * 1000)})
        stored_access = True
        if ttl > 0:
            stored_access = await self._cache.set(ACCESS_TOKEN_KEY, payload, ttl_seconds=ttl)
        stored_refresh = await self._cache.set(REFRESH_TOKEN_KEY, refresh_token)

        logger.info(
            f"[WHOOP_TOKENS] Stored tokens access_ttl={ttl}s refresh={mask_token(refresh_token)} "
            f"ok={stored_access and stored_refresh}"
        )
        return stored_access and stored_refresh

    async def invalidate_access_token(self) -> None:
        if self._cache is not None:
            await self._cache.delete(ACCESS_TOKEN_KEY)
