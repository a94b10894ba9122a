"""Access token lookup backed by the cache."""

from __future__ import annotations

import logging

import httpx

from .cache import CacheClient
from .config import Settings, get_settings
from .hostaway_client import HostawayClient

logger = logging.getLogger("hostaway_gateway")

TOKEN_CACHE_KEY = "hostaway:token"


class TokenError(RuntimeError):
    """Raised when Hostaway answers without an access token."""


class TokenManager:
    """Hands out a bearer token, reusing the cached one until it expires."""

    def __init__(
        self,
        cache: CacheClient,
        hostaway: HostawayClient,
        settings: Settings | None = None,
    ) -> None:
        self.cache = cache
        self.hostaway = hostaway
        self.settings = settings or get_settings()

    async def get_access_token(self) -> str:
        """Return the cached token or fetch and cache a new one."""
        cached = await self.cache.get(TOKEN_CACHE_KEY)
        if cached:
            logger.info("Using cached Hostaway token")
            return cached

        logger.info("Fetching new Hostaway token...")
        try:
            payload = await self.hostaway.fetch_access_token(
                self.settings.hostaway_account_id,
                self.settings.hostaway_api_key,
            )
        except httpx.HTTPStatusError as exc:
            logger.exception("Error getting access token: %s", exc.response.text)
            raise
        except httpx.HTTPError as exc:
            logger.exception("Error getting access token: %s", exc)
            raise

        token = (payload or {}).get("access_token")
        if not token:
            logger.error("Error getting access token: no access_token in response %s", payload)
            raise TokenError("Hostaway response did not include an access token")

        await self.cache.set_with_expiry(TOKEN_CACHE_KEY, token, self.settings.token_ttl_seconds)
        logger.info("New Hostaway token fetched and cached")
        return token
