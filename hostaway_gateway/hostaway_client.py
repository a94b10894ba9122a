"""HTTP client for the Hostaway API."""

from __future__ import annotations

from typing import Any

import httpx

from .config import Settings, get_settings


class HostawayClient:
    """Thin wrapper around httpx for Hostaway API calls."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.hostaway_base_url,
            timeout=self.settings.http_timeout_seconds,
        )

    async def fetch_access_token(self, account_id: str | None, api_key: str | None) -> dict[str, Any]:
        """Request a bearer token with the client-credentials grant."""
        form = {
            "grant_type": "client_credentials",
            "client_id": account_id or "",
            "client_secret": api_key or "",
            "scope": "general",
        }
        response = await self._client.post(
            "/v1/accessTokens",
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        response.raise_for_status()
        return response.json()

    async def fetch_reservations(self, listing_id: int, token: str) -> dict[str, Any]:
        """Fetch the reservations recorded against a listing."""
        response = await self._client.get(
            "/v1/reservations",
            params={"listingId": listing_id},
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
