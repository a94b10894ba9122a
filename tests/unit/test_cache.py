"""Cache client tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from hostaway_gateway.cache import DEFAULT_REDIS_URL, CacheClient


@pytest.mark.asyncio
async def test_connect_pings_server():
    redis_client = AsyncMock()
    cache = CacheClient("redis://cache:6379/0", client=redis_client)

    await cache.connect()

    redis_client.ping.assert_awaited_once()


@pytest.mark.asyncio
async def test_connect_failure_propagates():
    redis_client = AsyncMock()
    redis_client.ping.side_effect = ConnectionError("refused")
    cache = CacheClient(client=redis_client)

    with pytest.raises(ConnectionError):
        await cache.connect()


@pytest.mark.asyncio
async def test_get_and_set_with_expiry():
    redis_client = AsyncMock()
    redis_client.get.return_value = "cached"
    redis_client.setex.return_value = True
    cache = CacheClient(client=redis_client)

    assert await cache.get("availability:1") == "cached"
    assert await cache.set_with_expiry("availability:1", "[]", 3600) is True
    redis_client.get.assert_awaited_once_with("availability:1")
    redis_client.setex.assert_awaited_once_with("availability:1", 3600, "[]")


@pytest.mark.asyncio
async def test_close_releases_connection():
    redis_client = AsyncMock()
    cache = CacheClient(client=redis_client)

    await cache.close()

    redis_client.aclose.assert_awaited_once()
    with pytest.raises(RuntimeError):
        await cache.get("anything")


def test_default_url_used_when_unset():
    assert CacheClient().redis_url == DEFAULT_REDIS_URL
