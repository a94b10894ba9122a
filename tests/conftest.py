"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from hostaway_gateway.availability_service import AvailabilityResolver
from hostaway_gateway.config import Settings
from hostaway_gateway.main import GatewayContext, app, get_context, rate_limiter
from hostaway_gateway.token_manager import TokenManager


class FakeCache:
    """In-memory stand-in for the redis cache client."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> bool:
        self.store[key] = value
        self.ttls[key] = ttl_seconds
        return True

    async def close(self) -> None:
        pass


class FakeHostaway:
    """Records every upstream call and answers from canned data."""

    def __init__(self) -> None:
        self.token = "token-abc"
        self.reservations: dict[int, list[dict]] = {}
        self.token_error: Exception | None = None
        self.reservations_error: Exception | None = None
        self.token_calls: list[tuple[str | None, str | None]] = []
        self.reservation_calls: list[tuple[int, str]] = []

    async def fetch_access_token(self, account_id, api_key):
        self.token_calls.append((account_id, api_key))
        if self.token_error:
            raise self.token_error
        return {"access_token": self.token, "token_type": "Bearer"}

    async def fetch_reservations(self, listing_id, token):
        self.reservation_calls.append((listing_id, token))
        if self.reservations_error:
            raise self.reservations_error
        return {"status": "success", "result": None, "data": self.reservations.get(listing_id, [])}

    @property
    def call_count(self) -> int:
        return len(self.token_calls) + len(self.reservation_calls)

    async def close(self) -> None:
        pass


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(
        _env_file=None,
        hostaway_account_id="12345",
        hostaway_api_key="secret-key",
    )


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def fake_hostaway() -> FakeHostaway:
    return FakeHostaway()


@pytest.fixture
def token_manager(fake_cache, fake_hostaway, settings) -> TokenManager:
    return TokenManager(fake_cache, fake_hostaway, settings)


@pytest.fixture
def resolver(fake_cache, fake_hostaway, token_manager, settings) -> AvailabilityResolver:
    return AvailabilityResolver(fake_cache, fake_hostaway, token_manager, settings)


@pytest.fixture
def gateway_context(fake_cache, fake_hostaway, token_manager, resolver) -> GatewayContext:
    return GatewayContext(
        cache=fake_cache,
        hostaway=fake_hostaway,
        tokens=token_manager,
        resolver=resolver,
    )


@pytest.fixture(scope="function")
def client(gateway_context):
    """FastAPI TestClient wired to in-memory collaborators.

    The client is not entered as a context manager, so startup never tries to
    reach a real cache.
    """
    app.dependency_overrides[get_context] = lambda: gateway_context
    rate_limiter.reset()

    yield TestClient(app)

    app.dependency_overrides.clear()
    rate_limiter.reset()
