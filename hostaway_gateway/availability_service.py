"""Business logic for turning Hostaway reservations into unavailable dates."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable

import httpx

from .cache import CacheClient
from .config import Settings, get_settings
from .hostaway_client import HostawayClient
from .token_manager import TokenManager

logger = logging.getLogger("hostaway_gateway")

SOURCE_CACHE = "cache"
SOURCE_UPSTREAM = "upstream"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class AvailabilityResult:
    """Unavailable dates for a listing and where they came from.

    ``source`` is ``cache`` or ``upstream`` when the dates are real, and
    ``fallback`` when resolution failed and ``dates`` is the empty stand-in.
    """

    dates: list[str] = field(default_factory=list)
    source: str = SOURCE_UPSTREAM

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


def availability_cache_key(listing_id: int) -> str:
    return f"availability:{listing_id}"


def parse_cached_dates(cached: str) -> list[str] | None:
    """Decode a cached date list, or return None if the entry is unusable."""
    try:
        dates = json.loads(cached)
    except ValueError:
        return None
    if not isinstance(dates, list) or not all(isinstance(item, str) for item in dates):
        return None
    return dates


def _parse_calendar_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {value!r}")
    # Hostaway sends plain dates; tolerate a trailing time component.
    return date.fromisoformat(value[:10])


def expand_stay(arrival: Any, departure: Any) -> list[str]:
    """Return each booked night in ``[arrival, departure)`` as ``YYYY-MM-DD``."""
    current = _parse_calendar_date(arrival)
    end = _parse_calendar_date(departure)
    nights: list[str] = []
    while current < end:
        nights.append(current.isoformat())
        current += timedelta(days=1)
    return nights


def collect_unavailable_dates(reservations: Iterable[dict]) -> list[str]:
    """Union the booked nights of every reservation, sorted."""
    unavailable: set[str] = set()
    for reservation in reservations:
        unavailable.update(
            expand_stay(reservation["arrivalDate"], reservation["departureDate"])
        )
    return sorted(unavailable)


class AvailabilityResolver:
    """Resolves unavailable dates for a listing, caching the outcome."""

    def __init__(
        self,
        cache: CacheClient,
        hostaway: HostawayClient,
        tokens: TokenManager,
        settings: Settings | None = None,
    ) -> None:
        self.cache = cache
        self.hostaway = hostaway
        self.tokens = tokens
        self.settings = settings or get_settings()

    async def get_unavailable_dates(self, listing_id: int) -> AvailabilityResult:
        """Return unavailable dates; failures degrade to an empty fallback."""
        try:
            return await self._resolve(listing_id)
        except httpx.HTTPStatusError as exc:
            logger.exception(
                "Error fetching reservations for listing %s: %s", listing_id, exc.response.text
            )
            return AvailabilityResult(dates=[], source=SOURCE_FALLBACK)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error fetching reservations for listing %s: %s", listing_id, exc)
            return AvailabilityResult(dates=[], source=SOURCE_FALLBACK)

    async def _resolve(self, listing_id: int) -> AvailabilityResult:
        cache_key = availability_cache_key(listing_id)
        cached = await self.cache.get(cache_key)
        if cached:
            dates = parse_cached_dates(cached)
            if dates is not None:
                logger.info("Using cached availability for listing %s", listing_id)
                return AvailabilityResult(dates=dates, source=SOURCE_CACHE)
            logger.warning("Ignoring malformed cached availability for listing %s", listing_id)

        logger.info("Fetching availability for listing %s...", listing_id)
        token = await self.tokens.get_access_token()
        payload = await self.hostaway.fetch_reservations(listing_id, token)
        reservations = payload.get("data") or []
        dates = collect_unavailable_dates(reservations)

        await self.cache.set_with_expiry(
            cache_key, json.dumps(dates), self.settings.availability_ttl_seconds
        )
        logger.info("Availability for listing %s fetched and cached", listing_id)
        return AvailabilityResult(dates=dates, source=SOURCE_UPSTREAM)
