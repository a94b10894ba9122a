"""FastAPI entrypoint and API surface for the Hostaway availability gateway."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .availability_service import SOURCE_FALLBACK, AvailabilityResolver
from .cache import CacheClient
from .config import get_settings
from .hostaway_client import HostawayClient
from .listings import DWELLING_LISTING_IDS, resolve_listing_id
from .ratelimit import FixedWindowRateLimiter, client_address
from .schemas import AvailabilityResponse, ErrorResponse
from .token_manager import TokenManager

settings = get_settings()
logger = logging.getLogger("hostaway_gateway")

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

app = FastAPI(title="Hostaway Availability Gateway", version="1.0.0")
rate_limiter = FixedWindowRateLimiter(
    limit=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window_seconds,
)


@dataclass
class GatewayContext:
    """Process-wide collaborators shared by every request."""

    cache: CacheClient
    hostaway: HostawayClient
    tokens: TokenManager
    resolver: AvailabilityResolver
    listings: Mapping[str, int] = field(default_factory=lambda: DWELLING_LISTING_IDS)


def get_context(request: Request) -> GatewayContext:
    """FastAPI dependency that returns the shared gateway context."""
    return request.app.state.context


@app.middleware("http")
async def enforce_rate_limit(request: Request, call_next):
    """Reject clients that exceed the request budget for the current window."""
    client_id = client_address(request)
    decision = rate_limiter.hit(client_id)
    if not decision.allowed:
        logger.warning("Rate limit exceeded for %s", client_id)
        return JSONResponse(
            status_code=429,
            content={"error": RATE_LIMIT_MESSAGE},
            headers={
                "Retry-After": str(decision.reset_in_seconds),
                "X-RateLimit-Limit": str(decision.limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(decision.reset_in_seconds),
            },
        )

    response = await call_next(request)
    response.headers["X-RateLimit-Limit"] = str(decision.limit)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
    response.headers["X-RateLimit-Reset"] = str(decision.reset_in_seconds)
    return response


@app.on_event("startup")
async def on_startup() -> None:
    """Connect the cache and wire up the upstream collaborators."""
    logger.info("Starting app...")
    for name, value in (
        ("REDIS_URL", settings.redis_url),
        ("HOSTAWAY_ACCOUNT_ID", settings.hostaway_account_id),
        ("HOSTAWAY_API_KEY", settings.hostaway_api_key),
    ):
        logger.info("%s: %s", name, "Set" if value else "Missing")

    cache = CacheClient(settings.redis_url)
    try:
        await cache.connect()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Cache connection error: %s", exc)
        raise SystemExit(1) from exc

    hostaway = HostawayClient(settings=settings)
    tokens = TokenManager(cache, hostaway, settings)
    app.state.context = GatewayContext(
        cache=cache,
        hostaway=hostaway,
        tokens=tokens,
        resolver=AvailabilityResolver(cache, hostaway, tokens, settings),
    )
    logger.info("Server running on port %s", settings.port)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    """Release upstream and cache connections."""
    context: GatewayContext | None = getattr(app.state, "context", None)
    if context:
        await context.hostaway.close()
        await context.cache.close()


@app.get(
    "/availability/{dwelling}",
    response_model=AvailabilityResponse,
    responses={400: {"model": ErrorResponse}},
)
async def availability(
    dwelling: str,
    response: Response,
    context: GatewayContext = Depends(get_context),
):
    """Return the booked dates of a dwelling."""
    listing_id = resolve_listing_id(dwelling, context.listings)
    if listing_id is None:
        logger.error("Invalid dwelling: %s", dwelling)
        return JSONResponse(status_code=400, content={"error": "Invalid dwelling"})

    try:
        logger.info("Handling availability request for %s (listing %s)", dwelling, listing_id)
        result = await context.resolver.get_unavailable_dates(listing_id)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error in availability endpoint: %s", exc)
        response.headers["X-Availability-Source"] = SOURCE_FALLBACK
        return AvailabilityResponse(unavailable=[])

    response.headers["X-Availability-Source"] = result.source
    return AvailabilityResponse(unavailable=result.dates)
