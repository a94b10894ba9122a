"""In-process fixed-window rate limiting keyed by client address."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Request


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_in_seconds: int


class FixedWindowRateLimiter:
    """Counts requests per client in fixed windows of ``window_seconds``."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._next_sweep = clock() + window_seconds

    def hit(self, client_id: str) -> RateLimitDecision:
        """Record a request and decide whether it may proceed."""
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)

        started, count = self._windows.get(client_id, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[client_id] = (started, count)

        reset_in = max(0, math.ceil(started + self.window_seconds - now))
        return RateLimitDecision(
            allowed=count <= self.limit,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            reset_in_seconds=reset_in,
        )

    @property
    def tracked_clients(self) -> int:
        """Number of clients with a window still held in memory."""
        return len(self._windows)

    def reset(self) -> None:
        """Forget every client's window."""
        self._windows.clear()
        self._next_sweep = self._clock() + self.window_seconds

    def _sweep(self, now: float) -> None:
        expired = [
            client_id
            for client_id, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for client_id in expired:
            del self._windows[client_id]
        self._next_sweep = now + self.window_seconds


def client_address(request: Request) -> str:
    """Return the address a request came from."""
    if request.client:
        return request.client.host
    return "unknown"
