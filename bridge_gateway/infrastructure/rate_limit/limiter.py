"""Rate limiting for the Bridge gateway.

Fixed-window, in-memory rate limiting keyed by client token or IP.
"""

import asyncio
import hashlib
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from bridge_gateway.core.logging import logger


@dataclass
class RateLimitWindow:
    """Request count for one key in the current window."""

    count: int
    window_start_ms: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of counting one request against a key."""

    allowed: bool
    limit: int
    count: int
    remaining: int
    reset_seconds: int
    key_type: str

    def headers(self) -> Dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_seconds),
            "X-RateLimit-Type": self.key_type,
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_seconds)
        return headers


def rate_limit_key(api_token: Optional[str], client_ip: Optional[str]) -> str:
    """Build the rate limit key for a request.

    Clients presenting x-api-token are limited per token (hashed so the raw
    token never sits in memory or logs); everyone else per IP.
    """
    if api_token:
        digest = hashlib.sha256(api_token.encode("utf-8")).hexdigest()[:16]
        return f"token:{digest}"
    return f"ip:{client_ip or 'unknown'}"


class RateLimitStore:
    """Counter map owned by the gateway process.

    Created by the app factory and pruned by a background task bound to the
    application lifespan.
    """

    def __init__(self, limit: int, window_ms: int, clock: Callable[[], float] = time.time):
        """Initialize store.

        Args:
            limit: Maximum requests per key per window
            window_ms: Window length in milliseconds
            clock: Wall clock in seconds (injectable for tests)
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        if window_ms < 1:
            raise ValueError(f"window_ms must be >= 1, got {window_ms}")
        self.limit = limit
        self.window_ms = window_ms
        self._clock = clock
        self._windows: Dict[str, RateLimitWindow] = {}

    def __len__(self) -> int:
        return len(self._windows)

    def _now_ms(self) -> float:
        return self._clock() * 1000

    def hit(self, key: str) -> RateLimitDecision:
        """Count a request for key and decide whether it is allowed."""
        now = self._now_ms()
        window = self._windows.get(key)

        if window is None or now - window.window_start_ms > self.window_ms:
            window = RateLimitWindow(count=1, window_start_ms=now)
            self._windows[key] = window
        else:
            window.count += 1

        remaining = max(0, self.limit - window.count)
        reset_seconds = max(0, math.ceil((window.window_start_ms + self.window_ms - now) / 1000))
        allowed = window.count <= self.limit

        if not allowed:
            logger.warning("rate_limit_exceeded", key=key, count=window.count, limit=self.limit)

        return RateLimitDecision(
            allowed=allowed,
            limit=self.limit,
            count=window.count,
            remaining=remaining,
            reset_seconds=reset_seconds,
            key_type="token" if key.startswith("token:") else "ip",
        )

    def prune(self, now_ms: Optional[float] = None) -> int:
        """Drop windows older than the window length. Returns number removed."""
        now = self._now_ms() if now_ms is None else now_ms
        expired = [
            key for key, window in self._windows.items()
            if now - window.window_start_ms > self.window_ms
        ]
        for key in expired:
            del self._windows[key]
        return len(expired)


async def prune_periodically(store: RateLimitStore, interval_seconds: Optional[float] = None) -> None:
    """Prune the store forever; run as a task and cancel on shutdown."""
    interval = interval_seconds if interval_seconds is not None else store.window_ms / 1000
    while True:
        await asyncio.sleep(interval)
        removed = store.prune()
        if removed:
            logger.debug("rate_limit_store_pruned", removed=removed, remaining=len(store))
