"""
In-process rate limiting enforcement.

Counts requests per client key in fixed windows. State lives in memory and
resets with the process, like the bookmark collection itself.
For configuration, see rate_limit_config.py.
"""
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request

from core.rate_limit_config import (
    RateLimitConfig,
    RateLimitExceededError,
    RateLimitResult,
)

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: int
    count: int


class RateLimiter:
    """Fixed-window request counter keyed by client."""

    def __init__(
        self,
        config: RateLimitConfig,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._last_sweep = 0

    def _evict_expired(self, now: int) -> None:
        """Drop windows that have ended, at most once per window length."""
        if now < self._last_sweep + self.config.window_seconds:
            return
        self._last_sweep = now
        expired = [
            key for key, window in self._windows.items()
            if now >= window.started_at + self.config.window_seconds
        ]
        for key in expired:
            del self._windows[key]

    def check(self, key: str) -> RateLimitResult:
        """Count one request for `key` and report whether it is allowed."""
        now = int(self._clock())
        self._evict_expired(now)
        window = self._windows.get(key)
        if window is None or now >= window.started_at + self.config.window_seconds:
            window = _Window(started_at=now, count=0)
            self._windows[key] = window

        reset = window.started_at + self.config.window_seconds
        limit = self.config.max_requests

        if window.count >= limit:
            return RateLimitResult(
                allowed=False,
                limit=limit,
                remaining=0,
                reset=reset,
                retry_after=max(reset - now, 1),
            )

        window.count += 1
        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=limit - window.count,
            reset=reset,
            retry_after=0,
        )


def client_key(request: Request) -> str:
    """Identify the caller by remote address."""
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request) -> None:
    """
    FastAPI dependency that counts the request against the app's limiter.

    Stores the result on `request.state` so middleware can add headers, and
    raises RateLimitExceededError when the client is over its limit.
    """
    limiter: RateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return

    result = limiter.check(client_key(request))
    request.state.rate_limit_info = {
        "limit": result.limit,
        "remaining": result.remaining,
        "reset": result.reset,
    }
    if not result.allowed:
        logger.warning(
            "rate_limit_exceeded",
            extra={"client": client_key(request), "path": request.url.path},
        )
        raise RateLimitExceededError(result)
