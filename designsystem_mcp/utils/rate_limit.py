"""Rate limiting middleware and utilities."""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from designsystem_mcp.config.loader import get_settings
from designsystem_mcp.mcp.errors import RATE_LIMITED, make_error_response

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RateLimitEntry:
    count: int
    reset_at: int  # epoch ms


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: int  # epoch ms


class RateLimiter:
    """
    In-memory fixed-window rate limiter.

    Each client key gets ``max_requests`` requests per window. The window
    starts at the key's first request and resets once ``reset_at`` passes.
    State is process-local and lost on restart.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_ms: int = 60_000,
        max_keys: int = 10_000,
        clock: Callable[[], int] = _now_ms,
    ):
        self.max_requests = max_requests
        self.window_ms = window_ms
        self.max_keys = max_keys
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def check(self, key: str) -> RateLimitResult:
        """
        Count a request for the given key.

        Args:
            key: Identifier for the client (e.g., forwarded IP address).

        Returns:
            RateLimitResult with the decision and the window state.
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)

            if entry is None or entry.reset_at <= now:
                if entry is None and len(self._entries) > self.max_keys:
                    self._sweep(now)
                entry = RateLimitEntry(count=1, reset_at=now + self.window_ms)
                self._entries[key] = entry
                return RateLimitResult(
                    allowed=True,
                    remaining=self.max_requests - 1,
                    reset_at=entry.reset_at,
                )

            if entry.count >= self.max_requests:
                return RateLimitResult(allowed=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=self.max_requests - entry.count,
                reset_at=entry.reset_at,
            )

    def now(self) -> int:
        """Current time in epoch ms, from the injected clock."""
        return self._clock()

    def _sweep(self, now: int) -> None:
        expired = [key for key, entry in self._entries.items() if entry.reset_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired rate limit entries")

    def reset(self, key: str | None = None) -> None:
        """Reset rate limit for a key or all keys."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    @property
    def key_count(self) -> int:
        return len(self._entries)


# Global rate limiter instance
_rate_limiter: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    """Get the global rate limiter, creating it from settings if necessary."""
    global _rate_limiter
    if _rate_limiter is None:
        settings = get_settings()
        _rate_limiter = RateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_ms=settings.rate_limit_window_ms,
            max_keys=settings.rate_limit_max_keys,
        )
    return _rate_limiter


def set_rate_limiter(limiter: RateLimiter) -> None:
    """Replace the global rate limiter (e.g. with one using a fake clock)."""
    global _rate_limiter
    _rate_limiter = limiter


def reset_rate_limiter() -> None:
    """Reset the global rate limiter (useful for testing)."""
    global _rate_limiter
    _rate_limiter = None


def check_rate_limit(client_id: str) -> RateLimitResult:
    """Count a request for a client against the global limiter."""
    return get_rate_limiter().check(client_id)


def get_client_key(request: Request) -> str:
    """Get identifier for rate limiting: the first X-Forwarded-For address."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return "unknown"


def retry_after_seconds(reset_at: int, now: int) -> int:
    """Seconds until the window resets, rounded up, never below 1."""
    return max(1, math.ceil((reset_at - now) / 1000))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce rate limiting on the MCP endpoints."""

    def __init__(self, app, paths: list[str] | None = None):
        super().__init__(app)
        settings = get_settings()
        self.enabled = settings.rate_limit_enabled
        self.paths = set(paths or [settings.sse_path, "/mcp"])

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        if (
            not self.enabled
            or request.method == "OPTIONS"
            or request.url.path not in self.paths
        ):
            return await call_next(request)

        limiter = get_rate_limiter()
        client_key = get_client_key(request)
        result = limiter.check(client_key)

        if not result.allowed:
            retry_after = retry_after_seconds(result.reset_at, limiter.now())
            logger.warning(
                f"Rate limit exceeded for {client_key}, retry in {retry_after}s"
            )
            return JSONResponse(
                status_code=429,
                content=make_error_response(
                    None,
                    RATE_LIMITED,
                    f"Rate limit exceeded. Try again in {retry_after} seconds.",
                ),
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(limiter.max_requests),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(result.reset_at),
                },
            )

        response = await call_next(request)

        # Add rate limit headers
        response.headers["X-RateLimit-Limit"] = str(limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        response.headers["X-RateLimit-Reset"] = str(result.reset_at)

        return response
