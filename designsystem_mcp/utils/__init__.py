"""Utility modules: logging, rate limiting."""

from designsystem_mcp.utils.logging import setup_logging, get_logger
from designsystem_mcp.utils.rate_limit import RateLimiter, RateLimitMiddleware

__all__ = [
    "setup_logging",
    "get_logger",
    "RateLimiter",
    "RateLimitMiddleware",
]
