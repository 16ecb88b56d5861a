"""Host header validation for the SSE endpoint announcement."""

import re

from designsystem_mcp.config.loader import get_settings
from designsystem_mcp.utils.logging import get_logger

logger = get_logger(__name__)

# Vercel preview deployments: <project>-<hash>-<team>.vercel.app
VERCEL_PREVIEW_PATTERN = re.compile(r"^[\w-]+-[\w-]+-[\w-]+\.vercel\.app$", re.ASCII)

LOCAL_HOST_MARKERS = ("localhost", "127.0.0.1")


def is_allowed_host(host: str) -> bool:
    """Check a host against the allow-list and the preview-deployment pattern."""
    settings = get_settings()
    normalized = host.lower()
    if normalized in {allowed.lower() for allowed in settings.allowed_hosts}:
        return True
    return VERCEL_PREVIEW_PATTERN.fullmatch(normalized) is not None


def validate_host(host: str | None) -> str:
    """
    Return the host to advertise in the endpoint event.

    An allowed host is returned unchanged. A missing or unknown host is
    replaced by the configured default, so a spoofed Host header can never
    redirect clients elsewhere.
    """
    settings = get_settings()
    if not host:
        return settings.default_host
    if is_allowed_host(host):
        return host

    logger.warning(
        "invalid_host_header",
        host=host,
        fallback=settings.default_host,
    )
    return settings.default_host


def build_endpoint_url(host: str) -> str:
    """Build the absolute URL clients POST JSON-RPC messages to."""
    settings = get_settings()
    scheme = "http" if any(marker in host for marker in LOCAL_HOST_MARKERS) else "https"
    return f"{scheme}://{host}{settings.sse_path}"
