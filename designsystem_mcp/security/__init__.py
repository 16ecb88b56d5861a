"""Security modules: host header validation."""

from designsystem_mcp.security.host_validator import build_endpoint_url, validate_host

__all__ = ["build_endpoint_url", "validate_host"]
