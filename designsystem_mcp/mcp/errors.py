"""JSON-RPC 2.0 error codes and error response helpers."""

from typing import Any

from pydantic import ValidationError

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700  # Invalid JSON was received
INVALID_REQUEST = -32600  # The JSON sent is not a valid Request object
METHOD_NOT_FOUND = -32601  # The method does not exist / is not available
INVALID_PARAMS = -32602  # Invalid method parameter(s)
INTERNAL_ERROR = -32603  # Internal JSON-RPC error

# Custom error codes (server-defined, must be between -32000 and -32099)
RATE_LIMITED = -32000  # Rate limit exceeded


class CatalogError(Exception):
    """Raised when the design system catalog cannot be loaded or is corrupt."""
    pass


def error_message(code: int) -> str:
    """Get the standard message for a JSON-RPC error code."""
    messages = {
        PARSE_ERROR: "Parse error",
        INVALID_REQUEST: "Invalid Request",
        METHOD_NOT_FOUND: "Method not found",
        INVALID_PARAMS: "Invalid params",
        INTERNAL_ERROR: "Internal error",
        RATE_LIMITED: "Rate limit exceeded",
    }
    return messages.get(code, "Unknown error")


def make_error_data(code: int, message: str | None = None, data: Any = None) -> dict[str, Any]:
    """Create an error object for JSON-RPC response."""
    error: dict[str, Any] = {
        "code": code,
        "message": message or error_message(code),
    }
    if data is not None:
        error["data"] = data
    return error


def make_error_response(
    id: int | float | str | None, code: int, message: str | None = None, data: Any = None
) -> dict[str, Any]:
    """Create a complete JSON-RPC error response payload."""
    return {
        "jsonrpc": "2.0",
        "id": id,
        "error": make_error_data(code, message, data),
    }


def format_validation_error(error: ValidationError) -> str:
    """
    Flatten a pydantic ValidationError into a single readable line.

    Each problem is rendered as ``path: message`` and joined with ``; ``.
    Problems at the top level use ``root`` as their path.
    """
    parts = []
    for item in error.errors(include_url=False):
        path = ".".join(str(part) for part in item.get("loc", ())) or "root"
        parts.append(f"{path}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)
