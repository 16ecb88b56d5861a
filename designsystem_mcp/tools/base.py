"""Shared helpers for tool providers."""

import json
from typing import Any

from designsystem_mcp.mcp.models import ToolCallResult

# Input schema for tools that take no arguments
NO_ARGUMENTS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {},
    "required": [],
}


def json_result(data: Any) -> ToolCallResult:
    """Wrap JSON-serializable data as a pretty-printed text result."""
    return ToolCallResult.text(json.dumps(data, indent=2, ensure_ascii=False))


def available(label: str, names: list[str]) -> str:
    """Render a hint line listing the valid values for an argument."""
    return f"Available {label}: {', '.join(names)}"


def not_found(kind: str, value: str, label: str, names: list[str]) -> ToolCallResult:
    """Error result for a lookup miss, listing what does exist."""
    return ToolCallResult.error(f'{kind} "{value}" not found. {available(label, names)}')
