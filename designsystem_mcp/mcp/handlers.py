"""MCP method handlers for JSON-RPC requests."""

import logging
from typing import Any

from pydantic import ValidationError

from designsystem_mcp.config.loader import get_settings
from designsystem_mcp.mcp.errors import (
    CatalogError,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    format_validation_error,
    make_error_data,
)
from designsystem_mcp.mcp.models import (
    Capabilities,
    InitializeParams,
    InitializeResult,
    ServerInfo,
    ToolCallParams,
    ToolsListResult,
)
from designsystem_mcp.mcp.registry import ToolRegistry

logger = logging.getLogger(__name__)

# MCP protocol version we support
PROTOCOL_VERSION = "2024-11-05"


class InvalidParams(Exception):
    """Raised by a method handler when its params fail validation."""


class MCPHandlers:
    """Handlers for MCP protocol methods."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle the initialize request."""
        try:
            init_params = InitializeParams.model_validate(params)
            logger.info(
                f"Initialize from {init_params.clientInfo.name} "
                f"{init_params.clientInfo.version} "
                f"(protocol {init_params.protocolVersion})"
            )
        except ValidationError as e:
            # Still proceed with defaults
            logger.warning(f"Invalid initialize params: {format_validation_error(e)}")

        settings = get_settings()

        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=Capabilities(tools={}),
            serverInfo=ServerInfo(
                name=settings.server_name,
                version=settings.server_version,
            ),
        )
        return result.model_dump()

    async def handle_initialized(self, params: dict[str, Any]) -> None:
        """Handle the notifications/initialized notification (no response)."""
        logger.info("Client confirmed initialization")
        return None

    async def handle_tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle the tools/list request."""
        tools = self.registry.list_tools()
        result = ToolsListResult(tools=tools)
        return result.model_dump()

    async def handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle the tools/call request."""
        try:
            call_params = ToolCallParams.model_validate(params)
        except ValidationError as e:
            raise InvalidParams(format_validation_error(e)) from e

        logger.info(f"Calling tool: {call_params.name}")
        result = self.registry.call_tool(call_params.name, call_params.arguments)
        return result.model_dump()

    async def handle_ping(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle the ping request."""
        return {}

    async def dispatch(
        self, method: str, params: dict[str, Any] | None
    ) -> tuple[Any | None, dict[str, Any] | None]:
        """
        Dispatch a method call to the appropriate handler.

        Returns (result, error) tuple. Both are None for notifications
        that produce no response.
        """
        handlers = {
            "initialize": self.handle_initialize,
            "notifications/initialized": self.handle_initialized,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
            "ping": self.handle_ping,
        }

        handler = handlers.get(method)
        if handler is None:
            return None, make_error_data(
                METHOD_NOT_FOUND, f"Method not found: {method}"
            )

        try:
            result = await handler(params or {})
            return result, None
        except InvalidParams as e:
            logger.warning(f"Invalid params for {method}: {e}")
            return None, make_error_data(INVALID_PARAMS, f"Invalid params: {e}")
        except CatalogError:
            raise
        except Exception:
            logger.exception(f"Error handling method {method}")
            return None, make_error_data(INTERNAL_ERROR, "Internal error")
