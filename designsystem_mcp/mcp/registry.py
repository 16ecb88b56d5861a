"""Tool registry for managing MCP tools."""

import importlib
import logging
from typing import Any, Callable

from pydantic import BaseModel

from designsystem_mcp.catalog.store import Catalog, get_catalog
from designsystem_mcp.mcp.errors import CatalogError
from designsystem_mcp.mcp.models import Tool, ToolCallResult
from designsystem_mcp.mcp.validation import validate_arguments

logger = logging.getLogger(__name__)

# Type alias for tool handlers: validated arguments + catalog -> result
ToolHandler = Callable[[Any, Catalog], ToolCallResult]

# Produces a hint listing valid values, appended to argument errors
ArgumentHint = Callable[[Catalog], str]


class ToolDefinition:
    """A registered tool with its metadata, argument contract and handler."""

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        handler: ToolHandler,
        arguments_model: type[BaseModel] | None = None,
        argument_hint: ArgumentHint | None = None,
    ):
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.handler = handler
        self.arguments_model = arguments_model
        self.argument_hint = argument_hint

    def to_mcp_tool(self) -> Tool:
        """Convert to MCP Tool model for protocol responses."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


class ToolRegistry:
    """Registry for MCP tools with plugin-style provider loading."""

    def __init__(self, catalog: Catalog | None = None) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._providers: set[str] = set()
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        """The catalog handed to tool handlers, loaded lazily."""
        if self._catalog is None:
            self._catalog = get_catalog()
        return self._catalog

    def register(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        handler: ToolHandler,
        arguments_model: type[BaseModel] | None = None,
        argument_hint: ArgumentHint | None = None,
    ) -> None:
        """Register a tool with the registry."""
        if name in self._tools:
            logger.warning(f"Tool '{name}' already registered, overwriting")
        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=handler,
            arguments_model=arguments_model,
            argument_hint=argument_hint,
        )
        logger.debug(f"Registered tool: {name}")

    def get(self, name: str) -> ToolDefinition | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List all registered tools as MCP Tool models."""
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolCallResult:
        """
        Call a tool by name with the given arguments.

        Unknown tools, invalid arguments and handler failures come back as
        isError results. CatalogError propagates to the caller.
        """
        tool = self.get(name)
        if tool is None:
            available = ", ".join(self._tools) or "none"
            return ToolCallResult.error(
                f"Tool not found: {name}. Available tools: {available}"
            )

        args: Any = arguments
        if tool.arguments_model is not None:
            args, message = validate_arguments(tool.arguments_model, arguments)
            if message is not None:
                text = f"Invalid arguments for {name}: {message}"
                if tool.argument_hint is not None:
                    text = f"{text}\n\n{tool.argument_hint(self.catalog)}"
                return ToolCallResult.error(text)

        try:
            return tool.handler(args, self.catalog)
        except CatalogError:
            raise
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return ToolCallResult.error(f"Tool execution error: {str(e)}")

    def load_provider(self, provider_name: str) -> bool:
        """
        Load a provider module and register its tools.

        Providers are expected to be in designsystem_mcp/tools/<provider_name>/
        and have a register_tools(registry) function.
        """
        if provider_name in self._providers:
            logger.debug(f"Provider '{provider_name}' already loaded")
            return True

        module_path = f"designsystem_mcp.tools.{provider_name}.tools"
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            logger.warning(f"Could not import provider '{provider_name}': {e}")
            return False

        if not hasattr(module, "register_tools"):
            logger.warning(f"Provider '{provider_name}' has no register_tools function")
            return False

        module.register_tools(self)
        self._providers.add(provider_name)
        logger.info(f"Loaded provider: {provider_name}")
        return True

    def load_providers(self, provider_names: list[str]) -> dict[str, bool]:
        """Load multiple providers, returning success status for each."""
        results = {}
        for name in provider_names:
            results[name] = self.load_provider(name)
        return results

    @property
    def tool_count(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    @property
    def provider_count(self) -> int:
        """Return the number of loaded providers."""
        return len(self._providers)


# Global registry instance
_registry: ToolRegistry | None = None


def get_registry() -> ToolRegistry:
    """Get the global tool registry, creating it if necessary."""
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (useful for testing)."""
    global _registry
    _registry = None
