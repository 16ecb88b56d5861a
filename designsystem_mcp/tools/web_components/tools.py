"""Web component provider tools: the custom elements shipped in the UI package."""

from typing import Any

from designsystem_mcp.catalog.models import WebComponent
from designsystem_mcp.catalog.store import Catalog
from designsystem_mcp.mcp.models import SearchArgs, TagNameArgs, ToolCallResult
from designsystem_mcp.mcp.registry import ToolRegistry
from designsystem_mcp.tools.base import (
    NO_ARGUMENTS_SCHEMA,
    available,
    json_result,
    not_found,
)


def tag_name_hint(catalog: Catalog) -> str:
    return available("components", catalog.web_component_tags())


def _summary(component: WebComponent) -> dict[str, str]:
    return {
        "name": component.name,
        "tagName": component.tagName,
        "category": component.category,
        "description": component.description,
    }


def list_components_handler(arguments: dict[str, Any], catalog: Catalog) -> ToolCallResult:
    """Handle list_components tool call."""
    components = catalog.web_components
    return json_result({
        "package": catalog.design_system.package,
        "totalComponents": len(components),
        "components": [_summary(c) for c in components],
    })


def get_component_handler(args: TagNameArgs, catalog: Catalog) -> ToolCallResult:
    """Handle get_component tool call."""
    component = catalog.get_web_component(args.tagName)
    if component is None:
        return not_found("Component", args.tagName, "components", catalog.web_component_tags())
    return json_result(component.model_dump(exclude_none=True))


def search_components_handler(args: SearchArgs, catalog: Catalog) -> ToolCallResult:
    """Handle search_components tool call."""
    results = catalog.search_web_components(args.query)
    return json_result({
        "query": args.query,
        "resultsCount": len(results),
        "results": [_summary(c) for c in results],
    })


def register_tools(registry: ToolRegistry) -> None:
    """Register web component tools with the registry."""

    registry.register(
        name="list_components",
        description="List all web components in the @mcpsystem/ui package.",
        input_schema=NO_ARGUMENTS_SCHEMA,
        handler=list_components_handler,
    )

    registry.register(
        name="get_component",
        description=(
            "Get full documentation for a web component: props, slots, CSS parts, "
            "CSS custom properties, events and examples."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "tagName": {
                    "type": "string",
                    "description": "Custom element tag name, e.g. mcp-chat-message",
                },
            },
            "required": ["tagName"],
        },
        handler=get_component_handler,
        arguments_model=TagNameArgs,
        argument_hint=tag_name_hint,
    )

    registry.register(
        name="search_components",
        description="Search web components by name, description or tag name.",
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query",
                },
            },
            "required": ["query"],
        },
        handler=search_components_handler,
        arguments_model=SearchArgs,
    )
