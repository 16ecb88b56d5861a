"""Style guide provider tools: color, typography, spacing and breakpoint tokens."""

from typing import Any, get_args

from designsystem_mcp.catalog.store import Catalog
from designsystem_mcp.mcp.models import (
    ColorCategoryArgs,
    StyleGuideSection,
    StyleGuideSectionArgs,
    ToolCallResult,
)
from designsystem_mcp.mcp.registry import ToolRegistry
from designsystem_mcp.tools.base import (
    NO_ARGUMENTS_SCHEMA,
    available,
    json_result,
    not_found,
)

SECTIONS = list(get_args(StyleGuideSection))


def section_hint(catalog: Catalog) -> str:
    return available("sections", SECTIONS)


def color_category_hint(catalog: Catalog) -> str:
    return available("categories", catalog.color_category_names())


def _dump(items: list[Any]) -> list[dict[str, Any]]:
    return [item.model_dump(exclude_none=True) for item in items]


def get_style_guide_handler(args: StyleGuideSectionArgs, catalog: Catalog) -> ToolCallResult:
    """Handle get_style_guide tool call."""
    section = args.section or "all"
    guide = catalog.style_guide.model_dump(exclude_none=True)
    data = guide if section == "all" else {section: guide[section]}
    return json_result({
        "designSystem": catalog.name,
        "section": section,
        "data": data,
    })


def get_colors_handler(args: ColorCategoryArgs, catalog: Catalog) -> ToolCallResult:
    """Handle get_colors tool call."""
    if args.category:
        category = catalog.get_color_category(args.category)
        if category is None:
            return not_found(
                "Color category",
                args.category,
                "categories",
                catalog.color_category_names(),
            )
        return json_result({"colors": _dump([category])})
    return json_result({"colors": _dump(catalog.style_guide.colors)})


def get_typography_handler(arguments: dict[str, Any], catalog: Catalog) -> ToolCallResult:
    return json_result({"typography": _dump(catalog.style_guide.typography)})


def get_spacing_handler(arguments: dict[str, Any], catalog: Catalog) -> ToolCallResult:
    return json_result({"spacing": _dump(catalog.style_guide.spacing)})


def get_breakpoints_handler(arguments: dict[str, Any], catalog: Catalog) -> ToolCallResult:
    return json_result({"breakpoints": _dump(catalog.style_guide.breakpoints)})


def get_design_system_info_handler(arguments: dict[str, Any], catalog: Catalog) -> ToolCallResult:
    """Handle get_design_system_info tool call."""
    ds = catalog.design_system
    return json_result({
        "name": ds.name,
        "version": ds.version,
        "description": ds.description,
        "package": ds.package,
        "stats": catalog.stats(),
    })


def register_tools(registry: ToolRegistry) -> None:
    """Register style guide tools with the registry."""

    registry.register(
        name="get_style_guide",
        description="Get style guide information (colors, typography, spacing, breakpoints).",
        input_schema={
            "type": "object",
            "properties": {
                "section": {
                    "type": "string",
                    "enum": SECTIONS,
                    "description": "Which section of the style guide to retrieve",
                },
            },
            "required": [],
        },
        handler=get_style_guide_handler,
        arguments_model=StyleGuideSectionArgs,
        argument_hint=section_hint,
    )

    registry.register(
        name="get_colors",
        description=(
            "Get color tokens with light and dark values, CSS variables and usage. "
            "Optionally filter by category."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": "Color category, e.g. Surfaces, Text, Primary (case-insensitive)",
                },
            },
            "required": [],
        },
        handler=get_colors_handler,
        arguments_model=ColorCategoryArgs,
        argument_hint=color_category_hint,
    )

    registry.register(
        name="get_typography",
        description="Get typography styles from the design system.",
        input_schema=NO_ARGUMENTS_SCHEMA,
        handler=get_typography_handler,
    )

    registry.register(
        name="get_spacing",
        description="Get spacing scale tokens from the design system.",
        input_schema=NO_ARGUMENTS_SCHEMA,
        handler=get_spacing_handler,
    )

    registry.register(
        name="get_breakpoints",
        description="Get responsive breakpoint definitions.",
        input_schema=NO_ARGUMENTS_SCHEMA,
        handler=get_breakpoints_handler,
    )

    registry.register(
        name="get_design_system_info",
        description="Get overview information and statistics about the design system.",
        input_schema=NO_ARGUMENTS_SCHEMA,
        handler=get_design_system_info_handler,
    )
