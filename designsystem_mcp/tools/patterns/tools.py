"""Pattern provider tools: Tailwind UI patterns and their examples."""

from typing import Any

from designsystem_mcp.catalog.store import Catalog
from designsystem_mcp.mcp.models import (
    PatternNameArgs,
    PatternSearchArgs,
    ToolCallResult,
)
from designsystem_mcp.mcp.registry import ToolRegistry
from designsystem_mcp.tools.base import (
    NO_ARGUMENTS_SCHEMA,
    available,
    json_result,
    not_found,
)


def pattern_hint(catalog: Catalog) -> str:
    return available("patterns", catalog.pattern_names())


def list_patterns_handler(arguments: dict[str, Any], catalog: Catalog) -> ToolCallResult:
    """Handle list_patterns tool call."""
    by_category = {
        category: [{"name": p.name, "description": p.description} for p in patterns]
        for category, patterns in catalog.patterns_by_category().items()
    }
    return json_result({
        "designSystemName": catalog.name,
        "version": catalog.version,
        "totalPatterns": len(catalog.patterns),
        "patternsByCategory": by_category,
    })


def get_pattern_handler(args: PatternNameArgs, catalog: Catalog) -> ToolCallResult:
    """Handle get_pattern tool call."""
    pattern = catalog.get_pattern(args.patternName)
    if pattern is None:
        return not_found("Pattern", args.patternName, "patterns", catalog.pattern_names())
    return json_result(pattern.model_dump(exclude_none=True))


def search_patterns_handler(args: PatternSearchArgs, catalog: Catalog) -> ToolCallResult:
    """Handle search_patterns tool call."""
    results = catalog.search_patterns(args.query, category=args.category)
    data: dict[str, Any] = {"query": args.query}
    if args.category:
        data["category"] = args.category
    data["resultsCount"] = len(results)
    data["results"] = [
        {
            "name": p.name,
            "category": p.category,
            "description": p.description,
            "importStatement": p.importStatement,
        }
        for p in results
    ]
    return json_result(data)


def get_pattern_examples_handler(args: PatternNameArgs, catalog: Catalog) -> ToolCallResult:
    """Handle get_pattern_examples tool call."""
    pattern = catalog.get_pattern(args.patternName)
    if pattern is None:
        return not_found("Pattern", args.patternName, "patterns", catalog.pattern_names())

    lines = [f"# {pattern.name} Examples", "", f"Import: `{pattern.importStatement}`", ""]
    if pattern.usageNote:
        lines.extend([f"> {pattern.usageNote}", ""])

    if not pattern.examples:
        lines.append("No examples available.")
    for example in pattern.examples:
        lines.append(f"### {example.title}")
        if example.description:
            lines.append(example.description)
        lines.extend(["```html", example.code, "```", ""])

    return ToolCallResult.text("\n".join(lines).rstrip() + "\n")


def register_tools(registry: ToolRegistry) -> None:
    """Register pattern tools with the registry."""

    registry.register(
        name="list_patterns",
        description="List all available design system patterns grouped by category.",
        input_schema=NO_ARGUMENTS_SCHEMA,
        handler=list_patterns_handler,
    )

    registry.register(
        name="get_pattern",
        description=(
            "Get the full specification for a pattern: overview, guidelines, "
            "Tailwind class variations, examples and related patterns."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "patternName": {
                    "type": "string",
                    "description": "Name or slug of the pattern (case-insensitive)",
                },
            },
            "required": ["patternName"],
        },
        handler=get_pattern_handler,
        arguments_model=PatternNameArgs,
        argument_hint=pattern_hint,
    )

    registry.register(
        name="search_patterns",
        description="Search patterns by name, description or category.",
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query",
                },
                "category": {
                    "type": "string",
                    "description": "Filter by category (optional)",
                },
            },
            "required": ["query"],
        },
        handler=search_patterns_handler,
        arguments_model=PatternSearchArgs,
    )

    registry.register(
        name="get_pattern_examples",
        description="Get copy-paste HTML examples for a pattern.",
        input_schema={
            "type": "object",
            "properties": {
                "patternName": {
                    "type": "string",
                    "description": "Name or slug of the pattern (case-insensitive)",
                },
            },
            "required": ["patternName"],
        },
        handler=get_pattern_examples_handler,
        arguments_model=PatternNameArgs,
        argument_hint=pattern_hint,
    )
