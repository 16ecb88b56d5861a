"""Boilerplate provider: generates an HTML starter page wired to the design tokens."""

import html
from typing import Literal

from designsystem_mcp.catalog.store import Catalog
from designsystem_mcp.mcp.models import GenerateBoilerplateArgs, ToolCallResult
from designsystem_mcp.mcp.registry import ToolRegistry
from designsystem_mcp.tools.base import available

DEFAULT_PROJECT_NAME = "my-app"

Theme = Literal["light", "dark"]


def theme_hint(catalog: Catalog) -> str:
    return available("themes", ["light", "dark"])


def generate_color_css(catalog: Catalog, theme: Theme = "light") -> str:
    """
    Render CSS custom properties for every color token that has a cssVar.

    Dark theme uses each token's darkValue, falling back to its light value.
    """
    lines = [f"      /* {theme.capitalize()} mode color tokens */"]
    for category in catalog.style_guide.colors:
        for color in category.colors:
            if not color.cssVar:
                continue
            value = color.darkValue if theme == "dark" and color.darkValue else color.value
            lines.append(f"      {color.cssVar}: {value};")
    return "\n".join(lines)


def generate_examples_html(catalog: Catalog) -> str:
    """First example of each web component, indented for the page body."""
    blocks = []
    for component in catalog.web_components:
        if not component.examples:
            continue
        code = component.examples[0].code.replace("\n", "\n      ")
        blocks.append(f"      <!-- {component.name} -->\n      {code}")
    return "\n\n".join(blocks)


def generate_boilerplate(
    catalog: Catalog,
    project_name: str = DEFAULT_PROJECT_NAME,
    theme: Theme = "light",
    include_examples: bool = True,
) -> str:
    """Build a complete HTML starter page."""
    title = html.escape(project_name)
    package = catalog.design_system.package
    html_class = ' class="dark"' if theme == "dark" else ""

    body = f"    <h1>{title}</h1>\n"
    if include_examples:
        examples = generate_examples_html(catalog)
        if examples:
            body += f'\n    <main class="examples">\n{examples}\n    </main>\n'

    return f"""<!DOCTYPE html>
<html lang="en"{html_class}>
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{title}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <!-- npm install {package} -->
    <script type="module">
      import "{package}";
    </script>
    <style>
    :root {{
{generate_color_css(catalog, theme)}
    }}

    body {{
      margin: 0;
      padding: 2rem;
      font-family: Inter, system-ui, sans-serif;
      background: var(--color-surface);
      color: var(--color-text);
    }}
    </style>
  </head>
  <body>
{body}  </body>
</html>
"""


def generate_boilerplate_handler(args: GenerateBoilerplateArgs, catalog: Catalog) -> ToolCallResult:
    """Handle generate_boilerplate tool call."""
    project_name = args.projectName or DEFAULT_PROJECT_NAME
    theme = args.theme or "light"
    include_examples = True if args.includeExamples is None else args.includeExamples

    page = generate_boilerplate(catalog, project_name, theme, include_examples)
    text = (
        f"# {project_name} starter ({theme} theme)\n\n"
        f"Save as `index.html`. Install `{catalog.design_system.package}` "
        f"or serve through a bundler so the module import resolves.\n\n"
        f"```html\n{page}```\n"
    )
    return ToolCallResult.text(text)


def register_tools(registry: ToolRegistry) -> None:
    """Register boilerplate tools with the registry."""

    registry.register(
        name="generate_boilerplate",
        description=(
            "Generate an HTML starter page with the design system's color tokens "
            "as CSS variables and the web components package imported."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "projectName": {
                    "type": "string",
                    "description": "Project name used for the page title (default: my-app)",
                },
                "theme": {
                    "type": "string",
                    "enum": ["light", "dark"],
                    "description": "Color theme for the CSS variables (default: light)",
                },
                "includeExamples": {
                    "type": "boolean",
                    "description": "Include web component examples (default: true)",
                },
            },
            "required": [],
        },
        handler=generate_boilerplate_handler,
        arguments_model=GenerateBoilerplateArgs,
        argument_hint=theme_hint,
    )
