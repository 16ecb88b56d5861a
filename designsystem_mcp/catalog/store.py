"""Read-only catalog store backed by YAML data files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from designsystem_mcp.catalog.models import (
    ColorCategory,
    DesignSystem,
    Pattern,
    StyleGuide,
    WebComponent,
)
from designsystem_mcp.config.loader import get_settings
from designsystem_mcp.mcp.errors import CatalogError, format_validation_error

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

# File name -> key in the assembled DesignSystem document
CATALOG_FILES = {
    "design_system.yaml": None,
    "patterns.yaml": "patterns",
    "style_guide.yaml": "styleGuide",
    "web_components.yaml": "webComponents",
}


class Catalog:
    """Lookup, search and filter operations over an immutable design system."""

    def __init__(self, design_system: DesignSystem):
        self._ds = design_system

    @property
    def design_system(self) -> DesignSystem:
        return self._ds

    @property
    def name(self) -> str:
        return self._ds.name

    @property
    def version(self) -> str:
        return self._ds.version

    @property
    def style_guide(self) -> StyleGuide:
        return self._ds.styleGuide

    # -------------------------------------------------------------------------
    # Patterns
    # -------------------------------------------------------------------------

    @property
    def patterns(self) -> list[Pattern]:
        return self._ds.patterns

    def get_pattern(self, name: str) -> Pattern | None:
        """Get a pattern by name or slug (case-insensitive)."""
        key = name.strip().lower()
        for pattern in self._ds.patterns:
            if pattern.name.lower() == key or pattern.slug == key:
                return pattern
        return None

    def search_patterns(self, query: str, category: str | None = None) -> list[Pattern]:
        """Search patterns by name, description or category."""
        q = query.lower()
        results = [
            p for p in self._ds.patterns
            if q in p.name.lower()
            or q in p.description.lower()
            or q in p.category.lower()
        ]
        if category:
            results = [p for p in results if p.category.lower() == category.lower()]
        return results

    def patterns_by_category(self) -> dict[str, list[Pattern]]:
        """Group patterns by category, preserving catalog order."""
        grouped: dict[str, list[Pattern]] = {}
        for pattern in self._ds.patterns:
            grouped.setdefault(pattern.category, []).append(pattern)
        return grouped

    def pattern_categories(self) -> list[str]:
        """All unique pattern category names in catalog order."""
        return list(self.patterns_by_category())

    def pattern_names(self) -> list[str]:
        return [p.name for p in self._ds.patterns]

    # -------------------------------------------------------------------------
    # Style guide
    # -------------------------------------------------------------------------

    def get_color_category(self, name: str) -> ColorCategory | None:
        """Get a color category by name (case-insensitive)."""
        for category in self._ds.styleGuide.colors:
            if category.name.lower() == name.lower():
                return category
        return None

    def color_category_names(self) -> list[str]:
        return [c.name for c in self._ds.styleGuide.colors]

    def all_colors(self) -> list[dict[str, Any]]:
        """All color tokens flattened, each tagged with its category."""
        return [
            {**color.model_dump(exclude_none=True), "category": category.name}
            for category in self._ds.styleGuide.colors
            for color in category.colors
        ]

    def stats(self) -> dict[str, Any]:
        """Summary counts for the whole design system."""
        guide = self._ds.styleGuide
        return {
            "totalPatterns": len(self._ds.patterns),
            "categories": self.pattern_categories(),
            "totalCategories": len(self._ds.categories),
            "colorCategories": len(guide.colors),
            "totalColors": len(self.all_colors()),
            "typographyStyles": len(guide.typography),
            "spacingTokens": len(guide.spacing),
            "breakpoints": len(guide.breakpoints),
            "webComponents": len(self._ds.webComponents),
        }

    # -------------------------------------------------------------------------
    # Web components
    # -------------------------------------------------------------------------

    @property
    def web_components(self) -> list[WebComponent]:
        return self._ds.webComponents

    def get_web_component(self, tag_name: str) -> WebComponent | None:
        """Get a web component by its tag name (case-insensitive)."""
        key = tag_name.strip().lower()
        for component in self._ds.webComponents:
            if component.tagName.lower() == key:
                return component
        return None

    def search_web_components(self, query: str) -> list[WebComponent]:
        """Search web components by name, description or tag name."""
        q = query.lower()
        return [
            c for c in self._ds.webComponents
            if q in c.name.lower()
            or q in c.description.lower()
            or q in c.tagName.lower()
        ]

    def web_component_tags(self) -> list[str]:
        return [c.tagName for c in self._ds.webComponents]


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file missing: {path}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Catalog file is not valid YAML: {path}: {e}") from e


def load_catalog(data_dir: str | Path | None = None) -> Catalog:
    """
    Load and validate the catalog from a directory of YAML files.

    Args:
        data_dir: Directory holding the catalog files. If None, uses the
            configured catalog_dir or the packaged data.

    Raises:
        CatalogError: If a file is missing, unparseable or fails validation.
    """
    if data_dir is None:
        data_dir = get_settings().catalog_dir or DATA_DIR
    data_dir = Path(data_dir)

    document: dict[str, Any] = {}
    for filename, key in CATALOG_FILES.items():
        content = _read_yaml(data_dir / filename)
        if key is None:
            if not isinstance(content, dict):
                raise CatalogError(f"{filename} must contain a mapping")
            document.update(content)
        else:
            document[key] = content

    try:
        design_system = DesignSystem.model_validate(document)
    except ValidationError as e:
        raise CatalogError(f"Catalog failed validation: {format_validation_error(e)}") from e

    logger.info(
        f"Loaded catalog '{design_system.name}' from {data_dir}: "
        f"{len(design_system.patterns)} patterns, "
        f"{len(design_system.webComponents)} web components"
    )
    return Catalog(design_system)


# Global catalog instance
_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """Get the global catalog, loading it on first use."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def reset_catalog() -> None:
    """Reset the global catalog (useful for testing)."""
    global _catalog
    _catalog = None
