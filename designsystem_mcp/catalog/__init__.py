"""Design system catalog: patterns, style guide tokens and web components."""

from designsystem_mcp.catalog.store import Catalog, get_catalog, load_catalog, reset_catalog

__all__ = ["Catalog", "get_catalog", "load_catalog", "reset_catalog"]
