"""Tests for the YAML-backed catalog store."""

import shutil

import pytest

from designsystem_mcp.catalog.store import DATA_DIR, get_catalog, load_catalog, reset_catalog
from designsystem_mcp.mcp.errors import CatalogError


def test_packaged_catalog_loads(catalog):
    assert catalog.name == "AI Design System"
    assert catalog.version == "1.0.0"
    assert len(catalog.patterns) == 16
    assert len(catalog.web_components) == 6


def test_get_catalog_is_cached():
    assert get_catalog() is get_catalog()


def test_pattern_lookup(catalog):
    assert catalog.get_pattern("  Modal ").name == "Modal"
    assert catalog.get_pattern("icon-button").name == "IconButton"
    assert catalog.get_pattern("Nope") is None


def test_pattern_categories_keep_catalog_order(catalog):
    assert catalog.pattern_categories() == [
        "Actions",
        "Forms",
        "Data Display",
        "Navigation",
        "Feedback",
        "Overlays",
        "Layout",
    ]


def test_search_patterns_matches_category(catalog):
    results = catalog.search_patterns("overlays")
    assert {p.name for p in results} == {"Modal", "Tooltip"}


def test_web_component_lookup(catalog):
    assert catalog.get_web_component("MCP-TOKEN-COUNTER").name == "Token Counter"
    assert catalog.get_web_component("token-counter") is None


def test_color_lookup(catalog):
    assert catalog.get_color_category("gray scale").name == "Gray Scale"
    assert catalog.get_color_category("purple") is None


def test_all_colors_are_tagged_with_category(catalog):
    colors = catalog.all_colors()
    assert colors[0]["category"] == "Surfaces"
    assert len(colors) == catalog.stats()["totalColors"]


def test_stats(catalog):
    stats = catalog.stats()
    assert stats["totalPatterns"] == 16
    assert stats["colorCategories"] == 9
    assert stats["spacingTokens"] == 13
    assert stats["breakpoints"] == 5


@pytest.fixture
def data_copy(tmp_path):
    for path in DATA_DIR.glob("*.yaml"):
        shutil.copy(path, tmp_path / path.name)
    return tmp_path


def test_load_from_directory(data_copy):
    catalog = load_catalog(data_copy)
    assert len(catalog.patterns) == 16


def test_missing_file_raises_catalog_error(data_copy):
    (data_copy / "patterns.yaml").unlink()
    with pytest.raises(CatalogError, match="missing"):
        load_catalog(data_copy)


def test_invalid_yaml_raises_catalog_error(data_copy):
    (data_copy / "style_guide.yaml").write_text("colors: [\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="not valid YAML"):
        load_catalog(data_copy)


def test_schema_violation_raises_catalog_error(data_copy):
    (data_copy / "web_components.yaml").write_text("- name: Orphan\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="webComponents.0.tagName"):
        load_catalog(data_copy)


def test_non_mapping_root_raises_catalog_error(data_copy):
    (data_copy / "design_system.yaml").write_text("- just a list\n", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(data_copy)


def test_configured_catalog_dir_is_used(broken_catalog):
    reset_catalog()
    with pytest.raises(CatalogError):
        get_catalog()
