"""Pytest configuration and fixtures."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from designsystem_mcp.catalog.store import get_catalog, reset_catalog
from designsystem_mcp.config.loader import DEFAULT_PROVIDERS, get_settings
from designsystem_mcp.main import app
from designsystem_mcp.mcp.registry import get_registry, reset_registry
from designsystem_mcp.mcp.transport_sse import reset_session_manager
from designsystem_mcp.utils.rate_limit import reset_rate_limiter


@pytest.fixture
def client():
    """Synchronous test client for FastAPI app."""
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client():
    """Async test client for FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset global registry, rate limiter and sessions, then load all providers."""
    reset_registry()
    reset_rate_limiter()
    reset_session_manager()
    registry = get_registry()
    registry.load_providers(DEFAULT_PROVIDERS)
    yield
    reset_registry()
    reset_rate_limiter()
    reset_session_manager()


@pytest.fixture
def registry():
    """Get the global tool registry with all providers loaded."""
    return get_registry()


@pytest.fixture
def catalog():
    """The packaged design system catalog."""
    return get_catalog()


@pytest.fixture
def settings():
    """Get application settings."""
    return get_settings()


@pytest.fixture
def broken_catalog(tmp_path, monkeypatch):
    """Point the catalog at a directory with a corrupt data file."""
    (tmp_path / "design_system.yaml").write_text("name: [unclosed\n", encoding="utf-8")
    monkeypatch.setattr(get_settings(), "catalog_dir", str(tmp_path))
    reset_catalog()
    yield tmp_path
    reset_catalog()


@pytest.fixture
def sample_jsonrpc_request():
    """Sample JSON-RPC request factory."""
    def _make_request(method: str, params: dict = None, id: int = 1):
        return {
            "jsonrpc": "2.0",
            "id": id,
            "method": method,
            "params": params or {},
        }
    return _make_request


@pytest.fixture
def call_tool(client, sample_jsonrpc_request):
    """Call a tool over HTTP and return the tools/call result."""
    def _call(name: str, arguments: dict | None = None) -> dict:
        params = {"name": name}
        if arguments is not None:
            params["arguments"] = arguments
        response = client.post("/mcp", json=sample_jsonrpc_request("tools/call", params))
        assert response.status_code == 200
        return response.json()["result"]
    return _call
