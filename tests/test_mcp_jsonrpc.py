"""Tests for MCP JSON-RPC protocol handling."""

import pytest
from fastapi.testclient import TestClient

from designsystem_mcp.mcp.errors import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)
from designsystem_mcp.mcp.handlers import MCPHandlers
from designsystem_mcp.mcp.jsonrpc import JsonRpcProcessor
from designsystem_mcp.mcp.models import ToolCallResult


class TestJsonRpcParsing:
    """Tests for JSON-RPC message parsing."""

    def test_invalid_json_returns_parse_error(self, client: TestClient):
        """Test that invalid JSON returns parse error with a null id."""
        response = client.post(
            "/mcp",
            content="not valid json{",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] is None
        assert data["error"]["code"] == PARSE_ERROR
        assert "invalid json" in data["error"]["message"].lower()

    def test_missing_jsonrpc_field_returns_invalid_request(self, client: TestClient):
        response = client.post("/mcp", json={"id": 1, "method": "ping"})
        data = response.json()
        assert data["id"] is None
        assert data["error"]["code"] == INVALID_REQUEST
        assert "jsonrpc" in data["error"]["message"]

    def test_wrong_jsonrpc_version_returns_invalid_request(self, client: TestClient):
        """Test that wrong jsonrpc version returns invalid request."""
        response = client.post(
            "/mcp",
            json={"jsonrpc": "1.0", "id": 1, "method": "test"},
        )
        assert response.status_code == 200
        assert response.json()["error"]["code"] == INVALID_REQUEST

    def test_empty_method_returns_invalid_request(self, client: TestClient):
        response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": ""})
        assert response.json()["error"]["code"] == INVALID_REQUEST

    def test_non_object_body_returns_invalid_request(self, client: TestClient):
        response = client.post("/mcp", json="ping")
        assert response.json()["error"]["code"] == INVALID_REQUEST


class TestMcpMethods:
    """Tests for MCP protocol methods."""

    def test_unknown_method_returns_not_found(self, client: TestClient):
        """Unknown methods echo the id and name the method."""
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 7, "method": "frobnicate"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] == 7
        assert data["error"]["code"] == METHOD_NOT_FOUND
        assert "frobnicate" in data["error"]["message"]
        assert "result" not in data

    def test_initialize_returns_capabilities(
        self, client: TestClient, sample_jsonrpc_request
    ):
        """Test that initialize returns server capabilities."""
        response = client.post(
            "/sse",
            json=sample_jsonrpc_request(
                "initialize",
                {
                    "protocolVersion": "2024-11-05",
                    "capabilities": {},
                    "clientInfo": {"name": "test", "version": "1.0"},
                },
            ),
        )
        assert response.status_code == 200

        result = response.json()["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["capabilities"] == {"tools": {}}
        assert result["serverInfo"] == {"name": "mcpdesignsystem", "version": "1.0.0"}

    def test_initialize_tolerates_missing_client_info(
        self, client: TestClient, sample_jsonrpc_request
    ):
        response = client.post("/mcp", json=sample_jsonrpc_request("initialize"))
        assert response.json()["result"]["protocolVersion"] == "2024-11-05"

    def test_ping_returns_empty_result(self, client: TestClient, sample_jsonrpc_request):
        response = client.post("/mcp", json=sample_jsonrpc_request("ping", id="abc"))
        assert response.json() == {"jsonrpc": "2.0", "id": "abc", "result": {}}

    def test_tools_list_returns_tools(
        self, client: TestClient, sample_jsonrpc_request
    ):
        """Test that tools/list returns available tools."""
        response = client.post("/mcp", json=sample_jsonrpc_request("tools/list"))
        assert response.status_code == 200

        tool_names = [t["name"] for t in response.json()["result"]["tools"]]
        assert tool_names == [
            "list_patterns",
            "get_pattern",
            "search_patterns",
            "get_pattern_examples",
            "get_style_guide",
            "get_colors",
            "get_typography",
            "get_spacing",
            "get_breakpoints",
            "get_design_system_info",
            "list_components",
            "get_component",
            "search_components",
            "generate_boilerplate",
        ]

    def test_tools_list_tool_has_required_fields(
        self, client: TestClient, sample_jsonrpc_request
    ):
        """Test that listed tools have all required fields."""
        response = client.post("/mcp", json=sample_jsonrpc_request("tools/list"))

        for tool in response.json()["result"]["tools"]:
            assert set(tool) == {"name", "description", "inputSchema"}
            assert tool["inputSchema"]["type"] == "object"

    def test_tools_call_unknown_tool(
        self, client: TestClient, sample_jsonrpc_request
    ):
        """Unknown tools are a tool-level error, not a JSON-RPC error."""
        response = client.post(
            "/mcp",
            json=sample_jsonrpc_request(
                "tools/call",
                {"name": "does_not_exist", "arguments": {}},
            ),
        )
        assert response.status_code == 200

        data = response.json()
        assert "error" not in data
        assert data["result"]["isError"] is True
        text = data["result"]["content"][0]["text"]
        assert "does_not_exist" in text
        assert "list_patterns" in text

    @pytest.mark.parametrize("params", [{}, {"name": ""}, {"name": 5}])
    def test_tools_call_bad_name_is_invalid_params(
        self, client: TestClient, sample_jsonrpc_request, params
    ):
        response = client.post(
            "/mcp", json=sample_jsonrpc_request("tools/call", params, id=3)
        )
        data = response.json()
        assert data["id"] == 3
        assert data["error"]["code"] == INVALID_PARAMS

    def test_tools_call_non_object_arguments_is_invalid_params(
        self, client: TestClient, sample_jsonrpc_request
    ):
        response = client.post(
            "/mcp",
            json=sample_jsonrpc_request(
                "tools/call", {"name": "list_patterns", "arguments": ["x"]}
            ),
        )
        assert response.json()["error"]["code"] == INVALID_PARAMS


class TestNotifications:
    """Tests for responses that must be suppressed."""

    def test_initialized_notification_returns_accepted(self, client: TestClient):
        """A lone notifications/initialized yields 202 with an empty body."""
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "method": "notifications/initialized"},
        )
        assert response.status_code == 202
        assert response.content == b""

    def test_initialized_with_id_still_gets_no_response(self, client: TestClient):
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 9, "method": "notifications/initialized"},
        )
        assert response.status_code == 202
        assert response.content == b""

    def test_request_without_id_gets_no_response(self, client: TestClient):
        response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping"})
        assert response.status_code == 202
        assert response.content == b""

    def test_explicit_null_id_is_rejected(self, client: TestClient):
        response = client.post(
            "/mcp", json={"jsonrpc": "2.0", "id": None, "method": "ping"}
        )
        assert response.status_code == 200
        assert response.json()["error"]["code"] == INVALID_REQUEST


class TestBatches:
    """Tests for batch requests."""

    def test_batch_preserves_order_and_drops_notifications(self, client: TestClient):
        response = client.post(
            "/mcp",
            json=[
                {"jsonrpc": "2.0", "id": 1, "method": "ping"},
                {"jsonrpc": "2.0", "method": "notifications/initialized"},
                {"jsonrpc": "2.0", "id": 2, "method": "ping"},
            ],
        )
        assert response.status_code == 200

        data = response.json()
        assert isinstance(data, list)
        assert [item["id"] for item in data] == [1, 2]
        assert all(item["result"] == {} for item in data)

    def test_batch_error_does_not_stop_later_elements(self, client: TestClient):
        response = client.post(
            "/mcp",
            json=[
                {"jsonrpc": "2.0", "id": "a", "method": "frobnicate"},
                {"jsonrpc": "2.0", "id": "b", "method": "ping"},
            ],
        )
        data = response.json()
        assert data[0]["error"]["code"] == METHOD_NOT_FOUND
        assert data[1] == {"jsonrpc": "2.0", "id": "b", "result": {}}

    def test_batch_of_notifications_returns_accepted(self, client: TestClient):
        response = client.post(
            "/mcp",
            json=[
                {"jsonrpc": "2.0", "method": "notifications/initialized"},
                {"jsonrpc": "2.0", "method": "ping"},
            ],
        )
        assert response.status_code == 202
        assert response.content == b""

    def test_empty_batch_returns_accepted(self, client: TestClient):
        response = client.post("/mcp", json=[])
        assert response.status_code == 202
        assert response.content == b""

    def test_batch_with_invalid_element_is_rejected_whole(self, client: TestClient):
        response = client.post(
            "/mcp",
            json=[
                {"jsonrpc": "2.0", "id": 1, "method": "ping"},
                {"jsonrpc": "1.0", "id": 2, "method": "ping"},
            ],
        )
        data = response.json()
        assert isinstance(data, dict)
        assert data["id"] is None
        assert data["error"]["code"] == INVALID_REQUEST

    def test_oversized_batch_invokes_no_handlers(
        self, client: TestClient, registry, sample_jsonrpc_request
    ):
        calls = []

        def spy(args, catalog):
            calls.append(args)
            return ToolCallResult.text("called")

        registry.register(
            name="spy",
            description="Records calls",
            input_schema={"type": "object", "properties": {}},
            handler=spy,
        )
        batch = [
            sample_jsonrpc_request("tools/call", {"name": "spy"}, id=i)
            for i in range(101)
        ]

        response = client.post("/mcp", json=batch)

        data = response.json()
        assert data["id"] is None
        assert data["error"]["code"] == INVALID_REQUEST
        assert "too large" in data["error"]["message"].lower()
        assert calls == []


class TestResponseFormat:
    """Tests for JSON-RPC response format compliance."""

    def test_success_response_has_only_result(
        self, client: TestClient, sample_jsonrpc_request
    ):
        data = client.post("/mcp", json=sample_jsonrpc_request("tools/list", id=42)).json()
        assert data["jsonrpc"] == "2.0"
        assert data["id"] == 42
        assert "result" in data
        assert "error" not in data

    def test_error_response_has_only_error(
        self, client: TestClient, sample_jsonrpc_request
    ):
        data = client.post("/mcp", json=sample_jsonrpc_request("unknown/method")).json()
        assert "result" not in data
        assert set(data["error"]) == {"code", "message"}


class TestCatalogFailure:
    """A corrupt catalog surfaces as HTTP 500 with a generic body."""

    def test_corrupt_catalog_returns_500(
        self, client: TestClient, sample_jsonrpc_request, broken_catalog
    ):
        response = client.post(
            "/mcp",
            json=sample_jsonrpc_request("tools/call", {"name": "list_patterns"}),
        )
        assert response.status_code == 500

        data = response.json()
        assert data["id"] is None
        assert data["error"]["message"] == "Internal server error"
        assert str(broken_catalog) not in response.text

    def test_protocol_methods_still_work(
        self, client: TestClient, sample_jsonrpc_request, broken_catalog
    ):
        response = client.post("/mcp", json=sample_jsonrpc_request("tools/list"))
        assert response.status_code == 200


class TestProcessor:
    """Tests for the processor without the HTTP layer."""

    @pytest.mark.asyncio
    async def test_handle_batch_returns_list(self, registry):
        processor = JsonRpcProcessor(MCPHandlers(registry))
        payload = await processor.handle_message(
            b'[{"jsonrpc":"2.0","id":1,"method":"ping"}]'
        )
        assert isinstance(payload, list)
        assert processor.dump_response(payload) == [
            {"jsonrpc": "2.0", "id": 1, "result": {}}
        ]

    @pytest.mark.asyncio
    async def test_non_utf8_body_is_parse_error(self, registry):
        processor = JsonRpcProcessor(MCPHandlers(registry))
        payload = await processor.handle_message(b"\xff\xfe\x00")
        assert payload.error.code == PARSE_ERROR

    @pytest.mark.asyncio
    async def test_handler_exception_becomes_internal_error(self, registry, monkeypatch):
        handlers = MCPHandlers(registry)

        async def boom(params):
            raise RuntimeError("secret detail")

        monkeypatch.setattr(handlers, "handle_ping", boom)
        result, error = await handlers.dispatch("ping", {})
        assert result is None
        assert error["code"] == -32603
        assert "secret detail" not in error["message"]

    @pytest.mark.asyncio
    async def test_handlers_keep_no_state_between_requests(self, registry):
        handlers = MCPHandlers(registry)
        first, _ = await handlers.dispatch("initialize", {})
        second, _ = await handlers.dispatch("initialize", {})
        assert first == second
        assert vars(handlers) == {"registry": registry}
