"""JSON-RPC 2.0 message processing."""

import logging
from typing import Any

from designsystem_mcp.mcp.handlers import MCPHandlers
from designsystem_mcp.mcp.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from designsystem_mcp.mcp.validation import parse_message

logger = logging.getLogger(__name__)

# Methods that never produce a response, even when sent with an id
SILENT_METHODS = frozenset({"notifications/initialized"})

# What the HTTP layer writes back: one response, a batch, or nothing (202)
ResponsePayload = JsonRpcResponse | list[JsonRpcResponse] | None


class JsonRpcProcessor:
    """Process JSON-RPC 2.0 messages."""

    def __init__(self, handlers: MCPHandlers):
        self.handlers = handlers

    async def process_request(
        self, request: JsonRpcRequest
    ) -> JsonRpcResponse | None:
        """
        Process a validated JSON-RPC request.

        Returns None for notifications (requests without id).
        """
        result, error = await self.handlers.dispatch(request.method, request.params)

        if request.is_notification or request.method in SILENT_METHODS:
            return None

        if error is not None:
            return JsonRpcResponse(
                id=request.id,
                error=JsonRpcError(**error),
            )
        return JsonRpcResponse(
            id=request.id,
            result=result,
        )

    async def handle_batch(
        self, requests: list[JsonRpcRequest]
    ) -> list[JsonRpcResponse]:
        """Process batch elements one at a time, in order, dropping notifications."""
        responses = []
        for request in requests:
            response = await self.process_request(request)
            if response is not None:
                responses.append(response)
        return responses

    async def handle_message(self, raw_data: str | bytes) -> ResponsePayload:
        """
        Handle a raw JSON-RPC message end-to-end.

        Returns a response, a list of responses, or None when nothing
        should be sent back.
        """
        message, parse_error = parse_message(raw_data)

        if parse_error is not None:
            # Parse errors don't have a request id
            return JsonRpcResponse(
                id=None,
                error=JsonRpcError(**parse_error),
            )

        if isinstance(message, list):
            responses = await self.handle_batch(message)
            return responses or None

        return await self.process_request(message)  # type: ignore[arg-type]

    def dump_response(self, payload: JsonRpcResponse | list[JsonRpcResponse]) -> Any:
        """Convert a response or batch into JSON-serializable data."""
        if isinstance(payload, list):
            return [response.to_payload() for response in payload]
        return payload.to_payload()
