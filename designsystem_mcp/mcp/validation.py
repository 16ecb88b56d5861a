"""Validation of JSON-RPC envelopes, batches and tool arguments."""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from designsystem_mcp.mcp.errors import (
    PARSE_ERROR,
    INVALID_REQUEST,
    format_validation_error,
    make_error_data,
)
from designsystem_mcp.mcp.models import JsonRpcRequest, MAX_BATCH_SIZE

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ParsedMessage = JsonRpcRequest | list[JsonRpcRequest]

_batch_adapter = TypeAdapter(list[JsonRpcRequest])


def decode_json(raw_data: str | bytes) -> tuple[Any, dict[str, Any] | None]:
    """
    Decode a raw request body as JSON.

    Returns (data, error) tuple. The error is a PARSE_ERROR object on failure.
    """
    try:
        if isinstance(raw_data, bytes):
            raw_data = raw_data.decode("utf-8")
        return json.loads(raw_data), None
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return None, make_error_data(PARSE_ERROR, f"Invalid JSON: {e}")


def validate_request(data: Any) -> tuple[ParsedMessage | None, dict[str, Any] | None]:
    """
    Validate decoded JSON as a single request or a batch.

    A batch is rejected as a whole if it is too large or if any element
    fails validation; no element is dispatched in that case.
    """
    if isinstance(data, list):
        if len(data) > MAX_BATCH_SIZE:
            return None, make_error_data(
                INVALID_REQUEST,
                f"Batch too large: {len(data)} requests (maximum {MAX_BATCH_SIZE})",
            )
        try:
            return _batch_adapter.validate_python(data), None
        except ValidationError as e:
            return None, make_error_data(
                INVALID_REQUEST, f"Invalid JSON-RPC batch: {format_validation_error(e)}"
            )

    try:
        return JsonRpcRequest.model_validate(data), None
    except ValidationError as e:
        return None, make_error_data(
            INVALID_REQUEST, f"Invalid JSON-RPC request: {format_validation_error(e)}"
        )


def parse_message(raw_data: str | bytes) -> tuple[ParsedMessage | None, dict[str, Any] | None]:
    """
    Parse and validate a raw JSON-RPC message.

    Returns (request_or_batch, error) tuple. One will be None.
    """
    data, error = decode_json(raw_data)
    if error is not None:
        logger.debug(f"Rejected unparseable body: {error['message']}")
        return None, error
    return validate_request(data)


def validate_arguments(
    model: type[ModelT], arguments: dict[str, Any]
) -> tuple[ModelT | None, str | None]:
    """
    Validate tool arguments against a tool's argument model.

    Returns (arguments, message) tuple. One will be None.
    """
    try:
        return model.model_validate(arguments), None
    except ValidationError as e:
        return None, format_validation_error(e)
