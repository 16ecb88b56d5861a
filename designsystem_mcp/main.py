"""FastAPI MCP Server - Main application entrypoint."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from designsystem_mcp.config.loader import get_enabled_providers, get_settings, load_tools_config
from designsystem_mcp.catalog.store import get_catalog
from designsystem_mcp.mcp.errors import (
    CatalogError,
    INTERNAL_ERROR,
    PARSE_ERROR,
    make_error_response,
)
from designsystem_mcp.mcp.handlers import PROTOCOL_VERSION, MCPHandlers
from designsystem_mcp.mcp.jsonrpc import JsonRpcProcessor
from designsystem_mcp.mcp.registry import get_registry
from designsystem_mcp.mcp.transport_sse import create_sse_response, get_session_manager
from designsystem_mcp.security.host_validator import build_endpoint_url, validate_host
from designsystem_mcp.utils.logging import get_logger, set_request_id, setup_logging
from designsystem_mcp.utils.rate_limit import RateLimitMiddleware

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    setup_logging()
    log = get_logger("startup")

    settings = get_settings()
    log.info(
        "Starting MCP server",
        server_name=settings.server_name,
        version=settings.server_version,
        rate_limit_enabled=settings.rate_limit_enabled,
    )

    try:
        catalog = get_catalog()
        log.info(
            "Catalog loaded",
            design_system=catalog.name,
            patterns=len(catalog.patterns),
            web_components=len(catalog.web_components),
        )
    except CatalogError:
        log.error("Catalog failed to load, tool calls will fail", exc_info=True)

    # Load tool configuration and register tools
    config = load_tools_config()
    enabled_providers = get_enabled_providers(config)
    log.info("Loading providers", providers=enabled_providers)

    registry = get_registry()
    results = registry.load_providers(enabled_providers)

    for provider, success in results.items():
        if success:
            log.info("Loaded provider", provider=provider)
        else:
            log.warning("Failed to load provider", provider=provider)

    log.info(
        "Tool registry ready",
        tool_count=registry.tool_count,
        provider_count=registry.provider_count,
    )

    yield

    # Shutdown
    session_manager = get_session_manager()
    log.info("Shutting down MCP server", open_sessions=session_manager.session_count)
    session_manager.close_all()


async def add_request_id_middleware(request: Request, call_next):
    """Add request ID and CORS headers to all responses."""
    request_id = set_request_id(request.headers.get("X-Request-Id") or None)
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
    return response


# =============================================================================
# Health and Info Endpoints
# =============================================================================


async def health() -> dict:
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.server_name,
        "version": settings.server_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def root() -> dict:
    """Root endpoint with server info."""
    settings = get_settings()
    registry = get_registry()

    return {
        "name": settings.server_name,
        "version": settings.server_version,
        "description": "MCP server for the design system catalog",
        "endpoints": {
            "health": "/health",
            "sse": settings.sse_path,
            "message": settings.sse_path,
            "mcp": "/mcp",
        },
        "tools_available": registry.tool_count,
        "mcp_protocol_version": PROTOCOL_VERSION,
    }


# =============================================================================
# MCP Endpoints
# =============================================================================


async def sse_endpoint(request: Request):
    """
    SSE endpoint for MCP session establishment.

    Sends an 'endpoint' event with the absolute URL to POST messages to,
    then keeps the stream alive with comment pings until the client leaves.
    """
    settings = get_settings()
    host = validate_host(request.headers.get("host"))
    endpoint_url = build_endpoint_url(host)

    session = get_session_manager().create_session()

    log = get_logger("sse")
    log.info("SSE session created", session_id=session.session_id, endpoint=endpoint_url)

    return create_sse_response(session, endpoint_url, settings.sse_keepalive_seconds)


async def handle_jsonrpc(request: Request) -> Response:
    """Run a JSON-RPC request body through the processor."""
    try:
        body = await request.body()
    except Exception as e:
        logger.warning(f"Could not read request body: {e}")
        return JSONResponse(
            content=make_error_response(None, PARSE_ERROR, f"Could not read request body: {e}")
        )

    registry = get_registry()
    handlers = MCPHandlers(registry)
    processor = JsonRpcProcessor(handlers)

    try:
        payload = await processor.handle_message(body)
    except CatalogError:
        logger.exception("Catalog error while handling request")
        return JSONResponse(
            status_code=500,
            content=make_error_response(None, INTERNAL_ERROR, "Internal server error"),
        )

    if payload is None:
        # Notifications only - nothing to send back
        return Response(status_code=202)

    return JSONResponse(content=processor.dump_response(payload))


async def sse_message_endpoint(request: Request) -> Response:
    """Message endpoint for JSON-RPC requests, announced by the SSE stream."""
    return await handle_jsonrpc(request)


async def mcp_endpoint(request: Request) -> Response:
    """Alias of the SSE message endpoint for plain HTTP clients."""
    return await handle_jsonrpc(request)


# =============================================================================
# Application
# =============================================================================


def create_app() -> FastAPI:
    """Build the application. The SSE routes are mounted at the configured path."""
    settings = get_settings()

    app = FastAPI(
        title="Design System MCP Server",
        description="MCP server exposing a design system catalog: patterns, style guide tokens and web components",
        version=settings.server_version,
        lifespan=lifespan,
    )

    # Add middleware in reverse order (last added = first to process incoming requests)
    app.add_middleware(RateLimitMiddleware)

    # CORS is added after rate limiting so it answers OPTIONS preflight first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization", "Cache-Control"],
        expose_headers=["X-Request-Id", "Retry-After"],
    )

    # Request ID middleware (outermost, so every response carries the headers)
    app.middleware("http")(add_request_id_middleware)

    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route("/", root, methods=["GET"])
    app.add_api_route(settings.sse_path, sse_endpoint, methods=["GET"])
    app.add_api_route(settings.sse_path, sse_message_endpoint, methods=["POST"])
    app.add_api_route("/mcp", mcp_endpoint, methods=["POST"])

    return app


app = create_app()


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "designsystem_mcp.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
