"""Server lifecycle and transport wiring for MCP server.

stdio is the default transport for desktop agents. The http transport serves
Streamable HTTP on /mcp/ from a Starlette app run by uvicorn.
"""

from __future__ import annotations

import contextlib
from datetime import datetime, timezone
from typing import AsyncIterator

from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import ASGIApp

from mupdf_mcp.config import ServerSettings

from mupdf_mcp.mcp_server.mcp_server import app, initialize_server, logger, shutdown_server
from mupdf_mcp.mcp_server.state import ensure_registry


async def run_stdio(settings: ServerSettings) -> None:
    await initialize_server(settings)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP server ready", transport="stdio")
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        await shutdown_server()


async def handle_ping(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "ok",
            "service": "mupdf-mcp-server",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "open_documents": len(ensure_registry()),
        }
    )


def create_starlette_app(settings: ServerSettings) -> ASGIApp:
    """Build the Streamable HTTP application. One instance per server run."""
    session_manager_http = StreamableHTTPSessionManager(
        app=app,
        event_store=None,
        json_response=False,
        stateless=False,
    )

    async def handle_streamable_http(scope, receive, send) -> None:
        await session_manager_http.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(starlette_app) -> AsyncIterator[None]:
        logger.info("Starting StreamableHTTP session manager")
        await initialize_server(settings)
        try:
            async with session_manager_http.run():
                logger.info("StreamableHTTP session manager ready")
                yield
        finally:
            await shutdown_server()

    starlette_app = Starlette(
        debug=False,
        routes=[
            Route("/ping", handle_ping, methods=["GET"]),
            Mount("/mcp/", app=handle_streamable_http),
        ],
        lifespan=lifespan,
    )

    return CORSMiddleware(
        starlette_app,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        expose_headers=["Mcp-Session-Id"],
    )


async def run_http(settings: ServerSettings) -> None:
    import uvicorn

    logger.info("Starting MuPDF MCP server", transport="http", host=settings.host, port=settings.port)
    config = uvicorn.Config(
        create_starlette_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    await server.serve()


async def main(settings: ServerSettings) -> None:
    if settings.transport == "http":
        await run_http(settings)
    else:
        await run_stdio(settings)
