"""Fixtures for MCP-level tests: live server components and response parsing."""

import json

import pytest_asyncio

from mupdf_mcp.config import ServerSettings
from mupdf_mcp.mcp_server.mcp_server import initialize_server, logger, shutdown_server
from mupdf_mcp.mcp_server.routing import dispatch_tool_call


@pytest_asyncio.fixture
async def server_components():
    """Initialise the module-level server components and tear them down after the test."""
    await shutdown_server()
    await initialize_server(ServerSettings())
    yield
    await shutdown_server()


@pytest_asyncio.fixture
async def call_tool(server_components):
    """Call a tool through the routing layer and return the parsed JSON envelope."""

    async def _call(name, arguments=None):
        content = await dispatch_tool_call(name=name, arguments=dict(arguments or {}), logger=logger)
        return json.loads(content[0].text)

    return _call
