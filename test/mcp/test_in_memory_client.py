#!/usr/bin/env python3
"""End-to-end tests through an MCP client session connected in memory"""

import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from document_factory import PAGE_COUNT, b64
from mupdf_mcp.logger import Logger, session_logger
from mupdf_mcp.mcp_server.mcp_server import app

logger: Logger = session_logger


def _envelope(result):
    assert result.content[0].type == "text"
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
async def test_list_tools(server_components):
    async with create_connected_server_and_client_session(app) as session:
        tools = await session.list_tools()

    names = {tool.name for tool in tools.tools}
    logger.info("Tools listed", count=len(names))
    assert {"import_document", "close_document", "render_page", "oneshot_get_bookmarks"} <= names
    assert all(tool.inputSchema["type"] == "object" for tool in tools.tools)


@pytest.mark.asyncio
async def test_ping_over_protocol(server_components):
    async with create_connected_server_and_client_session(app) as session:
        ping = await session.call_tool("ping", {})

    assert _envelope(ping)["data"]["status"] == "ok"


@pytest.mark.asyncio
async def test_stateful_session_over_protocol(server_components, sample_pdf_bytes):
    async with create_connected_server_and_client_session(app) as session:
        imported = _envelope(
            await session.call_tool(
                "import_document",
                {"source": {"base64": b64(sample_pdf_bytes), "filename": "sample.pdf"}},
            )
        )
        document_id = imported["data"]["document_id"]

        text = _envelope(
            await session.call_tool("get_page_text", {"document_id": document_id, "page": 0})
        )
        assert "Page 1 heading" in text["data"]["text"]

        render = await session.call_tool(
            "render_page", {"document_id": document_id, "page": PAGE_COUNT - 1, "scale": 0.25}
        )
        assert render.isError is False
        assert [part.type for part in render.content] == ["text", "image"]
        assert render.content[1].mimeType == "image/png"

        closed = _envelope(await session.call_tool("close_document", {"document_id": document_id}))
        assert closed["data"]["success"] is True


@pytest.mark.asyncio
async def test_identifiers_are_shared_across_connections(server_components, sample_pdf_path):
    async with create_connected_server_and_client_session(app) as first:
        imported = _envelope(
            await first.call_tool("import_document", {"source": {"path": str(sample_pdf_path)}})
        )
    document_id = imported["data"]["document_id"]

    async with create_connected_server_and_client_session(app) as second:
        count = _envelope(await second.call_tool("get_page_count", {"document_id": document_id}))
        assert count["data"]["page_count"] == PAGE_COUNT
        await second.call_tool("close_document", {"document_id": document_id})


@pytest.mark.asyncio
async def test_invalid_arguments_reach_the_handler(server_components):
    async with create_connected_server_and_client_session(app) as session:
        result = await session.call_tool("get_page_text", {"document_id": 42})

    response = _envelope(result)
    assert response["status"] == "error"
    assert response["error_code"] == "INVALID_ARGUMENT"
