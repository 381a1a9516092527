"""Oneshot tool handlers: open, read and close a document in a single call."""

from __future__ import annotations

from typing import Any, Dict

from mupdf_mcp.mcp_server.responses import _model_dump, _success
from mupdf_mcp.mcp_server.state import ensure_oneshot
from mupdf_mcp.mcp_server.tool_types import ToolResponse
from mupdf_mcp.mcp_server.tools.pages import render_response
from mupdf_mcp.validation.models import (
    OneshotInput,
    OneshotPageTextInput,
    OneshotRenderPageInput,
)


async def _tool_oneshot_get_bookmarks(arguments: Dict[str, Any]) -> ToolResponse:
    payload = OneshotInput.model_validate(arguments)
    output = await ensure_oneshot().get_bookmarks(payload.source, password=payload.password)
    return _success(_model_dump(output))


async def _tool_oneshot_get_outlines(arguments: Dict[str, Any]) -> ToolResponse:
    payload = OneshotInput.model_validate(arguments)
    output = await ensure_oneshot().get_outlines(payload.source, password=payload.password)
    return _success(_model_dump(output))


async def _tool_oneshot_get_metadata(arguments: Dict[str, Any]) -> ToolResponse:
    payload = OneshotInput.model_validate(arguments)
    output = await ensure_oneshot().get_metadata(payload.source, password=payload.password)
    return _success(_model_dump(output))


async def _tool_oneshot_get_page_text(arguments: Dict[str, Any]) -> ToolResponse:
    payload = OneshotPageTextInput.model_validate(arguments)
    output = await ensure_oneshot().get_page_text(
        payload.source, payload.page, password=payload.password, text_format=payload.format
    )
    return _success(_model_dump(output))


async def _tool_oneshot_render_page(arguments: Dict[str, Any]) -> ToolResponse:
    payload = OneshotRenderPageInput.model_validate(arguments)
    output = await ensure_oneshot().render_page(
        payload.source,
        payload.page,
        password=payload.password,
        scale=payload.scale,
        image_format=payload.format,
    )
    return render_response(output)
