"""Page-level tool handlers: geometry, links, search, text and rendering."""

from __future__ import annotations

from typing import Any, Dict

from mupdf_mcp.mcp_server.responses import _image_success, _model_dump, _success
from mupdf_mcp.mcp_server.state import ensure_manager
from mupdf_mcp.mcp_server.tool_types import ToolResponse
from mupdf_mcp.validation.models import (
    GetPageTextInput,
    ImageFormat,
    PageInput,
    RenderPageInput,
    RenderPageOutput,
    SearchPageInput,
)


async def _tool_get_page_bounds(arguments: Dict[str, Any]) -> ToolResponse:
    payload = PageInput.model_validate(arguments)
    output = await ensure_manager().get_page_bounds(payload.document_id, payload.page)
    return _success(_model_dump(output))


async def _tool_get_page_links(arguments: Dict[str, Any]) -> ToolResponse:
    payload = PageInput.model_validate(arguments)
    output = await ensure_manager().get_page_links(payload.document_id, payload.page)
    return _success(_model_dump(output))


async def _tool_search_page(arguments: Dict[str, Any]) -> ToolResponse:
    payload = SearchPageInput.model_validate(arguments)
    output = await ensure_manager().search_page(
        payload.document_id, payload.page, payload.query, hit_max=payload.hit_max
    )
    return _success(_model_dump(output))


async def _tool_get_page_text(arguments: Dict[str, Any]) -> ToolResponse:
    payload = GetPageTextInput.model_validate(arguments)
    output = await ensure_manager().get_page_text(
        payload.document_id, payload.page, text_format=payload.format
    )
    return _success(_model_dump(output))


async def _tool_get_page_text_blocks(arguments: Dict[str, Any]) -> ToolResponse:
    payload = PageInput.model_validate(arguments)
    output = await ensure_manager().get_page_text_blocks(payload.document_id, payload.page)
    return _success(_model_dump(output))


async def _tool_render_page(arguments: Dict[str, Any]) -> ToolResponse:
    payload = RenderPageInput.model_validate(arguments)
    output = await ensure_manager().render_page(
        payload.document_id, payload.page, scale=payload.scale, image_format=payload.format
    )
    return render_response(output)


def render_response(output: RenderPageOutput) -> ToolResponse:
    """JSON envelope, plus image content for raster formats."""
    if output.format == ImageFormat.SVG.value:
        return _success(_model_dump(output))
    return _image_success(_model_dump(output), output.image, output.mime_type)
