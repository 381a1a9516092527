"""Document-level tool handlers."""

from __future__ import annotations

from typing import Any, Dict

from mupdf_mcp.mcp_server.responses import _model_dump, _success
from mupdf_mcp.mcp_server.state import ensure_manager
from mupdf_mcp.mcp_server.tool_types import ToolResponse
from mupdf_mcp.validation.models import DocumentIdInput, ResolveLinkInput


async def _tool_get_page_count(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    return _success(_model_dump(ensure_manager().get_page_count(payload.document_id)))


async def _tool_get_metadata(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    output = await ensure_manager().get_metadata(payload.document_id)
    return _success(_model_dump(output))


async def _tool_get_outlines(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    output = await ensure_manager().get_outlines(payload.document_id)
    return _success(_model_dump(output))


async def _tool_needs_password(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    output = await ensure_manager().needs_password(payload.document_id)
    return _success(_model_dump(output))


async def _tool_is_pdf(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    output = await ensure_manager().is_pdf(payload.document_id)
    return _success(_model_dump(output))


async def _tool_is_reflowable(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    output = await ensure_manager().is_reflowable(payload.document_id)
    return _success(_model_dump(output))


async def _tool_resolve_link(arguments: Dict[str, Any]) -> ToolResponse:
    payload = ResolveLinkInput.model_validate(arguments)
    output = await ensure_manager().resolve_link(payload.document_id, payload.uri)
    return _success(_model_dump(output))
