"""Document session lifecycle tool handlers."""

from __future__ import annotations

from typing import Any, Dict

from mupdf_mcp.mcp_server.responses import _model_dump, _success
from mupdf_mcp.mcp_server.state import ensure_manager
from mupdf_mcp.mcp_server.tool_types import ToolResponse
from mupdf_mcp.validation.models import DocumentIdInput, ImportDocumentInput, ListDocumentsInput


async def _tool_import_document(arguments: Dict[str, Any]) -> ToolResponse:
    payload = ImportDocumentInput.model_validate(arguments)
    manager = ensure_manager()
    output = await manager.import_document(source=payload.source, password=payload.password)
    return _success(
        _model_dump(output),
        message="Document opened. Save the document_id and pass it to every page operation.",
    )


async def _tool_close_document(arguments: Dict[str, Any]) -> ToolResponse:
    payload = DocumentIdInput.model_validate(arguments)
    manager = ensure_manager()
    output = await manager.close_document(payload.document_id)
    return _success(_model_dump(output))


async def _tool_list_documents(arguments: Dict[str, Any]) -> ToolResponse:
    ListDocumentsInput.model_validate(arguments)
    manager = ensure_manager()
    return _success(_model_dump(manager.list_documents()))
