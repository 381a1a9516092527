"""Discovery tool handlers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from mupdf_mcp import __version__
from mupdf_mcp.errors import RECOVERY_STRATEGIES
from mupdf_mcp.mcp_server.responses import _model_dump, _success
from mupdf_mcp.mcp_server.state import ensure_registry
from mupdf_mcp.mcp_server.tool_types import ToolResponse
from mupdf_mcp.validation.models import HelpOutput, PingOutput


async def _tool_ping(arguments: Dict[str, Any]) -> ToolResponse:
    output = PingOutput(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        message="MuPDF document service is online.",
        open_documents=len(ensure_registry()),
    )
    return _success(_model_dump(output))


async def _tool_help(arguments: Dict[str, Any]) -> ToolResponse:
    """Provide workflow documentation and guidance."""
    output = HelpOutput(
        service_name="mupdf-mcp-server",
        version=__version__,
        workflow_overview=(
            "TWO WAYS TO READ A DOCUMENT\n"
            "1. STATEFUL: import_document once, then call page tools with the document_id, "
            "then close_document. Best for several questions about the same document.\n"
            "2. ONESHOT: oneshot_* tools take the source directly and open, read and close "
            "the document in one call. Best for a single question. No document_id is issued."
        ),
        stateful_workflow=[
            "import_document(source={path|base64[, filename]}[, password]) -> document_id, page_count",
            "get_page_count / get_metadata / get_outlines / needs_password / is_pdf / is_reflowable",
            "get_page_text / get_page_text_blocks / search_page / get_page_links / get_page_bounds",
            "render_page(page, scale, format=png|jpeg|svg)",
            "resolve_link(uri) to turn an internal link target into a page number",
            "close_document(document_id) when done; list_documents shows what is still open",
        ],
        oneshot_workflow=[
            "oneshot_get_bookmarks(source) -> flattened bookmarks with level and page",
            "oneshot_get_outlines(source) -> outline tree",
            "oneshot_get_metadata(source)",
            "oneshot_get_page_text(source, page[, format])",
            "oneshot_render_page(source, page[, scale, format])",
        ],
        conventions=[
            "Pages are 0-indexed everywhere: the first page is 0, the last is page_count - 1.",
            "source takes exactly one of path (server filesystem) or base64 (inline content).",
            "filename is a format hint for base64 content; without it the format is sniffed.",
            "A document_id stays valid until close_document or server restart.",
            "Operations on the same document run one at a time; different documents do not wait for each other.",
        ],
        error_codes=dict(RECOVERY_STRATEGIES),
        common_pitfalls=[
            "Using 1-based page numbers (page 1 is the SECOND page)",
            "Passing both source.path and source.base64, or neither",
            "Forgetting the password on encrypted documents (PASSWORD_REQUIRED)",
            "Reusing a document_id after close_document (UNKNOWN_SESSION)",
            "Not closing documents opened with import_document",
        ],
    )
    return _success(_model_dump(output))
