"""Tool routing and dispatch for MCP server."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from mupdf_mcp.errors import map_error_for_mcp
from mupdf_mcp.exceptions import MupdfMcpError
from mupdf_mcp.logger import Logger

from mupdf_mcp.mcp_server.responses import _error, _handle_validation_error, _json_text
from mupdf_mcp.mcp_server.tool_types import ToolHandler, ToolResponse

from mupdf_mcp.mcp_server.tools.discovery import _tool_help, _tool_ping
from mupdf_mcp.mcp_server.tools.documents import (
    _tool_get_metadata,
    _tool_get_outlines,
    _tool_get_page_count,
    _tool_is_pdf,
    _tool_is_reflowable,
    _tool_needs_password,
    _tool_resolve_link,
)
from mupdf_mcp.mcp_server.tools.oneshot import (
    _tool_oneshot_get_bookmarks,
    _tool_oneshot_get_metadata,
    _tool_oneshot_get_outlines,
    _tool_oneshot_get_page_text,
    _tool_oneshot_render_page,
)
from mupdf_mcp.mcp_server.tools.pages import (
    _tool_get_page_bounds,
    _tool_get_page_links,
    _tool_get_page_text,
    _tool_get_page_text_blocks,
    _tool_render_page,
    _tool_search_page,
)
from mupdf_mcp.mcp_server.tools.sessions import (
    _tool_close_document,
    _tool_import_document,
    _tool_list_documents,
)


HANDLERS: Dict[str, ToolHandler] = {
    "ping": _tool_ping,
    "help": _tool_help,
    # Session lifecycle
    "import_document": _tool_import_document,
    "close_document": _tool_close_document,
    "list_documents": _tool_list_documents,
    # Document level
    "get_page_count": _tool_get_page_count,
    "get_metadata": _tool_get_metadata,
    "get_outlines": _tool_get_outlines,
    "needs_password": _tool_needs_password,
    "is_pdf": _tool_is_pdf,
    "is_reflowable": _tool_is_reflowable,
    "resolve_link": _tool_resolve_link,
    # Page level
    "get_page_bounds": _tool_get_page_bounds,
    "get_page_links": _tool_get_page_links,
    "search_page": _tool_search_page,
    "get_page_text": _tool_get_page_text,
    "get_page_text_blocks": _tool_get_page_text_blocks,
    "render_page": _tool_render_page,
    # Oneshot
    "oneshot_get_bookmarks": _tool_oneshot_get_bookmarks,
    "oneshot_get_outlines": _tool_oneshot_get_outlines,
    "oneshot_get_metadata": _tool_oneshot_get_metadata,
    "oneshot_get_page_text": _tool_oneshot_get_page_text,
    "oneshot_render_page": _tool_oneshot_render_page,
}


async def dispatch_tool_call(
    *,
    name: str,
    arguments: Dict[str, Any],
    logger: Logger,
) -> ToolResponse:
    logger.info("Tool invocation started", tool=name, args_keys=list(arguments.keys()))

    handler = HANDLERS.get(name)
    if handler is None:
        logger.error("Unknown tool requested", tool=name)
        available_tools = list(HANDLERS.keys())
        return _error(
            code="UNKNOWN_TOOL",
            message=f"Tool '{name}' does not exist in this service.",
            recovery=(
                f"Available tools: {', '.join(available_tools)}. "
                "Call list_tools() to see detailed descriptions and schemas. "
                "Check for typos in the tool name."
            ),
        )

    try:
        result = await handler(arguments)
        logger.info("Tool completed successfully", tool=name)
        return result
    except PydanticValidationError as exc:
        logger.error(
            "Validation error",
            tool=name,
            error_count=len(exc.errors()),
            errors=[{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in exc.errors()],
        )
        return _handle_validation_error(exc)
    except MupdfMcpError as exc:
        logger.error(
            "Domain error",
            tool=name,
            error_code=exc.code,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        error_response = map_error_for_mcp(exc)
        return [_json_text({"status": "error", **error_response})]
    except ValueError as exc:
        logger.error(
            "Business rule violation",
            tool=name,
            error_type="ValueError",
            error=str(exc),
        )
        return _error(
            code="INVALID_ARGUMENT",
            message=str(exc),
            recovery="Review the error message, adjust the request, and try again.",
        )
    except Exception as exc:  # pragma: no cover - defensive guard
        logger.error(
            "Unexpected tool failure",
            tool=name,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return _error(
            code="UNEXPECTED_ERROR",
            message=f"Unexpected error: {exc}",
            recovery="Check server logs for details and retry the request.",
        )
