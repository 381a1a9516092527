"""MuPDF document MCP server.

This server implements the Model Context Protocol (MCP) for reading
page-described documents (PDF, XPS, EPUB, CBZ, images and the other formats
MuPDF opens). Two usage patterns share one opening and error model:

- Stateful: import_document issues a document_id; page tools borrow the open
  document through the session registry; close_document releases it.
- Oneshot: oneshot_* tools open, read and close a document within one call
  and never touch the registry.

Document identifiers are process-scoped: any client connection may use an
identifier issued to another, and all of them end with the process.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.types import Tool

from mupdf_mcp import __version__
from mupdf_mcp.config import Config, ServerSettings
from mupdf_mcp.logger import Logger, session_logger

from mupdf_mcp.mcp_server.components import initialize_components, shutdown_components
from mupdf_mcp.mcp_server.routing import dispatch_tool_call
from mupdf_mcp.mcp_server.state import get_components, set_components
from mupdf_mcp.mcp_server.tool_schemas import build_tools
from mupdf_mcp.mcp_server.tool_types import ToolResponse

SERVER_INSTRUCTIONS = (
    "Reads PDF and other page-described documents. "
    "For several questions about one document: import_document, then page tools with the "
    "returned document_id, then close_document. "
    "For a single question: use the oneshot_* tools with the source directly. "
    "Pages are 0-indexed. Call help for the full workflow and error codes."
)

app = Server("mupdf-mcp-server", version=__version__, instructions=SERVER_INSTRUCTIONS)
logger: Logger = session_logger


async def initialize_server(settings: Optional[ServerSettings] = None) -> None:
    """Initialize server components. Idempotent."""
    if get_components() is not None:
        return
    logger.info("Initialising MuPDF MCP server")
    set_components(initialize_components(settings=settings or Config.load(), logger=logger))


async def shutdown_server() -> None:
    """Close every open document and release the engine executor."""
    components = get_components()
    if components is None:
        return
    set_components(None)
    await shutdown_components(components, logger)


@app.list_tools()
async def handle_list_tools() -> List[Tool]:
    return await build_tools()


# Arguments are validated by the handlers so rejections share one error shape
@app.call_tool(validate_input=False)
async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> ToolResponse:
    return await dispatch_tool_call(name=name, arguments=arguments or {}, logger=logger)
