"""MCP tool schemas (list_tools) for the document service.

This module isolates the Tool(...) schema definitions from the MCP server
entrypoint to improve navigability. Range and format checks are left to the
handlers so that every rejection carries the same INVALID_ARGUMENT shape.
"""

from __future__ import annotations

from typing import Any, Dict, List

from mcp.types import Tool

_SOURCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "description": (
        "Where to read the document from. Provide EXACTLY ONE of 'path' or 'base64'."
    ),
    "properties": {
        "path": {
            "type": "string",
            "description": "Path to a document file on the server's filesystem. '~' is expanded.",
        },
        "base64": {
            "type": "string",
            "description": "Base64-encoded document content. A 'data:...;base64,' prefix is accepted.",
        },
        "filename": {
            "type": "string",
            "description": (
                "Optional filename hint for base64 content, used for format detection "
                "(e.g. 'report.pdf', 'book.epub'). Content is sniffed when omitted."
            ),
        },
    },
}

_PASSWORD_SCHEMA: Dict[str, Any] = {
    "type": "string",
    "description": "Password for encrypted documents. Omit for unencrypted documents.",
}

_DOCUMENT_ID_SCHEMA: Dict[str, Any] = {
    "type": "string",
    "description": (
        "Document identifier returned by import_document. Copy it exactly; it stays valid "
        "until close_document."
    ),
}

_PAGE_SCHEMA: Dict[str, Any] = {
    "type": "integer",
    "description": "Page number, 0-indexed (first page is 0, last is page_count - 1).",
}

_TEXT_FORMAT_SCHEMA: Dict[str, Any] = {
    "type": "string",
    "enum": ["plain", "html", "xhtml", "xml", "json"],
    "description": "Text output format (default: plain).",
    "default": "plain",
}

_IMAGE_FORMAT_SCHEMA: Dict[str, Any] = {
    "type": "string",
    "enum": ["png", "jpeg", "svg"],
    "description": "Image format (default: png). svg returns vector markup and no image content.",
    "default": "png",
}

_SCALE_SCHEMA: Dict[str, Any] = {
    "type": "number",
    "description": (
        "Zoom factor; 1.0 = 72 DPI, 2.0 = 144 DPI. Must be greater than 0 and no larger "
        "than the server's maximum (8.0 by default)."
    ),
    "default": 1.0,
}


def _document_schema(**extra: Dict[str, Any]) -> Dict[str, Any]:
    required = ["document_id", *[k for k, v in extra.items() if "default" not in v]]
    return {
        "type": "object",
        "properties": {"document_id": _DOCUMENT_ID_SCHEMA, **extra},
        "required": required,
    }


def _oneshot_schema(**extra: Dict[str, Any]) -> Dict[str, Any]:
    required = ["source", *[k for k, v in extra.items() if "default" not in v]]
    return {
        "type": "object",
        "properties": {"source": _SOURCE_SCHEMA, "password": _PASSWORD_SCHEMA, **extra},
        "required": required,
    }


async def build_tools() -> List[Tool]:
    return [
        Tool(
            name="ping",
            description=(
                "Health check - Verify service availability. "
                "WORKFLOW: Use this first to confirm the service is responsive before making other requests. "
                "Returns server status, current timestamp and the number of open documents."
            ),
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="help",
            description=(
                "Documentation - Get workflow guidance for the stateful and oneshot usage patterns, "
                "page numbering rules, error codes with recovery steps, and common pitfalls. "
                "USE THIS: When starting a new task or when encountering repeated errors."
            ),
            inputSchema={"type": "object", "properties": {}},
        ),
        # ------------------------------------------------------------------
        # Session lifecycle
        # ------------------------------------------------------------------
        Tool(
            name="import_document",
            description=(
                "Open Document - Parse a document (PDF, XPS, EPUB, MOBI, FB2, CBZ, SVG, images) and keep it open. "
                "WORKFLOW: Call once, save the returned document_id, then use it with the page tools. "
                "Call close_document when finished. "
                "Returns: document_id, page_count, filename, created_at. "
                "ERRORS: INVALID_SOURCE, NOT_FOUND, DECODE_ERROR, UNSUPPORTED_FORMAT, CORRUPT, "
                "PASSWORD_REQUIRED (retry with password), WRONG_PASSWORD."
            ),
            inputSchema={
                "type": "object",
                "properties": {"source": _SOURCE_SCHEMA, "password": _PASSWORD_SCHEMA},
                "required": ["source"],
            },
        ),
        Tool(
            name="close_document",
            description=(
                "Close Document - Release an open document and invalidate its document_id. "
                "Waits for any operation already running on that document. "
                "ERRORS: UNKNOWN_SESSION if the id is unknown or already closed."
            ),
            inputSchema=_document_schema(),
        ),
        Tool(
            name="list_documents",
            description=(
                "List Documents - Show every open document with page_count, filename, created_at, "
                "last_accessed and age_seconds. "
                "RECOVERY: Use this to find a document_id you lost track of."
            ),
            inputSchema={"type": "object", "properties": {}},
        ),
        # ------------------------------------------------------------------
        # Document level
        # ------------------------------------------------------------------
        Tool(
            name="get_page_count",
            description="Page Count - Number of pages in an open document. Valid pages are 0 to page_count - 1.",
            inputSchema=_document_schema(),
        ),
        Tool(
            name="get_metadata",
            description=(
                "Metadata - Document information: format, title, author, subject, keywords, creator, "
                "producer, creation_date, modification_date, encryption. Missing fields are null."
            ),
            inputSchema=_document_schema(),
        ),
        Tool(
            name="get_outlines",
            description=(
                "Outline - The table of contents as a tree. Each node has title, page (0-indexed, "
                "null when the entry has no destination), uri (external targets only) and children."
            ),
            inputSchema=_document_schema(),
        ),
        Tool(
            name="needs_password",
            description=(
                "Password Check - Whether the document is protected by a user password (needs_password) "
                "and whether it is encrypted at all (is_encrypted). Both stay true after the document "
                "was imported with the right password; an owner-only protected PDF reports "
                "needs_password=false, is_encrypted=true."
            ),
            inputSchema=_document_schema(),
        ),
        Tool(
            name="is_pdf",
            description="PDF Check - Whether the open document is a PDF.",
            inputSchema=_document_schema(),
        ),
        Tool(
            name="is_reflowable",
            description=(
                "Reflowable Check - Whether the document has reflowable layout (EPUB, FB2, HTML) "
                "rather than fixed pages."
            ),
            inputSchema=_document_schema(),
        ),
        Tool(
            name="resolve_link",
            description=(
                "Resolve Link - Turn an internal link target (e.g. '#page=3', a named destination) into a "
                "0-indexed page and position. External URIs (https:, mailto:) are reported with "
                "is_external=true and no page."
            ),
            inputSchema=_document_schema(uri={"type": "string", "description": "Link URI to resolve."}),
        ),
        # ------------------------------------------------------------------
        # Page level
        # ------------------------------------------------------------------
        Tool(
            name="get_page_bounds",
            description="Page Bounds - Width, height and bounding box of a page in points (1/72 inch).",
            inputSchema=_document_schema(page=_PAGE_SCHEMA),
        ),
        Tool(
            name="get_page_links",
            description=(
                "Page Links - Every link on a page with kind (goto, uri, launch, named, gotor), "
                "bounds, uri and 0-indexed target_page for internal links."
            ),
            inputSchema=_document_schema(page=_PAGE_SCHEMA),
        ),
        Tool(
            name="search_page",
            description=(
                "Search Page - Find occurrences of text on one page (case-insensitive). "
                "Returns hit_count and the quad (four corner points) of each hit."
            ),
            inputSchema=_document_schema(
                page=_PAGE_SCHEMA,
                query={"type": "string", "description": "Text to search for. Must not be empty."},
                hit_max={
                    "type": "integer",
                    "description": "Maximum hits to return, at least 1 (default: 100).",
                    "default": 100,
                },
            ),
        ),
        Tool(
            name="get_page_text",
            description=(
                "Page Text - Extract text from one page as plain text, HTML, XHTML, XML or JSON. "
                "Use plain for reading, json or get_page_text_blocks for layout."
            ),
            inputSchema=_document_schema(page=_PAGE_SCHEMA, format=_TEXT_FORMAT_SCHEMA),
        ),
        Tool(
            name="get_page_text_blocks",
            description=(
                "Text Blocks - Structured text of one page: blocks, each with bounds and lines, "
                "each line with bounds and text."
            ),
            inputSchema=_document_schema(page=_PAGE_SCHEMA),
        ),
        Tool(
            name="render_page",
            description=(
                "Render Page - Draw one page as PNG, JPEG or SVG. "
                "Returns width, height, format, mime_type, size_bytes and the base64 image; "
                "PNG and JPEG are also returned as image content."
            ),
            inputSchema=_document_schema(
                page=_PAGE_SCHEMA, scale=_SCALE_SCHEMA, format=_IMAGE_FORMAT_SCHEMA
            ),
        ),
        # ------------------------------------------------------------------
        # Oneshot
        # ------------------------------------------------------------------
        Tool(
            name="oneshot_get_bookmarks",
            description=(
                "Oneshot Bookmarks - Open, read the bookmarks of, and close a document in one call. "
                "Returns a flat depth-first list of {title, page (0-indexed), level} plus page_count. "
                "No document_id is issued."
            ),
            inputSchema=_oneshot_schema(),
        ),
        Tool(
            name="oneshot_get_outlines",
            description=(
                "Oneshot Outline - Open, read the outline tree of, and close a document in one call. "
                "No document_id is issued."
            ),
            inputSchema=_oneshot_schema(),
        ),
        Tool(
            name="oneshot_get_metadata",
            description="Oneshot Metadata - Document metadata in one call. No document_id is issued.",
            inputSchema=_oneshot_schema(),
        ),
        Tool(
            name="oneshot_get_page_text",
            description="Oneshot Page Text - Text of one page in one call. No document_id is issued.",
            inputSchema=_oneshot_schema(page=_PAGE_SCHEMA, format=_TEXT_FORMAT_SCHEMA),
        ),
        Tool(
            name="oneshot_render_page",
            description="Oneshot Render - Render one page in one call. No document_id is issued.",
            inputSchema=_oneshot_schema(
                page=_PAGE_SCHEMA, scale=_SCALE_SCHEMA, format=_IMAGE_FORMAT_SCHEMA
            ),
        ),
    ]
