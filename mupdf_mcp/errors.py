"""Map domain exceptions to MCP error payloads.

Each error code gets a recovery strategy phrased for an LLM caller: what went
wrong and which tool call to make next.
"""

from typing import Any, Dict

from mupdf_mcp.exceptions import MupdfMcpError

RECOVERY_STRATEGIES: Dict[str, str] = {
    "INVALID_SOURCE": (
        "Provide exactly one of source.path or source.base64. "
        "Use path for files on the server, base64 (optionally with filename) for inline content."
    ),
    "NOT_FOUND": (
        "Check that source.path points to an existing, readable file (not a directory) "
        "on the server's filesystem, or send the content inline as source.base64."
    ),
    "DECODE_ERROR": (
        "source.base64 is not valid base64. Re-encode the raw file bytes with standard "
        "base64 and retry."
    ),
    "UNSUPPORTED_FORMAT": (
        "The content was not recognised as a supported document. Supply source.filename "
        "with the correct extension (.pdf, .epub, .xps, .cbz, ...) or check the content."
    ),
    "CORRUPT": (
        "The document is empty or damaged and cannot be parsed. Verify the file or "
        "obtain an intact copy; retrying the same bytes will fail again."
    ),
    "PASSWORD_REQUIRED": (
        "The document is encrypted. Retry the same call with the 'password' parameter."
    ),
    "WRONG_PASSWORD": (
        "The password was rejected. Ask the user for the correct password and retry."
    ),
    "UNKNOWN_SESSION": (
        "The document_id is unknown or was closed. Call list_documents to see open "
        "documents, or import_document again to get a new document_id."
    ),
    "INVALID_ARGUMENT": (
        "A parameter is out of range or not recognised. Pages are 0-indexed; call "
        "get_page_count to find the valid range. Review 'details' and retry."
    ),
    "ENGINE_FAILURE": (
        "The document engine failed on this operation. Other pages or operations may "
        "still work; the document stays open."
    ),
}

DEFAULT_RECOVERY = "Review the error message, adjust the request, and try again."


def map_error_for_mcp(exc: MupdfMcpError) -> Dict[str, Any]:
    """Convert a domain exception into the error fields of a tool response."""
    return {
        "error_code": exc.code,
        "message": exc.message,
        "recovery_strategy": RECOVERY_STRATEGIES.get(exc.code, DEFAULT_RECOVERY),
        "details": exc.details or None,
    }
