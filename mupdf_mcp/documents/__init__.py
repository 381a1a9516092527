"""Document engine access: opening and read operations."""

from mupdf_mcp.documents.opener import (
    SUPPORTED_EXTENSIONS,
    OpenedDocument,
    format_hint,
    open_document,
)

__all__ = ["SUPPORTED_EXTENSIONS", "OpenedDocument", "format_hint", "open_document"]
