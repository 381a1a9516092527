"""Session-related exceptions."""

from typing import Any, Dict, Optional

from mupdf_mcp.exceptions.base import ResourceNotFoundError


class SessionNotFoundError(ResourceNotFoundError):
    """Raised when a document identifier is unknown or already closed."""

    code = "UNKNOWN_SESSION"

    def __init__(self, document_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Document '{document_id}' not found",
            details={"document_id": document_id, **(details or {})},
        )
        self.document_id = document_id
