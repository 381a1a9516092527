"""Source descriptor exceptions."""

from typing import Optional

from mupdf_mcp.exceptions.base import ResourceNotFoundError, ValidationError


class InvalidSourceError(ValidationError):
    """Raised when a source names neither or both of path and inline payload."""

    code = "INVALID_SOURCE"


class SourceNotFoundError(ResourceNotFoundError):
    """Raised when a source path does not exist or cannot be read."""

    code = "NOT_FOUND"

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Cannot read document at '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, details={"path": path})
        self.path = path


class SourceDecodeError(ValidationError):
    """Raised when an inline payload is not valid base64."""

    code = "DECODE_ERROR"
