"""Domain exceptions for the MuPDF MCP server.

All exceptions include error messages designed for LLM processing, enabling
the calling agent to tell "retry with a password" apart from "this document
is unusable" and "this session no longer exists".
"""

from mupdf_mcp.exceptions.base import (
    ConfigurationError,
    EngineFailureError,
    InvalidArgumentError,
    MupdfMcpError,
    ResourceNotFoundError,
    ValidationError,
)
from mupdf_mcp.exceptions.document import (
    CorruptDocumentError,
    DocumentOpenError,
    PasswordRequiredError,
    UnsupportedFormatError,
    WrongPasswordError,
)
from mupdf_mcp.exceptions.session import SessionNotFoundError
from mupdf_mcp.exceptions.source import (
    InvalidSourceError,
    SourceDecodeError,
    SourceNotFoundError,
)

__all__ = [
    # Base exceptions
    "MupdfMcpError",
    "ValidationError",
    "InvalidArgumentError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "EngineFailureError",
    # Source resolution
    "InvalidSourceError",
    "SourceNotFoundError",
    "SourceDecodeError",
    # Document opening
    "DocumentOpenError",
    "UnsupportedFormatError",
    "CorruptDocumentError",
    "PasswordRequiredError",
    "WrongPasswordError",
    # Sessions
    "SessionNotFoundError",
]
