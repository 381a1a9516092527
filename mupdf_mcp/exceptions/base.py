"""Base exception classes for the MuPDF MCP server.

Every domain error carries a stable ``code`` (surfaced to MCP clients as
``error_code``), a human readable ``message`` and an optional ``details`` dict.
"""

from typing import Any, Dict, Optional


class MupdfMcpError(Exception):
    """Root of all domain errors raised by the server."""

    code = "MUPDF_MCP_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details: Dict[str, Any] = details or {}


class ValidationError(MupdfMcpError):
    """Input failed validation."""

    code = "VALIDATION_ERROR"


class InvalidArgumentError(ValidationError):
    """An operation parameter is out of range or not recognised."""

    code = "INVALID_ARGUMENT"

    def __init__(self, message: str, argument: str, value: Any = None, **details: Any):
        super().__init__(message, details={"argument": argument, "value": value, **details})
        self.argument = argument


class ResourceNotFoundError(MupdfMcpError):
    """A referenced resource does not exist."""

    code = "RESOURCE_NOT_FOUND"


class ConfigurationError(MupdfMcpError):
    """Server configuration is invalid."""

    code = "CONFIGURATION_ERROR"


class EngineFailureError(MupdfMcpError):
    """The document engine reported a fault not otherwise classified."""

    code = "ENGINE_FAILURE"

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(
            f"Document engine failed during {operation}: {cause}",
            details={"operation": operation, "engine_error": type(cause).__name__},
        )
        self.operation = operation


__all__ = [
    "MupdfMcpError",
    "ValidationError",
    "InvalidArgumentError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "EngineFailureError",
]
