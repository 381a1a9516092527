"""MCP server response helpers.

This module holds low-level helpers used by MCP tool handlers and routing:
- JSON serialization helpers
- success/error response formatting
- Pydantic validation error formatting
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from mcp.types import ImageContent, TextContent
from pydantic import ValidationError as PydanticValidationError

from mupdf_mcp.mcp_server.tool_types import ToolResponse
from mupdf_mcp.validation.models import ErrorResponse


def _json_serializer(obj: Any) -> Any:
    """JSON fallback for pydantic models and values such as datetimes."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    return str(obj)


def _json_text(payload: Dict[str, Any]) -> TextContent:
    return TextContent(
        type="text",
        text=json.dumps(payload, indent=2, ensure_ascii=True, default=_json_serializer),
    )


def _success(data: Any, message: Optional[str] = None) -> ToolResponse:
    payload: Dict[str, Any] = {"status": "success", "data": data}
    if message:
        payload["message"] = message
    return [_json_text(payload)]


def _image_success(data: Dict[str, Any], image_b64: str, mime_type: str) -> ToolResponse:
    """Success envelope plus the image itself as MCP image content."""
    return [*_success(data), ImageContent(type="image", data=image_b64, mimeType=mime_type)]


def _error(
    code: str, message: str, recovery: str, details: Optional[Dict[str, Any]] = None
) -> ToolResponse:
    error_model = ErrorResponse(
        error_code=code,
        message=message,
        recovery_strategy=recovery,
        details=details,
    )
    payload = {"status": "error", **error_model.model_dump(mode="json")}
    return [_json_text(payload)]


def _handle_validation_error(exc: PydanticValidationError) -> ToolResponse:
    errors = exc.errors(include_url=False, include_context=False)
    details = {"validation_errors": errors}

    # Build helpful recovery message based on error types
    missing_fields = [".".join(str(p) for p in e["loc"]) for e in errors if e["type"] == "missing"]
    invalid_types = [
        ".".join(str(p) for p in e["loc"]) for e in errors if e["type"] != "missing"
    ]

    recovery_msg = "Input validation failed. "
    if missing_fields:
        recovery_msg += f"MISSING REQUIRED FIELDS: {', '.join(missing_fields)}. "
    if invalid_types:
        recovery_msg += f"INCORRECT TYPES: {', '.join(invalid_types)}. "
    recovery_msg += (
        "Check the tool's inputSchema for required parameters and their types. "
        "Review the 'details' field below for specific errors, correct your input, and retry."
    )

    return _error(
        code="INVALID_ARGUMENT",
        message=f"Input payload failed validation. {len(errors)} error(s) found.",
        recovery=recovery_msg,
        details=details,
    )


def _model_dump(model: Any) -> Dict[str, Any]:
    """Convert a Pydantic model to a JSON-ready dictionary."""
    if hasattr(model, "model_dump"):
        return model.model_dump(mode="json")
    raise TypeError(f"Cannot convert {type(model).__name__} to dictionary")
