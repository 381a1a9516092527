"""Validation module for the tool surface.

Validation happens in two layers:
- Pydantic models (shape and type of tool arguments)
- ``arguments`` helpers (ranges and vocabularies, raising InvalidArgumentError)
"""

from mupdf_mcp.validation.arguments import (
    validate_hit_max,
    validate_image_format,
    validate_page_index,
    validate_query,
    validate_scale,
    validate_text_format,
)

__all__ = [
    "validate_hit_max",
    "validate_image_format",
    "validate_page_index",
    "validate_query",
    "validate_scale",
    "validate_text_format",
]
