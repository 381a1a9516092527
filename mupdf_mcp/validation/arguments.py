"""Operation parameter checks shared by the stateful and oneshot paths.

Every failure is an ``InvalidArgumentError`` raised before the document engine
is touched.
"""

import math
from typing import Optional

from mupdf_mcp.exceptions import InvalidArgumentError
from mupdf_mcp.validation.models.common import ImageFormat, TextFormat

_IMAGE_FORMAT_ALIASES = {"jpg": ImageFormat.JPEG}


def validate_page_index(page: int, page_count: Optional[int] = None) -> int:
    """Check ``page`` is non-negative and, when known, below ``page_count``."""
    if isinstance(page, bool) or not isinstance(page, int):
        raise InvalidArgumentError(f"Page must be an integer, got {page!r}", argument="page", value=page)
    if page < 0 or (page_count is not None and page >= page_count):
        if page_count is None:
            message = f"Invalid page number: {page} (pages are 0-indexed)"
        elif page_count == 0:
            message = f"Invalid page number: {page} (document has no pages)"
        else:
            message = (
                f"Invalid page number: {page} "
                f"(document has {page_count} pages, valid range: 0-{page_count - 1})"
            )
        raise InvalidArgumentError(message, argument="page", value=page, page_count=page_count)
    return page


def validate_query(query: str) -> str:
    if not query or not query.strip():
        raise InvalidArgumentError("Search query must not be empty", argument="query", value=query)
    return query


def validate_hit_max(hit_max: Optional[int], default: int) -> int:
    if hit_max is None:
        return default
    if hit_max < 1:
        raise InvalidArgumentError(
            f"hit_max must be at least 1, got {hit_max}", argument="hit_max", value=hit_max
        )
    return hit_max


def validate_scale(scale: float, max_scale: float) -> float:
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidArgumentError(
            f"Render scale must be a positive number, got {scale}", argument="scale", value=scale
        )
    if scale > max_scale:
        raise InvalidArgumentError(
            f"Render scale {scale} exceeds the maximum of {max_scale}",
            argument="scale",
            value=scale,
            max_scale=max_scale,
        )
    return scale


def validate_text_format(value: str) -> TextFormat:
    try:
        return TextFormat(value.lower())
    except ValueError:
        valid = [fmt.value for fmt in TextFormat]
        raise InvalidArgumentError(
            f"Invalid text format: {value} (valid formats: {', '.join(valid)})",
            argument="format",
            value=value,
            valid_formats=valid,
        ) from None


def validate_image_format(value: str) -> ImageFormat:
    normalized = value.lower()
    if normalized in _IMAGE_FORMAT_ALIASES:
        return _IMAGE_FORMAT_ALIASES[normalized]
    try:
        return ImageFormat(normalized)
    except ValueError:
        valid = [fmt.value for fmt in ImageFormat]
        raise InvalidArgumentError(
            f"Invalid image format: {value} (valid formats: {', '.join(valid)})",
            argument="format",
            value=value,
            valid_formats=valid,
        ) from None
