"""Common models and enums used across the tool surface."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TextFormat(str, Enum):
    """Supported page text output formats."""

    PLAIN = "plain"
    HTML = "html"
    XHTML = "xhtml"
    XML = "xml"
    JSON = "json"


class ImageFormat(str, Enum):
    """Supported page rendering formats."""

    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"


IMAGE_MIME_TYPES = {
    ImageFormat.PNG: "image/png",
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.SVG: "image/svg+xml",
}


class Point(BaseModel):
    """A point in page coordinates (points, origin top-left)."""

    x: float
    y: float


class Rect(BaseModel):
    """An axis-aligned rectangle in page coordinates."""

    x0: float
    y0: float
    x1: float
    y1: float


class ErrorResponse(BaseModel):
    """Error response structure."""

    model_config = ConfigDict(extra="ignore")

    error_code: str
    message: str
    recovery_strategy: str
    details: Optional[dict] = None
