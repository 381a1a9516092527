"""Tool validation models.

This package contains all Pydantic models used by the MCP tool surface,
organized by logical grouping:
- inputs.py: Input models for MCP tools
- outputs.py: Output models for MCP tools
- common.py: Common models and enums
"""

from .common import IMAGE_MIME_TYPES, ErrorResponse, ImageFormat, Point, Rect, TextFormat
from .inputs import (
    DocumentIdInput,
    DocumentSource,
    GetPageTextInput,
    ImportDocumentInput,
    ListDocumentsInput,
    OneshotInput,
    OneshotPageTextInput,
    OneshotRenderPageInput,
    PageInput,
    RenderPageInput,
    ResolveLinkInput,
    SearchPageInput,
)
from .outputs import (
    BookmarkEntry,
    BookmarksOutput,
    CloseDocumentOutput,
    DocumentListEntry,
    HelpOutput,
    ImportDocumentOutput,
    IsPdfOutput,
    IsReflowableOutput,
    ListDocumentsOutput,
    MetadataOutput,
    NeedsPasswordOutput,
    OutlineNode,
    OutlinesOutput,
    PageBoundsOutput,
    PageCountOutput,
    PageLink,
    PageLinksOutput,
    PageTextBlocksOutput,
    PageTextOutput,
    PingOutput,
    RenderPageOutput,
    ResolveLinkOutput,
    SearchHit,
    SearchPageOutput,
    TextBlock,
    TextLine,
)

__all__ = [
    # Common
    "ErrorResponse",
    "ImageFormat",
    "IMAGE_MIME_TYPES",
    "Point",
    "Rect",
    "TextFormat",
    # Inputs
    "DocumentIdInput",
    "DocumentSource",
    "GetPageTextInput",
    "ImportDocumentInput",
    "ListDocumentsInput",
    "OneshotInput",
    "OneshotPageTextInput",
    "OneshotRenderPageInput",
    "PageInput",
    "RenderPageInput",
    "ResolveLinkInput",
    "SearchPageInput",
    # Outputs
    "BookmarkEntry",
    "BookmarksOutput",
    "CloseDocumentOutput",
    "DocumentListEntry",
    "HelpOutput",
    "ImportDocumentOutput",
    "IsPdfOutput",
    "IsReflowableOutput",
    "ListDocumentsOutput",
    "MetadataOutput",
    "NeedsPasswordOutput",
    "OutlineNode",
    "OutlinesOutput",
    "PageBoundsOutput",
    "PageCountOutput",
    "PageLink",
    "PageLinksOutput",
    "PageTextBlocksOutput",
    "PageTextOutput",
    "PingOutput",
    "RenderPageOutput",
    "ResolveLinkOutput",
    "SearchHit",
    "SearchPageOutput",
    "TextBlock",
    "TextLine",
]
