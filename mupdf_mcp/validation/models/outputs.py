"""Output models for MCP server tools."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Point, Rect


class PingOutput(BaseModel):
    """Output for ping."""

    model_config = ConfigDict(extra="ignore")

    status: str
    timestamp: str
    message: str
    open_documents: int = 0


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------


class ImportDocumentOutput(BaseModel):
    """Result of import_document."""

    document_id: str
    page_count: int
    filename: Optional[str] = None
    created_at: str


class CloseDocumentOutput(BaseModel):
    """Result of close_document."""

    document_id: str
    success: bool = True
    message: str = "Document closed and its memory released"


class DocumentListEntry(BaseModel):
    """One open document in list_documents."""

    document_id: str
    page_count: int
    filename: Optional[str] = None
    created_at: str
    last_accessed: str
    age_seconds: int


class ListDocumentsOutput(BaseModel):
    """Result of list_documents."""

    document_count: int
    documents: List[DocumentListEntry] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Document level
# ---------------------------------------------------------------------------


class PageCountOutput(BaseModel):
    page_count: int


class MetadataOutput(BaseModel):
    """Document metadata. Empty engine values are reported as null."""

    format: Optional[str] = None
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    keywords: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None
    creation_date: Optional[str] = None
    modification_date: Optional[str] = None
    encryption: Optional[str] = None


class OutlineNode(BaseModel):
    """A bookmark and its children."""

    title: str
    page: Optional[int] = None  # 0-indexed target, None when the entry has no destination
    uri: Optional[str] = None  # external targets only
    children: List[OutlineNode] = Field(default_factory=list)


OutlineNode.model_rebuild()


class OutlinesOutput(BaseModel):
    outlines: List[OutlineNode] = Field(default_factory=list)
    node_count: int = 0


class BookmarkEntry(BaseModel):
    """A flattened bookmark with its nesting level (0 = top level)."""

    title: str
    page: Optional[int] = None
    level: int


class BookmarksOutput(BaseModel):
    bookmarks: List[BookmarkEntry] = Field(default_factory=list)
    page_count: int


class NeedsPasswordOutput(BaseModel):
    needs_password: bool
    is_encrypted: bool = False


class IsPdfOutput(BaseModel):
    is_pdf: bool


class IsReflowableOutput(BaseModel):
    is_reflowable: bool


class ResolveLinkOutput(BaseModel):
    """Destination of a link URI."""

    uri: str
    is_external: bool = False
    page: Optional[int] = None
    x: Optional[float] = None
    y: Optional[float] = None


# ---------------------------------------------------------------------------
# Page level
# ---------------------------------------------------------------------------


class PageBoundsOutput(BaseModel):
    page: int
    width: float
    height: float
    x0: float
    y0: float
    x1: float
    y1: float


class PageLink(BaseModel):
    """A hyperlink area on a page."""

    kind: str
    bounds: Rect
    uri: Optional[str] = None
    target_page: Optional[int] = None


class PageLinksOutput(BaseModel):
    page: int
    links: List[PageLink] = Field(default_factory=list)


class SearchHit(BaseModel):
    """A search hit as the quad around the matched text."""

    ul: Point
    ur: Point
    ll: Point
    lr: Point


class SearchPageOutput(BaseModel):
    page: int
    query: str
    hit_count: int
    hits: List[SearchHit] = Field(default_factory=list)


class PageTextOutput(BaseModel):
    page: int
    format: str
    text: str


class TextLine(BaseModel):
    bounds: Rect
    text: str


class TextBlock(BaseModel):
    bounds: Rect
    lines: List[TextLine] = Field(default_factory=list)


class PageTextBlocksOutput(BaseModel):
    page: int
    blocks: List[TextBlock] = Field(default_factory=list)


class RenderPageOutput(BaseModel):
    """A rendered page image, base64 encoded."""

    page: int
    format: str
    mime_type: str
    scale: float
    width: int
    height: int
    size_bytes: int
    image: str


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class HelpOutput(BaseModel):
    """Workflow guidance returned by help."""

    service_name: str
    version: str
    workflow_overview: str
    stateful_workflow: List[str] = Field(default_factory=list)
    oneshot_workflow: List[str] = Field(default_factory=list)
    conventions: List[str] = Field(default_factory=list)
    error_codes: Dict[str, str] = Field(default_factory=dict)
    common_pitfalls: List[str] = Field(default_factory=list)
