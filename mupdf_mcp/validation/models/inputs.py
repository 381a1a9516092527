"""Input models for MCP server tools.

Only shapes and types are enforced here. Range and vocabulary checks (page
index, scale, formats, search terms) live in
``mupdf_mcp.validation.arguments`` so every caller gets the same
``INVALID_ARGUMENT`` classification.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class DocumentSource(BaseModel):
    """Where to read a document from: a file path, or base64 content.

    Args:
        path: Path to a document file on the server's filesystem
        base64: Base64-encoded document content
        filename: Optional filename hint for inline content (format detection)
    """

    model_config = ConfigDict(extra="ignore")

    path: Optional[str] = None
    base64: Optional[str] = None
    filename: Optional[str] = None


class ImportDocumentInput(BaseModel):
    """Input for import_document.

    Args:
        source: Document source (path or base64)
        password: Password for encrypted documents
    """

    model_config = ConfigDict(extra="ignore")

    source: DocumentSource
    password: Optional[str] = None


class DocumentIdInput(BaseModel):
    """Input for tools that only need a document_id.

    Used by close_document, get_page_count, get_metadata, get_outlines,
    needs_password, is_pdf and is_reflowable.
    """

    model_config = ConfigDict(extra="ignore")

    document_id: str


class ListDocumentsInput(BaseModel):
    """Input for list_documents (no parameters)."""

    model_config = ConfigDict(extra="ignore")


class ResolveLinkInput(DocumentIdInput):
    """Input for resolve_link.

    Args:
        uri: Link URI to resolve, e.g. '#page=3' or 'https://example.com'
    """

    uri: str


class PageInput(DocumentIdInput):
    """Input for page-level tools without extra options.

    Args:
        page: Page number (0-indexed)
    """

    page: int


class SearchPageInput(PageInput):
    """Input for search_page.

    Args:
        query: Text to search for (case-insensitive)
        hit_max: Maximum number of hits to return (defaults to server setting)
    """

    query: str
    hit_max: Optional[int] = None


class GetPageTextInput(PageInput):
    """Input for get_page_text.

    Args:
        format: One of plain, html, xhtml, xml, json
    """

    format: str = "plain"


class RenderPageInput(PageInput):
    """Input for render_page.

    Args:
        scale: Zoom factor, 1.0 = 72 DPI
        format: One of png, jpeg, svg
    """

    scale: float = 1.0
    format: str = "png"


class OneshotInput(BaseModel):
    """Input for oneshot tools that operate on the whole document.

    Args:
        source: Document source (path or base64)
        password: Password for encrypted documents
    """

    model_config = ConfigDict(extra="ignore")

    source: DocumentSource
    password: Optional[str] = None


class OneshotPageTextInput(OneshotInput):
    """Input for oneshot_get_page_text."""

    page: int
    format: str = "plain"


class OneshotRenderPageInput(OneshotInput):
    """Input for oneshot_render_page."""

    page: int
    scale: float = 1.0
    format: str = "png"
