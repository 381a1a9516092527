"""Stateful document operations over the session registry."""

import asyncio
from concurrent.futures import Executor, Future
from datetime import datetime, timezone
from typing import Optional

from mupdf_mcp.config import ServerSettings
from mupdf_mcp.documents import operations
from mupdf_mcp.documents.opener import OpenedDocument, open_document
from mupdf_mcp.logger import Logger
from mupdf_mcp.sessions.registry import SessionInfo, SessionRegistry
from mupdf_mcp.sources import resolve_source
from mupdf_mcp.validation.arguments import (
    validate_hit_max,
    validate_image_format,
    validate_page_index,
    validate_query,
    validate_scale,
    validate_text_format,
)
from mupdf_mcp.validation.models import (
    CloseDocumentOutput,
    DocumentListEntry,
    DocumentSource,
    ImportDocumentOutput,
    IsPdfOutput,
    IsReflowableOutput,
    ListDocumentsOutput,
    MetadataOutput,
    NeedsPasswordOutput,
    OutlinesOutput,
    PageBoundsOutput,
    PageCountOutput,
    PageLinksOutput,
    PageTextBlocksOutput,
    PageTextOutput,
    RenderPageOutput,
    ResolveLinkOutput,
    SearchPageOutput,
)


def _resolve_and_open(source: DocumentSource, password: Optional[str]) -> OpenedDocument:
    resolved = resolve_source(source)
    return open_document(resolved.data, filename=resolved.filename, password=password)


def _discard_opened(future: Future) -> None:
    """Close a document whose importer stopped waiting for it."""
    if future.cancelled() or future.exception() is not None:
        return
    future.result().handle.close()


def _list_entry(info: SessionInfo, now: datetime) -> DocumentListEntry:
    return DocumentListEntry(
        document_id=info.document_id,
        page_count=info.page_count,
        filename=info.filename,
        created_at=info.created_at.isoformat(),
        last_accessed=info.last_accessed.isoformat(),
        age_seconds=int((now - info.created_at).total_seconds()),
    )


class SessionManager:
    """Validates parameters and runs operations against registered documents.

    Every parameter check happens before the registry is asked for the
    document, so a rejected request never waits behind, or blocks, other
    work on the same document.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        executor: Executor,
        settings: ServerSettings,
        logger: Logger,
    ) -> None:
        """
        Initialize the session manager.

        Args:
            registry: Registry that owns every open document
            executor: Engine executor used for opening documents
            settings: Server settings (search and render limits)
            logger: Logger instance
        """
        self.registry = registry
        self._executor = executor
        self.settings = settings
        self.logger = logger

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def import_document(
        self, source: DocumentSource, password: Optional[str] = None
    ) -> ImportDocumentOutput:
        """
        Open a document and register it under a new identifier.

        Raises:
            InvalidSourceError, SourceNotFoundError, SourceDecodeError: Bad source
            DocumentOpenError subclasses: Content could not be opened
        """
        future = self._executor.submit(_resolve_and_open, source, password)
        try:
            opened = await asyncio.wrap_future(future)
        except asyncio.CancelledError:
            future.add_done_callback(_discard_opened)
            raise

        document_id = self.registry.insert(opened)
        info = self.registry.get_info(document_id)
        return ImportDocumentOutput(
            document_id=document_id,
            page_count=info.page_count,
            filename=info.filename,
            created_at=info.created_at.isoformat(),
        )

    async def close_document(self, document_id: str) -> CloseDocumentOutput:
        await self.registry.remove(document_id)
        return CloseDocumentOutput(document_id=document_id)

    def list_documents(self) -> ListDocumentsOutput:
        now = datetime.now(timezone.utc)
        entries = [_list_entry(info, now) for info in self.registry.list()]
        return ListDocumentsOutput(document_count=len(entries), documents=entries)

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def get_page_count(self, document_id: str) -> PageCountOutput:
        return PageCountOutput(page_count=self.registry.get_info(document_id).page_count)

    async def get_metadata(self, document_id: str) -> MetadataOutput:
        return await self.registry.with_document(document_id, operations.read_metadata)

    async def get_outlines(self, document_id: str) -> OutlinesOutput:
        nodes = await self.registry.with_document(document_id, operations.read_outline)
        return OutlinesOutput(outlines=nodes, node_count=operations.count_outline_nodes(nodes))

    async def needs_password(self, document_id: str) -> NeedsPasswordOutput:
        return await self.registry.with_document(document_id, operations.check_needs_password)

    async def is_pdf(self, document_id: str) -> IsPdfOutput:
        return await self.registry.with_document(document_id, operations.check_is_pdf)

    async def is_reflowable(self, document_id: str) -> IsReflowableOutput:
        return await self.registry.with_document(document_id, operations.check_is_reflowable)

    async def resolve_link(self, document_id: str, uri: str) -> ResolveLinkOutput:
        return await self.registry.with_document(
            document_id, lambda doc: operations.resolve_link(doc, uri)
        )

    # ------------------------------------------------------------------
    # Page level
    # ------------------------------------------------------------------

    def _check_page(self, document_id: str, page: int) -> int:
        validate_page_index(page)
        return validate_page_index(page, self.registry.get_info(document_id).page_count)

    async def get_page_bounds(self, document_id: str, page: int) -> PageBoundsOutput:
        self._check_page(document_id, page)
        return await self.registry.with_document(
            document_id, lambda doc: operations.page_bounds(doc, page)
        )

    async def get_page_links(self, document_id: str, page: int) -> PageLinksOutput:
        self._check_page(document_id, page)
        return await self.registry.with_document(
            document_id, lambda doc: operations.page_links(doc, page)
        )

    async def search_page(
        self, document_id: str, page: int, query: str, hit_max: Optional[int] = None
    ) -> SearchPageOutput:
        validate_query(query)
        limit = validate_hit_max(hit_max, self.settings.search_hit_max)
        self._check_page(document_id, page)
        return await self.registry.with_document(
            document_id, lambda doc: operations.search_page(doc, page, query, limit)
        )

    async def get_page_text(
        self, document_id: str, page: int, text_format: str = "plain"
    ) -> PageTextOutput:
        fmt = validate_text_format(text_format)
        self._check_page(document_id, page)
        return await self.registry.with_document(
            document_id, lambda doc: operations.page_text(doc, page, fmt)
        )

    async def get_page_text_blocks(self, document_id: str, page: int) -> PageTextBlocksOutput:
        self._check_page(document_id, page)
        return await self.registry.with_document(
            document_id, lambda doc: operations.page_text_blocks(doc, page)
        )

    async def render_page(
        self, document_id: str, page: int, scale: float = 1.0, image_format: str = "png"
    ) -> RenderPageOutput:
        fmt = validate_image_format(image_format)
        validate_scale(scale, self.settings.max_render_scale)
        self._check_page(document_id, page)
        output = await self.registry.with_document(
            document_id, lambda doc: operations.render_page(doc, page, scale, fmt)
        )
        self.logger.debug(
            "Page rendered",
            document_id=document_id,
            page=page,
            format=output.format,
            size_bytes=output.size_bytes,
        )
        return output
