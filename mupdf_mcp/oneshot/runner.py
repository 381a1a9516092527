"""Oneshot dispatch: resolve, open, operate and close within one call.

Nothing here touches the session registry and no identifier is issued. The
document handle lives only for the duration of the engine job and is closed
on every exit path.
"""

import asyncio
from concurrent.futures import Executor
from typing import Callable, Optional, TypeVar

import fitz  # PyMuPDF

from mupdf_mcp.config import ServerSettings
from mupdf_mcp.documents import operations
from mupdf_mcp.documents.opener import open_document
from mupdf_mcp.logger import Logger
from mupdf_mcp.sources import resolve_source
from mupdf_mcp.validation.arguments import (
    validate_image_format,
    validate_page_index,
    validate_scale,
    validate_text_format,
)
from mupdf_mcp.validation.models import (
    BookmarksOutput,
    DocumentSource,
    MetadataOutput,
    OutlinesOutput,
    PageTextOutput,
    RenderPageOutput,
)

T = TypeVar("T")


def _run_once(
    source: DocumentSource,
    password: Optional[str],
    operation: Callable[[fitz.Document], T],
) -> T:
    resolved = resolve_source(source)
    opened = open_document(resolved.data, filename=resolved.filename, password=password)
    try:
        return operation(opened.handle)
    finally:
        opened.handle.close()


def _bookmarks(doc: fitz.Document) -> BookmarksOutput:
    nodes = operations.read_outline(doc)
    return BookmarksOutput(bookmarks=operations.flatten_outline(nodes), page_count=doc.page_count)


def _outlines(doc: fitz.Document) -> OutlinesOutput:
    nodes = operations.read_outline(doc)
    return OutlinesOutput(outlines=nodes, node_count=operations.count_outline_nodes(nodes))


class OneshotRunner:
    """Runs a single operation against a transient document."""

    def __init__(self, executor: Executor, settings: ServerSettings, logger: Logger) -> None:
        self._executor = executor
        self.settings = settings
        self.logger = logger

    async def run(
        self,
        source: DocumentSource,
        password: Optional[str],
        operation: Callable[[fitz.Document], T],
    ) -> T:
        """
        Resolve and open ``source``, apply ``operation``, then close the document.

        The whole sequence is one engine job: a call cancelled before the job
        starts never opens the document, and one cancelled mid-flight still
        closes it when the job finishes.

        Raises:
            Any source, open, argument or engine error, unchanged
        """
        future = self._executor.submit(_run_once, source, password, operation)
        return await asyncio.wrap_future(future)

    async def get_bookmarks(
        self, source: DocumentSource, password: Optional[str] = None
    ) -> BookmarksOutput:
        output = await self.run(source, password, _bookmarks)
        self.logger.debug("Oneshot bookmarks read", bookmark_count=len(output.bookmarks))
        return output

    async def get_outlines(
        self, source: DocumentSource, password: Optional[str] = None
    ) -> OutlinesOutput:
        return await self.run(source, password, _outlines)

    async def get_metadata(
        self, source: DocumentSource, password: Optional[str] = None
    ) -> MetadataOutput:
        return await self.run(source, password, operations.read_metadata)

    async def get_page_text(
        self,
        source: DocumentSource,
        page: int,
        password: Optional[str] = None,
        text_format: str = "plain",
    ) -> PageTextOutput:
        validate_page_index(page)
        fmt = validate_text_format(text_format)
        return await self.run(source, password, lambda doc: operations.page_text(doc, page, fmt))

    async def render_page(
        self,
        source: DocumentSource,
        page: int,
        password: Optional[str] = None,
        scale: float = 1.0,
        image_format: str = "png",
    ) -> RenderPageOutput:
        validate_page_index(page)
        fmt = validate_image_format(image_format)
        validate_scale(scale, self.settings.max_render_scale)
        return await self.run(
            source, password, lambda doc: operations.render_page(doc, page, scale, fmt)
        )
