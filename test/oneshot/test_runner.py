"""Tests for oneshot dispatch: open, operate, close in one call"""

import base64

import pytest

from document_factory import PAGE_COUNT, USER_PASSWORD, b64
from mupdf_mcp.exceptions import (
    InvalidArgumentError,
    InvalidSourceError,
    PasswordRequiredError,
    SourceDecodeError,
    WrongPasswordError,
)
from mupdf_mcp.validation.models import DocumentSource


class TestOneshotBookmarks:
    @pytest.mark.asyncio
    async def test_document_without_outline(self, oneshot_runner, plain_pdf_bytes):
        source = DocumentSource(base64=b64(plain_pdf_bytes), filename="plain.pdf")

        bookmarks = await oneshot_runner.get_bookmarks(source)
        outlines = await oneshot_runner.get_outlines(source)

        assert bookmarks.bookmarks == []
        assert bookmarks.page_count == 1
        assert outlines.outlines == []
        assert outlines.node_count == 0

    @pytest.mark.asyncio
    async def test_bookmarks_from_path(self, oneshot_runner, sample_pdf_path):
        output = await oneshot_runner.get_bookmarks(DocumentSource(path=str(sample_pdf_path)))

        assert output.page_count == PAGE_COUNT
        assert [(b.title, b.level, b.page) for b in output.bookmarks] == [
            ("Chapter 1", 0, 0),
            ("Section 1.1", 1, 1),
            ("Section 1.2", 1, 2),
            ("Chapter 2", 0, 3),
            ("Section 2.1", 1, 3),
            ("Detail 2.1.1", 2, 3),
        ]

    @pytest.mark.asyncio
    async def test_outline_tree_from_inline_content(self, oneshot_runner, sample_pdf_bytes):
        output = await oneshot_runner.get_outlines(DocumentSource(base64=b64(sample_pdf_bytes)))

        assert output.node_count == 6
        assert output.outlines[1].children[0].children[0].title == "Detail 2.1.1"


class TestOneshotOperations:
    @pytest.mark.asyncio
    async def test_metadata(self, oneshot_runner, sample_pdf_path):
        output = await oneshot_runner.get_metadata(DocumentSource(path=str(sample_pdf_path)))

        assert output.title == "Sample Document"

    @pytest.mark.asyncio
    async def test_page_text(self, oneshot_runner, sample_pdf_path):
        output = await oneshot_runner.get_page_text(DocumentSource(path=str(sample_pdf_path)), 2)

        assert "Page 3 heading" in output.text

    @pytest.mark.asyncio
    async def test_render(self, oneshot_runner, sample_pdf_path):
        output = await oneshot_runner.render_page(
            DocumentSource(path=str(sample_pdf_path)), 0, scale=0.25
        )

        assert base64.b64decode(output.image).startswith(b"\x89PNG")

    @pytest.mark.asyncio
    async def test_out_of_range_page_detected_after_open(self, oneshot_runner, sample_pdf_path):
        with pytest.raises(InvalidArgumentError):
            await oneshot_runner.get_page_text(
                DocumentSource(path=str(sample_pdf_path)), PAGE_COUNT
            )

    @pytest.mark.asyncio
    async def test_invalid_arguments_rejected_before_open(self, oneshot_runner):
        # The source is invalid too; argument checks come first
        with pytest.raises(InvalidArgumentError):
            await oneshot_runner.render_page(DocumentSource(), 0, scale=-1)
        with pytest.raises(InvalidArgumentError):
            await oneshot_runner.get_page_text(DocumentSource(), -1)


class TestOneshotErrors:
    """Same classification as the stateful import path"""

    @pytest.mark.asyncio
    async def test_source_errors(self, oneshot_runner):
        with pytest.raises(InvalidSourceError):
            await oneshot_runner.get_bookmarks(DocumentSource())
        with pytest.raises(SourceDecodeError):
            await oneshot_runner.get_bookmarks(DocumentSource(base64="%%%"))

    @pytest.mark.asyncio
    async def test_password_errors(self, oneshot_runner, encrypted_pdf_path):
        source = DocumentSource(path=str(encrypted_pdf_path))

        with pytest.raises(PasswordRequiredError):
            await oneshot_runner.get_bookmarks(source)
        with pytest.raises(WrongPasswordError):
            await oneshot_runner.get_bookmarks(source, password="wrong")

        output = await oneshot_runner.get_bookmarks(source, password=USER_PASSWORD)
        assert len(output.bookmarks) == 6

    @pytest.mark.asyncio
    async def test_handle_closed_when_operation_fails(self, oneshot_runner, sample_pdf_path):
        seen = []

        def failing(doc):
            seen.append(doc)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await oneshot_runner.run(DocumentSource(path=str(sample_pdf_path)), None, failing)

        assert seen[0].is_closed
