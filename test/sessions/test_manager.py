"""Tests for the stateful dispatcher (SessionManager)"""

import asyncio
import threading
from concurrent.futures import Future
from unittest.mock import patch

import pytest
import pytest_asyncio

from document_factory import PAGE_COUNT, PANGRAM, USER_PASSWORD, b64
from mupdf_mcp.documents import open_document
from mupdf_mcp.exceptions import (
    CorruptDocumentError,
    InvalidArgumentError,
    InvalidSourceError,
    PasswordRequiredError,
    SessionNotFoundError,
    SourceNotFoundError,
    WrongPasswordError,
)
from mupdf_mcp.sessions import manager as manager_module
from mupdf_mcp.validation.models import DocumentSource


class TestImportAndClose:
    @pytest.mark.asyncio
    async def test_import_by_path(self, manager, sample_pdf_path):
        output = await manager.import_document(DocumentSource(path=str(sample_pdf_path)))

        assert output.page_count == PAGE_COUNT
        assert output.filename == "sample.pdf"
        assert len(output.document_id) == 36

        closed = await manager.close_document(output.document_id)
        assert closed.success is True

    @pytest.mark.asyncio
    async def test_path_and_inline_sources_behave_identically(
        self, manager, sample_pdf_path, sample_pdf_bytes
    ):
        by_path = await manager.import_document(DocumentSource(path=str(sample_pdf_path)))
        inline = await manager.import_document(
            DocumentSource(base64=b64(sample_pdf_bytes), filename="sample.pdf")
        )

        assert by_path.page_count == inline.page_count
        assert by_path.filename == inline.filename
        assert (await manager.get_metadata(by_path.document_id)) == (
            await manager.get_metadata(inline.document_id)
        )

        await manager.close_document(by_path.document_id)
        await manager.close_document(inline.document_id)

    @pytest.mark.asyncio
    async def test_failed_import_registers_nothing(self, manager, tmp_path):
        with pytest.raises(SourceNotFoundError):
            await manager.import_document(DocumentSource(path=str(tmp_path / "missing.pdf")))
        with pytest.raises(InvalidSourceError):
            await manager.import_document(DocumentSource())
        with pytest.raises(CorruptDocumentError):
            await manager.import_document(DocumentSource(base64="", filename="empty.pdf"))

        assert manager.list_documents().document_count == 0

    @pytest.mark.asyncio
    async def test_close_twice(self, manager, sample_pdf_path):
        output = await manager.import_document(DocumentSource(path=str(sample_pdf_path)))
        await manager.close_document(output.document_id)

        with pytest.raises(SessionNotFoundError):
            await manager.close_document(output.document_id)

    @pytest.mark.asyncio
    async def test_list_documents(self, manager, sample_pdf_path):
        first = await manager.import_document(DocumentSource(path=str(sample_pdf_path)))
        second = await manager.import_document(DocumentSource(path=str(sample_pdf_path)))

        listing = manager.list_documents()
        assert listing.document_count == 2
        assert [d.document_id for d in listing.documents] == [first.document_id, second.document_id]
        assert all(d.age_seconds >= 0 for d in listing.documents)

        await manager.close_document(first.document_id)
        listing = manager.list_documents()
        assert [d.document_id for d in listing.documents] == [second.document_id]

        await manager.close_document(second.document_id)
        assert manager.list_documents().documents == []

    @pytest.mark.asyncio
    async def test_cancelled_queued_import_opens_nothing(
        self, manager, executor, sample_pdf_path
    ):
        gate = threading.Event()
        executor.submit(gate.wait, 5)  # occupy the single engine thread
        opened_handles = []

        real_open = manager_module.open_document

        def recording_open(*args, **kwargs):
            opened = real_open(*args, **kwargs)
            opened_handles.append(opened.handle)
            return opened

        with patch.object(manager_module, "open_document", recording_open):
            task = asyncio.create_task(
                manager.import_document(DocumentSource(path=str(sample_pdf_path)))
            )
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            gate.set()
            # Wait for the engine thread to drain
            await asyncio.wrap_future(executor.submit(lambda: None))

        # Queued job was cancelled before it started: nothing opened, nothing registered
        assert opened_handles == []
        assert manager.list_documents().document_count == 0

    def test_abandoned_import_result_is_closed(self, sample_pdf_bytes):
        future = Future()
        opened = open_document(sample_pdf_bytes, filename="sample.pdf")
        future.set_result(opened)

        manager_module._discard_opened(future)

        assert opened.handle.is_closed


class TestEncryptedImport:
    @pytest.mark.asyncio
    async def test_password_scenarios(self, manager, encrypted_pdf_path):
        source = DocumentSource(path=str(encrypted_pdf_path))

        with pytest.raises(PasswordRequiredError):
            await manager.import_document(source)
        with pytest.raises(WrongPasswordError):
            await manager.import_document(source, password="wrong")

        output = await manager.import_document(source, password=USER_PASSWORD)
        status = await manager.needs_password(output.document_id)
        assert status.needs_password is True
        assert status.is_encrypted is True
        assert "heading" in (await manager.get_page_text(output.document_id, 0)).text

        await manager.close_document(output.document_id)


class TestOperations:
    @pytest_asyncio.fixture
    async def document_id(self, manager, sample_pdf_path):
        output = await manager.import_document(DocumentSource(path=str(sample_pdf_path)))
        yield output.document_id
        if output.document_id in manager.registry:
            await manager.close_document(output.document_id)

    @pytest.mark.asyncio
    async def test_page_count_and_outline(self, manager, document_id):
        assert manager.get_page_count(document_id).page_count == PAGE_COUNT

        outlines = await manager.get_outlines(document_id)
        assert outlines.node_count == 6
        assert [n.title for n in outlines.outlines] == ["Chapter 1", "Chapter 2"]

    @pytest.mark.asyncio
    async def test_page_operations(self, manager, document_id):
        text = await manager.get_page_text(document_id, 0)
        assert PANGRAM in text.text

        search = await manager.search_page(document_id, 0, "lazy dog")
        assert search.hit_count == 1

        links = await manager.get_page_links(document_id, 0)
        assert len(links.links) == 2

        render = await manager.render_page(document_id, 3, scale=0.5, image_format="jpg")
        assert render.format == "jpeg"

    @pytest.mark.asyncio
    async def test_document_without_outline(self, manager, plain_pdf_bytes):
        output = await manager.import_document(
            DocumentSource(base64=b64(plain_pdf_bytes), filename="plain.pdf")
        )

        outlines = await manager.get_outlines(output.document_id)
        assert outlines.outlines == []
        assert outlines.node_count == 0
        status = await manager.needs_password(output.document_id)
        assert (status.needs_password, status.is_encrypted) == (False, False)

        await manager.close_document(output.document_id)

    @pytest.mark.parametrize("page", [-1, PAGE_COUNT, 100])
    @pytest.mark.asyncio
    async def test_out_of_range_page(self, manager, document_id, page):
        with pytest.raises(InvalidArgumentError) as exc_info:
            await manager.get_page_text(document_id, page)

        assert exc_info.value.code == "INVALID_ARGUMENT"

    @pytest.mark.asyncio
    async def test_invalid_arguments_never_borrow_the_document(self, manager, document_id):
        async def fail_if_borrowed(*args, **kwargs):
            raise AssertionError("document was borrowed")

        with patch.object(manager.registry, "with_document", fail_if_borrowed):
            with pytest.raises(InvalidArgumentError):
                await manager.search_page(document_id, 0, "   ")
            with pytest.raises(InvalidArgumentError):
                await manager.search_page(document_id, 0, "fox", hit_max=0)
            with pytest.raises(InvalidArgumentError):
                await manager.render_page(document_id, 0, scale=0)
            with pytest.raises(InvalidArgumentError):
                await manager.render_page(document_id, 0, scale=1000)
            with pytest.raises(InvalidArgumentError):
                await manager.render_page(document_id, 0, image_format="bmp")
            with pytest.raises(InvalidArgumentError):
                await manager.get_page_text(document_id, 0, text_format="rtf")
            with pytest.raises(InvalidArgumentError):
                await manager.get_page_bounds(document_id, PAGE_COUNT)

    @pytest.mark.asyncio
    async def test_concurrent_operations_on_one_document(self, manager, document_id):
        results = await asyncio.gather(
            *(manager.get_page_text(document_id, page % PAGE_COUNT) for page in range(12))
        )

        for page, output in enumerate(results):
            assert f"Page {page % PAGE_COUNT + 1} heading" in output.text

    @pytest.mark.asyncio
    async def test_operation_after_close(self, manager, document_id):
        await manager.close_document(document_id)

        with pytest.raises(SessionNotFoundError):
            await manager.get_metadata(document_id)
        with pytest.raises(SessionNotFoundError):
            manager.get_page_count(document_id)
