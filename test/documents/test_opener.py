"""Tests for opening documents: format detection, corruption and passwords"""

import pytest

from document_factory import OWNER_PASSWORD, PAGE_COUNT, USER_PASSWORD
from mupdf_mcp.documents import format_hint, open_document
from mupdf_mcp.exceptions import (
    CorruptDocumentError,
    PasswordRequiredError,
    UnsupportedFormatError,
    WrongPasswordError,
)

GARBAGE = bytes(range(128, 256)) * 8


class TestFormatHint:
    def test_known_extension_is_used(self):
        assert format_hint("Report.PDF") == "pdf"
        assert format_hint("/tmp/book.epub") == "epub"

    def test_unknown_or_missing_extension_means_sniff(self):
        assert format_hint("notes.xyz") is None
        assert format_hint("README") is None
        assert format_hint(None) is None


class TestOpenDocument:
    """Classification of open failures"""

    def test_opens_pdf(self, sample_pdf_bytes):
        opened = open_document(sample_pdf_bytes, filename="sample.pdf")
        try:
            assert opened.page_count == PAGE_COUNT
            assert opened.filename == "sample.pdf"
            assert opened.handle.is_pdf
        finally:
            opened.handle.close()

    def test_sniffs_content_without_hint(self, sample_pdf_bytes):
        opened = open_document(sample_pdf_bytes)
        try:
            assert opened.page_count == PAGE_COUNT
        finally:
            opened.handle.close()

    def test_unknown_extension_falls_back_to_sniffing(self, sample_pdf_bytes):
        opened = open_document(sample_pdf_bytes, filename="download.bin")
        try:
            assert opened.page_count == PAGE_COUNT
        finally:
            opened.handle.close()

    def test_opens_image_as_single_page_document(self, png_bytes):
        opened = open_document(png_bytes, filename="scan.png")
        try:
            assert opened.page_count == 1
            assert not opened.handle.is_pdf
        finally:
            opened.handle.close()

    def test_empty_content_is_corrupt(self):
        with pytest.raises(CorruptDocumentError) as exc_info:
            open_document(b"", filename="empty.pdf")

        assert exc_info.value.code == "CORRUPT"

    def test_garbage_with_known_hint_is_corrupt(self):
        with pytest.raises(CorruptDocumentError):
            open_document(GARBAGE, filename="broken.pdf")

    def test_garbage_without_hint_is_unsupported(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            open_document(GARBAGE)

        assert exc_info.value.code == "UNSUPPORTED_FORMAT"


class TestEncryptedDocuments:
    """Password handling"""

    def test_no_password_is_password_required(self, encrypted_pdf_bytes):
        with pytest.raises(PasswordRequiredError) as exc_info:
            open_document(encrypted_pdf_bytes, filename="locked.pdf")

        assert exc_info.value.code == "PASSWORD_REQUIRED"

    def test_empty_password_is_password_required(self, encrypted_pdf_bytes):
        with pytest.raises(PasswordRequiredError):
            open_document(encrypted_pdf_bytes, filename="locked.pdf", password="")

    def test_wrong_password(self, encrypted_pdf_bytes):
        with pytest.raises(WrongPasswordError) as exc_info:
            open_document(encrypted_pdf_bytes, filename="locked.pdf", password="nope")

        assert exc_info.value.code == "WRONG_PASSWORD"

    @pytest.mark.parametrize("password", [USER_PASSWORD, OWNER_PASSWORD])
    def test_correct_password_opens(self, encrypted_pdf_bytes, password):
        opened = open_document(encrypted_pdf_bytes, filename="locked.pdf", password=password)
        try:
            assert opened.page_count == PAGE_COUNT
            # Still password protected, but this handle is unlocked
            assert opened.handle.needs_pass
            assert not opened.handle.is_encrypted
            assert "heading" in opened.handle[0].get_text()
        finally:
            opened.handle.close()

    def test_empty_user_password_opens_without_password(self, empty_user_password_pdf_bytes):
        opened = open_document(empty_user_password_pdf_bytes, filename="owner-only.pdf")
        try:
            assert opened.page_count == PAGE_COUNT
        finally:
            opened.handle.close()
