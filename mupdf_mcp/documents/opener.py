"""Document opening and password handling.

``open_document`` is a pure function of (bytes, filename, password): it never
consults the session registry, so the stateful import path and the oneshot
path classify the same input identically.
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

import fitz  # PyMuPDF

from mupdf_mcp.exceptions import (
    CorruptDocumentError,
    MupdfMcpError,
    PasswordRequiredError,
    UnsupportedFormatError,
    WrongPasswordError,
)

# File extensions MuPDF opens; anything else falls back to content sniffing
SUPPORTED_EXTENSIONS = frozenset(
    {
        "pdf",
        "xps",
        "oxps",
        "epub",
        "mobi",
        "fb2",
        "cbz",
        "svg",
        "txt",
        "htm",
        "html",
        "xhtml",
        "png",
        "jpg",
        "jpeg",
        "bmp",
        "gif",
        "tif",
        "tiff",
        "jxr",
        "jpx",
        "jp2",
        "pnm",
        "pgm",
        "pbm",
        "ppm",
        "pam",
        "psd",
    }
)


@dataclass
class OpenedDocument:
    """A live engine handle plus what was learned while opening it."""

    handle: fitz.Document
    page_count: int
    filename: Optional[str] = None


def format_hint(filename: Optional[str]) -> Optional[str]:
    """Return the engine file type for ``filename``, or None to sniff content."""
    if not filename:
        return None
    suffix = PurePath(filename).suffix.lower().lstrip(".")
    return suffix if suffix in SUPPORTED_EXTENSIONS else None


def open_document(
    data: bytes, filename: Optional[str] = None, password: Optional[str] = None
) -> OpenedDocument:
    """
    Parse ``data`` into an engine handle and authenticate it.

    Args:
        data: Raw document bytes
        filename: Name used for format detection; content is sniffed when the
            name is missing or has an unknown extension
        password: Password for encrypted documents

    Returns:
        OpenedDocument owning the handle. The caller must close it.

    Raises:
        CorruptDocumentError: Empty input, or a known format that fails to parse
        UnsupportedFormatError: Content sniffing found no usable format
        PasswordRequiredError: Encrypted and no (or an empty) password given
        WrongPasswordError: Password given but rejected
    """
    if not data:
        raise CorruptDocumentError("Document content is empty", filename)

    hint = format_hint(filename)
    try:
        handle = fitz.open(stream=data, filetype=hint)
    except Exception as exc:
        if hint is None:
            raise UnsupportedFormatError(
                f"Content is not in a recognised document format: {exc}", filename
            ) from exc
        raise CorruptDocumentError(
            f"Cannot parse content as '{hint}' document: {exc}", filename
        ) from exc

    try:
        # MuPDF has already tried the empty password at this point
        if handle.needs_pass:
            if not password:
                raise PasswordRequiredError(
                    "Document is encrypted and requires a password", filename
                )
            if not handle.authenticate(password):
                raise WrongPasswordError("The supplied password is incorrect", filename)
        page_count = handle.page_count
    except MupdfMcpError:
        handle.close()
        raise
    except Exception as exc:
        handle.close()
        raise CorruptDocumentError(f"Document structure is damaged: {exc}", filename) from exc

    return OpenedDocument(handle=handle, page_count=page_count, filename=filename)
