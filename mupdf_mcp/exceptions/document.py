"""Document opening exceptions.

Raised by the opener on both the stateful and the oneshot path, so a caller
sees the same classification however the document was supplied.
"""

from typing import Optional

from mupdf_mcp.exceptions.base import MupdfMcpError


class DocumentOpenError(MupdfMcpError):
    """Base class for failures to produce a document handle."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message, details={"filename": filename} if filename else {})
        self.filename = filename


class UnsupportedFormatError(DocumentOpenError):
    """The bytes are not in any format the engine recognises."""

    code = "UNSUPPORTED_FORMAT"


class CorruptDocumentError(DocumentOpenError):
    """The bytes claim a known format but cannot be parsed."""

    code = "CORRUPT"


class PasswordRequiredError(DocumentOpenError):
    """The document is encrypted and no usable password was supplied."""

    code = "PASSWORD_REQUIRED"


class WrongPasswordError(DocumentOpenError):
    """The supplied password does not authenticate."""

    code = "WRONG_PASSWORD"
