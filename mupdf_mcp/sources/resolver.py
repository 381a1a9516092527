"""Source resolution: turn a DocumentSource into bytes plus a filename.

The resolver knows nothing about sessions. The stateful import path and every
oneshot tool call it the same way.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mupdf_mcp.exceptions import InvalidSourceError, SourceDecodeError, SourceNotFoundError
from mupdf_mcp.validation.models import DocumentSource

_DATA_URL_PREFIX = re.compile(r"^data:[^;,]*;base64,", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedSource:
    """Document bytes and the filename used for format detection."""

    data: bytes
    filename: Optional[str] = None


def resolve_source(source: DocumentSource) -> ResolvedSource:
    """
    Read the bytes a source descriptor points at.

    Args:
        source: Exactly one of ``path`` or ``base64`` must be set

    Returns:
        ResolvedSource. ``filename`` is the path's basename, or the caller's
        hint for inline content (None means the engine sniffs the content).

    Raises:
        InvalidSourceError: Neither or both variants present
        SourceNotFoundError: Path missing, a directory, or unreadable
        SourceDecodeError: Inline payload is not valid base64
    """
    has_path = source.path is not None
    has_inline = source.base64 is not None
    if has_path == has_inline:
        raise InvalidSourceError(
            "Source must specify exactly one of 'path' or 'base64'",
            details={"path_given": has_path, "base64_given": has_inline},
        )
    if has_path:
        return _read_path(source.path)  # type: ignore[arg-type]
    return ResolvedSource(data=decode_base64(source.base64), filename=source.filename or None)  # type: ignore[arg-type]


def _read_path(raw_path: str) -> ResolvedSource:
    if not raw_path.strip():
        raise InvalidSourceError("Source path must not be empty")
    path = Path(raw_path).expanduser()
    if not path.is_file():
        reason = "is a directory" if path.is_dir() else "no such file"
        raise SourceNotFoundError(raw_path, reason)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceNotFoundError(raw_path, exc.strerror or str(exc)) from exc
    return ResolvedSource(data=data, filename=path.name)


def decode_base64(payload: str) -> bytes:
    """Decode standard base64, tolerating whitespace and a data URL prefix."""
    compact = "".join(_DATA_URL_PREFIX.sub("", payload.strip(), count=1).split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SourceDecodeError(
            f"Inline document content is not valid base64: {exc}",
            details={"payload_length": len(payload)},
        ) from exc
