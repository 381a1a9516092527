"""In-memory registry of open documents keyed by session identifier.

The registry is the sole owner of every stateful document handle. Callers
never receive a handle; they pass an operation to ``with_document`` and get
its result back.

Locking has two levels:

- a ``threading.Lock`` guards the identifier mapping and is only held for
  dict operations, so listing and lookups never wait on document work
- each record carries an ``asyncio.Lock`` giving one operation at a time
  exclusive access to that record's handle

Engine work runs on the shared executor. A record's lock is released when
the engine call has actually finished, not when the awaiting task gives up,
so a cancelled request can never leave a second operation running against
the same handle.
"""

import asyncio
import threading
import uuid
from concurrent.futures import Executor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, TypeVar

import fitz  # PyMuPDF

from mupdf_mcp.documents.opener import OpenedDocument
from mupdf_mcp.exceptions import SessionNotFoundError
from mupdf_mcp.logger import Logger

T = TypeVar("T")


@dataclass
class SessionRecord:
    """One open document owned by the registry."""

    document_id: str
    handle: fitz.Document
    page_count: int
    filename: Optional[str]
    created_at: datetime
    last_accessed: datetime
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    # Set when the record leaves the mapping; the handle may still be closing
    closed: bool = False


@dataclass(frozen=True)
class SessionInfo:
    """Snapshot of a record's bookkeeping fields. Carries no handle."""

    document_id: str
    page_count: int
    filename: Optional[str]
    created_at: datetime
    last_accessed: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _snapshot(record: SessionRecord) -> SessionInfo:
    return SessionInfo(
        document_id=record.document_id,
        page_count=record.page_count,
        filename=record.filename,
        created_at=record.created_at,
        last_accessed=record.last_accessed,
    )


class SessionRegistry:
    """Maps session identifiers to open documents."""

    def __init__(self, executor: Executor, logger: Logger) -> None:
        """
        Initialize the registry.

        Args:
            executor: Executor that runs every engine call
            logger: Logger instance
        """
        self._executor = executor
        self.logger = logger
        self._records: Dict[str, SessionRecord] = {}
        self._mutex = threading.Lock()

    def __len__(self) -> int:
        with self._mutex:
            return len(self._records)

    def __contains__(self, document_id: object) -> bool:
        with self._mutex:
            return document_id in self._records

    def insert(self, opened: OpenedDocument) -> str:
        """
        Take ownership of an opened document and issue a fresh identifier.

        Returns:
            The new session identifier (a UUID4 string, never reused)
        """
        document_id = str(uuid.uuid4())
        now = _now()
        record = SessionRecord(
            document_id=document_id,
            handle=opened.handle,
            page_count=opened.page_count,
            filename=opened.filename,
            created_at=now,
            last_accessed=now,
        )
        with self._mutex:
            self._records[document_id] = record
            open_count = len(self._records)

        self.logger.info(
            "Document registered",
            document_id=document_id,
            page_count=opened.page_count,
            filename=opened.filename,
            open_documents=open_count,
        )
        return document_id

    def _lookup(self, document_id: str) -> SessionRecord:
        with self._mutex:
            record = self._records.get(document_id)
        if record is None:
            raise SessionNotFoundError(document_id)
        return record

    def get_info(self, document_id: str) -> SessionInfo:
        """Return cached bookkeeping for ``document_id`` without borrowing the handle."""
        return _snapshot(self._lookup(document_id))

    def list(self) -> List[SessionInfo]:
        """Snapshot of every live record, oldest first."""
        with self._mutex:
            records = list(self._records.values())
        return sorted((_snapshot(r) for r in records), key=lambda info: info.created_at)

    async def with_document(
        self, document_id: str, operation: Callable[[fitz.Document], T]
    ) -> T:
        """
        Run ``operation`` against the document's handle with exclusive access.

        The operation runs on the engine executor. Its result or exception is
        returned to the caller unchanged.

        Raises:
            SessionNotFoundError: If the identifier is unknown or was closed
                while this call waited for the document
        """
        record = self._lookup(document_id)
        loop = asyncio.get_running_loop()

        await record.lock.acquire()
        try:
            if record.closed:
                raise SessionNotFoundError(document_id)
            record.last_accessed = _now()
            future = self._executor.submit(operation, record.handle)
        except BaseException:
            record.lock.release()
            raise

        # Released from the loop thread once the job is done or cancelled before start
        future.add_done_callback(lambda _: loop.call_soon_threadsafe(record.lock.release))
        return await asyncio.wrap_future(future)

    async def remove(self, document_id: str) -> None:
        """
        Close a document and invalidate its identifier.

        The identifier disappears from the mapping immediately and callers
        already waiting for the document get SessionNotFoundError. The handle
        is closed once any in-flight operation on it has finished. A caller that
        is cancelled while waiting still gets the document closed.

        Raises:
            SessionNotFoundError: If the identifier is unknown or already closed
        """
        with self._mutex:
            record = self._records.pop(document_id, None)
            open_count = len(self._records)
            if record is not None:
                record.closed = True
        if record is None:
            raise SessionNotFoundError(document_id)

        await asyncio.shield(self._dispose(record))
        self.logger.info(
            "Document closed",
            document_id=document_id,
            open_documents=open_count,
        )

    async def _dispose(self, record: SessionRecord) -> None:
        async with record.lock:
            try:
                await asyncio.wrap_future(self._executor.submit(record.handle.close))
            except Exception as exc:
                self.logger.warning(
                    "Engine reported an error while closing document",
                    document_id=record.document_id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )

    async def close_all(self) -> int:
        """Close every open document. Used at server shutdown.

        Returns:
            Number of documents closed
        """
        with self._mutex:
            records = list(self._records.values())
            self._records.clear()
            for record in records:
                record.closed = True

        for record in records:
            await self._dispose(record)

        if records:
            self.logger.info("Closed all open documents", count=len(records))
        return len(records)
