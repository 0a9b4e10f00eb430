# SPDX-License-Identifier: MIT
"""In-memory repository backend.

Keeps every blob in a per-instance ``dict`` keyed by normalized path. Readers
get a snapshot of the bytes at open time; writers buffer locally and publish
their bytes in a single step when closed.
"""

from __future__ import annotations

import io
import logging
import threading
from collections.abc import Mapping

from ..errors import NotFoundError
from ..uri import URI
from .protocol import generic_child, generic_parent, normalize_path

logger = logging.getLogger("urirepo")


class MemoryWriter:
    """Buffered writer that commits to a :class:`MemoryRepository` on close.

    Nothing reaches the store until :meth:`close`. Used as a context manager,
    a clean exit commits and an exit caused by an exception discards the
    buffer. A writer that is dropped without being closed commits nothing.
    """

    def __init__(self, repo: MemoryRepository, path: str) -> None:
        self._repo = repo
        self._path = path
        self._buffer = bytearray()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def writable(self) -> bool:
        return not self._closed

    def write(self, data: bytes) -> int:
        """Append *data* to the buffer and return the number of bytes accepted."""
        if self._closed:
            raise ValueError("I/O operation on closed writer")
        view = memoryview(data)
        self._buffer += view
        return view.nbytes

    def close(self) -> None:
        """Commit the buffered bytes. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        blob = bytes(self._buffer)
        self._buffer = bytearray()
        self._repo._commit(self._path, blob)

    def discard(self) -> None:
        """Close without committing."""
        if self._closed:
            return
        self._closed = True
        self._buffer = bytearray()
        logger.debug("Discarded uncommitted write to %s", self._path)

    def __enter__(self) -> MemoryWriter:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *exc: object) -> None:
        if exc_type is None:
            self.close()
        else:
            self.discard()


class MemoryRepository:
    """Process-local repository holding blobs in memory.

    Each instance owns its own store, so two instances registered under the
    same scheme never see each other's data.

    Args:
        scheme: Scheme this repository is meant to serve (informational).
        initial: Optional mapping of path → bytes used to seed the store,
            mostly in tests. Paths are normalized.
    """

    def __init__(self, scheme: str = "mem", initial: Mapping[str, bytes] | None = None) -> None:
        self.scheme = scheme
        self._lock = threading.Lock()
        self._data: dict[str, bytes] = {normalize_path(path): bytes(blob) for path, blob in (initial or {}).items()}

    def __repr__(self) -> str:
        return f"MemoryRepository(scheme={self.scheme!r}, blobs={len(self)})"

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _commit(self, path: str, blob: bytes) -> None:
        with self._lock:
            self._data[path] = blob
        logger.debug("Committed %d bytes to %s://%s", len(blob), self.scheme, path)

    # ------------------------------------------------------------------
    # Existence / capabilities
    # ------------------------------------------------------------------

    def exists(self, uri: URI) -> bool:
        path = normalize_path(uri.path)
        with self._lock:
            return path in self._data

    def can_read(self, uri: URI) -> bool:
        if not self.exists(uri):
            raise NotFoundError(uri)
        return True

    def can_write(self, uri: URI) -> bool:
        return True

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def reader(self, uri: URI) -> io.BytesIO:
        path = normalize_path(uri.path)
        with self._lock:
            blob = self._data.get(path)
        if blob is None:
            raise NotFoundError(uri)
        # Stored blobs are immutable bytes, so this is already a snapshot
        return io.BytesIO(blob)

    def writer(self, uri: URI) -> MemoryWriter:
        return MemoryWriter(self, normalize_path(uri.path))

    def delete(self, uri: URI) -> None:
        path = normalize_path(uri.path)
        with self._lock:
            removed = self._data.pop(path, None)
        if removed is not None:
            logger.debug("Deleted %s://%s", self.scheme, path)

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    def parent(self, uri: URI) -> URI:
        return generic_parent(uri)

    def child(self, uri: URI, name: str) -> URI:
        return generic_child(uri, name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def destroy(self, scheme: str) -> None:
        """Registry hook. Data is kept for callers still holding this instance."""
        logger.debug("Memory repository %r no longer registered for scheme %r", self, scheme)
