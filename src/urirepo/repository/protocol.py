# SPDX-License-Identifier: MIT
"""Repository protocol and shared path helpers.

Defines the interface that all repository backends must implement, plus the
purely syntactic parent/child path algebra any hierarchical backend can reuse.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable

from ..errors import InvalidNameError, RootHasNoParentError
from ..uri import URI

SEPARATOR = "/"


class BlobWriter(Protocol):
    """Writable stream returned by :meth:`Repository.writer`.

    Bytes become visible to readers only once :meth:`close` returns.
    """

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...

    def __enter__(self) -> BlobWriter: ...

    def __exit__(self, *exc: object) -> None: ...


@runtime_checkable
class Repository(Protocol):
    """Protocol for URI-addressed blob storage.

    Every operation takes the full URI; implementations only look at its
    ``path``. Registries select a repository by the URI's ``scheme``.

    Backends may also define an optional ``destroy(scheme)`` method; a
    registry calls it when the backend stops serving *scheme*.
    """

    # ------------------------------------------------------------------
    # Existence / capabilities
    # ------------------------------------------------------------------

    def exists(self, uri: URI) -> bool:
        """Check whether a resource exists at *uri*."""
        ...

    def can_read(self, uri: URI) -> bool:
        """Check whether *uri* can be read.

        Raises:
            NotFoundError: If the resource does not exist.
        """
        ...

    def can_write(self, uri: URI) -> bool:
        """Check whether *uri* can be written (created or replaced)."""
        ...

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def reader(self, uri: URI) -> BinaryIO:
        """Open a readable binary stream over the resource.

        Raises:
            NotFoundError: If the resource does not exist.
        """
        ...

    def writer(self, uri: URI) -> BlobWriter:
        """Open a writable binary stream. Data is committed on ``close()``."""
        ...

    def delete(self, uri: URI) -> None:
        """Delete the resource. Deleting a missing resource is not an error."""
        ...

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------

    def parent(self, uri: URI) -> URI:
        """Return the URI one level up.

        Raises:
            RootHasNoParentError: If *uri* is already at the root.
        """
        ...

    def child(self, uri: URI, name: str) -> URI:
        """Return the URI of *name* one level below *uri*.

        Raises:
            InvalidNameError: If *name* is empty or contains a separator.
        """
        ...


def split_path(path: str) -> list[str]:
    """Split *path* into its non-empty segments."""
    return [segment for segment in path.split(SEPARATOR) if segment]


def normalize_path(path: str) -> str:
    """Collapse repeated separators and drop any trailing one.

    The result always starts with ``/``; the root is ``/``.

    Examples::

        >>> normalize_path("//foo///bar/")
        '/foo/bar'
        >>> normalize_path("")
        '/'
    """
    return SEPARATOR + SEPARATOR.join(split_path(path))


def generic_parent(uri: URI) -> URI:
    """Drop the last path segment of *uri*.

    Works on the path string alone; the resource need not exist.
    """
    segments = split_path(uri.path)
    if not segments:
        raise RootHasNoParentError(uri)
    return uri.with_path(SEPARATOR + SEPARATOR.join(segments[:-1]))


def generic_child(uri: URI, name: str) -> URI:
    """Append *name* as a new last path segment of *uri*.

    Works on the path string alone; nothing is created.
    """
    if not name or SEPARATOR in name:
        raise InvalidNameError(name)
    return uri.with_path(SEPARATOR + SEPARATOR.join([*split_path(uri.path), name]))
