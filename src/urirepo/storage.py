# SPDX-License-Identifier: MIT
"""URI-level storage helpers.

Each function resolves the URI's scheme through a registry (the process-wide
default unless ``registry=`` is given) and delegates to the bound repository.

Usage::

    from urirepo import storage

    storage.write_bytes("mem:///notes/today", b"hello")
    storage.read_bytes("mem:///notes/today")       # b"hello"
    str(storage.parent("mem:///notes/today"))     # "mem:///notes"
"""

from __future__ import annotations

from typing import BinaryIO

from .registry import RepositoryRegistry, get_registry
from .repository.protocol import BlobWriter, Repository
from .uri import URI, as_uri


def _resolve(uri: URI | str, registry: RepositoryRegistry | None) -> tuple[URI, Repository]:
    parsed = as_uri(uri)
    return parsed, (registry or get_registry()).for_uri(parsed)


def exists(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> bool:
    """Check whether a resource exists at *uri*.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.exists(parsed)


def can_read(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> bool:
    """Check whether *uri* can be read.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
        NotFoundError: If the resource does not exist.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.can_read(parsed)


def can_write(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> bool:
    """Check whether *uri* can be written.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.can_write(parsed)


def reader(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> BinaryIO:
    """Open a snapshot stream over the resource at *uri*.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
        NotFoundError: If the resource does not exist.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.reader(parsed)


def writer(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> BlobWriter:
    """Open a writer for *uri*; its bytes are committed on ``close()``.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.writer(parsed)


def delete(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> None:
    """Delete the resource at *uri*; missing resources are ignored.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
    """
    parsed, repo = _resolve(uri, registry)
    repo.delete(parsed)


def parent(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> URI:
    """Return the URI one level above *uri*.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
        RootHasNoParentError: If *uri* is already at the root.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.parent(parsed)


def child(uri: URI | str, name: str, *, registry: RepositoryRegistry | None = None) -> URI:
    """Return the URI of *name* one level below *uri*.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
        InvalidNameError: If *name* is empty or contains ``/``.
    """
    parsed, repo = _resolve(uri, registry)
    return repo.child(parsed, name)


def read_bytes(uri: URI | str, *, registry: RepositoryRegistry | None = None) -> bytes:
    """Read the whole resource at *uri*.

    Raises:
        UnsupportedSchemeError: If no repository serves the scheme.
        NotFoundError: If the resource does not exist.
    """
    stream = reader(uri, registry=registry)
    try:
        return stream.read()
    finally:
        stream.close()


def write_bytes(uri: URI | str, data: bytes, *, registry: RepositoryRegistry | None = None) -> int:
    """Replace the resource at *uri* with *data*.

    Returns:
        Number of bytes written.
    """
    with writer(uri, registry=registry) as w:
        return w.write(data)
