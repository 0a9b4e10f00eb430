# SPDX-License-Identifier: MIT
"""Repository backends for urirepo.

A repository stores byte blobs addressed by URI path. Backends share the
:class:`Repository` protocol; :class:`MemoryRepository` is the reference
implementation.

Usage::

    from urirepo.repository import MemoryRepository
    from urirepo.uri import parse_uri

    repo = MemoryRepository()
    with repo.writer(parse_uri("mem:///hero.png")) as w:
        w.write(png_bytes)
    data = repo.reader(parse_uri("mem:///hero.png")).read()
"""

from .memory import MemoryRepository, MemoryWriter
from .protocol import BlobWriter, Repository, generic_child, generic_parent, normalize_path

__all__ = [
    "BlobWriter",
    "MemoryRepository",
    "MemoryWriter",
    "Repository",
    "generic_child",
    "generic_parent",
    "normalize_path",
]
