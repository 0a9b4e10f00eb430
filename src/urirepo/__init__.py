# SPDX-License-Identifier: MIT
"""URI-addressed, pluggable blob storage.

A :class:`RepositoryRegistry` maps URI schemes to repositories;
:class:`MemoryRepository` is the in-process reference backend.
"""

from .errors import (
    InvalidNameError,
    InvalidURIError,
    NotFoundError,
    RepositoryError,
    RootHasNoParentError,
    UnsupportedSchemeError,
)
from .registry import RepositoryRegistry, for_uri, get_registry, register, reset_registry
from .repository import MemoryRepository, MemoryWriter, Repository
from .uri import URI, parse_uri

__all__ = [
    "URI",
    "InvalidNameError",
    "InvalidURIError",
    "MemoryRepository",
    "MemoryWriter",
    "NotFoundError",
    "Repository",
    "RepositoryError",
    "RepositoryRegistry",
    "RootHasNoParentError",
    "UnsupportedSchemeError",
    "for_uri",
    "get_registry",
    "parse_uri",
    "register",
    "reset_registry",
]
