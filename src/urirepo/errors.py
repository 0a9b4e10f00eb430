# SPDX-License-Identifier: MIT
"""Exceptions raised by registries and repositories."""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception class from which all urirepo exceptions inherit."""


class InvalidURIError(RepositoryError, ValueError):
    """Raised when text cannot be turned into a URI."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Invalid URI {value!r}: {reason}")
        self.value = value


class UnsupportedSchemeError(RepositoryError, LookupError):
    """Raised when no repository is registered for a URI's scheme."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"No repository registered for scheme {scheme!r}")
        self.scheme = scheme


class NotFoundError(RepositoryError, FileNotFoundError):
    """Raised when an operation requires a resource that does not exist."""

    def __init__(self, uri: object) -> None:
        super().__init__(f"Resource not found: {uri}")
        self.uri = uri


class RootHasNoParentError(RepositoryError):
    """Raised when the parent of a root URI is requested."""

    def __init__(self, uri: object) -> None:
        super().__init__(f"URI has no parent, already at the root: {uri}")
        self.uri = uri


class InvalidNameError(RepositoryError, ValueError):
    """Raised when a child segment name is empty or contains a separator."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid child name {name!r}: must be non-empty and contain no '/'")
        self.name = name
