# SPDX-License-Identifier: MIT
"""Scheme → repository registry.

A :class:`RepositoryRegistry` can be constructed and passed around
explicitly. For convenience a process-wide default is available through
:func:`get_registry`; it is created lazily on first use, bootstrapped from
``URIREPO_MEMORY_SCHEMES`` and torn down at process exit via :func:`atexit`
(or earlier with :func:`reset_registry`).
"""

from __future__ import annotations

import atexit
import logging
import threading
from functools import lru_cache

from .config import get_memory_schemes
from .errors import UnsupportedSchemeError
from .repository.memory import MemoryRepository
from .repository.protocol import Repository
from .uri import URI, as_uri

logger = logging.getLogger("urirepo")


def _release(repo: Repository, scheme: str) -> None:
    """Call *repo*'s optional ``destroy`` hook; a failing hook is logged, not raised."""
    hook = getattr(repo, "destroy", None)
    if hook is None:
        return
    try:
        hook(scheme)
    except Exception:
        logger.exception("destroy hook of %r failed for scheme %r", repo, scheme)


class RepositoryRegistry:
    """Thread-safe mapping from URI scheme to :class:`Repository`.

    Replacing a binding only affects later lookups: callers that already
    resolved the previous repository keep using it, data included.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._repositories: dict[str, Repository] = {}

    def __repr__(self) -> str:
        return f"RepositoryRegistry(schemes={self.schemes()})"

    def register(self, scheme: str, repo: Repository) -> None:
        """Bind *scheme* to *repo*, replacing any previous binding.

        Never fails. *scheme* is matched exactly and case-sensitively, and
        :func:`~urirepo.uri.parse_uri` always yields lowercase schemes, so a
        binding such as ``"MEM"`` is never reached through a parsed URI.
        """
        with self._lock:
            previous = self._repositories.get(scheme)
            self._repositories[scheme] = repo

        if previous is None:
            logger.info("Registered repository for scheme %r", scheme)
        elif previous is not repo:
            logger.info("Replaced repository for scheme %r", scheme)
            _release(previous, scheme)

    def unregister(self, scheme: str) -> None:
        """Remove the binding for *scheme*. Unknown schemes are ignored."""
        with self._lock:
            previous = self._repositories.pop(scheme, None)

        if previous is not None:
            logger.info("Unregistered repository for scheme %r", scheme)
            _release(previous, scheme)

    def for_uri(self, uri: URI | str) -> Repository:
        """Return the repository registered for *uri*'s scheme.

        Raises:
            UnsupportedSchemeError: If nothing is registered for the scheme.
        """
        scheme = as_uri(uri).scheme
        with self._lock:
            repo = self._repositories.get(scheme)
        if repo is None:
            raise UnsupportedSchemeError(scheme)
        return repo

    def schemes(self) -> list[str]:
        """Return the currently bound schemes, sorted."""
        with self._lock:
            return sorted(self._repositories)

    def close(self) -> None:
        """Unregister every scheme, calling each repository's ``destroy`` hook if it has one."""
        for scheme in self.schemes():
            self.unregister(scheme)


# ---------- Process-wide default registry ----------


@lru_cache(maxsize=1)
def get_registry() -> RepositoryRegistry:
    """Return the process-wide :class:`RepositoryRegistry` (cached singleton).

    Configuration
    -------------
    ``URIREPO_MEMORY_SCHEMES``
        Comma-separated schemes (default ``"mem"``); each is bound to its own
        fresh :class:`MemoryRepository` when the registry is first created.
    """
    registry = RepositoryRegistry()
    for scheme in get_memory_schemes():
        registry.register(scheme, MemoryRepository(scheme))
    atexit.register(registry.close)
    return registry


def reset_registry() -> None:
    """Tear down the default registry; the next :func:`get_registry` builds a new one."""
    if get_registry.cache_info().currsize:
        registry = get_registry()
        atexit.unregister(registry.close)
        registry.close()
    get_registry.cache_clear()


def register(scheme: str, repo: Repository) -> None:
    """Bind *scheme* to *repo* in the default registry."""
    get_registry().register(scheme, repo)


def for_uri(uri: URI | str) -> Repository:
    """Resolve *uri* against the default registry."""
    return get_registry().for_uri(uri)
