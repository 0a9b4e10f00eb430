# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for urirepo tests."""

import pytest

from urirepo.registry import RepositoryRegistry, reset_registry
from urirepo.repository.memory import MemoryRepository


@pytest.fixture
def memory_repo() -> MemoryRepository:
    """A memory repository seeded the same way in every test.

    ``/foo`` holds an empty blob, ``/bar`` holds three bytes.
    """
    return MemoryRepository("mem", initial={"/foo": b"", "/bar": bytes([1, 2, 3])})


@pytest.fixture
def registry(memory_repo: MemoryRepository) -> RepositoryRegistry:
    """An explicit registry with ``mem`` bound to :func:`memory_repo`."""
    reg = RepositoryRegistry()
    reg.register("mem", memory_repo)
    return reg


@pytest.fixture
def clean_default_registry():
    """Drop the process-wide registry before and after the test."""
    reset_registry()
    yield
    reset_registry()
