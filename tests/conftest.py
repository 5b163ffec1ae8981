"""Shared test fixtures and marker registration."""

from __future__ import annotations

import pytest

from cloudfs._filesystem import CloudFilesystem
from cloudfs.connections._memory import MemoryConnection

BUCKET = "test-bucket"


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires external services")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def connection() -> MemoryConnection:
    return MemoryConnection(buckets=[BUCKET])


@pytest.fixture
def fs(connection: MemoryConnection) -> CloudFilesystem:
    return CloudFilesystem(connection, BUCKET)
