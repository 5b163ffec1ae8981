"""Connection test fixtures -- parameterized for conformance testing."""

from __future__ import annotations

import socket
from typing import TYPE_CHECKING

import pytest

from cloudfs.connections._memory import MemoryConnection
from tests.connections.s3_helpers import REGION, make_s3_bucket

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from cloudfs._connection import Connection


def _s3_available() -> bool:
    try:
        import boto3  # noqa: F401
        import moto  # noqa: F401
        import s3fs  # noqa: F401

        return True
    except ImportError:
        return False


def _free_port() -> int:
    with socket.socket() as s:
        s.bind(("", 0))
        return s.getsockname()[1]


@pytest.fixture(scope="session")
def moto_server() -> Iterator[str | None]:
    """Start a moto HTTP server for the test session."""
    if not _s3_available():
        yield None
        return
    from moto.moto_server.threaded_moto_server import ThreadedMotoServer

    port = _free_port()
    server = ThreadedMotoServer(port=port, verbose=False)
    server.start()
    yield f"http://127.0.0.1:{port}"
    server.stop()


_s3_param = pytest.param(
    "s3",
    marks=[
        pytest.mark.integration,
        pytest.mark.skipif(not _s3_available(), reason="moto/s3fs/boto3 not installed"),
    ],
)


@pytest.fixture(params=["memory", _s3_param])
async def store(request: pytest.FixtureRequest, moto_server: str | None) -> AsyncIterator[tuple[Connection, str]]:
    """Parameterized connection and bucket. Add new connections here."""
    if request.param == "memory":
        bucket = "conformance"
        async with MemoryConnection(buckets=[bucket]) as connection:
            yield connection, bucket
    elif request.param == "s3":
        from cloudfs.connections._s3 import S3Connection

        assert moto_server is not None
        bucket = make_s3_bucket(moto_server)
        async with S3Connection(
            key="testing",
            secret="testing",
            region_name=REGION,
            endpoint_url=moto_server,
        ) as connection:
            yield connection, bucket
    else:
        pytest.skip(f"Unknown connection: {request.param}")
