"""S3Connection tests.

Requires: moto[server,s3], s3fs, boto3 (test dependencies).
All tests are skipped if dependencies are not installed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

pytest.importorskip("moto", reason="moto not installed")
pytest.importorskip("s3fs", reason="s3fs not installed")
pytest.importorskip("boto3", reason="boto3 not installed")

from cloudfs._errors import (  # noqa: E402
    BackendUnavailable,
    NotFound,
    PermissionDenied,
    RemoteError,
)
from cloudfs._filesystem import CloudFilesystem  # noqa: E402
from cloudfs.connections._s3 import S3Connection  # noqa: E402
from tests.connections.s3_helpers import REGION, make_s3_bucket  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

pytestmark = pytest.mark.integration


@pytest.fixture
async def s3(moto_server: str) -> AsyncIterator[S3Connection]:
    connection = S3Connection(key="testing", secret="testing", region_name=REGION, endpoint_url=moto_server)
    yield connection
    await connection.close()


class TestConstruction:
    def test_name(self) -> None:
        assert S3Connection().name == "s3"

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError, match="chunk_size"):
            S3Connection(chunk_size=0)

    def test_lazy_filesystem(self) -> None:
        connection = S3Connection(endpoint_url="http://127.0.0.1:1")
        assert connection._fs_instance is None


class TestErrorMapping:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (FileNotFoundError("gone"), NotFound),
            (PermissionError("nope"), PermissionDenied),
            (OSError("An error occurred (404) when calling the HeadObject operation"), NotFound),
            (OSError("An error occurred (AccessDenied)"), PermissionDenied),
            (OSError("Could not connect to the endpoint URL"), BackendUnavailable),
            (ValueError("The requested range is not satisfiable"), RemoteError),
            (RuntimeError("weird"), RemoteError),
        ],
    )
    def test_mapping(self, exc: Exception, expected: type[RemoteError]) -> None:
        connection = S3Connection()
        with pytest.raises(expected) as exc_info:
            with connection._errors("a.txt"):
                raise exc
        assert exc_info.value.path == "a.txt"
        assert exc_info.value.backend == "s3"

    def test_range_status(self) -> None:
        connection = S3Connection()
        with pytest.raises(RemoteError) as exc_info:
            with connection._errors("a.txt"):
                raise OSError("An error occurred (InvalidRange) when calling the GetObject operation")
        assert exc_info.value.status_code == 416

    def test_cloudfs_errors_pass_through(self) -> None:
        connection = S3Connection()
        with pytest.raises(NotFound, match="already mapped"):
            with connection._errors("a.txt"):
                raise NotFound("already mapped")


class TestSession:
    @pytest.mark.anyio
    async def test_connect_failure_is_retried(self, s3: S3Connection) -> None:
        fs = s3._fs
        with (
            patch.object(fs, "set_session", side_effect=OSError("connection refused")) as set_session,
            patch("asyncio.sleep", return_value=None),
        ):
            with pytest.raises(BackendUnavailable):
                await s3.get_object("bucket", "a.txt")
        assert set_session.await_count == 3

    @pytest.mark.anyio
    async def test_close_resets_session(self, s3: S3Connection, moto_server: str) -> None:
        bucket = make_s3_bucket(moto_server)
        await s3.upload_object(bucket, "a.txt", "text/plain", b"x")
        await s3.close()
        assert s3._session is None
        assert (await s3.get_object(bucket, "a.txt")).size == 1


class TestListing:
    @pytest.mark.anyio
    async def test_pagination(self, s3: S3Connection, moto_server: str) -> None:
        bucket = make_s3_bucket(moto_server)
        keys = [f"many/{i:03d}.txt" for i in range(5)]
        for key in keys:
            await s3.upload_object(bucket, key, "text/plain", b"x")
        call = s3._fs._call_s3

        async def small_pages(method, **kwargs):  # type: ignore[no-untyped-def]
            if method == "list_objects_v2":
                kwargs["MaxKeys"] = 2
            return await call(method, **kwargs)

        with patch.object(s3._fs, "_call_s3", new=small_pages):
            names = [item.name async for item in s3.list_bucket(bucket, prefix="many/")]
        assert names == keys


class TestFilesystem:
    @pytest.mark.anyio
    async def test_missing_bucket(self, s3: S3Connection) -> None:
        fs = CloudFilesystem(s3, "no-such-bucket-cloudfs")
        assert not await fs.file("/a.txt").exists()

    @pytest.mark.anyio
    async def test_streamed_read(self, moto_server: str) -> None:
        bucket = make_s3_bucket(moto_server)
        async with S3Connection(
            key="testing", secret="testing", region_name=REGION, endpoint_url=moto_server, chunk_size=4
        ) as connection:
            fs = CloudFilesystem(connection, bucket)
            file = await fs.file("/data.bin").write(b"0123456789", "application/octet-stream")
            chunks = [chunk async for chunk in file.read(2, 9)]
        assert b"".join(chunks) == b"2345678"
        assert all(len(chunk) <= 4 for chunk in chunks)
