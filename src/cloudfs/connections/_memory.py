"""In-memory object store — stdlib-only reference connection."""

from __future__ import annotations

import dataclasses
import hashlib
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from cloudfs._connection import Connection
from cloudfs._errors import NotFound, RemoteError
from cloudfs._models import ObjectMetadata, Prefix

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from cloudfs._models import ListItem
    from cloudfs._range import ByteRange
    from cloudfs._types import MetadataMutator, WritableContent

_DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclasses.dataclass
class _StoredObject:
    data: bytes
    content_type: str
    updated: datetime
    metadata: dict[str, str] = dataclasses.field(default_factory=dict)

    @property
    def etag(self) -> str:
        return hashlib.md5(self.data).hexdigest()  # noqa: S324

    def describe(self, bucket: str, key: str) -> ObjectMetadata:
        return ObjectMetadata(
            bucket=bucket,
            name=key,
            size=len(self.data),
            content_type=self.content_type,
            updated=self.updated,
            etag=self.etag,
            metadata=dict(self.metadata),
        )


class MemoryConnection(Connection):
    """Object store held in process memory.

    :param buckets: Names of buckets to create up front.
    :param chunk_size: Size of the chunks yielded by ``download_object``.
    """

    def __init__(self, buckets: Iterable[str] = (), *, chunk_size: int = _DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._chunk_size = chunk_size
        self._buckets: dict[str, dict[str, _StoredObject]] = {}
        for bucket in buckets:
            self.create_bucket(bucket)

    @property
    def name(self) -> str:
        return "memory"

    def create_bucket(self, bucket: str) -> None:
        if not bucket or not bucket.strip():
            raise ValueError("bucket must be a non-empty string")
        self._buckets.setdefault(bucket, {})

    # region: helpers

    def _bucket(self, bucket: str) -> dict[str, _StoredObject]:
        try:
            return self._buckets[bucket]
        except KeyError:
            raise NotFound(f"No such bucket: {bucket}", path=bucket, backend=self.name) from None

    def _object(self, bucket: str, key: str) -> _StoredObject:
        try:
            return self._bucket(bucket)[key]
        except KeyError:
            raise NotFound(f"No such object: {key}", path=key, backend=self.name) from None

    @staticmethod
    def _read_content(content: WritableContent) -> bytes:
        if isinstance(content, bytes):
            return content
        return content.read()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(tz=timezone.utc)

    # endregion

    async def get_object(self, bucket: str, key: str, *, selector: str | None = None) -> ObjectMetadata:
        return self._object(bucket, key).describe(bucket, key).select(selector)

    async def update_object(
        self,
        bucket: str,
        key: str,
        mutator: MetadataMutator,
        *,
        read_selector: str | None = None,
        result_selector: str | None = None,
    ) -> ObjectMetadata:
        stored = self._object(bucket, key)
        metadata = dict(stored.metadata)
        mutator(metadata)
        stored.metadata = {str(k): str(v) for k, v in metadata.items()}
        stored.updated = self._now()
        return stored.describe(bucket, key).select(result_selector)

    async def upload_object(
        self,
        bucket: str,
        key: str,
        content_type: str,
        source: WritableContent,
        *,
        selector: str | None = None,
    ) -> ObjectMetadata:
        objects = self._bucket(bucket)
        stored = _StoredObject(data=bytes(self._read_content(source)), content_type=content_type, updated=self._now())
        objects[key] = stored
        return stored.describe(bucket, key).select(selector)

    async def download_object(
        self, bucket: str, key: str, *, byte_range: ByteRange | None = None
    ) -> AsyncIterator[bytes]:
        data = self._object(bucket, key).data
        if byte_range is not None:
            if byte_range.start >= len(data):
                raise RemoteError(
                    f"Range {byte_range} not satisfiable for {len(data)} bytes",
                    path=key,
                    backend=self.name,
                    status_code=416,
                )
            data = data[byte_range.start : byte_range.end + 1]
        for offset in range(0, len(data), self._chunk_size):
            yield data[offset : offset + self._chunk_size]

    async def list_bucket(
        self,
        bucket: str,
        *,
        prefix: str = "",
        delimiter: str = "/",
        selector: str | None = None,
    ) -> AsyncIterator[ListItem]:
        objects = self._bucket(bucket)
        seen: set[str] = set()
        for key in sorted(k for k in objects if k.startswith(prefix)):
            stored = objects.get(key)
            if stored is None:
                continue
            rest = key[len(prefix) :]
            if delimiter and delimiter in rest:
                common = prefix + rest[: rest.index(delimiter) + len(delimiter)]
                if common not in seen:
                    seen.add(common)
                    yield Prefix(common)
                continue
            yield stored.describe(bucket, key).select(selector)

    async def copy_object(
        self,
        src_bucket: str,
        src_key: str,
        dst_bucket: str,
        dst_key: str,
        *,
        selector: str | None = None,
    ) -> ObjectMetadata:
        source = self._object(src_bucket, src_key)
        objects = self._bucket(dst_bucket)
        copied = dataclasses.replace(source, metadata=dict(source.metadata), updated=self._now())
        objects[dst_key] = copied
        return copied.describe(dst_bucket, dst_key).select(selector)

    async def delete_object(self, bucket: str, key: str) -> None:
        objects = self._bucket(bucket)
        if key not in objects:
            raise NotFound(f"No such object: {key}", path=key, backend=self.name)
        del objects[key]
