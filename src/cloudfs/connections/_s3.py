"""S3-compatible object store connection using s3fs."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import timezone
from typing import TYPE_CHECKING, Any

from cloudfs._connection import Connection
from cloudfs._errors import (
    BackendUnavailable,
    CloudFsError,
    NotFound,
    PermissionDenied,
    RemoteError,
)
from cloudfs._models import ObjectMetadata, Prefix

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from cloudfs._models import ListItem
    from cloudfs._range import ByteRange
    from cloudfs._types import MetadataMutator, WritableContent

log = logging.getLogger(__name__)

_CHUNK_SIZE = 256 * 1024


class S3Connection(Connection):
    """S3-compatible object store connection using the async API of s3fs.

    :param endpoint_url: Custom endpoint URL (e.g. for MinIO).
    :param key: AWS access key ID.
    :param secret: AWS secret access key.
    :param region_name: AWS region name.
    :param chunk_size: Size of the chunks yielded by ``download_object``.
    :param client_options: Additional options passed to s3fs.
    """

    def __init__(
        self,
        *,
        endpoint_url: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        region_name: str | None = None,
        chunk_size: int = _CHUNK_SIZE,
        client_options: dict[str, Any] | None = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._endpoint_url = endpoint_url
        self._key = key
        self._secret = secret
        self._region_name = region_name
        self._chunk_size = chunk_size
        self._client_options = client_options or {}
        self._fs_instance: Any = None
        self._session: Any = None

    @property
    def name(self) -> str:
        return "s3"

    # region: lazy filesystem

    @property
    def _fs(self) -> Any:
        if self._fs_instance is None:
            import s3fs  # type: ignore[import-untyped]

            opts: dict[str, Any] = dict(self._client_options)
            if self._endpoint_url is not None:
                opts["endpoint_url"] = self._endpoint_url
            if self._key is not None:
                opts["key"] = self._key
            if self._secret is not None:
                opts["secret"] = self._secret
            if self._region_name is not None:
                client_kwargs: dict[str, Any] = opts.setdefault("client_kwargs", {})
                client_kwargs["region_name"] = self._region_name
            opts.setdefault("anon", False)
            self._fs_instance = s3fs.S3FileSystem(asynchronous=True, skip_instance_cache=True, **opts)
        return self._fs_instance

    async def _connect(self) -> None:
        """Open the aiobotocore session with tenacity retry."""
        from tenacity import (
            before_sleep_log,
            retry,
            retry_if_exception_type,
            stop_after_attempt,
            wait_exponential,
        )

        fs = self._fs

        @retry(
            retry=retry_if_exception_type((OSError, TimeoutError)),
            stop=stop_after_attempt(3),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            before_sleep=before_sleep_log(log, logging.WARNING),  # type: ignore[arg-type,unused-ignore]
            reraise=True,
        )
        async def _do_connect() -> Any:
            log.info("Opening S3 session (endpoint=%s)", self._endpoint_url or "default")
            return await fs.set_session()

        try:
            self._session = await _do_connect()
        except OSError as exc:
            raise BackendUnavailable(str(exc), backend=self.name) from exc
        log.info("S3 session established.")

    async def _call(self, method: str, key: str, **kwargs: Any) -> Any:
        if self._session is None:
            await self._connect()
        with self._errors(key):
            return await self._fs._call_s3(method, **kwargs)

    # endregion

    # region: error mapping

    @contextmanager
    def _errors(self, key: str = "") -> Iterator[None]:
        """Map s3fs/botocore exceptions to cloudfs errors."""
        try:
            yield
        except CloudFsError:
            raise
        except FileNotFoundError:
            raise NotFound(f"Not found: {key}", path=key, backend=self.name) from None
        except PermissionError:
            raise PermissionDenied(f"Permission denied: {key}", path=key, backend=self.name) from None
        except Exception as exc:
            raise self._classify_error(exc, key) from exc

    def _classify_error(self, exc: Exception, key: str) -> CloudFsError:
        """Classify an unknown exception into a cloudfs error type."""
        msg = str(exc).lower()
        if "404" in msg or "nosuchkey" in msg or "nosuchbucket" in msg or "not found" in msg:
            return NotFound(f"Not found: {key}", path=key, backend=self.name)
        if "403" in msg or "accessdenied" in msg or "access denied" in msg:
            return PermissionDenied(f"Permission denied: {key}", path=key, backend=self.name)
        if "416" in msg or "invalidrange" in msg or "not satisfiable" in msg:
            return RemoteError(str(exc), path=key, backend=self.name, status_code=416)
        if any(kw in msg for kw in ("endpoint", "connect", "timeout", "dns", "name or service")):
            return BackendUnavailable(str(exc), path=key, backend=self.name)
        return RemoteError(str(exc), path=key, backend=self.name)

    # endregion

    # region: helpers

    @staticmethod
    def _read_content(content: WritableContent) -> bytes:
        if isinstance(content, bytes):
            return content
        return content.read()

    @staticmethod
    def _etag(raw: str | None) -> str | None:
        return raw.strip('"') if raw else None

    def _describe(self, bucket: str, key: str, head: dict[str, Any]) -> ObjectMetadata:
        """Convert a ``head_object`` response to ObjectMetadata."""
        updated = head.get("LastModified")
        if updated is not None and updated.tzinfo is None:
            updated = updated.replace(tzinfo=timezone.utc)
        return ObjectMetadata(
            bucket=bucket,
            name=key,
            size=int(head.get("ContentLength", 0) or 0),
            content_type=head.get("ContentType"),
            updated=updated,
            etag=self._etag(head.get("ETag")),
            metadata=dict(head.get("Metadata") or {}),
        )

    def _describe_listed(self, bucket: str, item: dict[str, Any]) -> ObjectMetadata:
        """Convert a ``list_objects_v2`` content entry to ObjectMetadata."""
        updated = item.get("LastModified")
        if updated is not None and updated.tzinfo is None:
            updated = updated.replace(tzinfo=timezone.utc)
        return ObjectMetadata(
            bucket=bucket,
            name=item["Key"],
            size=int(item.get("Size", 0) or 0),
            updated=updated,
            etag=self._etag(item.get("ETag")),
        )

    async def _head(self, bucket: str, key: str) -> ObjectMetadata:
        head = await self._call("head_object", key, Bucket=bucket, Key=key)
        return self._describe(bucket, key, head)

    # endregion

    async def get_object(self, bucket: str, key: str, *, selector: str | None = None) -> ObjectMetadata:
        return (await self._head(bucket, key)).select(selector)

    async def update_object(
        self,
        bucket: str,
        key: str,
        mutator: MetadataMutator,
        *,
        read_selector: str | None = None,
        result_selector: str | None = None,
    ) -> ObjectMetadata:
        current = await self._head(bucket, key)
        metadata = dict(current.metadata)
        mutator(metadata)
        # S3 metadata is immutable in place; a self-copy replaces it.
        copy_kwargs: dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "CopySource": {"Bucket": bucket, "Key": key},
            "Metadata": {str(k): str(v) for k, v in metadata.items()},
            "MetadataDirective": "REPLACE",
        }
        if current.content_type:
            copy_kwargs["ContentType"] = current.content_type
        await self._call("copy_object", key, **copy_kwargs)
        return (await self._head(bucket, key)).select(result_selector)

    async def upload_object(
        self,
        bucket: str,
        key: str,
        content_type: str,
        source: WritableContent,
        *,
        selector: str | None = None,
    ) -> ObjectMetadata:
        data = self._read_content(source)
        resp = await self._call("put_object", key, Bucket=bucket, Key=key, Body=data, ContentType=content_type)
        obj = ObjectMetadata(
            bucket=bucket,
            name=key,
            size=len(data),
            content_type=content_type,
            etag=self._etag(resp.get("ETag")),
        )
        return obj.select(selector)

    async def download_object(
        self, bucket: str, key: str, *, byte_range: ByteRange | None = None
    ) -> AsyncIterator[bytes]:
        kwargs: dict[str, Any] = {"Bucket": bucket, "Key": key}
        if byte_range is not None:
            kwargs["Range"] = str(byte_range)
        resp = await self._call("get_object", key, **kwargs)
        body = resp["Body"]
        try:
            while True:
                with self._errors(key):
                    chunk = await body.read(self._chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            body.close()

    async def list_bucket(
        self,
        bucket: str,
        *,
        prefix: str = "",
        delimiter: str = "/",
        selector: str | None = None,
    ) -> AsyncIterator[ListItem]:
        kwargs: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix}
        if delimiter:
            kwargs["Delimiter"] = delimiter
        while True:
            resp = await self._call("list_objects_v2", prefix, **kwargs)
            items: list[ListItem] = [Prefix(p["Prefix"]) for p in resp.get("CommonPrefixes", [])]
            items.extend(self._describe_listed(bucket, c).select(selector) for c in resp.get("Contents", []))
            items.sort(key=lambda item: item.name)
            for item in items:
                yield item
            if not resp.get("IsTruncated"):
                break
            kwargs["ContinuationToken"] = resp["NextContinuationToken"]

    async def copy_object(
        self,
        src_bucket: str,
        src_key: str,
        dst_bucket: str,
        dst_key: str,
        *,
        selector: str | None = None,
    ) -> ObjectMetadata:
        await self._call(
            "copy_object",
            src_key,
            Bucket=dst_bucket,
            Key=dst_key,
            CopySource={"Bucket": src_bucket, "Key": src_key},
        )
        return (await self._head(dst_bucket, dst_key)).select(selector)

    async def delete_object(self, bucket: str, key: str) -> None:
        # DeleteObject succeeds for missing keys; report them like the other stores.
        await self._head(bucket, key)
        await self._call("delete_object", key, Bucket=bucket, Key=key)

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
            log.info("S3 session closed.")
        self._fs_instance = None
