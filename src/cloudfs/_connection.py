"""Connection abstract base class — the object-store contract."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from types import TracebackType

    from cloudfs._models import ListItem, ObjectMetadata
    from cloudfs._range import ByteRange
    from cloudfs._types import MetadataMutator, WritableContent


class Connection(abc.ABC):
    """Asynchronous facade over a flat, key-addressed object store.

    Keys are object keys, never filesystem paths: they carry no leading
    delimiter. Store-native exceptions must never leak; they are mapped to
    ``cloudfs`` remote errors, with a missing object or bucket always
    reported as ``NotFound``.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Identifier for this connection type (e.g. ``'memory'``, ``'s3'``)."""

    @abc.abstractmethod
    async def get_object(self, bucket: str, key: str, *, selector: str | None = None) -> ObjectMetadata:
        """Fetch the metadata of an object.

        :param selector: Fields to return (``None`` or ``'*'`` for all).
        :raises NotFound: If the object does not exist.
        """

    @abc.abstractmethod
    async def update_object(
        self,
        bucket: str,
        key: str,
        mutator: MetadataMutator,
        *,
        read_selector: str | None = None,
        result_selector: str | None = None,
    ) -> ObjectMetadata:
        """Read-modify-write the custom metadata of an object.

        *mutator* receives the current custom metadata as a mutable dict.

        :raises NotFound: If the object does not exist.
        """

    @abc.abstractmethod
    async def upload_object(
        self,
        bucket: str,
        key: str,
        content_type: str,
        source: WritableContent,
        *,
        selector: str | None = None,
    ) -> ObjectMetadata:
        """Upload the full content of an object, replacing any existing one.

        Zero-length content is allowed.
        """

    @abc.abstractmethod
    def download_object(self, bucket: str, key: str, *, byte_range: ByteRange | None = None) -> AsyncIterator[bytes]:
        """Stream the content of an object, optionally limited to *byte_range*.

        :raises NotFound: If the object does not exist.
        """

    @abc.abstractmethod
    def list_bucket(
        self,
        bucket: str,
        *,
        prefix: str = "",
        delimiter: str = "/",
        selector: str | None = None,
    ) -> AsyncIterator[ListItem]:
        """List objects under *prefix*, grouping keys at *delimiter*.

        Yields a ``Prefix`` for every common prefix and an ``ObjectMetadata``
        for every object directly under *prefix*.
        """

    @abc.abstractmethod
    async def copy_object(
        self,
        src_bucket: str,
        src_key: str,
        dst_bucket: str,
        dst_key: str,
        *,
        selector: str | None = None,
    ) -> ObjectMetadata:
        """Copy an object, possibly across buckets.

        :raises NotFound: If the source object does not exist.
        """

    @abc.abstractmethod
    async def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object.

        :raises NotFound: If the object does not exist.
        """

    async def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

    async def __aenter__(self) -> Connection:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
