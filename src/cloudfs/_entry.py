"""Remote entries — folders and files addressed by path."""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from cloudfs._cache import EntryCache
from cloudfs._errors import DestinationExists, FolderNotEmpty, NoSuchFolderOrFile, NotFound
from cloudfs._models import Prefix
from cloudfs._path import (
    DELIMITER,
    check_file_path,
    check_folder_path,
    from_key,
    is_folder_path,
    name_of,
    parent_path,
    to_key,
)
from cloudfs._range import ByteRange

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from cloudfs._filesystem import CloudFilesystem
    from cloudfs._models import ObjectMetadata
    from cloudfs._types import WritableContent

log = logging.getLogger(__name__)

FOLDER_CONTENT_TYPE = "text/plain"


def remote_entry(filesystem: CloudFilesystem, path: str) -> RemoteEntry:
    """Build the entry addressed by *path*.

    Returns a ``RemoteFolder`` for folder paths (trailing delimiter) and a
    ``RemoteFile`` otherwise.

    :raises PathError: If *path* is malformed.
    """
    if is_folder_path(path):
        return RemoteFolder(filesystem, path)
    return RemoteFile(filesystem, path)


class RemoteEntry(abc.ABC):
    """A file or folder stored in a bucket of an object store.

    Two entries are equal when they address the same path on the same
    filesystem, regardless of what their metadata caches hold.

    :param filesystem: The filesystem the entry belongs to.
    :param path: Absolute, validated entry path.
    """

    def __init__(self, filesystem: CloudFilesystem, path: str) -> None:
        self._validate(path)
        self._filesystem = filesystem
        self._path = path
        self._cache = EntryCache()

    @staticmethod
    @abc.abstractmethod
    def _validate(path: str) -> None: ...

    @property
    def filesystem(self) -> CloudFilesystem:
        return self._filesystem

    @property
    def path(self) -> str:
        return self._path

    @property
    def key(self) -> str:
        """Object key backing this entry."""
        return to_key(self._path)

    @property
    def name(self) -> str:
        """Final component of the path (empty for the root folder)."""
        return name_of(self._path)

    @property
    def cache(self) -> EntryCache:
        return self._cache

    @property
    def parent(self) -> RemoteFolder:
        """The folder containing this entry. The root is its own parent."""
        return RemoteFolder(self._filesystem, parent_path(self._path))

    @property
    def is_root(self) -> bool:
        return self._path == DELIMITER

    async def exists(self) -> bool:
        """Check whether the entry exists in the store.

        The root folder always exists. Only a not-found response is turned
        into ``False``; every other failure propagates.
        """
        if self.is_root:
            return True
        fs = self._filesystem
        try:
            await fs.connection.get_object(fs.bucket, self.key, selector="name")
        except NotFound:
            return False
        return True

    async def metadata(self) -> ObjectMetadata | None:
        """Full object metadata for the entry (``None`` for the root folder).

        The fetched custom metadata replaces the property cache.
        """
        if self.is_root:
            return None
        fs = self._filesystem
        obj = await fs.connection.get_object(fs.bucket, self.key)
        self._cache.replace(obj.metadata)
        return obj

    async def get_property(self, key: str) -> str | None:
        """Return a custom metadata value, fetching metadata on a cache miss.

        A key that is still absent after the fetch yields ``None``.
        """
        if key in self._cache:
            return self._cache.get(key)
        fs = self._filesystem
        obj = await fs.connection.get_object(fs.bucket, self.key, selector="metadata")
        self._cache.replace(obj.metadata)
        return self._cache.get(key)

    async def set_property(self, key: str, value: str) -> None:
        """Set a custom metadata value on the stored object.

        The update is a remote read-modify-write; the cache is replaced with
        the metadata confirmed by the store.
        """

        def mutate(metadata: dict[str, str]) -> None:
            metadata[key] = value

        fs = self._filesystem
        obj = await fs.connection.update_object(
            fs.bucket,
            self.key,
            mutate,
            read_selector="metadata",
            result_selector="metadata",
        )
        self._cache.replace(obj.metadata)

    @abc.abstractmethod
    async def delete(self) -> RemoteEntry:
        """Delete the entry from the store."""

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RemoteEntry):
            return self._filesystem == other._filesystem and self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._filesystem, self._path))


class RemoteFolder(RemoteEntry):
    """A folder, stored as a zero-length marker object at its key."""

    @staticmethod
    def _validate(path: str) -> None:
        check_folder_path(path)

    async def list(self) -> AsyncIterator[RemoteEntry]:
        """Yield the immediate children of the folder.

        Common prefixes become folders and objects become files. The folder's
        own marker object is skipped. The iterator is single-pass.
        """
        fs = self._filesystem
        async for item in fs.connection.list_bucket(fs.bucket, prefix=self.key, delimiter=DELIMITER, selector="name"):
            if isinstance(item, Prefix):
                child: RemoteEntry = RemoteFolder(fs, from_key(item.name))
            else:
                child = remote_entry(fs, from_key(item.name))
            if child != self:
                yield child

    async def is_empty(self) -> bool:
        async for _ in self.list():
            return False
        return True

    async def create(self, *, recursive: bool = False) -> RemoteFolder:
        """Create the folder if it does not exist.

        :param recursive: Also create missing ancestors.
        :raises NoSuchFolderOrFile: If the parent is missing and ``recursive``
            is ``False``.
        """
        if await self.exists():
            return self
        parent = self.parent
        if not await parent.exists():
            if not recursive:
                raise NoSuchFolderOrFile("Parent folder does not exist", path=parent.path)
            await parent.create(recursive=True)
        fs = self._filesystem
        log.debug("Creating folder marker %s in %s", self.key, fs.bucket)
        obj = await fs.connection.upload_object(fs.bucket, self.key, FOLDER_CONTENT_TYPE, b"", selector="name")
        return RemoteFolder(fs, from_key(obj.name))

    async def delete(self, *, recursive: bool = False) -> RemoteFolder:
        """Delete the folder.

        Children are deleted one at a time in listing order; the first
        failure stops the operation and leaves the folder marker in place.
        A subfolder that exists only through the keys below it (no marker
        object) has its contents removed and then raises ``NotFound`` for its
        missing marker, which stops the delete of this folder too.

        :param recursive: Also delete the folder's contents.
        :raises FolderNotEmpty: If the folder has children and ``recursive``
            is ``False``.
        :raises NotFound: If the folder, or a subfolder, has no marker object.
        """
        if not await self.is_empty():
            if not recursive:
                raise FolderNotEmpty("Folder is not empty", path=self._path)
            children = [child async for child in self.list()]
            for child in children:
                log.debug("Deleting %s", child.path)
                if isinstance(child, RemoteFolder):
                    await child.delete(recursive=True)
                else:
                    await child.delete()
        if not self.is_root:
            fs = self._filesystem
            await fs.connection.delete_object(fs.bucket, self.key)
            self._cache.invalidate()
        return self

    def __repr__(self) -> str:
        return f"RemoteFolder({self._path!r})"


class RemoteFile(RemoteEntry):
    """A file, stored as an object at its key."""

    @staticmethod
    def _validate(path: str) -> None:
        check_file_path(path)

    async def write(self, source: WritableContent, content_type: str) -> RemoteFile:
        """Upload *source* as the file content, overwriting existing content.

        The upload replaces the object's custom metadata, so this entry's
        property cache is dropped.

        :param source: Bytes or a binary file object.
        :param content_type: MIME type of the content.
        """
        fs = self._filesystem
        obj = await fs.connection.upload_object(fs.bucket, self.key, content_type, source, selector="name")
        self._cache.invalidate()
        return RemoteFile(fs, from_key(obj.name))

    def read(self, start_or_end: int | None = None, end: int | None = None) -> AsyncIterator[bytes]:
        """Stream the file content.

        ``read()`` yields everything, ``read(n)`` the first ``n`` bytes and
        ``read(s, e)`` the bytes from ``s`` up to but excluding ``e``.

        :raises ValueError: If ``start_or_end`` is negative or ``end`` does not
            exceed ``start_or_end``.
        """
        byte_range = None
        if start_or_end is not None:
            if start_or_end < 0:
                raise ValueError(f"Read offset must be non-negative, got {start_or_end}")
            if end is not None:
                if end <= start_or_end:
                    raise ValueError(f"Read end {end} must exceed start {start_or_end}")
                byte_range = ByteRange(start_or_end, end - 1)
            else:
                byte_range = ByteRange(0, start_or_end - 1)
        fs = self._filesystem
        return fs.connection.download_object(fs.bucket, self.key, byte_range=byte_range)

    async def read_bytes(self, start_or_end: int | None = None, end: int | None = None) -> bytes:
        """Read the file content (or the requested slice of it) into memory."""
        return b"".join([chunk async for chunk in self.read(start_or_end, end)])

    async def copy_to(self, destination: RemoteFile) -> RemoteFile:
        """Copy the file to *destination*, which may be on another filesystem.

        :raises DestinationExists: If *destination* already exists.
        """
        if await destination.exists():
            raise DestinationExists("Destination already exists", path=destination.path)
        src, dst = self._filesystem, destination.filesystem
        log.debug("Copying %s/%s to %s/%s", src.bucket, self.key, dst.bucket, destination.key)
        obj = await src.connection.copy_object(src.bucket, self.key, dst.bucket, destination.key, selector="name")
        return RemoteFile(dst, from_key(obj.name))

    async def move_to(self, destination: RemoteFile) -> RemoteFile:
        """Copy the file to *destination*, then delete the source.

        Not atomic: if the delete fails, both copies remain.

        :raises DestinationExists: If *destination* already exists.
        """
        moved = await self.copy_to(destination)
        await self.delete()
        return moved

    async def delete(self) -> RemoteFile:
        fs = self._filesystem
        await fs.connection.delete_object(fs.bucket, self.key)
        self._cache.invalidate()
        return self

    async def length(self) -> int:
        """Size of the stored content in bytes."""
        fs = self._filesystem
        obj = await fs.connection.get_object(fs.bucket, self.key, selector="size")
        return obj.size

    def __repr__(self) -> str:
        return f"RemoteFile({self._path!r})"
