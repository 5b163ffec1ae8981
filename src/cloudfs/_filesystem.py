"""CloudFilesystem — a bucket viewed as a tree of folders and files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cloudfs._entry import RemoteFile, RemoteFolder, remote_entry
from cloudfs._path import DELIMITER

if TYPE_CHECKING:
    from types import TracebackType

    from cloudfs._connection import Connection
    from cloudfs._entry import RemoteEntry


class CloudFilesystem:
    """Hierarchical view of one bucket of an object store.

    :param connection: The connection to delegate object-store calls to.
    :param bucket: Name of the bucket holding the tree.
    """

    def __init__(self, connection: Connection, bucket: str) -> None:
        if not bucket or not bucket.strip():
            raise ValueError("bucket must be a non-empty string")
        self._connection = connection
        self._bucket = bucket

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def root(self) -> RemoteFolder:
        return RemoteFolder(self, DELIMITER)

    def entry(self, path: str) -> RemoteEntry:
        """Folder or file addressed by *path*, depending on its trailing delimiter.

        :raises InvalidPath: If *path* is malformed.
        """
        return remote_entry(self, path)

    def folder(self, path: str) -> RemoteFolder:
        """:raises InvalidFolder: If *path* is a file path."""
        return RemoteFolder(self, path)

    def file(self, path: str) -> RemoteFile:
        """:raises InvalidFile: If *path* is a folder path."""
        return RemoteFile(self, path)

    async def close(self) -> None:
        """Close the underlying connection."""
        await self._connection.close()

    async def __aenter__(self) -> CloudFilesystem:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"CloudFilesystem(connection={self._connection.name!r}, bucket={self._bucket!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CloudFilesystem):
            return self._connection is other._connection and self._bucket == other._bucket
        return NotImplemented

    def __hash__(self) -> int:
        return hash((id(self._connection), self._bucket))
