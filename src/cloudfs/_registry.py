"""Registry — named filesystems and ``<name>:<path>`` locations over shared connections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cloudfs._config import RegistryConfig
from cloudfs._entry import RemoteFile, RemoteFolder, remote_entry
from cloudfs._errors import DestinationExists
from cloudfs._filesystem import CloudFilesystem
from cloudfs._path import DELIMITER, validate_path

if TYPE_CHECKING:
    from types import TracebackType

    from cloudfs._config import FilesystemProfile
    from cloudfs._connection import Connection
    from cloudfs._entry import RemoteEntry

log = logging.getLogger(__name__)

# Maps connection type strings to connection classes.
_CONNECTION_FACTORIES: dict[str, type[Connection]] = {}


def register_connection(type_name: str, cls: type[Connection]) -> None:
    """Register a connection class for a given type string.

    :param type_name: The type identifier (e.g. ``"memory"``).
    :param cls: The connection class to instantiate.
    """
    _CONNECTION_FACTORIES[type_name] = cls


def _register_builtin_connections() -> None:
    from cloudfs.connections._memory import MemoryConnection
    from cloudfs.connections._s3 import S3Connection

    _CONNECTION_FACTORIES.setdefault("memory", MemoryConnection)
    _CONNECTION_FACTORIES.setdefault("s3", S3Connection)


class Registry:
    """Opens connections on demand and resolves locations to entries.

    A location is ``<filesystem name>:<path>``, where the path is relative
    to the folder the profile is rooted at::

        registry.file("reports:/2024/q1.csv")
        await registry.copy("reports:/2024/q1.csv", "archive:/q1.csv")

    Profiles naming the same connection share one connection instance, so a
    copy between their buckets is a single server-side copy.

    :param config: Optional configuration. Validates immediately.
    :raises ValueError: If config is invalid.
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        _register_builtin_connections()
        self._config = config or RegistryConfig()
        self._config.validate()
        self._connections: dict[str, Connection] = {}

    def __repr__(self) -> str:
        return f"Registry(filesystems={sorted(self._config.filesystems)!r})"

    def _profile(self, name: str) -> FilesystemProfile:
        try:
            return self._config.filesystems[name]
        except KeyError:
            available = sorted(self._config.filesystems)
            raise KeyError(f"Unknown filesystem '{name}'. Available filesystems: {available}") from None

    def get_filesystem(self, name: str) -> CloudFilesystem:
        """The whole bucket behind a profile, ignoring its folder.

        :raises KeyError: If no filesystem profile with this name exists.
        """
        profile = self._profile(name)
        return CloudFilesystem(self._get_connection(profile.connection), profile.bucket)

    def get_folder(self, name: str) -> RemoteFolder:
        """The folder a profile is rooted at.

        :raises KeyError: If no filesystem profile with this name exists.
        """
        profile = self._profile(name)
        return RemoteFolder(self.get_filesystem(name), profile.folder)

    def entry(self, location: str) -> RemoteEntry:
        """Resolve ``<name>:<path>`` to a folder or file.

        A bare ``<name>`` addresses the profile's folder.

        :raises KeyError: If the filesystem name is unknown.
        :raises InvalidPath: If the path part is malformed.
        """
        filesystem, path = self._resolve(location)
        return remote_entry(filesystem, path)

    def folder(self, location: str) -> RemoteFolder:
        """:raises InvalidFolder: If *location* names a file path."""
        return RemoteFolder(*self._resolve(location))

    def file(self, location: str) -> RemoteFile:
        """:raises InvalidFile: If *location* names a folder path."""
        return RemoteFile(*self._resolve(location))

    def _resolve(self, location: str) -> tuple[CloudFilesystem, str]:
        name, _, path = location.partition(":")
        folder = self.get_folder(name)
        if not path:
            return folder.filesystem, folder.path
        validate_path(path, expect_folder=path.endswith(DELIMITER))
        return folder.filesystem, folder.path + path[len(DELIMITER) :]

    async def copy(self, source: str, destination: str) -> RemoteFile:
        """Copy a file between two locations, possibly on different profiles.

        :raises DestinationExists: If the destination already exists.
        """
        src, dst = self.file(source), self.file(destination)
        if src.filesystem.connection is not dst.filesystem.connection:
            # Server-side copy cannot span connections; stream through this process.
            log.debug("Streaming %s to %s across connections", source, destination)
            return await self._transfer(src, dst)
        return await src.copy_to(dst)

    async def move(self, source: str, destination: str) -> RemoteFile:
        """Copy a file between two locations, then delete the source.

        Not atomic: if the delete fails, both copies remain.
        """
        moved = await self.copy(source, destination)
        await self.file(source).delete()
        return moved

    @staticmethod
    async def _transfer(src: RemoteFile, dst: RemoteFile) -> RemoteFile:
        """Download *src* and upload it to *dst*. Custom properties are not carried over."""
        if await dst.exists():
            raise DestinationExists("Destination already exists", path=dst.path)
        obj = await src.metadata()
        content = await src.read_bytes()
        content_type = (obj.content_type if obj else None) or "application/octet-stream"
        return await dst.write(content, content_type)

    def _get_connection(self, name: str) -> Connection:
        """Lazily instantiate and cache a connection."""
        if name not in self._connections:
            cfg = self._config.connections[name]
            if cfg.type not in _CONNECTION_FACTORIES:
                raise ValueError(
                    f"Unknown connection type '{cfg.type}'. Registered types: {sorted(_CONNECTION_FACTORIES)}"
                )
            factory = _CONNECTION_FACTORIES[cfg.type]
            try:
                self._connections[name] = factory(**cfg.options)
            except TypeError as exc:
                raise ValueError(
                    f"Invalid options for connection '{name}' (type={cfg.type!r}): {exc}. "
                    f"Provided options: {sorted(cfg.options)}"
                ) from exc
            log.info("Opened connection '%s' (type=%s)", name, cfg.type)
        return self._connections[name]

    async def close(self) -> None:
        """Close all instantiated connections."""
        for connection in self._connections.values():
            await connection.close()
        self._connections.clear()

    async def __aenter__(self) -> Registry:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
