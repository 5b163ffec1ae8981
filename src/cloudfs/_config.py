"""Configuration model — connections and the folders that named filesystems are rooted at."""

from __future__ import annotations

import dataclasses

from cloudfs._errors import PathError
from cloudfs._path import DELIMITER, check_folder_path


@dataclasses.dataclass(frozen=True)
class ConnectionConfig:
    """Describes a connection instance.

    :param type: Connection type identifier (e.g. ``"memory"``, ``"s3"``).
    :param options: Keyword arguments for the connection constructor.
    """

    type: str
    options: dict[str, object] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class FilesystemProfile:
    """A named view of one folder in one bucket.

    Paths resolved through the profile are relative to *folder*, so
    ``/a.txt`` on a profile rooted at ``/reports/`` is the object
    ``reports/a.txt``.

    :param connection: Name of the connection config to use.
    :param bucket: Bucket holding the tree.
    :param folder: Folder path the profile is rooted at.
    """

    connection: str
    bucket: str
    folder: str = DELIMITER

    @classmethod
    def parse(cls, location: str) -> FilesystemProfile:
        """Parse the compact ``<connection>:<bucket>[/<folder>/]`` form.

        Example: ``"mem:data/reports/"`` is bucket ``data`` rooted at
        ``/reports/``. A missing trailing delimiter on the folder is added.

        :raises ValueError: If *location* has no connection or bucket part.
        """
        connection, sep, rest = location.partition(":")
        bucket, _, folder = rest.partition(DELIMITER)
        if not sep or not connection or not bucket:
            raise ValueError(f"Expected '<connection>:<bucket>[/<folder>/]', got {location!r}")
        folder = DELIMITER + folder
        if not folder.endswith(DELIMITER):
            folder += DELIMITER
        return cls(connection=connection, bucket=bucket, folder=folder)


@dataclasses.dataclass(frozen=True)
class RegistryConfig:
    """Top-level configuration container.

    :param connections: Mapping of connection names to their configs.
    :param filesystems: Mapping of filesystem names to their profiles.
    """

    connections: dict[str, ConnectionConfig] = dataclasses.field(default_factory=dict)
    filesystems: dict[str, FilesystemProfile] = dataclasses.field(default_factory=dict)

    def validate(self) -> None:
        """Check every profile before any connection is opened.

        :raises ValueError: If a profile references a non-existent connection,
            has an empty bucket or a malformed folder path.
        """
        for fs_name, profile in self.filesystems.items():
            if ":" in fs_name:
                raise ValueError(f"Filesystem name '{fs_name}' must not contain ':'")
            if profile.connection not in self.connections:
                raise ValueError(
                    f"Filesystem '{fs_name}' references unknown connection '{profile.connection}'. "
                    f"Available connections: {sorted(self.connections.keys())}"
                )
            if not profile.bucket or not profile.bucket.strip():
                raise ValueError(f"Filesystem '{fs_name}' has an empty bucket name")
            try:
                check_folder_path(profile.folder)
            except PathError as exc:
                raise ValueError(f"Filesystem '{fs_name}' has an invalid folder {profile.folder!r}: {exc}") from exc

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> RegistryConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        A filesystem entry is either a dict with ``connection``, ``bucket``
        and optional ``folder`` keys or a compact location string (see
        ``FilesystemProfile.parse``).

        :param data: Dict with ``connections`` and ``filesystems`` keys.
        """
        raw_connections = data.get("connections", {})
        raw_filesystems = data.get("filesystems", {})
        if not isinstance(raw_connections, dict) or not isinstance(raw_filesystems, dict):
            msg = "Expected 'connections' and 'filesystems' to be dicts"
            raise TypeError(msg)

        connections: dict[str, ConnectionConfig] = {}
        for name, cfg in raw_connections.items():
            if isinstance(cfg, str):
                connections[str(name)] = ConnectionConfig(type=cfg)
                continue
            if not isinstance(cfg, dict):
                msg = f"Connection config for '{name}' must be a dict or a type name"
                raise TypeError(msg)
            connections[str(name)] = ConnectionConfig(
                type=str(cfg["type"]),
                options=dict(cfg.get("options", {})),
            )

        filesystems: dict[str, FilesystemProfile] = {}
        for name, prof in raw_filesystems.items():
            if isinstance(prof, str):
                filesystems[str(name)] = FilesystemProfile.parse(prof)
                continue
            if not isinstance(prof, dict):
                msg = f"Filesystem profile for '{name}' must be a dict or a location string"
                raise TypeError(msg)
            filesystems[str(name)] = FilesystemProfile(
                connection=str(prof["connection"]),
                bucket=str(prof["bucket"]),
                folder=str(prof.get("folder", DELIMITER)),
            )

        return cls(connections=connections, filesystems=filesystems)
