"""Hierarchical filesystem over flat object stores."""

from cloudfs._cache import EntryCache
from cloudfs._config import ConnectionConfig, FilesystemProfile, RegistryConfig
from cloudfs._connection import Connection
from cloudfs._entry import RemoteEntry, RemoteFile, RemoteFolder, remote_entry
from cloudfs._errors import (
    BackendUnavailable,
    CloudFsError,
    DestinationExists,
    FilesystemError,
    FolderNotEmpty,
    InvalidFile,
    InvalidFolder,
    InvalidPath,
    NoSuchFolderOrFile,
    NotFound,
    PathError,
    PermissionDenied,
    RemoteError,
    TokenSerializationError,
)
from cloudfs._filesystem import CloudFilesystem
from cloudfs._models import ObjectMetadata, Prefix
from cloudfs._path import is_folder_path, validate_path
from cloudfs._range import ByteRange
from cloudfs._registry import Registry, register_connection
from cloudfs._token import ResumeToken

__version__ = "0.1.0"

__all__ = [
    # Core
    "CloudFilesystem",
    "Registry",
    "Connection",
    "register_connection",
    # Entries
    "RemoteEntry",
    "RemoteFolder",
    "RemoteFile",
    "remote_entry",
    "EntryCache",
    # Paths
    "is_folder_path",
    "validate_path",
    # Models
    "ObjectMetadata",
    "Prefix",
    "ByteRange",
    "ResumeToken",
    # Config
    "ConnectionConfig",
    "FilesystemProfile",
    "RegistryConfig",
    # Errors
    "CloudFsError",
    "PathError",
    "InvalidPath",
    "InvalidFolder",
    "InvalidFile",
    "FilesystemError",
    "NoSuchFolderOrFile",
    "FolderNotEmpty",
    "DestinationExists",
    "TokenSerializationError",
    "RemoteError",
    "NotFound",
    "PermissionDenied",
    "BackendUnavailable",
    # Version
    "__version__",
]
