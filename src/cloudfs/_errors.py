"""Error hierarchy for cloudfs."""

from __future__ import annotations

from typing import Optional


class CloudFsError(Exception):
    """Base class for all cloudfs errors.

    :param message: Human-readable error description.
    :param path: The path or object key involved in the error, if any.
    :param backend: The connection name involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.backend is not None:
            parts.append(f"backend={self.backend!r}")
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.backend is not None:
            args.append(f"backend={self.backend!r}")
        return f"{cls}({', '.join(args)})"


# region: path errors


class PathError(CloudFsError):
    """Raised when a path string cannot address an entry."""


class InvalidPath(PathError):
    """Raised when a path does not match the path grammar."""


class InvalidFolder(PathError):
    """Raised when a folder was expected but the path is a file path."""


class InvalidFile(PathError):
    """Raised when a file was expected but the path is a folder path."""


# endregion

# region: filesystem errors


class FilesystemError(CloudFsError):
    """Raised when an operation would break a filesystem invariant."""


class NoSuchFolderOrFile(FilesystemError):
    """Raised when a required folder or file does not exist."""


class FolderNotEmpty(FilesystemError):
    """Raised on a non-recursive delete of a folder that has children."""


class DestinationExists(FilesystemError):
    """Raised when the target of a copy or move already exists."""


# endregion


class TokenSerializationError(CloudFsError):
    """Raised for malformed or semantically invalid serialized resume tokens."""


# region: remote errors


class RemoteError(CloudFsError):
    """Raised by a connection when the object store reports a failure.

    :param status_code: HTTP-equivalent status code, if known.
    """

    default_status: Optional[int] = None

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.status_code = status_code if status_code is not None else self.default_status
        super().__init__(message, path=path, backend=backend)

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} | status={self.status_code}"
        return base


class NotFound(RemoteError):
    """Raised when an object or bucket does not exist."""

    default_status = 404


class PermissionDenied(RemoteError):
    """Raised when access is denied by the object store."""

    default_status = 403


class BackendUnavailable(RemoteError):
    """Raised when the object store cannot be reached."""


# endregion
