"""Path validation and path-to-key mapping."""

from __future__ import annotations

import re
from typing import Final

from cloudfs._errors import InvalidFile, InvalidFolder, InvalidPath

DELIMITER: Final = "/"

# A '/'-separated list of components, each non-empty and free of whitespace.
# A trailing delimiter marks a folder; the root folder is the bare delimiter.
_VALID_PATH: Final = re.compile(r"/(?:[^\s/]+/)*(?:[^\s/]+)?")


def is_folder_path(path: str) -> bool:
    """Return ``True`` if *path* addresses a folder (ends with the delimiter)."""
    return path.endswith(DELIMITER)


def validate_path(path: str, *, expect_folder: bool) -> None:
    """Check *path* against the grammar and the expected entry kind.

    :raises InvalidPath: If the path does not match the grammar.
    :raises InvalidFolder: If a folder is expected and *path* is a file path.
    :raises InvalidFile: If a file is expected and *path* is a folder path.
    """
    if not isinstance(path, str) or _VALID_PATH.fullmatch(path) is None:
        raise InvalidPath("Malformed path", path=str(path))
    if expect_folder and not is_folder_path(path):
        raise InvalidFolder("Not a folder path", path=path)
    if not expect_folder and is_folder_path(path):
        raise InvalidFile("Not a file path", path=path)


def check_folder_path(path: str) -> None:
    validate_path(path, expect_folder=True)


def check_file_path(path: str) -> None:
    validate_path(path, expect_folder=False)


def parent_path(path: str) -> str:
    """Folder path containing *path*.

    Example: ``parent_path("/a/b/")`` and ``parent_path("/a/b")`` both return
    ``"/a/"``. The parent of the root is the root.
    """
    if path == DELIMITER:
        return path
    return path[: path.rstrip(DELIMITER).rindex(DELIMITER) + 1]


def name_of(path: str) -> str:
    """Final non-empty component of *path* (empty for the root)."""
    return path.rstrip(DELIMITER).rsplit(DELIMITER, 1)[-1]


def to_key(path: str) -> str:
    """Object key for *path*: the path without its leading delimiter."""
    return path[len(DELIMITER) :]


def from_key(key: str) -> str:
    """Path for an object key returned by the store."""
    return DELIMITER + key
