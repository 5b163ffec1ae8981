"""Tests for the error hierarchy."""

from __future__ import annotations

import pytest

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


class TestBaseError:
    def test_default_attributes(self) -> None:
        e = CloudFsError("boom")
        assert e.path is None
        assert e.backend is None
        assert str(e) == "boom"

    def test_with_attributes(self) -> None:
        e = CloudFsError("boom", path="/a/b.txt", backend="s3")
        assert e.path == "/a/b.txt"
        assert e.backend == "s3"

    def test_str_includes_context(self) -> None:
        e = CloudFsError("boom", path="/a/", backend="memory")
        assert str(e) == "boom | path='/a/' | backend='memory'"

    def test_repr(self) -> None:
        e = FolderNotEmpty("Folder is not empty", path="/a/")
        assert repr(e) == "FolderNotEmpty('Folder is not empty', path='/a/')"


class TestHierarchy:
    @pytest.mark.parametrize("cls", [InvalidPath, InvalidFolder, InvalidFile])
    def test_path_errors(self, cls: type[CloudFsError]) -> None:
        assert issubclass(cls, PathError)
        assert issubclass(cls, CloudFsError)

    @pytest.mark.parametrize("cls", [NoSuchFolderOrFile, FolderNotEmpty, DestinationExists])
    def test_filesystem_errors(self, cls: type[CloudFsError]) -> None:
        assert issubclass(cls, FilesystemError)
        assert not issubclass(cls, RemoteError)

    @pytest.mark.parametrize("cls", [NotFound, PermissionDenied, BackendUnavailable])
    def test_remote_errors(self, cls: type[CloudFsError]) -> None:
        assert issubclass(cls, RemoteError)

    def test_token_error(self) -> None:
        assert issubclass(TokenSerializationError, CloudFsError)
        assert not issubclass(TokenSerializationError, FilesystemError)


class TestStatusCodes:
    def test_not_found_is_404(self) -> None:
        assert NotFound("missing").status_code == 404

    def test_permission_denied_is_403(self) -> None:
        assert PermissionDenied("denied").status_code == 403

    def test_explicit_status(self) -> None:
        e = RemoteError("bad range", status_code=416)
        assert e.status_code == 416
        assert str(e) == "bad range | status=416"

    def test_unknown_status(self) -> None:
        e = BackendUnavailable("down", backend="s3")
        assert e.status_code is None
        assert str(e) == "down | backend='s3'"

    def test_catch_by_base(self) -> None:
        with pytest.raises(CloudFsError):
            raise NotFound("missing", path="a.txt")
