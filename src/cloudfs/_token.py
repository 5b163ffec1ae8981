"""ResumeToken — serializable checkpoint of a resumable upload."""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING, Any

from cloudfs._errors import TokenSerializationError
from cloudfs._models import ALL_FIELDS
from cloudfs._range import ByteRange

if TYPE_CHECKING:
    import asyncio

    from cloudfs._models import ObjectMetadata

TOKEN_TYPE = 0
_MIN_TOKEN_TYPE = 0
_MAX_TOKEN_TYPE = 2


@dataclasses.dataclass(frozen=True)
class ResumeToken:
    """Everything needed to resume an interrupted upload.

    A token is a value: advancing progress derives a new token with
    ``with_progress``. The ``done`` future is never serialized, so a
    deserialized token never carries one.

    :param upload_uri: Endpoint of the upload session.
    :param selector: Fields to include in the final upload response.
    :param range: Bytes already acknowledged by the server (inclusive), or
        ``None`` if nothing has been uploaded yet.
    :param done: Future resolved when the upload completes or fails.
    """

    upload_uri: str
    selector: str = ALL_FIELDS
    range: ByteRange | None = None
    done: asyncio.Future[ObjectMetadata] | None = dataclasses.field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.upload_uri, str) or not self.upload_uri:
            raise ValueError("upload_uri must be a non-empty string")
        if not isinstance(self.selector, str) or not self.selector:
            raise ValueError(f"selector must be a non-empty string, got {self.selector!r}")

    @property
    def uploaded_bytes(self) -> int:
        """Number of bytes acknowledged by the server."""
        return 0 if self.range is None else self.range.end + 1

    def with_progress(
        self,
        range: ByteRange | None = None,  # noqa: A002
        done: asyncio.Future[ObjectMetadata] | None = None,
    ) -> ResumeToken:
        """Derive a token for the same upload session with new progress."""
        return dataclasses.replace(self, range=range, done=done)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict. ``range`` is omitted when absent."""
        record: dict[str, Any] = {
            "type": TOKEN_TYPE,
            "uploadUri": self.upload_uri,
            "selector": self.selector,
        }
        if self.range is not None:
            record["range"] = str(self.range)
        return record

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> ResumeToken:
        """Deserialize a token produced by ``to_dict``.

        :raises TokenSerializationError: If ``type`` is missing or out of
            range, ``uploadUri`` is missing, a ``done`` field is present,
            ``selector`` is not a non-empty string or ``range`` cannot be
            parsed.
        """
        if not isinstance(record, dict):
            raise TokenSerializationError(f"Expected a dict, got {type(record).__name__}")
        token_type = record.get("type")
        if token_type is None:
            raise TokenSerializationError("No 'type'")
        if isinstance(token_type, bool) or not isinstance(token_type, int):
            raise TokenSerializationError(f"Invalid value for type field: {token_type!r}")
        if not _MIN_TOKEN_TYPE <= token_type <= _MAX_TOKEN_TYPE:
            raise TokenSerializationError(f"Invalid value for type field: {token_type!r}")
        upload_uri = record.get("uploadUri")
        if not upload_uri or not isinstance(upload_uri, str):
            raise TokenSerializationError("No 'uploadUri'")
        if "done" in record:
            raise TokenSerializationError("Invalid resume token. 'done' attribute found.")
        selector = record.get("selector")
        if selector is None:
            selector = ALL_FIELDS
        elif not isinstance(selector, str) or not selector:
            raise TokenSerializationError(f"Invalid 'selector': {selector!r}")
        raw_range = record.get("range")
        byte_range = None
        if raw_range is not None:
            try:
                byte_range = ByteRange.parse(str(raw_range))
            except ValueError as exc:
                raise TokenSerializationError(f"Invalid 'range': {raw_range!r}") from exc
        return cls(
            upload_uri=upload_uri,
            selector=selector,
            range=byte_range,
        )

    @classmethod
    def from_json(cls, text: str) -> ResumeToken:
        """Deserialize a token produced by ``to_json``.

        :raises TokenSerializationError: If *text* is not a valid token.
        """
        try:
            record = json.loads(text)
        except ValueError as exc:
            raise TokenSerializationError("Resume token is not valid JSON") from exc
        return cls.from_dict(record)
