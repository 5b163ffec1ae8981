"""Immutable object-store models returned by connections."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from datetime import datetime

ALL_FIELDS = "*"


@dataclasses.dataclass(frozen=True)
class ObjectMetadata:
    """Immutable snapshot of an object's metadata.

    Fields excluded by a selector keep their defaults.

    :param bucket: Bucket holding the object.
    :param name: Object key.
    :param size: Content length in bytes.
    :param content_type: MIME type of the content.
    :param updated: Last modification time.
    :param etag: Entity tag of the current content.
    :param metadata: Custom key/value metadata.
    """

    bucket: str
    name: str
    size: int = 0
    content_type: str | None = None
    updated: datetime | None = None
    etag: str | None = None
    metadata: dict[str, str] = dataclasses.field(default_factory=dict)

    def select(self, selector: str | None) -> ObjectMetadata:
        """Return a copy holding only the fields named by *selector*.

        ``bucket`` and ``name`` are always kept.
        """
        fields = parse_selector(selector)
        if fields is None:
            return self
        defaults = ObjectMetadata(bucket=self.bucket, name=self.name)
        values = {
            f.name: getattr(self if f.name in fields else defaults, f.name)
            for f in dataclasses.fields(self)
        }
        return ObjectMetadata(**values)


@dataclasses.dataclass(frozen=True)
class Prefix:
    """A common prefix produced by a delimited listing.

    :param name: The prefix, ending with the delimiter.
    """

    name: str


ListItem = Union[Prefix, ObjectMetadata]


def parse_selector(selector: str | None) -> frozenset[str] | None:
    """Field names named by *selector*, or ``None`` for all fields."""
    if selector is None or selector.strip() in ("", ALL_FIELDS):
        return None
    return frozenset(part.strip() for part in selector.split(",") if part.strip())
