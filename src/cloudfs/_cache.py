"""EntryCache — per-entry metadata cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class EntryCache:
    """Maps metadata keys to values for a single entry.

    The cache is only ever replaced as a whole: after a metadata fetch and
    after a property update, the server-confirmed map becomes the new cache.
    Entries never share a cache.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def replace(self, values: Mapping[str, str] | None) -> None:
        """Discard the current contents and cache a copy of *values*."""
        self._values = dict(values or {})

    def invalidate(self) -> None:
        self._values = {}

    def __repr__(self) -> str:
        return f"EntryCache({self._values!r})"
