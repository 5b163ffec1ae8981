"""ByteRange — inclusive byte interval."""

from __future__ import annotations

import dataclasses
import re

_RANGE_PATTERN = re.compile(r"(?:bytes=)?(\d+)-(\d+)")


@dataclasses.dataclass(frozen=True)
class ByteRange:
    """Inclusive ``[start, end]`` interval over an object's content.

    :param start: Index of the first byte.
    :param end: Index of the last byte (inclusive).
    :raises TypeError: If a bound is not an ``int``.
    :raises ValueError: If ``start < 0`` or ``end < start``.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        for bound in (self.start, self.end):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise TypeError(f"Range bounds must be integers, got {bound!r}")
        if self.start < 0:
            raise ValueError(f"Range start must be non-negative, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} is before start {self.start}")

    @classmethod
    def parse(cls, text: str) -> ByteRange:
        """Parse ``bytes=<start>-<end>`` (the ``bytes=`` prefix is optional).

        :raises ValueError: If *text* is not a valid range.
        """
        match = _RANGE_PATTERN.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"Invalid byte range: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"bytes={self.start}-{self.end}"
