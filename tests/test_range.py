"""Tests for ByteRange."""

from __future__ import annotations

import pytest

from cloudfs._range import ByteRange


class TestConstruction:
    def test_single_byte(self) -> None:
        r = ByteRange(5, 5)
        assert len(r) == 1

    def test_length_is_inclusive(self) -> None:
        assert len(ByteRange(0, 1023)) == 1024

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ByteRange(-1, 3)

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="before start"):
            ByteRange(5, 4)

    @pytest.mark.parametrize(("start", "end"), [(True, 3), (0, 3.5), ("0", 3), (0, None)])
    def test_non_integer_bounds_rejected(self, start: object, end: object) -> None:
        with pytest.raises(TypeError, match="integers"):
            ByteRange(start, end)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        r = ByteRange(0, 1)
        with pytest.raises(AttributeError):
            r.start = 2  # type: ignore[misc]


class TestEncoding:
    def test_str(self) -> None:
        assert str(ByteRange(0, 1023)) == "bytes=0-1023"

    def test_parse(self) -> None:
        assert ByteRange.parse("bytes=0-1023") == ByteRange(0, 1023)

    def test_parse_without_unit(self) -> None:
        assert ByteRange.parse("10-19") == ByteRange(10, 19)

    @pytest.mark.parametrize("text", ["", "bytes=", "bytes=5", "bytes=a-b", "bytes=-5", "items=0-1", "bytes=9-3"])
    def test_parse_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            ByteRange.parse(text)
