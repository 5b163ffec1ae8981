"""Type aliases used throughout cloudfs."""

from __future__ import annotations

from collections.abc import Callable
from typing import BinaryIO

WritableContent = BinaryIO | bytes
MetadataMutator = Callable[[dict[str, str]], None]
