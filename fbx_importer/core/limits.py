"""Parser limits guarding against hostile or corrupt input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_DEPTH = 1024
DEFAULT_MAX_ARRAY_BYTES = 1 << 30


@dataclass(frozen=True)
class ParserLimits:
    """Upper bounds enforced while decoding.

    ``max_depth`` caps node nesting, ``max_array_bytes`` caps the size of a
    single inflated array and ``max_file_size`` (when set) rejects streams
    larger than the given number of bytes before any node is read.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_array_bytes: int = DEFAULT_MAX_ARRAY_BYTES
    max_file_size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1.")
        if self.max_array_bytes < 0:
            raise ValueError("max_array_bytes must not be negative.")
        if self.max_file_size is not None and self.max_file_size < 0:
            raise ValueError("max_file_size must not be negative.")
