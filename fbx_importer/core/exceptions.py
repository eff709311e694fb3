"""Project-specific exception types."""

from __future__ import annotations

from typing import Optional


class FBXError(RuntimeError):
    """Base class for every failure raised while importing an FBX file."""

    def __init__(self, message: str, *, offset: Optional[int] = None) -> None:
        if offset is not None:
            message = f"{message} (at byte offset {offset})"
        super().__init__(message)
        self.offset = offset


class FBXFormatError(FBXError):
    """Raised when bytes cannot be decoded (bad UTF-8, unknown tag, corrupt zlib)."""


class FBXValidationError(FBXError):
    """Raised when a structural invariant of the binary layout is violated."""


class FBXIOError(FBXError):
    """Raised when the underlying stream ends early or fails."""


class FBXImportError(FBXError):
    """Raised when the node tree does not describe a usable scene."""


class NoSuchNodeError(FBXImportError):
    """Raised when a required node is missing from a node collection."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required node '{name}' not found")
        self.name = name
