"""FBX binary header parsing."""

from __future__ import annotations

from ..models import Header
from .exceptions import FBXValidationError
from .reader import BinaryReader

MAGIC = b"Kaydara FBX Binary  \x00"
RESERVED_BYTE_COUNT = 2


def parse_header(reader: BinaryReader) -> Header:
    """Validate the magic prefix and return the declared format version.

    Must be called once with the reader positioned at offset 0.
    """

    offset = reader.tell()
    magic = reader.read_exact(len(MAGIC))
    if magic != MAGIC:
        raise FBXValidationError("File header magic string is incorrect", offset=offset)

    reader.skip(RESERVED_BYTE_COUNT)
    return Header(version=reader.read_u32())
