"""Little-endian cursor over a seekable binary stream."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .exceptions import FBXFormatError, FBXIOError

_U8 = struct.Struct("<B")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")


class BinaryReader:
    """Reads exact byte counts from ``stream`` and tracks the file length.

    The stream must be seekable; its length is measured once on construction
    and the cursor is restored to where it was.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        try:
            start = stream.tell()
            self._length = stream.seek(0, io.SEEK_END)
            stream.seek(start)
        except OSError as exc:
            raise FBXIOError(f"Stream is not seekable: {exc}") from exc

    @property
    def length(self) -> int:
        return self._length

    def tell(self) -> int:
        try:
            return self._stream.tell()
        except OSError as exc:
            raise FBXIOError(f"Unable to query stream position: {exc}") from exc

    def skip(self, count: int) -> None:
        self.read_exact(count)

    def read_exact(self, count: int) -> bytes:
        offset = self.tell()
        try:
            data = self._stream.read(count)
        except OSError as exc:
            raise FBXIOError(f"Read of {count} bytes failed: {exc}", offset=offset) from exc
        if len(data) != count:
            raise FBXIOError(
                f"Unexpected end of stream: needed {count} bytes, got {len(data)}",
                offset=offset,
            )
        return data

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self.read_exact(fmt.size))[0]

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_i64(self) -> int:
        return self._unpack(_I64)

    def read_f32(self) -> float:
        return self._unpack(_F32)

    def read_f64(self) -> float:
        return self._unpack(_F64)

    def read_name(self) -> str:
        """Read a node name: one length byte followed by UTF-8 text."""

        length = self.read_u8()
        offset = self.tell()
        raw = self.read_exact(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FBXFormatError(f"Node name is not valid UTF-8: {raw!r}", offset=offset) from exc
