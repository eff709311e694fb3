"""Decoding of typed node properties.

Every property starts with a one-byte ASCII tag selecting its encoding:

* ``Y I L F D`` fixed-width little-endian scalars, ``C`` a one-byte bool;
* ``f d l i b`` typed arrays, prefixed by ``length``, ``encoding`` and
  ``compressed_length`` (all u32). Encoding 0 stores ``length`` raw elements,
  any other value stores ``compressed_length`` bytes of zlib data whose
  inflated size determines the element count;
* ``S`` a length-prefixed UTF-8 string, ``R`` a length-prefixed raw blob.
"""

from __future__ import annotations

import logging
import struct
import zlib
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..models import Property, PropertyType
from .exceptions import FBXFormatError, FBXValidationError
from .limits import ParserLimits
from .reader import BinaryReader

logger = logging.getLogger(__name__)

# (struct code, element size) for the typed array tags.
_ARRAY_LAYOUTS: Dict[PropertyType, Tuple[str, int]] = {
    PropertyType.FLOAT32_ARRAY: ("f", 4),
    PropertyType.FLOAT64_ARRAY: ("d", 8),
    PropertyType.INT64_ARRAY: ("q", 8),
    PropertyType.INT32_ARRAY: ("i", 4),
}

# Compressed bool arrays are counted in 4-byte units, one flag byte per unit
# read from the start of the inflated data.
_BOOL_COMPRESSED_ELEMENT_SIZE = 4


@dataclass(frozen=True)
class ArrayMetadata:
    length: int
    encoding: int
    compressed_length: int

    @property
    def is_compressed(self) -> bool:
        return self.encoding != 0


def _read_array_metadata(reader: BinaryReader) -> ArrayMetadata:
    return ArrayMetadata(
        length=reader.read_u32(),
        encoding=reader.read_u32(),
        compressed_length=reader.read_u32(),
    )


def _inflate(reader: BinaryReader, metadata: ArrayMetadata, limits: ParserLimits) -> bytes:
    offset = reader.tell()
    deflated = reader.read_exact(metadata.compressed_length)
    decompressor = zlib.decompressobj()
    try:
        inflated = decompressor.decompress(deflated, limits.max_array_bytes + 1)
    except zlib.error as exc:
        raise FBXFormatError(f"Corrupt zlib array data: {exc}", offset=offset) from exc
    if len(inflated) > limits.max_array_bytes:
        raise FBXValidationError(
            f"Inflated array exceeds the limit of {limits.max_array_bytes} bytes",
            offset=offset,
        )
    if not decompressor.eof:
        raise FBXFormatError("Truncated zlib array data", offset=offset)
    if decompressor.unused_data:
        raise FBXFormatError(
            f"{len(decompressor.unused_data)} bytes follow the end of the zlib array data",
            offset=offset,
        )
    return inflated


def _read_raw(reader: BinaryReader, byte_count: int, limits: ParserLimits) -> bytes:
    if byte_count > limits.max_array_bytes:
        raise FBXValidationError(
            f"Array of {byte_count} bytes exceeds the limit of {limits.max_array_bytes} bytes",
            offset=reader.tell(),
        )
    return reader.read_exact(byte_count)


def _parse_numeric_array(
    reader: BinaryReader, property_type: PropertyType, limits: ParserLimits
) -> Property:
    code, element_size = _ARRAY_LAYOUTS[property_type]
    metadata = _read_array_metadata(reader)
    if metadata.is_compressed:
        data = _inflate(reader, metadata, limits)
        count = len(data) // element_size
        data = data[: count * element_size]
    else:
        count = metadata.length
        data = _read_raw(reader, count * element_size, limits)
    values = struct.unpack(f"<{count}{code}", data)
    return Property(property_type, values)


def _parse_bool_array(reader: BinaryReader, property_type: PropertyType, limits: ParserLimits) -> Property:
    metadata = _read_array_metadata(reader)
    if metadata.is_compressed:
        data = _inflate(reader, metadata, limits)
        count = len(data) // _BOOL_COMPRESSED_ELEMENT_SIZE
    else:
        count = metadata.length
        data = _read_raw(reader, count, limits)
    return Property(property_type, tuple(byte == 1 for byte in data[:count]))


def _parse_string(reader: BinaryReader, property_type: PropertyType, limits: ParserLimits) -> Property:
    length = reader.read_u32()
    offset = reader.tell()
    raw = reader.read_exact(length)
    # Names such as "Cube\x00\x01Geometry" carry a class suffix after the NUL.
    text = raw.split(b"\x00", 1)[0]
    try:
        return Property(property_type, text.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise FBXFormatError(f"String property is not valid UTF-8: {raw!r}", offset=offset) from exc


def _parse_binary(reader: BinaryReader, property_type: PropertyType, limits: ParserLimits) -> Property:
    length = reader.read_u32()
    return Property(property_type, reader.read_exact(length))


def _scalar(read: Callable[[BinaryReader], object]):
    def parse(reader: BinaryReader, property_type: PropertyType, limits: ParserLimits) -> Property:
        return Property(property_type, read(reader))

    return parse


_PARSERS = {
    PropertyType.INT16: _scalar(BinaryReader.read_i16),
    PropertyType.BOOL: _scalar(lambda reader: reader.read_u8() == 1),
    PropertyType.INT32: _scalar(BinaryReader.read_i32),
    PropertyType.FLOAT32: _scalar(BinaryReader.read_f32),
    PropertyType.FLOAT64: _scalar(BinaryReader.read_f64),
    PropertyType.INT64: _scalar(BinaryReader.read_i64),
    PropertyType.FLOAT32_ARRAY: _parse_numeric_array,
    PropertyType.FLOAT64_ARRAY: _parse_numeric_array,
    PropertyType.INT64_ARRAY: _parse_numeric_array,
    PropertyType.INT32_ARRAY: _parse_numeric_array,
    PropertyType.BOOL_ARRAY: _parse_bool_array,
    PropertyType.STRING: _parse_string,
    PropertyType.BINARY: _parse_binary,
}


def parse_property(reader: BinaryReader, limits: ParserLimits) -> Property:
    """Decode one property at the reader's position."""

    offset = reader.tell()
    tag = reader.read_u8()
    try:
        property_type = PropertyType(chr(tag))
    except ValueError:
        raise FBXFormatError(f"Unknown property type {chr(tag)!r} (0x{tag:02X})", offset=offset) from None
    return _PARSERS[property_type](reader, property_type, limits)


def parse_properties(reader: BinaryReader, count: int, limits: ParserLimits) -> List[Property]:
    properties = [parse_property(reader, limits) for _ in range(count)]
    logger.debug("Decoded %d properties ending at offset %d", count, reader.tell())
    return properties
