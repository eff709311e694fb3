from __future__ import annotations

import io

import pytest

from fbx_importer.core.exceptions import FBXFormatError, FBXIOError
from fbx_importer.core.reader import BinaryReader


def test_length_is_measured_without_moving_the_cursor():
    stream = io.BytesIO(b"0123456789")
    stream.seek(4)

    reader = BinaryReader(stream)

    assert reader.length == 10
    assert reader.tell() == 4


def test_little_endian_reads_advance_the_cursor(make_reader):
    reader = make_reader(bytes([1, 2, 3, 4, 5, 6, 7, 8]))

    assert reader.read_u32() == 0x04030201
    assert reader.tell() == 4
    assert reader.read_i16() == 0x0605
    assert reader.read_u8() == 7


def test_short_read_raises_io_error_with_offset(make_reader):
    reader = make_reader(b"\x01\x02\x03", position=1)

    with pytest.raises(FBXIOError) as info:
        reader.read_u32()

    assert info.value.offset == 1


def test_read_name_decodes_utf8(make_reader):
    reader = make_reader(b"\x07Objects")

    assert reader.read_name() == "Objects"
    assert reader.tell() == 8


def test_read_name_rejects_invalid_utf8(make_reader):
    reader = make_reader(b"\x02\xff\xfe")

    with pytest.raises(FBXFormatError):
        reader.read_name()
