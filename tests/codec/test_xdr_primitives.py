"""
Tests for the XDR primitive writer and reader.

Covers big-endian integer layout, 4-byte padding of opaque data and
strings, optional markers, array counts and the malformed-input checks
performed while reading.
"""

import pytest

from stellar_base.codec import XdrReader, XdrWriter, decode_base64
from stellar_base.errors import Base64DecodeError, XdrError


class TestXdrWriter:
    """Test primitive encodings."""

    def test_integers_are_big_endian(self):
        writer = XdrWriter()
        writer.int32(-1)
        writer.uint32(1)
        writer.int64(2)
        writer.uint64(0xFFFFFFFFFFFFFFFF)
        assert writer.to_bytes() == (
            b"\xff\xff\xff\xff"
            + b"\x00\x00\x00\x01"
            + b"\x00" * 7 + b"\x02"
            + b"\xff" * 8
        )

    def test_integer_range_checks(self):
        writer = XdrWriter()
        with pytest.raises(XdrError):
            writer.int32(1 << 31)
        with pytest.raises(XdrError):
            writer.uint32(-1)
        with pytest.raises(XdrError):
            writer.uint64(1 << 64)
        with pytest.raises(XdrError):
            writer.int64(True)

    def test_opaque_var_is_padded(self):
        writer = XdrWriter()
        writer.opaque_var(b"abcde")
        assert writer.to_bytes() == b"\x00\x00\x00\x05abcde\x00\x00\x00"
        assert len(writer) == 12

    def test_opaque_fixed_length_must_match(self):
        writer = XdrWriter()
        with pytest.raises(XdrError):
            writer.opaque_fixed(b"abc", 4)

    def test_string_max_len_counts_bytes(self):
        writer = XdrWriter()
        with pytest.raises(XdrError):
            writer.string("é" * 3, max_len=5)

    def test_optional_and_array(self):
        writer = XdrWriter()
        writer.optional(None, writer.uint32)
        writer.optional(7, writer.uint32)
        writer.array([1, 2], writer.uint32)
        assert writer.to_bytes() == (
            b"\x00\x00\x00\x00"
            + b"\x00\x00\x00\x01" + b"\x00\x00\x00\x07"
            + b"\x00\x00\x00\x02" + b"\x00\x00\x00\x01" + b"\x00\x00\x00\x02"
        )

    def test_array_max_len(self):
        writer = XdrWriter()
        with pytest.raises(XdrError):
            writer.array([1, 2, 3], writer.uint32, max_len=2)


class TestXdrReader:
    """Test primitive decoding and malformed input."""

    def test_reads_what_writer_wrote(self):
        writer = XdrWriter()
        writer.int32(-5)
        writer.string("hello")
        writer.optional(None, writer.uint32)
        reader = XdrReader(writer.to_bytes())
        assert reader.int32() == -5
        assert reader.string() == "hello"
        assert reader.optional(reader.uint32) is None
        reader.assert_done()

    def test_truncated_input(self):
        reader = XdrReader(b"\x00\x00")
        with pytest.raises(XdrError):
            reader.uint32()

    def test_invalid_bool(self):
        reader = XdrReader(b"\x00\x00\x00\x02")
        with pytest.raises(XdrError):
            reader.bool()

    def test_non_zero_padding(self):
        reader = XdrReader(b"\x00\x00\x00\x01a\x00\x01\x00")
        with pytest.raises(XdrError):
            reader.opaque_var()

    def test_opaque_over_declared_max(self):
        reader = XdrReader(b"\x00\x00\x00\x08" + b"x" * 8)
        with pytest.raises(XdrError):
            reader.opaque_var(max_len=4)

    def test_array_count_beyond_remaining_data(self):
        reader = XdrReader(b"\x7f\xff\xff\xff")
        with pytest.raises(XdrError):
            reader.array(reader.uint32)

    def test_invalid_utf8_string(self):
        reader = XdrReader(b"\x00\x00\x00\x01\xff\x00\x00\x00")
        with pytest.raises(XdrError):
            reader.string()

    def test_trailing_bytes(self):
        reader = XdrReader(b"\x00\x00\x00\x01\x00")
        reader.uint32()
        assert reader.remaining == 1
        with pytest.raises(XdrError):
            reader.assert_done()


class TestBase64:
    """Test the strict base64 helper."""

    def test_decode(self):
        assert decode_base64("AAAAAA==") == b"\x00\x00\x00\x00"

    def test_rejects_garbage(self):
        with pytest.raises(Base64DecodeError):
            decode_base64("not base64!")
