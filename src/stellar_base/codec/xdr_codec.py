"""
XDR serialization mixin.

Value types implement ``write_xdr``/``read_xdr`` against the primitive
writer/reader and inherit the bytes and base64 entry points from here.
"""

from __future__ import annotations
import base64
import binascii
from typing import Type, TypeVar

from ..errors import Base64DecodeError
from .reader import XdrReader
from .writer import XdrWriter

T = TypeVar("T", bound="XdrCodec")


def decode_base64(data: str) -> bytes:
    """Strict base64 decode, wrapping failures in Base64DecodeError."""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64DecodeError(cause=e)


class XdrCodec:
    """Mixin providing to/from bytes and base64 for XDR value types."""

    def write_xdr(self, writer: XdrWriter) -> None:
        raise NotImplementedError

    @classmethod
    def read_xdr(cls: Type[T], reader: XdrReader) -> T:
        raise NotImplementedError

    def to_xdr_bytes(self) -> bytes:
        writer = XdrWriter()
        self.write_xdr(writer)
        return writer.to_bytes()

    @classmethod
    def from_xdr_bytes(cls: Type[T], data: bytes) -> T:
        """Decode a value; all input bytes must be consumed."""
        reader = XdrReader(data)
        value = cls.read_xdr(reader)
        reader.assert_done()
        return value

    def to_xdr_base64(self) -> str:
        return base64.b64encode(self.to_xdr_bytes()).decode("ascii")

    @classmethod
    def from_xdr_base64(cls: Type[T], data: str) -> T:
        return cls.from_xdr_bytes(decode_base64(data))
