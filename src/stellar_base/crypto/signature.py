"""
Ed25519 signatures and decorated signatures.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..codec import XdrCodec, XdrReader, XdrWriter
from ..errors import InvalidSignatureError, InvalidSignatureHintError

if TYPE_CHECKING:
    from .keypair import PublicKey

SIGNATURE_MAX_LEN = 64
SIGNATURE_HINT_LEN = 4


class Signature(XdrCodec):
    """Raw signature bytes, at most 64."""

    def __init__(self, data: bytes):
        if len(data) > SIGNATURE_MAX_LEN:
            raise InvalidSignatureError(details={"length": len(data)})
        self._data = bytes(data)

    def to_bytes(self) -> bytes:
        return self._data

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.opaque_var(self._data, SIGNATURE_MAX_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Signature:
        return cls(reader.opaque_var(SIGNATURE_MAX_LEN))

    def __eq__(self, other) -> bool:
        return isinstance(other, Signature) and self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"Signature('{self._data.hex()}')"


class SignatureHint(XdrCodec):
    """Last 4 bytes of the signing public key."""

    def __init__(self, data: bytes):
        if len(data) != SIGNATURE_HINT_LEN:
            raise InvalidSignatureHintError(details={"length": len(data)})
        self._data = bytes(data)

    @classmethod
    def from_public_key(cls, public_key: PublicKey) -> SignatureHint:
        return cls(public_key.as_bytes()[-SIGNATURE_HINT_LEN:])

    def to_bytes(self) -> bytes:
        return self._data

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.opaque_fixed(self._data, SIGNATURE_HINT_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> SignatureHint:
        return cls(reader.opaque_fixed(SIGNATURE_HINT_LEN))

    def __eq__(self, other) -> bool:
        return isinstance(other, SignatureHint) and self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"SignatureHint('{self._data.hex()}')"


class DecoratedSignature(XdrCodec):
    """A signature together with the hint of the key that produced it."""

    def __init__(self, hint: SignatureHint, signature: Signature):
        self.hint = hint
        self.signature = signature

    def write_xdr(self, writer: XdrWriter) -> None:
        self.hint.write_xdr(writer)
        self.signature.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> DecoratedSignature:
        hint = SignatureHint.read_xdr(reader)
        signature = Signature.read_xdr(reader)
        return cls(hint, signature)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DecoratedSignature):
            return False
        return self.hint == other.hint and self.signature == other.signature

    def __hash__(self) -> int:
        return hash((self.hint, self.signature))

    def __repr__(self) -> str:
        return f"DecoratedSignature({self.hint!r}, {self.signature!r})"
