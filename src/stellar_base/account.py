"""
Account and trust line flags, account data values.
"""

from __future__ import annotations
from enum import IntFlag

from .codec import XdrCodec, XdrReader, XdrWriter
from .errors import InvalidAccountFlagsError, InvalidDataValueError, InvalidTrustLineFlagsError

DATA_VALUE_MAX_LEN = 64


class AccountFlags(IntFlag):
    """Flags set on an account by its issuer."""

    AUTH_REQUIRED = 0x1
    AUTH_REVOCABLE = 0x2
    AUTH_IMMUTABLE = 0x4
    AUTH_CLAWBACK_ENABLED = 0x8

    @classmethod
    def empty(cls) -> AccountFlags:
        return cls(0)

    @classmethod
    def all_flags(cls) -> AccountFlags:
        return cls.AUTH_REQUIRED | cls.AUTH_REVOCABLE | cls.AUTH_IMMUTABLE | cls.AUTH_CLAWBACK_ENABLED

    @classmethod
    def from_bits(cls, bits: int) -> AccountFlags:
        """Raises InvalidAccountFlagsError on unknown bits."""
        if bits < 0 or bits & ~int(cls.all_flags()):
            raise InvalidAccountFlagsError(details={"bits": bits})
        return cls(bits)

    @property
    def bits(self) -> int:
        return int(self)


class TrustLineFlags(IntFlag):
    """Authorization flags on a trust line."""

    AUTHORIZED = 0x1
    AUTHORIZED_TO_MAINTAIN_LIABILITIES = 0x2
    TRUSTLINE_CLAWBACK_ENABLED = 0x4

    @classmethod
    def empty(cls) -> TrustLineFlags:
        return cls(0)

    @classmethod
    def all_flags(cls) -> TrustLineFlags:
        return cls.AUTHORIZED | cls.AUTHORIZED_TO_MAINTAIN_LIABILITIES | cls.TRUSTLINE_CLAWBACK_ENABLED

    @classmethod
    def from_bits(cls, bits: int) -> TrustLineFlags:
        """Raises InvalidTrustLineFlagsError on unknown bits."""
        if bits < 0 or bits & ~int(cls.all_flags()):
            raise InvalidTrustLineFlagsError(details={"bits": bits})
        return cls(bits)

    @property
    def bits(self) -> int:
        return int(self)


class DataValue(XdrCodec):
    """Value of an account data entry, up to 64 bytes."""

    def __init__(self, value: bytes):
        if len(value) > DATA_VALUE_MAX_LEN:
            raise InvalidDataValueError(details={"length": len(value)})
        self._value = bytes(value)

    @classmethod
    def from_str(cls, text: str) -> DataValue:
        return cls(text.encode("utf-8"))

    def as_bytes(self) -> bytes:
        return self._value

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.opaque_var(self._value, DATA_VALUE_MAX_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> DataValue:
        return cls(reader.opaque_var(DATA_VALUE_MAX_LEN))

    def __eq__(self, other) -> bool:
        return isinstance(other, DataValue) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"DataValue({self._value!r})"
