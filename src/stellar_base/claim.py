"""
Claimable balances: ids, claimants and claim predicates.

ClaimPredicate is a small recursive tree. The wire format encodes and/or
children as a variable-length array and not as an optional, so a payload can
be well-formed XDR and still describe an invalid predicate; those are
rejected with XdrClaimPredicateError.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Tuple, Union

from .codec import XdrCodec, XdrReader, XdrWriter
from .crypto.keypair import PublicKey
from .errors import InvalidClaimableBalanceIdLengthError, XdrClaimPredicateError, XdrError

CLAIMABLE_BALANCE_ID_TYPE_V0 = 0
CLAIMANT_TYPE_V0 = 0
BALANCE_ID_LEN = 32

# Bounds recursion while decoding.
MAX_PREDICATE_DEPTH = 32


class ClaimPredicateType(IntEnum):
    UNCONDITIONAL = 0
    AND = 1
    OR = 2
    NOT = 3
    BEFORE_ABSOLUTE_TIME = 4
    BEFORE_RELATIVE_TIME = 5


class ClaimableBalanceId(XdrCodec):
    """32-byte claimable balance hash."""

    def __init__(self, hash: bytes):
        if len(hash) != BALANCE_ID_LEN:
            raise InvalidClaimableBalanceIdLengthError(details={"length": len(hash)})
        self._hash = bytes(hash)

    @classmethod
    def from_hex(cls, hex_string: str) -> ClaimableBalanceId:
        return cls(bytes.fromhex(hex_string))

    def as_bytes(self) -> bytes:
        return self._hash

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(CLAIMABLE_BALANCE_ID_TYPE_V0)
        writer.opaque_fixed(self._hash, BALANCE_ID_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> ClaimableBalanceId:
        id_type = reader.int32()
        if id_type != CLAIMABLE_BALANCE_ID_TYPE_V0:
            raise XdrError(f"unknown claimable balance id type: {id_type}")
        return cls(reader.opaque_fixed(BALANCE_ID_LEN))

    def __eq__(self, other) -> bool:
        return isinstance(other, ClaimableBalanceId) and self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)

    def __repr__(self) -> str:
        return f"ClaimableBalanceId.from_hex('{self._hash.hex()}')"


PredicateValue = Union[None, Tuple["ClaimPredicate", "ClaimPredicate"], "ClaimPredicate", datetime, timedelta]


class ClaimPredicate(XdrCodec):
    """Condition under which a claimant may claim a balance."""

    def __init__(self, kind: ClaimPredicateType, value: PredicateValue = None):
        self.kind = kind
        self.value = value

    @classmethod
    def new_unconditional(cls) -> ClaimPredicate:
        return cls(ClaimPredicateType.UNCONDITIONAL)

    @classmethod
    def new_and(cls, p1: ClaimPredicate, p2: ClaimPredicate) -> ClaimPredicate:
        return cls(ClaimPredicateType.AND, (p1, p2))

    @classmethod
    def new_or(cls, p1: ClaimPredicate, p2: ClaimPredicate) -> ClaimPredicate:
        return cls(ClaimPredicateType.OR, (p1, p2))

    @classmethod
    def new_not(cls, predicate: ClaimPredicate) -> ClaimPredicate:
        return cls(ClaimPredicateType.NOT, predicate)

    @classmethod
    def new_before_absolute_time(cls, when: datetime) -> ClaimPredicate:
        """Claimable before ``when``; naive datetimes are taken as UTC."""
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return cls(ClaimPredicateType.BEFORE_ABSOLUTE_TIME, when.replace(microsecond=0))

    @classmethod
    def new_before_relative_time(cls, duration: timedelta) -> ClaimPredicate:
        """Claimable within ``duration`` of the balance creation, whole seconds."""
        return cls(ClaimPredicateType.BEFORE_RELATIVE_TIME,
                   timedelta(seconds=int(duration.total_seconds())))

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(int(self.kind))
        if self.kind in (ClaimPredicateType.AND, ClaimPredicateType.OR):
            writer.array(list(self.value), lambda p: p.write_xdr(writer), 2)
        elif self.kind == ClaimPredicateType.NOT:
            writer.optional(self.value, lambda p: p.write_xdr(writer))
        elif self.kind == ClaimPredicateType.BEFORE_ABSOLUTE_TIME:
            writer.int64(int(self.value.timestamp()))
        elif self.kind == ClaimPredicateType.BEFORE_RELATIVE_TIME:
            writer.int64(int(self.value.total_seconds()))

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> ClaimPredicate:
        return cls._read(reader, 0)

    @classmethod
    def _read(cls, reader: XdrReader, depth: int) -> ClaimPredicate:
        if depth > MAX_PREDICATE_DEPTH:
            raise XdrClaimPredicateError("claim predicate nested too deeply")
        raw_kind = reader.int32()
        try:
            kind = ClaimPredicateType(raw_kind)
        except ValueError as e:
            raise XdrError(f"unknown claim predicate type: {raw_kind}", cause=e)

        if kind == ClaimPredicateType.UNCONDITIONAL:
            return cls.new_unconditional()
        if kind in (ClaimPredicateType.AND, ClaimPredicateType.OR):
            count = reader.uint32()
            if count != 2:
                raise XdrClaimPredicateError(f"{kind.name} predicate needs 2 children, got {count}")
            p1 = cls._read(reader, depth + 1)
            p2 = cls._read(reader, depth + 1)
            return cls(kind, (p1, p2))
        if kind == ClaimPredicateType.NOT:
            inner = reader.optional(lambda: cls._read(reader, depth + 1))
            if inner is None:
                raise XdrClaimPredicateError("NOT predicate without child")
            return cls.new_not(inner)
        seconds = reader.int64()
        try:
            if kind == ClaimPredicateType.BEFORE_ABSOLUTE_TIME:
                return cls(kind, datetime.fromtimestamp(seconds, tz=timezone.utc))
            return cls(kind, timedelta(seconds=seconds))
        except (OverflowError, ValueError, OSError) as e:
            raise XdrClaimPredicateError(f"claim predicate time out of range: {seconds}", cause=e)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ClaimPredicate):
            return False
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"ClaimPredicate({self.kind.name}, {self.value!r})"


class Claimant(XdrCodec):
    """Account allowed to claim a balance, subject to a predicate."""

    def __init__(self, destination: PublicKey, predicate: ClaimPredicate):
        self.destination = destination
        self.predicate = predicate

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(CLAIMANT_TYPE_V0)
        self.destination.write_xdr(writer)
        self.predicate.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Claimant:
        claimant_type = reader.int32()
        if claimant_type != CLAIMANT_TYPE_V0:
            raise XdrError(f"unknown claimant type: {claimant_type}")
        destination = PublicKey.read_xdr(reader)
        return cls(destination, ClaimPredicate.read_xdr(reader))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Claimant):
            return False
        return self.destination == other.destination and self.predicate == other.predicate

    def __hash__(self) -> int:
        return hash((self.destination, self.predicate))

    def __repr__(self) -> str:
        return f"Claimant({self.destination!r}, {self.predicate!r})"
