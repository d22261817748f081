"""
Transaction memos.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Optional, Union

from .codec import XdrCodec, XdrReader, XdrWriter
from .errors import InvalidMemoHashError, InvalidMemoReturnError, InvalidMemoTextError, XdrError

MAX_MEMO_TEXT_LEN = 28
MAX_HASH_LEN = 32


class MemoType(IntEnum):
    NONE = 0
    TEXT = 1
    ID = 2
    HASH = 3
    RETURN = 4


class Memo(XdrCodec):
    """
    Memo attached to a transaction.

    Text memos are at most 28 bytes of UTF-8. Hash and return memos hold
    32 bytes; shorter input is zero-padded on the right.
    """

    def __init__(self, memo_type: MemoType = MemoType.NONE, value: Union[None, str, int, bytes] = None):
        self.memo_type = memo_type
        self.value = value

    @classmethod
    def new_none(cls) -> Memo:
        return cls()

    @classmethod
    def new_id(cls, id: int) -> Memo:
        if id < 0 or id >= 1 << 64:
            raise XdrError(f"memo id out of uint64 range: {id}")
        return cls(MemoType.ID, id)

    @classmethod
    def new_text(cls, text: str) -> Memo:
        if len(text.encode("utf-8")) > MAX_MEMO_TEXT_LEN:
            raise InvalidMemoTextError(details={"length": len(text.encode("utf-8"))})
        return cls(MemoType.TEXT, text)

    @classmethod
    def new_hash(cls, hash: bytes) -> Memo:
        if len(hash) > MAX_HASH_LEN:
            raise InvalidMemoHashError(details={"length": len(hash)})
        return cls(MemoType.HASH, bytes(hash).ljust(MAX_HASH_LEN, b"\x00"))

    @classmethod
    def new_return(cls, ret: bytes) -> Memo:
        if len(ret) > MAX_HASH_LEN:
            raise InvalidMemoReturnError(details={"length": len(ret)})
        return cls(MemoType.RETURN, bytes(ret).ljust(MAX_HASH_LEN, b"\x00"))

    def is_none(self) -> bool:
        return self.memo_type == MemoType.NONE

    def as_id(self) -> Optional[int]:
        return self.value if self.memo_type == MemoType.ID else None

    def as_text(self) -> Optional[str]:
        return self.value if self.memo_type == MemoType.TEXT else None

    def as_hash(self) -> Optional[bytes]:
        return self.value if self.memo_type == MemoType.HASH else None

    def as_return(self) -> Optional[bytes]:
        return self.value if self.memo_type == MemoType.RETURN else None

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(int(self.memo_type))
        if self.memo_type == MemoType.TEXT:
            writer.string(self.value, MAX_MEMO_TEXT_LEN)
        elif self.memo_type == MemoType.ID:
            writer.uint64(self.value)
        elif self.memo_type in (MemoType.HASH, MemoType.RETURN):
            writer.opaque_fixed(self.value, MAX_HASH_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Memo:
        raw_type = reader.int32()
        try:
            memo_type = MemoType(raw_type)
        except ValueError as e:
            raise XdrError(f"unknown memo type: {raw_type}", cause=e)

        if memo_type == MemoType.NONE:
            return cls.new_none()
        if memo_type == MemoType.TEXT:
            return cls.new_text(reader.string(MAX_MEMO_TEXT_LEN))
        if memo_type == MemoType.ID:
            return cls.new_id(reader.uint64())
        if memo_type == MemoType.HASH:
            return cls.new_hash(reader.opaque_fixed(MAX_HASH_LEN))
        return cls.new_return(reader.opaque_fixed(MAX_HASH_LEN))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Memo):
            return False
        return self.memo_type == other.memo_type and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.memo_type, self.value))

    def __repr__(self) -> str:
        return f"Memo({self.memo_type.name}, {self.value!r})"
