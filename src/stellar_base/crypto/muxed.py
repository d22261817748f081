"""
Muxed accounts.

A muxed account is an ed25519 public key, optionally paired with a 64-bit
sub-account id. Both forms authorize as the same key but encode differently:
a bare key uses KEY_TYPE_ED25519 and a 'G...' address, a muxed key uses
KEY_TYPE_MUXED_ED25519 and an 'M...' address, including when the id is 0.
"""

from __future__ import annotations
from typing import Optional, Union

from .. import strkey
from ..codec import XdrCodec, XdrReader, XdrWriter
from ..codec.writer import UINT64_MAX
from ..errors import InvalidPublicKeyError, XdrError
from .keypair import KEY_LEN, PublicKey

KEY_TYPE_ED25519 = 0
KEY_TYPE_MUXED_ED25519 = 0x100


class MuxedEd25519PublicKey(XdrCodec):
    """
    An ed25519 key with a required 64-bit sub-account id.

    XDR layout is the uint64 id followed by the 32-byte key; the strkey form
    is an 'M...' address.
    """

    def __init__(self, public_key: PublicKey, id: int):
        if id < 0 or id > UINT64_MAX:
            raise InvalidPublicKeyError(f"muxed account id out of range: {id}")
        self._public_key = public_key
        self._id = id

    @classmethod
    def from_account_id(cls, address: str) -> MuxedEd25519PublicKey:
        """Parse an 'M...' address."""
        key, id = strkey.decode_muxed_account(address)
        return cls(PublicKey(key), id)

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    @property
    def id(self) -> int:
        return self._id

    def account_id(self) -> str:
        return strkey.encode_muxed_account(self._public_key.as_bytes(), self._id)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.uint64(self._id)
        writer.opaque_fixed(self._public_key.as_bytes(), KEY_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> MuxedEd25519PublicKey:
        id = reader.uint64()
        return cls(PublicKey(reader.opaque_fixed(KEY_LEN)), id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MuxedEd25519PublicKey):
            return False
        return self._public_key == other._public_key and self._id == other._id

    def __hash__(self) -> int:
        return hash((self._public_key, self._id))

    def __str__(self) -> str:
        return self.account_id()

    def __repr__(self) -> str:
        return f"MuxedEd25519PublicKey.from_account_id('{self.account_id()}')"


class MuxedAccount(XdrCodec):
    """Source or destination account of an operation or transaction."""

    def __init__(self, public_key: PublicKey, id: Optional[int] = None):
        self._public_key = public_key
        self._muxed = MuxedEd25519PublicKey(public_key, id) if id is not None else None

    @classmethod
    def new_muxed(cls, public_key: PublicKey, id: int) -> MuxedAccount:
        return cls(public_key, id)

    @classmethod
    def from_muxed_key(cls, muxed: MuxedEd25519PublicKey) -> MuxedAccount:
        return cls(muxed.public_key, muxed.id)

    @classmethod
    def from_account_id(cls, address: str) -> MuxedAccount:
        """Parse a 'G...' or 'M...' address."""
        if address.startswith("M"):
            return cls.from_muxed_key(MuxedEd25519PublicKey.from_account_id(address))
        return cls(PublicKey.from_account_id(address))

    @property
    def public_key(self) -> PublicKey:
        """The underlying ed25519 key used for authorization."""
        return self._public_key

    @property
    def id(self) -> Optional[int]:
        return self._muxed.id if self._muxed is not None else None

    def is_muxed(self) -> bool:
        return self._muxed is not None

    def as_muxed_ed25519(self) -> Optional[MuxedEd25519PublicKey]:
        return self._muxed

    def account_id(self) -> str:
        if self._muxed is None:
            return self._public_key.account_id()
        return self._muxed.account_id()

    def write_xdr(self, writer: XdrWriter) -> None:
        if self._muxed is None:
            writer.int32(KEY_TYPE_ED25519)
            writer.opaque_fixed(self._public_key.as_bytes(), KEY_LEN)
        else:
            writer.int32(KEY_TYPE_MUXED_ED25519)
            self._muxed.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> MuxedAccount:
        key_type = reader.int32()
        if key_type == KEY_TYPE_ED25519:
            return cls(PublicKey(reader.opaque_fixed(KEY_LEN)))
        if key_type == KEY_TYPE_MUXED_ED25519:
            return cls.from_muxed_key(MuxedEd25519PublicKey.read_xdr(reader))
        raise XdrError(f"unknown crypto key type: {key_type}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, MuxedAccount):
            return False
        return self._public_key == other._public_key and self._muxed == other._muxed

    def __hash__(self) -> int:
        return hash((self._public_key, self._muxed))

    def __str__(self) -> str:
        return self.account_id()

    def __repr__(self) -> str:
        return f"MuxedAccount.from_account_id('{self.account_id()}')"


MuxedAccountLike = Union[MuxedAccount, MuxedEd25519PublicKey, PublicKey, str]


def to_muxed_account(value: MuxedAccountLike) -> MuxedAccount:
    """Accept a MuxedAccount, a muxed or plain key, or a 'G...'/'M...' address."""
    if isinstance(value, MuxedAccount):
        return value
    if isinstance(value, MuxedEd25519PublicKey):
        return MuxedAccount.from_muxed_key(value)
    if isinstance(value, PublicKey):
        return MuxedAccount(value)
    if isinstance(value, str):
        return MuxedAccount.from_account_id(value)
    raise InvalidPublicKeyError(f"cannot convert {type(value).__name__} to MuxedAccount")
