"""
Account signers.

Signer keys share a 32-byte payload shape on the wire and are told apart
only by their discriminant: ed25519 keys, pre-authorized transaction hashes,
hash(x) preimage hashes and ed25519 keys bound to a signed payload.
"""

from __future__ import annotations
from typing import Union

from . import strkey
from .codec import XdrCodec, XdrReader, XdrWriter, sha256_bytes
from .crypto.keypair import KEY_LEN, PublicKey
from .errors import InvalidHashXError, InvalidPreAuthTxError, XdrError

SIGNER_KEY_TYPE_ED25519 = 0
SIGNER_KEY_TYPE_PRE_AUTH_TX = 1
SIGNER_KEY_TYPE_HASH_X = 2
SIGNER_KEY_TYPE_ED25519_SIGNED_PAYLOAD = 3

SIGNED_PAYLOAD_MAX_LEN = 64


class PreAuthTxHash:
    """Hash of a transaction that is authorized ahead of time."""

    def __init__(self, hash: bytes):
        if len(hash) != 32:
            raise InvalidPreAuthTxError(details={"length": len(hash)})
        self._hash = bytes(hash)

    @classmethod
    def from_envelope(cls, envelope, network) -> PreAuthTxHash:
        """Hash of a transaction envelope on the given network."""
        return cls(envelope.hash(network))

    @classmethod
    def from_strkey(cls, text: str) -> PreAuthTxHash:
        return cls(strkey.decode_pre_auth_tx(text))

    def to_strkey(self) -> str:
        return strkey.encode_pre_auth_tx(self._hash)

    def as_bytes(self) -> bytes:
        return self._hash

    def __eq__(self, other) -> bool:
        return isinstance(other, PreAuthTxHash) and self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)

    def __repr__(self) -> str:
        return f"PreAuthTxHash('{self._hash.hex()}')"


class HashX:
    """sha256 hash of a preimage; whoever reveals the preimage can sign."""

    def __init__(self, hash: bytes):
        if len(hash) != 32:
            raise InvalidHashXError(details={"length": len(hash)})
        self._hash = bytes(hash)

    @classmethod
    def from_preimage(cls, preimage: bytes) -> HashX:
        return cls(sha256_bytes(preimage))

    @classmethod
    def from_strkey(cls, text: str) -> HashX:
        return cls(strkey.decode_sha256_hash(text))

    def to_strkey(self) -> str:
        return strkey.encode_sha256_hash(self._hash)

    def as_bytes(self) -> bytes:
        return self._hash

    def __eq__(self, other) -> bool:
        return isinstance(other, HashX) and self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)

    def __repr__(self) -> str:
        return f"HashX('{self._hash.hex()}')"


class Ed25519SignedPayload:
    """An ed25519 key that signs a specific payload of up to 64 bytes."""

    def __init__(self, public_key: PublicKey, payload: bytes):
        if len(payload) > SIGNED_PAYLOAD_MAX_LEN:
            raise XdrError(f"signed payload longer than {SIGNED_PAYLOAD_MAX_LEN} bytes")
        self.public_key = public_key
        self.payload = bytes(payload)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519SignedPayload):
            return False
        return self.public_key == other.public_key and self.payload == other.payload

    def __hash__(self) -> int:
        return hash((self.public_key, self.payload))

    def __repr__(self) -> str:
        return f"Ed25519SignedPayload({self.public_key!r}, '{self.payload.hex()}')"


SignerKeyValue = Union[PublicKey, PreAuthTxHash, HashX, Ed25519SignedPayload]


class SignerKey(XdrCodec):
    """Tagged union over the signer key kinds."""

    def __init__(self, key: SignerKeyValue):
        if not isinstance(key, (PublicKey, PreAuthTxHash, HashX, Ed25519SignedPayload)):
            raise TypeError(f"unsupported signer key: {type(key).__name__}")
        self._key = key

    @classmethod
    def new_ed25519(cls, public_key: PublicKey) -> SignerKey:
        return cls(public_key)

    @classmethod
    def new_pre_auth_tx(cls, hash: PreAuthTxHash) -> SignerKey:
        return cls(hash)

    @classmethod
    def new_from_transaction_envelope(cls, envelope, network) -> SignerKey:
        return cls(PreAuthTxHash.from_envelope(envelope, network))

    @classmethod
    def new_hash_x(cls, hash: HashX) -> SignerKey:
        return cls(hash)

    @classmethod
    def new_from_preimage(cls, preimage: bytes) -> SignerKey:
        return cls(HashX.from_preimage(preimage))

    @classmethod
    def new_ed25519_signed_payload(cls, public_key: PublicKey, payload: bytes) -> SignerKey:
        return cls(Ed25519SignedPayload(public_key, payload))

    @property
    def key(self) -> SignerKeyValue:
        return self._key

    @property
    def key_type(self) -> int:
        if isinstance(self._key, PublicKey):
            return SIGNER_KEY_TYPE_ED25519
        if isinstance(self._key, PreAuthTxHash):
            return SIGNER_KEY_TYPE_PRE_AUTH_TX
        if isinstance(self._key, HashX):
            return SIGNER_KEY_TYPE_HASH_X
        return SIGNER_KEY_TYPE_ED25519_SIGNED_PAYLOAD

    def as_ed25519(self):
        return self._key if isinstance(self._key, PublicKey) else None

    def as_pre_auth_tx(self):
        return self._key if isinstance(self._key, PreAuthTxHash) else None

    def as_hash_x(self):
        return self._key if isinstance(self._key, HashX) else None

    def as_ed25519_signed_payload(self):
        return self._key if isinstance(self._key, Ed25519SignedPayload) else None

    def write_xdr(self, writer: XdrWriter) -> None:
        key_type = self.key_type
        writer.int32(key_type)
        if key_type == SIGNER_KEY_TYPE_ED25519_SIGNED_PAYLOAD:
            writer.opaque_fixed(self._key.public_key.as_bytes(), KEY_LEN)
            writer.opaque_var(self._key.payload, SIGNED_PAYLOAD_MAX_LEN)
        else:
            writer.opaque_fixed(self._key.as_bytes(), KEY_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> SignerKey:
        key_type = reader.int32()
        if key_type == SIGNER_KEY_TYPE_ED25519:
            return cls(PublicKey(reader.opaque_fixed(KEY_LEN)))
        if key_type == SIGNER_KEY_TYPE_PRE_AUTH_TX:
            return cls(PreAuthTxHash(reader.opaque_fixed(KEY_LEN)))
        if key_type == SIGNER_KEY_TYPE_HASH_X:
            return cls(HashX(reader.opaque_fixed(KEY_LEN)))
        if key_type == SIGNER_KEY_TYPE_ED25519_SIGNED_PAYLOAD:
            public_key = PublicKey(reader.opaque_fixed(KEY_LEN))
            payload = reader.opaque_var(SIGNED_PAYLOAD_MAX_LEN)
            return cls(Ed25519SignedPayload(public_key, payload))
        raise XdrError(f"unknown signer key type: {key_type}")

    def __eq__(self, other) -> bool:
        return isinstance(other, SignerKey) and self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"SignerKey({self._key!r})"


class Signer(XdrCodec):
    """A signer key and its weight."""

    def __init__(self, key: SignerKey, weight: int):
        self.key = key
        self.weight = weight

    def write_xdr(self, writer: XdrWriter) -> None:
        self.key.write_xdr(writer)
        writer.uint32(self.weight)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Signer:
        key = SignerKey.read_xdr(reader)
        return cls(key, reader.uint32())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signer):
            return False
        return self.key == other.key and self.weight == other.weight

    def __hash__(self) -> int:
        return hash((self.key, self.weight))

    def __repr__(self) -> str:
        return f"Signer({self.key!r}, {self.weight})"
