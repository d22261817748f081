"""
Ed25519 keys for Stellar accounts.

Provides PublicKey, SecretKey and KeyPair. Textual forms use strkey:
account ids start with 'G', secret seeds with 'S'.
"""

from __future__ import annotations
import logging
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .. import strkey
from ..codec import XdrCodec, XdrReader, XdrWriter
from ..errors import InvalidPublicKeyError, InvalidSeedError, StellarBaseError, XdrError
from .signature import DecoratedSignature, Signature, SignatureHint

logger = logging.getLogger(__name__)

KEY_LEN = 32
PUBLIC_KEY_TYPE_ED25519 = 0


class PublicKey(XdrCodec):
    """
    Ed25519 public key.

    Provides verification and the account id text form. Encodes on the wire
    as a PublicKey / AccountID union with the ed25519 discriminant.
    """

    def __init__(self, key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Raises:
            InvalidPublicKeyError: If key is not a valid Ed25519 point encoding
        """
        if len(key_bytes) != KEY_LEN:
            raise InvalidPublicKeyError(f"public key must be 32 bytes, got {len(key_bytes)}")
        self._key_bytes = bytes(key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise InvalidPublicKeyError(cause=e)

    @classmethod
    def from_account_id(cls, account_id: str) -> PublicKey:
        """Create public key from a 'G...' account id."""
        return cls(strkey.decode_account_id(account_id))

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> PublicKey:
        return cls(key_bytes)

    def as_bytes(self) -> bytes:
        return self._key_bytes

    def account_id(self) -> str:
        return strkey.encode_account_id(self._key_bytes)

    def signature_hint(self) -> SignatureHint:
        return SignatureHint.from_public_key(self)

    def verify(self, signature: Signature, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Returns:
            True if signature is valid
        """
        data = signature.to_bytes()
        if len(data) != 64:
            return False
        try:
            self._crypto_key.verify(data, message)
        except InvalidSignature:
            return False
        return True

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(PUBLIC_KEY_TYPE_ED25519)
        writer.opaque_fixed(self._key_bytes, KEY_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> PublicKey:
        key_type = reader.int32()
        if key_type != PUBLIC_KEY_TYPE_ED25519:
            raise XdrError(f"unknown public key type: {key_type}")
        return cls(reader.opaque_fixed(KEY_LEN))

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return self.account_id()

    def __repr__(self) -> str:
        return f"PublicKey.from_account_id('{self.account_id()}')"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Validate 'G...' strings into PublicKey when used as a pydantic field."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any) -> PublicKey:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls.from_account_id(value)
            except StellarBaseError as e:
                raise ValueError(f"invalid account id: {e}")
        raise ValueError(f"cannot convert {type(value).__name__} to PublicKey")


class SecretKey:
    """
    Ed25519 secret key.

    Owns the 32-byte seed; the public key is always derived from it.
    """

    def __init__(self, seed: bytes):
        if len(seed) != KEY_LEN:
            raise InvalidSeedError(f"seed must be 32 bytes, got {len(seed)}")
        self._seed = bytes(seed)
        self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(self._seed)

    @classmethod
    def from_secret_seed(cls, secret: str) -> SecretKey:
        """Create secret key from an 'S...' secret seed."""
        return cls(strkey.decode_secret_seed(secret))

    def secret_seed(self) -> str:
        return strkey.encode_secret_seed(self._seed)

    def seed_bytes(self) -> bytes:
        return self._seed

    def public_key(self) -> PublicKey:
        raw = self._crypto_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return PublicKey(raw)

    def sign(self, message: bytes) -> Signature:
        return Signature(self._crypto_key.sign(message))

    def __eq__(self, other) -> bool:
        if not isinstance(other, SecretKey):
            return False
        return self._seed == other._seed

    def __hash__(self) -> int:
        return hash(self._seed)

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)"


class KeyPair:
    """A public key and the secret key it was derived from."""

    def __init__(self, secret_key: SecretKey):
        self._secret_key = secret_key
        self._public_key = secret_key.public_key()

    @classmethod
    def random(cls) -> KeyPair:
        """Generate a new random key pair."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        seed = crypto_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(SecretKey(seed))

    @classmethod
    def from_seed_bytes(cls, seed: bytes) -> KeyPair:
        return cls(SecretKey(seed))

    @classmethod
    def from_secret_seed(cls, secret: str) -> KeyPair:
        return cls(SecretKey.from_secret_seed(secret))

    @classmethod
    def from_network(cls, network) -> KeyPair:
        """Key pair seeded with the network id, the network's root account."""
        return cls.from_seed_bytes(network.network_id())

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    @property
    def secret_key(self) -> SecretKey:
        return self._secret_key

    def sign(self, message: bytes) -> Signature:
        return self._secret_key.sign(message)

    def sign_decorated(self, message: bytes) -> DecoratedSignature:
        """Sign message and attach this key's signature hint."""
        logger.debug("signing %d bytes with %s", len(message), self._public_key.account_id())
        return DecoratedSignature(self._public_key.signature_hint(), self.sign(message))

    def verify(self, signature: Signature, message: bytes) -> bool:
        return self._public_key.verify(signature, message)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyPair):
            return False
        return self._secret_key == other._secret_key

    def __hash__(self) -> int:
        return hash(self._secret_key)

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self._public_key.account_id()})"
