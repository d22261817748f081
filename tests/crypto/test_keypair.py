"""
Tests for Ed25519 key pairs, signatures and networks.
"""

import pytest
from pydantic import BaseModel

from stellar_base import KeyPair, Network, PublicKey, init
from stellar_base.crypto import DecoratedSignature, Signature, SignatureHint
from stellar_base.crypto import is_initialized
from stellar_base.errors import (
    InvalidNetworkIdError,
    InvalidSeedError,
    InvalidSignatureError,
    InvalidSignatureHintError,
)

SIGNING_SEED = "SD7X7LEHBNMUIKQGKPARG5TDJNBHKC346OUARHGZL5ITC6IJPXHILY36"
SIGNING_MESSAGE = b"test post please ignore"
EXPECTED_SIGNATURE = (
    "19DBFDAF0AA84DF9A7FF6FE3C10EBC1FE214C510B95DB0D633BED93DF9256BA9"
    "92EF7D94B2A6E454DE8F210928CA9611390329C840C8E564E7A07216027AB40A"
)


class TestKeyPair:
    """Test key generation, signing and verification."""

    def test_known_signature(self):
        kp = KeyPair.from_secret_seed(SIGNING_SEED)
        signature = kp.sign(SIGNING_MESSAGE)
        assert signature.to_bytes().hex().upper() == EXPECTED_SIGNATURE
        assert kp.verify(signature, SIGNING_MESSAGE)

    def test_signature_hint(self):
        kp = KeyPair.from_secret_seed(SIGNING_SEED)
        assert kp.public_key.signature_hint().to_bytes().hex().upper() == "0BFAD134"

    def test_decorated_signature(self):
        kp = KeyPair.from_secret_seed(SIGNING_SEED)
        decorated = kp.sign_decorated(SIGNING_MESSAGE)
        assert decorated.hint == kp.public_key.signature_hint()
        assert decorated.signature.to_bytes().hex().upper() == EXPECTED_SIGNATURE
        assert DecoratedSignature.from_xdr_bytes(decorated.to_xdr_bytes()) == decorated

    def test_verify_rejects_other_message(self):
        kp = KeyPair.from_secret_seed(SIGNING_SEED)
        signature = kp.sign(SIGNING_MESSAGE)
        assert not kp.verify(signature, b"something else")
        assert not kp.verify(Signature(b"\x00" * 10), SIGNING_MESSAGE)

    def test_random_keys_differ(self):
        assert KeyPair.random() != KeyPair.random()

    def test_seed_length(self):
        with pytest.raises(InvalidSeedError):
            KeyPair.from_seed_bytes(b"\x01" * 31)

    def test_from_network(self, public_network):
        kp = KeyPair.from_network(public_network)
        assert kp.public_key.account_id() == "GAAZI4TCR3TY5OJHCTJC2A4QSY6CJWJH5IAJTGKIN2ER7LBNVKOCCWN7"

    def test_init_is_idempotent(self):
        init()
        init()
        assert is_initialized()


class TestPublicKey:
    """Test public key encodings."""

    def test_xdr_round_trip(self, keypair1):
        key = keypair1.public_key
        data = key.to_xdr_bytes()
        assert data[:4] == b"\x00\x00\x00\x00"
        assert len(data) == 36
        assert PublicKey.from_xdr_bytes(data) == key

    def test_as_pydantic_field(self, keypair1):
        class Holder(BaseModel):
            key: PublicKey

        address = keypair1.public_key.account_id()
        assert Holder(key=address).key == keypair1.public_key
        with pytest.raises(ValueError):
            Holder(key="GAAAAAAAACGC6")


class TestSignatureTypes:
    """Test length checks of signature values."""

    def test_signature_max_length(self):
        assert len(Signature(b"\x01" * 64).to_bytes()) == 64
        with pytest.raises(InvalidSignatureError):
            Signature(b"\x01" * 65)

    def test_hint_length(self):
        with pytest.raises(InvalidSignatureHintError):
            SignatureHint(b"\x01\x02\x03")


class TestNetwork:
    """Test network passphrases and ids."""

    def test_passphrases(self, test_network, public_network):
        assert test_network.passphrase == "Test SDF Network ; September 2015"
        assert public_network.passphrase == "Public Global Stellar Network ; September 2015"
        assert test_network != public_network
        assert len(test_network.network_id()) == 32

    def test_empty_passphrase(self):
        with pytest.raises(InvalidNetworkIdError):
            Network("")
