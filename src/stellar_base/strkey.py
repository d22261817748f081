"""
Strkey text encoding.

Versioned, checksummed base32 encoding for public keys, muxed accounts,
secret seeds, pre-authorized transaction hashes and sha256 hashes.

Layout: version byte | payload | crc16-xmodem checksum (little-endian),
base32 encoded without padding.
"""

from __future__ import annotations
import base64
import binascii
import struct
from typing import Tuple

from .errors import (
    InvalidStrKeyError,
    InvalidStrKeyChecksumError,
    InvalidStrKeyVersionByteError,
)

ACCOUNT_ID_VERSION_BYTE = 6 << 3  # G
MUXED_ACCOUNT_VERSION_BYTE = 12 << 3  # M
SECRET_SEED_VERSION_BYTE = 18 << 3  # S
PRE_AUTH_TX_VERSION_BYTE = 19 << 3  # T
SHA256_HASH_VERSION_BYTE = 23 << 3  # X

# version + 32 byte key + checksum
_FIXED_DECODED_LEN = 35
# version + 8 byte id + 32 byte key + checksum
_MUXED_DECODED_LEN = 43


def calculate_checksum(data: bytes) -> bytes:
    """CRC16-XMODEM of data, little-endian."""
    return struct.pack("<H", binascii.crc_hqx(data, 0))


def _encode_check(version: int, payload: bytes) -> str:
    data = bytes([version]) + payload
    data += calculate_checksum(data)
    return base64.b32encode(data).decode("ascii").rstrip("=")


def _b32decode(text: str) -> bytes:
    if not text:
        return b""
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError as e:
        raise InvalidStrKeyError(cause=e)
    raw += b"=" * (-len(raw) % 8)
    try:
        decoded = base64.b32decode(raw)
    except (binascii.Error, ValueError) as e:
        raise InvalidStrKeyError(cause=e)
    # unpadded, with unused trailing bits zero
    if base64.b32encode(decoded).decode("ascii").rstrip("=") != text:
        raise InvalidStrKeyError("non-canonical strkey encoding")
    return decoded


def _decode_check(expected_version: int, text: str) -> bytes:
    decoded = _b32decode(text)
    if not decoded:
        raise InvalidStrKeyError()

    version = decoded[0]
    expected_len = _MUXED_DECODED_LEN if version == MUXED_ACCOUNT_VERSION_BYTE else _FIXED_DECODED_LEN
    if len(decoded) != expected_len:
        raise InvalidStrKeyError(details={"length": len(decoded)})

    data, checksum = decoded[:-2], decoded[-2:]
    if calculate_checksum(data) != checksum:
        raise InvalidStrKeyChecksumError()
    if version != expected_version:
        raise InvalidStrKeyVersionByteError(details={"expected": expected_version, "actual": version})
    return data[1:]


def encode_account_id(key: bytes) -> str:
    return _encode_check(ACCOUNT_ID_VERSION_BYTE, key)


def decode_account_id(text: str) -> bytes:
    return _decode_check(ACCOUNT_ID_VERSION_BYTE, text)


def encode_muxed_account(key: bytes, id: int) -> str:
    """Encode a muxed account: 8-byte big-endian id followed by the key."""
    return _encode_check(MUXED_ACCOUNT_VERSION_BYTE, struct.pack(">Q", id) + key)


def decode_muxed_account(text: str) -> Tuple[bytes, int]:
    """
    Decode a muxed account address.

    Returns:
        (32-byte key, 64-bit id)
    """
    data = _decode_check(MUXED_ACCOUNT_VERSION_BYTE, text)
    id = struct.unpack(">Q", data[:8])[0]
    return data[8:], id


def encode_secret_seed(seed: bytes) -> str:
    return _encode_check(SECRET_SEED_VERSION_BYTE, seed)


def decode_secret_seed(text: str) -> bytes:
    return _decode_check(SECRET_SEED_VERSION_BYTE, text)


def encode_pre_auth_tx(hash: bytes) -> str:
    return _encode_check(PRE_AUTH_TX_VERSION_BYTE, hash)


def decode_pre_auth_tx(text: str) -> bytes:
    return _decode_check(PRE_AUTH_TX_VERSION_BYTE, text)


def encode_sha256_hash(hash: bytes) -> str:
    return _encode_check(SHA256_HASH_VERSION_BYTE, hash)


def decode_sha256_hash(text: str) -> bytes:
    return _decode_check(SHA256_HASH_VERSION_BYTE, text)
