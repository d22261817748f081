"""
Cryptographic identity: keys, key pairs, muxed accounts and signatures.

Call ``init()`` once per process before generating keys from several
threads. It is idempotent and safe to call from any thread.
"""

import logging
import threading

from cryptography.hazmat.backends import default_backend

from ..errors import StellarBaseError
from .keypair import KeyPair, PublicKey, SecretKey
from .muxed import MuxedAccount, MuxedEd25519PublicKey, to_muxed_account
from .signature import DecoratedSignature, Signature, SignatureHint

logger = logging.getLogger(__name__)

_init_lock = threading.Lock()
_initialized = False


def init() -> None:
    """
    One-time initialization of the signature backend.

    Checks that the OpenSSL backend bundled with ``cryptography`` supports
    Ed25519 and warms up its random source by generating a throwaway key.

    Raises:
        StellarBaseError: If the backend lacks Ed25519 support
    """
    global _initialized
    with _init_lock:
        if _initialized:
            return
        if not default_backend().ed25519_supported():
            raise StellarBaseError("cryptography backend does not support Ed25519")
        KeyPair.random()
        _initialized = True
        logger.debug("ed25519 backend initialized: %s", default_backend().openssl_version_text())


def is_initialized() -> bool:
    return _initialized


__all__ = [
    "init",
    "is_initialized",
    "KeyPair",
    "PublicKey",
    "SecretKey",
    "MuxedAccount",
    "MuxedEd25519PublicKey",
    "to_muxed_account",
    "DecoratedSignature",
    "Signature",
    "SignatureHint",
]
