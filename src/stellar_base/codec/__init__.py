"""
XDR Codec Module

Binary encoding/decoding of the network wire format.

Key components:
- writer.py: XDR primitive writer (big-endian, 4-byte aligned)
- reader.py: XDR primitive reader with bounds and padding checks
- xdr_codec.py: XdrCodec mixin adding bytes/base64 entry points to value types
- hashes.py: SHA-256 hashing helpers
"""

from .hashes import sha256_bytes
from .reader import XdrReader
from .writer import XdrWriter
from .xdr_codec import XdrCodec, decode_base64

__all__ = [
    "XdrReader",
    "XdrWriter",
    "XdrCodec",
    "decode_base64",
    "sha256_bytes",
]
