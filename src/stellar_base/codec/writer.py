"""
XDR Writer

Implements the XDR (RFC 4506) primitive encodings used by the network:
big-endian integers, 4-byte aligned opaque data and strings, optionals and
variable-length arrays.
"""

import struct
from typing import Any, Callable, List, Optional, Sequence

from ..errors import XdrError

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT32_MAX = (1 << 32) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1


def padding_len(n: int) -> int:
    """Number of zero bytes needed to align n bytes to 4."""
    return (4 - n % 4) % 4


class XdrWriter:
    """
    XDR writer accumulating encoded bytes.

    Every value type in the library encodes itself by calling these
    primitives once per field, in schema order.
    """

    def __init__(self):
        self._bb: List[bytes] = []

    def _check_range(self, v: int, lo: int, hi: int, kind: str) -> None:
        if not isinstance(v, int) or isinstance(v, bool):
            raise XdrError(f"{kind} value must be an int, got {type(v).__name__}")
        if v < lo or v > hi:
            raise XdrError(f"{kind} value out of range: {v}")

    def int32(self, v: int) -> None:
        """Write signed 32-bit integer."""
        self._check_range(v, INT32_MIN, INT32_MAX, "int32")
        self._bb.append(struct.pack(">i", v))

    def uint32(self, v: int) -> None:
        """Write unsigned 32-bit integer."""
        self._check_range(v, 0, UINT32_MAX, "uint32")
        self._bb.append(struct.pack(">I", v))

    def int64(self, v: int) -> None:
        """Write signed 64-bit integer."""
        self._check_range(v, INT64_MIN, INT64_MAX, "int64")
        self._bb.append(struct.pack(">q", v))

    def uint64(self, v: int) -> None:
        """Write unsigned 64-bit integer."""
        self._check_range(v, 0, UINT64_MAX, "uint64")
        self._bb.append(struct.pack(">Q", v))

    def bool(self, v: bool) -> None:
        self.uint32(1 if v else 0)

    def opaque_fixed(self, v: bytes, n: int) -> None:
        """
        Write fixed-length opaque data.

        Args:
            v: Data, must be exactly n bytes
            n: Declared length
        """
        if len(v) != n:
            raise XdrError(f"fixed opaque must be {n} bytes, got {len(v)}")
        self._bb.append(bytes(v))
        self._bb.append(b"\x00" * padding_len(n))

    def opaque_var(self, v: bytes, max_len: Optional[int] = None) -> None:
        """
        Write variable-length opaque data with a 4-byte length prefix.

        Args:
            v: Data to write
            max_len: Declared maximum length, if any
        """
        if max_len is not None and len(v) > max_len:
            raise XdrError(f"opaque longer than {max_len} bytes: {len(v)}")
        self.uint32(len(v))
        self._bb.append(bytes(v))
        self._bb.append(b"\x00" * padding_len(len(v)))

    def string(self, s: str, max_len: Optional[int] = None) -> None:
        """Write a UTF-8 string, max_len is in bytes."""
        self.opaque_var(s.encode("utf-8"), max_len)

    def optional(self, v: Optional[Any], write_fn: Callable[[Any], None]) -> None:
        """Write an optional value: a bool marker followed by the value if present."""
        if v is None:
            self.bool(False)
        else:
            self.bool(True)
            write_fn(v)

    def array(self, items: Sequence[Any], write_fn: Callable[[Any], None],
              max_len: Optional[int] = None) -> None:
        """Write a variable-length array with a 4-byte count prefix."""
        if max_len is not None and len(items) > max_len:
            raise XdrError(f"array longer than {max_len} items: {len(items)}")
        self.uint32(len(items))
        for item in items:
            write_fn(item)

    def to_bytes(self) -> bytes:
        """Return accumulated bytes."""
        return b"".join(self._bb)

    def __len__(self) -> int:
        return sum(len(chunk) for chunk in self._bb)
