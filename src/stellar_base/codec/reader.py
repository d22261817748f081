"""
XDR Reader

Mirror of XdrWriter. Every read validates bounds, padding and declared
maximum lengths so malformed input fails at the first bad byte.
"""

import builtins
import struct
from typing import Any, Callable, List, Optional

from ..errors import XdrError
from .writer import padding_len


class XdrReader:
    """XDR reader over an immutable byte buffer."""

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._off

    def _take(self, n: int) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise XdrError(f"unexpected end of data: wanted {n} bytes at offset {self._off}")
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def int32(self) -> int:
        return struct.unpack(">i", self._take(4))[0]

    def uint32(self) -> int:
        return struct.unpack(">I", self._take(4))[0]

    def int64(self) -> int:
        return struct.unpack(">q", self._take(8))[0]

    def uint64(self) -> int:
        return struct.unpack(">Q", self._take(8))[0]

    def bool(self) -> builtins.bool:
        v = self.uint32()
        if v not in (0, 1):
            raise XdrError(f"invalid bool value: {v}")
        return v == 1

    def _skip_padding(self, n: int) -> None:
        pad = self._take(padding_len(n))
        if any(pad):
            raise XdrError("non-zero padding bytes")

    def opaque_fixed(self, n: int) -> builtins.bytes:
        """Read n bytes of fixed-length opaque data plus padding."""
        out = self._take(n)
        self._skip_padding(n)
        return out

    def opaque_var(self, max_len: Optional[int] = None) -> builtins.bytes:
        """
        Read length-prefixed opaque data.

        Args:
            max_len: Declared maximum length, if any

        Returns:
            The data without padding
        """
        n = self.uint32()
        if max_len is not None and n > max_len:
            raise XdrError(f"opaque longer than {max_len} bytes: {n}")
        return self.opaque_fixed(n)

    def string(self, max_len: Optional[int] = None) -> str:
        raw = self.opaque_var(max_len)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise XdrError("string is not valid utf-8", cause=e)

    def optional(self, read_fn: Callable[[], Any]) -> Optional[Any]:
        if self.bool():
            return read_fn()
        return None

    def array(self, read_fn: Callable[[], Any], max_len: Optional[int] = None) -> List[Any]:
        n = self.uint32()
        if max_len is not None and n > max_len:
            raise XdrError(f"array longer than {max_len} items: {n}")
        # Each element takes at least 4 bytes; reject impossible counts early.
        if n * 4 > self.remaining:
            raise XdrError(f"array count {n} exceeds remaining data")
        return [read_fn() for _ in range(n)]

    def assert_done(self) -> None:
        """Raise if unread bytes remain."""
        if not self.eof:
            raise XdrError(f"{self.remaining} trailing bytes after xdr value")
