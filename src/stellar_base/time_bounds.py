"""
Transaction time bounds.

Both bounds are optional. On the wire they are two uint64 unix timestamps
where 0 means "no bound", so a bound at the epoch itself is the same as no
bound and is stored as None.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

from .codec import XdrCodec, XdrReader, XdrWriter
from .errors import InvalidTimeBoundsError


def _normalize(dt: datetime) -> Optional[datetime]:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if dt.timestamp() < 0:
        raise InvalidTimeBoundsError("time bound before the unix epoch")
    dt = dt.replace(microsecond=0)
    return dt if dt.timestamp() > 0 else None


class TimeBounds(XdrCodec):
    """Validity window of a transaction."""

    def __init__(self, lower: Optional[datetime] = None, upper: Optional[datetime] = None):
        lower = _normalize(lower) if lower is not None else None
        upper = _normalize(upper) if upper is not None else None
        if lower is not None and upper is not None and upper < lower:
            raise InvalidTimeBoundsError(details={"lower": lower.isoformat(), "upper": upper.isoformat()})
        self._lower = lower
        self._upper = upper

    @classmethod
    def always_valid(cls) -> TimeBounds:
        return cls()

    @classmethod
    def valid_for(cls, duration: timedelta) -> TimeBounds:
        """Upper bound ``duration`` from now, no lower bound."""
        return cls(upper=datetime.now(timezone.utc) + duration)

    def with_lower(self, lower: datetime) -> TimeBounds:
        return TimeBounds(lower, self._upper)

    def with_upper(self, upper: datetime) -> TimeBounds:
        return TimeBounds(self._lower, upper)

    @property
    def lower(self) -> Optional[datetime]:
        return self._lower

    @property
    def upper(self) -> Optional[datetime]:
        return self._upper

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.uint64(int(self._lower.timestamp()) if self._lower else 0)
        writer.uint64(int(self._upper.timestamp()) if self._upper else 0)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> TimeBounds:
        min_time = reader.uint64()
        max_time = reader.uint64()
        try:
            lower = datetime.fromtimestamp(min_time, tz=timezone.utc) if min_time else None
            upper = datetime.fromtimestamp(max_time, tz=timezone.utc) if max_time else None
        except (OverflowError, ValueError, OSError) as e:
            raise InvalidTimeBoundsError("time bound out of range", cause=e)
        return cls(lower, upper)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TimeBounds):
            return False
        return self._lower == other._lower and self._upper == other._upper

    def __hash__(self) -> int:
        return hash((self._lower, self._upper))

    def __repr__(self) -> str:
        return f"TimeBounds(lower={self._lower!r}, upper={self._upper!r})"
