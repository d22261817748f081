"""
Transaction options.

Groups the settings a caller usually applies to every transaction it builds:
base fee, validity timeout and a text memo.
"""

from __future__ import annotations
from datetime import timedelta
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .amount import Stroops
from .memo import MAX_MEMO_TEXT_LEN, Memo
from .time_bounds import TimeBounds


class TransactionOptions(BaseModel):
    """
    Options applied by ``Transaction.builder_with_options``.

    Example:
        >>> options = TransactionOptions(base_fee=200, timeout=300)
        >>> options.time_bounds().upper is not None
        True
    """
    base_fee: int = Field(
        default=100,
        ge=100,
        alias="baseFee",
        description="Fee per operation in stroops"
    )
    timeout: Optional[int] = Field(
        default=None,
        gt=0,
        description="Seconds the transaction stays valid, unbounded when unset"
    )
    memo_text: Optional[str] = Field(
        default=None,
        alias="memoText",
        description="Text memo, at most 28 bytes of UTF-8"
    )

    model_config = {"populate_by_name": True}

    @field_validator('timeout', mode='before')
    @classmethod
    def parse_timeout(cls, v: Any) -> Any:
        """Accept a timedelta as well as a number of seconds."""
        if isinstance(v, timedelta):
            return int(v.total_seconds())
        return v

    @field_validator('memo_text')
    @classmethod
    def check_memo_text(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v.encode("utf-8")) > MAX_MEMO_TEXT_LEN:
            raise ValueError(f"memo text longer than {MAX_MEMO_TEXT_LEN} bytes")
        return v

    def stroops_base_fee(self) -> Stroops:
        return Stroops(self.base_fee)

    def time_bounds(self) -> Optional[TimeBounds]:
        """Time bounds ending ``timeout`` seconds from now, or None."""
        if self.timeout is None:
            return None
        return TimeBounds.valid_for(timedelta(seconds=self.timeout))

    def memo(self) -> Memo:
        if self.memo_text is None:
            return Memo.new_none()
        return Memo.new_text(self.memo_text)
