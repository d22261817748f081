"""
Tests for memos and transaction time bounds.
"""

from datetime import datetime, timedelta, timezone

import pytest

from stellar_base import Memo, TimeBounds
from stellar_base.errors import (
    InvalidMemoHashError,
    InvalidMemoReturnError,
    InvalidMemoTextError,
    InvalidTimeBoundsError,
    XdrError,
)


class TestMemo:
    """Test memo variants and their wire forms."""

    def test_none(self):
        memo = Memo.new_none()
        assert memo.is_none()
        assert memo.to_xdr_base64() == "AAAAAA=="

    def test_id(self):
        memo = Memo.new_id(18446744073709551615)
        assert memo.to_xdr_base64() == "AAAAAv//////////"
        assert Memo.from_xdr_base64("AAAAAv//////////").as_id() == 18446744073709551615

    def test_id_range(self):
        with pytest.raises(XdrError):
            Memo.new_id(-1)

    def test_hash(self):
        memo = Memo.new_hash(bytes(range(32)))
        assert memo.to_xdr_base64() == "AAAAAwABAgMEBQYHCAkKCwwNDg8QERITFBUWFxgZGhscHR4f"

    def test_short_hash_is_zero_padded(self):
        memo = Memo.new_hash(b"\x01\x02")
        assert memo.as_hash() == b"\x01\x02" + b"\x00" * 30

    def test_text(self):
        memo = Memo.new_text("hello")
        assert memo.as_text() == "hello"
        assert memo.as_id() is None
        assert Memo.from_xdr_bytes(memo.to_xdr_bytes()) == memo

    def test_text_limit_counts_bytes(self):
        Memo.new_text("x" * 28)
        with pytest.raises(InvalidMemoTextError):
            Memo.new_text("x" * 29)
        with pytest.raises(InvalidMemoTextError):
            Memo.new_text("é" * 15)

    def test_hash_and_return_limits(self):
        with pytest.raises(InvalidMemoHashError):
            Memo.new_hash(b"\x00" * 33)
        with pytest.raises(InvalidMemoReturnError):
            Memo.new_return(b"\x00" * 33)

    def test_unknown_memo_type(self):
        with pytest.raises(XdrError):
            Memo.from_xdr_bytes(b"\x00\x00\x00\x09")


class TestTimeBounds:
    """Test time bound construction and encoding."""

    def test_always_valid(self):
        bounds = TimeBounds.always_valid()
        assert bounds.lower is None
        assert bounds.upper is None
        assert bounds.to_xdr_bytes() == b"\x00" * 16

    def test_explicit_bounds(self):
        lower = datetime(2020, 1, 1, tzinfo=timezone.utc)
        upper = datetime(2020, 1, 2, tzinfo=timezone.utc)
        bounds = TimeBounds.always_valid().with_lower(lower).with_upper(upper)
        data = bounds.to_xdr_bytes()
        assert data[:8] == int(lower.timestamp()).to_bytes(8, "big")
        assert TimeBounds.from_xdr_bytes(data) == bounds

    def test_naive_datetimes_are_utc(self):
        bounds = TimeBounds(lower=datetime(2020, 1, 1))
        assert bounds.lower == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_valid_for(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        bounds = TimeBounds.valid_for(timedelta(minutes=5))
        assert bounds.lower is None
        assert before + timedelta(minutes=5) <= bounds.upper

    def test_upper_before_lower(self):
        with pytest.raises(InvalidTimeBoundsError):
            TimeBounds(datetime(2020, 1, 2), datetime(2020, 1, 1))

    def test_before_epoch(self):
        with pytest.raises(InvalidTimeBoundsError):
            TimeBounds(lower=datetime(1960, 1, 1, tzinfo=timezone.utc))

    def test_out_of_range_decode(self):
        with pytest.raises(InvalidTimeBoundsError):
            TimeBounds.from_xdr_bytes(b"\xff" * 8 + b"\x00" * 8)

    def test_epoch_bound_is_no_bound(self):
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        upper = datetime(2020, 1, 2, tzinfo=timezone.utc)
        bounds = TimeBounds(lower=epoch, upper=upper)
        assert bounds.lower is None
        assert bounds == TimeBounds(upper=upper)
        assert TimeBounds.from_xdr_bytes(bounds.to_xdr_bytes()) == bounds

    def test_sub_second_after_epoch_is_no_bound(self):
        bounds = TimeBounds.always_valid().with_lower(datetime(1970, 1, 1, 0, 0, 0, 500000))
        assert bounds.lower is None
        assert bounds.to_xdr_bytes() == b"\x00" * 16
