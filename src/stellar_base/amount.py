"""
Fixed-point amounts, stroops and prices.

Amounts are decimals with exactly 7 fractional digits. Stroops are the
underlying signed 64-bit integer count. Prices are i32 fractions parsed from
decimal text with a bounded continued-fraction expansion.
"""

from __future__ import annotations
import re
from decimal import (
    Decimal,
    DecimalException,
    ROUND_DOWN,
    ROUND_FLOOR,
    localcontext,
)
from fractions import Fraction
from functools import total_ordering
from typing import Optional, Union

from .codec import XdrCodec, XdrReader, XdrWriter
from .codec.writer import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, UINT32_MAX
from .errors import (
    InvalidAmountScaleError,
    InvalidStroopsAmountError,
    NegativeStroopsError,
    ParseAmountError,
    ParsePriceError,
    XdrError,
)

STELLAR_SCALE = 7
STROOPS_PER_UNIT = 10 ** STELLAR_SCALE

# Decimal mantissa is bounded to 96 bits and scale to 28 digits.
MAX_MANTISSA = (1 << 96) - 1
MAX_DECIMAL_SCALE = 28
# Enough digits to represent any 96-bit mantissa product exactly.
_EXACT_PREC = 80

_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def _parse_decimal(text: str) -> Decimal:
    if not isinstance(text, str) or not _DECIMAL_RE.match(text):
        raise DecimalException(f"not a decimal number: {text!r}")
    return Decimal(text)


def _scale(d: Decimal) -> int:
    exponent = d.as_tuple().exponent
    return -exponent if exponent < 0 else 0


def _mantissa(d: Decimal) -> int:
    digits = d.as_tuple().digits
    return int("".join(str(x) for x in digits)) if digits else 0


def _bounded(d: Decimal) -> Optional[Decimal]:
    if not d.is_finite():
        return None
    if _scale(d) > MAX_DECIMAL_SCALE:
        with localcontext() as ctx:
            ctx.prec = _EXACT_PREC
            d = d.quantize(Decimal(1).scaleb(-MAX_DECIMAL_SCALE), rounding=ROUND_DOWN)
    if _mantissa(d) > MAX_MANTISSA:
        return None
    return d


@total_ordering
class Amount:
    """A decimal amount of an asset, at most 7 fractional digits."""

    __slots__ = ("_value",)

    def __init__(self, value: Decimal):
        self._value = value

    @classmethod
    def from_str(cls, text: str) -> Amount:
        """
        Parse a decimal string.

        Raises:
            ParseAmountError: If the text is not a decimal number
            InvalidAmountScaleError: If it has more than 7 fractional digits
        """
        try:
            value = _parse_decimal(text)
        except DecimalException as e:
            raise ParseAmountError(details={"input": text[:64] if isinstance(text, str) else text},
                                   cause=e)
        if _scale(value) > STELLAR_SCALE:
            raise InvalidAmountScaleError(details={"input": text})
        with localcontext() as ctx:
            ctx.prec = _EXACT_PREC
            value = value.quantize(Decimal(1).scaleb(-STELLAR_SCALE))
        if _mantissa(value) > MAX_MANTISSA:
            raise ParseAmountError("amount out of range", details={"input": text})
        return cls(value)

    @classmethod
    def from_stroops(cls, stroops: Stroops) -> Amount:
        return cls(Decimal(stroops.to_i64()).scaleb(-STELLAR_SCALE))

    @property
    def value(self) -> Decimal:
        return self._value

    @property
    def scale(self) -> int:
        return _scale(self._value)

    def to_stroops(self) -> Stroops:
        """
        Convert to stroops.

        Raises:
            InvalidAmountScaleError: If the scale is not exactly 7
            InvalidStroopsAmountError: If the result does not fit in an i64
        """
        if self.scale != STELLAR_SCALE:
            raise InvalidAmountScaleError()
        stroops = _mantissa(self._value)
        if self._value.is_signed():
            stroops = -stroops
        if stroops < INT64_MIN or stroops > INT64_MAX:
            raise InvalidStroopsAmountError(details={"amount": str(self)})
        return Stroops(stroops)

    def _exact(self, op, other: Amount) -> Optional[Amount]:
        with localcontext() as ctx:
            ctx.prec = _EXACT_PREC
            result = _bounded(op(self._value, other._value))
        return Amount(result) if result is not None else None

    def checked_add(self, other: Amount) -> Optional[Amount]:
        return self._exact(lambda a, b: a + b, other)

    def checked_sub(self, other: Amount) -> Optional[Amount]:
        return self._exact(lambda a, b: a - b, other)

    def checked_mul(self, other: Amount) -> Optional[Amount]:
        return self._exact(lambda a, b: a * b, other)

    def checked_div(self, other: Amount) -> Optional[Amount]:
        if other._value.is_zero():
            return None
        with localcontext() as ctx:
            ctx.prec = MAX_DECIMAL_SCALE
            result = _bounded(self._value / other._value)
        return Amount(result) if result is not None else None

    def checked_rem(self, other: Amount) -> Optional[Amount]:
        if other._value.is_zero():
            return None
        return self._exact(lambda a, b: a % b, other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Amount('{self._value}')"


@total_ordering
class Stroops:
    """Signed 64-bit count of the smallest currency unit."""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidStroopsAmountError(f"stroops must be an int, got {type(value).__name__}")
        if value < INT64_MIN or value > INT64_MAX:
            raise InvalidStroopsAmountError(details={"value": value})
        self._value = value

    @classmethod
    def max(cls) -> Stroops:
        return cls(INT64_MAX)

    def to_i64(self) -> int:
        return self._value

    @staticmethod
    def _checked(value: int) -> Optional[Stroops]:
        if value < INT64_MIN or value > INT64_MAX:
            return None
        return Stroops(value)

    def checked_add(self, other: Stroops) -> Optional[Stroops]:
        return self._checked(self._value + other._value)

    def checked_sub(self, other: Stroops) -> Optional[Stroops]:
        return self._checked(self._value - other._value)

    def checked_mul(self, other: Stroops) -> Optional[Stroops]:
        return self._checked(self._value * other._value)

    def checked_div(self, other: Stroops) -> Optional[Stroops]:
        """Integer division truncating toward zero."""
        if other._value == 0:
            return None
        q = abs(self._value) // abs(other._value)
        if (self._value < 0) != (other._value < 0):
            q = -q
        return self._checked(q)

    def checked_rem(self, other: Stroops) -> Optional[Stroops]:
        """Remainder with the sign of the dividend."""
        q = self.checked_div(other)
        if q is None:
            return None
        return self._checked(self._value - other._value * q._value)

    def write_xdr_int64(self, writer: XdrWriter) -> None:
        writer.int64(self._value)

    def write_xdr_uint32(self, writer: XdrWriter) -> None:
        if self._value < 0:
            raise NegativeStroopsError()
        if self._value > UINT32_MAX:
            raise XdrError(f"stroops value does not fit in uint32: {self._value}")
        writer.uint32(self._value)

    @classmethod
    def read_xdr_int64(cls, reader: XdrReader) -> Stroops:
        return cls(reader.int64())

    @classmethod
    def read_xdr_uint32(cls, reader: XdrReader) -> Stroops:
        return cls(reader.uint32())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Stroops):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: Stroops) -> bool:
        if not isinstance(other, Stroops):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Stroops({self._value})"


StroopsLike = Union[Stroops, Amount, int, str]


def to_stroops(value: StroopsLike) -> Stroops:
    """
    Coerce a builder argument into Stroops.

    Accepts Stroops, Amount, an int stroop count or a decimal amount string.

    Raises:
        InvalidStroopsAmountError: If the value cannot be represented
    """
    if isinstance(value, Stroops):
        return value
    try:
        if isinstance(value, Amount):
            return value.to_stroops()
        if isinstance(value, str):
            return Amount.from_str(value).to_stroops()
        return Stroops(value)
    except (InvalidAmountScaleError, ParseAmountError) as e:
        raise InvalidStroopsAmountError(details={"value": str(value)[:64]}, cause=e)


class Price(XdrCodec):
    """
    Price as a fraction of two i32 values.

    No reduction happens implicitly; ``reduced()`` returns the reduced form.
    """

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int):
        for v in (numerator, denominator):
            if not isinstance(v, int) or v < INT32_MIN or v > INT32_MAX:
                raise XdrError(f"price component out of int32 range: {v}")
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def reduced(self) -> Price:
        f = Fraction(self._numerator, self._denominator)
        return Price(f.numerator, f.denominator)

    @classmethod
    def from_str(cls, text: str) -> Price:
        """
        Best rational approximation of a decimal string within i32 range.

        Continued-fraction expansion that stops when the remainder is zero or
        the next convergent leaves the i32 range, so the amount of work is
        bounded by the i32 range rather than the length of the input.

        Raises:
            ParsePriceError: On malformed input or a degenerate result
        """
        if not text:
            raise ParsePriceError()
        max_i32 = Decimal(INT32_MAX)
        try:
            number = _parse_decimal(text)
            fractions = [(Decimal(0), Decimal(1)), (Decimal(1), Decimal(0))]
            with localcontext() as ctx:
                ctx.prec = MAX_DECIMAL_SCALE
                while True:
                    if number > max_i32:
                        break
                    whole = number.to_integral_value(rounding=ROUND_FLOOR)
                    fract = number - whole
                    h = whole * fractions[-1][0] + fractions[-2][0]
                    k = whole * fractions[-1][1] + fractions[-2][1]
                    if k >= max_i32 or h >= max_i32:
                        break
                    fractions.append((h, k))
                    if fract.is_zero():
                        break
                    number = 1 / fract
        except DecimalException as e:
            raise ParsePriceError(details={"input": text[:64]}, cause=e)

        numerator, denominator = fractions[-1]
        if numerator.is_zero() or denominator.is_zero():
            raise ParsePriceError(details={"input": text[:64]})
        try:
            return cls(int(numerator), int(denominator))
        except XdrError as e:
            raise ParsePriceError(details={"input": text[:64]}, cause=e)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(self._numerator)
        writer.int32(self._denominator)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Price:
        return cls(reader.int32(), reader.int32())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return (self._numerator, self._denominator) == (other._numerator, other._denominator)

    def __hash__(self) -> int:
        return hash((self._numerator, self._denominator))

    def __str__(self) -> str:
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Price({self._numerator}, {self._denominator})"
