"""
Liquidity pool identifiers and parameters.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .codec import XdrCodec, XdrReader, XdrWriter
from .errors import InvalidLiquidityPoolIdLengthError, XdrError

if TYPE_CHECKING:
    from .asset import Asset

LIQUIDITY_POOL_CONSTANT_PRODUCT = 0
LIQUIDITY_POOL_FEE_V18 = 30
POOL_ID_LEN = 32


class LiquidityPoolId(XdrCodec):
    """32-byte liquidity pool hash."""

    def __init__(self, hash: bytes):
        if len(hash) != POOL_ID_LEN:
            raise InvalidLiquidityPoolIdLengthError(details={"length": len(hash)})
        self._hash = bytes(hash)

    @classmethod
    def from_hex(cls, hex_string: str) -> LiquidityPoolId:
        return cls(bytes.fromhex(hex_string))

    def as_bytes(self) -> bytes:
        return self._hash

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.opaque_fixed(self._hash, POOL_ID_LEN)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> LiquidityPoolId:
        return cls(reader.opaque_fixed(POOL_ID_LEN))

    def __eq__(self, other) -> bool:
        return isinstance(other, LiquidityPoolId) and self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)

    def __repr__(self) -> str:
        return f"LiquidityPoolId.from_hex('{self._hash.hex()}')"


class LiquidityPoolConstantFeeParameters(XdrCodec):
    """Constant product pool between two assets with a fee in basis points."""

    def __init__(self, asset_a: Asset, asset_b: Asset, fee: int = LIQUIDITY_POOL_FEE_V18):
        self.asset_a = asset_a
        self.asset_b = asset_b
        self.fee = fee

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(LIQUIDITY_POOL_CONSTANT_PRODUCT)
        self.asset_a.write_xdr(writer)
        self.asset_b.write_xdr(writer)
        writer.int32(self.fee)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> LiquidityPoolConstantFeeParameters:
        from .asset import Asset

        pool_type = reader.int32()
        if pool_type != LIQUIDITY_POOL_CONSTANT_PRODUCT:
            raise XdrError(f"unknown liquidity pool type: {pool_type}")
        asset_a = Asset.read_xdr(reader)
        asset_b = Asset.read_xdr(reader)
        return cls(asset_a, asset_b, reader.int32())

    def __eq__(self, other) -> bool:
        if not isinstance(other, LiquidityPoolConstantFeeParameters):
            return False
        return (self.asset_a, self.asset_b, self.fee) == (other.asset_a, other.asset_b, other.fee)

    def __hash__(self) -> int:
        return hash((self.asset_a, self.asset_b, self.fee))

    def __repr__(self) -> str:
        return f"LiquidityPoolConstantFeeParameters({self.asset_a!r}, {self.asset_b!r}, {self.fee})"
