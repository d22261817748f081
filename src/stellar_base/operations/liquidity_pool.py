"""
Liquidity pool deposit and withdraw operations.
"""

from __future__ import annotations
from typing import Optional

from ..amount import Price, Stroops, StroopsLike, to_stroops
from ..codec import XdrReader, XdrWriter
from ..crypto.muxed import MuxedAccount
from ..liquidity_pool import LiquidityPoolId
from .base import Operation, OperationBuilder, OperationType
from .registry import register_operation


class LiquidityPoolDepositOperation(Operation):
    """Deposit up to the given amounts of both pool assets within a price range."""

    type_code = OperationType.LIQUIDITY_POOL_DEPOSIT

    liquidity_pool_id: LiquidityPoolId
    max_amount_a: Stroops
    max_amount_b: Stroops
    min_price: Price
    max_price: Price

    def write_body(self, writer: XdrWriter) -> None:
        self.liquidity_pool_id.write_xdr(writer)
        self.max_amount_a.write_xdr_int64(writer)
        self.max_amount_b.write_xdr_int64(writer)
        self.min_price.write_xdr(writer)
        self.max_price.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> LiquidityPoolDepositOperation:
        liquidity_pool_id = LiquidityPoolId.read_xdr(reader)
        max_amount_a = Stroops.read_xdr_int64(reader)
        max_amount_b = Stroops.read_xdr_int64(reader)
        min_price = Price.read_xdr(reader)
        max_price = Price.read_xdr(reader)
        return cls(
            source_account=source_account,
            liquidity_pool_id=liquidity_pool_id,
            max_amount_a=max_amount_a,
            max_amount_b=max_amount_b,
            min_price=min_price,
            max_price=max_price,
        )


class LiquidityPoolDepositOperationBuilder(OperationBuilder[LiquidityPoolDepositOperation]):
    """Builder for LiquidityPoolDeposit operations."""

    def with_liquidity_pool_id(self, pool_id: LiquidityPoolId) -> LiquidityPoolDepositOperationBuilder:
        return self.with_field("liquidity_pool_id", pool_id)

    def with_max_amount_a(self, amount: StroopsLike) -> LiquidityPoolDepositOperationBuilder:
        return self.with_field("max_amount_a", to_stroops(amount))

    def with_max_amount_b(self, amount: StroopsLike) -> LiquidityPoolDepositOperationBuilder:
        return self.with_field("max_amount_b", to_stroops(amount))

    def with_min_price(self, price: Price) -> LiquidityPoolDepositOperationBuilder:
        return self.with_field("min_price", price)

    def with_max_price(self, price: Price) -> LiquidityPoolDepositOperationBuilder:
        return self.with_field("max_price", price)

    def validate(self) -> None:
        self.require("liquidity_pool_id", "missing liquidity pool id for liquidity pool deposit operation")
        self.require("max_amount_a", "missing max amount for asset A for liquidity pool deposit operation")
        self.require("max_amount_b", "missing max amount for asset B for liquidity pool deposit operation")
        self.require("min_price", "missing min price for liquidity pool deposit operation")
        self.require("max_price", "missing max price for liquidity pool deposit operation")


class LiquidityPoolWithdrawOperation(Operation):
    """Withdraw ``amount`` pool shares for at least the given amounts of each asset."""

    type_code = OperationType.LIQUIDITY_POOL_WITHDRAW

    liquidity_pool_id: LiquidityPoolId
    amount: Stroops
    min_amount_a: Stroops
    min_amount_b: Stroops

    def write_body(self, writer: XdrWriter) -> None:
        self.liquidity_pool_id.write_xdr(writer)
        self.amount.write_xdr_int64(writer)
        self.min_amount_a.write_xdr_int64(writer)
        self.min_amount_b.write_xdr_int64(writer)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> LiquidityPoolWithdrawOperation:
        liquidity_pool_id = LiquidityPoolId.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        min_amount_a = Stroops.read_xdr_int64(reader)
        min_amount_b = Stroops.read_xdr_int64(reader)
        return cls(
            source_account=source_account,
            liquidity_pool_id=liquidity_pool_id,
            amount=amount,
            min_amount_a=min_amount_a,
            min_amount_b=min_amount_b,
        )


class LiquidityPoolWithdrawOperationBuilder(OperationBuilder[LiquidityPoolWithdrawOperation]):
    """Builder for LiquidityPoolWithdraw operations."""

    def with_liquidity_pool_id(self, pool_id: LiquidityPoolId) -> LiquidityPoolWithdrawOperationBuilder:
        return self.with_field("liquidity_pool_id", pool_id)

    def with_amount(self, amount: StroopsLike) -> LiquidityPoolWithdrawOperationBuilder:
        return self.with_field("amount", to_stroops(amount))

    def with_min_amount_a(self, amount: StroopsLike) -> LiquidityPoolWithdrawOperationBuilder:
        return self.with_field("min_amount_a", to_stroops(amount))

    def with_min_amount_b(self, amount: StroopsLike) -> LiquidityPoolWithdrawOperationBuilder:
        return self.with_field("min_amount_b", to_stroops(amount))

    def validate(self) -> None:
        self.require("liquidity_pool_id", "missing liquidity pool id for liquidity pool withdraw operation")
        self.require("amount", "missing amount for liquidity pool withdraw operation")
        self.require("min_amount_a", "missing min amount for asset A for liquidity pool withdraw operation")
        self.require("min_amount_b", "missing min amount for asset B for liquidity pool withdraw operation")


register_operation(LiquidityPoolDepositOperation, LiquidityPoolDepositOperationBuilder)
register_operation(LiquidityPoolWithdrawOperation, LiquidityPoolWithdrawOperationBuilder)
