"""
Offer operations on the decentralized exchange.

An offer id of 0 on the wire means "create a new offer"; it is exposed as
``offer_id=None``.
"""

from __future__ import annotations
from typing import Optional

from ..amount import Price, Stroops, StroopsLike, to_stroops
from ..asset import Asset
from ..codec import XdrReader, XdrWriter
from ..crypto.muxed import MuxedAccount
from ..errors import InvalidOperationError
from .base import Operation, OperationBuilder, OperationType
from .registry import register_operation


def _read_offer_id(reader: XdrReader) -> Optional[int]:
    offer_id = reader.int64()
    return offer_id if offer_id != 0 else None


class ManageSellOfferOperation(Operation):
    """Create, update or delete an offer to sell ``amount`` of ``selling``."""

    type_code = OperationType.MANAGE_SELL_OFFER

    selling: Asset
    buying: Asset
    amount: Stroops
    price: Price
    offer_id: Optional[int] = None

    def write_body(self, writer: XdrWriter) -> None:
        self.selling.write_xdr(writer)
        self.buying.write_xdr(writer)
        self.amount.write_xdr_int64(writer)
        self.price.write_xdr(writer)
        writer.int64(self.offer_id or 0)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> ManageSellOfferOperation:
        selling = Asset.read_xdr(reader)
        buying = Asset.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        price = Price.read_xdr(reader)
        return cls(source_account=source_account, selling=selling, buying=buying,
                   amount=amount, price=price, offer_id=_read_offer_id(reader))


class ManageBuyOfferOperation(Operation):
    """Create, update or delete an offer to buy ``buy_amount`` of ``buying``."""

    type_code = OperationType.MANAGE_BUY_OFFER

    selling: Asset
    buying: Asset
    buy_amount: Stroops
    price: Price
    offer_id: Optional[int] = None

    def write_body(self, writer: XdrWriter) -> None:
        self.selling.write_xdr(writer)
        self.buying.write_xdr(writer)
        self.buy_amount.write_xdr_int64(writer)
        self.price.write_xdr(writer)
        writer.int64(self.offer_id or 0)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> ManageBuyOfferOperation:
        selling = Asset.read_xdr(reader)
        buying = Asset.read_xdr(reader)
        buy_amount = Stroops.read_xdr_int64(reader)
        price = Price.read_xdr(reader)
        return cls(source_account=source_account, selling=selling, buying=buying,
                   buy_amount=buy_amount, price=price, offer_id=_read_offer_id(reader))


class CreatePassiveSellOfferOperation(Operation):
    """Offer that does not take offers at the same price."""

    type_code = OperationType.CREATE_PASSIVE_SELL_OFFER

    selling: Asset
    buying: Asset
    amount: Stroops
    price: Price

    def write_body(self, writer: XdrWriter) -> None:
        self.selling.write_xdr(writer)
        self.buying.write_xdr(writer)
        self.amount.write_xdr_int64(writer)
        self.price.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> CreatePassiveSellOfferOperation:
        selling = Asset.read_xdr(reader)
        buying = Asset.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        return cls(source_account=source_account, selling=selling, buying=buying,
                   amount=amount, price=Price.read_xdr(reader))


class _OfferBuilder(OperationBuilder):
    """Setters shared by the offer builders."""

    label = ""
    amount_field = "amount"

    def with_selling_asset(self, asset: Asset):
        return self.with_field("selling", asset)

    def with_buying_asset(self, asset: Asset):
        return self.with_field("buying", asset)

    def with_price(self, price: Price):
        return self.with_field("price", price)

    def validate(self) -> None:
        self.require("selling", f"missing {self.label} selling asset")
        self.require("buying", f"missing {self.label} buying asset")
        self.require(self.amount_field, f"missing {self.label} amount")
        self.require("price", f"missing {self.label} price")
        offer_id = self.get_field("offer_id")
        if offer_id is not None and offer_id <= 0:
            raise InvalidOperationError(f"{self.label} offer_id must be positive")


class ManageSellOfferOperationBuilder(_OfferBuilder):
    """Builder for ManageSellOffer operations."""

    label = "manage sell offer"

    def with_amount(self, amount: StroopsLike) -> ManageSellOfferOperationBuilder:
        return self.with_field("amount", to_stroops(amount))

    def with_offer_id(self, offer_id: Optional[int]) -> ManageSellOfferOperationBuilder:
        return self.with_field("offer_id", offer_id)


class ManageBuyOfferOperationBuilder(_OfferBuilder):
    """Builder for ManageBuyOffer operations."""

    label = "manage buy offer"
    amount_field = "buy_amount"

    def with_buy_amount(self, amount: StroopsLike) -> ManageBuyOfferOperationBuilder:
        return self.with_field("buy_amount", to_stroops(amount))

    def with_offer_id(self, offer_id: Optional[int]) -> ManageBuyOfferOperationBuilder:
        return self.with_field("offer_id", offer_id)


class CreatePassiveSellOfferOperationBuilder(_OfferBuilder):
    """Builder for CreatePassiveSellOffer operations."""

    label = "create passive sell offer"

    def with_amount(self, amount: StroopsLike) -> CreatePassiveSellOfferOperationBuilder:
        return self.with_field("amount", to_stroops(amount))


register_operation(ManageSellOfferOperation, ManageSellOfferOperationBuilder)
register_operation(ManageBuyOfferOperation, ManageBuyOfferOperationBuilder)
register_operation(CreatePassiveSellOfferOperation, CreatePassiveSellOfferOperationBuilder)
