"""
Payment operations: direct payments and path payments.
"""

from __future__ import annotations
from typing import Iterable, Optional, Tuple

from ..amount import Stroops, StroopsLike, to_stroops
from ..asset import Asset
from ..codec import XdrReader, XdrWriter
from ..crypto.muxed import MuxedAccount, MuxedAccountLike, to_muxed_account
from ..errors import InvalidOperationError
from .base import Operation, OperationBuilder, OperationType
from .registry import register_operation

MAX_PATH_LEN = 5


class PaymentOperation(Operation):
    """Send ``amount`` of ``asset`` to ``destination``."""

    type_code = OperationType.PAYMENT

    destination: MuxedAccount
    asset: Asset
    amount: Stroops

    def write_body(self, writer: XdrWriter) -> None:
        self.destination.write_xdr(writer)
        self.asset.write_xdr(writer)
        self.amount.write_xdr_int64(writer)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> PaymentOperation:
        destination = MuxedAccount.read_xdr(reader)
        asset = Asset.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        return cls(source_account=source_account, destination=destination, asset=asset, amount=amount)


class PaymentOperationBuilder(OperationBuilder[PaymentOperation]):
    """Builder for Payment operations."""

    def with_destination(self, destination: MuxedAccountLike) -> PaymentOperationBuilder:
        return self.with_field("destination", to_muxed_account(destination))

    def with_asset(self, asset: Asset) -> PaymentOperationBuilder:
        return self.with_field("asset", asset)

    def with_amount(self, amount: StroopsLike) -> PaymentOperationBuilder:
        return self.with_field("amount", to_stroops(amount))

    def validate(self) -> None:
        self.require("destination", "missing payment destination")
        self.require("amount", "missing payment amount")
        self.require("asset", "missing payment asset")


class _PathPaymentBuilder(OperationBuilder):
    """Shared setters of the two path payment builders."""

    label = ""

    def __init__(self):
        super().__init__()
        self._fields["path"] = ()

    def with_destination(self, destination: MuxedAccountLike):
        return self.with_field("destination", to_muxed_account(destination))

    def with_send_asset(self, asset: Asset):
        return self.with_field("send_asset", asset)

    def with_destination_asset(self, asset: Asset):
        return self.with_field("destination_asset", asset)

    def with_path(self, path: Iterable[Asset]):
        return self.with_field("path", tuple(path))

    def add_asset(self, asset: Asset):
        return self.with_field("path", self._fields["path"] + (asset,))

    def validate_path(self) -> None:
        if len(self._fields["path"]) > MAX_PATH_LEN:
            raise InvalidOperationError(f"{self.label} path too long")


class PathPaymentStrictReceiveOperation(Operation):
    """
    Path payment where the destination receives exactly ``destination_amount``.

    At most ``send_max`` of ``send_asset`` is debited from the source.
    """

    type_code = OperationType.PATH_PAYMENT_STRICT_RECEIVE

    destination: MuxedAccount
    send_asset: Asset
    send_max: Stroops
    destination_asset: Asset
    destination_amount: Stroops
    path: Tuple[Asset, ...] = ()

    def write_body(self, writer: XdrWriter) -> None:
        self.send_asset.write_xdr(writer)
        self.send_max.write_xdr_int64(writer)
        self.destination.write_xdr(writer)
        self.destination_asset.write_xdr(writer)
        self.destination_amount.write_xdr_int64(writer)
        writer.array(self.path, lambda a: a.write_xdr(writer), MAX_PATH_LEN)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> PathPaymentStrictReceiveOperation:
        send_asset = Asset.read_xdr(reader)
        send_max = Stroops.read_xdr_int64(reader)
        destination = MuxedAccount.read_xdr(reader)
        destination_asset = Asset.read_xdr(reader)
        destination_amount = Stroops.read_xdr_int64(reader)
        path = reader.array(lambda: Asset.read_xdr(reader), MAX_PATH_LEN)
        return cls(
            source_account=source_account,
            destination=destination,
            send_asset=send_asset,
            send_max=send_max,
            destination_asset=destination_asset,
            destination_amount=destination_amount,
            path=tuple(path),
        )


class PathPaymentStrictReceiveOperationBuilder(_PathPaymentBuilder):
    """Builder for PathPaymentStrictReceive operations."""

    label = "path payment strict receive"

    def with_send_max(self, amount: StroopsLike) -> PathPaymentStrictReceiveOperationBuilder:
        return self.with_field("send_max", to_stroops(amount))

    def with_destination_amount(self, amount: StroopsLike) -> PathPaymentStrictReceiveOperationBuilder:
        return self.with_field("destination_amount", to_stroops(amount))

    def validate(self) -> None:
        self.require("destination", "missing payment destination")
        self.require("send_asset", "missing path payment strict receive send asset")
        self.require("send_max", "missing path payment strict receive send max")
        self.require("destination_asset", "missing path payment strict receive destination asset")
        self.require("destination_amount", "missing path payment strict receive destination amount")
        self.validate_path()


class PathPaymentStrictSendOperation(Operation):
    """
    Path payment where the source sends exactly ``send_amount``.

    The destination must receive at least ``destination_min``.
    """

    type_code = OperationType.PATH_PAYMENT_STRICT_SEND

    destination: MuxedAccount
    send_asset: Asset
    send_amount: Stroops
    destination_asset: Asset
    destination_min: Stroops
    path: Tuple[Asset, ...] = ()

    def write_body(self, writer: XdrWriter) -> None:
        self.send_asset.write_xdr(writer)
        self.send_amount.write_xdr_int64(writer)
        self.destination.write_xdr(writer)
        self.destination_asset.write_xdr(writer)
        self.destination_min.write_xdr_int64(writer)
        writer.array(self.path, lambda a: a.write_xdr(writer), MAX_PATH_LEN)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> PathPaymentStrictSendOperation:
        send_asset = Asset.read_xdr(reader)
        send_amount = Stroops.read_xdr_int64(reader)
        destination = MuxedAccount.read_xdr(reader)
        destination_asset = Asset.read_xdr(reader)
        destination_min = Stroops.read_xdr_int64(reader)
        path = reader.array(lambda: Asset.read_xdr(reader), MAX_PATH_LEN)
        return cls(
            source_account=source_account,
            destination=destination,
            send_asset=send_asset,
            send_amount=send_amount,
            destination_asset=destination_asset,
            destination_min=destination_min,
            path=tuple(path),
        )


class PathPaymentStrictSendOperationBuilder(_PathPaymentBuilder):
    """Builder for PathPaymentStrictSend operations."""

    label = "path payment strict send"

    def with_send_amount(self, amount: StroopsLike) -> PathPaymentStrictSendOperationBuilder:
        return self.with_field("send_amount", to_stroops(amount))

    def with_destination_min(self, amount: StroopsLike) -> PathPaymentStrictSendOperationBuilder:
        return self.with_field("destination_min", to_stroops(amount))

    def validate(self) -> None:
        self.require("destination", "missing payment destination")
        self.require("send_asset", "missing path payment strict send send asset")
        self.require("send_amount", "missing path payment strict send send amount")
        self.require("destination_asset", "missing path payment strict send destination asset")
        self.require("destination_min", "missing path payment strict send destination min")
        self.validate_path()


register_operation(PaymentOperation, PaymentOperationBuilder)
register_operation(PathPaymentStrictReceiveOperation, PathPaymentStrictReceiveOperationBuilder)
register_operation(PathPaymentStrictSendOperation, PathPaymentStrictSendOperationBuilder)
