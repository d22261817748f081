"""
Trust line operations: establishing trust, authorization and clawback.
"""

from __future__ import annotations
from typing import Optional, Union

from pydantic import InstanceOf

from ..account import TrustLineFlags
from ..amount import Stroops, StroopsLike, to_stroops
from ..asset import (
    ASSET_TYPE_CREDIT_ALPHANUM4,
    ASSET_TYPE_CREDIT_ALPHANUM12,
    Asset,
    ChangeTrustAsset,
    asset_code_type,
    code_width,
    decode_asset_code,
    encode_asset_code,
)
from ..codec import XdrReader, XdrWriter
from ..crypto.keypair import PublicKey
from ..crypto.muxed import MuxedAccount, MuxedAccountLike, to_muxed_account
from ..errors import InvalidAssetCodeError, InvalidOperationError, XdrError
from .base import Operation, OperationBuilder, OperationType, to_public_key
from .registry import register_operation


class ChangeTrustOperation(Operation):
    """
    Create, update or delete a trust line.

    A limit of 0 deletes the trust line; it is exposed as ``limit=None``.
    """

    type_code = OperationType.CHANGE_TRUST

    line: ChangeTrustAsset
    limit: Optional[Stroops] = None

    def write_body(self, writer: XdrWriter) -> None:
        self.line.write_xdr(writer)
        writer.int64(self.limit.to_i64() if self.limit is not None else 0)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> ChangeTrustOperation:
        line = ChangeTrustAsset.read_xdr(reader)
        limit = reader.int64()
        return cls(source_account=source_account, line=line,
                   limit=Stroops(limit) if limit != 0 else None)


class ChangeTrustOperationBuilder(OperationBuilder[ChangeTrustOperation]):
    """Builder for ChangeTrust operations."""

    def with_asset(self, asset: Union[Asset, ChangeTrustAsset]) -> ChangeTrustOperationBuilder:
        if isinstance(asset, Asset):
            asset = ChangeTrustAsset.from_asset(asset)
        return self.with_field("line", asset)

    def with_limit(self, limit: Optional[StroopsLike]) -> ChangeTrustOperationBuilder:
        return self.with_field("limit", to_stroops(limit) if limit is not None else None)

    def validate(self) -> None:
        self.require("line", "missing change trust asset")
        limit = self.get_field("limit")
        if limit is not None and limit.to_i64() <= 0:
            raise InvalidOperationError("change trust limit must be positive")


class AllowTrustOperation(Operation):
    """
    Set the authorization of a trust line to an asset issued by the source.

    Only the asset code is carried; the issuer is the operation source.
    """

    type_code = OperationType.ALLOW_TRUST

    trustor: PublicKey
    asset_code: str
    authorize: InstanceOf[TrustLineFlags]

    def write_body(self, writer: XdrWriter) -> None:
        self.trustor.write_xdr(writer)
        asset_type = asset_code_type(self.asset_code)
        writer.int32(asset_type)
        writer.opaque_fixed(encode_asset_code(self.asset_code), code_width(asset_type))
        writer.uint32(self.authorize.bits)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> AllowTrustOperation:
        trustor = PublicKey.read_xdr(reader)
        asset_type = reader.int32()
        if asset_type not in (ASSET_TYPE_CREDIT_ALPHANUM4, ASSET_TYPE_CREDIT_ALPHANUM12):
            raise XdrError(f"unknown allow trust asset type: {asset_type}")
        asset_code = decode_asset_code(reader.opaque_fixed(code_width(asset_type)), asset_type)
        authorize = TrustLineFlags.from_bits(reader.uint32())
        return cls(source_account=source_account, trustor=trustor,
                   asset_code=asset_code, authorize=authorize)


class AllowTrustOperationBuilder(OperationBuilder[AllowTrustOperation]):
    """Builder for AllowTrust operations."""

    def with_trustor(self, trustor: Union[PublicKey, str]) -> AllowTrustOperationBuilder:
        return self.with_field("trustor", to_public_key(trustor))

    def with_asset(self, asset: Union[str, Asset]) -> AllowTrustOperationBuilder:
        """Accepts an asset code or a credit asset, whose issuer is ignored."""
        if isinstance(asset, Asset):
            if asset.is_native():
                raise InvalidAssetCodeError("allow trust needs a credit asset")
            asset = asset.as_credit().code
        asset_code_type(asset)
        return self.with_field("asset_code", asset)

    def with_authorize_flags(self, authorize: TrustLineFlags) -> AllowTrustOperationBuilder:
        return self.with_field("authorize", authorize)

    def validate(self) -> None:
        self.require("trustor", "missing allow trust trustor")
        self.require("asset_code", "missing allow trust asset")
        self.require("authorize", "missing allow trust authorize flags")


class SetTrustLineFlagsOperation(Operation):
    """Set and clear authorization flags on another account's trust line."""

    type_code = OperationType.SET_TRUST_LINE_FLAGS

    trustor: PublicKey
    asset: Asset
    clear_flags: InstanceOf[TrustLineFlags]
    set_flags: InstanceOf[TrustLineFlags]

    def write_body(self, writer: XdrWriter) -> None:
        self.trustor.write_xdr(writer)
        self.asset.write_xdr(writer)
        writer.uint32(self.clear_flags.bits)
        writer.uint32(self.set_flags.bits)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> SetTrustLineFlagsOperation:
        trustor = PublicKey.read_xdr(reader)
        asset = Asset.read_xdr(reader)
        clear_flags = TrustLineFlags.from_bits(reader.uint32())
        set_flags = TrustLineFlags.from_bits(reader.uint32())
        return cls(source_account=source_account, trustor=trustor, asset=asset,
                   clear_flags=clear_flags, set_flags=set_flags)


class SetTrustLineFlagsOperationBuilder(OperationBuilder[SetTrustLineFlagsOperation]):
    """Builder for SetTrustLineFlags operations."""

    def with_trustor(self, trustor: Union[PublicKey, str]) -> SetTrustLineFlagsOperationBuilder:
        return self.with_field("trustor", to_public_key(trustor))

    def with_asset(self, asset: Asset) -> SetTrustLineFlagsOperationBuilder:
        return self.with_field("asset", asset)

    def with_clear_flags(self, flags: TrustLineFlags) -> SetTrustLineFlagsOperationBuilder:
        return self.with_field("clear_flags", flags)

    def with_set_flags(self, flags: TrustLineFlags) -> SetTrustLineFlagsOperationBuilder:
        return self.with_field("set_flags", flags)

    def validate(self) -> None:
        if self.get_field("set_flags") is None and self.get_field("clear_flags") is None:
            raise InvalidOperationError(
                "either set or clear flags are needed for set trustline flags operation")
        self.require("trustor", "missing trustor for set trustline flags operation")
        self.require("asset", "missing asset for set trustline flags operation")
        if self.get_field("clear_flags") is None:
            self._fields["clear_flags"] = TrustLineFlags.empty()
        if self.get_field("set_flags") is None:
            self._fields["set_flags"] = TrustLineFlags.empty()


class ClawbackOperation(Operation):
    """Claw back ``amount`` of an asset issued by the source from ``from_account``."""

    type_code = OperationType.CLAWBACK

    asset: Asset
    from_account: MuxedAccount
    amount: Stroops

    def write_body(self, writer: XdrWriter) -> None:
        self.asset.write_xdr(writer)
        self.from_account.write_xdr(writer)
        self.amount.write_xdr_int64(writer)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> ClawbackOperation:
        asset = Asset.read_xdr(reader)
        from_account = MuxedAccount.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        return cls(source_account=source_account, asset=asset,
                   from_account=from_account, amount=amount)


class ClawbackOperationBuilder(OperationBuilder[ClawbackOperation]):
    """Builder for Clawback operations."""

    def with_asset(self, asset: Asset) -> ClawbackOperationBuilder:
        return self.with_field("asset", asset)

    def with_from(self, account: MuxedAccountLike) -> ClawbackOperationBuilder:
        return self.with_field("from_account", to_muxed_account(account))

    def with_amount(self, amount: StroopsLike) -> ClawbackOperationBuilder:
        return self.with_field("amount", to_stroops(amount))

    def validate(self) -> None:
        self.require("asset", "missing clawback asset")
        self.require("from_account", "missing clawback from account")
        self.require("amount", "missing clawback amount")


register_operation(ChangeTrustOperation, ChangeTrustOperationBuilder)
register_operation(AllowTrustOperation, AllowTrustOperationBuilder)
register_operation(SetTrustLineFlagsOperation, SetTrustLineFlagsOperationBuilder)
register_operation(ClawbackOperation, ClawbackOperationBuilder)
