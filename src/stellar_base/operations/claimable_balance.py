"""
Claimable balance operations.
"""

from __future__ import annotations
from typing import Iterable, Optional, Tuple

from ..amount import Stroops, StroopsLike, to_stroops
from ..asset import Asset
from ..claim import ClaimableBalanceId, Claimant
from ..codec import XdrReader, XdrWriter
from ..crypto.muxed import MuxedAccount
from ..errors import InvalidOperationError
from .base import Operation, OperationBuilder, OperationType
from .registry import register_operation

MAX_CLAIMANTS = 10


class CreateClaimableBalanceOperation(Operation):
    """Move ``amount`` of ``asset`` into a balance claimable by ``claimants``."""

    type_code = OperationType.CREATE_CLAIMABLE_BALANCE

    asset: Asset
    amount: Stroops
    claimants: Tuple[Claimant, ...]

    def write_body(self, writer: XdrWriter) -> None:
        self.asset.write_xdr(writer)
        self.amount.write_xdr_int64(writer)
        writer.array(self.claimants, lambda c: c.write_xdr(writer), MAX_CLAIMANTS)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> CreateClaimableBalanceOperation:
        asset = Asset.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        claimants = reader.array(lambda: Claimant.read_xdr(reader), MAX_CLAIMANTS)
        return cls(source_account=source_account, asset=asset, amount=amount,
                   claimants=tuple(claimants))


class CreateClaimableBalanceOperationBuilder(OperationBuilder[CreateClaimableBalanceOperation]):
    """Builder for CreateClaimableBalance operations."""

    def __init__(self):
        super().__init__()
        self._fields["claimants"] = ()

    def with_asset(self, asset: Asset) -> CreateClaimableBalanceOperationBuilder:
        return self.with_field("asset", asset)

    def with_amount(self, amount: StroopsLike) -> CreateClaimableBalanceOperationBuilder:
        return self.with_field("amount", to_stroops(amount))

    def with_claimants(self, claimants: Iterable[Claimant]) -> CreateClaimableBalanceOperationBuilder:
        return self.with_field("claimants", tuple(claimants))

    def add_claimant(self, claimant: Claimant) -> CreateClaimableBalanceOperationBuilder:
        return self.with_field("claimants", self._fields["claimants"] + (claimant,))

    def validate(self) -> None:
        self.require("asset", "missing create claimable balance asset")
        self.require("amount", "missing create claimable balance amount")
        claimants = self._fields["claimants"]
        if not claimants:
            raise InvalidOperationError("missing create claimable balance claimants")
        if len(claimants) > MAX_CLAIMANTS:
            raise InvalidOperationError("create claimable balance has too many claimants")


class ClaimClaimableBalanceOperation(Operation):
    """Claim a claimable balance into the source account."""

    type_code = OperationType.CLAIM_CLAIMABLE_BALANCE

    balance_id: ClaimableBalanceId

    def write_body(self, writer: XdrWriter) -> None:
        self.balance_id.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> ClaimClaimableBalanceOperation:
        return cls(source_account=source_account, balance_id=ClaimableBalanceId.read_xdr(reader))


class ClaimClaimableBalanceOperationBuilder(OperationBuilder[ClaimClaimableBalanceOperation]):
    """Builder for ClaimClaimableBalance operations."""

    def with_claimable_balance_id(self, balance_id: ClaimableBalanceId) -> ClaimClaimableBalanceOperationBuilder:
        return self.with_field("balance_id", balance_id)

    def validate(self) -> None:
        self.require("balance_id", "missing claim claimable balance id")


class ClawbackClaimableBalanceOperation(Operation):
    """Claw back a claimable balance of an asset issued by the source."""

    type_code = OperationType.CLAWBACK_CLAIMABLE_BALANCE

    balance_id: ClaimableBalanceId

    def write_body(self, writer: XdrWriter) -> None:
        self.balance_id.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> ClawbackClaimableBalanceOperation:
        return cls(source_account=source_account, balance_id=ClaimableBalanceId.read_xdr(reader))


class ClawbackClaimableBalanceOperationBuilder(OperationBuilder[ClawbackClaimableBalanceOperation]):
    """Builder for ClawbackClaimableBalance operations."""

    def with_claimable_balance_id(self, balance_id: ClaimableBalanceId) -> ClawbackClaimableBalanceOperationBuilder:
        return self.with_field("balance_id", balance_id)

    def validate(self) -> None:
        self.require("balance_id", "missing balance id for clawback claimable balance operation")


register_operation(CreateClaimableBalanceOperation, CreateClaimableBalanceOperationBuilder)
register_operation(ClaimClaimableBalanceOperation, ClaimClaimableBalanceOperationBuilder)
register_operation(ClawbackClaimableBalanceOperation, ClawbackClaimableBalanceOperationBuilder)
