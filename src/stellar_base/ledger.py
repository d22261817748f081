"""
Ledger keys, used to name the ledger entry a sponsorship is revoked for.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Optional, Union

from .asset import Asset, TrustLineAsset
from .claim import ClaimableBalanceId
from .codec import XdrCodec, XdrReader, XdrWriter
from .crypto.keypair import PublicKey
from .errors import XdrError
from .liquidity_pool import LiquidityPoolId

DATA_NAME_MAX_LEN = 64


class LedgerEntryType(IntEnum):
    ACCOUNT = 0
    TRUSTLINE = 1
    OFFER = 2
    DATA = 3
    CLAIMABLE_BALANCE = 4
    LIQUIDITY_POOL = 5


class LedgerKey(XdrCodec):
    """Key of a ledger entry."""

    def __init__(self, kind: LedgerEntryType, account: Optional[PublicKey] = None,
                 asset: Optional[TrustLineAsset] = None, offer_id: Optional[int] = None,
                 data_name: Optional[str] = None,
                 balance_id: Optional[ClaimableBalanceId] = None,
                 pool_id: Optional[LiquidityPoolId] = None):
        self.kind = kind
        self.account = account
        self.asset = asset
        self.offer_id = offer_id
        self.data_name = data_name
        self.balance_id = balance_id
        self.pool_id = pool_id

    @classmethod
    def new_account(cls, account: PublicKey) -> LedgerKey:
        return cls(LedgerEntryType.ACCOUNT, account=account)

    @classmethod
    def new_trustline(cls, account: PublicKey, asset: Union[Asset, TrustLineAsset]) -> LedgerKey:
        if isinstance(asset, Asset):
            asset = TrustLineAsset.from_asset(asset)
        return cls(LedgerEntryType.TRUSTLINE, account=account, asset=asset)

    @classmethod
    def new_offer(cls, seller: PublicKey, offer_id: int) -> LedgerKey:
        return cls(LedgerEntryType.OFFER, account=seller, offer_id=offer_id)

    @classmethod
    def new_data(cls, account: PublicKey, data_name: str) -> LedgerKey:
        return cls(LedgerEntryType.DATA, account=account, data_name=data_name)

    @classmethod
    def new_claimable_balance(cls, balance_id: ClaimableBalanceId) -> LedgerKey:
        return cls(LedgerEntryType.CLAIMABLE_BALANCE, balance_id=balance_id)

    @classmethod
    def new_liquidity_pool(cls, pool_id: LiquidityPoolId) -> LedgerKey:
        return cls(LedgerEntryType.LIQUIDITY_POOL, pool_id=pool_id)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(int(self.kind))
        if self.kind == LedgerEntryType.ACCOUNT:
            self.account.write_xdr(writer)
        elif self.kind == LedgerEntryType.TRUSTLINE:
            self.account.write_xdr(writer)
            self.asset.write_xdr(writer)
        elif self.kind == LedgerEntryType.OFFER:
            self.account.write_xdr(writer)
            writer.int64(self.offer_id)
        elif self.kind == LedgerEntryType.DATA:
            self.account.write_xdr(writer)
            writer.string(self.data_name, DATA_NAME_MAX_LEN)
        elif self.kind == LedgerEntryType.CLAIMABLE_BALANCE:
            self.balance_id.write_xdr(writer)
        else:
            self.pool_id.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> LedgerKey:
        raw_kind = reader.int32()
        try:
            kind = LedgerEntryType(raw_kind)
        except ValueError as e:
            raise XdrError(f"unknown ledger entry type: {raw_kind}", cause=e)

        if kind == LedgerEntryType.ACCOUNT:
            return cls.new_account(PublicKey.read_xdr(reader))
        if kind == LedgerEntryType.TRUSTLINE:
            account = PublicKey.read_xdr(reader)
            return cls.new_trustline(account, TrustLineAsset.read_xdr(reader))
        if kind == LedgerEntryType.OFFER:
            seller = PublicKey.read_xdr(reader)
            return cls.new_offer(seller, reader.int64())
        if kind == LedgerEntryType.DATA:
            account = PublicKey.read_xdr(reader)
            return cls.new_data(account, reader.string(DATA_NAME_MAX_LEN))
        if kind == LedgerEntryType.CLAIMABLE_BALANCE:
            return cls.new_claimable_balance(ClaimableBalanceId.read_xdr(reader))
        return cls.new_liquidity_pool(LiquidityPoolId.read_xdr(reader))

    def _fields(self):
        return (self.kind, self.account, self.asset, self.offer_id, self.data_name,
                self.balance_id, self.pool_id)

    def __eq__(self, other) -> bool:
        return isinstance(other, LedgerKey) and self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __repr__(self) -> str:
        return f"LedgerKey({self.kind.name})"
