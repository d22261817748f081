"""
Account operations: creation, merging, options, data entries and sequence bumps.
"""

from __future__ import annotations
from typing import Optional, Union

from pydantic import InstanceOf

from ..account import AccountFlags, DataValue
from ..amount import Stroops, StroopsLike, to_stroops
from ..codec import XdrReader, XdrWriter
from ..crypto.keypair import PublicKey
from ..crypto.muxed import MuxedAccount, MuxedAccountLike, to_muxed_account
from ..errors import HomeDomainTooLongError, InvalidOperationError
from ..signature import Signer
from .base import Operation, OperationBuilder, OperationType, to_public_key
from .registry import register_operation

HOME_DOMAIN_MAX_LEN = 32
DATA_NAME_MAX_LEN = 64


class CreateAccountOperation(Operation):
    """Create and fund a new account."""

    type_code = OperationType.CREATE_ACCOUNT

    destination: PublicKey
    starting_balance: Stroops

    def write_body(self, writer: XdrWriter) -> None:
        self.destination.write_xdr(writer)
        self.starting_balance.write_xdr_int64(writer)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> CreateAccountOperation:
        destination = PublicKey.read_xdr(reader)
        starting_balance = Stroops.read_xdr_int64(reader)
        return cls(source_account=source_account, destination=destination,
                   starting_balance=starting_balance)


class CreateAccountOperationBuilder(OperationBuilder[CreateAccountOperation]):
    """Builder for CreateAccount operations."""

    def with_destination(self, destination: Union[PublicKey, str]) -> CreateAccountOperationBuilder:
        return self.with_field("destination", to_public_key(destination))

    def with_starting_balance(self, amount: StroopsLike) -> CreateAccountOperationBuilder:
        return self.with_field("starting_balance", to_stroops(amount))

    def validate(self) -> None:
        self.require("destination", "missing create account destination")
        self.require("starting_balance", "missing create account starting balance")


class AccountMergeOperation(Operation):
    """Merge the source account into ``destination``."""

    type_code = OperationType.ACCOUNT_MERGE

    destination: MuxedAccount

    def write_body(self, writer: XdrWriter) -> None:
        self.destination.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> AccountMergeOperation:
        return cls(source_account=source_account, destination=MuxedAccount.read_xdr(reader))


class AccountMergeOperationBuilder(OperationBuilder[AccountMergeOperation]):
    """Builder for AccountMerge operations."""

    def with_destination(self, destination: MuxedAccountLike) -> AccountMergeOperationBuilder:
        return self.with_field("destination", to_muxed_account(destination))

    def validate(self) -> None:
        self.require("destination", "missing account merge destination")


class SetOptionsOperation(Operation):
    """
    Change account options.

    Every field is optional; fields left as None are not changed.
    """

    type_code = OperationType.SET_OPTIONS

    inflation_destination: Optional[PublicKey] = None
    clear_flags: Optional[InstanceOf[AccountFlags]] = None
    set_flags: Optional[InstanceOf[AccountFlags]] = None
    master_weight: Optional[int] = None
    low_threshold: Optional[int] = None
    medium_threshold: Optional[int] = None
    high_threshold: Optional[int] = None
    home_domain: Optional[str] = None
    signer: Optional[Signer] = None

    def write_body(self, writer: XdrWriter) -> None:
        writer.optional(self.inflation_destination, lambda k: k.write_xdr(writer))
        writer.optional(self.clear_flags, lambda f: writer.uint32(f.bits))
        writer.optional(self.set_flags, lambda f: writer.uint32(f.bits))
        writer.optional(self.master_weight, writer.uint32)
        writer.optional(self.low_threshold, writer.uint32)
        writer.optional(self.medium_threshold, writer.uint32)
        writer.optional(self.high_threshold, writer.uint32)
        writer.optional(self.home_domain, lambda d: writer.string(d, HOME_DOMAIN_MAX_LEN))
        writer.optional(self.signer, lambda s: s.write_xdr(writer))

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> SetOptionsOperation:
        inflation_destination = reader.optional(lambda: PublicKey.read_xdr(reader))
        clear_flags = reader.optional(lambda: AccountFlags.from_bits(reader.uint32()))
        set_flags = reader.optional(lambda: AccountFlags.from_bits(reader.uint32()))
        master_weight = reader.optional(reader.uint32)
        low_threshold = reader.optional(reader.uint32)
        medium_threshold = reader.optional(reader.uint32)
        high_threshold = reader.optional(reader.uint32)
        home_domain = reader.optional(lambda: reader.string(HOME_DOMAIN_MAX_LEN))
        signer = reader.optional(lambda: Signer.read_xdr(reader))
        return cls(
            source_account=source_account,
            inflation_destination=inflation_destination,
            clear_flags=clear_flags,
            set_flags=set_flags,
            master_weight=master_weight,
            low_threshold=low_threshold,
            medium_threshold=medium_threshold,
            high_threshold=high_threshold,
            home_domain=home_domain,
            signer=signer,
        )


class SetOptionsOperationBuilder(OperationBuilder[SetOptionsOperation]):
    """Builder for SetOptions operations."""

    def with_inflation_destination(self, destination: Optional[Union[PublicKey, str]]) -> SetOptionsOperationBuilder:
        return self.with_field(
            "inflation_destination", to_public_key(destination) if destination is not None else None)

    def with_clear_flags(self, flags: Optional[AccountFlags]) -> SetOptionsOperationBuilder:
        return self.with_field("clear_flags", flags)

    def with_set_flags(self, flags: Optional[AccountFlags]) -> SetOptionsOperationBuilder:
        return self.with_field("set_flags", flags)

    def with_master_weight(self, weight: Optional[int]) -> SetOptionsOperationBuilder:
        return self.with_field("master_weight", weight)

    def with_low_threshold(self, weight: Optional[int]) -> SetOptionsOperationBuilder:
        return self.with_field("low_threshold", weight)

    def with_medium_threshold(self, weight: Optional[int]) -> SetOptionsOperationBuilder:
        return self.with_field("medium_threshold", weight)

    def with_high_threshold(self, weight: Optional[int]) -> SetOptionsOperationBuilder:
        return self.with_field("high_threshold", weight)

    def with_home_domain(self, home_domain: Optional[str]) -> SetOptionsOperationBuilder:
        return self.with_field("home_domain", home_domain)

    def with_signer(self, signer: Optional[Signer]) -> SetOptionsOperationBuilder:
        return self.with_field("signer", signer)

    def validate(self) -> None:
        home_domain = self.get_field("home_domain")
        if home_domain is not None and len(home_domain.encode("utf-8")) > HOME_DOMAIN_MAX_LEN:
            raise HomeDomainTooLongError(details={"home_domain": home_domain})
        for name in ("master_weight", "low_threshold", "medium_threshold", "high_threshold"):
            weight = self.get_field(name)
            if weight is not None and not 0 <= weight <= 0xFFFFFFFF:
                raise InvalidOperationError(f"set options {name} out of range")


class ManageDataOperation(Operation):
    """Set, modify or delete (``data_value`` None) an account data entry."""

    type_code = OperationType.MANAGE_DATA

    data_name: str
    data_value: Optional[DataValue] = None

    def write_body(self, writer: XdrWriter) -> None:
        writer.string(self.data_name, DATA_NAME_MAX_LEN)
        writer.optional(self.data_value, lambda v: v.write_xdr(writer))

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> ManageDataOperation:
        data_name = reader.string(DATA_NAME_MAX_LEN)
        data_value = reader.optional(lambda: DataValue.read_xdr(reader))
        return cls(source_account=source_account, data_name=data_name, data_value=data_value)


class ManageDataOperationBuilder(OperationBuilder[ManageDataOperation]):
    """Builder for ManageData operations."""

    def with_data_name(self, name: str) -> ManageDataOperationBuilder:
        return self.with_field("data_name", name)

    def with_data_value(self, value: Union[None, DataValue, bytes, str]) -> ManageDataOperationBuilder:
        if isinstance(value, str):
            value = DataValue.from_str(value)
        elif isinstance(value, bytes):
            value = DataValue(value)
        return self.with_field("data_value", value)

    def validate(self) -> None:
        name = self.require("data_name", "missing manage data data name")
        if len(name.encode("utf-8")) > DATA_NAME_MAX_LEN:
            raise InvalidOperationError("manage data data name too long")


class BumpSequenceOperation(Operation):
    """Bump the source account sequence number to ``bump_to``."""

    type_code = OperationType.BUMP_SEQUENCE

    bump_to: int

    def write_body(self, writer: XdrWriter) -> None:
        writer.int64(self.bump_to)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> BumpSequenceOperation:
        return cls(source_account=source_account, bump_to=reader.int64())


class BumpSequenceOperationBuilder(OperationBuilder[BumpSequenceOperation]):
    """Builder for BumpSequence operations."""

    def with_bump_to(self, bump_to: int) -> BumpSequenceOperationBuilder:
        return self.with_field("bump_to", bump_to)

    def validate(self) -> None:
        bump_to = self.require("bump_to", "missing bump sequence bump to")
        if bump_to < 0:
            raise InvalidOperationError("bump sequence bump to must be non negative")


class InflationOperation(Operation):
    """Run inflation. Has no body."""

    type_code = OperationType.INFLATION

    def write_body(self, writer: XdrWriter) -> None:
        pass

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> InflationOperation:
        return cls(source_account=source_account)


class InflationOperationBuilder(OperationBuilder[InflationOperation]):
    """Builder for Inflation operations."""


register_operation(CreateAccountOperation, CreateAccountOperationBuilder)
register_operation(AccountMergeOperation, AccountMergeOperationBuilder)
register_operation(SetOptionsOperation, SetOptionsOperationBuilder)
register_operation(ManageDataOperation, ManageDataOperationBuilder)
register_operation(BumpSequenceOperation, BumpSequenceOperationBuilder)
register_operation(InflationOperation, InflationOperationBuilder)
