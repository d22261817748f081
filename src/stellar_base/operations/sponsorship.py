"""
Sponsorship operations.

Begin and end sponsoring future reserves bracket the operations whose
reserves are paid by the sponsor. RevokeSponsorship targets either a ledger
entry or a signer of an account.
"""

from __future__ import annotations
from typing import Optional, Union

from pydantic import model_validator

from ..codec import XdrReader, XdrWriter
from ..crypto.keypair import PublicKey
from ..crypto.muxed import MuxedAccount
from ..errors import InvalidOperationError, XdrError
from ..ledger import LedgerKey
from ..signature import SignerKey
from .base import Operation, OperationBuilder, OperationType, to_public_key
from .registry import register_operation

REVOKE_SPONSORSHIP_LEDGER_ENTRY = 0
REVOKE_SPONSORSHIP_SIGNER = 1


class BeginSponsoringFutureReservesOperation(Operation):
    """Start paying the reserves of ``sponsored_id``."""

    type_code = OperationType.BEGIN_SPONSORING_FUTURE_RESERVES

    sponsored_id: PublicKey

    def write_body(self, writer: XdrWriter) -> None:
        self.sponsored_id.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> BeginSponsoringFutureReservesOperation:
        return cls(source_account=source_account, sponsored_id=PublicKey.read_xdr(reader))


class BeginSponsoringFutureReservesOperationBuilder(OperationBuilder[BeginSponsoringFutureReservesOperation]):
    """Builder for BeginSponsoringFutureReserves operations."""

    def with_sponsored_id(self, sponsored_id: Union[PublicKey, str]) -> BeginSponsoringFutureReservesOperationBuilder:
        return self.with_field("sponsored_id", to_public_key(sponsored_id))

    def validate(self) -> None:
        self.require("sponsored_id", "missing begin sponsoring future reserves sponsored_id")


class EndSponsoringFutureReservesOperation(Operation):
    """Stop sponsoring. Has no body."""

    type_code = OperationType.END_SPONSORING_FUTURE_RESERVES

    def write_body(self, writer: XdrWriter) -> None:
        pass

    @classmethod
    def read_body(cls, reader: XdrReader,
                  source_account: Optional[MuxedAccount]) -> EndSponsoringFutureReservesOperation:
        return cls(source_account=source_account)


class EndSponsoringFutureReservesOperationBuilder(OperationBuilder[EndSponsoringFutureReservesOperation]):
    """Builder for EndSponsoringFutureReserves operations."""


class RevokeSponsorshipOperation(Operation):
    """
    Revoke the sponsorship of a ledger entry or of a signer.

    Exactly one of ``ledger_key`` or (``signer_account``, ``signer_key``) is set.
    """

    type_code = OperationType.REVOKE_SPONSORSHIP

    ledger_key: Optional[LedgerKey] = None
    signer_account: Optional[PublicKey] = None
    signer_key: Optional[SignerKey] = None

    @model_validator(mode="after")
    def _check_target(self) -> RevokeSponsorshipOperation:
        has_ledger_key = self.ledger_key is not None
        has_signer = self.signer_account is not None or self.signer_key is not None
        if has_ledger_key == has_signer:
            raise InvalidOperationError("revoke sponsorship needs exactly one of a ledger key or a signer")
        if has_signer and (self.signer_account is None or self.signer_key is None):
            raise InvalidOperationError("revoke sponsorship signer needs both an account and a key")
        return self

    def write_body(self, writer: XdrWriter) -> None:
        if self.ledger_key is not None:
            writer.int32(REVOKE_SPONSORSHIP_LEDGER_ENTRY)
            self.ledger_key.write_xdr(writer)
        else:
            writer.int32(REVOKE_SPONSORSHIP_SIGNER)
            self.signer_account.write_xdr(writer)
            self.signer_key.write_xdr(writer)

    @classmethod
    def read_body(cls, reader: XdrReader, source_account: Optional[MuxedAccount]) -> RevokeSponsorshipOperation:
        kind = reader.int32()
        if kind == REVOKE_SPONSORSHIP_LEDGER_ENTRY:
            return cls(source_account=source_account, ledger_key=LedgerKey.read_xdr(reader))
        if kind == REVOKE_SPONSORSHIP_SIGNER:
            account = PublicKey.read_xdr(reader)
            return cls(source_account=source_account, signer_account=account,
                       signer_key=SignerKey.read_xdr(reader))
        raise XdrError(f"unknown revoke sponsorship type: {kind}")


class RevokeSponsorshipOperationBuilder(OperationBuilder[RevokeSponsorshipOperation]):
    """Builder for RevokeSponsorship operations. The last target set wins."""

    def with_ledger_key(self, ledger_key: LedgerKey) -> RevokeSponsorshipOperationBuilder:
        self._fields.pop("signer_account", None)
        self._fields.pop("signer_key", None)
        return self.with_field("ledger_key", ledger_key)

    def with_signer(self, account: Union[PublicKey, str], signer_key: SignerKey) -> RevokeSponsorshipOperationBuilder:
        self._fields.pop("ledger_key", None)
        self.with_field("signer_account", to_public_key(account))
        return self.with_field("signer_key", signer_key)

    def validate(self) -> None:
        if self.get_field("ledger_key") is None and self.get_field("signer_key") is None:
            raise InvalidOperationError("missing revoke sponsorship operation ledger key or signer")


register_operation(BeginSponsoringFutureReservesOperation, BeginSponsoringFutureReservesOperationBuilder)
register_operation(EndSponsoringFutureReservesOperation, EndSponsoringFutureReservesOperationBuilder)
register_operation(RevokeSponsorshipOperation, RevokeSponsorshipOperationBuilder)
