"""
Operation results.

An OperationResult is what the network reports for one operation of a
submitted transaction. Its outer code says whether the operation ran at all;
when it did (code INNER) the inner result carries the operation type, the
type-specific result code and, for some codes, a payload:

    PATH_PAYMENT_STRICT_RECEIVE/SEND  SUCCESS    PathPaymentSuccess
    PATH_PAYMENT_STRICT_RECEIVE/SEND  NO_ISSUER  Asset
    MANAGE_SELL/BUY_OFFER, CREATE_PASSIVE_SELL_OFFER  SUCCESS  ManageOfferSuccess
    ACCOUNT_MERGE                     SUCCESS    Stroops (source account balance)
    INFLATION                         SUCCESS    list of InflationPayout
    CREATE_CLAIMABLE_BALANCE          SUCCESS    ClaimableBalanceId

Every other code has no payload.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, InstanceOf, model_validator

from .amount import Price, Stroops
from .asset import Asset
from .claim import ClaimableBalanceId
from .codec import XdrCodec, XdrReader, XdrWriter
from .crypto.keypair import KEY_LEN, PublicKey
from .errors import XdrError
from .liquidity_pool import LiquidityPoolId
from .operations import OperationType


class OperationResultCode(IntEnum):
    INNER = 0
    BAD_AUTH = -1
    NO_ACCOUNT = -2
    NOT_SUPPORTED = -3
    TOO_MANY_SUBENTRIES = -4
    EXCEEDED_WORK_LIMIT = -5
    TOO_MANY_SPONSORING = -6


class CreateAccountResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    LOW_RESERVE = -3
    ALREADY_EXIST = -4


class PaymentResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    SRC_NO_TRUST = -3
    SRC_NOT_AUTHORIZED = -4
    NO_DESTINATION = -5
    NO_TRUST = -6
    NOT_AUTHORIZED = -7
    LINE_FULL = -8
    NO_ISSUER = -9


class PathPaymentStrictReceiveResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    SRC_NO_TRUST = -3
    SRC_NOT_AUTHORIZED = -4
    NO_DESTINATION = -5
    NO_TRUST = -6
    NOT_AUTHORIZED = -7
    LINE_FULL = -8
    NO_ISSUER = -9
    TOO_FEW_OFFERS = -10
    OFFER_CROSS_SELF = -11
    OVER_SENDMAX = -12


class PathPaymentStrictSendResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    SRC_NO_TRUST = -3
    SRC_NOT_AUTHORIZED = -4
    NO_DESTINATION = -5
    NO_TRUST = -6
    NOT_AUTHORIZED = -7
    LINE_FULL = -8
    NO_ISSUER = -9
    TOO_FEW_OFFERS = -10
    OFFER_CROSS_SELF = -11
    UNDER_DESTMIN = -12


class ManageOfferResultCode(IntEnum):
    """Shared by ManageSellOffer, ManageBuyOffer and CreatePassiveSellOffer."""

    SUCCESS = 0
    MALFORMED = -1
    SELL_NO_TRUST = -2
    BUY_NO_TRUST = -3
    SELL_NOT_AUTHORIZED = -4
    BUY_NOT_AUTHORIZED = -5
    LINE_FULL = -6
    UNDERFUNDED = -7
    CROSS_SELF = -8
    SELL_NO_ISSUER = -9
    BUY_NO_ISSUER = -10
    NOT_FOUND = -11
    LOW_RESERVE = -12


class SetOptionsResultCode(IntEnum):
    SUCCESS = 0
    LOW_RESERVE = -1
    TOO_MANY_SIGNERS = -2
    BAD_FLAGS = -3
    INVALID_INFLATION = -4
    CANT_CHANGE = -5
    UNKNOWN_FLAG = -6
    THRESHOLD_OUT_OF_RANGE = -7
    BAD_SIGNER = -8
    INVALID_HOME_DOMAIN = -9
    AUTH_REVOCABLE_REQUIRED = -10


class ChangeTrustResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_ISSUER = -2
    INVALID_LIMIT = -3
    LOW_RESERVE = -4
    SELF_NOT_ALLOWED = -5
    TRUST_LINE_MISSING = -6
    CANNOT_DELETE = -7
    NOT_AUTH_MAINTAIN_LIABILITIES = -8


class AllowTrustResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_TRUST_LINE = -2
    TRUST_NOT_REQUIRED = -3
    CANT_REVOKE = -4
    SELF_NOT_ALLOWED = -5
    LOW_RESERVE = -6


class AccountMergeResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_ACCOUNT = -2
    IMMUTABLE_SET = -3
    HAS_SUB_ENTRIES = -4
    SEQNUM_TOO_FAR = -5
    DEST_FULL = -6
    IS_SPONSOR = -7


class InflationResultCode(IntEnum):
    SUCCESS = 0
    NOT_TIME = -1


class ManageDataResultCode(IntEnum):
    SUCCESS = 0
    NOT_SUPPORTED_YET = -1
    NAME_NOT_FOUND = -2
    LOW_RESERVE = -3
    INVALID_NAME = -4


class BumpSequenceResultCode(IntEnum):
    SUCCESS = 0
    BAD_SEQ = -1


class CreateClaimableBalanceResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    LOW_RESERVE = -2
    NO_TRUST = -3
    NOT_AUTHORIZED = -4
    UNDERFUNDED = -5


class ClaimClaimableBalanceResultCode(IntEnum):
    SUCCESS = 0
    DOES_NOT_EXIST = -1
    CANNOT_CLAIM = -2
    LINE_FULL = -3
    NO_TRUST = -4
    NOT_AUTHORIZED = -5


class BeginSponsoringFutureReservesResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    ALREADY_SPONSORED = -2
    RECURSIVE = -3


class EndSponsoringFutureReservesResultCode(IntEnum):
    SUCCESS = 0
    NOT_SPONSORED = -1


class RevokeSponsorshipResultCode(IntEnum):
    SUCCESS = 0
    DOES_NOT_EXIST = -1
    NOT_SPONSOR = -2
    LOW_RESERVE = -3
    ONLY_TRANSFERABLE = -4
    MALFORMED = -5


class ClawbackResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NOT_CLAWBACK_ENABLED = -2
    NO_TRUST = -3
    UNDERFUNDED = -4


class ClawbackClaimableBalanceResultCode(IntEnum):
    SUCCESS = 0
    DOES_NOT_EXIST = -1
    NOT_ISSUER = -2
    NOT_CLAWBACK_ENABLED = -3


class SetTrustLineFlagsResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_TRUST_LINE = -2
    CANT_REVOKE = -3
    INVALID_STATE = -4
    LOW_RESERVE = -5


class LiquidityPoolDepositResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_TRUST = -2
    NOT_AUTHORIZED = -3
    UNDERFUNDED = -4
    LINE_FULL = -5
    BAD_PRICE = -6
    POOL_FULL = -7


class LiquidityPoolWithdrawResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_TRUST = -2
    UNDERFUNDED = -3
    LINE_FULL = -4
    UNDER_MINIMUM = -5


RESULT_CODES: Dict[OperationType, Type[IntEnum]] = {
    OperationType.CREATE_ACCOUNT: CreateAccountResultCode,
    OperationType.PAYMENT: PaymentResultCode,
    OperationType.PATH_PAYMENT_STRICT_RECEIVE: PathPaymentStrictReceiveResultCode,
    OperationType.MANAGE_SELL_OFFER: ManageOfferResultCode,
    OperationType.CREATE_PASSIVE_SELL_OFFER: ManageOfferResultCode,
    OperationType.SET_OPTIONS: SetOptionsResultCode,
    OperationType.CHANGE_TRUST: ChangeTrustResultCode,
    OperationType.ALLOW_TRUST: AllowTrustResultCode,
    OperationType.ACCOUNT_MERGE: AccountMergeResultCode,
    OperationType.INFLATION: InflationResultCode,
    OperationType.MANAGE_DATA: ManageDataResultCode,
    OperationType.BUMP_SEQUENCE: BumpSequenceResultCode,
    OperationType.MANAGE_BUY_OFFER: ManageOfferResultCode,
    OperationType.PATH_PAYMENT_STRICT_SEND: PathPaymentStrictSendResultCode,
    OperationType.CREATE_CLAIMABLE_BALANCE: CreateClaimableBalanceResultCode,
    OperationType.CLAIM_CLAIMABLE_BALANCE: ClaimClaimableBalanceResultCode,
    OperationType.BEGIN_SPONSORING_FUTURE_RESERVES: BeginSponsoringFutureReservesResultCode,
    OperationType.END_SPONSORING_FUTURE_RESERVES: EndSponsoringFutureReservesResultCode,
    OperationType.REVOKE_SPONSORSHIP: RevokeSponsorshipResultCode,
    OperationType.CLAWBACK: ClawbackResultCode,
    OperationType.CLAWBACK_CLAIMABLE_BALANCE: ClawbackClaimableBalanceResultCode,
    OperationType.SET_TRUST_LINE_FLAGS: SetTrustLineFlagsResultCode,
    OperationType.LIQUIDITY_POOL_DEPOSIT: LiquidityPoolDepositResultCode,
    OperationType.LIQUIDITY_POOL_WITHDRAW: LiquidityPoolWithdrawResultCode,
}


class _ResultModel(BaseModel, XdrCodec):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class ClaimAtomType(IntEnum):
    V0 = 0
    ORDER_BOOK = 1
    LIQUIDITY_POOL = 2


class ClaimAtom(_ResultModel):
    """
    One trade against an offer or a liquidity pool.

    Order book atoms (V0 and ORDER_BOOK) set ``seller`` and ``offer_id``;
    liquidity pool atoms set ``pool_id``. V0 stores the seller as a bare
    ed25519 key, ORDER_BOOK as an account id; both decode to a PublicKey.
    """

    kind: InstanceOf[ClaimAtomType]
    seller: Optional[PublicKey] = None
    offer_id: Optional[int] = None
    pool_id: Optional[LiquidityPoolId] = None
    asset_sold: Asset
    amount_sold: Stroops
    asset_bought: Asset
    amount_bought: Stroops

    @model_validator(mode="after")
    def _check_kind(self) -> ClaimAtom:
        if self.kind == ClaimAtomType.LIQUIDITY_POOL:
            if self.pool_id is None:
                raise XdrError("liquidity pool claim atom needs a pool id")
        elif self.seller is None or self.offer_id is None:
            raise XdrError("order book claim atom needs a seller and an offer id")
        return self

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(int(self.kind))
        if self.kind == ClaimAtomType.V0:
            writer.opaque_fixed(self.seller.as_bytes(), KEY_LEN)
            writer.int64(self.offer_id)
        elif self.kind == ClaimAtomType.ORDER_BOOK:
            self.seller.write_xdr(writer)
            writer.int64(self.offer_id)
        else:
            self.pool_id.write_xdr(writer)
        self.asset_sold.write_xdr(writer)
        self.amount_sold.write_xdr_int64(writer)
        self.asset_bought.write_xdr(writer)
        self.amount_bought.write_xdr_int64(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> ClaimAtom:
        raw_kind = reader.int32()
        try:
            kind = ClaimAtomType(raw_kind)
        except ValueError as e:
            raise XdrError(f"unknown claim atom type: {raw_kind}", cause=e)

        fields: Dict[str, Any] = {"kind": kind}
        if kind == ClaimAtomType.V0:
            fields["seller"] = PublicKey(reader.opaque_fixed(KEY_LEN))
            fields["offer_id"] = reader.int64()
        elif kind == ClaimAtomType.ORDER_BOOK:
            fields["seller"] = PublicKey.read_xdr(reader)
            fields["offer_id"] = reader.int64()
        else:
            fields["pool_id"] = LiquidityPoolId.read_xdr(reader)
        fields["asset_sold"] = Asset.read_xdr(reader)
        fields["amount_sold"] = Stroops.read_xdr_int64(reader)
        fields["asset_bought"] = Asset.read_xdr(reader)
        fields["amount_bought"] = Stroops.read_xdr_int64(reader)
        return cls(**fields)


def _write_claim_atoms(writer: XdrWriter, atoms: List[ClaimAtom]) -> None:
    writer.array(atoms, lambda atom: atom.write_xdr(writer))


def _read_claim_atoms(reader: XdrReader) -> List[ClaimAtom]:
    return reader.array(lambda: ClaimAtom.read_xdr(reader))


class SimplePaymentResult(_ResultModel):
    """Final hop of a path payment."""

    destination: PublicKey
    asset: Asset
    amount: Stroops

    def write_xdr(self, writer: XdrWriter) -> None:
        self.destination.write_xdr(writer)
        self.asset.write_xdr(writer)
        self.amount.write_xdr_int64(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> SimplePaymentResult:
        destination = PublicKey.read_xdr(reader)
        asset = Asset.read_xdr(reader)
        return cls(destination=destination, asset=asset, amount=Stroops.read_xdr_int64(reader))


class PathPaymentSuccess(_ResultModel):
    """Offers crossed by a path payment and what the destination received."""

    offers: List[ClaimAtom]
    last: SimplePaymentResult

    def write_xdr(self, writer: XdrWriter) -> None:
        _write_claim_atoms(writer, self.offers)
        self.last.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> PathPaymentSuccess:
        offers = _read_claim_atoms(reader)
        return cls(offers=offers, last=SimplePaymentResult.read_xdr(reader))


class OfferEntry(_ResultModel):
    """An offer as stored in the ledger."""

    seller: PublicKey
    offer_id: int
    selling: Asset
    buying: Asset
    amount: Stroops
    price: Price
    flags: int

    def write_xdr(self, writer: XdrWriter) -> None:
        self.seller.write_xdr(writer)
        writer.int64(self.offer_id)
        self.selling.write_xdr(writer)
        self.buying.write_xdr(writer)
        self.amount.write_xdr_int64(writer)
        self.price.write_xdr(writer)
        writer.uint32(self.flags)
        writer.int32(0)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> OfferEntry:
        seller = PublicKey.read_xdr(reader)
        offer_id = reader.int64()
        selling = Asset.read_xdr(reader)
        buying = Asset.read_xdr(reader)
        amount = Stroops.read_xdr_int64(reader)
        price = Price.read_xdr(reader)
        flags = reader.uint32()
        ext = reader.int32()
        if ext != 0:
            raise XdrError(f"unsupported offer entry extension version: {ext}")
        return cls(seller=seller, offer_id=offer_id, selling=selling, buying=buying,
                   amount=amount, price=price, flags=flags)


class ManageOfferEffect(IntEnum):
    CREATED = 0
    UPDATED = 1
    DELETED = 2


class ManageOfferSuccess(_ResultModel):
    """Offers crossed by an offer operation and what became of the offer itself."""

    offers_claimed: List[ClaimAtom]
    effect: InstanceOf[ManageOfferEffect]
    offer: Optional[OfferEntry] = None

    @model_validator(mode="after")
    def _check_offer(self) -> ManageOfferSuccess:
        if (self.effect == ManageOfferEffect.DELETED) != (self.offer is None):
            raise XdrError(f"offer entry does not match effect {self.effect.name}")
        return self

    def write_xdr(self, writer: XdrWriter) -> None:
        _write_claim_atoms(writer, self.offers_claimed)
        writer.int32(int(self.effect))
        if self.offer is not None:
            self.offer.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> ManageOfferSuccess:
        offers_claimed = _read_claim_atoms(reader)
        raw_effect = reader.int32()
        try:
            effect = ManageOfferEffect(raw_effect)
        except ValueError as e:
            raise XdrError(f"unknown manage offer effect: {raw_effect}", cause=e)
        offer = None if effect == ManageOfferEffect.DELETED else OfferEntry.read_xdr(reader)
        return cls(offers_claimed=offers_claimed, effect=effect, offer=offer)


class InflationPayout(_ResultModel):
    destination: PublicKey
    amount: Stroops

    def write_xdr(self, writer: XdrWriter) -> None:
        self.destination.write_xdr(writer)
        self.amount.write_xdr_int64(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> InflationPayout:
        destination = PublicKey.read_xdr(reader)
        return cls(destination=destination, amount=Stroops.read_xdr_int64(reader))


_Reader = Callable[[XdrReader], Any]
_Writer = Callable[[XdrWriter, Any], None]


def _value_codec(cls) -> Tuple[_Reader, _Writer]:
    return cls.read_xdr, lambda writer, value: value.write_xdr(writer)


_STROOPS_CODEC = (Stroops.read_xdr_int64, lambda writer, value: value.write_xdr_int64(writer))
_PAYOUTS_CODEC = (
    lambda reader: reader.array(lambda: InflationPayout.read_xdr(reader)),
    lambda writer, payouts: writer.array(payouts, lambda p: p.write_xdr(writer)),
)

# (operation type, result code) -> payload codec
PAYLOAD_CODECS: Dict[Tuple[OperationType, int], Tuple[_Reader, _Writer]] = {
    (OperationType.PATH_PAYMENT_STRICT_RECEIVE, 0): _value_codec(PathPaymentSuccess),
    (OperationType.PATH_PAYMENT_STRICT_RECEIVE, -9): _value_codec(Asset),
    (OperationType.PATH_PAYMENT_STRICT_SEND, 0): _value_codec(PathPaymentSuccess),
    (OperationType.PATH_PAYMENT_STRICT_SEND, -9): _value_codec(Asset),
    (OperationType.MANAGE_SELL_OFFER, 0): _value_codec(ManageOfferSuccess),
    (OperationType.CREATE_PASSIVE_SELL_OFFER, 0): _value_codec(ManageOfferSuccess),
    (OperationType.MANAGE_BUY_OFFER, 0): _value_codec(ManageOfferSuccess),
    (OperationType.ACCOUNT_MERGE, 0): _STROOPS_CODEC,
    (OperationType.INFLATION, 0): _PAYOUTS_CODEC,
    (OperationType.CREATE_CLAIMABLE_BALANCE, 0): _value_codec(ClaimableBalanceId),
}


class InnerOperationResult(_ResultModel):
    """Result of an operation that was applied: its type, code and optional payload."""

    operation_type: InstanceOf[OperationType]
    code: int
    payload: Any = None

    @model_validator(mode="after")
    def _check_code(self) -> InnerOperationResult:
        try:
            RESULT_CODES[self.operation_type](self.code)
        except ValueError as e:
            raise XdrError(f"unknown {self.operation_type.name} result code: {self.code}", cause=e)
        has_payload = (self.operation_type, self.code) in PAYLOAD_CODECS
        if has_payload != (self.payload is not None):
            raise XdrError(f"{self.operation_type.name} result {self.result_code.name} "
                           f"{'needs' if has_payload else 'has no'} payload")
        return self

    @property
    def result_code(self) -> IntEnum:
        """The code as a member of the operation type's result code enum."""
        return RESULT_CODES[self.operation_type](self.code)

    def is_success(self) -> bool:
        return self.code == 0

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(int(self.operation_type))
        writer.int32(self.code)
        codec = PAYLOAD_CODECS.get((self.operation_type, self.code))
        if codec is not None:
            codec[1](writer, self.payload)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> InnerOperationResult:
        raw_type = reader.int32()
        try:
            operation_type = OperationType(raw_type)
        except ValueError as e:
            raise XdrError(f"unknown operation type: {raw_type}", cause=e)
        code = reader.int32()
        codec = PAYLOAD_CODECS.get((operation_type, code))
        payload = codec[0](reader) if codec is not None else None
        return cls(operation_type=operation_type, code=code, payload=payload)


class OperationResult(_ResultModel):
    """Result of one operation of a transaction."""

    code: InstanceOf[OperationResultCode]
    inner: Optional[InnerOperationResult] = None

    @model_validator(mode="after")
    def _check_inner(self) -> OperationResult:
        if (self.code == OperationResultCode.INNER) != (self.inner is not None):
            raise XdrError(f"operation result {self.code.name} does not match inner result")
        return self

    @classmethod
    def new_inner(cls, inner: InnerOperationResult) -> OperationResult:
        return cls(code=OperationResultCode.INNER, inner=inner)

    def is_inner(self) -> bool:
        return self.inner is not None

    def as_inner(self) -> Optional[InnerOperationResult]:
        return self.inner

    def is_success(self) -> bool:
        return self.inner is not None and self.inner.is_success()

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(int(self.code))
        if self.inner is not None:
            self.inner.write_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> OperationResult:
        raw_code = reader.int32()
        try:
            code = OperationResultCode(raw_code)
        except ValueError as e:
            raise XdrError(f"unknown operation result code: {raw_code}", cause=e)
        inner = InnerOperationResult.read_xdr(reader) if code == OperationResultCode.INNER else None
        return cls(code=code, inner=inner)
