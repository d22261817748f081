"""
Transactions, fee bump transactions and transaction envelopes.

A transaction is assembled with ``Transaction.builder`` and signed for a
network. The signed payload is the network id, the envelope type and the
transaction XDR; its SHA-256 is the transaction hash and is what keys sign.
Signatures are kept in the order they were added.

Envelope wire layout:
    TransactionEnvelope = int32 type, then
        2 (TX):          Transaction, DecoratedSignature<20>
        5 (TX_FEE_BUMP): FeeBumpTransaction, DecoratedSignature<20>
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Union

from .amount import Stroops, StroopsLike, to_stroops
from .codec import XdrCodec, XdrReader, XdrWriter, sha256_bytes
from .codec.writer import UINT32_MAX
from .crypto.keypair import KeyPair
from .crypto.muxed import MuxedAccount, MuxedAccountLike, to_muxed_account
from .crypto.signature import DecoratedSignature
from .errors import (
    BuilderConsumedError,
    MissingOperationsError,
    StellarBaseError,
    TooManyOperationsError,
    TransactionFeeOverflowError,
    TransactionFeeTooLowError,
    XdrError,
)
from .memo import Memo
from .network import Network
from .operations import Operation
from .options import TransactionOptions
from .time_bounds import TimeBounds

logger = logging.getLogger(__name__)

MIN_BASE_FEE = Stroops(100)
MAX_OPERATIONS = 100
MAX_SIGNATURES = 20

ENVELOPE_TYPE_TX_V0 = 0
ENVELOPE_TYPE_TX = 2
ENVELOPE_TYPE_TX_FEE_BUMP = 5


def _signature_payload(network: Network, envelope_type: int, tx: XdrCodec) -> bytes:
    writer = XdrWriter()
    writer.opaque_fixed(network.network_id(), 32)
    writer.int32(envelope_type)
    tx.write_xdr(writer)
    return writer.to_bytes()


def _write_ext(writer: XdrWriter) -> None:
    writer.int32(0)


def _read_ext(reader: XdrReader) -> None:
    ext = reader.int32()
    if ext != 0:
        raise XdrError(f"unsupported extension version: {ext}")


def _write_signatures(writer: XdrWriter, signatures: List[DecoratedSignature]) -> None:
    writer.array(signatures, lambda s: s.write_xdr(writer), MAX_SIGNATURES)


def _read_signatures(reader: XdrReader) -> List[DecoratedSignature]:
    return reader.array(lambda: DecoratedSignature.read_xdr(reader), MAX_SIGNATURES)


class _Signable:
    """Signing surface shared by transactions and fee bump transactions."""

    envelope_type: int
    _signatures: List[DecoratedSignature]

    @property
    def signatures(self) -> List[DecoratedSignature]:
        """Signatures in the order they were added. The list may be appended to."""
        return self._signatures

    def signature_data(self, network: Network) -> bytes:
        """Bytes whose hash is signed: network id, envelope type, transaction."""
        return _signature_payload(network, self.envelope_type, self)

    def hash(self, network: Network) -> bytes:
        return sha256_bytes(self.signature_data(network))

    def decorated_signature(self, key: KeyPair, network: Network) -> DecoratedSignature:
        """Signature of this transaction by ``key`` for ``network``, not added to the signatures."""
        return key.sign_decorated(self.hash(network))

    def sign(self, key: KeyPair, network: Network) -> None:
        """Sign for ``network`` and append the signature."""
        signature = self.decorated_signature(key, network)
        self._signatures.append(signature)
        logger.debug("Signed %s with %s for %r", type(self).__name__,
                     key.public_key.account_id(), network.passphrase)


class Transaction(_Signable, XdrCodec):
    """
    A transaction: source account, sequence, fee, preconditions, memo and operations.

    ``write_xdr``/``read_xdr`` handle the bare transaction. Use ``to_envelope``
    to get the signed, transmittable form.
    """

    envelope_type = ENVELOPE_TYPE_TX

    def __init__(self, source_account: MuxedAccount, sequence: int, fee: Stroops,
                 operations: Iterable[Operation], memo: Optional[Memo] = None,
                 time_bounds: Optional[TimeBounds] = None,
                 signatures: Optional[List[DecoratedSignature]] = None):
        self._source_account = source_account
        self._sequence = sequence
        self._fee = fee
        self._operations = tuple(operations)
        self._memo = memo if memo is not None else Memo.new_none()
        self._time_bounds = time_bounds
        self._signatures = list(signatures) if signatures else []

    @staticmethod
    def builder(source_account: MuxedAccountLike, sequence: int, base_fee: StroopsLike) -> TransactionBuilder:
        """
        Start building a transaction.

        Args:
            source_account: Account paying the fee and consuming the sequence number
            sequence: Sequence number of the transaction
            base_fee: Fee per operation, at least MIN_BASE_FEE

        Returns:
            A TransactionBuilder; errors are raised by ``build``
        """
        return TransactionBuilder(source_account, sequence, base_fee)

    @staticmethod
    def builder_with_options(source_account: MuxedAccountLike, sequence: int,
                             options: TransactionOptions) -> TransactionBuilder:
        """Start building a transaction with fee, time bounds and memo taken from ``options``."""
        builder = TransactionBuilder(source_account, sequence, options.stroops_base_fee())
        time_bounds = options.time_bounds()
        if time_bounds is not None:
            builder.with_time_bounds(time_bounds)
        return builder.with_memo(options.memo())

    @property
    def source_account(self) -> MuxedAccount:
        return self._source_account

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def fee(self) -> Stroops:
        return self._fee

    @property
    def operations(self) -> tuple:
        return self._operations

    @property
    def memo(self) -> Memo:
        return self._memo

    @property
    def time_bounds(self) -> Optional[TimeBounds]:
        return self._time_bounds

    def to_envelope(self) -> TransactionEnvelope:
        """Envelope holding a copy of this transaction and its current signatures."""
        return TransactionEnvelope(self._copy())

    def _copy(self) -> Transaction:
        return Transaction(self._source_account, self._sequence, self._fee, self._operations,
                           self._memo, self._time_bounds, self._signatures)

    def write_xdr(self, writer: XdrWriter) -> None:
        self._source_account.write_xdr(writer)
        self._fee.write_xdr_uint32(writer)
        writer.int64(self._sequence)
        writer.optional(self._time_bounds, lambda tb: tb.write_xdr(writer))
        self._memo.write_xdr(writer)
        writer.array(self._operations, lambda op: op.write_xdr(writer), MAX_OPERATIONS)
        _write_ext(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> Transaction:
        source_account = MuxedAccount.read_xdr(reader)
        fee = Stroops.read_xdr_uint32(reader)
        sequence = reader.int64()
        time_bounds = reader.optional(lambda: TimeBounds.read_xdr(reader))
        memo = Memo.read_xdr(reader)
        operations = reader.array(lambda: Operation.read_xdr(reader), MAX_OPERATIONS)
        if not operations:
            raise XdrError("transaction has no operations")
        _read_ext(reader)
        return cls(source_account, sequence, fee, operations, memo, time_bounds)

    def write_envelope_xdr(self, writer: XdrWriter) -> None:
        """Write the TransactionV1Envelope: transaction then signatures."""
        self.write_xdr(writer)
        _write_signatures(writer, self._signatures)

    @classmethod
    def read_envelope_xdr(cls, reader: XdrReader) -> Transaction:
        tx = cls.read_xdr(reader)
        tx._signatures = _read_signatures(reader)
        return tx

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return False
        return (self._source_account == other._source_account
                and self._sequence == other._sequence
                and self._fee == other._fee
                and self._operations == other._operations
                and self._memo == other._memo
                and self._time_bounds == other._time_bounds
                and self._signatures == other._signatures)

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Transaction(source_account={self._source_account!r}, sequence={self._sequence}, "
                f"fee={self._fee!r}, operations={len(self._operations)}, "
                f"signatures={len(self._signatures)})")


class TransactionBuilder:
    """
    Staged configuration of a Transaction.

    Validation is deferred: the first problem found while configuring is
    raised by ``build()``, which consumes the builder.
    ``into_transaction`` is the same call.
    """

    def __init__(self, source_account: MuxedAccountLike, sequence: int, base_fee: StroopsLike):
        self._source_account = to_muxed_account(source_account)
        self._sequence = sequence
        self._base_fee = to_stroops(base_fee)
        self._time_bounds: Optional[TimeBounds] = None
        self._memo = Memo.new_none()
        self._operations: List[Operation] = []
        self._error: Optional[StellarBaseError] = None
        self._consumed = False
        if self._base_fee < MIN_BASE_FEE:
            self._error = TransactionFeeTooLowError(
                details={"base_fee": self._base_fee.to_i64(), "min_base_fee": MIN_BASE_FEE.to_i64()})

    def _check_consumed(self) -> None:
        if self._consumed:
            raise BuilderConsumedError()

    def with_time_bounds(self, time_bounds: TimeBounds) -> TransactionBuilder:
        self._check_consumed()
        self._time_bounds = time_bounds
        return self

    def with_memo(self, memo: Memo) -> TransactionBuilder:
        self._check_consumed()
        self._memo = memo
        return self

    def add_operation(self, operation: Operation) -> TransactionBuilder:
        self._check_consumed()
        if self._error is None:
            if len(self._operations) >= MAX_OPERATIONS:
                self._error = TooManyOperationsError(details={"max_operations": MAX_OPERATIONS})
            else:
                self._operations.append(operation)
        return self

    def build(self) -> Transaction:
        """
        Create the transaction, fee = base fee x number of operations.

        Raises:
            BuilderConsumedError: If called twice
            TransactionFeeTooLowError: If the base fee is below MIN_BASE_FEE
            TooManyOperationsError: If more than MAX_OPERATIONS were added
            MissingOperationsError: If no operation was added
            TransactionFeeOverflowError: If the total fee does not fit
        """
        self._check_consumed()
        self._consumed = True
        if self._error is not None:
            raise self._error
        if not self._operations:
            raise MissingOperationsError()
        fee = self._base_fee.checked_mul(Stroops(len(self._operations)))
        if fee is None or fee.to_i64() > UINT32_MAX:
            raise TransactionFeeOverflowError(
                details={"base_fee": self._base_fee.to_i64(), "operations": len(self._operations)})
        tx = Transaction(self._source_account, self._sequence, fee, self._operations,
                         self._memo, self._time_bounds)
        logger.debug("Built transaction from %s seq=%d with %d operations, fee %d",
                     self._source_account.account_id(), self._sequence,
                     len(self._operations), fee.to_i64())
        return tx

    into_transaction = build


class FeeBumpTransaction(_Signable, XdrCodec):
    """
    Wraps a signed transaction so that ``fee_source`` pays a higher fee.

    The fee must be at least MIN_BASE_FEE times the inner operation count plus one.
    """

    envelope_type = ENVELOPE_TYPE_TX_FEE_BUMP

    def __init__(self, fee_source: MuxedAccountLike, fee: StroopsLike, inner_transaction: Transaction,
                 signatures: Optional[List[DecoratedSignature]] = None):
        fee = to_stroops(fee)
        min_fee = MIN_BASE_FEE.to_i64() * (len(inner_transaction.operations) + 1)
        if fee.to_i64() < min_fee:
            raise TransactionFeeTooLowError(details={"fee": fee.to_i64(), "min_fee": min_fee})
        self._fee_source = to_muxed_account(fee_source)
        self._fee = fee
        self._inner = inner_transaction
        self._signatures = list(signatures) if signatures else []

    @property
    def fee_source(self) -> MuxedAccount:
        return self._fee_source

    @property
    def fee(self) -> Stroops:
        return self._fee

    @property
    def inner_transaction(self) -> Transaction:
        return self._inner

    def to_envelope(self) -> TransactionEnvelope:
        return TransactionEnvelope(
            FeeBumpTransaction(self._fee_source, self._fee, self._inner, self._signatures))

    def write_xdr(self, writer: XdrWriter) -> None:
        self._fee_source.write_xdr(writer)
        self._fee.write_xdr_int64(writer)
        writer.int32(ENVELOPE_TYPE_TX)
        self._inner.write_envelope_xdr(writer)
        _write_ext(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> FeeBumpTransaction:
        fee_source = MuxedAccount.read_xdr(reader)
        fee = Stroops.read_xdr_int64(reader)
        inner_type = reader.int32()
        if inner_type != ENVELOPE_TYPE_TX:
            raise XdrError(f"unsupported fee bump inner transaction type: {inner_type}")
        inner = Transaction.read_envelope_xdr(reader)
        _read_ext(reader)
        return cls(fee_source, fee, inner)

    def write_envelope_xdr(self, writer: XdrWriter) -> None:
        self.write_xdr(writer)
        _write_signatures(writer, self._signatures)

    @classmethod
    def read_envelope_xdr(cls, reader: XdrReader) -> FeeBumpTransaction:
        tx = cls.read_xdr(reader)
        tx._signatures = _read_signatures(reader)
        return tx

    def __eq__(self, other) -> bool:
        if not isinstance(other, FeeBumpTransaction):
            return False
        return (self._fee_source == other._fee_source
                and self._fee == other._fee
                and self._inner == other._inner
                and self._signatures == other._signatures)

    __hash__ = None

    def __repr__(self) -> str:
        return (f"FeeBumpTransaction(fee_source={self._fee_source!r}, fee={self._fee!r}, "
                f"inner={self._inner!r}, signatures={len(self._signatures)})")


class TransactionEnvelope(XdrCodec):
    """A transaction or fee bump transaction together with its signatures."""

    def __init__(self, tx: Union[Transaction, FeeBumpTransaction]):
        self._tx = tx

    def is_transaction(self) -> bool:
        return isinstance(self._tx, Transaction)

    def as_transaction(self) -> Optional[Transaction]:
        return self._tx if isinstance(self._tx, Transaction) else None

    def is_fee_bump_transaction(self) -> bool:
        return isinstance(self._tx, FeeBumpTransaction)

    def as_fee_bump_transaction(self) -> Optional[FeeBumpTransaction]:
        return self._tx if isinstance(self._tx, FeeBumpTransaction) else None

    @property
    def envelope_type(self) -> int:
        return self._tx.envelope_type

    @property
    def signatures(self) -> List[DecoratedSignature]:
        return self._tx.signatures

    def sign(self, key: KeyPair, network: Network) -> None:
        self._tx.sign(key, network)

    def decorated_signature(self, key: KeyPair, network: Network) -> DecoratedSignature:
        return self._tx.decorated_signature(key, network)

    def hash(self, network: Network) -> bytes:
        return self._tx.hash(network)

    def signature_data(self, network: Network) -> bytes:
        return self._tx.signature_data(network)

    def write_xdr(self, writer: XdrWriter) -> None:
        writer.int32(self._tx.envelope_type)
        self._tx.write_envelope_xdr(writer)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> TransactionEnvelope:
        envelope_type = reader.int32()
        if envelope_type == ENVELOPE_TYPE_TX:
            tx = Transaction.read_envelope_xdr(reader)
        elif envelope_type == ENVELOPE_TYPE_TX_FEE_BUMP:
            tx = FeeBumpTransaction.read_envelope_xdr(reader)
        elif envelope_type == ENVELOPE_TYPE_TX_V0:
            raise XdrError("legacy v0 transaction envelopes are not supported")
        else:
            raise XdrError(f"unknown envelope type: {envelope_type}")
        logger.debug("Decoded %s envelope with %d signatures",
                     type(tx).__name__, len(tx.signatures))
        return cls(tx)

    def __eq__(self, other) -> bool:
        return isinstance(other, TransactionEnvelope) and self._tx == other._tx

    __hash__ = None

    def __repr__(self) -> str:
        return f"TransactionEnvelope({self._tx!r})"
