"""
Transaction results.

Wire layout:
    TransactionResult = int64 feeCharged, int32 code, then
        FEE_BUMP_INNER_SUCCESS / FEE_BUMP_INNER_FAILED:
            Hash innerHash, InnerTransactionResult
        SUCCESS / FAILED:
            OperationResult<>
        any other code: nothing
    followed by int32 ext (0).

    InnerTransactionResult has the same shape without the fee bump codes.
"""

from __future__ import annotations
import logging
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, InstanceOf, model_validator

from .amount import Stroops
from .codec import XdrCodec, XdrReader, XdrWriter
from .errors import XdrError
from .operation_result import OperationResult

logger = logging.getLogger(__name__)

HASH_LEN = 32


class TransactionResultCode(IntEnum):
    FEE_BUMP_INNER_SUCCESS = 1
    SUCCESS = 0
    FAILED = -1
    TOO_EARLY = -2
    TOO_LATE = -3
    MISSING_OPERATION = -4
    BAD_SEQ = -5
    BAD_AUTH = -6
    INSUFFICIENT_BALANCE = -7
    NO_ACCOUNT = -8
    INSUFFICIENT_FEE = -9
    BAD_AUTH_EXTRA = -10
    INTERNAL_ERROR = -11
    NOT_SUPPORTED = -12
    FEE_BUMP_INNER_FAILED = -13
    BAD_SPONSORSHIP = -14
    BAD_MIN_SEQ_AGE_OR_GAP = -15
    MALFORMED = -16
    SOROBAN_INVALID = -17


_WITH_RESULTS = (TransactionResultCode.SUCCESS, TransactionResultCode.FAILED)
_FEE_BUMP = (TransactionResultCode.FEE_BUMP_INNER_SUCCESS, TransactionResultCode.FEE_BUMP_INNER_FAILED)


def _read_code(reader: XdrReader) -> TransactionResultCode:
    raw = reader.int32()
    try:
        return TransactionResultCode(raw)
    except ValueError as e:
        raise XdrError(f"unknown transaction result code: {raw}", cause=e)


def _read_ext(reader: XdrReader) -> None:
    ext = reader.int32()
    if ext != 0:
        raise XdrError(f"unsupported transaction result extension version: {ext}")


def _read_results(reader: XdrReader) -> List[OperationResult]:
    return reader.array(lambda: OperationResult.read_xdr(reader))


def _write_results(writer: XdrWriter, results: List[OperationResult]) -> None:
    writer.array(results, lambda result: result.write_xdr(writer))


class _ResultBase(BaseModel, XdrCodec):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fee_charged: Stroops
    code: InstanceOf[TransactionResultCode]
    results: Optional[List[OperationResult]] = None

    def is_success(self) -> bool:
        return self.code == TransactionResultCode.SUCCESS

    def is_failed(self) -> bool:
        return self.code == TransactionResultCode.FAILED

    def _check_results(self) -> None:
        if (self.code in _WITH_RESULTS) != (self.results is not None):
            raise XdrError(f"operation results do not match result code {self.code.name}")


class InnerTransactionResult(_ResultBase):
    """Result of the transaction wrapped by a fee bump."""

    @model_validator(mode="after")
    def _check_code(self) -> InnerTransactionResult:
        if self.code in _FEE_BUMP:
            raise XdrError(f"inner transaction result cannot be {self.code.name}")
        self._check_results()
        return self

    def write_xdr(self, writer: XdrWriter) -> None:
        self.fee_charged.write_xdr_int64(writer)
        writer.int32(int(self.code))
        if self.results is not None:
            _write_results(writer, self.results)
        writer.int32(0)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> InnerTransactionResult:
        fee_charged = Stroops.read_xdr_int64(reader)
        code = _read_code(reader)
        if code in _FEE_BUMP:
            raise XdrError(f"inner transaction result cannot be {code.name}")
        results = _read_results(reader) if code in _WITH_RESULTS else None
        _read_ext(reader)
        return cls(fee_charged=fee_charged, code=code, results=results)


class TransactionResult(_ResultBase):
    """
    Result of a submitted transaction or fee bump transaction.

    ``results`` is set for SUCCESS and FAILED. For the two fee bump codes
    ``transaction_hash`` is the inner transaction's hash and
    ``inner_result`` its result. Other codes carry only the fee charged.
    """

    transaction_hash: Optional[bytes] = None
    inner_result: Optional[InnerTransactionResult] = None

    @model_validator(mode="after")
    def _check_code(self) -> TransactionResult:
        self._check_results()
        is_fee_bump = self.code in _FEE_BUMP
        if is_fee_bump != (self.inner_result is not None) or is_fee_bump != (self.transaction_hash is not None):
            raise XdrError(f"inner result does not match result code {self.code.name}")
        if self.transaction_hash is not None and len(self.transaction_hash) != HASH_LEN:
            raise XdrError(f"inner transaction hash must be {HASH_LEN} bytes")
        return self

    def is_fee_bump(self) -> bool:
        return self.inner_result is not None

    def is_fee_bump_success(self) -> bool:
        return self.code == TransactionResultCode.FEE_BUMP_INNER_SUCCESS

    def is_fee_bump_failed(self) -> bool:
        return self.code == TransactionResultCode.FEE_BUMP_INNER_FAILED

    def operation_results(self) -> List[OperationResult]:
        """Operation results of this transaction, or of the inner one for a fee bump."""
        if self.inner_result is not None:
            return self.inner_result.results or []
        return self.results or []

    def write_xdr(self, writer: XdrWriter) -> None:
        self.fee_charged.write_xdr_int64(writer)
        writer.int32(int(self.code))
        if self.inner_result is not None:
            writer.opaque_fixed(self.transaction_hash, HASH_LEN)
            self.inner_result.write_xdr(writer)
        elif self.results is not None:
            _write_results(writer, self.results)
        writer.int32(0)

    @classmethod
    def read_xdr(cls, reader: XdrReader) -> TransactionResult:
        fee_charged = Stroops.read_xdr_int64(reader)
        code = _read_code(reader)
        transaction_hash = None
        inner_result = None
        results = None
        if code in _FEE_BUMP:
            transaction_hash = reader.opaque_fixed(HASH_LEN)
            inner_result = InnerTransactionResult.read_xdr(reader)
        elif code in _WITH_RESULTS:
            results = _read_results(reader)
        _read_ext(reader)
        logger.debug("Decoded transaction result %s, fee charged %d", code.name, fee_charged.to_i64())
        return cls(fee_charged=fee_charged, code=code, results=results,
                   transaction_hash=transaction_hash, inner_result=inner_result)
