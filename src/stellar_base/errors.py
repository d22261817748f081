"""
Stellar Base Error Model

This module provides the error handling framework for the library. Every
failure carries an ErrorCode so callers can branch on the kind of error
without matching on exception classes or message text.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error kinds raised by the library."""

    UNKNOWN = 1

    # Strkey / key material (100-199)
    INVALID_STR_KEY = 100
    INVALID_STR_KEY_VERSION_BYTE = 101
    INVALID_STR_KEY_CHECKSUM = 102
    INVALID_SEED = 103
    INVALID_PUBLIC_KEY = 104
    INVALID_NETWORK_ID = 105
    INVALID_SIGNATURE = 106
    INVALID_SIGNATURE_HINT = 107
    INVALID_PRE_AUTH_TX = 108
    INVALID_HASH_X = 109

    # Amounts and prices (200-299)
    INVALID_STROOPS_AMOUNT = 200
    NEGATIVE_STROOPS = 201
    INVALID_AMOUNT_SCALE = 202
    PARSE_AMOUNT_ERROR = 203
    PARSE_PRICE_ERROR = 204

    # Domain values (300-399)
    INVALID_ASSET_CODE = 300
    INVALID_MEMO_TEXT = 301
    INVALID_MEMO_HASH = 302
    INVALID_MEMO_RETURN = 303
    INVALID_TIME_BOUNDS = 304
    INVALID_ACCOUNT_FLAGS = 305
    INVALID_TRUST_LINE_FLAGS = 306
    INVALID_DATA_VALUE = 307
    INVALID_CLAIMABLE_BALANCE_ID_LENGTH = 308
    INVALID_LIQUIDITY_POOL_ID_LENGTH = 309
    HOME_DOMAIN_TOO_LONG = 310

    # Operations and transactions (400-499)
    INVALID_OPERATION = 400
    TOO_MANY_OPERATIONS = 401
    MISSING_OPERATIONS = 402
    TRANSACTION_FEE_TOO_LOW = 403
    TRANSACTION_FEE_OVERFLOW = 404
    BUILDER_CONSUMED = 405

    # Encoding (500-599)
    XDR_ERROR = 500
    XDR_CLAIM_PREDICATE_ERROR = 501
    BASE64_DECODE_ERROR = 502


class StellarBaseError(Exception):
    """
    Base class for all library errors.

    Provides structured error information: a code, a message, optional details
    and the underlying exception when one triggered the failure.
    """

    default_code = ErrorCode.UNKNOWN
    default_message = "unknown error"

    def __init__(self, message: Optional[str] = None, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message, defaults to the class message
            code: Error code, defaults to the class code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidStrKeyError(StellarBaseError):
    default_code = ErrorCode.INVALID_STR_KEY
    default_message = "invalid strkey"


class InvalidStrKeyVersionByteError(StellarBaseError):
    default_code = ErrorCode.INVALID_STR_KEY_VERSION_BYTE
    default_message = "invalid strkey version byte"


class InvalidStrKeyChecksumError(StellarBaseError):
    default_code = ErrorCode.INVALID_STR_KEY_CHECKSUM
    default_message = "invalid strkey checksum"


class InvalidSeedError(StellarBaseError):
    default_code = ErrorCode.INVALID_SEED
    default_message = "invalid secret seed"


class InvalidPublicKeyError(StellarBaseError):
    default_code = ErrorCode.INVALID_PUBLIC_KEY
    default_message = "invalid public key"


class InvalidNetworkIdError(StellarBaseError):
    default_code = ErrorCode.INVALID_NETWORK_ID
    default_message = "invalid network id"


class InvalidSignatureError(StellarBaseError):
    default_code = ErrorCode.INVALID_SIGNATURE
    default_message = "invalid signature"


class InvalidSignatureHintError(StellarBaseError):
    default_code = ErrorCode.INVALID_SIGNATURE_HINT
    default_message = "invalid signature hint"


class InvalidPreAuthTxError(StellarBaseError):
    default_code = ErrorCode.INVALID_PRE_AUTH_TX
    default_message = "invalid pre auth tx hash"


class InvalidHashXError(StellarBaseError):
    default_code = ErrorCode.INVALID_HASH_X
    default_message = "invalid hash(x)"


class InvalidStroopsAmountError(StellarBaseError):
    default_code = ErrorCode.INVALID_STROOPS_AMOUNT
    default_message = "invalid stroops amount"


class NegativeStroopsError(StellarBaseError):
    default_code = ErrorCode.NEGATIVE_STROOPS
    default_message = "stroops amount is negative"


class InvalidAmountScaleError(StellarBaseError):
    default_code = ErrorCode.INVALID_AMOUNT_SCALE
    default_message = "amount has more than 7 decimal places"


class ParseAmountError(StellarBaseError):
    default_code = ErrorCode.PARSE_AMOUNT_ERROR
    default_message = "error parsing amount"


class ParsePriceError(StellarBaseError):
    default_code = ErrorCode.PARSE_PRICE_ERROR
    default_message = "error parsing price"


class InvalidAssetCodeError(StellarBaseError):
    default_code = ErrorCode.INVALID_ASSET_CODE
    default_message = "invalid asset code"


class InvalidMemoTextError(StellarBaseError):
    default_code = ErrorCode.INVALID_MEMO_TEXT
    default_message = "memo text too long"


class InvalidMemoHashError(StellarBaseError):
    default_code = ErrorCode.INVALID_MEMO_HASH
    default_message = "memo hash too long"


class InvalidMemoReturnError(StellarBaseError):
    default_code = ErrorCode.INVALID_MEMO_RETURN
    default_message = "memo return hash too long"


class InvalidTimeBoundsError(StellarBaseError):
    default_code = ErrorCode.INVALID_TIME_BOUNDS
    default_message = "invalid time bounds"


class InvalidAccountFlagsError(StellarBaseError):
    default_code = ErrorCode.INVALID_ACCOUNT_FLAGS
    default_message = "invalid account flags"


class InvalidTrustLineFlagsError(StellarBaseError):
    default_code = ErrorCode.INVALID_TRUST_LINE_FLAGS
    default_message = "invalid trust line flags"


class InvalidDataValueError(StellarBaseError):
    default_code = ErrorCode.INVALID_DATA_VALUE
    default_message = "data value longer than 64 bytes"


class InvalidClaimableBalanceIdLengthError(StellarBaseError):
    default_code = ErrorCode.INVALID_CLAIMABLE_BALANCE_ID_LENGTH
    default_message = "claimable balance id must be 32 bytes"


class InvalidLiquidityPoolIdLengthError(StellarBaseError):
    default_code = ErrorCode.INVALID_LIQUIDITY_POOL_ID_LENGTH
    default_message = "liquidity pool id must be 32 bytes"


class HomeDomainTooLongError(StellarBaseError):
    default_code = ErrorCode.HOME_DOMAIN_TOO_LONG
    default_message = "home domain longer than 32 bytes"


class InvalidOperationError(StellarBaseError):
    """Raised by operation builders; the message names the offending field."""

    default_code = ErrorCode.INVALID_OPERATION
    default_message = "invalid operation"


class TooManyOperationsError(StellarBaseError):
    default_code = ErrorCode.TOO_MANY_OPERATIONS
    default_message = "transaction has more than 100 operations"


class MissingOperationsError(StellarBaseError):
    default_code = ErrorCode.MISSING_OPERATIONS
    default_message = "transaction has no operations"


class TransactionFeeTooLowError(StellarBaseError):
    default_code = ErrorCode.TRANSACTION_FEE_TOO_LOW
    default_message = "transaction fee too low"


class TransactionFeeOverflowError(StellarBaseError):
    default_code = ErrorCode.TRANSACTION_FEE_OVERFLOW
    default_message = "transaction fee overflow"


class BuilderConsumedError(StellarBaseError):
    default_code = ErrorCode.BUILDER_CONSUMED
    default_message = "builder was already consumed by build()"


class XdrError(StellarBaseError):
    """Malformed or out-of-range XDR data."""

    default_code = ErrorCode.XDR_ERROR
    default_message = "xdr error"


class XdrClaimPredicateError(StellarBaseError):
    default_code = ErrorCode.XDR_CLAIM_PREDICATE_ERROR
    default_message = "invalid claim predicate in xdr"


class Base64DecodeError(StellarBaseError):
    default_code = ErrorCode.BASE64_DECODE_ERROR
    default_message = "base64 decode error"
