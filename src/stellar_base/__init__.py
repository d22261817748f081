"""
stellar_base - Stellar transaction building and XDR serialization

This package builds, signs and (de)serializes Stellar network transactions
and their building blocks: keys, accounts, assets, amounts, operations and
signatures, to and from XDR and its text encodings (strkey, base64).
"""

import logging

# Core value types
from .amount import Amount, Price, Stroops, to_stroops
from .asset import Asset, ChangeTrustAsset, CreditAsset, TrustLineAsset
from .account import AccountFlags, DataValue, TrustLineFlags
from .claim import ClaimableBalanceId, ClaimPredicate, Claimant
from .ledger import LedgerKey
from .liquidity_pool import LiquidityPoolConstantFeeParameters, LiquidityPoolId
from .memo import Memo
from .time_bounds import TimeBounds

# Keys, networks and signatures
from .crypto import (
    DecoratedSignature, KeyPair, MuxedAccount, MuxedEd25519PublicKey, PublicKey,
    SecretKey, Signature, SignatureHint, init,
)
from .network import Network
from .signature import HashX, PreAuthTxHash, Signer, SignerKey

# Operations and transactions
from .operations import Operation, OperationType
from .options import TransactionOptions
from .transaction import (
    MIN_BASE_FEE, FeeBumpTransaction, Transaction, TransactionBuilder, TransactionEnvelope,
)
from .operation_result import InnerOperationResult, OperationResult, OperationResultCode
from .transaction_result import (
    InnerTransactionResult, TransactionResult, TransactionResultCode,
)

# Errors
from .errors import ErrorCode, StellarBaseError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "AccountFlags",
    "Amount",
    "Asset",
    "ChangeTrustAsset",
    "ClaimPredicate",
    "ClaimableBalanceId",
    "Claimant",
    "CreditAsset",
    "DataValue",
    "DecoratedSignature",
    "ErrorCode",
    "FeeBumpTransaction",
    "HashX",
    "InnerOperationResult",
    "InnerTransactionResult",
    "KeyPair",
    "LedgerKey",
    "LiquidityPoolConstantFeeParameters",
    "LiquidityPoolId",
    "MIN_BASE_FEE",
    "Memo",
    "MuxedAccount",
    "MuxedEd25519PublicKey",
    "Network",
    "Operation",
    "OperationType",
    "OperationResult",
    "OperationResultCode",
    "PreAuthTxHash",
    "Price",
    "PublicKey",
    "SecretKey",
    "Signature",
    "SignatureHint",
    "Signer",
    "SignerKey",
    "StellarBaseError",
    "Stroops",
    "TimeBounds",
    "Transaction",
    "TransactionBuilder",
    "TransactionEnvelope",
    "TransactionOptions",
    "TransactionResult",
    "TransactionResultCode",
    "TrustLineAsset",
    "TrustLineFlags",
    "init",
    "to_stroops",
]
