"""
Operations.

Importing this package registers every operation kind with the registry.
"""

from .base import Operation, OperationBuilder, OperationType
from .registry import OPERATION_REGISTRY, lookup_builder, lookup_operation, registered_types

from .account import (
    AccountMergeOperation,
    AccountMergeOperationBuilder,
    BumpSequenceOperation,
    BumpSequenceOperationBuilder,
    CreateAccountOperation,
    CreateAccountOperationBuilder,
    InflationOperation,
    InflationOperationBuilder,
    ManageDataOperation,
    ManageDataOperationBuilder,
    SetOptionsOperation,
    SetOptionsOperationBuilder,
)
from .claimable_balance import (
    ClaimClaimableBalanceOperation,
    ClaimClaimableBalanceOperationBuilder,
    ClawbackClaimableBalanceOperation,
    ClawbackClaimableBalanceOperationBuilder,
    CreateClaimableBalanceOperation,
    CreateClaimableBalanceOperationBuilder,
)
from .liquidity_pool import (
    LiquidityPoolDepositOperation,
    LiquidityPoolDepositOperationBuilder,
    LiquidityPoolWithdrawOperation,
    LiquidityPoolWithdrawOperationBuilder,
)
from .offer import (
    CreatePassiveSellOfferOperation,
    CreatePassiveSellOfferOperationBuilder,
    ManageBuyOfferOperation,
    ManageBuyOfferOperationBuilder,
    ManageSellOfferOperation,
    ManageSellOfferOperationBuilder,
)
from .payment import (
    PathPaymentStrictReceiveOperation,
    PathPaymentStrictReceiveOperationBuilder,
    PathPaymentStrictSendOperation,
    PathPaymentStrictSendOperationBuilder,
    PaymentOperation,
    PaymentOperationBuilder,
)
from .sponsorship import (
    BeginSponsoringFutureReservesOperation,
    BeginSponsoringFutureReservesOperationBuilder,
    EndSponsoringFutureReservesOperation,
    EndSponsoringFutureReservesOperationBuilder,
    RevokeSponsorshipOperation,
    RevokeSponsorshipOperationBuilder,
)
from .trust import (
    AllowTrustOperation,
    AllowTrustOperationBuilder,
    ChangeTrustOperation,
    ChangeTrustOperationBuilder,
    ClawbackOperation,
    ClawbackOperationBuilder,
    SetTrustLineFlagsOperation,
    SetTrustLineFlagsOperationBuilder,
)

__all__ = [
    "Operation",
    "OperationBuilder",
    "OperationType",
    "OPERATION_REGISTRY",
    "lookup_builder",
    "lookup_operation",
    "registered_types",
    "AccountMergeOperation",
    "AccountMergeOperationBuilder",
    "AllowTrustOperation",
    "AllowTrustOperationBuilder",
    "BeginSponsoringFutureReservesOperation",
    "BeginSponsoringFutureReservesOperationBuilder",
    "BumpSequenceOperation",
    "BumpSequenceOperationBuilder",
    "ChangeTrustOperation",
    "ChangeTrustOperationBuilder",
    "ClaimClaimableBalanceOperation",
    "ClaimClaimableBalanceOperationBuilder",
    "ClawbackClaimableBalanceOperation",
    "ClawbackClaimableBalanceOperationBuilder",
    "ClawbackOperation",
    "ClawbackOperationBuilder",
    "CreateAccountOperation",
    "CreateAccountOperationBuilder",
    "CreateClaimableBalanceOperation",
    "CreateClaimableBalanceOperationBuilder",
    "CreatePassiveSellOfferOperation",
    "CreatePassiveSellOfferOperationBuilder",
    "EndSponsoringFutureReservesOperation",
    "EndSponsoringFutureReservesOperationBuilder",
    "InflationOperation",
    "InflationOperationBuilder",
    "LiquidityPoolDepositOperation",
    "LiquidityPoolDepositOperationBuilder",
    "LiquidityPoolWithdrawOperation",
    "LiquidityPoolWithdrawOperationBuilder",
    "ManageBuyOfferOperation",
    "ManageBuyOfferOperationBuilder",
    "ManageDataOperation",
    "ManageDataOperationBuilder",
    "ManageSellOfferOperation",
    "ManageSellOfferOperationBuilder",
    "PathPaymentStrictReceiveOperation",
    "PathPaymentStrictReceiveOperationBuilder",
    "PathPaymentStrictSendOperation",
    "PathPaymentStrictSendOperationBuilder",
    "PaymentOperation",
    "PaymentOperationBuilder",
    "RevokeSponsorshipOperation",
    "RevokeSponsorshipOperationBuilder",
    "SetOptionsOperation",
    "SetOptionsOperationBuilder",
    "SetTrustLineFlagsOperation",
    "SetTrustLineFlagsOperationBuilder",
]
