"""
Decoding operation results.

Every fixture is a FAILED transaction result with fee 10000000 (or 1000)
holding one operation result; the operation result is checked and the
whole value must encode back to the same base64.
"""

import pytest

from stellar_base import (
    Asset,
    ClaimableBalanceId,
    OperationResult,
    OperationResultCode,
    OperationType,
    Price,
    PublicKey,
    Stroops,
    TransactionResult,
)
from stellar_base.errors import XdrError
from stellar_base.operation_result import (
    ClaimAtom,
    ClaimAtomType,
    InnerOperationResult,
    ManageOfferEffect,
    ManageOfferResultCode,
    ManageOfferSuccess,
    PathPaymentStrictReceiveResultCode,
    PathPaymentStrictSendResultCode,
    PathPaymentSuccess,
    PaymentResultCode,
    SetOptionsResultCode,
)

ISSUER = PublicKey(bytes.fromhex("2a8346b25f35c63f03f17c9e9332995d1b925362889a11e4423e105a1ae863ae"))
DESTINATION = PublicKey(bytes.fromhex("032cd721c11dd2f2bd5e555f9a3c9013d42926338bcd850de68ad1d0df83cfe4"))
USD = Asset.new_credit("USD", ISSUER)

PATH_PAYMENT_BODY = (
    "AAAAAAAAAAEAAAAAKoNGsl81xj8D8XyekzKZXRuSU2KImhHkQj4QWhroY64AAAAAAAAE0gAAAAAAAAAAAJiWgAAAAAFVU0QA"
    "AAAAACqDRrJfNcY/A/F8npMymV0bklNiiJoR5EI+EFoa6GOuAAAAAAADDUAAAAAAAyzXIcEd0vK9XlVfmjyQE9QpJjOLzYUN"
    "5orR0N+Dz+QAAAABVVNEAAAAAAAqg0ayXzXGPwPxfJ6TMpldG5JTYoiaEeRCPhBaGuhjrgAAAAAAAw1AAAAAAA=="
)
PATH_PAYMENT_STRICT_RECEIVE_SUCCESS = "AAAAAACYloD/////AAAAAQAAAAAAAAAC" + PATH_PAYMENT_BODY
PATH_PAYMENT_STRICT_SEND_SUCCESS = "AAAAAACYloD/////AAAAAQAAAAAAAAAN" + PATH_PAYMENT_BODY
PATH_PAYMENT_NO_ISSUER = (
    "AAAAAACYloD/////AAAAAQAAAAAAAAAC////9wAAAAFVU0QAAAAAACqDRrJfNcY/A/F8npMymV0bklNiiJoR5EI+EFoa6GOu"
    "AAAAAA=="
)

OFFER_ATOMS = (
    "AAAAAAAAAAEAAAAAKoNGsl81xj8D8XyekzKZXRuSU2KImhHkQj4QWhroY64AAAAAAAAE0gAAAAAAAAAAAJiWgAAAAAFVU0QA"
    "AAAAACqDRrJfNcY/A/F8npMymV0bklNiiJoR5EI+EFoa6GOuAAAAAAADDUAAAAA"
)
OFFER_ENTRY = (
    "AAAAACqDRrJfNcY/A/F8npMymV0bklNiiJoR5EI+EFoa6GOuAAAAAAAABNIAAAAAAAAAAVVTRAAAAAAAKoNGsl81xj8D8Xye"
    "kzKZXRuSU2KImhHkQj4QWhroY64AAAAAAJiWgAAAA+gAABEYAAAAAQAAAAAAAAAA"
)
MANAGE_SELL_OFFER_CREATED = "AAAAAACYloD/////AAAAAQAAAAAAAAAD" + OFFER_ATOMS + "A" + OFFER_ENTRY
MANAGE_SELL_OFFER_UPDATED = "AAAAAACYloD/////AAAAAQAAAAAAAAAD" + OFFER_ATOMS + "B" + OFFER_ENTRY
MANAGE_SELL_OFFER_DELETED = "AAAAAACYloD/////AAAAAQAAAAAAAAAD" + OFFER_ATOMS + "CAAAAAA=="
MANAGE_BUY_OFFER_CREATED = "AAAAAACYloD/////AAAAAQAAAAAAAAAM" + OFFER_ATOMS + "A" + OFFER_ENTRY
PASSIVE_SELL_OFFER_CREATED = "AAAAAACYloD/////AAAAAQAAAAAAAAAE" + OFFER_ATOMS + "A" + OFFER_ENTRY

ACCOUNT_MERGE_SUCCESS = "AAAAAACYloD/////AAAAAQAAAAAAAAAIAAAAAAAAAAAF9eEAAAAAAA=="
INFLATION_SUCCESS = (
    "AAAAAACYloD/////AAAAAQAAAAAAAAAJAAAAAAAAAAIAAAAAKoNGsl81xj8D8XyekzKZXRuSU2KImhHkQj4QWhroY64AAAAA"
    "AJiWgAAAAAADLNchwR3S8r1eVV+aPJAT1CkmM4vNhQ3mitHQ34PP5AAAAAABMS0AAAAAAA=="
)
CREATE_CLAIMABLE_BALANCE_SUCCESS = (
    "AAAAAAAAA+j/////AAAAAQAAAAAAAAAOAAAAAAAAAAAHBwcHBwcHBwcHBwcHBwcHBwcHBwcHBwcHBwcHBwcHBwAAAAA="
)


def single_result(xdr):
    result = TransactionResult.from_xdr_base64(xdr)
    assert result.is_failed()
    assert len(result.results) == 1
    assert result.to_xdr_base64() == xdr
    return result.results[0]


class TestOperationResultCodes:
    """Outer codes and payload-free inner codes."""

    @pytest.mark.parametrize(
        "xdr,code",
        [
            ("AAAAAACYloD/////AAAAAf////8AAAAA", OperationResultCode.BAD_AUTH),
            ("AAAAAACYloD/////AAAAAf////4AAAAA", OperationResultCode.NO_ACCOUNT),
            ("AAAAAAAAA+j/////AAAAAf////wAAAAA", OperationResultCode.TOO_MANY_SUBENTRIES),
        ],
    )
    def test_outer_codes(self, xdr, code):
        result = single_result(xdr)
        assert result.code == code
        assert not result.is_inner()
        assert result.as_inner() is None
        assert not result.is_success()

    def test_create_account_success(self):
        result = single_result("AAAAAACYloD/////AAAAAQAAAAAAAAAAAAAAAAAAAAA=")
        inner = result.as_inner()
        assert inner.operation_type == OperationType.CREATE_ACCOUNT
        assert inner.is_success()
        assert inner.payload is None
        assert result.is_success()

    def test_payment_no_issuer_has_no_payload(self):
        inner = single_result("AAAAAACYloD/////AAAAAQAAAAAAAAAB////9wAAAAA=").as_inner()
        assert inner.operation_type == OperationType.PAYMENT
        assert inner.result_code == PaymentResultCode.NO_ISSUER
        assert inner.payload is None

    def test_set_options_invalid_home_domain(self):
        inner = single_result("AAAAAACYloD/////AAAAAQAAAAAAAAAF////9wAAAAA=").as_inner()
        assert inner.result_code == SetOptionsResultCode.INVALID_HOME_DOMAIN
        assert not inner.is_success()

    def test_begin_sponsoring_success(self):
        inner = single_result("AAAAAAAAA+j/////AAAAAQAAAAAAAAAQAAAAAAAAAAA=").as_inner()
        assert inner.operation_type == OperationType.BEGIN_SPONSORING_FUTURE_RESERVES
        assert inner.is_success()

    def test_unknown_outer_code(self):
        with pytest.raises(XdrError):
            OperationResult.from_xdr_bytes(b"\xff\xff\xff\xf0")

    def test_unknown_inner_code(self):
        # CreateAccount has no code -9
        data = bytes.fromhex("00000000" "00000000" "fffffff7")
        with pytest.raises(XdrError):
            OperationResult.from_xdr_bytes(data)

    def test_unknown_operation_type(self):
        data = bytes.fromhex("00000000" "00000064" "00000000")
        with pytest.raises(XdrError):
            OperationResult.from_xdr_bytes(data)

    def test_outer_code_with_inner_rejected(self):
        inner = InnerOperationResult(operation_type=OperationType.INFLATION, code=-1)
        with pytest.raises(XdrError):
            OperationResult(code=OperationResultCode.BAD_AUTH, inner=inner)

    def test_missing_payload_rejected(self):
        with pytest.raises(XdrError):
            InnerOperationResult(operation_type=OperationType.ACCOUNT_MERGE, code=0)


class TestPathPaymentResults:

    @pytest.mark.parametrize(
        "xdr,operation_type,code",
        [
            (PATH_PAYMENT_STRICT_RECEIVE_SUCCESS, OperationType.PATH_PAYMENT_STRICT_RECEIVE,
             PathPaymentStrictReceiveResultCode.SUCCESS),
            (PATH_PAYMENT_STRICT_SEND_SUCCESS, OperationType.PATH_PAYMENT_STRICT_SEND,
             PathPaymentStrictSendResultCode.SUCCESS),
        ],
    )
    def test_success(self, xdr, operation_type, code):
        inner = single_result(xdr).as_inner()
        assert inner.operation_type == operation_type
        assert inner.result_code == code
        success = inner.payload
        assert isinstance(success, PathPaymentSuccess)

        assert len(success.offers) == 1
        atom = success.offers[0]
        assert atom.kind == ClaimAtomType.V0
        assert atom.seller == ISSUER
        assert atom.offer_id == 1234
        assert atom.asset_sold == Asset.new_native()
        assert atom.amount_sold == Stroops(10000000)
        assert atom.asset_bought == USD
        assert atom.amount_bought == Stroops(200000)

        assert success.last.destination == DESTINATION
        assert success.last.asset == USD
        assert success.last.amount == Stroops(200000)

    def test_no_issuer_carries_asset(self):
        inner = single_result(PATH_PAYMENT_NO_ISSUER).as_inner()
        assert inner.result_code == PathPaymentStrictReceiveResultCode.NO_ISSUER
        assert inner.payload == USD

    def test_strict_send_under_destmin(self):
        assert PathPaymentStrictSendResultCode(-12) == PathPaymentStrictSendResultCode.UNDER_DESTMIN
        assert PathPaymentStrictReceiveResultCode(-12) == PathPaymentStrictReceiveResultCode.OVER_SENDMAX


class TestManageOfferResults:

    @pytest.mark.parametrize(
        "xdr,operation_type,effect",
        [
            (MANAGE_SELL_OFFER_CREATED, OperationType.MANAGE_SELL_OFFER, ManageOfferEffect.CREATED),
            (MANAGE_SELL_OFFER_UPDATED, OperationType.MANAGE_SELL_OFFER, ManageOfferEffect.UPDATED),
            (MANAGE_BUY_OFFER_CREATED, OperationType.MANAGE_BUY_OFFER, ManageOfferEffect.CREATED),
            (PASSIVE_SELL_OFFER_CREATED, OperationType.CREATE_PASSIVE_SELL_OFFER, ManageOfferEffect.CREATED),
        ],
    )
    def test_offer_kept(self, xdr, operation_type, effect):
        inner = single_result(xdr).as_inner()
        assert inner.operation_type == operation_type
        assert inner.result_code == ManageOfferResultCode.SUCCESS
        success = inner.payload
        assert isinstance(success, ManageOfferSuccess)
        assert len(success.offers_claimed) == 1
        assert success.offers_claimed[0].offer_id == 1234
        assert success.effect == effect

        offer = success.offer
        assert offer.seller == ISSUER
        assert offer.offer_id == 1234
        assert offer.selling == Asset.new_native()
        assert offer.buying == USD
        assert offer.amount == Stroops(10000000)
        assert offer.price == Price(1000, 4376)
        assert offer.flags == 1

    def test_offer_deleted(self):
        success = single_result(MANAGE_SELL_OFFER_DELETED).as_inner().payload
        assert success.effect == ManageOfferEffect.DELETED
        assert success.offer is None
        assert len(success.offers_claimed) == 1

    def test_created_without_offer_rejected(self):
        with pytest.raises(XdrError):
            ManageOfferSuccess(offers_claimed=[], effect=ManageOfferEffect.CREATED)


class TestOtherPayloads:

    def test_account_merge_balance(self):
        inner = single_result(ACCOUNT_MERGE_SUCCESS).as_inner()
        assert inner.operation_type == OperationType.ACCOUNT_MERGE
        assert inner.payload == Stroops(100000000)

    def test_inflation_payouts(self):
        payouts = single_result(INFLATION_SUCCESS).as_inner().payload
        assert [p.destination for p in payouts] == [ISSUER, DESTINATION]
        assert [p.amount for p in payouts] == [Stroops(10000000), Stroops(20000000)]

    def test_create_claimable_balance_id(self):
        inner = single_result(CREATE_CLAIMABLE_BALANCE_SUCCESS).as_inner()
        assert inner.operation_type == OperationType.CREATE_CLAIMABLE_BALANCE
        assert inner.payload == ClaimableBalanceId(bytes([7]) * 32)


class TestClaimAtoms:

    def test_order_book_atom_round_trip(self):
        atom = ClaimAtom(
            kind=ClaimAtomType.ORDER_BOOK, seller=ISSUER, offer_id=7,
            asset_sold=USD, amount_sold=Stroops(5), asset_bought=Asset.new_native(),
            amount_bought=Stroops(10),
        )
        assert ClaimAtom.from_xdr_bytes(atom.to_xdr_bytes()) == atom

    def test_liquidity_pool_atom_needs_pool_id(self):
        with pytest.raises(XdrError):
            ClaimAtom(
                kind=ClaimAtomType.LIQUIDITY_POOL, asset_sold=USD, amount_sold=Stroops(5),
                asset_bought=Asset.new_native(), amount_bought=Stroops(10),
            )

    def test_unknown_atom_type(self):
        with pytest.raises(XdrError):
            ClaimAtom.from_xdr_bytes(bytes.fromhex("00000003"))
