from decimal import Decimal

import pytest

from xrpl_swap.config import SwapConfig
from xrpl_swap.core.constants import TF_PARTIAL_PAYMENT, TF_SELL
from xrpl_swap.core.datatypes import AmountPair, AssetDescriptor, Expiry, OrderIntent, Side
from xrpl_swap.core.exc import BuildFailure
from xrpl_swap.memos import to_hex
from xrpl_swap.orders import (
    OfferShape,
    PaymentShape,
    apply_slippage,
    build,
    expiration_from,
    limit_output,
)
from xrpl_swap.trustlines import TrustlineSnapshot

ACCOUNT = "rTestAccount11111111111111111111111"
ISSUER = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"
OTHER_ISSUER = "rOtherIssuer2222222222222222222222"
NOW_MS = 1_700_000_000_123

NEVER = Expiry.never()


def market(leg_in, leg_out, amount_in, amount_out, slippage="1", **kw):
    amounts = AmountPair.from_text(amount_in, amount_out, Side.AMOUNT)
    return build(OrderIntent.MARKET, leg_in, leg_out, amounts, slippage, NEVER, ACCOUNT, **kw)


def limit(leg_in, leg_out, amount_in, amount_out, limit_price, expiry=NEVER, **kw):
    amounts = AmountPair.from_text(amount_in, amount_out, Side.AMOUNT)
    return build(OrderIntent.LIMIT, leg_in, leg_out, amounts, "0", expiry, ACCOUNT, limit_price=limit_price, now_ms=NOW_MS, **kw)


# -----------------------------
# MARKET -> Payment
# -----------------------------

def test_market_payment_xrp_to_token(xrp, usd):
    res = market(xrp, usd, "10", "4", "1")
    assert res.ok and res.failure is None
    tx = res.payload.to_tx_json()
    print(f"[market] {tx}")
    assert tx["TransactionType"] == "Payment"
    assert tx["Account"] == ACCOUNT and tx["Destination"] == ACCOUNT
    assert tx["SendMax"] == "10000000"
    assert tx["Amount"] == {"currency": "USD", "issuer": ISSUER, "value": "4"}
    assert tx["DeliverMin"] == {"currency": "USD", "issuer": ISSUER, "value": "3.96"}
    assert tx["Flags"] == TF_PARTIAL_PAYMENT == 131072
    assert tx["Memos"] == [{"Memo": {"MemoData": to_hex("Swap via https://xrpl.to")}}]
    assert "SourceTag" not in tx
    assert isinstance(res.payload.shape, PaymentShape)


def test_market_payment_token_to_xrp(xrp, usd):
    tx = market(usd, xrp, "4", "10", "1").payload.to_tx_json()
    assert tx["SendMax"] == {"currency": "USD", "issuer": ISSUER, "value": "4"}
    assert tx["Amount"] == "10000000"
    assert tx["DeliverMin"] == "9900000"


@pytest.mark.parametrize("slippage", ["0", "0.5", "1", "5", "50", "99.9", 0, Decimal("3")])
def test_deliver_min_never_exceeds_amount(xrp, usd, slippage):
    tx = market(xrp, usd, "10", "4.123456", slippage).payload.to_tx_json()
    lo, hi = Decimal(tx["DeliverMin"]["value"]), Decimal(tx["Amount"]["value"])
    assert lo <= hi
    assert (lo == hi) == (Decimal(str(slippage)) == 0)


def test_native_deliver_min_is_at_least_one_drop(xrp, usd):
    tx = market(usd, xrp, "0.0000004", "0.000001", "50").payload.to_tx_json()
    assert tx["Amount"] == "1"
    assert tx["DeliverMin"] == "1"


def test_wire_amounts_truncate(xrp, usd):
    tx = market(xrp, usd, "1.2345678", "4.1234567890123456789", "0").payload.to_tx_json()
    assert tx["SendMax"] == "1234567"
    assert tx["Amount"]["value"] == "4.12345678901234"


def test_sell_all_passes_balance_through(xrp, solo):
    balance = "12.3456789012345678"
    res = market(solo, xrp, balance, "6", "1", balance=balance)
    send = res.payload.to_tx_json()["SendMax"]
    print(f"[sell-all] SendMax={send}")
    assert send["value"] == balance
    assert send["currency"] == "534F4C4F00000000000000000000000000000000"
    assert send["issuer"] == OTHER_ISSUER


def test_sell_all_needs_exact_balance_text(xrp, solo):
    res = market(solo, xrp, "12.3456789012345678", "6", "1", balance="12.3456789012345679")
    assert res.payload.to_tx_json()["SendMax"]["value"] == "12.3456789012345"
    res = market(solo, xrp, "12.50", "6", "1", balance="12.5")
    assert res.payload.to_tx_json()["SendMax"]["value"] == "12.5"


def test_send_max_buffer_skipped_on_sell_all(xrp, solo):
    cfg = SwapConfig(send_max_buffer_pct=Decimal("0.5"))
    assert market(xrp, solo, "10", "1", config=cfg).payload.to_tx_json()["SendMax"] == "10050000"
    sell_all = market(solo, xrp, "10", "1", balance="10", config=cfg).payload.to_tx_json()
    assert sell_all["SendMax"]["value"] == "10"


def test_config_source_tag_and_memo_type(xrp, usd):
    cfg = SwapConfig(source_tag=12345, memo_type="swap", memo_origin="https://example.org")
    tx = market(xrp, usd, "10", "4", config=cfg).payload.to_tx_json()
    assert tx["SourceTag"] == 12345
    assert tx["Memos"][0]["Memo"] == {
        "MemoType": to_hex("swap"),
        "MemoData": to_hex("Swap via https://example.org"),
    }


# -----------------------------
# LIMIT -> OfferCreate
# -----------------------------

def test_limit_offer_xrp_to_token(xrp, usd):
    res = limit(xrp, usd, "2", "6", "3.06", Expiry.parse("24h"))
    tx = res.payload.to_tx_json()
    print(f"[limit] {tx}")
    assert tx["TransactionType"] == "OfferCreate"
    assert "Destination" not in tx
    assert tx["TakerGets"] == "2000000"
    assert tx["TakerPays"] == {"currency": "USD", "issuer": ISSUER, "value": "6.12"}
    assert tx["Expiration"] == 1_700_000_000 - 946_684_800 + 24 * 3600 == 753_401_600
    assert tx["Flags"] == 0
    assert tx["Memos"] == [{"Memo": {"MemoData": to_hex("Limit via https://xrpl.to")}}]
    assert isinstance(res.payload.shape, OfferShape)


def test_limit_offer_token_to_xrp(xrp, usd):
    tx = limit(usd, xrp, "6.12", "2", "3.06").payload.to_tx_json()
    assert tx["TakerGets"] == {"currency": "USD", "issuer": ISSUER, "value": "6.12"}
    assert tx["TakerPays"] == "2000000"
    assert "Expiration" not in tx


def test_limit_offer_between_tokens(usd, solo):
    tx = limit(usd, solo, "3", "6", "2").payload.to_tx_json()
    assert tx["TakerPays"]["value"] == "6"


def test_limit_offer_flags_from_config(xrp, usd):
    tx = limit(xrp, usd, "2", "6", "3.06", config=SwapConfig(offer_flags=TF_SELL)).payload.to_tx_json()
    assert tx["Flags"] == 0x00080000


def test_limit_ignores_slippage(xrp, usd):
    amounts = AmountPair.from_text("2", "6")
    res = build(OrderIntent.LIMIT, xrp, usd, amounts, "150", NEVER, ACCOUNT, limit_price="3.06")
    assert res.ok


@pytest.mark.parametrize("price", [None, "", "0", "-1", "abc"])
@pytest.mark.parametrize("amounts", [("0", "0"), ("", ""), ("2", "6"), ("-1", "3")])
def test_limit_without_price_always_rejected(xrp, usd, price, amounts):
    res = limit(xrp, usd, amounts[0], amounts[1], price)
    assert not res.ok and res.payload is None
    assert res.failure is BuildFailure.MISSING_LIMIT_PRICE


def test_expiration_and_helpers():
    assert expiration_from(NEVER, NOW_MS) is None
    assert expiration_from(Expiry.duration(1), 946_684_800_999) == 3600
    assert apply_slippage(Decimal("4"), Decimal("1")) == Decimal("3.96")
    assert apply_slippage(Decimal("4"), Decimal("0")) == Decimal("4")


def test_limit_output_quoting(xrp, usd, solo):
    assert limit_output(xrp, usd, Decimal("2"), Decimal("3.06")) == Decimal("6.12")
    assert limit_output(usd, xrp, Decimal("6.12"), Decimal("3.06")) == Decimal("2")
    assert limit_output(usd, solo, Decimal("3"), Decimal("2")) == Decimal("6")


# -----------------------------
# Validation
# -----------------------------

@pytest.mark.parametrize("amounts", [("0", "4"), ("10", ""), ("-1", "4"), ("abc", "4"), ("10", "0")])
def test_market_needs_positive_amounts(xrp, usd, amounts):
    res = market(xrp, usd, amounts[0], amounts[1], "1")
    assert res.failure is BuildFailure.NON_POSITIVE_AMOUNT


@pytest.mark.parametrize("slippage", ["100", "150", "-1", "abc", None])
def test_market_rejects_slippage_out_of_range(xrp, usd, slippage):
    assert market(xrp, usd, "10", "4", slippage).failure is BuildFailure.INVALID_SLIPPAGE


def test_validation_order(xrp, usd, solo):
    empty = TrustlineSnapshot.empty(ACCOUNT)
    assert market(xrp, solo, "0", "4", "150", trustlines=empty).failure is BuildFailure.NON_POSITIVE_AMOUNT
    assert market(xrp, solo, "10", "4", "150", trustlines=empty).failure is BuildFailure.INVALID_SLIPPAGE
    assert limit(xrp, solo, "0", "0", None, trustlines=empty).failure is BuildFailure.MISSING_LIMIT_PRICE


def test_trustline_gate(xrp, solo):
    empty = TrustlineSnapshot.empty(ACCOUNT)
    res = market(xrp, solo, "10", "4", trustlines=empty)
    assert res.failure is BuildFailure.MISSING_TRUSTLINE
    assert res.missing == (solo,)

    lines = TrustlineSnapshot.from_lines(ACCOUNT, [{"currency": "SOLO", "account": OTHER_ISSUER}])
    assert market(xrp, solo, "10", "4", trustlines=lines).ok
    assert limit(xrp, solo, "10", "4", "0.4", trustlines=empty).failure is BuildFailure.MISSING_TRUSTLINE


def test_amount_truncating_to_zero_is_rejected(xrp, usd):
    assert market(xrp, usd, "0.0000001", "4").failure is BuildFailure.NON_POSITIVE_AMOUNT


def test_unencodable_asset_is_rejected(xrp):
    bad = AssetDescriptor.issued("A" * 26, ISSUER)
    assert market(xrp, bad, "10", "4").failure is BuildFailure.INVALID_ASSET
