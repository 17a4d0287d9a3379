from decimal import Decimal

from xrpl_swap.core.datatypes import Expiry, OrderIntent, RatePair, Side
from xrpl_swap.core.exc import BuildFailure
from xrpl_swap.rates import RateResolver
from xrpl_swap.session import SwapSession

ACCOUNT = "rTestAccount11111111111111111111111"


def test_typing_in_either_field(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    assert s.edit(Side.AMOUNT, "10")
    assert s.value_text == "4.000000"
    assert s.driving_side is Side.AMOUNT

    assert s.edit(Side.VALUE, "4")
    assert s.amount_text == "10.000000"
    assert s.driving_side is Side.VALUE


def test_reverted_form_sells_the_second_asset(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver, revert=True)
    assert s.leg_in == usd and s.leg_out == xrp
    s.edit(Side.AMOUNT, "4")
    assert s.value_text == "10.000000"


def test_rejected_keystrokes_leave_state_alone(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    s.edit(Side.AMOUNT, "10")
    assert not s.edit(Side.AMOUNT, "abc")
    assert s.amount_text == "10" and s.value_text == "4.000000"


def test_lone_dot_becomes_zero_point(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    s.edit(Side.VALUE, "4")
    assert s.edit(Side.AMOUNT, ".")
    assert s.amount_text == "0."
    # "0." converts to nothing; the other field keeps its last value
    assert s.value_text == "4"


def test_clearing_a_field_clears_both(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    s.edit(Side.AMOUNT, "10")
    assert s.edit(Side.AMOUNT, "")
    assert s.amount_text == "" and s.value_text == ""


def test_rate_refresh_recomputes_from_driving_side(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    s.edit(Side.AMOUNT, "10")
    resolver.update(xrp, usd, RatePair(Decimal(1), Decimal(2)))
    s.on_rates_refreshed()
    assert s.amount_text == "10" and s.value_text == "5.000000"

    s.edit(Side.VALUE, "4")
    resolver.update(xrp, usd, RatePair(Decimal(1), Decimal("2.5")))
    s.on_rates_refreshed()
    assert s.value_text == "4" and s.amount_text == "10.000000"


def test_without_rates_nothing_is_derived(xrp, usd):
    s = SwapSession(xrp, usd, RateResolver())
    assert not s.can_convert()
    assert s.edit(Side.AMOUNT, "10")
    assert s.amount_text == "10" and s.value_text == ""


def test_switch_flips_and_clears(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    s.edit(Side.VALUE, "4")
    s.switch()
    assert s.revert and s.amount_text == "" and s.value_text == ""
    assert s.driving_side is Side.AMOUNT
    assert s.leg_in == usd


def test_fill_from_balance(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver)
    assert s.fill("12.5")
    assert s.amount_text == "12.5" and s.value_text == "5.000000"
    assert s.fill("12.5", Decimal("0.5"))
    assert s.amount_text == "6.250000" and s.value_text == "2.500000"
    assert not s.fill("0")


def test_sell_all_through_the_session(xrp, solo):
    resolver = RateResolver()
    resolver.update(xrp, solo, RatePair(Decimal(1), Decimal("0.5")))
    s = SwapSession(xrp, solo, resolver, revert=True)
    s.fill("12.5")
    assert s.value_text == "6.250000"

    tx = s.build_order(ACCOUNT, balance="12.5").payload.to_tx_json()
    print(f"[session sell-all] {tx}")
    assert tx["SendMax"]["value"] == "12.5"
    assert tx["Amount"] == "6250000"
    assert tx["DeliverMin"] == "5937500"


def test_limit_order_from_the_session(resolver, xrp, usd):
    s = SwapSession(xrp, usd, resolver, intent=OrderIntent.LIMIT, expiry=Expiry.parse("1h"))
    s.edit(Side.AMOUNT, "2")
    assert s.build_order(ACCOUNT).failure is BuildFailure.MISSING_LIMIT_PRICE

    s.limit_price = "3.06"
    tx = s.build_order(ACCOUNT, now_ms=946_684_800_000).payload.to_tx_json()
    assert tx["TakerGets"] == "2000000"
    assert tx["TakerPays"]["value"] == "6.12"
    assert tx["Expiration"] == 3600
