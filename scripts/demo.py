"""Swap-form demo: quote a counter-amount and build the resulting transaction.

Scenarios covered:
S1) XRP -> issued token, market order with slippage (Payment)
S2) XRP -> issued token, limit order with 24h expiry (OfferCreate)
S3) issued token -> XRP, sell the whole balance (SendMax passes through)

Run a single custom quote instead with --amount/--rate-a/--rate-b.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal

from xrpl_swap import (
    AmountPair,
    AssetDescriptor,
    Expiry,
    FeedConfig,
    OrderIntent,
    PairRatesClient,
    RatePair,
    RateResolver,
    Side,
    SwapSession,
    TrustlineSnapshot,
    build,
    convert,
)

ACCOUNT = "rDemoAccount1111111111111111111111"
ISSUER = "rMxCKbEDwqr76QuheSUMdEGf4B9xJ8m5De"

XRP = AssetDescriptor.native()
RLUSD = AssetDescriptor.issued("RLUSD", ISSUER)


def print_result(title: str, result) -> None:
    print(f"\n=== {title} ===")
    if not result.ok:
        print(f"- rejected: {result.failure.value}")
        for a in result.missing:
            print(f"  • missing trustline: {a.display_name}")
        return
    print(json.dumps(result.payload.to_tx_json(), indent=2))


def scenario_market(resolver: RateResolver) -> None:
    s = SwapSession(XRP, RLUSD, resolver, slippage=Decimal("1"))
    s.edit(Side.AMOUNT, "10")
    print(f"\nS1 quote: 10 XRP -> {s.value_text} RLUSD")
    lines = TrustlineSnapshot.from_lines(ACCOUNT, [{"currency": RLUSD.wire_currency, "account": ISSUER}])
    print_result("S1 market", s.build_order(ACCOUNT, trustlines=lines))


def scenario_limit(now_ms: int) -> None:
    amounts = AmountPair.from_text("2", "6", Side.AMOUNT)
    result = build(
        OrderIntent.LIMIT, XRP, RLUSD, amounts, 0, Expiry.parse("24h"), ACCOUNT,
        limit_price="3.06", now_ms=now_ms,
    )
    print_result("S2 limit", result)


def scenario_sell_all(resolver: RateResolver) -> None:
    s = SwapSession(XRP, RLUSD, resolver, revert=True, slippage=Decimal("0.5"))
    balance = "12.3456789"
    s.fill(balance)
    print(f"\nS3 quote: {s.amount_text} RLUSD -> {s.value_text} XRP")
    print_result("S3 sell all", s.build_order(ACCOUNT, balance=balance))


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Swap-form calculation demo.")
    ap.add_argument("--amount", help="custom quote: amount typed into the top field")
    ap.add_argument("--rate-a", default="1", help="native per unit of the first asset")
    ap.add_argument("--rate-b", default="2.5", help="native per unit of the second asset")
    ap.add_argument("--revert", action="store_true", help="form shows the pair reversed")
    ap.add_argument("--live", action="store_true", help="fetch XRP/RLUSD rates from the pair-rate feed")
    ap.add_argument("--now-ms", type=int, default=1_700_000_000_000, help="wall clock for offer expiration")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if args.amount is not None:
        rates = RatePair.from_feed(args.rate_a, args.rate_b)
        out = convert(args.amount, rates, XRP, RLUSD, Side.AMOUNT, args.revert)
        print(out if out else "(no quote)")
        return 0 if out else 1

    if args.live:
        resolver = RateResolver(loader=PairRatesClient(FeedConfig.from_env()))
    else:
        resolver = RateResolver()
        resolver.update(XRP, RLUSD, RatePair(Decimal("1"), Decimal("2.5")))

    scenario_market(resolver)
    scenario_limit(args.now_ms)
    scenario_sell_all(resolver)
    return 0


if __name__ == "__main__":
    sys.exit(main())
