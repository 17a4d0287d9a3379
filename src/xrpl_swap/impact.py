"""Price impact and leg valuation helpers for display.

`impact` compares two independently valued legs (fiat valuations fed by
the market-metrics source), not the converter's own output, so it measures
deviation from an external reference price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_FLOOR
from typing import Mapping, Optional

from .config import DEFAULT_CONFIG
from .core.amounts import parse_decimal
from .core.constants import CONVERTER_PLACES, NATIVE_CODE, XRP_QUANTUM
from .core.datatypes import AssetDescriptor
from .core.fmt import quantize_down

_HALF = Decimal("0.5")


def round_cents(x: Decimal) -> Decimal:
    """Round to 2 decimals with ties going up (-2.345 -> -2.34, 2.345 -> 2.35)."""
    return (x * 100 + _HALF).to_integral_value(rounding=ROUND_FLOOR).scaleb(-2)


def impact(input_fiat_value, output_fiat_value) -> Decimal:
    """(output - input) / input * 100, rounded to 2 decimals; 0 when input <= 0."""
    i = parse_decimal(input_fiat_value)
    o = parse_decimal(output_fiat_value)
    if i is None or o is None or i <= 0:
        return Decimal("0.00")
    pct = (o - i) * 100 / i
    return round_cents(pct)


@dataclass(frozen=True)
class FiatValuer:
    """Values one leg of the swap in the selected display currency.

    native_per_fiat: metric per fiat code, in native units per one fiat unit
      (e.g. {"USD": Decimal("0.357")}).
    pegged: issued code -> fiat code it trades 1:1 with.
    """

    native_per_fiat: Mapping[str, Decimal]
    currency: str = "USD"
    pegged: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_CONFIG.pegged))

    def _metric(self, code: str) -> Decimal:
        m = parse_decimal(self.native_per_fiat.get(code))
        return m if m is not None and m > 0 else Decimal(1)

    def value(self, amount, asset: AssetDescriptor, rate) -> Decimal:
        """Fiat value of `amount` of `asset`, whose native rate is `rate`.

        Returns 0 when the amount is missing or no rate is known for an
        issued asset.
        """
        amt = parse_decimal(amount)
        if amt is None or amt <= 0:
            return Decimal(0)
        r = parse_decimal(rate)
        if self.currency == NATIVE_CODE:
            if asset.is_native:
                return amt
            return amt * r if r is not None and r > 0 else Decimal(0)
        if asset.is_native:
            return amt / self._metric(self.currency)
        peg = self.pegged.get(asset.code) or self.pegged.get(asset.name or "")
        if peg is not None:
            if peg == self.currency:
                return amt
            return amt * self._metric(peg) / self._metric(self.currency)
        if r is None or r <= 0:
            return Decimal(0)
        return amt * r / self._metric(self.currency)


@dataclass(frozen=True)
class PriceWarning:
    kind: str           # "buy" or "sell"
    pct: Decimal        # deviation from the reference, in percent
    reference: Decimal  # best ask (buy) or best bid (sell)


def limit_price_deviation(
    limit_price,
    best_bid=None,
    best_ask=None,
    *,
    revert: bool = False,
    threshold: Decimal = DEFAULT_CONFIG.price_warning_pct,
) -> Optional[PriceWarning]:
    """Warn when a limit price sits far on the wrong side of the book.

    A buy (revert=True) warns when the price is more than `threshold`
    percent above the best ask; a sell warns when it is more than
    `threshold` percent below the best bid.
    """
    lp = parse_decimal(limit_price)
    if lp is None or lp <= 0:
        return None
    if revert:
        ask = parse_decimal(best_ask)
        if ask is not None and ask > 0:
            pct = (lp - ask) * 100 / ask
            if pct > threshold:
                return PriceWarning("buy", pct, ask)
        return None
    bid = parse_decimal(best_bid)
    if bid is not None and bid > 0:
        pct = (bid - lp) * 100 / bid
        if pct > threshold:
            return PriceWarning("sell", pct, bid)
    return None


def fill_fraction(balance, fraction) -> str:
    """Share of a balance as six-decimal field text, truncated ("" if none)."""
    bal = parse_decimal(balance)
    frac = parse_decimal(fraction)
    if bal is None or frac is None or bal <= 0 or frac <= 0:
        return ""
    v = quantize_down(bal * frac, XRP_QUANTUM)
    return format(v, f".{CONVERTER_PLACES}f")


__all__ = ["impact", "round_cents", "FiatValuer", "PriceWarning", "limit_price_deviation", "fill_fraction"]
