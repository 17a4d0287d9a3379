"""Quantity Converter: derive the counter-amount of the swap form.

Rates are fetched for the canonical pair order (asset_a, asset_b) and are
"native units per one unit" of each asset. The form may show the pair
reversed (`revert`), and either field may drive the calculation; together
they decide whether the typed amount is denominated in asset_a (FORWARD)
or in asset_b (REVERSE):

    direction = FORWARD  iff  (driving_side is AMOUNT) XOR revert

Conversion table (PairKind x Direction):

    NATIVE_TO_OTHER   FORWARD: amount / rate_b            REVERSE: amount * rate_b
    OTHER_TO_NATIVE   FORWARD: amount * rate_a            REVERSE: amount / rate_a
    OTHER_TO_OTHER    FORWARD: amount * rate_a / rate_b   REVERSE: amount * rate_b / rate_a

Rounding policy: results are truncated toward zero (ROUND_DOWN) to six
fractional digits, the native wire precision. Invalid input of any kind
yields "" so the caller leaves the other field untouched.
"""

from __future__ import annotations

import logging
from decimal import Decimal, DecimalException
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .core.amounts import parse_positive
from .core.constants import CONVERTER_PLACES
from .core.datatypes import AssetDescriptor, RatePair, Side
from .core.fmt import format_fixed

logger = logging.getLogger(__name__)


class PairKind(Enum):
    NATIVE_TO_OTHER = "native_to_other"
    OTHER_TO_NATIVE = "other_to_native"
    # Also covers the degenerate native/native pair (unit rates).
    OTHER_TO_OTHER = "other_to_other"


class Direction(Enum):
    FORWARD = "forward"   # amount in asset_a, result in asset_b
    REVERSE = "reverse"   # amount in asset_b, result in asset_a


def classify(asset_a: AssetDescriptor, asset_b: AssetDescriptor) -> PairKind:
    if asset_a.is_native and not asset_b.is_native:
        return PairKind.NATIVE_TO_OTHER
    if asset_b.is_native and not asset_a.is_native:
        return PairKind.OTHER_TO_NATIVE
    return PairKind.OTHER_TO_OTHER


def resolve_direction(driving_side: Side, revert: bool) -> Direction:
    if (driving_side is Side.AMOUNT) != bool(revert):
        return Direction.FORWARD
    return Direction.REVERSE


_Rule = Callable[[Decimal, Decimal, Decimal], Optional[Decimal]]


def _div(x: Decimal, d: Decimal) -> Optional[Decimal]:
    return None if d <= 0 else x / d


def _mul(x: Decimal, k: Decimal) -> Optional[Decimal]:
    return None if k <= 0 else x * k


def _cross(x: Decimal, num: Decimal, den: Decimal) -> Optional[Decimal]:
    if num <= 0 or den <= 0:
        return None
    return x * num / den


# Exhaustive over PairKind x Direction; each rule gets (amount, rate_a, rate_b).
_RULES: Dict[Tuple[PairKind, Direction], _Rule] = {
    (PairKind.NATIVE_TO_OTHER, Direction.FORWARD): lambda x, ra, rb: _div(x, rb),
    (PairKind.NATIVE_TO_OTHER, Direction.REVERSE): lambda x, ra, rb: _mul(x, rb),
    (PairKind.OTHER_TO_NATIVE, Direction.FORWARD): lambda x, ra, rb: _mul(x, ra),
    (PairKind.OTHER_TO_NATIVE, Direction.REVERSE): lambda x, ra, rb: _div(x, ra),
    (PairKind.OTHER_TO_OTHER, Direction.FORWARD): lambda x, ra, rb: _cross(x, ra, rb),
    (PairKind.OTHER_TO_OTHER, Direction.REVERSE): lambda x, ra, rb: _cross(x, rb, ra),
}


def convert_decimal(
    amount,
    rates: RatePair,
    asset_a: AssetDescriptor,
    asset_b: AssetDescriptor,
    driving_side: Side = Side.AMOUNT,
    revert: bool = False,
) -> Optional[Decimal]:
    """Unrounded counter-amount, or None when it cannot be computed."""
    amt = parse_positive(amount)
    if amt is None:
        return None
    kind = classify(asset_a, asset_b)
    direction = resolve_direction(driving_side, revert)
    if kind is PairKind.OTHER_TO_OTHER and asset_a.is_native and asset_b.is_native:
        return amt
    try:
        result = _RULES[(kind, direction)](amt, rates.rate_a, rates.rate_b)
    except DecimalException as e:
        logger.debug("convert: %s for amount=%s kind=%s direction=%s", e, amt, kind.value, direction.value)
        return None
    if result is None or result.is_nan() or result.is_infinite():
        return None
    return result


def convert(
    amount,
    rates: RatePair,
    asset_a: AssetDescriptor,
    asset_b: AssetDescriptor,
    driving_side: Side = Side.AMOUNT,
    revert: bool = False,
) -> str:
    """Counter-amount as field text with six truncated decimals, or "".

    Never raises: empty, zero, negative or non-numeric amounts, unavailable
    rates and non-finite intermediates all produce "".
    """
    result = convert_decimal(amount, rates, asset_a, asset_b, driving_side, revert)
    if result is None:
        return ""
    try:
        text = format_fixed(result, CONVERTER_PLACES)
    except DecimalException:
        return ""
    if Decimal(text) == 0:
        return ""
    return text


__all__ = [
    "PairKind",
    "Direction",
    "classify",
    "resolve_direction",
    "convert",
    "convert_decimal",
]
