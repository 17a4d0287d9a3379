"""
Amount primitives: XRPAmount (integer drops) and IOUAmount (fixed-point mantissa/exponent).

- XRPAmount: integers in drops at the wire boundary.
- IOUAmount: integer fixed-point with 16 significant digits and bounded exponent.
- Non-negative domain: all amounts are >= 0; negative values are rejected at input.
- Rounding semantics: every Decimal -> wire bridge truncates toward zero.

# Alignment notes:
# - IOU normalisation and bounds follow rippled IOUAmount.cpp (minMantissa=1e15, maxMantissa=1e16-1, minExponent=-96, maxExponent=80).
# - The "value" field of an issued amount carries at most 15 significant digits.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Any, Optional, Tuple

from .constants import (
    ST_MANTISSA_DIGITS,
    ST_MANTISSA_MIN,
    ST_MANTISSA_MAX,
    ST_EXP_MIN,
    ST_EXP_MAX,
    IOU_WIRE_DIGITS,
    XRP_QUANTUM,
)
from .exc import AmountDomainError, NormalisationError


# ----------------------------
# Parsing (user input / feed payloads)
# ----------------------------

def parse_decimal(x: Any) -> Optional[Decimal]:
    """Parse field text or a number into a finite Decimal.

    Returns None for None, empty/blank strings, non-numeric text, NaN and
    Infinity. Floats go through ``str`` so 0.1 stays 0.1.
    """
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, Decimal):
        d = x
    elif isinstance(x, (int, float, str)):
        text = str(x).strip()
        if not text:
            return None
        try:
            d = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if d.is_nan() or d.is_infinite():
        return None
    return d


def parse_positive(x: Any) -> Optional[Decimal]:
    """Like parse_decimal, but only strictly positive values survive."""
    d = parse_decimal(x)
    if d is None or d <= 0:
        return None
    return d


# ----------------------------
# XRP primitive (integer drops)
# ----------------------------

@dataclass(frozen=True)
class XRPAmount:
    """Native XRP amount in integer drops (non-negative domain)."""
    value: int

    def __post_init__(self):
        if self.value < 0:
            raise AmountDomainError("XRPAmount must be >= 0 drops")

    @classmethod
    def from_xrp(cls, x: Decimal) -> "XRPAmount":
        """Truncate an XRP Decimal toward zero onto whole drops."""
        return cls(drops_from_xrp(x))

    def to_wire(self) -> str:
        """Drops as an integer string (no decimal point)."""
        return str(self.value)


# ----------------------------
# IOUAmount (integer fixed-point)
# ----------------------------

def _normalize(m: int, e: int) -> Tuple[int, int]:
    """Normalise mantissa/exponent to canonical range (non-negative domain).

    - Mantissa in [ST_MANTISSA_MIN, ST_MANTISSA_MAX]
    - Exponent within [ST_EXP_MIN, ST_EXP_MAX]
    - Zero is canonicalised to (0, 0)
    """
    if m == 0:
        return 0, 0
    if m < 0:
        raise AmountDomainError("mantissa must be >= 0")

    while m < ST_MANTISSA_MIN and e > ST_EXP_MIN:
        m *= 10
        e -= 1
    if m < ST_MANTISSA_MIN and e == ST_EXP_MIN:
        return 0, 0

    # Dropping digits truncates toward zero.
    while m > ST_MANTISSA_MAX:
        m //= 10
        e += 1
        if e > ST_EXP_MAX:
            raise NormalisationError(f"IOUAmount exponent overflow (m={m}, e={e})")

    if e < ST_EXP_MIN or e > ST_EXP_MAX:
        raise NormalisationError(f"IOUAmount exponent out of bounds (m={m}, e={e})")

    return m, e


@dataclass(frozen=True)
class IOUAmount:
    """Fixed-point IOU amount: mantissa * 10^exponent (non-negative domain).

    Fields are always normalised, so dataclass equality is value equality.
    """
    mantissa: int
    exponent: int

    @staticmethod
    def zero() -> "IOUAmount":
        return IOUAmount(0, 0)

    @classmethod
    def from_components(cls, mantissa: int, exponent: int) -> "IOUAmount":
        m, e = _normalize(mantissa, exponent)
        return cls(m, e)

    @classmethod
    def from_decimal(cls, x: Decimal) -> "IOUAmount":
        """Bridge from Decimal (non-negative only); extra digits are truncated."""
        if x.is_nan() or x.is_infinite():
            raise AmountDomainError("invalid Decimal for IOUAmount")
        if x < 0:
            raise AmountDomainError("negative Decimal not allowed for IOUAmount")
        if x == 0:
            return cls.zero()
        tup = x.as_tuple()
        digits = int("".join(str(d) for d in tup.digits)) if tup.digits else 0
        if digits == 0:
            return cls.zero()
        return cls.from_components(digits, tup.exponent)

    def to_wire(self) -> str:
        """Plain decimal string with at most IOU_WIRE_DIGITS significant digits."""
        if self.mantissa == 0:
            return "0"
        drop = ST_MANTISSA_DIGITS - IOU_WIRE_DIGITS
        m = self.mantissa // 10 ** drop
        e = self.exponent + drop
        return format(Decimal(m).scaleb(e).normalize(), "f")


# ----------------------------
# XRP Decimal bridge
# ----------------------------

def drops_from_xrp(x: Decimal) -> int:
    """Truncate an XRP Decimal toward zero onto whole drops."""
    if x.is_nan() or x.is_infinite():
        raise AmountDomainError("drops_from_xrp: invalid Decimal")
    if x < 0:
        raise AmountDomainError("drops_from_xrp: negative not allowed")
    q = (x / XRP_QUANTUM).to_integral_value(rounding=ROUND_DOWN)
    return int(q)


__all__ = [
    "parse_decimal",
    "parse_positive",
    "drops_from_xrp",
    "XRPAmount",
    "IOUAmount",
]
