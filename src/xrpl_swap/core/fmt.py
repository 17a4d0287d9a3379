"""
Formatting helpers and Decimal quantisation (field text).

Amounts shown in the swap form are fixed-point strings truncated toward
zero; nothing here relies on the ambient context's rounding mode.
"""

from decimal import Decimal, getcontext, ROUND_DOWN

from .exc import AmountDomainError
from .constants import CONVERTER_PLACES


# ---------------------------------------------------------------------------
# Global Decimal precision
# ---------------------------------------------------------------------------

#: Default global precision (number of significant digits) for Decimal
#: arithmetic in rate conversions.
DEFAULT_DECIMAL_PRECISION: int = 28
getcontext().prec = DEFAULT_DECIMAL_PRECISION


# ---------------------------------------------------------------------------
# Quantisation helpers
# ---------------------------------------------------------------------------

def quantize_down(x: Decimal, quantum: Decimal) -> Decimal:
    """Quantise toward zero onto the grid (won't show more than exists)."""
    if x < 0:
        raise AmountDomainError("negative input not allowed for quantize_down")
    if x == 0:
        return Decimal("0")
    q = (x / quantum).to_integral_value(rounding=ROUND_DOWN)
    return q * quantum


def format_fixed(x: Decimal, places: int = CONVERTER_PLACES) -> str:
    """Fixed-point string with exactly `places` fractional digits, truncated.

      Decimal('4')          -> '4.000000'
      Decimal('3.1415929')  -> '3.141592'
    """
    q = Decimal(1).scaleb(-places)
    return format(x.quantize(q, rounding=ROUND_DOWN), f".{places}f")


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "quantize_down",
    "format_fixed",
]
