"""
XRPL Swap Core Constants
========================

Ledger-aligned constants for amount encoding, epochs and transaction flags.
Decimal quanta used for display/IO quantisation live next to the integer
bridges so every layer agrees on the wire precision.
"""

# NOTE: The ST_* mantissa/exponent bounds apply to IOUAmount normalisation only; never for XRP (drops).

from decimal import Decimal

# ---------------------------------------------------------------------------
# Native asset
# ---------------------------------------------------------------------------

NATIVE_CODE: str = "XRP"

#: Pair-rate feed id of the native asset (md5 the feed uses for XRP).
NATIVE_TOKEN_ID: str = "84e5efeb89c4eae8f68188982dc290d8"

# Minimum quantisation step for XRP values (1 drop = 1e-6 XRP).
XRP_QUANTUM: Decimal = Decimal("1e-6")

#: Fractional digits of converter output (native wire precision).
CONVERTER_PLACES: int = 6

# ---------------------------------------------------------------------------
# STAmount (IOU) canonical ranges
# ---------------------------------------------------------------------------

#: XRPL STAmount mantissa uses 16 significant digits (see IOUAmount.cpp).
ST_MANTISSA_DIGITS: int = 16
ST_MANTISSA_MIN: int = 10 ** (ST_MANTISSA_DIGITS - 1)   # 1e15
ST_MANTISSA_MAX: int = (10 ** ST_MANTISSA_DIGITS) - 1   # 9.999...e15

#: Allowed exponent range for STAmount (power of 10).
ST_EXP_MIN: int = -96
ST_EXP_MAX: int = 80

#: Significant digits written into an issued amount's "value" field.
IOU_WIRE_DIGITS: int = 15

# ---------------------------------------------------------------------------
# Currency codes
# ---------------------------------------------------------------------------

#: Standard currency code length (ASCII).
STD_CODE_LEN: int = 3

#: Non-standard currency code length (hex chars, 20 bytes).
HEX_CODE_LEN: int = 40

# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------

#: Seconds between the Unix epoch and the ledger epoch (2000-01-01T00:00:00Z).
RIPPLE_EPOCH_OFFSET: int = 946_684_800

SECONDS_PER_HOUR: int = 3600

# ---------------------------------------------------------------------------
# Transaction flags
# ---------------------------------------------------------------------------

TF_PARTIAL_PAYMENT: int = 0x00020000

#: OfferCreate: spend all of TakerGets even when that returns more than TakerPays.
TF_SELL: int = 0x00080000


__all__ = [
    "NATIVE_CODE",
    "NATIVE_TOKEN_ID",
    "XRP_QUANTUM",
    "CONVERTER_PLACES",
    "ST_MANTISSA_DIGITS",
    "ST_MANTISSA_MIN",
    "ST_MANTISSA_MAX",
    "ST_EXP_MIN",
    "ST_EXP_MAX",
    "IOU_WIRE_DIGITS",
    "STD_CODE_LEN",
    "HEX_CODE_LEN",
    "RIPPLE_EPOCH_OFFSET",
    "SECONDS_PER_HOUR",
    "TF_PARTIAL_PAYMENT",
    "TF_SELL",
]
