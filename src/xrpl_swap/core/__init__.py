"""
XRPL Swap Core
==============

Unified exports for amount primitives, currency codecs and form datatypes.
Native amounts are integer drops, issued amounts are 16-digit fixed point;
Decimal is the working type for rates and field text.
"""

# NOTE:
#   Every Decimal -> wire conversion in this package truncates toward zero.
#   Nothing here performs I/O.

from .constants import (
    NATIVE_CODE,
    XRP_QUANTUM,
    CONVERTER_PLACES,
    RIPPLE_EPOCH_OFFSET,
    TF_PARTIAL_PAYMENT,
    TF_SELL,
)

from .fmt import (
    DEFAULT_DECIMAL_PRECISION,
    quantize_down,
    format_fixed,
)

from .amounts import (
    XRPAmount,
    IOUAmount,
    parse_decimal,
    parse_positive,
    drops_from_xrp,
)

from .currency import (
    CurrencyKey,
    currency_key,
    display_name,
    hex_to_ascii,
    to_wire_currency,
)

from .datatypes import (
    AssetDescriptor,
    RatePair,
    Side,
    AmountPair,
    OrderIntent,
    Expiry,
)

from .exc import (
    AmountDomainError,
    NormalisationError,
    CurrencyCodeError,
    InvalidAssetError,
    RateFeedError,
    BuildFailure,
)

__all__ = [
    # constants
    "NATIVE_CODE",
    "XRP_QUANTUM",
    "CONVERTER_PLACES",
    "RIPPLE_EPOCH_OFFSET",
    "TF_PARTIAL_PAYMENT",
    "TF_SELL",
    # fmt
    "DEFAULT_DECIMAL_PRECISION",
    "quantize_down",
    "format_fixed",
    # amounts
    "XRPAmount",
    "IOUAmount",
    "parse_decimal",
    "parse_positive",
    "drops_from_xrp",
    # currency
    "CurrencyKey",
    "currency_key",
    "display_name",
    "hex_to_ascii",
    "to_wire_currency",
    # datatypes
    "AssetDescriptor",
    "RatePair",
    "Side",
    "AmountPair",
    "OrderIntent",
    "Expiry",
    # exceptions / failures
    "AmountDomainError",
    "NormalisationError",
    "CurrencyCodeError",
    "InvalidAssetError",
    "RateFeedError",
    "BuildFailure",
]
