# Top-level API for xrpl_swap.
"""
Top-level API for xrpl_swap.

Calculation and order-construction core of an XRPL swap form:
  - convert: counter-amount of the form (bidirectional, revert-aware)
  - impact: price impact between two independently valued legs
  - has_line: trustline gate over an account-lines snapshot
  - build: Payment (market) or OfferCreate (limit) payload

All four are synchronous and pure. Rates come from a shared `RateResolver`
refreshed outside the core; `PairRatesClient` is an HTTP loader for it.
"""

from __future__ import annotations

from .core import (
    AssetDescriptor,
    RatePair,
    Side,
    AmountPair,
    OrderIntent,
    Expiry,
    BuildFailure,
    display_name,
)
from .config import SwapConfig, FeedConfig
from .rates import RateResolver, has_valid_rates
from .feeds import PairRatesClient
from .converter import convert, convert_decimal, PairKind, Direction
from .impact import impact, FiatValuer, PriceWarning, limit_price_deviation, fill_fraction
from .trustlines import TrustlineRecord, TrustlineSnapshot, has_line, missing_lines
from .orders import PaymentShape, OfferShape, TransactionPayload, BuildResult, build
from .session import SwapSession

__all__ = [
    # datatypes
    "AssetDescriptor",
    "RatePair",
    "Side",
    "AmountPair",
    "OrderIntent",
    "Expiry",
    "BuildFailure",
    "display_name",
    # config
    "SwapConfig",
    "FeedConfig",
    # rates
    "RateResolver",
    "has_valid_rates",
    "PairRatesClient",
    # conversion / display
    "convert",
    "convert_decimal",
    "PairKind",
    "Direction",
    "impact",
    "FiatValuer",
    "PriceWarning",
    "limit_price_deviation",
    "fill_fraction",
    # trustlines
    "TrustlineRecord",
    "TrustlineSnapshot",
    "has_line",
    "missing_lines",
    # orders
    "PaymentShape",
    "OfferShape",
    "TransactionPayload",
    "BuildResult",
    "build",
    "SwapSession",
]
