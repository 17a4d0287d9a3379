"""Configuration objects for order construction and the pair-rate feed."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, Mapping, Optional

# Currencies accepted on any issuer when checking trustlines.
STANDARD_CODES: FrozenSet[str] = frozenset({"USD", "EUR", "BTC", "ETH"})

DEFAULT_API_URL = "https://api.xrpl.to/api"


@dataclass(frozen=True)
class SwapConfig:
    """Order-construction settings.

    memo_origin: text appended to the memo ("Swap via <origin>").
    memo_type: optional MemoType text; omitted from the memo when empty.
    source_tag: optional SourceTag written on every transaction.
    offer_flags: Flags of OfferCreate (0 = plain resting order).
    send_max_buffer_pct: extra headroom added to a market order's SendMax.
    standard_codes: currencies accepted on any issuer by the trustline gate.
    pegged: issued code -> fiat code it trades 1:1 with (for fiat valuation).
    price_warning_pct: limit-price deviation from the book that triggers a warning.
    """

    memo_origin: str = "https://xrpl.to"
    memo_type: str = ""
    source_tag: Optional[int] = None
    offer_flags: int = 0
    send_max_buffer_pct: Decimal = Decimal("0")
    standard_codes: FrozenSet[str] = STANDARD_CODES
    pegged: Mapping[str, str] = field(default_factory=lambda: {"RLUSD": "USD"})
    price_warning_pct: Decimal = Decimal("5")


@dataclass(frozen=True)
class FeedConfig:
    """Pair-rate feed settings."""

    base_url: str = DEFAULT_API_URL
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "FeedConfig":
        """Read XRPL_SWAP_API_URL / XRPL_SWAP_TIMEOUT, falling back to defaults."""
        return cls(
            base_url=os.environ.get("XRPL_SWAP_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=float(os.environ.get("XRPL_SWAP_TIMEOUT", "10")),
        )


DEFAULT_CONFIG = SwapConfig()

__all__ = ["STANDARD_CODES", "DEFAULT_API_URL", "SwapConfig", "FeedConfig", "DEFAULT_CONFIG"]
