"""
Core datatypes for the swap form, aligned with XRPL semantics.

These datatypes are intentionally minimal and immutable (where appropriate)
so that conversion and order construction stay deterministic and testable.

Notes:
- Rates are "native units per one unit of the asset"; the native asset quotes 1.
- A zero rate means "unavailable", never an error.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Optional

from .amounts import parse_decimal
from .constants import NATIVE_CODE, NATIVE_TOKEN_ID, SECONDS_PER_HOUR
from .currency import display_name, to_wire_currency
from .exc import InvalidAssetError


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AssetDescriptor:
    """Asset identity: currency code plus issuing account, or the native marker.

    Fields:
    - code: currency code (3-letter, 40-hex, or a longer ticker name)
    - issuer: issuing account id; None marks the native asset
    - name: optional display name supplied by token metadata
    """

    code: str
    issuer: Optional[str] = None
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.code:
            raise InvalidAssetError("asset code is required")
        if self.issuer is None and self.code != NATIVE_CODE:
            raise InvalidAssetError(f"issued asset {self.code!r} requires an issuer")
        if self.issuer is not None and not self.issuer:
            raise InvalidAssetError(f"issued asset {self.code!r} has an empty issuer")
        if self.issuer is not None and self.code == NATIVE_CODE:
            raise InvalidAssetError("the native asset carries no issuer")

    @classmethod
    def native(cls) -> "AssetDescriptor":
        return cls(NATIVE_CODE)

    @classmethod
    def issued(cls, code: str, issuer: str, name: Optional[str] = None) -> "AssetDescriptor":
        return cls(code, issuer, name)

    @property
    def is_native(self) -> bool:
        return self.issuer is None

    @property
    def token_id(self) -> str:
        """Feed key: md5 of "issuer_currency", fixed id for the native asset."""
        if self.is_native:
            return NATIVE_TOKEN_ID
        return hashlib.md5(f"{self.issuer}_{self.code}".encode("utf-8")).hexdigest()

    @property
    def wire_currency(self) -> str:
        if self.is_native:
            return NATIVE_CODE
        return to_wire_currency(self.code)

    @property
    def display_name(self) -> str:
        if self.is_native:
            return NATIVE_CODE
        if self.name and self.name != self.code:
            return self.name
        return display_name(self.code)


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RatePair:
    """Unit rates of the two assets of a pair, in native units per unit."""

    rate_a: Decimal
    rate_b: Decimal

    @staticmethod
    def zero() -> "RatePair":
        return RatePair(Decimal(0), Decimal(0))

    @classmethod
    def from_feed(cls, rate_a, rate_b) -> "RatePair":
        """Build from raw feed values; anything unparseable or negative becomes 0."""
        a = parse_decimal(rate_a)
        b = parse_decimal(rate_b)
        return cls(
            a if a is not None and a > 0 else Decimal(0),
            b if b is not None and b > 0 else Decimal(0),
        )

    def swapped(self) -> "RatePair":
        return RatePair(self.rate_b, self.rate_a)

    def is_zero(self) -> bool:
        return self.rate_a <= 0 and self.rate_b <= 0


# ---------------------------------------------------------------------------
# Amounts in the form
# ---------------------------------------------------------------------------

class Side(Enum):
    """Which field of the form the user edited last."""
    AMOUNT = "amount"   # top field
    VALUE = "value"     # bottom field

    def other(self) -> "Side":
        return Side.VALUE if self is Side.AMOUNT else Side.AMOUNT


@dataclass(frozen=True)
class AmountPair:
    """The two amounts of the form; None is an empty field.

    `input` is what the account sends, `output` what it receives;
    `driving_side` is the side the user last edited.
    """

    input: Optional[Decimal] = None
    output: Optional[Decimal] = None
    driving_side: Side = Side.AMOUNT

    @classmethod
    def from_text(cls, input_text, output_text, driving_side: Side = Side.AMOUNT) -> "AmountPair":
        return cls(parse_decimal(input_text), parse_decimal(output_text), driving_side)

    def with_side(self, side: Side, value: Optional[Decimal]) -> "AmountPair":
        if side is Side.AMOUNT:
            return replace(self, input=value)
        return replace(self, output=value)

    def get(self, side: Side) -> Optional[Decimal]:
        return self.input if side is Side.AMOUNT else self.output


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class OrderIntent(Enum):
    MARKET = "market"
    LIMIT = "limit"


_PRESET_HOURS = {"1h": 1, "24h": 24, "7d": 24 * 7, "30d": 24 * 30}
_DURATION_RE = re.compile(r"^(\d+)\s*([hd])$")


@dataclass(frozen=True)
class Expiry:
    """Offer lifetime: None hours means the offer never expires."""

    hours: Optional[int] = None

    @staticmethod
    def never() -> "Expiry":
        return Expiry(None)

    @staticmethod
    def duration(hours: int) -> "Expiry":
        return Expiry(int(hours))

    @classmethod
    def parse(cls, text: str) -> "Expiry":
        """Parse 'never', a preset ('1h', '24h', '7d', '30d') or '<n>h' / '<n>d'."""
        t = text.strip().lower()
        if t == "never":
            return cls.never()
        if t in _PRESET_HOURS:
            return cls.duration(_PRESET_HOURS[t])
        m = _DURATION_RE.match(t)
        if m is None:
            raise ValueError(f"unrecognised expiry: {text!r}")
        n = int(m.group(1))
        return cls.duration(n * 24 if m.group(2) == "d" else n)

    @property
    def is_never(self) -> bool:
        return self.hours is None or self.hours <= 0

    @property
    def seconds(self) -> int:
        return 0 if self.is_never else self.hours * SECONDS_PER_HOUR


__all__ = [
    "AssetDescriptor",
    "RatePair",
    "Side",
    "AmountPair",
    "OrderIntent",
    "Expiry",
]
