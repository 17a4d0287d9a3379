"""Interactive swap session: the state behind one swap form.

The session owns the two field texts, the driving side and the order
settings. Rates are read from a shared `RateResolver` on every
recomputation; the session never writes to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .config import DEFAULT_CONFIG, SwapConfig
from .converter import convert
from .core.amounts import parse_decimal, parse_positive
from .core.datatypes import AmountPair, AssetDescriptor, Expiry, OrderIntent, RatePair, Side
from .impact import fill_fraction
from .orders import BuildResult, build
from .rates import RateResolver, has_valid_rates
from .trustlines import TrustlineSnapshot

logger = logging.getLogger(__name__)


@dataclass
class SwapSession:
    """Form state for a pair fetched in canonical order (asset_a, asset_b).

    With ``revert=False`` the top field (AMOUNT) is asset_a and the account
    sells asset_a; with ``revert=True`` the form shows the pair the other way
    round and the account sells asset_b.
    """

    asset_a: AssetDescriptor
    asset_b: AssetDescriptor
    resolver: RateResolver
    revert: bool = False
    intent: OrderIntent = OrderIntent.MARKET
    slippage: Decimal = Decimal("5")
    expiry: Expiry = field(default_factory=Expiry.never)
    limit_price: Optional[str] = None
    config: SwapConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    amount_text: str = ""
    value_text: str = ""
    driving_side: Side = Side.AMOUNT

    # ------------- views -------------

    @property
    def leg_in(self) -> AssetDescriptor:
        return self.asset_b if self.revert else self.asset_a

    @property
    def leg_out(self) -> AssetDescriptor:
        return self.asset_a if self.revert else self.asset_b

    def rates(self) -> RatePair:
        return self.resolver.resolve(self.asset_a, self.asset_b)

    def can_convert(self) -> bool:
        return has_valid_rates(self.rates(), self.asset_a, self.asset_b)

    def amounts(self) -> AmountPair:
        return AmountPair.from_text(self.amount_text, self.value_text, self.driving_side)

    def text(self, side: Side) -> str:
        return self.amount_text if side is Side.AMOUNT else self.value_text

    def _set_text(self, side: Side, text: str) -> None:
        if side is Side.AMOUNT:
            self.amount_text = text
        else:
            self.value_text = text

    # ------------- edits -------------

    def edit(self, side: Side, text: str) -> bool:
        """Apply a keystroke to one field; False when it was ignored.

        Non-numeric text is rejected with the state unchanged. Clearing a
        field clears the other one too.
        """
        if text == ".":
            text = "0."
        if text and parse_decimal(text) is None:
            return False
        self._set_text(side, text)
        self.driving_side = side
        if not text:
            self._set_text(side.other(), "")
            return True
        self._recompute()
        return True

    def on_rates_refreshed(self) -> None:
        """Recompute the non-driving field against the latest rates."""
        if self.text(self.driving_side):
            self._recompute()

    def switch(self) -> None:
        """Flip the displayed pair and clear both fields."""
        self.revert = not self.revert
        self.amount_text = ""
        self.value_text = ""
        self.driving_side = Side.AMOUNT

    def fill(self, balance: str, fraction=Decimal(1)) -> bool:
        """Fill the top field with a share of `balance` (1 = the exact balance text)."""
        frac = parse_decimal(fraction)
        if frac is not None and frac == 1:
            text = balance if parse_positive(balance) is not None else ""
        else:
            text = fill_fraction(balance, fraction)
        if not text:
            return False
        return self.edit(Side.AMOUNT, text)

    def _recompute(self) -> None:
        rates = self.rates()
        if not has_valid_rates(rates, self.asset_a, self.asset_b):
            logger.debug("recompute skipped: no rates for %s/%s", self.asset_a.display_name, self.asset_b.display_name)
            return
        src = self.driving_side
        derived = convert(self.text(src), rates, self.asset_a, self.asset_b, src, self.revert)
        if derived:
            self._set_text(src.other(), derived)

    # ------------- submit -------------

    def build_order(
        self,
        account: str,
        *,
        balance: Optional[str] = None,
        trustlines: Optional[TrustlineSnapshot] = None,
        now_ms: Optional[int] = None,
    ) -> BuildResult:
        return build(
            self.intent,
            self.leg_in,
            self.leg_out,
            self.amounts(),
            self.slippage,
            self.expiry,
            account,
            limit_price=self.limit_price,
            balance=balance,
            trustlines=trustlines,
            now_ms=now_ms,
            config=self.config,
        )


__all__ = ["SwapSession"]
