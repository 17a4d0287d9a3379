"""Rate Resolver: shared read-through cache of pair rates.

Rates are refreshed by an external poller (`update`) or loaded on a cache
miss through an optional loader. Readers never mutate what they get back;
`RatePair` is frozen.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Tuple

from .core.datatypes import AssetDescriptor, RatePair
from .core.exc import RateFeedError

logger = logging.getLogger(__name__)

RateLoader = Callable[[AssetDescriptor, AssetDescriptor], RatePair]

_Key = Tuple[AssetDescriptor, AssetDescriptor]


def has_valid_rates(rates: RatePair, asset_a: AssetDescriptor, asset_b: AssetDescriptor) -> bool:
    """True when the pair can be converted with `rates`.

    A pair involving the native asset needs at least one positive rate;
    an issued/issued pair needs both.
    """
    if asset_a.is_native or asset_b.is_native:
        return rates.rate_a > 0 or rates.rate_b > 0
    return rates.rate_a > 0 and rates.rate_b > 0


class RateResolver:
    """Pair-rate cache keyed by (asset_a, asset_b).

    A lookup for the reverse order of a cached pair returns the swapped
    rates. Missing data resolves to zero rates, never an exception.
    """

    def __init__(self, loader: Optional[RateLoader] = None) -> None:
        self._loader = loader
        self._cache: Dict[_Key, RatePair] = {}
        self._lock = threading.Lock()

    def resolve(self, asset_a: AssetDescriptor, asset_b: AssetDescriptor) -> RatePair:
        cached = self._lookup(asset_a, asset_b)
        if cached is not None:
            return cached
        if self._loader is None:
            return RatePair.zero()
        try:
            rates = self._loader(asset_a, asset_b)
        except RateFeedError as e:
            logger.warning("pair rates unavailable for %s/%s: %s", asset_a.display_name, asset_b.display_name, e)
            return RatePair.zero()
        # An empty answer is not cached so the next lookup asks again.
        if not rates.is_zero():
            self.update(asset_a, asset_b, rates)
        return rates

    def update(self, asset_a: AssetDescriptor, asset_b: AssetDescriptor, rates: RatePair) -> None:
        """Replace the cached rates of a pair (called by the refresh timer)."""
        with self._lock:
            self._cache.pop((asset_b, asset_a), None)
            self._cache[(asset_a, asset_b)] = rates
        logger.debug("rates %s/%s -> %s / %s", asset_a.display_name, asset_b.display_name, rates.rate_a, rates.rate_b)

    def invalidate(self, asset_a: Optional[AssetDescriptor] = None, asset_b: Optional[AssetDescriptor] = None) -> None:
        """Drop one pair (either order), or everything when called without arguments."""
        with self._lock:
            if asset_a is None or asset_b is None:
                self._cache.clear()
                return
            self._cache.pop((asset_a, asset_b), None)
            self._cache.pop((asset_b, asset_a), None)

    def _lookup(self, asset_a: AssetDescriptor, asset_b: AssetDescriptor) -> Optional[RatePair]:
        with self._lock:
            hit = self._cache.get((asset_a, asset_b))
            if hit is not None:
                return hit
            rev = self._cache.get((asset_b, asset_a))
        return rev.swapped() if rev is not None else None


__all__ = ["RateResolver", "RateLoader", "has_valid_rates"]
