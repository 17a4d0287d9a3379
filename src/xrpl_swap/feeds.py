"""HTTP pair-rate feed, usable as a `RateResolver` loader.

GET {base_url}/pair_rates?md51=<token id a>&md52=<token id b>
  -> {"rate1": <native per unit of a>, "rate2": <native per unit of b>}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import FeedConfig
from .core.datatypes import AssetDescriptor, RatePair
from .core.exc import RateFeedError

logger = logging.getLogger(__name__)


class PairRatesClient:
    """Fetch unit rates for an asset pair.

    Calling the client directly (``client(a, b)``) makes it a loader for
    `RateResolver`.
    """

    def __init__(self, config: Optional[FeedConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or FeedConfig()
        self.session = session or requests.Session()

    def fetch(self, asset_a: AssetDescriptor, asset_b: AssetDescriptor) -> RatePair:
        url = f"{self.config.base_url}/pair_rates"
        params = {"md51": asset_a.token_id, "md52": asset_b.token_id}
        try:
            r = self.session.get(url, params=params, timeout=self.config.timeout)
            r.raise_for_status()
            out: Dict[str, Any] = r.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise RateFeedError(f"pair_rates HTTP error: {e}", url=url, status=status) from e
        except (requests.RequestException, ValueError) as e:
            raise RateFeedError(f"pair_rates request failed: {e}", url=url) from e

        if not isinstance(out, dict) or ("rate1" not in out and "rate2" not in out):
            raise RateFeedError(f"Bad pair_rates response (no rates): {out}", url=url)

        rates = RatePair.from_feed(out.get("rate1"), out.get("rate2"))
        logger.debug("pair_rates %s/%s: rate1=%s rate2=%s", asset_a.display_name, asset_b.display_name, rates.rate_a, rates.rate_b)
        return rates

    __call__ = fetch


__all__ = ["PairRatesClient"]
