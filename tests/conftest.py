from __future__ import annotations

from decimal import Decimal

import pytest

from xrpl_swap.core import AssetDescriptor, RatePair
from xrpl_swap.rates import RateResolver

ISSUER = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"
OTHER_ISSUER = "rOtherIssuer2222222222222222222222"


# -----------------------------
# Assets
# -----------------------------

@pytest.fixture()
def xrp() -> AssetDescriptor:
    return AssetDescriptor.native()


@pytest.fixture()
def usd() -> AssetDescriptor:
    return AssetDescriptor.issued("USD", ISSUER)


@pytest.fixture()
def rlusd() -> AssetDescriptor:
    return AssetDescriptor.issued("RLUSD", ISSUER)


@pytest.fixture()
def solo() -> AssetDescriptor:
    return AssetDescriptor.issued("SOLO", OTHER_ISSUER)


# -----------------------------
# Rates
# -----------------------------

@pytest.fixture()
def xrp_usd_rates() -> RatePair:
    """XRP/USD in canonical order: 2.5 XRP per USD."""
    return RatePair(Decimal("1"), Decimal("2.5"))


@pytest.fixture()
def resolver(xrp, usd, xrp_usd_rates) -> RateResolver:
    r = RateResolver()
    r.update(xrp, usd, xrp_usd_rates)
    return r
