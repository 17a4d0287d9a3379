"""Trustline Matcher: does an account already hold a line for an asset?

Account-lines records come from more than one endpoint and disagree on
field names (``currency`` vs ``_currency`` vs ``Balance.currency``, issuer
under ``account``, ``issuer``, ``_token1`` ...) and on code encoding (3-letter
vs 40-hex, padded or not, any case). Each raw record is normalised once into
a `TrustlineRecord`; matching then only compares canonical keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from .config import STANDARD_CODES
from .core.currency import CurrencyKey, currency_key
from .core.datatypes import AssetDescriptor

_CODE_FIELDS: Tuple[Tuple[str, ...], ...] = (
    ("Balance", "currency"),
    ("currency",),
    ("_currency",),
    ("HighLimit", "currency"),
    ("LowLimit", "currency"),
)

_ISSUER_FIELDS: Tuple[Tuple[str, ...], ...] = (
    ("account",),
    ("issuer",),
    ("_token1",),
    ("_token2",),
    ("Balance", "issuer"),
    ("HighLimit", "issuer"),
    ("LowLimit", "issuer"),
)


def _dig(rec: Mapping[str, Any], path: Sequence[str]) -> Optional[str]:
    cur: Any = rec
    for k in path:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(k)
    if isinstance(cur, str) and cur:
        return cur
    return None


@dataclass(frozen=True)
class TrustlineRecord:
    """Canonical view of one account-lines record."""

    codes: Tuple[CurrencyKey, ...]
    issuers: FrozenSet[str]

    @classmethod
    def from_raw(cls, rec: Mapping[str, Any]) -> "TrustlineRecord":
        codes = []
        for path in _CODE_FIELDS:
            c = _dig(rec, path)
            if c is not None:
                codes.append(currency_key(c))
        issuers = frozenset(i for i in (_dig(rec, p) for p in _ISSUER_FIELDS) if i is not None)
        return cls(tuple(codes), issuers)

    def has_code(self, key: CurrencyKey) -> bool:
        return any(c.matches(key) for c in self.codes)


@dataclass(frozen=True)
class TrustlineSnapshot:
    """Account-lines of one account as last fetched; records are normalised on construction."""

    account: str
    records: Tuple[TrustlineRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_lines(cls, account: str, lines: Iterable[Mapping[str, Any]]) -> "TrustlineSnapshot":
        return cls(account, tuple(TrustlineRecord.from_raw(l) for l in lines if isinstance(l, Mapping)))

    @classmethod
    def empty(cls, account: str) -> "TrustlineSnapshot":
        return cls(account)


def has_line(
    account: str,
    asset: AssetDescriptor,
    snapshot: Optional[TrustlineSnapshot],
    *,
    standard_codes: FrozenSet[str] = STANDARD_CODES,
) -> bool:
    """True when `account` can hold `asset` according to `snapshot`.

    The native asset always matches. A snapshot of another account never
    does. Standard codes accept a line from any issuer.
    """
    if asset.is_native:
        return True
    if snapshot is None or snapshot.account != account:
        return False
    key = currency_key(asset.code)
    any_issuer = key.text_lower.upper() in standard_codes
    for rec in snapshot.records:
        if not rec.has_code(key):
            continue
        if any_issuer or asset.issuer in rec.issuers:
            return True
    return False


def missing_lines(
    account: str,
    assets: Iterable[AssetDescriptor],
    snapshot: Optional[TrustlineSnapshot],
    *,
    standard_codes: FrozenSet[str] = STANDARD_CODES,
) -> List[AssetDescriptor]:
    """Issued assets of `assets` with no line, in input order."""
    return [a for a in assets if not has_line(account, a, snapshot, standard_codes=standard_codes)]


__all__ = ["TrustlineRecord", "TrustlineSnapshot", "has_line", "missing_lines"]
