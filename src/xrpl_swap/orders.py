"""Order Builder: turn the swap form into a ledger transaction payload.

Per submission the builder runs VALIDATE -> SHAPE -> FINALIZE and returns a
`BuildResult` holding either a `TransactionPayload` or a `BuildFailure`.
Nothing is raised to the caller and nothing touches the network.

Two payload shapes share the form:

- MARKET -> self-Payment through the matching engine
  (SendMax = leg-in, Amount = leg-out, DeliverMin = Amount x (1 - slippage)).
- LIMIT  -> OfferCreate resting on the book
  (TakerGets = leg-in, i.e. what the offering account gives up;
  TakerPays = leg-out recomputed from the limit price).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from .config import DEFAULT_CONFIG, SwapConfig
from .core.amounts import IOUAmount, XRPAmount, parse_decimal, parse_positive
from .core.constants import RIPPLE_EPOCH_OFFSET, TF_PARTIAL_PAYMENT
from .core.datatypes import AmountPair, AssetDescriptor, Expiry, OrderIntent
from .core.exc import AmountDomainError, BuildFailure, CurrencyCodeError, NormalisationError
from .memos import configure_memos, order_memo_text
from .trustlines import TrustlineSnapshot, missing_lines

logger = logging.getLogger(__name__)

#: Native amounts are drop strings, issued amounts {currency, issuer, value}.
WireAmount = Union[str, Dict[str, str]]

_HUNDRED = Decimal(100)


# ---------------------------------------------------------------------------
# Payload shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PaymentShape:
    """Immediate exchange: a partial self-payment bounded by DeliverMin."""

    send: WireAmount
    receive_min: WireAmount
    receive_target: WireAmount
    flags: int = TF_PARTIAL_PAYMENT
    kind: Literal["Payment"] = "Payment"

    def fields(self) -> Dict[str, Any]:
        return {
            "Amount": self.receive_target,
            "DeliverMin": self.receive_min,
            "SendMax": self.send,
            "Flags": self.flags,
        }


@dataclass(frozen=True)
class OfferShape:
    """Resting order; `expiration` is seconds since the ledger epoch."""

    taker_gets: WireAmount
    taker_pays: WireAmount
    expiration: Optional[int] = None
    flags: int = 0
    kind: Literal["OfferCreate"] = "OfferCreate"

    def fields(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "TakerGets": self.taker_gets,
            "TakerPays": self.taker_pays,
            "Flags": self.flags,
        }
        if self.expiration is not None:
            out["Expiration"] = self.expiration
        return out


Shape = Union[PaymentShape, OfferShape]


@dataclass(frozen=True)
class TransactionPayload:
    shape: Shape
    account: str
    memos: List[Dict[str, Dict[str, str]]] = field(default_factory=list)
    source_tag: Optional[int] = None

    @property
    def transaction_type(self) -> str:
        return self.shape.kind

    def to_tx_json(self) -> Dict[str, Any]:
        """Unsigned transaction fields populated by this core."""
        tx: Dict[str, Any] = {"TransactionType": self.shape.kind, "Account": self.account}
        if isinstance(self.shape, PaymentShape):
            tx["Destination"] = self.account
        tx.update(self.shape.fields())
        if self.memos:
            tx["Memos"] = self.memos
        if self.source_tag is not None:
            tx["SourceTag"] = self.source_tag
        return tx


@dataclass(frozen=True)
class BuildResult:
    payload: Optional[TransactionPayload] = None
    failure: Optional[BuildFailure] = None
    missing: Tuple[AssetDescriptor, ...] = ()

    @property
    def ok(self) -> bool:
        return self.payload is not None

    @classmethod
    def fail(cls, reason: BuildFailure, missing: Tuple[AssetDescriptor, ...] = ()) -> "BuildResult":
        return cls(failure=reason, missing=missing)


# ---------------------------------------------------------------------------
# Wire amounts
# ---------------------------------------------------------------------------

def wire_amount(asset: AssetDescriptor, value: Decimal) -> WireAmount:
    """Encode `value` units of `asset`; digits beyond the wire grid are truncated."""
    if asset.is_native:
        return XRPAmount.from_xrp(value).to_wire()
    return {
        "currency": asset.wire_currency,
        "issuer": asset.issuer,
        "value": IOUAmount.from_decimal(value).to_wire(),
    }


def _is_zero(a: WireAmount) -> bool:
    text = a if isinstance(a, str) else a["value"]
    return Decimal(text) == 0


def apply_slippage(value: Decimal, slippage: Decimal) -> Decimal:
    """Lowest acceptable delivery: value x (1 - slippage/100)."""
    return value * (1 - slippage / _HUNDRED)


def expiration_from(expiry: Expiry, now_ms: int) -> Optional[int]:
    """Ledger-epoch expiration for an offer placed at `now_ms`, or None for NEVER."""
    if expiry.is_never:
        return None
    return now_ms // 1000 - RIPPLE_EPOCH_OFFSET + expiry.seconds


def limit_output(leg_in: AssetDescriptor, leg_out: AssetDescriptor, amount_in: Decimal, limit_price: Decimal) -> Decimal:
    """Leg-out amount implied by a limit price.

    With one native leg the price is quoted in issued units per native
    unit; for issued/issued pairs in leg-out units per leg-in unit.
    """
    if leg_out.is_native and not leg_in.is_native:
        return amount_in / limit_price
    return amount_in * limit_price


def _field_text(d: Decimal) -> str:
    return format(d, "f")


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def _validate(
    intent: OrderIntent,
    leg_in: AssetDescriptor,
    leg_out: AssetDescriptor,
    amounts: AmountPair,
    slippage,
    account: str,
    limit_price,
    trustlines: Optional[TrustlineSnapshot],
    config: SwapConfig,
) -> Optional[BuildResult]:
    if intent is OrderIntent.LIMIT and parse_positive(limit_price) is None:
        return BuildResult.fail(BuildFailure.MISSING_LIMIT_PRICE)
    if parse_positive(amounts.input) is None or parse_positive(amounts.output) is None:
        return BuildResult.fail(BuildFailure.NON_POSITIVE_AMOUNT)
    if intent is OrderIntent.MARKET:
        s = parse_decimal(slippage)
        if s is None or s < 0 or s >= _HUNDRED:
            return BuildResult.fail(BuildFailure.INVALID_SLIPPAGE)
    if trustlines is not None:
        missing = missing_lines(account, (leg_in, leg_out), trustlines, standard_codes=config.standard_codes)
        if missing:
            return BuildResult.fail(BuildFailure.MISSING_TRUSTLINE, tuple(missing))
    return None


def _shape_market(
    leg_in: AssetDescriptor,
    leg_out: AssetDescriptor,
    amount_in: Decimal,
    target: Decimal,
    slippage: Decimal,
    balance: Optional[str],
    config: SwapConfig,
) -> PaymentShape:
    # Selling the whole balance of an issued asset: send the balance text
    # untouched so no dust remains on the line.
    if not leg_in.is_native and balance is not None and _field_text(amount_in) == balance:
        send: WireAmount = {"currency": leg_in.wire_currency, "issuer": leg_in.issuer, "value": balance}
        logger.debug("market: sell-all shortcut, SendMax=%s", balance)
    else:
        send = wire_amount(leg_in, amount_in * (1 + config.send_max_buffer_pct / _HUNDRED))

    receive_target = wire_amount(leg_out, target)
    receive_min = wire_amount(leg_out, apply_slippage(target, slippage))
    if leg_out.is_native and not _is_zero(receive_target) and _is_zero(receive_min):
        receive_min = "1"
    return PaymentShape(send=send, receive_min=receive_min, receive_target=receive_target)


def _shape_limit(
    leg_in: AssetDescriptor,
    leg_out: AssetDescriptor,
    amount_in: Decimal,
    limit_price: Decimal,
    expiry: Expiry,
    now_ms: Optional[int],
    config: SwapConfig,
) -> OfferShape:
    out = limit_output(leg_in, leg_out, amount_in, limit_price)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return OfferShape(
        taker_gets=wire_amount(leg_in, amount_in),
        taker_pays=wire_amount(leg_out, out),
        expiration=expiration_from(expiry, now_ms),
        flags=config.offer_flags,
    )


def build(
    intent: OrderIntent,
    leg_in: AssetDescriptor,
    leg_out: AssetDescriptor,
    amounts: AmountPair,
    slippage,
    expiry: Expiry,
    account: str,
    *,
    limit_price=None,
    balance: Optional[str] = None,
    trustlines: Optional[TrustlineSnapshot] = None,
    now_ms: Optional[int] = None,
    config: Optional[SwapConfig] = None,
) -> BuildResult:
    """Build the transaction for one submission of the swap form.

    Parameters
    ----------
    intent : OrderIntent
        MARKET (Payment) or LIMIT (OfferCreate).
    leg_in, leg_out : AssetDescriptor
        What the account gives up and what it receives.
    amounts : AmountPair
        Current form amounts; `input` is denominated in leg_in.
    slippage :
        Percentage in [0, 100); only used for MARKET.
    expiry : Expiry
        Offer lifetime; only used for LIMIT.
    account : str
        Source (and, for Payment, destination) account.
    limit_price :
        Required for LIMIT; see `limit_output` for the quoting convention.
    balance : str, optional
        Last-fetched leg-in balance text, for the sell-all shortcut.
    trustlines : TrustlineSnapshot, optional
        When given, every issued leg must have a line.
    now_ms : int, optional
        Wall-clock milliseconds for the expiration (defaults to now).
    """
    config = config or DEFAULT_CONFIG

    # VALIDATE
    failed = _validate(intent, leg_in, leg_out, amounts, slippage, account, limit_price, trustlines, config)
    if failed is not None:
        logger.debug("build %s rejected: %s", intent.value, failed.failure.value)
        return failed

    # SHAPE
    amount_in = parse_positive(amounts.input)
    amount_out = parse_positive(amounts.output)
    try:
        if intent is OrderIntent.MARKET:
            shape: Shape = _shape_market(leg_in, leg_out, amount_in, amount_out, parse_decimal(slippage), balance, config)
            legs = (shape.send, shape.receive_target)
        else:
            shape = _shape_limit(leg_in, leg_out, amount_in, parse_positive(limit_price), expiry, now_ms, config)
            legs = (shape.taker_gets, shape.taker_pays)
    except CurrencyCodeError as e:
        logger.debug("build %s: %s", intent.value, e)
        return BuildResult.fail(BuildFailure.INVALID_ASSET)
    except (AmountDomainError, NormalisationError, DecimalException) as e:
        logger.debug("build %s: %s", intent.value, e)
        return BuildResult.fail(BuildFailure.INVALID_AMOUNT)
    if any(_is_zero(a) for a in legs):
        return BuildResult.fail(BuildFailure.NON_POSITIVE_AMOUNT)

    # FINALIZE
    memos = configure_memos(config.memo_type, "", order_memo_text(intent, config.memo_origin))
    payload = TransactionPayload(shape=shape, account=account, memos=memos, source_tag=config.source_tag)
    logger.debug("built %s for %s", payload.transaction_type, account)
    return BuildResult(payload=payload)


__all__ = [
    "WireAmount",
    "PaymentShape",
    "OfferShape",
    "TransactionPayload",
    "BuildResult",
    "wire_amount",
    "apply_slippage",
    "expiration_from",
    "limit_output",
    "build",
]
