"""
Core exception types and failure reasons for xrpl_swap.

Exceptions are raised by internal codecs when preconditions are violated.
The public pure operations (convert, impact, has_line, build) never let
them escape: they translate them into sentinel results or a typed
`BuildFailure` so callers can render inline messages.
"""

from enum import Enum

__all__ = [
    "AmountDomainError",
    "NormalisationError",
    "CurrencyCodeError",
    "InvalidAssetError",
    "RateFeedError",
    "BuildFailure",
]


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or basic preconditions."""
    pass


class NormalisationError(Exception):
    """Raised when a value cannot be normalised within IOUAmount bounds."""
    pass


class CurrencyCodeError(ValueError):
    """Raised when a currency code cannot be encoded for the wire."""
    pass


class InvalidAssetError(ValueError):
    """Raised when an asset descriptor is not fully specified.

    An issued asset needs both a code and an issuer; the native asset
    carries no issuer.
    """
    pass


class RateFeedError(Exception):
    """Raised when the pair-rate feed cannot be reached or answers badly.

    Attributes
    ----------
    url : str
        Request URL, for context.
    status : int | None
        HTTP status when the server answered.
    """

    def __init__(self, message: str, *, url: str = "", status=None):
        super().__init__(message)
        self.url = url
        self.status = status


class BuildFailure(str, Enum):
    """Typed reasons an order cannot be built (rendered inline by the caller)."""

    MISSING_LIMIT_PRICE = "MissingLimitPrice"
    NON_POSITIVE_AMOUNT = "NonPositiveAmount"
    INVALID_SLIPPAGE = "InvalidSlippage"
    MISSING_TRUSTLINE = "MissingTrustline"
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_ASSET = "InvalidAsset"
