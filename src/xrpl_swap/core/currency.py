"""Currency-code codec: standard 3-letter codes and 40-hex non-standard codes.

The same asset may arrive as "USD", "usd" or "5553440000000000000000000000000000000000"
depending on which endpoint produced the record. Everything that compares or
displays codes goes through `currency_key` / `display_name` so the hex
handling lives in one place.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Optional

from .constants import HEX_CODE_LEN, NATIVE_CODE, STD_CODE_LEN
from .exc import CurrencyCodeError

_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex_code(code: str) -> bool:
    return len(code) == HEX_CODE_LEN and all(c in _HEX_DIGITS for c in code)


def strip_zero_bytes(hex_code: str) -> str:
    """Drop trailing zero bytes (pairs of '0') from a hex code."""
    s = hex_code
    while s.endswith("00"):
        s = s[:-2]
    return s


def hex_to_ascii(code: str) -> Optional[str]:
    """Decode a 40-hex code to text, skipping zero bytes.

    Returns None when `code` is not a 40-hex code or a non-zero byte falls
    outside ASCII.
    """
    if not is_hex_code(code):
        return None
    raw = bytes.fromhex(code)
    chars = [b for b in raw if b != 0]
    if not chars or any(b > 0x7F for b in chars):
        return None
    return bytes(chars).decode("ascii")


@dataclass(frozen=True)
class CurrencyKey:
    """Canonical comparison form of a currency code.

    - raw: the code as received
    - hex_upper: upper-cased code, trailing zero bytes stripped for 40-hex codes
    - text_lower: lower-cased decoded text for 40-hex codes, else the lower-cased code
    """

    raw: str
    hex_upper: str
    text_lower: str

    def matches(self, other: "CurrencyKey") -> bool:
        return (
            self.raw == other.raw
            or self.hex_upper == other.hex_upper
            or self.text_lower == other.text_lower
        )


def currency_key(code: str) -> CurrencyKey:
    if is_hex_code(code):
        decoded = hex_to_ascii(code)
        stripped = strip_zero_bytes(code)
        return CurrencyKey(
            raw=code,
            hex_upper=stripped.upper(),
            text_lower=(decoded if decoded is not None else stripped).lower(),
        )
    return CurrencyKey(raw=code, hex_upper=code.upper(), text_lower=code.lower())


def display_name(code: str) -> str:
    """Human-readable code: 3-letter codes as-is, 40-hex codes decoded when ASCII."""
    if len(code) == STD_CODE_LEN:
        return code
    decoded = hex_to_ascii(code)
    if decoded:
        return decoded.upper()
    return code


def to_wire_currency(code: str) -> str:
    """Encode a code for an issued amount's "currency" field.

    3-character codes pass through, 40-hex codes are upper-cased, longer
    ASCII names (up to 20 bytes) are hex-encoded and zero-padded.
    """
    if not code:
        raise CurrencyCodeError("empty currency code")
    if len(code) == STD_CODE_LEN:
        if code.upper() == NATIVE_CODE:
            raise CurrencyCodeError("'XRP' is not a valid issued currency code")
        return code
    if is_hex_code(code):
        return code.upper()
    try:
        raw = code.encode("ascii")
    except UnicodeEncodeError as e:
        raise CurrencyCodeError(f"non-ASCII currency code: {code!r}") from e
    if len(raw) > HEX_CODE_LEN // 2:
        raise CurrencyCodeError(f"currency code longer than 20 bytes: {code!r}")
    return raw.hex().upper().ljust(HEX_CODE_LEN, "0")


__all__ = [
    "is_hex_code",
    "strip_zero_bytes",
    "hex_to_ascii",
    "CurrencyKey",
    "currency_key",
    "display_name",
    "to_wire_currency",
]
