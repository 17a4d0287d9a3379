"""Transaction memos (hex-encoded UTF-8 fields)."""

from __future__ import annotations

from typing import Dict, List

from .core.datatypes import OrderIntent


def to_hex(text: str) -> str:
    return text.encode("utf-8").hex().upper()


def configure_memos(memo_type: str = "", memo_format: str = "", memo_data: str = "") -> List[Dict[str, Dict[str, str]]]:
    """Single-entry Memos array; empty fields are omitted from the Memo."""
    memo: Dict[str, str] = {}
    if memo_type:
        memo["MemoType"] = to_hex(memo_type)
    if memo_format:
        memo["MemoFormat"] = to_hex(memo_format)
    if memo_data:
        memo["MemoData"] = to_hex(memo_data)
    return [{"Memo": memo}]


def order_memo_text(intent: OrderIntent, origin: str) -> str:
    label = "Limit" if intent is OrderIntent.LIMIT else "Swap"
    return f"{label} via {origin}" if origin else label


__all__ = ["to_hex", "configure_memos", "order_memo_text"]
