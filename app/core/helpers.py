"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- Sortable, prefixed identifier generation
- Money rounding

These utilities are pure infrastructure - they have no knowledge
of accounts, wagers, or draws.

Usage:
    from core.helpers import generate_id, quantize_money

    bet_id = generate_id("bet")     # "bet_0mf3k2x1a9q4h7c2w8zr"
    amount = quantize_money(Decimal("12.345"))  # Decimal("12.35")
"""

from __future__ import annotations

import secrets
import time
from decimal import ROUND_HALF_UP, Decimal

ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# 36**9 milliseconds is roughly 3,200 years; nine digits keeps ids fixed width.
ID_TIME_WIDTH = 9
ID_RANDOM_WIDTH = 8

CENT = Decimal("0.01")


def _to_base36(value: int, width: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(ID_ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(width, "0")


def generate_id(prefix: str) -> str:
    """
    Generate a globally unique, time-sortable identifier.

    Format is ``{prefix}_{timestamp}{random}``: a fixed-width base36
    millisecond timestamp followed by cryptographically random base36
    characters. Because the timestamp is zero-padded, lexical order of ids
    with the same prefix follows creation order (ties within the same
    millisecond are broken randomly).

    Args:
        prefix: Short entity prefix, e.g. "acc", "bet", "txn"

    Returns:
        Identifier string

    Example:
        generate_id("acc")  # "acc_0lzq3v8k2f1x9a0mbq"
    """
    millis = time.time_ns() // 1_000_000
    random_part = "".join(
        secrets.choice(ID_ALPHABET) for _ in range(ID_RANDOM_WIDTH)
    )
    return f"{prefix}_{_to_base36(millis, ID_TIME_WIDTH)}{random_part}"


def quantize_money(value: Decimal) -> Decimal:
    """
    Round a monetary amount to cents, half away from zero.

    Args:
        value: Amount to round

    Returns:
        Decimal with exactly two fractional digits

    Example:
        quantize_money(Decimal("1.005"))  # Decimal("1.01")
    """
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)

