"""Decimal-based rounding helpers.

Scores are rounded half-up (2.5 -> 3) rather than with Python's banker's
rounding so that the same inputs always land in the same bucket.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float | int | Decimal, places: int = 0) -> Decimal:
    """Round a number half-up to the given number of decimal places."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def round_int(value: float | int | Decimal) -> int:
    """Round half-up to the nearest integer."""
    return int(round_half_up(value))


def round_one_decimal(value: float | int | Decimal) -> float:
    """Round half-up to one decimal place."""
    return float(round_half_up(value, 1))


def clamp(value: int, low: int, high: int) -> int:
    """Clamp an integer to [low, high]."""
    return max(low, min(high, value))
