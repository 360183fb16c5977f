"""Whole-unit rounding for stored amounts."""

from __future__ import annotations

import math

from backend.core.errors import InvalidNumberError


def round_amount(value: float, field: str = "amount") -> int:
    """Round half-up to the nearest whole unit.

    Stored amounts use half-up rounding (2.5 -> 3, -2.5 -> -2) rather than
    Python's round-half-to-even. A value that overflowed to infinity (or is
    NaN) raises InvalidNumberError naming `field`.
    """
    if not math.isfinite(value):
        raise InvalidNumberError(field, value)
    return int(math.floor(value + 0.5))
