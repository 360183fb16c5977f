"""Capital-gain compounding over one calendar year."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from backend.constants import DAYS_PER_YEAR, MONTHS_PER_YEAR
from backend.core.errors import OVERFLOW_REASON, InvalidNumberError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapitalGainResult:
    evaluation_amount: float
    capital_gain: float


def compounding_periods(annual_rate: float, compounding_frequency: str) -> Tuple[int, float]:
    """Return (periods, per-period rate) for a compounding frequency."""
    if compounding_frequency == "daily":
        return DAYS_PER_YEAR, annual_rate / DAYS_PER_YEAR
    if compounding_frequency == "monthly":
        return MONTHS_PER_YEAR, annual_rate / MONTHS_PER_YEAR
    if compounding_frequency != "yearly":
        logger.debug("unknown compounding frequency %r, compounding yearly", compounding_frequency)
    return 1, annual_rate


def calculate_capital_gain(
    start_value: float,
    annual_rate: float,
    compounding_frequency: str,
) -> CapitalGainResult:
    """
    Grow start_value for one year:

        evaluation = start_value * (1 + rate) ** periods

    daily uses 365 periods, monthly 12, yearly (and anything unrecognised) 1.
    Nothing is rounded here; callers round what they store. A rate large
    enough to overflow a float raises InvalidNumberError.
    """
    periods, rate = compounding_periods(annual_rate, compounding_frequency)
    try:
        evaluation = start_value * (1.0 + rate) ** periods
    except OverflowError as exc:
        raise InvalidNumberError("annualRate", annual_rate, OVERFLOW_REASON) from exc
    if not math.isfinite(evaluation):
        raise InvalidNumberError("annualRate", annual_rate, OVERFLOW_REASON)
    return CapitalGainResult(
        evaluation_amount=evaluation,
        capital_gain=evaluation - start_value,
    )
