"""Dividend payment schedule for a single year."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import List

from backend.constants import MONTHS_PER_YEAR
from backend.core.rounding import round_amount
from backend.models import DividendPayment

logger = logging.getLogger(__name__)


def payments_per_year(payment_frequency: str) -> int:
    if payment_frequency == "monthly":
        return 12
    if payment_frequency == "quarterly":
        return 4
    if payment_frequency != "yearly":
        logger.debug("unknown payment frequency %r, paying yearly", payment_frequency)
    return 1


def calculate_dividends(
    amount: float,
    dividend_yield: float,
    payment_frequency: str,
    year: int,
) -> List[DividendPayment]:
    """
    Split amount * dividend_yield evenly across the year's payments.

    Each payment is rounded on its own, so the payments can drift from the
    rounded annual total by up to half a unit per payment. Payment i falls on
    the 1st of month floor(12 / payments * i) (0-based month index).
    """
    count = payments_per_year(payment_frequency)
    per_payment = round_amount(amount * dividend_yield / count, "dividend")

    payments: List[DividendPayment] = []
    for i in range(count):
        month_index = math.floor(MONTHS_PER_YEAR / count * i)
        payments.append(DividendPayment(date=date(year, month_index + 1, 1), amount=per_payment))
    return payments
