"""Merge user-entered actual results into a projected sequence."""

from __future__ import annotations

import logging
from typing import List

from backend.models import ActualPerformance, YearlyPerformance

logger = logging.getLogger(__name__)


def update_actual_performance(
    yearly_performance: List[YearlyPerformance],
    year: int,
    actual: ActualPerformance,
) -> List[YearlyPerformance]:
    """Return a copy of the sequence with the actual* fields of `year` set.

    Only the matching record is replaced; every other record is carried over
    as the same object. A year with no record is ignored and the input list is
    returned as is.
    """
    for index, performance in enumerate(yearly_performance):
        if performance.year != year:
            continue
        patched = performance.model_copy(
            update={
                "actualEndValue": actual.endValue,
                "actualCapitalGains": actual.capitalGains,
                "actualDividends": list(actual.dividends) if actual.dividends is not None else None,
                "actualTotalDividends": actual.totalDividends,
            }
        )
        updated = list(yearly_performance)
        updated[index] = patched
        return updated

    logger.debug("no projected record for %s, actual results ignored", year)
    return yearly_performance
