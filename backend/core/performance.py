"""Year-by-year performance projection for a single asset."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional

from backend.constants import DEFAULT_HORIZON_YEARS
from backend.core.compounding import calculate_capital_gain
from backend.core.dividends import calculate_dividends
from backend.core.errors import InvalidNumberError
from backend.core.rounding import round_amount
from backend.models import Asset, DividendPayment, ReturnModel, YearlyPerformance

logger = logging.getLogger(__name__)


def calculate_year_performance(year: int, start_value: float, returns: ReturnModel) -> YearlyPerformance:
    """
    Project one calendar year.

    Order of operations:
      1) Compound start_value with the capital-gain settings.
      2) Schedule dividends on the PRE-growth start_value.
      3) endValue = evaluation (+ total dividends when reinvested). Reinvested
         dividends are added once, they do not compound within the year.

    startValue, endValue, capitalGains and totalDividends are stored rounded;
    each dividend payment is already rounded by the scheduler.
    """
    capital = returns.capitalGain
    result = calculate_capital_gain(start_value, capital.annualRate, capital.compoundingFrequency)

    income = returns.incomeGain
    dividends: List[DividendPayment] = []
    reinvest = False
    if income is not None:
        dividends = calculate_dividends(start_value, income.dividendYield, income.paymentFrequency, year)
        reinvest = income.reinvestDividends

    total_dividends = sum(payment.amount for payment in dividends)
    end_value = result.evaluation_amount + total_dividends if reinvest else result.evaluation_amount

    return YearlyPerformance(
        year=year,
        startValue=round_amount(start_value, "startValue"),
        endValue=round_amount(end_value, "endValue"),
        capitalGains=round_amount(result.capital_gain, "capitalGains"),
        dividends=dividends,
        totalDividends=round_amount(total_dividends, "totalDividends"),
    )


def projection_end_year(start_date: date, maturity_date: Optional[date]) -> int:
    if maturity_date is not None:
        return maturity_date.year
    return start_date.year + DEFAULT_HORIZON_YEARS


def _require_finite(field: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidNumberError(field, value)


def initialize_yearly_performance(
    start_date: date,
    maturity_date: Optional[date],
    initial_amount: float,
    returns: ReturnModel,
) -> List[YearlyPerformance]:
    """
    Build the full ordered sequence from start_date's year through
    maturity_date's year (or start year + 50 without a maturity).

    Each year starts from the previous year's stored endValue, so
    performance[n + 1].startValue == performance[n].endValue. Date ordering is
    the caller's job; a maturity year before the start year gives an empty list.
    """
    _require_finite("initialAmount", initial_amount)
    _require_finite("annualRate", returns.capitalGain.annualRate)
    if returns.incomeGain is not None:
        _require_finite("dividendYield", returns.incomeGain.dividendYield)

    start_year = start_date.year
    end_year = projection_end_year(start_date, maturity_date)
    logger.debug("projecting %s..%s from %s", start_year, end_year, initial_amount)

    rows: List[YearlyPerformance] = []
    current: float = initial_amount
    for year in range(start_year, end_year + 1):
        performance = calculate_year_performance(year, current, returns)
        rows.append(performance)
        current = performance.endValue

    return rows


def check_sequence(rows: List[YearlyPerformance], label: str = "yearlyPerformance") -> List[str]:
    """Return the invariant violations of a stored sequence (empty when valid)."""
    errors: List[str] = []
    previous: Optional[YearlyPerformance] = None
    for index, row in enumerate(rows):
        if previous is not None:
            if row.year != previous.year + 1:
                errors.append(f"{label}[{index}] year {row.year} does not follow {previous.year}")
            if row.startValue != previous.endValue:
                errors.append(
                    f"{label}[{index}] startValue {row.startValue} != previous endValue {previous.endValue}"
                )
        previous = row
    return errors


def check_asset(asset: Asset, label: str = "asset") -> List[str]:
    """
    Return the invariant violations of a stored asset (empty when valid):
    maturity after start, the first record opening in the start year with
    the rounded initialAmount, and the sequence checks of check_sequence().
    """
    errors: List[str] = []
    if asset.maturityDate is not None and asset.maturityDate <= asset.startDate:
        errors.append(f"{label} maturityDate {asset.maturityDate} must be after startDate {asset.startDate}")

    rows = asset.yearlyPerformance
    if rows:
        first = rows[0]
        if first.year != asset.startDate.year:
            errors.append(f"{label} first year {first.year} is not the start year {asset.startDate.year}")
        if not math.isfinite(asset.initialAmount):
            errors.append(f"{label} initialAmount must be a finite number (got {asset.initialAmount!r})")
        elif first.startValue != round_amount(asset.initialAmount):
            errors.append(
                f"{label} first startValue {first.startValue} != rounded initialAmount {asset.initialAmount}"
            )

    errors.extend(check_sequence(rows, f"{label}.yearlyPerformance"))
    return errors
