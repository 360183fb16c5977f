"""Aggregate reads over a set of assets."""

from __future__ import annotations

from typing import Iterable

from backend.models import Asset, YearSummary


def summarize_year(assets: Iterable[Asset], year: int) -> YearSummary:
    """
    Totals for one calendar year across assets.

    Principal counts every asset; valuation and returns only count assets
    with a record for `year`, preferring actual results over projections.
    returnRate is totalReturn over principal (0 without principal).
    """
    initial_amount = 0.0
    current_amount = 0.0
    capital_gain = 0.0
    dividend = 0.0

    for asset in assets:
        initial_amount += asset.initialAmount
        performance = asset.performance_for(year)
        if performance is None:
            continue
        current_amount += performance.effective_end_value
        capital_gain += performance.effective_capital_gains
        dividend += performance.effective_total_dividends

    total_return = capital_gain + dividend
    return_rate = total_return / initial_amount if initial_amount > 0 else 0.0

    return YearSummary(
        year=year,
        initialAmount=initial_amount,
        currentAmount=current_amount,
        capitalGain=capital_gain,
        dividend=dividend,
        totalReturn=total_return,
        returnRate=return_rate,
    )


def total_asset_value(assets: Iterable[Asset]) -> float:
    """Sum of each asset's last projected year, actual results preferred."""
    total = 0.0
    for asset in assets:
        latest = asset.latest_performance
        if latest is not None:
            total += latest.effective_end_value
    return total
