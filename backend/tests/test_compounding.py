from __future__ import annotations

from math import isclose

import pytest

from backend.core.compounding import calculate_capital_gain, compounding_periods
from backend.core.errors import InvalidNumberError


def test_monthly_compounding_matches_closed_form():
    result = calculate_capital_gain(1000, 0.12, "monthly")

    assert isclose(result.evaluation_amount, 1000 * 1.01**12, rel_tol=1e-12)
    assert isclose(result.evaluation_amount, 1126.83, abs_tol=0.01)
    assert isclose(result.capital_gain, 126.83, abs_tol=0.01)


def test_yearly_compounding_is_a_single_period():
    result = calculate_capital_gain(100000, 0.05, "yearly")

    assert isclose(result.evaluation_amount, 105000.0, abs_tol=1e-6)
    assert isclose(result.capital_gain, 5000.0, abs_tol=1e-6)


def test_daily_compounding_uses_fixed_365_day_year():
    result = calculate_capital_gain(1000, 0.10, "daily")

    assert isclose(result.evaluation_amount, 1000 * (1 + 0.10 / 365) ** 365, rel_tol=1e-12)
    # more periods beat yearly compounding for a positive rate
    assert result.evaluation_amount > calculate_capital_gain(1000, 0.10, "yearly").evaluation_amount


@pytest.mark.parametrize("frequency", ["weekly", "", "YEARLY", None])
def test_unknown_frequency_falls_back_to_yearly(frequency):
    fallback = calculate_capital_gain(2500, 0.07, frequency)
    yearly = calculate_capital_gain(2500, 0.07, "yearly")

    assert fallback == yearly
    assert compounding_periods(0.07, frequency) == (1, 0.07)


def test_negative_rate_shrinks_value():
    result = calculate_capital_gain(1000, -0.10, "yearly")

    assert isclose(result.evaluation_amount, 900.0, abs_tol=1e-9)
    assert isclose(result.capital_gain, -100.0, abs_tol=1e-9)


def test_zero_start_value_stays_zero():
    result = calculate_capital_gain(0, 0.08, "daily")

    assert result.evaluation_amount == 0
    assert result.capital_gain == 0


@pytest.mark.parametrize(("rate", "frequency"), [(1e5, "daily"), (1e300, "monthly")])
def test_overflowing_rate_raises_classified_error(rate, frequency):
    with pytest.raises(InvalidNumberError, match="annualRate overflows"):
        calculate_capital_gain(1e12, rate, frequency)
