"""Model constants shared by the projection engine and the API."""

from __future__ import annotations

from typing import Literal, Tuple

# Projection horizon used when an asset has no maturity date.
DEFAULT_HORIZON_YEARS = 50

# Fixed 365-day year; leap years are not modelled.
DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12

# Accepted by the API; the core treats anything else as yearly.
CompoundingFrequency = Literal["yearly", "monthly", "daily"]
PaymentFrequency = Literal["yearly", "quarterly", "monthly"]

# Annualised volatility for the Monte Carlo model.
VOLATILITY = 0.15
DEFAULT_ITERATIONS = 1000

# Flat capital-gains tax rate (20.315%).
CAPITAL_GAINS_TAX_RATE = 0.20315

DEFAULT_ASSET_CATEGORIES: Tuple[str, ...] = (
    "Savings",
    "Investments",
    "Real Estate",
    "Other Assets",
)

MAX_NAME_LENGTH = 100
MAX_AMOUNT = 999_999_999_999
