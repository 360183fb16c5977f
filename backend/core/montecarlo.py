"""Monte Carlo simulation of an asset's terminal value.

Each path compounds the principal with log-normal annual returns:

    value *= exp(rate - 0.5 * sigma**2 + sigma * z)

where z is a standard normal drawn with the Box-Muller transform from a
uniform source. The uniform source is injectable so a run can be replayed.
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Protocol, Sequence

from backend.constants import DEFAULT_ITERATIONS, VOLATILITY
from backend.core.errors import OVERFLOW_REASON, InvalidNumberError, InvalidParameterError
from backend.models import SimulationResult

logger = logging.getLogger(__name__)

BEST_CASE_PERCENTILE = 0.95
EXPECTED_PERCENTILE = 0.50
WORST_CASE_PERCENTILE = 0.05


class UniformSource(Protocol):
    def next(self) -> float:
        """Return a uniform draw in [0, 1)."""
        ...


class RandomSource:
    """UniformSource backed by a private random.Random instance."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        return self._rng.random()


def normal_random(source: UniformSource) -> float:
    """Standard normal variate via Box-Muller; zero draws are redrawn."""
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = source.next()
    while v == 0.0:
        v = source.next()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def get_percentile(sorted_values: Sequence[float], percentile: float) -> float:
    """Index-based percentile: sorted_values[floor(len * p)], clamped to the list."""
    if not sorted_values:
        raise InvalidParameterError("sample size", 0)
    index = math.floor(len(sorted_values) * percentile)
    index = min(max(index, 0), len(sorted_values) - 1)
    return sorted_values[index]


def _check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidParameterError(name, value)


def run_monte_carlo_simulation(
    initial_amount: float,
    annual_rate: float,
    years: int,
    iterations: int = DEFAULT_ITERATIONS,
    random_source: Optional[UniformSource] = None,
    seed: Optional[int] = None,
    volatility: float = VOLATILITY,
) -> SimulationResult:
    """
    Simulate `iterations` independent paths of `years` annual steps.

    Every path starts with initial_amount, so it holds years + 1 values.
    bestCase / expected / worstCase are the 95th / 50th / 5th percentile of
    the terminal values. When random_source is omitted a RandomSource(seed)
    is used; a fixed seed therefore reproduces the paths exactly.
    """
    _check_positive("years", years)
    _check_positive("iterations", iterations)
    for field, value in (("initialAmount", initial_amount), ("annualRate", annual_rate)):
        if not math.isfinite(value):
            raise InvalidNumberError(field, value)

    if random_source is None:
        random_source = RandomSource(seed)
    else:
        seed = None

    drift = annual_rate - 0.5 * volatility * volatility

    paths: List[List[float]] = []
    for _ in range(iterations):
        value = float(initial_amount)
        path = [value]
        for _year in range(years):
            try:
                random_return = math.exp(drift + volatility * normal_random(random_source)) - 1.0
            except OverflowError as exc:
                raise InvalidNumberError("annualRate", annual_rate, OVERFLOW_REASON) from exc
            value *= 1.0 + random_return
            if not math.isfinite(value):
                raise InvalidNumberError("annualRate", annual_rate, OVERFLOW_REASON)
            path.append(value)
        paths.append(path)

    final_values = sorted(path[-1] for path in paths)
    logger.debug("simulated %s paths over %s years", iterations, years)

    return SimulationResult(
        bestCase=get_percentile(final_values, BEST_CASE_PERCENTILE),
        expected=get_percentile(final_values, EXPECTED_PERCENTILE),
        worstCase=get_percentile(final_values, WORST_CASE_PERCENTILE),
        paths=paths,
        years=years,
        iterations=iterations,
        volatility=volatility,
        seed=seed,
    )
