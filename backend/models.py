from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CapitalGain(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    annualRate: float
    # yearly | monthly | daily; anything else compounds yearly
    compoundingFrequency: str = "yearly"


class IncomeGain(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    dividendYield: float = 0.0
    # yearly | quarterly | monthly; anything else pays once a year
    paymentFrequency: str = "yearly"
    reinvestDividends: bool = False


class ReturnModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    capitalGain: CapitalGain
    incomeGain: Optional[IncomeGain] = None


class DividendPayment(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    date: dt.date
    amount: int


class YearlyPerformance(BaseModel):
    """One projected year. The actual* overlay is only set by reconciliation
    and, when present, takes precedence over the projected value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    startValue: int
    endValue: int
    capitalGains: int
    dividends: List[DividendPayment] = Field(default_factory=list)
    totalDividends: int = 0

    actualEndValue: Optional[float] = None
    actualCapitalGains: Optional[float] = None
    actualDividends: Optional[List[DividendPayment]] = None
    actualTotalDividends: Optional[float] = None

    @property
    def has_actuals(self) -> bool:
        return any(
            value is not None
            for value in (
                self.actualEndValue,
                self.actualCapitalGains,
                self.actualDividends,
                self.actualTotalDividends,
            )
        )

    @property
    def effective_end_value(self) -> float:
        return self.actualEndValue if self.actualEndValue is not None else self.endValue

    @property
    def effective_capital_gains(self) -> float:
        return self.actualCapitalGains if self.actualCapitalGains is not None else self.capitalGains

    @property
    def effective_dividends(self) -> List[DividendPayment]:
        return self.actualDividends if self.actualDividends is not None else self.dividends

    @property
    def effective_total_dividends(self) -> float:
        return self.actualTotalDividends if self.actualTotalDividends is not None else self.totalDividends


class ActualPerformance(BaseModel):
    """User-entered results for one year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    endValue: Optional[float] = None
    capitalGains: Optional[float] = None
    dividends: Optional[List[DividendPayment]] = None
    totalDividends: Optional[float] = None


class Asset(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    initialAmount: float
    category: str
    startDate: dt.date
    maturityDate: Optional[dt.date] = None
    returns: ReturnModel
    yearlyPerformance: List[YearlyPerformance] = Field(default_factory=list)

    def performance_for(self, year: int) -> Optional[YearlyPerformance]:
        for performance in self.yearlyPerformance:
            if performance.year == year:
                return performance
        return None

    @property
    def latest_performance(self) -> Optional[YearlyPerformance]:
        return self.yearlyPerformance[-1] if self.yearlyPerformance else None


class SimulationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bestCase: float
    expected: float
    worstCase: float
    paths: List[List[float]]
    years: int
    iterations: int
    volatility: float
    seed: Optional[int] = None


class YearSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    year: int
    initialAmount: float
    currentAmount: float
    capitalGain: float
    dividend: float
    totalReturn: float
    returnRate: float
