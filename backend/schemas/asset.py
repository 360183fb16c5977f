"""Data contracts for the asset endpoints."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.constants import MAX_AMOUNT, MAX_NAME_LENGTH, CompoundingFrequency, PaymentFrequency
from backend.models import DividendPayment, YearlyPerformance


class CapitalGainIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    annualRate: float = Field(..., ge=-1, le=1, description="Expected annual rate as a decimal (0.05 = 5%).")
    compoundingFrequency: CompoundingFrequency = "yearly"


class IncomeGainIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    dividendYield: float = Field(..., ge=0, le=1)
    paymentFrequency: PaymentFrequency = "yearly"
    reinvestDividends: bool = False


class ReturnsIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    capitalGain: CapitalGainIn
    incomeGain: Optional[IncomeGainIn] = None


def _check_dates(start: Optional[dt.date], maturity: Optional[dt.date]) -> None:
    if start is not None and maturity is not None and maturity <= start:
        raise ValueError("maturityDate must be after startDate")


class AssetCreateRequest(BaseModel):
    """Inputs required to create an asset."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    initialAmount: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    category: str = Field(..., min_length=1)
    startDate: dt.date
    maturityDate: Optional[dt.date] = None
    returns: ReturnsIn

    @model_validator(mode="after")
    def ensure_validity(self) -> "AssetCreateRequest":
        _check_dates(self.startDate, self.maturityDate)
        return self


class AssetUpdateRequest(BaseModel):
    """Partial update; only the supplied fields are applied."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    initialAmount: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    category: Optional[str] = Field(default=None, min_length=1)
    startDate: Optional[dt.date] = None
    maturityDate: Optional[dt.date] = None
    returns: Optional[ReturnsIn] = None

    @model_validator(mode="after")
    def ensure_validity(self) -> "AssetUpdateRequest":
        for key in ("name", "initialAmount", "category", "startDate", "returns"):
            if key in self.model_fields_set and getattr(self, key) is None:
                raise ValueError(f"{key} cannot be null")
        _check_dates(self.startDate, self.maturityDate)
        return self


class ProjectionRequest(BaseModel):
    """Stateless projection of an asset that is not stored."""

    model_config = ConfigDict(extra="forbid")

    initialAmount: float = Field(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    startDate: dt.date
    maturityDate: Optional[dt.date] = None
    returns: ReturnsIn

    @model_validator(mode="after")
    def ensure_validity(self) -> "ProjectionRequest":
        _check_dates(self.startDate, self.maturityDate)
        return self


class ProjectionResponse(BaseModel):
    yearlyPerformance: List[YearlyPerformance]


class ActualPerformanceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    endValue: Optional[float] = Field(default=None, allow_inf_nan=False)
    capitalGains: Optional[float] = Field(default=None, allow_inf_nan=False)
    dividends: Optional[List[DividendPayment]] = None
    totalDividends: Optional[float] = Field(default=None, allow_inf_nan=False)


class SimulationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    years: int = Field(..., ge=1)
    iterations: Optional[int] = Field(default=None, ge=1)
    seed: Optional[int] = None


class SummaryQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    year: int = Field(default_factory=lambda: dt.date.today().year, ge=1, le=9999)


class TotalValueResponse(BaseModel):
    totalAssetValue: float


class PingResponse(BaseModel):
    message: str
    assets: int
