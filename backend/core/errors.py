"""Exceptions raised by the projection engine and the asset store."""

from __future__ import annotations

from typing import List

OVERFLOW_REASON = "overflows the projected value"


class ProjectionError(ValueError):
    """Base class for projection failures surfaced to the caller."""


class InvalidNumberError(ProjectionError):
    def __init__(self, field: str, value: object, reason: str = "must be a finite number"):
        super().__init__(f"{field} {reason} (got {value!r})")
        self.field = field
        self.value = value


class InvalidDateRangeError(ProjectionError):
    def __init__(self, start_date: object, maturity_date: object):
        super().__init__(f"maturityDate {maturity_date} must be after startDate {start_date}")
        self.start_date = start_date
        self.maturity_date = maturity_date


class InvalidParameterError(ProjectionError):
    def __init__(self, name: str, value: object):
        super().__init__(f"{name} must be a positive integer (got {value!r})")
        self.name = name
        self.value = value


class UnknownCategoryError(ProjectionError):
    def __init__(self, category: str):
        super().__init__(f"category {category!r} is not registered")
        self.category = category


class AssetNotFoundError(ProjectionError):
    def __init__(self, asset_id: str):
        super().__init__(f"asset {asset_id!r} not found")
        self.asset_id = asset_id


class InvalidSequenceError(ProjectionError):
    """Raised when a stored yearlyPerformance sequence breaks its invariants."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
