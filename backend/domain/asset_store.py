from __future__ import annotations

import logging
import math
import threading
import uuid
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from backend.constants import DEFAULT_ITERATIONS
from backend.core import montecarlo, reconcile, summary
from backend.core.errors import (
    AssetNotFoundError,
    InvalidDateRangeError,
    InvalidNumberError,
    InvalidSequenceError,
    ProjectionError,
    UnknownCategoryError,
)
from backend.core.performance import check_asset, initialize_yearly_performance
from backend.models import ActualPerformance, Asset, SimulationResult, YearSummary

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "initialAmount", "category", "startDate", "maturityDate", "returns"})

# Any of these in an update discards the stored sequence and projects it again.
PROJECTION_FIELDS = frozenset({"initialAmount", "returns", "startDate", "maturityDate"})

ChangeListener = Callable[[str, Optional[str]], None]


def _as_mapping(data: Any) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


def _check_fields(data: Mapping[str, Any]) -> None:
    unknown = sorted(set(data) - EDITABLE_FIELDS)
    if unknown:
        raise ProjectionError(f"cannot set field(s): {', '.join(unknown)}")


class AssetStore:
    """
    Owns the asset records and every write to them.

    Records are frozen; each write builds a new Asset and swaps it in under
    the store lock, so a re-projection and a reconciliation on the same asset
    never interleave. Listeners registered with on_change() are called after
    the write is committed with (event, asset_id).
    """

    def __init__(self, categories: Optional[Iterable[str]] = None):
        self._assets: Dict[str, Asset] = {}
        self._categories = frozenset(categories) if categories is not None else None
        self._listeners: List[ChangeListener] = []
        self._lock = threading.RLock()

    # ---------- reads ----------

    def get_asset(self, asset_id: str) -> Optional[Asset]:
        with self._lock:
            return self._assets.get(asset_id)

    def require_asset(self, asset_id: str) -> Asset:
        asset = self.get_asset(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return asset

    def assets(self) -> List[Asset]:
        with self._lock:
            return list(self._assets.values())

    def sorted_assets(self) -> List[Asset]:
        """Assets with the most recent start date first."""
        return sorted(self.assets(), key=lambda asset: asset.startDate, reverse=True)

    def total_asset_value(self) -> float:
        return summary.total_asset_value(self.assets())

    def summarize_year(self, year: int) -> YearSummary:
        return summary.summarize_year(self.assets(), year)

    def __len__(self) -> int:
        with self._lock:
            return len(self._assets)

    def __contains__(self, asset_id: object) -> bool:
        with self._lock:
            return asset_id in self._assets

    # ---------- writes ----------

    def create_asset(self, data: Any) -> str:
        """Validate, project and store a new asset; returns its id."""
        fields = _as_mapping(data)
        _check_fields(fields)
        asset_id = uuid.uuid4().hex
        draft = Asset.model_validate({**fields, "id": asset_id, "yearlyPerformance": []})
        asset = self._project(draft)

        with self._lock:
            self._assets[asset_id] = asset
        logger.info("created asset %s (%s years)", asset_id, len(asset.yearlyPerformance))
        self._emit("create", asset_id)
        return asset_id

    def update_asset(self, asset_id: str, changes: Any) -> Asset:
        """
        Merge `changes` into the asset.

        When any projection input (initialAmount, returns, startDate,
        maturityDate) is among the supplied keys, the whole yearlyPerformance
        sequence is replaced by a fresh projection, actual results included.
        Other edits keep the stored sequence untouched.
        """
        fields = _as_mapping(changes)
        _check_fields(fields)

        with self._lock:
            current = self.require_asset(asset_id)
            merged = {**current.model_dump(exclude={"yearlyPerformance"}), **fields}
            draft = Asset.model_validate({**merged, "yearlyPerformance": []})

            if PROJECTION_FIELDS.intersection(fields):
                updated = self._project(draft)
            else:
                self._validate(draft)
                updated = draft.model_copy(update={"yearlyPerformance": current.yearlyPerformance})
            self._assets[asset_id] = updated

        logger.info("updated asset %s (%s)", asset_id, ", ".join(sorted(fields)) or "no fields")
        self._emit("update", asset_id)
        return updated

    def delete_asset(self, asset_id: str) -> None:
        with self._lock:
            if asset_id not in self._assets:
                raise AssetNotFoundError(asset_id)
            del self._assets[asset_id]
        logger.info("deleted asset %s", asset_id)
        self._emit("delete", asset_id)

    def update_actual_performance(self, asset_id: str, year: int, actual: Any) -> Asset:
        """Record actual results for one year; other years are left as they are."""
        if not isinstance(actual, ActualPerformance):
            actual = ActualPerformance.model_validate(actual)

        with self._lock:
            current = self.require_asset(asset_id)
            sequence = reconcile.update_actual_performance(current.yearlyPerformance, year, actual)
            if sequence is current.yearlyPerformance:
                return current
            updated = current.model_copy(update={"yearlyPerformance": sequence})
            self._assets[asset_id] = updated

        logger.info("recorded actual performance for asset %s year %s", asset_id, year)
        self._emit("reconcile", asset_id)
        return updated

    def reset(self) -> None:
        with self._lock:
            self._assets.clear()
        self._emit("reset", None)

    # ---------- persistence collaborator ----------

    def serialize(self) -> List[Dict[str, Any]]:
        """JSON-ready records in insertion order."""
        return [asset.model_dump(mode="json") for asset in self.assets()]

    def hydrate(self, records: Iterable[Any]) -> None:
        """
        Replace the store contents with previously serialized records.

        Stored sequences are loaded as they are, never re-projected. Every
        record is validated first; on any failure the store is left unchanged.
        """
        loaded: Dict[str, Asset] = {}
        for index, record in enumerate(records):
            asset = record if isinstance(record, Asset) else Asset.model_validate(record)
            errors = check_asset(asset, f"assets[{index}]")
            if errors:
                raise InvalidSequenceError(errors)
            loaded[asset.id] = asset

        with self._lock:
            self._assets = loaded
        logger.info("hydrated %s assets", len(loaded))
        self._emit("hydrate", None)

    # ---------- simulation ----------

    def run_monte_carlo_simulation(
        self,
        asset_id: str,
        years: int,
        iterations: int = DEFAULT_ITERATIONS,
        random_source: Optional[montecarlo.UniformSource] = None,
        seed: Optional[int] = None,
    ) -> SimulationResult:
        asset = self.require_asset(asset_id)
        return montecarlo.run_monte_carlo_simulation(
            initial_amount=asset.initialAmount,
            annual_rate=asset.returns.capitalGain.annualRate,
            years=years,
            iterations=iterations,
            random_source=random_source,
            seed=seed,
        )

    # ---------- change notification ----------

    def on_change(self, callback: ChangeListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: str, asset_id: Optional[str]) -> None:
        for listener in list(self._listeners):
            listener(event, asset_id)

    # ---------- helpers ----------

    def _validate(self, asset: Asset) -> None:
        if not math.isfinite(asset.initialAmount):
            raise InvalidNumberError("initialAmount", asset.initialAmount)
        if not math.isfinite(asset.returns.capitalGain.annualRate):
            raise InvalidNumberError("annualRate", asset.returns.capitalGain.annualRate)
        if asset.maturityDate is not None and asset.maturityDate <= asset.startDate:
            raise InvalidDateRangeError(asset.startDate, asset.maturityDate)
        if self._categories is not None and asset.category not in self._categories:
            raise UnknownCategoryError(asset.category)

    def _project(self, draft: Asset) -> Asset:
        self._validate(draft)
        sequence = initialize_yearly_performance(
            draft.startDate,
            draft.maturityDate,
            draft.initialAmount,
            draft.returns,
        )
        return draft.model_copy(update={"yearlyPerformance": sequence})
