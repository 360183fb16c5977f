"""HTTP routes for the Flask API."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.errors import AssetNotFoundError, ProjectionError
from backend.core.performance import initialize_yearly_performance
from backend.domain.asset_store import AssetStore
from backend.models import ReturnModel
from backend.schemas.asset import (
    ActualPerformanceRequest,
    AssetCreateRequest,
    AssetUpdateRequest,
    PingResponse,
    ProjectionRequest,
    ProjectionResponse,
    SimulationRequest,
    SummaryQuery,
    TotalValueResponse,
)

api_bp = Blueprint("api", __name__)


def _store() -> AssetStore:
    return current_app.extensions["asset_store"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _asset_json(asset) -> Dict[str, Any]:
    return asset.model_dump(mode="json")


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(AssetNotFoundError)
def _handle_not_found(exc: AssetNotFoundError):
    return jsonify({"error": str(exc)}), HTTPStatus.NOT_FOUND


@api_bp.errorhandler(ProjectionError)
def _handle_projection_error(exc: ProjectionError):
    current_app.logger.warning("rejected request: %s", exc)
    return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", assets=len(_store()))
    return jsonify(response.model_dump())


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Project an unsaved asset year by year."""
    payload = ProjectionRequest.model_validate(_payload())
    rows = initialize_yearly_performance(
        payload.startDate,
        payload.maturityDate,
        payload.initialAmount,
        ReturnModel.model_validate(payload.returns.model_dump()),
    )
    return jsonify(ProjectionResponse(yearlyPerformance=rows).model_dump(mode="json"))


@api_bp.get("/assets")
def list_assets() -> Any:
    return jsonify([_asset_json(asset) for asset in _store().sorted_assets()])


@api_bp.post("/assets")
def create_asset() -> Any:
    payload = AssetCreateRequest.model_validate(_payload())
    store = _store()
    asset_id = store.create_asset(payload.model_dump(exclude_unset=True))
    return jsonify(_asset_json(store.require_asset(asset_id))), HTTPStatus.CREATED


@api_bp.get("/assets/summary")
def year_summary() -> Any:
    """Valuation and returns across all assets for ?year= (default: this year)."""
    query = SummaryQuery.model_validate(request.args.to_dict())
    return jsonify(_store().summarize_year(query.year).model_dump())


@api_bp.get("/assets/total")
def total_value() -> Any:
    response = TotalValueResponse(totalAssetValue=_store().total_asset_value())
    return jsonify(response.model_dump())


@api_bp.get("/assets/<asset_id>")
def get_asset(asset_id: str) -> Any:
    return jsonify(_asset_json(_store().require_asset(asset_id)))


@api_bp.patch("/assets/<asset_id>")
def update_asset(asset_id: str) -> Any:
    payload = AssetUpdateRequest.model_validate(_payload())
    asset = _store().update_asset(asset_id, payload.model_dump(exclude_unset=True))
    return jsonify(_asset_json(asset))


@api_bp.delete("/assets/<asset_id>")
def delete_asset(asset_id: str) -> Any:
    _store().delete_asset(asset_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.put("/assets/<asset_id>/performance/<int:year>/actual")
def record_actual_performance(asset_id: str, year: int) -> Any:
    """Store actual results for one year of an asset."""
    payload = ActualPerformanceRequest.model_validate(_payload())
    asset = _store().update_actual_performance(asset_id, year, payload.model_dump())
    return jsonify(_asset_json(asset))


@api_bp.post("/assets/<asset_id>/simulation")
def simulate(asset_id: str) -> Any:
    """Monte Carlo terminal-value simulation for an asset."""
    payload = SimulationRequest.model_validate(_payload())
    config = current_app.config
    iterations = payload.iterations or config["MONTE_CARLO_DEFAULT_ITERATIONS"]

    if iterations > config["MONTE_CARLO_MAX_ITERATIONS"]:
        raise ProjectionError(f"iterations must be <= {config['MONTE_CARLO_MAX_ITERATIONS']}")
    if payload.years > config["MONTE_CARLO_MAX_YEARS"]:
        raise ProjectionError(f"years must be <= {config['MONTE_CARLO_MAX_YEARS']}")

    result = _store().run_monte_carlo_simulation(
        asset_id,
        years=payload.years,
        iterations=iterations,
        seed=payload.seed,
    )
    return jsonify(result.model_dump())
