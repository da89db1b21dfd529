"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from nestegg.core.errors import InvalidParameter
from nestegg.core.future_value import future_value
from nestegg.core.projection import AgeParameters, RateParameters, project_plan
from nestegg.core.simulator import simulate
from nestegg.core.withdrawal import annual_withdrawal, monthly_income, withdrawal_rating
from nestegg.schemas.projection import (
    FutureValueRequest,
    FutureValueResponse,
    ProjectionRequest,
    SimulationRequest,
    SimulationResponse,
    WithdrawalRequest,
    WithdrawalResponse,
)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    current_app.logger.warning("rejected payload on %s: %d error(s)", request.path, exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidParameter)
def _handle_invalid_parameter(exc: InvalidParameter):
    current_app.logger.warning("invalid parameters on %s: %s", request.path, exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _or_default(value: Any, key: str) -> Any:
    return value if value is not None else current_app.config[key]


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify({"status": "ok"})


@api_bp.get("/defaults")
def defaults() -> Any:
    """Ages and rates the front-end should start from."""
    cfg = current_app.config
    return jsonify(
        {
            "current_age": cfg["DEFAULT_CURRENT_AGE"],
            "horizon_age": cfg["DEFAULT_HORIZON_AGE"],
            "end_age": cfg["DEFAULT_END_AGE"],
            "conservative_rate": cfg["DEFAULT_CONSERVATIVE_RATE"],
            "growth_rate": cfg["DEFAULT_GROWTH_RATE"],
            "withdrawal_rate": cfg["DEFAULT_WITHDRAWAL_RATE"],
        }
    )


@api_bp.post("/future-value")
def closed_form_value() -> Any:
    payload = FutureValueRequest.model_validate(_payload())
    value = future_value(
        payload.principal,
        payload.monthly_contribution,
        payload.annual_rate,
        payload.years,
        zero_year_policy=payload.zero_year_policy,
    )
    return jsonify(FutureValueResponse(value=value).model_dump(mode="json"))


@api_bp.post("/withdrawal")
def withdrawal() -> Any:
    payload = WithdrawalRequest.model_validate(_payload())
    rate = _or_default(payload.withdrawal_rate, "DEFAULT_WITHDRAWAL_RATE")
    amount = annual_withdrawal(payload.projected_total, rate)
    response = WithdrawalResponse(
        annual_withdrawal=amount,
        monthly_income=monthly_income(amount),
        rating=withdrawal_rating(rate),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/simulate")
def yearly_table() -> Any:
    payload = SimulationRequest.model_validate(_payload())
    rows = simulate(
        payload.conservative_principal,
        payload.growth_principal,
        payload.conservative_monthly,
        payload.growth_monthly,
        payload.conservative_rate,
        payload.growth_rate,
        payload.current_age,
        payload.horizon_age,
        payload.end_age,
        payload.annual_withdrawal,
    )
    return jsonify(SimulationResponse(rows=rows).model_dump(mode="json"))


@api_bp.post("/projection")
def projection() -> Any:
    """Return the summary figures, yearly table and growth curve for a set of accounts."""
    payload = ProjectionRequest.model_validate(_payload())

    ages = AgeParameters(
        current_age=_or_default(payload.current_age, "DEFAULT_CURRENT_AGE"),
        horizon_age=_or_default(payload.horizon_age, "DEFAULT_HORIZON_AGE"),
        view_age=payload.view_age,
    )
    rates = RateParameters(
        conservative_rate=_or_default(payload.conservative_rate, "DEFAULT_CONSERVATIVE_RATE"),
        growth_rate=_or_default(payload.growth_rate, "DEFAULT_GROWTH_RATE"),
        withdrawal_rate=_or_default(payload.withdrawal_rate, "DEFAULT_WITHDRAWAL_RATE"),
    )

    summary = project_plan(
        payload.accounts,
        ages,
        rates,
        end_age=_or_default(payload.end_age, "DEFAULT_END_AGE"),
    )
    current_app.logger.info(
        "projection for %d account(s), %d row(s)", len(payload.accounts), len(summary.rows)
    )
    return jsonify(summary.model_dump(mode="json"))
