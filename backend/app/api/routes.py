"""HTTP routes for the Flask API."""

import math
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, abort, current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from backend.app.logging import get_logger
from backend.core.ping import get_ping
from backend.core.savings import (
    find_goal_month,
    monthly_rate,
    project_future_value,
    validate_inputs,
)
from backend.core.scenario import ScenarioValidationError, summarize_scenario
from backend.schemas.savings import (
    GoalRequest,
    ProjectionInput,
    RateRequest,
    RateResponse,
)

api_bp = Blueprint("api", __name__)

logger = get_logger(__name__)


def _json_object() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=False)
    if not isinstance(payload, dict):
        abort(HTTPStatus.BAD_REQUEST, description="Request body must be a JSON object.")
    return payload


def _is_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_is_finite(item) for item in value.values())
    if isinstance(value, list):
        return all(_is_finite(item) for item in value)
    return True


def _finite_json(model: BaseModel) -> Any:
    """Serialize a result, refusing figures that JSON cannot carry (inf, nan)."""
    body = model.model_dump()
    if not _is_finite(body):
        abort(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            description="Inputs produce a result too large to represent.",
        )
    return jsonify(body)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload errors=%d", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False, include_input=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(ScenarioValidationError)
def _handle_scenario_error(exc: ScenarioValidationError):
    logger.info("rejected scenario fields=%s", ",".join(sorted(exc.errors)))
    return jsonify({"errors": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(HTTPStatus.BAD_REQUEST)
def _handle_bad_request(exc):
    return jsonify({"detail": exc.description}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(HTTPStatus.UNPROCESSABLE_ENTITY)
def _handle_unprocessable(exc):
    logger.info("rejected result detail=%s", exc.description)
    return jsonify({"detail": exc.description}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    settings = current_app.config["SETTINGS"]
    return jsonify(get_ping(settings.app_name).model_dump())


@api_bp.post("/calc/rate")
def rate() -> Any:
    payload = RateRequest.model_validate(_json_object())
    response = RateResponse(monthlyRate=monthly_rate(payload.annualRatePct))
    return _finite_json(response)


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Future value of one scenario, split into principal and interest."""
    payload = ProjectionInput.model_validate(_json_object())
    result = project_future_value(
        payload.principal,
        payload.annualRatePct,
        payload.monthlyContribution,
        payload.years,
    )
    logger.info("projection months=%d future_value=%.2f", result.months, result.futureValue)
    return _finite_json(result)


@api_bp.post("/calc/goal")
def goal() -> Any:
    """First month in the horizon at which the balance reaches the goal."""
    payload = GoalRequest.model_validate(_json_object())
    result = find_goal_month(
        payload.principal,
        payload.annualRatePct,
        payload.monthlyContribution,
        payload.goal,
        payload.horizonYears,
    )
    logger.info("goal search reached=%s month=%s", result.reached, result.absoluteMonth)
    return _finite_json(result)


@api_bp.post("/calc/validate")
def validate() -> Any:
    """Field-level messages for the form; always answers 200."""
    result = validate_inputs(_json_object())
    return jsonify(result.model_dump())


@api_bp.post("/calc/scenario")
def scenario() -> Any:
    """Validate raw form values and return every figure the results page shows."""
    settings = current_app.config["SETTINGS"]
    summary = summarize_scenario(_json_object(), default_fallback_years=settings.fallback_years)
    logger.info(
        "scenario years=%s fallback=%s goal=%s",
        summary.horizon.years,
        summary.horizon.usedFallback,
        summary.goal is not None,
    )
    return _finite_json(summary)
