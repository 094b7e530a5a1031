"""Pure savings calculations: rate conversion, growth projection, goal search, validation."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from backend.schemas.savings import (
    GoalSearchResult,
    ProjectionResult,
    ValidationResult,
)

MONTHS_PER_YEAR = 12

MAX_AGE = 120
MAX_ANNUAL_RATE_PCT = 30


def monthly_rate(annual_rate_pct: float) -> float:
    """Convert an annual percentage rate (7 for 7%) to a decimal monthly rate."""
    return (annual_rate_pct / 100) / MONTHS_PER_YEAR


def month_count(years: float) -> int:
    """Number of whole months in ``years``, rounding half a month up."""
    return math.floor(years * MONTHS_PER_YEAR + 0.5)


def _growth_factor(rate: float, months: int) -> float:
    try:
        return (1 + rate) ** months
    except OverflowError:
        return math.inf


def project_future_value(
    principal: float,
    annual_rate_pct: float,
    monthly_contribution: float,
    years: float,
) -> ProjectionResult:
    """
    Project the balance after ``years`` of monthly compounding with a fixed deposit.

      r > 0:  FV = P*(1+r)^n + PMT*((1+r)^n - 1)/r
      r <= 0: FV = P + PMT*n

    Interest is clamped at zero so rounding never reports a negative gain.
    """
    r = monthly_rate(annual_rate_pct)
    n = month_count(years)

    if r > 0:
        factor = _growth_factor(r, n)
        future_value = principal * factor + monthly_contribution * ((factor - 1) / r)
    else:
        future_value = principal + monthly_contribution * n

    contributions_total = monthly_contribution * n
    principal_total = principal + contributions_total

    return ProjectionResult(
        futureValue=future_value,
        principalTotal=principal_total,
        interest=max(future_value - principal_total, 0.0),
        contributionsTotal=contributions_total,
        months=n,
    )


def find_goal_month(
    principal: float,
    annual_rate_pct: float,
    monthly_contribution: float,
    goal: Optional[float],
    horizon_years: float,
) -> GoalSearchResult:
    """
    Walk the balance forward month by month and report the first month it reaches ``goal``.

    Each step accrues interest first and then adds the contribution. A missing,
    NaN, zero or negative goal means "no goal set" and is never reported as reached.
    """
    if goal is None or math.isnan(goal) or goal <= 0:
        return GoalSearchResult(reached=False, shortfall=0.0)

    r = monthly_rate(annual_rate_pct)
    balance = principal

    for month in range(1, month_count(horizon_years) + 1):
        if r > 0:
            balance = balance * (1 + r) + monthly_contribution
        else:
            balance = balance + monthly_contribution

        if balance >= goal:
            return GoalSearchResult(
                reached=True,
                monthOfYear=(month - 1) % MONTHS_PER_YEAR + 1,
                year=(month - 1) // MONTHS_PER_YEAR + 1,
                absoluteMonth=month,
                shortfall=0.0,
            )

    projection = project_future_value(principal, annual_rate_pct, monthly_contribution, horizon_years)
    return GoalSearchResult(
        reached=False,
        shortfall=max(goal - projection.futureValue, 0.0),
    )


def as_number(value: Any) -> float:
    """Parse a form value; anything empty or unparsable becomes NaN."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _below(value: float, minimum: float) -> bool:
    return math.isnan(value) or value < minimum


def _outside(value: float, minimum: float, maximum: float) -> bool:
    return math.isnan(value) or value < minimum or value > maximum


def validate_inputs(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Check every form field independently and collect all messages.

    No rule relates ``currentAge`` to ``targetAge``; picking a horizon when the
    target is not ahead of the current age is done by the caller.
    """
    errors: Dict[str, str] = {}

    if _below(as_number(fields.get("principal")), 0):
        errors["principal"] = "Current savings must be >= 0."
    if _outside(as_number(fields.get("currentAge")), 0, MAX_AGE):
        errors["currentAge"] = f"Current age must be between 0 and {MAX_AGE}."
    if _outside(as_number(fields.get("annualRatePct")), 0, MAX_ANNUAL_RATE_PCT):
        errors["annualRatePct"] = f"Annual interest must be between 0% and {MAX_ANNUAL_RATE_PCT}%."
    if _below(as_number(fields.get("monthlyContribution")), 0):
        errors["monthlyContribution"] = "Monthly contribution must be >= 0."
    if _outside(as_number(fields.get("targetAge")), 1, MAX_AGE):
        errors["targetAge"] = f"Target age must be between 1 and {MAX_AGE}."

    goal = fields.get("goal")
    if not _is_blank(goal) and _below(as_number(goal), 0):
        errors["goal"] = "Savings goal must be >= 0."

    return ValidationResult(valid=not errors, errors=errors)
