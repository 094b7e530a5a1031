"""Assemble everything the calculator page shows for one set of form values."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional

from backend.core.savings import (
    MONTHS_PER_YEAR,
    as_number,
    find_goal_month,
    month_count,
    monthly_rate,
    project_future_value,
    validate_inputs,
)
from backend.schemas.savings import (
    MAX_HORIZON_YEARS,
    BreakdownRow,
    Composition,
    HorizonChoice,
    ProjectionResult,
    ScenarioSummary,
    SchedulePoint,
    Segment,
)

DEFAULT_FALLBACK_YEARS = 10.0


class ScenarioValidationError(ValueError):
    """Form values failed validation; ``errors`` maps each field to its message."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


def _share_pct(amount: float, total: float) -> float:
    if total == 0:
        return 0.0
    return amount / total * 100


def resolve_horizon(
    current_age: float,
    target_age: float,
    fallback_years: Optional[Any] = None,
    default_years: float = DEFAULT_FALLBACK_YEARS,
) -> HorizonChoice:
    """
    Years between the two ages, or ``fallback_years`` when the target is not ahead.

    A fallback that is missing, not positive or unparsable becomes ``default_years``;
    any horizon is capped at MAX_HORIZON_YEARS.
    """
    years = target_age - current_age
    if years > 0:
        return HorizonChoice(years=min(years, MAX_HORIZON_YEARS), usedFallback=False)

    fallback = as_number(fallback_years)
    if math.isnan(fallback) or fallback <= 0:
        fallback = default_years
    return HorizonChoice(years=min(fallback, MAX_HORIZON_YEARS), usedFallback=True)


def breakdown_rows(principal: float, result: ProjectionResult, years: float) -> List[BreakdownRow]:
    """Rows of the accessible results table, in display order."""
    fv = result.futureValue
    floor_fv = max(fv, 1)
    return [
        BreakdownRow(concept="Estimated final capital", amount=fv, sharePct=100.0),
        BreakdownRow(
            concept="Total principal (initial + contributions)",
            amount=result.principalTotal,
            sharePct=_share_pct(result.principalTotal, fv),
        ),
        BreakdownRow(concept="Interest earned", amount=result.interest, sharePct=_share_pct(result.interest, fv)),
        BreakdownRow(concept="Initial money", amount=principal, sharePct=_share_pct(principal, floor_fv)),
        BreakdownRow(
            concept="Accumulated monthly contributions",
            amount=result.contributionsTotal,
            sharePct=_share_pct(result.contributionsTotal, floor_fv),
        ),
        BreakdownRow(concept="Simulated years", amount=years, sharePct=None, isYears=True),
    ]


def _segments(pairs: List[tuple[str, float]]) -> List[Segment]:
    # zero slices are dropped so the chart legend doesn't list empty parts
    kept = [(label, value) for label, value in pairs if value > 0]
    total = sum(value for _, value in kept)
    return [Segment(label=label, value=value, sharePct=_share_pct(value, total)) for label, value in kept]


def composition(principal: float, result: ProjectionResult) -> Composition:
    return Composition(
        principalVsInterest=_segments(
            [
                ("Principal (invested)", result.principalTotal),
                ("Interest (earnings)", result.interest),
            ]
        ),
        initialVsContributions=_segments(
            [
                ("Initial money", principal),
                ("Monthly contributions", result.contributionsTotal),
            ]
        ),
    )


def balance_schedule(
    principal: float,
    annual_rate_pct: float,
    monthly_contribution: float,
    years: float,
) -> List[SchedulePoint]:
    """
    Balance at the start and at the end of every year of the horizon.

    Uses the same month ordering as the goal search: interest accrues first,
    then the contribution is deposited. A trailing partial year gets its own
    final point.
    """
    r = monthly_rate(annual_rate_pct)
    total_months = month_count(years)

    def point(month: int, balance: float) -> SchedulePoint:
        contributions = monthly_contribution * month
        return SchedulePoint(
            year=month / MONTHS_PER_YEAR,
            balance=balance,
            contributionsTotal=contributions,
            interest=max(balance - principal - contributions, 0.0),
        )

    balance = principal
    schedule = [point(0, balance)]
    for month in range(1, total_months + 1):
        if r > 0:
            balance = balance * (1 + r) + monthly_contribution
        else:
            balance = balance + monthly_contribution

        if month % MONTHS_PER_YEAR == 0 or month == total_months:
            schedule.append(point(month, balance))

    return schedule


def summarize_scenario(
    fields: Mapping[str, Any],
    default_fallback_years: float = DEFAULT_FALLBACK_YEARS,
) -> ScenarioSummary:
    """
    Validate raw form values and build the full result set for the page.

    Raises ScenarioValidationError with the per-field messages when any field is invalid.
    """
    validation = validate_inputs(fields)
    if not validation.valid:
        raise ScenarioValidationError(validation.errors)

    principal = as_number(fields["principal"])
    rate_pct = as_number(fields["annualRatePct"])
    contribution = as_number(fields["monthlyContribution"])
    goal = as_number(fields.get("goal"))

    horizon = resolve_horizon(
        as_number(fields["currentAge"]),
        as_number(fields["targetAge"]),
        fields.get("fallbackYears"),
        default_years=default_fallback_years,
    )

    projection = project_future_value(principal, rate_pct, contribution, horizon.years)

    goal_result = None
    if not math.isnan(goal) and goal > 0:
        goal_result = find_goal_month(principal, rate_pct, contribution, goal, horizon.years)

    return ScenarioSummary(
        horizon=horizon,
        projection=projection,
        goal=goal_result,
        breakdown=breakdown_rows(principal, projection, horizon.years),
        composition=composition(principal, projection),
        schedule=balance_schedule(principal, rate_pct, contribution, horizon.years),
    )
