"""Data contracts for the savings calculator."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_HORIZON_YEARS = 120


class ProjectionInput(BaseModel):
    """One scenario to project."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(..., ge=0, description="Initial lump sum before growth.")
    annualRatePct: float = Field(
        ...,
        ge=0,
        le=30,
        description="Annual interest rate in percent (e.g. 7 for 7%).",
    )
    monthlyContribution: float = Field(0.0, ge=0, description="Amount added every month.")
    years: float = Field(
        ...,
        ge=0,
        le=MAX_HORIZON_YEARS,
        description="Horizon in years; fractions round to the nearest month.",
    )


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    futureValue: float
    principalTotal: float
    interest: float
    contributionsTotal: float
    months: int


class GoalRequest(BaseModel):
    """Inputs for the goal-crossing search."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(..., ge=0)
    annualRatePct: float = Field(..., ge=0, le=30)
    monthlyContribution: float = Field(0.0, ge=0)
    goal: Optional[float] = Field(None, description="Target balance; empty or <= 0 means no goal.")
    horizonYears: float = Field(..., ge=0, le=MAX_HORIZON_YEARS)


class GoalSearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    reached: bool
    monthOfYear: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1)
    absoluteMonth: Optional[int] = Field(None, ge=1)
    shortfall: float = 0.0


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)


class RateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    annualRatePct: float


class RateResponse(BaseModel):
    monthlyRate: float


class HorizonChoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: float
    usedFallback: bool


class BreakdownRow(BaseModel):
    """Single row of the results table shown next to the charts."""

    model_config = ConfigDict(frozen=True)

    concept: str
    amount: float
    sharePct: Optional[float] = None
    isYears: bool = False


class Segment(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: float
    sharePct: float


class Composition(BaseModel):
    """Datasets for the two donut charts."""

    model_config = ConfigDict(frozen=True)

    principalVsInterest: List[Segment]
    initialVsContributions: List[Segment]


class SchedulePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: float
    balance: float
    contributionsTotal: float
    interest: float


class ScenarioSummary(BaseModel):
    """Everything the front end renders for one form submission."""

    model_config = ConfigDict(frozen=True)

    horizon: HorizonChoice
    projection: ProjectionResult
    goal: Optional[GoalSearchResult] = None
    breakdown: List[BreakdownRow]
    composition: Composition
    schedule: List[SchedulePoint]
