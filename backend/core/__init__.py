"""Savings calculations used by the API and by the front end's scenario view."""

from backend.core.savings import (
    find_goal_month,
    monthly_rate,
    project_future_value,
    validate_inputs,
)

__all__ = [
    "monthly_rate",
    "project_future_value",
    "find_goal_month",
    "validate_inputs",
]
