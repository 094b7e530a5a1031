from __future__ import annotations

import math

import pytest

from backend.core.savings import find_goal_month, monthly_rate


def simulate_balance(principal: float, rate_pct: float, contribution: float, months: int) -> float:
    r = monthly_rate(rate_pct)
    balance = principal
    for _ in range(months):
        balance = balance * (1 + r) + contribution if r > 0 else balance + contribution
    return balance


def test_goal_reached_within_horizon():
    res = find_goal_month(10000, 7, 500, 50000, 30)

    assert res.reached is True
    assert 1 <= res.monthOfYear <= 12
    assert res.year >= 1
    assert res.shortfall == 0
    assert res.absoluteMonth == (res.year - 1) * 12 + res.monthOfYear


def test_goal_month_is_the_first_crossing():
    res = find_goal_month(10000, 7, 500, 50000, 30)
    m = res.absoluteMonth

    assert simulate_balance(10000, 7, 500, m - 1) < 50000
    assert simulate_balance(10000, 7, 500, m) >= 50000


def test_goal_not_reached_reports_shortfall():
    res = find_goal_month(1000, 5, 100, 999999999, 10)

    assert res.reached is False
    assert res.shortfall > 0
    assert res.monthOfYear is None
    assert res.year is None
    assert res.absoluteMonth is None


@pytest.mark.parametrize("goal", [None, 0, -1, -5000.0, math.nan])
def test_no_goal_is_never_reached(goal):
    res = find_goal_month(10000, 7, 500, goal, 30)

    assert res.reached is False
    assert res.shortfall == 0
    assert res.absoluteMonth is None


def test_exact_hit_counts_as_reached():
    """
    Without interest 100 a month makes exactly 1200 after twelve deposits.
    """
    res = find_goal_month(0, 0, 100, 1200, 1)

    assert res.reached is True
    assert res.absoluteMonth == 12
    assert res.monthOfYear == 12
    assert res.year == 1


def test_thirteenth_month_rolls_into_second_year():
    res = find_goal_month(0, 0, 100, 1300, 2)

    assert res.absoluteMonth == 13
    assert res.monthOfYear == 1
    assert res.year == 2


def test_principal_above_goal_is_reached_in_first_month():
    res = find_goal_month(5000, 0, 0, 1000, 1)

    assert res.reached is True
    assert res.absoluteMonth == 1


def test_zero_horizon_never_runs_a_month():
    res = find_goal_month(5000, 0, 0, 1000, 0)

    assert res.reached is False
    assert res.shortfall == 0


def test_shortfall_matches_projection_gap():
    res = find_goal_month(0, 0, 100, 5000, 2)

    assert res.reached is False
    assert res.shortfall == 5000 - 2400
