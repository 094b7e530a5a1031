from __future__ import annotations

from math import isclose

import pytest

from backend.core.savings import month_count, monthly_rate, project_future_value


def test_monthly_rate_converts_annual_percent():
    assert isclose(monthly_rate(12), 0.01, abs_tol=1e-4)
    assert monthly_rate(0) == 0


def test_monthly_rate_passes_negative_rates_through():
    assert isclose(monthly_rate(-6), -0.005)


def test_zero_rate_is_linear():
    res = project_future_value(10000, 0, 200, 10)

    assert res.futureValue == 10000 + 200 * 120
    assert res.interest == 0
    assert res.months == 120


def test_zero_years_returns_principal_exactly():
    res = project_future_value(5000, 5, 100, 0)

    assert res.futureValue == 5000
    assert res.interest == 0
    assert res.months == 0
    assert res.contributionsTotal == 0


def test_zero_principal_grows_contributions_only():
    res = project_future_value(0, 7, 500, 20)

    assert res.futureValue > 500 * 240
    assert isclose(res.principalTotal, 500 * 240, abs_tol=0.01)


def test_zero_contribution_is_pure_compounding():
    res = project_future_value(10000, 5, 0, 30)
    expected = 10000 * (1 + 5 / 100 / 12) ** 360

    assert isclose(res.futureValue, expected, abs_tol=0.10)
    assert res.contributionsTotal == 0


def test_typical_values_sanity_check():
    """
    10k start, 7% a year, 200 a month for 30 years lands somewhere around 325k.
    """
    res = project_future_value(10000, 7, 200, 30)

    assert res.futureValue > res.principalTotal
    assert res.interest > 0
    assert 200000 < res.futureValue < 600000


@pytest.mark.parametrize(
    "principal, rate, contribution, years",
    [(1000, 0, 0, 5), (0, 0, 0, 1), (2500, 3.5, 75, 12.5), (10, 30, 1, 120)],
)
def test_interest_never_negative_and_principal_adds_up(principal, rate, contribution, years):
    res = project_future_value(principal, rate, contribution, years)

    assert res.interest >= 0
    assert res.principalTotal == principal + res.contributionsTotal
    assert isclose(res.futureValue, res.principalTotal + res.interest, rel_tol=1e-9)


def test_negative_rate_takes_linear_branch():
    res = project_future_value(1000, -5, 10, 1)

    assert res.futureValue == 1000 + 10 * 12
    assert res.interest == 0


def test_fractional_years_round_half_month_up():
    # 1.375 years is exactly 16.5 months
    assert month_count(1.375) == 17
    assert month_count(1.125) == 14
    assert month_count(1.04) == 12
    assert project_future_value(0, 0, 100, 1.375).months == 17


def test_huge_horizon_overflows_to_infinity():
    res = project_future_value(1, 30, 1, 1_000_000)

    assert res.futureValue == float("inf")
