from __future__ import annotations

import math
from math import isclose

import pytest

from nestegg.core.errors import InvalidParameter
from nestegg.core.future_value import ZERO_YEAR_POLICY, ZeroYearPolicy, future_value


@pytest.mark.parametrize("principal", [0.0, 1.0, 2500.0, 1_000_000.0])
@pytest.mark.parametrize("rate", [0.0, 0.02, 0.07])
def test_zero_years_returns_principal(principal, rate):
    assert future_value(principal, 250.0, rate, 0) == principal


def test_default_zero_year_policy_is_principal_only():
    assert ZERO_YEAR_POLICY == ZeroYearPolicy.PRINCIPAL_ONLY
    assert future_value(1000.0, 100.0, 0.05, -3) == 1000.0


def test_principal_plus_one_year_policy_counts_a_year_of_contributions():
    value = future_value(1000.0, 100.0, 0.05, 0, zero_year_policy=ZeroYearPolicy.PRINCIPAL_PLUS_ONE_YEAR)
    assert isclose(value, 2200.0)


@pytest.mark.parametrize("years", [0, 1, 2.5, 10, 40])
def test_zero_rate_adds_contributions_only(years):
    assert isclose(future_value(1000.0, 100.0, 0.0, years), 1000.0 + 100.0 * years * 12)


def test_lump_sum_compounds_annually():
    assert isclose(future_value(1000.0, 0.0, 0.05, 2), 1102.5)


def test_contributions_compound_monthly():
    # 12 deposits of 100 at 1% per month
    assert isclose(future_value(0.0, 100.0, 0.12, 1), 1268.2503013197, rel_tol=1e-9)


def test_value_never_decreases_with_more_years():
    values = [future_value(5000.0, 150.0, 0.04, years) for years in range(0, 41)]
    for earlier, later in zip(values, values[1:]):
        assert later >= earlier


def test_negative_rate_decays_principal():
    assert isclose(future_value(1000.0, 0.0, -0.1, 2), 810.0)


def test_extreme_horizon_saturates_to_infinity():
    assert math.isinf(future_value(1.0, 0.0, 1.0, 5000))
    assert math.isinf(future_value(0.0, 100.0, 1.0, 5000))
    # nothing to grow stays nothing
    assert future_value(0.0, 0.0, 1.0, 5000) == 0.0


def test_non_finite_input_is_rejected():
    with pytest.raises(InvalidParameter):
        future_value(float("nan"), 0.0, 0.05, 10)
    with pytest.raises(InvalidParameter):
        future_value(1000.0, 0.0, 0.05, float("inf"))


def test_rate_below_minus_one_hundred_percent_is_rejected():
    with pytest.raises(InvalidParameter) as excinfo:
        future_value(1000.0, 0.0, -1.5, 10)
    assert excinfo.value.errors == ["annual_rate must not be below -100%"]
