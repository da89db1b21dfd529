"""Closed-form future value of a lump sum plus a monthly annuity."""

from __future__ import annotations

import math
from enum import Enum

from nestegg.core.errors import InvalidParameter, check_finite, check_rate


class ZeroYearPolicy(str, Enum):
    """What a projection for zero (or fewer) years returns."""

    PRINCIPAL_ONLY = "principal_only"
    # one year of contributions already counted up front
    PRINCIPAL_PLUS_ONE_YEAR = "principal_plus_one_year"


# "0 years" means right now: no contributions have been made yet.
ZERO_YEAR_POLICY = ZeroYearPolicy.PRINCIPAL_ONLY


def _compound(base: float, exponent: float) -> float:
    try:
        return base**exponent
    except OverflowError:
        return math.inf


def _scaled(amount: float, factor: float) -> float:
    # 0 * inf would be nan; an empty amount stays empty however long it grows
    if amount == 0:
        return 0.0
    return amount * factor


def future_value(
    principal: float,
    monthly_contribution: float,
    annual_rate: float,
    years: float,
    zero_year_policy: ZeroYearPolicy = ZERO_YEAR_POLICY,
) -> float:
    """
    Value of one bucket after ``years``.

    The principal compounds annually at ``annual_rate`` (a decimal fraction,
    0.05 for 5%); contributions are an ordinary annuity compounded monthly at
    ``annual_rate / 12``. With a zero rate contributions simply add up.
    Extreme inputs saturate to infinity instead of raising.
    """
    check_finite(principal=principal, monthly_contribution=monthly_contribution, years=years)
    check_rate("annual_rate", annual_rate)

    if years <= 0:
        if zero_year_policy == ZeroYearPolicy.PRINCIPAL_PLUS_ONE_YEAR:
            return principal + monthly_contribution * 12
        if zero_year_policy == ZeroYearPolicy.PRINCIPAL_ONLY:
            return principal
        raise InvalidParameter([f"unknown zero-year policy {zero_year_policy!r}"])

    months = years * 12
    monthly_rate = annual_rate / 12

    fv_principal = _scaled(principal, _compound(1 + annual_rate, years))

    if monthly_rate != 0:
        growth_factor = (_compound(1 + monthly_rate, months) - 1) / monthly_rate
        fv_annuity = _scaled(monthly_contribution, growth_factor)
    else:
        fv_annuity = monthly_contribution * months

    return fv_principal + fv_annuity
