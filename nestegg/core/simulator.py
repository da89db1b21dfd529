"""
Year-by-year two-bucket balance simulation.

Order of operations per row:
  - Row 0 is "now". With the horizon still ahead it is the opening snapshot
    (no contribution, no growth), matching the zero-year convention of the
    closed-form projector. At or past the horizon it is already a
    withdrawal year.
  - Accumulation rows (1 <= year <= years to horizon):
        1) add a year of contributions to each bucket
        2) grow each bucket at its own rate
  - Decumulation rows:
        1) withdraw the fixed annual amount, clamped to the combined balance
        2) split what is left by the buckets' pre-withdrawal proportion
        3) grow each share at its own rate
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from nestegg.core.errors import InvalidParameter, check_balances, check_finite, check_rate

logger = logging.getLogger(__name__)


class ProjectionRow(BaseModel):
    """One year of the table; money figures are for that year, balances at its end."""

    model_config = ConfigDict(frozen=True)

    year: int
    age: int
    return_pct: float
    starting_total: float
    contribution: float
    scheduled_withdrawal: float
    payout: float
    interest_earned: float
    balance: float
    conservative_balance: float
    growth_balance: float


@dataclass(frozen=True)
class DecumulationStep:
    payout: float
    conservative_before_growth: float
    growth_before_growth: float
    conservative: float
    growth: float

    @property
    def interest_earned(self) -> float:
        return (self.conservative - self.conservative_before_growth) + (
            self.growth - self.growth_before_growth
        )


def decumulate(
    conservative: float,
    growth: float,
    conservative_rate: float,
    growth_rate: float,
    withdrawal: float,
) -> DecumulationStep:
    """One retirement year: withdraw, re-split proportionally, then grow."""
    total = conservative + growth
    payout = max(0.0, min(total, withdrawal))
    remaining = max(0.0, total - payout)

    conservative_share = conservative / total if total > 0 else 0.5
    conservative_pre = remaining * conservative_share
    growth_pre = remaining * (1 - conservative_share)

    return DecumulationStep(
        payout=payout,
        conservative_before_growth=conservative_pre,
        growth_before_growth=growth_pre,
        conservative=conservative_pre * (1 + conservative_rate),
        growth=growth_pre * (1 + growth_rate),
    )


def blended_rate(conservative: float, growth: float, conservative_rate: float, growth_rate: float) -> float:
    total = conservative + growth
    if total > 0:
        return (conservative / total) * conservative_rate + (growth / total) * growth_rate
    return (conservative_rate + growth_rate) / 2


def simulate(
    conservative_principal: float,
    growth_principal: float,
    conservative_monthly: float,
    growth_monthly: float,
    conservative_rate: float,
    growth_rate: float,
    current_age: int,
    horizon_age: int,
    end_age: int,
    annual_withdrawal: float,
) -> List[ProjectionRow]:
    """
    Simulate both buckets from ``current_age`` to ``end_age`` inclusive.

    Rates are decimal fractions. ``annual_withdrawal`` is a fixed amount
    taken in every decumulation year (see ``core.withdrawal``).
    """
    check_finite(
        conservative_principal=conservative_principal,
        growth_principal=growth_principal,
        conservative_monthly=conservative_monthly,
        growth_monthly=growth_monthly,
        annual_withdrawal=annual_withdrawal,
        current_age=current_age,
        horizon_age=horizon_age,
        end_age=end_age,
    )
    check_rate("conservative_rate", conservative_rate)
    check_rate("growth_rate", growth_rate)

    errors: List[str] = []
    for name, age in (("current_age", current_age), ("horizon_age", horizon_age), ("end_age", end_age)):
        if age != int(age):
            errors.append(f"{name} must be a whole number of years")
        if age < 0:
            errors.append(f"{name} must not be negative")
    if end_age < current_age:
        errors.append("end_age must not be before current_age")
    if annual_withdrawal < 0:
        errors.append("annual_withdrawal must not be negative")
    if errors:
        raise InvalidParameter(errors)

    return list(
        _simulate(
            float(conservative_principal),
            float(growth_principal),
            float(conservative_monthly),
            float(growth_monthly),
            float(conservative_rate),
            float(growth_rate),
            int(current_age),
            int(horizon_age),
            int(end_age),
            float(annual_withdrawal),
        )
    )


# rows are immutable, so cached results can be shared between callers
@lru_cache(maxsize=256)
def _simulate(
    conservative_principal: float,
    growth_principal: float,
    conservative_monthly: float,
    growth_monthly: float,
    conservative_rate: float,
    growth_rate: float,
    current_age: int,
    horizon_age: int,
    end_age: int,
    annual_withdrawal: float,
) -> Tuple[ProjectionRow, ...]:
    years_to_horizon = horizon_age - current_age
    annual_conservative = conservative_monthly * 12
    annual_growth = growth_monthly * 12

    bal_c = conservative_principal
    bal_g = growth_principal

    logger.debug(
        "simulating ages %d..%d, horizon %d, withdrawal %.2f",
        current_age,
        end_age,
        horizon_age,
        annual_withdrawal,
    )

    rows: List[ProjectionRow] = []
    for year in range(end_age - current_age + 1):
        starting_total = bal_c + bal_g
        rate = blended_rate(bal_c, bal_g, conservative_rate, growth_rate)

        contribution = 0.0
        scheduled = 0.0
        payout = 0.0
        interest = 0.0

        if year == 0 and years_to_horizon > 0:
            pass  # opening snapshot
        elif 0 < year <= years_to_horizon:
            bal_c += annual_conservative
            bal_g += annual_growth

            grown_c = bal_c * (1 + conservative_rate)
            grown_g = bal_g * (1 + growth_rate)
            interest = (grown_c - bal_c) + (grown_g - bal_g)

            bal_c, bal_g = grown_c, grown_g
            contribution = annual_conservative + annual_growth
        else:
            step = decumulate(bal_c, bal_g, conservative_rate, growth_rate, annual_withdrawal)
            scheduled = annual_withdrawal
            payout = step.payout
            interest = step.interest_earned
            bal_c, bal_g = step.conservative, step.growth

        check_balances(current_age + year, bal_c, bal_g, bal_c + bal_g, interest)
        rows.append(
            ProjectionRow(
                year=year,
                age=current_age + year,
                return_pct=rate * 100,
                starting_total=starting_total,
                contribution=contribution,
                scheduled_withdrawal=scheduled,
                payout=payout,
                interest_earned=interest,
                balance=bal_c + bal_g,
                conservative_balance=bal_c,
                growth_balance=bal_g,
            )
        )

    return tuple(rows)
