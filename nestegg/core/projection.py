"""Plan-level projection: accounts in, summary figures, yearly table and growth curve out."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from nestegg.core.buckets import (
    Account,
    AccountCategory,
    Bucket,
    BucketAggregate,
    aggregate_buckets,
    totals_by_category,
)
from nestegg.core.errors import check_balances
from nestegg.core.future_value import future_value
from nestegg.core.simulator import ProjectionRow, decumulate, simulate
from nestegg.core.withdrawal import (
    WithdrawalRating,
    annual_withdrawal,
    monthly_income,
    withdrawal_rating,
)

logger = logging.getLogger(__name__)

DEFAULT_END_AGE = 100


class RateParameters(BaseModel):
    """Annual rates in percent (5 means 5%)."""

    model_config = ConfigDict(extra="forbid")

    conservative_rate: float = Field(ge=0, le=100)
    growth_rate: float = Field(ge=0, le=100)
    withdrawal_rate: float = Field(ge=0, le=100)

    @property
    def conservative(self) -> float:
        return self.conservative_rate / 100

    @property
    def growth(self) -> float:
        return self.growth_rate / 100


class AgeParameters(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_age: int = Field(ge=0)
    horizon_age: int = Field(ge=0)
    # how far the growth chart runs; None => stop at the horizon
    view_age: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def ensure_view_after_horizon(self) -> "AgeParameters":
        if self.view_age is not None and self.view_age < self.horizon_age:
            raise ValueError("view_age must not be before horizon_age")
        return self

    @property
    def years_to_horizon(self) -> int:
        return self.horizon_age - self.current_age


class GrowthPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    age: int
    conservative: float
    growth: float
    total: float


class ProjectionSummary(BaseModel):
    totals_by_category: Dict[AccountCategory, float]
    total_today: float
    conservative: BucketAggregate
    growth: BucketAggregate

    years_to_horizon: int
    projected_conservative: float
    projected_growth: float
    projected_total: float

    annual_withdrawal: float
    monthly_income: float
    withdrawal_rating: WithdrawalRating

    total_growth: float
    rows: List[ProjectionRow]
    curve: List[GrowthPoint]


def growth_curve(
    conservative: BucketAggregate,
    growth: BucketAggregate,
    rates: RateParameters,
    ages: AgeParameters,
    withdrawal: float,
) -> List[GrowthPoint]:
    """
    Per-bucket balance by age for charting.

    Up to the horizon each point is the closed-form value after that many
    years. Past it, the fixed withdrawal is taken from the previous point and
    the remainder grows, exactly as a decumulation row does.
    """
    last_age = max(ages.view_age if ages.view_age is not None else ages.horizon_age, ages.horizon_age)
    points: List[GrowthPoint] = []

    for year in range(max(last_age - ages.current_age, 0) + 1):
        if year == 0 or year <= ages.years_to_horizon:
            bal_c = future_value(conservative.principal, conservative.monthly_contribution, rates.conservative, year)
            bal_g = future_value(growth.principal, growth.monthly_contribution, rates.growth, year)
        else:
            previous = points[-1]
            step = decumulate(previous.conservative, previous.growth, rates.conservative, rates.growth, withdrawal)
            bal_c, bal_g = step.conservative, step.growth

        check_balances(ages.current_age + year, bal_c, bal_g, bal_c + bal_g)
        points.append(
            GrowthPoint(
                year=year,
                age=ages.current_age + year,
                conservative=bal_c,
                growth=bal_g,
                total=bal_c + bal_g,
            )
        )

    return points


def project_plan(
    accounts: Sequence[Account],
    ages: AgeParameters,
    rates: RateParameters,
    end_age: int = DEFAULT_END_AGE,
) -> ProjectionSummary:
    """
    Everything the planner screen shows for one snapshot of accounts.

    The withdrawal is sized from the closed-form value at the horizon and then
    drives the yearly table from ``current_age`` to ``end_age``.
    """
    buckets = aggregate_buckets(accounts)
    conservative = buckets[Bucket.CONSERVATIVE]
    growth = buckets[Bucket.GROWTH]

    years = max(ages.years_to_horizon, 0)
    projected_c = future_value(conservative.principal, conservative.monthly_contribution, rates.conservative, years)
    projected_g = future_value(growth.principal, growth.monthly_contribution, rates.growth, years)
    projected_total = projected_c + projected_g

    withdrawal = annual_withdrawal(projected_total, rates.withdrawal_rate)

    rows = simulate(
        conservative.principal,
        growth.principal,
        conservative.monthly_contribution,
        growth.monthly_contribution,
        rates.conservative,
        rates.growth,
        ages.current_age,
        ages.horizon_age,
        end_age,
        withdrawal,
    )
    curve = growth_curve(conservative, growth, rates, ages, withdrawal)

    by_category = totals_by_category(accounts)
    total_today = conservative.principal + growth.principal

    logger.info(
        "projected %d accounts: %.2f today, %.2f at age %d",
        len(accounts),
        total_today,
        projected_total,
        ages.horizon_age,
    )

    return ProjectionSummary(
        totals_by_category=by_category,
        total_today=total_today,
        conservative=conservative,
        growth=growth,
        years_to_horizon=ages.years_to_horizon,
        projected_conservative=projected_c,
        projected_growth=projected_g,
        projected_total=projected_total,
        annual_withdrawal=withdrawal,
        monthly_income=monthly_income(withdrawal),
        withdrawal_rating=withdrawal_rating(rates.withdrawal_rate),
        total_growth=curve[-1].total - total_today,
        rows=rows,
        curve=curve,
    )


__all__ = [
    "AgeParameters",
    "GrowthPoint",
    "ProjectionSummary",
    "RateParameters",
    "growth_curve",
    "project_plan",
]
