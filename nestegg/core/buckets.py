"""Account records and their aggregation into the two growth buckets."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Union

from pydantic import BaseModel, ConfigDict, Field

from nestegg.core.errors import InvalidParameter


class AccountCategory(str, Enum):
    SAVINGS = "savings"
    INVESTMENT = "investment"
    K401 = "401k"
    ROTH_IRA = "roth-ira"


class Bucket(str, Enum):
    CONSERVATIVE = "conservative"
    GROWTH = "growth"


_BUCKET_BY_CATEGORY: Dict[AccountCategory, Bucket] = {
    AccountCategory.SAVINGS: Bucket.CONSERVATIVE,
    AccountCategory.INVESTMENT: Bucket.GROWTH,
    AccountCategory.K401: Bucket.GROWTH,
    AccountCategory.ROTH_IRA: Bucket.GROWTH,
}


class Account(BaseModel):
    """A caller-owned account snapshot. The engine only reads it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    category: AccountCategory
    balance: float = Field(ge=0, allow_inf_nan=False)
    monthly_contribution: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class BucketAggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    principal: float = 0.0
    monthly_contribution: float = 0.0


def bucket_for(category: Union[AccountCategory, str]) -> Bucket:
    try:
        return _BUCKET_BY_CATEGORY[AccountCategory(category)]
    except ValueError:
        raise InvalidParameter([f"unknown account category {category!r}"]) from None


def aggregate_buckets(accounts: Iterable[Account]) -> Dict[Bucket, BucketAggregate]:
    """Sum balances and monthly contributions per bucket. Both buckets are always present."""
    principal = {bucket: 0.0 for bucket in Bucket}
    monthly = {bucket: 0.0 for bucket in Bucket}

    for account in accounts:
        bucket = bucket_for(account.category)
        principal[bucket] += account.balance
        monthly[bucket] += account.monthly_contribution

    return {
        bucket: BucketAggregate(principal=principal[bucket], monthly_contribution=monthly[bucket])
        for bucket in Bucket
    }


def totals_by_category(accounts: Iterable[Account]) -> Dict[AccountCategory, float]:
    totals = {category: 0.0 for category in AccountCategory}
    for account in accounts:
        totals[AccountCategory(account.category)] += account.balance
    return totals
