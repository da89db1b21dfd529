"""Data contracts for the projection endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from nestegg.core.buckets import Account
from nestegg.core.future_value import ZERO_YEAR_POLICY, ZeroYearPolicy
from nestegg.core.simulator import ProjectionRow
from nestegg.core.withdrawal import WithdrawalRating


class FutureValueRequest(BaseModel):
    """Closed-form value of a single bucket."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    principal: float = Field(..., ge=0, description="Balance today.")
    monthly_contribution: float = Field(0.0, ge=0, description="Added at the end of every month.")
    annual_rate: float = Field(
        ...,
        ge=-1,
        description="Annual growth rate as a decimal (e.g. 0.05 for 5%).",
    )
    years: float = Field(..., description="Years from now; zero or less means today.")
    zero_year_policy: ZeroYearPolicy = ZERO_YEAR_POLICY


class FutureValueResponse(BaseModel):
    value: float


class WithdrawalRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    projected_total: float = Field(..., ge=0, description="Balance projected at the horizon age.")
    withdrawal_rate: Optional[float] = Field(None, ge=0, le=100, description="Percent per year.")


class WithdrawalResponse(BaseModel):
    annual_withdrawal: float
    monthly_income: float
    rating: WithdrawalRating


class SimulationRequest(BaseModel):
    """Bucket-level inputs for the yearly table. Rates are decimals."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    conservative_principal: float = Field(0.0, ge=0)
    growth_principal: float = Field(0.0, ge=0)
    conservative_monthly: float = Field(0.0, ge=0)
    growth_monthly: float = Field(0.0, ge=0)
    conservative_rate: float = Field(..., ge=-1)
    growth_rate: float = Field(..., ge=-1)
    current_age: int = Field(..., ge=0)
    horizon_age: int = Field(..., ge=0)
    end_age: int = Field(..., ge=0)
    annual_withdrawal: float = Field(0.0, ge=0)


class SimulationResponse(BaseModel):
    rows: List[ProjectionRow]


class ProjectionRequest(BaseModel):
    """Account snapshot plus optional ages/rates; omitted values use the configured defaults."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    accounts: List[Account] = Field(default_factory=list)

    current_age: Optional[int] = None
    horizon_age: Optional[int] = None
    view_age: Optional[int] = None
    end_age: Optional[int] = Field(None, ge=0)

    conservative_rate: Optional[float] = None
    growth_rate: Optional[float] = None
    withdrawal_rate: Optional[float] = None

    @model_validator(mode="after")
    def ensure_unique_account_ids(self) -> "ProjectionRequest":
        seen = set()
        for account in self.accounts:
            if account.id in seen:
                raise ValueError(f"duplicate account id {account.id!r}")
            seen.add(account.id)
        return self
