"""
Projection — Growth, depletion and goal records

Immutable Pydantic models produced by the projection engine.

KEY INVARIANTS:
1. maturity_value == total_contributed + total_growth (accumulation)
2. DepletionResult.periods <= the cap the simulation ran with
3. GoalPlan.feasibility_score in [0, 100]
"""

from enum import Enum

from pydantic import BaseModel, Field


class DepletionStatus(str, Enum):
    """How a withdrawal simulation ended."""

    DEPLETED = "depleted"
    CAPPED = "capped"  # corpus still positive at the iteration cap


class ProjectionPeriod(BaseModel):
    """Balance snapshot at the end of one breakdown bucket (usually a year)."""

    period: int = Field(..., ge=1)
    opening_balance: float
    contributions: float = Field(..., ge=0)
    growth: float
    closing_balance: float
    cumulative_contributions: float = Field(..., ge=0)

    model_config = {"frozen": True}


class ProjectionResult(BaseModel):
    """Result of an accumulation projection."""

    maturity_value: float
    total_contributed: float = Field(..., ge=0)
    total_growth: float
    derived_ratios: dict[str, float] = Field(default_factory=dict)
    breakdown: tuple[ProjectionPeriod, ...] = Field(default=())

    model_config = {"frozen": True}


class DepletionResult(BaseModel):
    """Result of a systematic-withdrawal simulation."""

    status: DepletionStatus
    periods: int = Field(..., ge=0, description="Withdrawal periods simulated")
    total_withdrawn: float = Field(..., ge=0)
    remaining_corpus: float = Field(..., ge=0)
    last_withdrawal: float = Field(..., ge=0, description="Amount actually withdrawn in the final period")

    model_config = {"frozen": True}

    @property
    def depleted(self) -> bool:
        return self.status is DepletionStatus.DEPLETED


class GoalPlan(BaseModel):
    """Inflation-adjusted savings goal and how far current habits get there."""

    inflation_adjusted_target: float = Field(..., ge=0)
    projected_amount: float = Field(..., ge=0)
    future_value_of_savings: float = Field(..., ge=0)
    future_value_of_contributions: float = Field(..., ge=0)
    shortfall: float = Field(..., ge=0)
    surplus: float = Field(..., ge=0)
    required_monthly_contribution: float = Field(..., ge=0)
    feasibility_score: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}
