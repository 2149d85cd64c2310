"""
Debt — Debt payoff records

Immutable Pydantic models for single-debt payoff and multi-debt strategies.
"""

from enum import Enum

from pydantic import BaseModel, Field

from fincalc.core.domain.schedule import AmortizationStatus


class PayoffStrategy(str, Enum):
    """Order in which surplus money is thrown at debts."""

    AVALANCHE = "avalanche"  # highest rate first
    SNOWBALL = "snowball"  # smallest balance first


class Debt(BaseModel):
    """One outstanding debt."""

    name: str = Field(..., min_length=1)
    balance: float = Field(..., ge=0)
    annual_rate_percent: float = Field(..., ge=0)
    minimum_payment: float = Field(..., ge=0)

    model_config = {"frozen": True}


class PayoffScenario(BaseModel):
    """One payment plan simulated to completion."""

    monthly_payment: float = Field(..., ge=0)
    months: int = Field(..., ge=0)
    total_interest: float = Field(..., ge=0)
    total_paid: float = Field(..., ge=0)
    status: AmortizationStatus

    model_config = {"frozen": True}


class DebtPayoffResult(BaseModel):
    """Minimum-only vs minimum-plus-extra comparison for a single balance."""

    minimum_only: PayoffScenario
    with_extra: PayoffScenario
    interest_saved: float = Field(..., ge=0)
    time_saved: int = Field(..., ge=0, description="Months saved by the extra payment")

    model_config = {"frozen": True}


class DebtPayoffEvent(BaseModel):
    """A debt reaching zero during a strategy run."""

    name: str
    month: int = Field(..., ge=1)
    interest_paid: float = Field(..., ge=0)

    model_config = {"frozen": True}


class StrategyResult(BaseModel):
    """Multi-debt payoff under one strategy."""

    strategy: PayoffStrategy
    months: int = Field(..., ge=0)
    total_interest: float = Field(..., ge=0)
    total_paid: float = Field(..., ge=0)
    payoff_order: tuple[DebtPayoffEvent, ...] = Field(default=())
    status: AmortizationStatus

    model_config = {"frozen": True}
