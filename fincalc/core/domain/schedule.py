"""
Schedule — Amortization records

Immutable Pydantic models produced by the amortization engine.

KEY INVARIANTS:
1. principal_component + interest_component == payment (per entry)
2. remaining_balance >= 0
3. total_payment == principal + total_interest
4. total_interest == sum(entry.interest_component)
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

# Absolute tolerance for the per-entry payment split check
SPLIT_TOLERANCE = 1e-6


# =============================================================================
# ENUMS
# =============================================================================


class AmortizationStatus(str, Enum):
    """How an amortization run ended."""

    PAID_OFF = "paid_off"
    NON_AMORTIZING = "non_amortizing"  # payment does not cover accrued interest
    CAPPED = "capped"  # truncated by the iteration safety cap


class ExtraPaymentSchedule(str, Enum):
    """When an extra (prepayment) amount is applied."""

    NONE = "none"
    MONTHLY = "monthly"  # every period
    YEARLY = "yearly"  # every periods_per_year-th period


# =============================================================================
# MODELS
# =============================================================================


class PaymentScheduleEntry(BaseModel):
    """One period of an amortization schedule."""

    period: int = Field(..., ge=1, description="1-based period number")
    payment: float = Field(..., ge=0, description="Total paid this period (principal + interest)")
    principal_component: float = Field(..., ge=0, description="Principal repaid, extra included")
    interest_component: float = Field(..., ge=0, description="Interest accrued and paid")
    extra_payment: float = Field(default=0.0, ge=0, description="Prepayment part of principal")
    remaining_balance: float = Field(..., ge=0, description="Balance after this period")
    cumulative_interest: float = Field(..., ge=0, description="Interest paid up to this period")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_split(self) -> "PaymentScheduleEntry":
        if abs(self.principal_component + self.interest_component - self.payment) > SPLIT_TOLERANCE * max(
            1.0, self.payment
        ):
            raise ValueError(
                f"period {self.period}: principal {self.principal_component} + "
                f"interest {self.interest_component} != payment {self.payment}"
            )
        return self


class AmortizationResult(BaseModel):
    """
    Full amortization run.

    periodic_payment is the scheduled installment (without extra payments);
    the schedule carries the realized per-period amounts.

    total_payment is the sum of payments made. It equals principal +
    total_interest only when status is PAID_OFF; a capped or
    non-amortizing run leaves remaining_balance unpaid.
    """

    principal: float = Field(..., ge=0)
    periodic_rate: float = Field(..., description="Decimal rate per period")
    periodic_payment: float = Field(..., ge=0)
    total_payment: float = Field(..., ge=0)
    total_interest: float = Field(..., ge=0)
    total_extra_payment: float = Field(default=0.0, ge=0)
    schedule: tuple[PaymentScheduleEntry, ...] = Field(default=())
    status: AmortizationStatus = Field(default=AmortizationStatus.PAID_OFF)

    model_config = {"frozen": True}

    @property
    def periods(self) -> int:
        """Number of periods actually simulated."""
        return len(self.schedule)

    @property
    def remaining_balance(self) -> float:
        if not self.schedule:
            return self.principal
        return self.schedule[-1].remaining_balance

    @property
    def paid_off(self) -> bool:
        return self.status is AmortizationStatus.PAID_OFF
