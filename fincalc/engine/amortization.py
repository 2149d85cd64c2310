"""
Amortization Engine — Fixed-installment loan schedules

- Annuity installment (straight-line when the rate is effectively zero)
- Period-by-period schedule with optional prepayments (every period or yearly)
- Final-period residue sweep (sub-half-cent balances are paid off, not carried)
- Non-amortizing detection and a hard iteration cap
- Interest-only schedule (principal due at the end)

Units: annual rates are PERCENT (8.5 means 8.5%), periodic rates are DECIMAL.

KEY INVARIANTS:
1. payment == principal_component + interest_component for every entry
2. remaining_balance >= 0 and strictly decreases while amortizing
3. total_interest == sum(interest_component)
4. paid_off => total_payment == principal + total_interest
5. Never more than MAX_SCHEDULE_PERIODS entries

FORMULAS:
    payment = P * r * (1 + r)**n / ((1 + r)**n - 1)    (r > 0)
    payment = P / n                                      (r == 0)
    B_k     = P * (1 + r)**k - payment * ((1 + r)**k - 1) / r
"""

import logging
from typing import Final

from fincalc.core.domain.schedule import (
    AmortizationResult,
    AmortizationStatus,
    ExtraPaymentSchedule,
    PaymentScheduleEntry,
)
from fincalc.core.domain.units import MONTHS_PER_YEAR, periodic_rate
from fincalc.core.math.coercion import NumericInput, coerce
from fincalc.core.math.compounding import growth_factor
from fincalc.core.math.numerical_safeguards import (
    is_zero,
    safe_divide,
    safe_multiply,
    safe_subtract,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Hard cap on simulated periods (100 years of monthly payments)
MAX_SCHEDULE_PERIODS: Final[int] = 1200

# Balances at or below this after a payment are swept into that payment
RESIDUE_SWEEP: Final[float] = 0.005


# =============================================================================
# CLOSED FORMS
# =============================================================================


def periodic_payment(principal: float, rate: float, periods: int) -> float:
    """
    Level installment that repays `principal` in `periods` payments.

    Args:
        principal: Amount borrowed
        rate: Decimal rate per period
        periods: Number of installments

    Returns:
        Installment, 0.0 when there is nothing to repay or no periods

    Examples:
        >>> periodic_payment(12000, 0.0, 12)
        1000.0
        >>> round(periodic_payment(2_500_000, 0.085 / 12, 240))
        21696
    """
    if principal <= 0 or periods <= 0:
        return 0.0

    if is_zero(rate):
        return safe_divide(principal, periods)

    growth = growth_factor(rate, periods)
    return safe_divide(safe_multiply(safe_multiply(principal, rate), growth), growth - 1.0)


def remaining_balance_after(principal: float, rate: float, periods: int, payments_made: int) -> float:
    """
    Scheduled balance after `payments_made` level installments.

    Examples:
        >>> remaining_balance_after(12000, 0.0, 12, 6)
        6000.0
        >>> remaining_balance_after(12000, 0.01, 12, 12)
        0.0
    """
    if payments_made <= 0:
        return max(0.0, principal)
    if payments_made >= periods:
        return 0.0

    payment = periodic_payment(principal, rate, periods)

    if is_zero(rate):
        balance = principal - payment * payments_made
    else:
        growth = growth_factor(rate, payments_made)
        balance = principal * growth - payment * safe_divide(growth - 1.0, rate)

    return max(0.0, balance)


# =============================================================================
# SIMULATION
# =============================================================================


def simulate_fixed_payment(
    balance: float,
    rate: float,
    payment: float,
    max_periods: int = MAX_SCHEDULE_PERIODS,
    extra_payment: float = 0.0,
    extra_every: int = 0,
) -> tuple[list[PaymentScheduleEntry], AmortizationStatus]:
    """
    Pay a fixed installment (plus optional prepayment) until the balance is gone.

    Each period: interest accrues on the opening balance, the installment
    pays the interest first, the rest and any prepayment reduce principal.
    The principal part is capped at the outstanding balance.

    Args:
        balance: Opening balance
        rate: Decimal rate per period
        payment: Scheduled installment
        max_periods: Iteration cap
        extra_payment: Prepayment amount
        extra_every: Apply the prepayment every N-th period (0 = never)

    Returns:
        (schedule, status)
    """
    schedule: list[PaymentScheduleEntry] = []
    cumulative_interest = 0.0

    if balance <= 0:
        return schedule, AmortizationStatus.PAID_OFF

    for period in range(1, max_periods + 1):
        interest = safe_multiply(balance, rate)
        extra = extra_payment if extra_every > 0 and period % extra_every == 0 else 0.0

        if payment + extra <= interest and balance > RESIDUE_SWEEP:
            logger.info(
                "non-amortizing plan at period %d: payment %.2f does not cover interest %.2f",
                period,
                payment + extra,
                interest,
            )
            return schedule, AmortizationStatus.NON_AMORTIZING

        scheduled_principal = min(max(0.0, payment - interest), balance)
        extra_applied = min(max(0.0, extra), balance - scheduled_principal)
        new_balance = safe_subtract(balance, scheduled_principal + extra_applied)

        if new_balance <= RESIDUE_SWEEP:
            scheduled_principal += max(0.0, new_balance)
            new_balance = 0.0

        principal_component = scheduled_principal + extra_applied
        cumulative_interest += interest

        schedule.append(
            PaymentScheduleEntry(
                period=period,
                payment=principal_component + interest,
                principal_component=principal_component,
                interest_component=interest,
                extra_payment=extra_applied,
                remaining_balance=new_balance,
                cumulative_interest=cumulative_interest,
            )
        )

        balance = new_balance
        if balance == 0.0:
            return schedule, AmortizationStatus.PAID_OFF

    logger.info("schedule capped at %d periods with balance %.2f outstanding", max_periods, balance)
    return schedule, AmortizationStatus.CAPPED


def amortize(
    principal: NumericInput,
    annual_rate_percent: NumericInput,
    total_periods: NumericInput,
    extra_payment: NumericInput = 0.0,
    extra_payment_schedule: ExtraPaymentSchedule | str = ExtraPaymentSchedule.NONE,
    periods_per_year: int = MONTHS_PER_YEAR,
) -> AmortizationResult:
    """
    Build the full amortization schedule of a fixed-installment loan.

    Args:
        principal: Amount borrowed
        annual_rate_percent: Nominal annual rate in percent (8.5 = 8.5%)
        total_periods: Contractual number of installments
        extra_payment: Prepayment amount per application
        extra_payment_schedule: 'none', 'monthly' (every period) or
            'yearly' (every periods_per_year-th period)
        periods_per_year: Installments per year

    Returns:
        AmortizationResult. total_payment is the sum of all payments made;
        it equals principal + total_interest whenever status is paid_off.

    Examples:
        >>> result = amortize(2_500_000, 8.5, 240)
        >>> len(result.schedule), result.schedule[-1].remaining_balance
        (240, 0.0)
    """
    amount = max(0.0, coerce(principal))
    rate = periodic_rate(max(0.0, coerce(annual_rate_percent)), periods_per_year)
    periods = int(coerce(total_periods))
    extra = max(0.0, coerce(extra_payment))
    frequency = ExtraPaymentSchedule(extra_payment_schedule)

    payment = periodic_payment(amount, rate, periods)

    if periods <= 0 or amount <= 0:
        status = AmortizationStatus.PAID_OFF if amount <= 0 else AmortizationStatus.NON_AMORTIZING
        return AmortizationResult(
            principal=amount,
            periodic_rate=rate,
            periodic_payment=payment,
            total_payment=0.0,
            total_interest=0.0,
            status=status,
        )

    if extra <= 0 or frequency is ExtraPaymentSchedule.NONE:
        extra_every = 0
    elif frequency is ExtraPaymentSchedule.MONTHLY:
        extra_every = 1
    else:
        extra_every = periods_per_year

    schedule, status = simulate_fixed_payment(
        balance=amount,
        rate=rate,
        payment=payment,
        max_periods=MAX_SCHEDULE_PERIODS,
        extra_payment=extra,
        extra_every=extra_every,
    )

    total_interest = sum(entry.interest_component for entry in schedule)
    total_extra = sum(entry.extra_payment for entry in schedule)
    # Payments made; principal + interest only once the balance is paid off
    total_payment = sum(entry.payment for entry in schedule)

    logger.debug(
        "amortized principal=%.2f rate=%.6f periods=%d -> %d entries status=%s",
        amount,
        rate,
        periods,
        len(schedule),
        status.value,
    )

    return AmortizationResult(
        principal=amount,
        periodic_rate=rate,
        periodic_payment=payment,
        total_payment=total_payment,
        total_interest=total_interest,
        total_extra_payment=total_extra,
        schedule=tuple(schedule),
        status=status,
    )


def interest_only_schedule(
    principal: NumericInput,
    annual_rate_percent: NumericInput,
    total_periods: NumericInput,
    periods_per_year: int = MONTHS_PER_YEAR,
) -> AmortizationResult:
    """
    Interest-only loan: interest every period, the whole principal with the
    last payment (working-capital facilities).

    Examples:
        >>> result = interest_only_schedule(120000, 12, 12)
        >>> round(result.periodic_payment, 2), round(result.total_interest, 2)
        (1200.0, 14400.0)
    """
    amount = max(0.0, coerce(principal))
    rate = periodic_rate(max(0.0, coerce(annual_rate_percent)), periods_per_year)
    periods = min(int(coerce(total_periods)), MAX_SCHEDULE_PERIODS)
    interest = safe_multiply(amount, rate)

    schedule: list[PaymentScheduleEntry] = []
    cumulative_interest = 0.0

    for period in range(1, max(0, periods) + 1):
        cumulative_interest += interest
        last = period == periods
        principal_component = amount if last else 0.0
        schedule.append(
            PaymentScheduleEntry(
                period=period,
                payment=principal_component + interest,
                principal_component=principal_component,
                interest_component=interest,
                remaining_balance=0.0 if last else amount,
                cumulative_interest=cumulative_interest,
            )
        )

    paid = bool(schedule) or amount <= 0
    return AmortizationResult(
        principal=amount,
        periodic_rate=rate,
        periodic_payment=interest,
        total_payment=sum(entry.payment for entry in schedule),
        total_interest=cumulative_interest,
        schedule=tuple(schedule),
        status=AmortizationStatus.PAID_OFF if paid else AmortizationStatus.NON_AMORTIZING,
    )
