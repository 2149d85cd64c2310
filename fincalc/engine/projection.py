"""
Projection Engine — Future values, withdrawals and goals

- Lump sum compounded at a chosen frequency
- Level periodic contributions (ordinary annuity or annuity due), with an
  optional initial amount and a per-year breakdown
- Inverse: contribution required to reach a target
- Systematic withdrawal from a growing corpus until depletion or the cap
- Inflation-adjusted goal plan with a bounded feasibility score

Units: annual rates and inflation are PERCENT, periodic rates are DECIMAL,
horizons are YEARS unless the argument name says periods.

KEY INVARIANTS:
1. maturity_value == total_contributed + total_growth
2. required_contribution inverts future_value_of_contributions
3. simulate_withdrawals always terminates (depleted or capped)
4. 0 <= feasibility_score <= 100
"""

import logging
import math
from typing import Final

from fincalc.core.domain.projection import (
    DepletionResult,
    DepletionStatus,
    GoalPlan,
    ProjectionPeriod,
    ProjectionResult,
)
from fincalc.core.domain.units import (
    MONTHS_PER_YEAR,
    CompoundingFrequency,
    periodic_rate,
    years_to_periods,
)
from fincalc.core.math import compounding
from fincalc.core.math.coercion import NumericInput, coerce
from fincalc.core.math.compounding import PaymentTiming
from fincalc.core.math.numerical_safeguards import clamp, safe_divide, safe_multiply

logger = logging.getLogger(__name__)

# 50 years of monthly withdrawals
MAX_WITHDRAWAL_PERIODS: Final[int] = 600

# A corpus at or below this is treated as exhausted
DEPLETION_FLOOR: Final[float] = 0.005

# Horizon cap for breakdown tables
MAX_PROJECTION_YEARS: Final[int] = 100


# =============================================================================
# LUMP SUM
# =============================================================================


def project_lump_sum(
    principal: NumericInput,
    annual_rate_percent: NumericInput,
    years: NumericInput,
    frequency: CompoundingFrequency | str = CompoundingFrequency.YEARLY,
) -> ProjectionResult:
    """
    Grow a single deposit compounded `frequency` times a year.

    Args:
        principal: Amount invested once
        annual_rate_percent: Nominal annual rate in percent
        years: Horizon in years (may be fractional)
        frequency: Compounding frequency name ('annually' accepted)

    Returns:
        ProjectionResult with derived_ratios effective_annual_rate,
        wealth_multiple and absolute_return_percent, and a yearly breakdown

    Examples:
        >>> round(project_lump_sum(100000, 12, 5).maturity_value, 2)
        176234.17
    """
    amount = max(0.0, coerce(principal))
    annual = coerce(annual_rate_percent)
    horizon = max(0.0, coerce(years))
    periods_per_year = CompoundingFrequency.parse(frequency).periods_per_year
    rate = periodic_rate(annual, periods_per_year)

    maturity = compounding.future_value_lump_sum(amount, rate, horizon * periods_per_year)
    split = compounding.split_growth(maturity, amount)

    # Whole years step at the effective annual rate, a partial last year is priced directly
    full_years = min(int(horizon), MAX_PROJECTION_YEARS)
    annual_growth = compounding.effective_annual_rate(annual, periods_per_year) / 100.0
    year_ends = compounding.growth_trajectory(amount, annual_growth, full_years)

    breakdown: list[ProjectionPeriod] = []
    opening = amount
    for year in range(1, min(math.ceil(horizon), MAX_PROJECTION_YEARS) + 1):
        if year <= full_years:
            closing = year_ends[year]
        else:
            closing = compounding.future_value_lump_sum(amount, rate, horizon * periods_per_year)
        breakdown.append(
            ProjectionPeriod(
                period=year,
                opening_balance=opening,
                contributions=amount if year == 1 else 0.0,
                growth=closing - opening,
                closing_balance=closing,
                cumulative_contributions=amount,
            )
        )
        opening = closing

    return ProjectionResult(
        maturity_value=split.final_value,
        total_contributed=split.contributed,
        total_growth=split.growth,
        derived_ratios={
            "effective_annual_rate": compounding.effective_annual_rate(annual, periods_per_year),
            "wealth_multiple": safe_divide(maturity, amount),
            "absolute_return_percent": safe_divide(split.growth, amount) * 100.0,
        },
        breakdown=tuple(breakdown),
    )


# =============================================================================
# PERIODIC CONTRIBUTIONS
# =============================================================================


def future_value_of_contributions(
    contribution: NumericInput,
    rate: float,
    periods: float,
    timing: PaymentTiming | str = PaymentTiming.END,
) -> float:
    """
    Future value of `periods` level contributions at periodic `rate`.

    Examples:
        >>> future_value_of_contributions(1000, 0.0, 12)
        12000.0
    """
    return compounding.future_value_annuity(coerce(contribution), rate, periods, PaymentTiming(timing))


def required_contribution(
    target: NumericInput,
    rate: float,
    periods: float,
    timing: PaymentTiming | str = PaymentTiming.END,
) -> float:
    """
    Level contribution that grows to `target`; 0.0 for non-positive targets.

    Examples:
        >>> fv = future_value_of_contributions(5000, 0.01, 120, 'begin')
        >>> round(required_contribution(fv, 0.01, 120, 'begin'), 6)
        5000.0
    """
    return compounding.required_contribution(coerce(target), rate, periods, PaymentTiming(timing))


def project_contributions(
    contribution: NumericInput,
    annual_rate_percent: NumericInput,
    years: NumericInput,
    timing: PaymentTiming | str = PaymentTiming.END,
    initial_amount: NumericInput = 0.0,
    periods_per_year: int = MONTHS_PER_YEAR,
    initial_compounding: CompoundingFrequency | str | None = None,
) -> ProjectionResult:
    """
    Accumulate level contributions, optionally on top of an initial amount.

    Contributions compound at the contribution frequency; the initial amount
    compounds at `initial_compounding` (defaults to the same frequency).

    Args:
        contribution: Amount paid in every period
        annual_rate_percent: Nominal annual rate in percent
        years: Horizon in years
        timing: 'end' (ordinary annuity) or 'begin' (annuity due)
        initial_amount: Amount invested at the start
        periods_per_year: Contributions per year
        initial_compounding: Compounding frequency of the initial amount

    Returns:
        ProjectionResult with derived_ratios annualized_return,
        wealth_multiple and growth_percent, and a yearly breakdown

    Examples:
        >>> result = project_contributions(1000, 0, 1)
        >>> result.maturity_value, result.total_contributed
        (12000.0, 12000.0)
    """
    payment = max(0.0, coerce(contribution))
    annual = coerce(annual_rate_percent)
    horizon = max(0.0, coerce(years))
    initial = max(0.0, coerce(initial_amount))
    timing = PaymentTiming(timing)

    rate = periodic_rate(annual, periods_per_year)
    if initial_compounding is None:
        initial_periods_per_year = periods_per_year
    else:
        initial_periods_per_year = CompoundingFrequency.parse(initial_compounding).periods_per_year
    initial_rate = periodic_rate(annual, initial_periods_per_year)
    total_periods = years_to_periods(horizon, periods_per_year)

    def balance_at(elapsed_years: float) -> float:
        periods = min(years_to_periods(elapsed_years, periods_per_year), total_periods)
        grown_initial = compounding.future_value_lump_sum(
            initial, initial_rate, elapsed_years * initial_periods_per_year
        )
        return grown_initial + compounding.future_value_annuity(payment, rate, periods, timing)

    maturity = balance_at(horizon)
    total_contributed = initial + safe_multiply(payment, total_periods)

    breakdown: list[ProjectionPeriod] = []
    opening = initial
    cumulative = initial
    for year in range(1, min(math.ceil(horizon), MAX_PROJECTION_YEARS) + 1):
        elapsed = min(float(year), horizon)
        closing = balance_at(elapsed)
        paid_periods = min(years_to_periods(elapsed, periods_per_year), total_periods) - min(
            years_to_periods(year - 1, periods_per_year), total_periods
        )
        contributions = safe_multiply(payment, paid_periods)
        cumulative += contributions
        breakdown.append(
            ProjectionPeriod(
                period=year,
                opening_balance=opening,
                contributions=contributions,
                growth=closing - opening - contributions,
                closing_balance=closing,
                cumulative_contributions=cumulative,
            )
        )
        opening = closing

    split = compounding.split_growth(maturity, total_contributed)

    logger.debug(
        "projected contributions=%.2f x %d (+%.2f initial) -> %.2f",
        payment,
        total_periods,
        initial,
        maturity,
    )

    return ProjectionResult(
        maturity_value=split.final_value,
        total_contributed=split.contributed,
        total_growth=split.growth,
        derived_ratios={
            "annualized_return": compounding.annualized_return(maturity, total_contributed, horizon),
            "wealth_multiple": safe_divide(maturity, total_contributed),
            "growth_percent": safe_divide(split.growth, total_contributed) * 100.0,
        },
        breakdown=tuple(breakdown),
    )


# =============================================================================
# DEPLETION
# =============================================================================


def simulate_withdrawals(
    corpus: NumericInput,
    withdrawal: NumericInput,
    annual_rate_percent: NumericInput,
    annual_increase_percent: NumericInput = 0.0,
    periods_per_year: int = MONTHS_PER_YEAR,
    max_periods: int = MAX_WITHDRAWAL_PERIODS,
) -> DepletionResult:
    """
    Withdraw from a growing corpus until it runs out or the cap is hit.

    Each period the corpus first earns its periodic return, then the
    withdrawal is taken (the final one is capped at what is left), then the
    withdrawal escalates by annual_increase_percent / periods_per_year.

    Examples:
        >>> result = simulate_withdrawals(1_000_000, 10_000, 0)
        >>> result.status.value, result.periods, result.total_withdrawn
        ('depleted', 100, 1000000.0)
    """
    balance = max(0.0, coerce(corpus))
    current = max(0.0, coerce(withdrawal))
    rate, _ = compounding.clamp_compound_rate(periodic_rate(coerce(annual_rate_percent), periods_per_year))
    escalation, _ = compounding.clamp_compound_rate(periodic_rate(coerce(annual_increase_percent), periods_per_year))

    periods = 0
    total_withdrawn = 0.0
    last_withdrawal = 0.0

    while balance > DEPLETION_FLOOR and periods < max_periods:
        balance = safe_multiply(balance, 1.0 + rate)
        amount = min(current, balance)
        balance -= amount
        total_withdrawn += amount
        last_withdrawal = amount
        current = safe_multiply(current, 1.0 + escalation)
        periods += 1

    if balance <= DEPLETION_FLOOR:
        balance = 0.0
        status = DepletionStatus.DEPLETED
    else:
        status = DepletionStatus.CAPPED
        logger.info("withdrawal simulation capped at %d periods, corpus %.2f left", max_periods, balance)

    return DepletionResult(
        status=status,
        periods=periods,
        total_withdrawn=total_withdrawn,
        remaining_corpus=balance,
        last_withdrawal=last_withdrawal,
    )


# =============================================================================
# GOALS
# =============================================================================


def plan_goal(
    target: NumericInput,
    years: NumericInput,
    inflation_percent: NumericInput,
    current_savings: NumericInput = 0.0,
    monthly_contribution: NumericInput = 0.0,
    annual_return_percent: NumericInput = 0.0,
) -> GoalPlan:
    """
    Inflate a goal to its future cost and check current habits against it.

    projected = savings grown monthly + monthly contributions (ordinary annuity).
    The required contribution closes the gap left after current savings grow;
    it is 0 when savings alone reach the inflated target.

    Examples:
        >>> plan = plan_goal(120000, 1, 0, 0, 10000, 0)
        >>> plan.feasibility_score, plan.shortfall
        (100.0, 0.0)
    """
    goal = max(0.0, coerce(target))
    horizon = max(0.0, coerce(years))
    savings = max(0.0, coerce(current_savings))
    contribution = max(0.0, coerce(monthly_contribution))
    rate = periodic_rate(coerce(annual_return_percent))
    months = horizon * MONTHS_PER_YEAR

    adjusted_target = compounding.inflate(goal, coerce(inflation_percent), horizon)
    savings_future = compounding.future_value_lump_sum(savings, rate, months)
    contributions_future = compounding.future_value_annuity(contribution, rate, months)
    projected = savings_future + contributions_future

    gap_after_savings = adjusted_target - savings_future
    required = compounding.required_contribution(gap_after_savings, rate, months) if gap_after_savings > 0 else 0.0

    if adjusted_target > 0:
        feasibility = clamp(safe_divide(projected, adjusted_target) * 100.0, 0.0, 100.0)
    else:
        feasibility = 100.0

    return GoalPlan(
        inflation_adjusted_target=max(0.0, adjusted_target),
        projected_amount=max(0.0, projected),
        future_value_of_savings=max(0.0, savings_future),
        future_value_of_contributions=max(0.0, contributions_future),
        shortfall=max(0.0, adjusted_target - projected),
        surplus=max(0.0, projected - adjusted_target),
        required_monthly_contribution=max(0.0, required),
        feasibility_score=feasibility,
    )
