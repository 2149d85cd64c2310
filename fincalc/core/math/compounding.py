"""
Compounding — Safe Geometric Growth & Annuity Factors

Closed-form growth used by the projection engine and the calculators:
- Domain restriction for log(1+r): r > -1 + COMPOUNDING_R_FLOOR_EPS
- Numerically stable growth factor through log1p for small rates
- Lump-sum future value and annuity (ordinary / due) future value
- Inverse annuity: contribution required to reach a target
- Inflation, effective annual rate, annualized return (CAGR)

All rates in this module are DECIMAL and PERIODIC unless the name says
otherwise (`*_percent` arguments are annual percentages, e.g. 8.5 for 8.5%).

KEY INVARIANTS:
1. growth_factor never returns NaN/Inf (bounded to the safe range)
2. Zero rate degenerates to straight-line sums (factor = periods)
3. future_value_annuity and required_contribution come from the same
   factor, so required_contribution(future_value_annuity(p)) == p
4. All operations are deterministic and reproducible

FORMULAS:
    growth(r, n)            = (1 + r) ** n = exp(n * log(1 + r))
    FV_lump(P, r, n)        = P * growth(r, n)
    annuity_factor(r, n)    = (growth(r, n) - 1) / r            (end)
                            = (growth(r, n) - 1) / r * (1 + r)  (begin)
    FV_annuity(C, r, n)     = C * annuity_factor(r, n)
    required(T, r, n)       = T / annuity_factor(r, n)
"""

import math
from enum import Enum
from typing import Final, NamedTuple

from fincalc.core.math.numerical_safeguards import (
    MAX_SAFE_VALUE,
    bound_result,
    is_valid_float,
    is_zero,
    safe_divide,
    safe_multiply,
    safe_power,
    sanitize_float,
)

# =============================================================================
# COMPOUNDING PARAMETERS
# =============================================================================

# Domain floor for log(1+r): r must be > -1 + COMPOUNDING_R_FLOOR_EPS
COMPOUNDING_R_FLOOR_EPS: Final[float] = 1.0e-6

# Below this |r| log1p(r) is used instead of log(1 + r)
LOG1P_SWITCH_THRESHOLD: Final[float] = 0.01


# =============================================================================
# ENUMS
# =============================================================================


class PaymentTiming(str, Enum):
    """When a periodic contribution lands inside its period."""

    END = "end"  # ordinary annuity
    BEGIN = "begin"  # annuity due


# =============================================================================
# SAFE COMPOUND RATE
# =============================================================================


def clamp_compound_rate(
    r: float,
    eps: float = COMPOUNDING_R_FLOOR_EPS,
) -> tuple[float, bool]:
    """
    Clamp a periodic rate into the log(1+r) domain.

    A rate at or below -100% would make the balance vanish or flip sign;
    the engine treats it as "lose almost everything" instead of failing.

    Args:
        r: Periodic rate (decimal, e.g. 0.01 for 1%)
        eps: Domain floor epsilon

    Returns:
        (clamped_r, was_clamped)

    Examples:
        >>> clamp_compound_rate(0.05)
        (0.05, False)
        >>> clamp_compound_rate(-1.0)
        (-0.999999, True)
    """
    if not is_valid_float(r):
        r = sanitize_float(r, fallback=0.0)

    domain_floor = -1.0 + eps

    if r <= domain_floor:
        return (domain_floor, True)

    return (r, False)


def log_growth(r: float) -> float:
    """
    Numerically stable log(1 + r).

    Examples:
        >>> log_growth(0.0)
        0.0
        >>> abs(log_growth(0.05) - 0.04879) < 1e-5
        True
    """
    r, _ = clamp_compound_rate(r)

    if abs(r) < LOG1P_SWITCH_THRESHOLD:
        return math.log1p(r)
    return math.log(1.0 + r)


# =============================================================================
# GROWTH
# =============================================================================


def growth_factor(periodic_rate: float, periods: float) -> float:
    """
    (1 + r) ** n computed through logarithms, bounded to the safe range.

    Args:
        periodic_rate: Rate per period (decimal)
        periods: Number of periods (may be fractional)

    Returns:
        Growth factor >= 0

    Examples:
        >>> round(growth_factor(0.1, 2), 10)
        1.21
        >>> growth_factor(0.0, 120)
        1.0
        >>> growth_factor(1.0, 1e6)
        1000000000000000.0
    """
    if is_zero(periods) or is_zero(periodic_rate):
        return 1.0

    exponent = periods * log_growth(periodic_rate)

    try:
        factor = math.exp(exponent)
    except OverflowError:
        return MAX_SAFE_VALUE

    return bound_result(factor, fallback=1.0)


def future_value_lump_sum(principal: float, periodic_rate: float, periods: float) -> float:
    """
    Future value of a single amount.

    Examples:
        >>> round(future_value_lump_sum(100000, 0.12, 5), 2)
        176234.17
    """
    return safe_multiply(principal, growth_factor(periodic_rate, periods))


def growth_trajectory(initial: float, periodic_rate: float, periods: int) -> list[float]:
    """
    Balance after every period: [B_0, B_1, ..., B_n].

    Examples:
        >>> [round(b, 6) for b in growth_trajectory(100.0, 0.1, 2)]
        [100.0, 110.0, 121.0]
        >>> growth_trajectory(100.0, 0.1, 0)
        [100.0]
    """
    if periods < 0:
        raise ValueError(f"periods must be non-negative, got {periods}")

    rate, _ = clamp_compound_rate(periodic_rate)
    trajectory = [initial]
    balance = initial

    for _ in range(periods):
        balance = safe_multiply(balance, 1.0 + rate)
        trajectory.append(balance)

    return trajectory


# =============================================================================
# ANNUITIES
# =============================================================================


def annuity_factor(
    periodic_rate: float,
    periods: float,
    timing: PaymentTiming = PaymentTiming.END,
) -> float:
    """
    Future value of 1 paid every period for `periods` periods.

    Zero rate degenerates to the plain count of payments.

    Examples:
        >>> annuity_factor(0.0, 12)
        12.0
        >>> round(annuity_factor(0.01, 12), 6)
        12.682503
        >>> round(annuity_factor(0.01, 12, PaymentTiming.BEGIN), 6)
        12.809328
    """
    if periods <= 0:
        return 0.0

    if is_zero(periodic_rate):
        return float(periods)

    factor = safe_divide(growth_factor(periodic_rate, periods) - 1.0, periodic_rate)

    if PaymentTiming(timing) is PaymentTiming.BEGIN:
        factor = safe_multiply(factor, 1.0 + periodic_rate)

    return factor


def future_value_annuity(
    contribution: float,
    periodic_rate: float,
    periods: float,
    timing: PaymentTiming = PaymentTiming.END,
) -> float:
    """
    Future value of a level contribution stream.

    Examples:
        >>> future_value_annuity(1000, 0.0, 12)
        12000.0
    """
    return safe_multiply(contribution, annuity_factor(periodic_rate, periods, timing))


def required_contribution(
    target: float,
    periodic_rate: float,
    periods: float,
    timing: PaymentTiming = PaymentTiming.END,
) -> float:
    """
    Level contribution whose annuity future value equals `target`.

    Inverse of future_value_annuity for the same rate, periods and timing.
    Non-positive targets need no contribution; non-positive periods leave
    no time to contribute and return 0.0.

    Examples:
        >>> required_contribution(12000, 0.0, 12)
        1000.0
        >>> required_contribution(-5, 0.01, 12)
        0.0
    """
    if target <= 0 or periods <= 0:
        return 0.0

    return safe_divide(target, annuity_factor(periodic_rate, periods, timing))


# =============================================================================
# ANNUAL-RATE UTILITIES
# =============================================================================


def inflate(amount: float, annual_percent: float, years: float) -> float:
    """
    Amount after `years` of inflation at `annual_percent` per year.

    Examples:
        >>> round(inflate(100000, 6, 10), 2)
        179084.77
    """
    return future_value_lump_sum(amount, annual_percent / 100.0, years)


def effective_annual_rate(annual_percent: float, periods_per_year: int) -> float:
    """
    Effective annual rate in percent for a nominal rate compounded
    `periods_per_year` times.

    Examples:
        >>> round(effective_annual_rate(12, 12), 4)
        12.6825
        >>> round(effective_annual_rate(7, 1), 6)
        7.0
    """
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be positive, got {periods_per_year}")

    factor = growth_factor(annual_percent / 100.0 / periods_per_year, periods_per_year)
    return (factor - 1.0) * 100.0


def annualized_return(final_value: float, initial_value: float, years: float) -> float:
    """
    Compound annual growth rate in percent.

    Returns 0.0 when the base or the horizon is not positive.

    Examples:
        >>> round(annualized_return(200, 100, 1), 6)
        100.0
        >>> annualized_return(150, 0, 5)
        0.0
    """
    if initial_value <= 0 or years <= 0 or final_value <= 0:
        return 0.0

    ratio = safe_divide(final_value, initial_value)
    return (safe_power(ratio, 1.0 / years, fallback=1.0) - 1.0) * 100.0


class GrowthSplit(NamedTuple):
    """Split of a final balance into what was paid in and what it earned."""

    final_value: float
    contributed: float
    growth: float


def split_growth(final_value: float, contributed: float) -> GrowthSplit:
    """
    final_value == contributed + growth, growth may be negative.

    Examples:
        >>> split_growth(110.0, 100.0).growth
        10.0
    """
    return GrowthSplit(
        final_value=final_value,
        contributed=contributed,
        growth=final_value - contributed,
    )
