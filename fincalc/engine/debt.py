"""
Debt Payoff Engine — Minimum vs accelerated payoff, avalanche vs snowball

- payoff_with_extra: one balance paid at the minimum vs minimum + extra
- simulate_strategy: several debts, minimums on all, the surplus (extra plus
  minimums freed by debts already paid off) on the priority debt
- compare_strategies: both orders side by side

Units: annual rates are PERCENT; everything runs in monthly periods.

KEY INVARIANTS:
1. interest_saved >= 0 and time_saved >= 0
2. Simulations stop at the month cap or as soon as no progress is possible
3. Rollover: the monthly budget stays sum(minimums) + extra until the end
"""

import logging
from collections.abc import Sequence
from typing import Final, NamedTuple

from fincalc.core.domain.debt import (
    Debt,
    DebtPayoffEvent,
    DebtPayoffResult,
    PayoffScenario,
    PayoffStrategy,
    StrategyResult,
)
from fincalc.core.domain.schedule import AmortizationStatus
from fincalc.core.domain.units import periodic_rate
from fincalc.core.math.coercion import NumericInput, coerce
from fincalc.core.math.numerical_safeguards import safe_multiply
from fincalc.engine.amortization import RESIDUE_SWEEP, simulate_fixed_payment

logger = logging.getLogger(__name__)

# 50 years of monthly payments
MAX_PAYOFF_MONTHS: Final[int] = 600


# =============================================================================
# SINGLE BALANCE
# =============================================================================


def _payoff_scenario(balance: float, rate: float, payment: float, max_periods: int) -> PayoffScenario:
    schedule, status = simulate_fixed_payment(
        balance=balance,
        rate=rate,
        payment=payment,
        max_periods=max_periods,
    )
    return PayoffScenario(
        monthly_payment=payment,
        months=len(schedule),
        total_interest=sum(entry.interest_component for entry in schedule),
        total_paid=sum(entry.payment for entry in schedule),
        status=status,
    )


def payoff_with_extra(
    total_debt: NumericInput,
    annual_rate_percent: NumericInput,
    minimum_payment: NumericInput,
    extra_payment: NumericInput = 0.0,
    max_periods: int = MAX_PAYOFF_MONTHS,
) -> DebtPayoffResult:
    """
    Compare paying the minimum with paying the minimum plus an extra amount.

    Args:
        total_debt: Outstanding balance
        annual_rate_percent: Annual rate in percent
        minimum_payment: Monthly minimum payment
        extra_payment: Additional monthly payment
        max_periods: Month cap for each simulation

    Returns:
        DebtPayoffResult (savings floored at zero)

    Examples:
        >>> result = payoff_with_extra(100000, 18, 3000, 1000)
        >>> result.minimum_only.months
        47
        >>> result.time_saved > 0
        True
    """
    balance = max(0.0, coerce(total_debt))
    rate = periodic_rate(max(0.0, coerce(annual_rate_percent)))
    minimum = max(0.0, coerce(minimum_payment))
    extra = max(0.0, coerce(extra_payment))

    minimum_only = _payoff_scenario(balance, rate, minimum, max_periods)
    with_extra = _payoff_scenario(balance, rate, minimum + extra, max_periods)

    interest_saved = max(0.0, minimum_only.total_interest - with_extra.total_interest)
    time_saved = max(0, minimum_only.months - with_extra.months)

    logger.debug(
        "payoff balance=%.2f min=%.2f extra=%.2f -> %d vs %d months",
        balance,
        minimum,
        extra,
        minimum_only.months,
        with_extra.months,
    )

    return DebtPayoffResult(
        minimum_only=minimum_only,
        with_extra=with_extra,
        interest_saved=interest_saved,
        time_saved=time_saved,
    )


# =============================================================================
# MULTIPLE DEBTS
# =============================================================================


def priority_order(debts: Sequence[Debt], strategy: PayoffStrategy | str) -> list[int]:
    """
    Indices of `debts` in payoff priority.

    Avalanche: highest rate first, ties to the smaller balance.
    Snowball: smallest balance first, ties to the higher rate.
    """
    strategy = PayoffStrategy(strategy)
    indices = range(len(debts))

    if strategy is PayoffStrategy.AVALANCHE:
        return sorted(indices, key=lambda i: (-debts[i].annual_rate_percent, debts[i].balance))
    return sorted(indices, key=lambda i: (debts[i].balance, -debts[i].annual_rate_percent))


def simulate_strategy(
    debts: Sequence[Debt],
    extra_payment: NumericInput = 0.0,
    strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
    max_periods: int = MAX_PAYOFF_MONTHS,
) -> StrategyResult:
    """
    Pay off several debts under one strategy with minimum rollover.

    Each month: interest accrues on every open balance, every open debt
    receives its minimum (capped at its balance), and the rest of the budget
    goes to open debts in priority order.

    Args:
        debts: Debts to repay
        extra_payment: Monthly amount on top of the minimums
        strategy: 'avalanche' or 'snowball'
        max_periods: Month cap

    Returns:
        StrategyResult with the payoff order
    """
    strategy = PayoffStrategy(strategy)
    extra = max(0.0, coerce(extra_payment))
    order = priority_order(debts, strategy)

    balances = [debt.balance for debt in debts]
    rates = [periodic_rate(debt.annual_rate_percent) for debt in debts]
    interest_by_debt = [0.0] * len(debts)
    budget = sum(debt.minimum_payment for debt in debts) + extra

    events: list[DebtPayoffEvent] = []
    total_interest = 0.0
    total_paid = 0.0
    months = 0
    status = AmortizationStatus.PAID_OFF

    while any(balance > RESIDUE_SWEEP for balance in balances):
        if months >= max_periods:
            status = AmortizationStatus.CAPPED
            logger.info("%s strategy capped at %d months", strategy.value, max_periods)
            break

        months += 1
        opening_total = sum(balances)

        for i, balance in enumerate(balances):
            if balance > 0:
                interest = safe_multiply(balance, rates[i])
                balances[i] = balance + interest
                interest_by_debt[i] += interest
                total_interest += interest

        payments = [0.0] * len(debts)
        for i, debt in enumerate(debts):
            if balances[i] > 0:
                payments[i] = min(debt.minimum_payment, balances[i])

        remaining = max(0.0, budget - sum(payments))
        for i in order:
            if remaining <= 0:
                break
            room = max(0.0, balances[i] - payments[i])
            applied = min(remaining, room)
            payments[i] += applied
            remaining -= applied

        for i in range(len(debts)):
            was_open = balances[i] > 0
            balances[i] -= payments[i]
            total_paid += payments[i]
            if balances[i] <= RESIDUE_SWEEP:
                total_paid += max(0.0, balances[i])
                balances[i] = 0.0
                if was_open:
                    events.append(
                        DebtPayoffEvent(
                            name=debts[i].name,
                            month=months,
                            interest_paid=interest_by_debt[i],
                        )
                    )

        if sum(balances) > 0 and sum(balances) >= opening_total:
            status = AmortizationStatus.NON_AMORTIZING
            logger.info(
                "%s strategy makes no progress at month %d (budget %.2f)",
                strategy.value,
                months,
                budget,
            )
            break

    return StrategyResult(
        strategy=strategy,
        months=months,
        total_interest=total_interest,
        total_paid=total_paid,
        payoff_order=tuple(events),
        status=status,
    )


class StrategyComparison(NamedTuple):
    """Avalanche and snowball on the same debts."""

    avalanche: StrategyResult
    snowball: StrategyResult
    interest_difference: float  # snowball interest - avalanche interest
    recommended: PayoffStrategy


def compare_strategies(
    debts: Sequence[Debt],
    extra_payment: NumericInput = 0.0,
    max_periods: int = MAX_PAYOFF_MONTHS,
) -> StrategyComparison:
    """
    Run both strategies. The recommendation is the cheaper one, avalanche
    on a tie, and never a plan that fails to pay everything off when the
    other one does.
    """
    avalanche = simulate_strategy(debts, extra_payment, PayoffStrategy.AVALANCHE, max_periods)
    snowball = simulate_strategy(debts, extra_payment, PayoffStrategy.SNOWBALL, max_periods)

    if avalanche.status is not snowball.status and snowball.status is AmortizationStatus.PAID_OFF:
        recommended = PayoffStrategy.SNOWBALL
    elif avalanche.status is AmortizationStatus.PAID_OFF and snowball.status is not AmortizationStatus.PAID_OFF:
        recommended = PayoffStrategy.AVALANCHE
    elif snowball.total_interest < avalanche.total_interest:
        recommended = PayoffStrategy.SNOWBALL
    else:
        recommended = PayoffStrategy.AVALANCHE

    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        interest_difference=snowball.total_interest - avalanche.total_interest,
        recommended=recommended,
    )
