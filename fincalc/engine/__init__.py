"""
Engines — amortization, debt payoff and projections

Pure functions; no I/O and no state between calls. Every loop is bounded by
an iteration cap and reports how it ended through a status value.
"""

from fincalc.engine.amortization import (
    MAX_SCHEDULE_PERIODS,
    RESIDUE_SWEEP,
    amortize,
    interest_only_schedule,
    periodic_payment,
    remaining_balance_after,
    simulate_fixed_payment,
)
from fincalc.engine.debt import (
    MAX_PAYOFF_MONTHS,
    StrategyComparison,
    compare_strategies,
    payoff_with_extra,
    priority_order,
    simulate_strategy,
)
from fincalc.engine.projection import (
    DEPLETION_FLOOR,
    MAX_PROJECTION_YEARS,
    MAX_WITHDRAWAL_PERIODS,
    future_value_of_contributions,
    plan_goal,
    project_contributions,
    project_lump_sum,
    required_contribution,
    simulate_withdrawals,
)

__all__ = [
    # Amortization
    "MAX_SCHEDULE_PERIODS",
    "RESIDUE_SWEEP",
    "amortize",
    "interest_only_schedule",
    "periodic_payment",
    "remaining_balance_after",
    "simulate_fixed_payment",
    # Debt
    "MAX_PAYOFF_MONTHS",
    "StrategyComparison",
    "compare_strategies",
    "payoff_with_extra",
    "priority_order",
    "simulate_strategy",
    # Projection
    "DEPLETION_FLOOR",
    "MAX_PROJECTION_YEARS",
    "MAX_WITHDRAWAL_PERIODS",
    "future_value_of_contributions",
    "plan_goal",
    "project_contributions",
    "project_lump_sum",
    "required_contribution",
    "simulate_withdrawals",
]
