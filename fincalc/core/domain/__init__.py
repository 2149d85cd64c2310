"""
Domain records for fincalc

Units and frequencies, and the immutable Pydantic results of the engines.
"""

from fincalc.core.domain.debt import (
    Debt,
    DebtPayoffEvent,
    DebtPayoffResult,
    PayoffScenario,
    PayoffStrategy,
    StrategyResult,
)
from fincalc.core.domain.projection import (
    DepletionResult,
    DepletionStatus,
    GoalPlan,
    ProjectionPeriod,
    ProjectionResult,
)
from fincalc.core.domain.schedule import (
    AmortizationResult,
    AmortizationStatus,
    ExtraPaymentSchedule,
    PaymentScheduleEntry,
)
from fincalc.core.domain.units import (
    DAYS_PER_YEAR,
    MONTHS_PER_YEAR,
    CompoundingFrequency,
    TenureUnit,
    YearsMonths,
    decimal_to_percent,
    monthly_from_annual,
    months_to_years_months,
    percent_to_decimal,
    periodic_rate,
    tenure_to_months,
    years_to_periods,
)

__all__ = [
    # Debt
    "Debt",
    "DebtPayoffEvent",
    "DebtPayoffResult",
    "PayoffScenario",
    "PayoffStrategy",
    "StrategyResult",
    # Projection
    "DepletionResult",
    "DepletionStatus",
    "GoalPlan",
    "ProjectionPeriod",
    "ProjectionResult",
    # Schedule
    "AmortizationResult",
    "AmortizationStatus",
    "ExtraPaymentSchedule",
    "PaymentScheduleEntry",
    # Units
    "DAYS_PER_YEAR",
    "MONTHS_PER_YEAR",
    "CompoundingFrequency",
    "TenureUnit",
    "YearsMonths",
    "decimal_to_percent",
    "monthly_from_annual",
    "months_to_years_months",
    "percent_to_decimal",
    "periodic_rate",
    "tenure_to_months",
    "years_to_periods",
]
