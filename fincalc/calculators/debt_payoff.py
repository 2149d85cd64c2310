"""
Debt Payoff Calculator — Minimum payment vs minimum plus extra

The minimum payment must exceed the first month's interest, otherwise the
debt never shrinks and the form is rejected.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money
from fincalc.core.domain.debt import PayoffScenario
from fincalc.core.domain.units import months_to_years_months
from fincalc.engine.debt import MAX_PAYOFF_MONTHS, payoff_with_extra


@dataclass(frozen=True)
class DebtPayoffConfig(CalculatorConfig):
    max_periods: int = MAX_PAYOFF_MONTHS


def _scenario(scenario: PayoffScenario) -> dict[str, Any]:
    duration = months_to_years_months(scenario.months)
    return {
        "monthly_payment": money(scenario.monthly_payment),
        "months": scenario.months,
        "years": duration.years,
        "remaining_months": duration.months,
        "total_interest": money(scenario.total_interest),
        "total_paid": money(scenario.total_paid),
        "status": scenario.status.value,
    }


class DebtPayoffCalculator(Calculator):
    name = "debt_payoff"
    config_class = DebtPayoffConfig
    RULES = {
        "fields": {
            "total_debt": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e12},
            "interest_rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
            "minimum_payment": {"type": "number", "required": True, "exclusive_minimum": 0},
            "extra_payment": {"type": "number", "minimum": 0, "default": 0},
        },
        "checks": [
            {
                "kind": "covers_interest",
                "field": "minimum_payment",
                "balance": "total_debt",
                "rate": "interest_rate",
                "margin": 1.0,
                "message": "Minimum payment must be greater than the monthly interest",
            },
        ],
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        result = payoff_with_extra(
            values["total_debt"],
            values["interest_rate"],
            values["minimum_payment"],
            values["extra_payment"],
            max_periods=self.config.max_periods,
        )
        return {
            "minimum_only": _scenario(result.minimum_only),
            "with_extra": _scenario(result.with_extra),
            "interest_saved": money(result.interest_saved),
            "months_saved": result.time_saved,
        }
