"""
Investment Calculator — Initial amount plus monthly contributions

The initial amount compounds at the chosen frequency; monthly
contributions are credited at month end. An optional goal is compared
with the projected value and the contribution that would reach it.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.domain.units import MONTHS_PER_YEAR, CompoundingFrequency, periodic_rate, years_to_periods
from fincalc.core.math import compounding
from fincalc.core.math.compounding import PaymentTiming
from fincalc.engine.projection import project_contributions, required_contribution


@dataclass(frozen=True)
class InvestmentConfig(CalculatorConfig):
    pass


class InvestmentCalculator(Calculator):
    name = "investment"
    config_class = InvestmentConfig
    RULES = {
        "fields": {
            "initial_amount": {"type": "number", "minimum": 0, "maximum": 1e12, "default": 0},
            "monthly_contribution": {"type": "number", "minimum": 0, "maximum": 1e9, "default": 0},
            "annual_return": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
            "years": {"type": "number", "required": True, "minimum": 1, "maximum": 100},
            "compounding_frequency": {
                "type": "enum",
                "choices": ["yearly", "annually", "semiannually", "quarterly", "monthly", "daily"],
                "default": "monthly",
            },
            "goal": {"type": "number", "minimum": 0, "default": 0, "label": "Target amount"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        frequency = CompoundingFrequency.parse(values["compounding_frequency"])
        result = project_contributions(
            values["monthly_contribution"],
            values["annual_return"],
            values["years"],
            timing=PaymentTiming.END,
            initial_amount=values["initial_amount"],
            initial_compounding=frequency,
        )

        report: dict[str, Any] = {
            "compounding_frequency": frequency.value,
            "final_value": money(result.maturity_value),
            "total_contributions": money(result.total_contributed),
            "total_growth": money(result.total_growth),
            "annualized_return": ratio(result.derived_ratios["annualized_return"]),
            "breakdown": breakdown_rows(result),
        }

        goal = values["goal"]
        if goal > 0:
            rate = periodic_rate(values["annual_return"])
            months = years_to_periods(values["years"], MONTHS_PER_YEAR)
            initial_future = compounding.future_value_lump_sum(
                values["initial_amount"],
                periodic_rate(values["annual_return"], frequency.periods_per_year),
                values["years"] * frequency.periods_per_year,
            )
            report["goal"] = {
                "target": money(goal),
                "reached": result.maturity_value >= goal,
                "gap": money(max(0.0, goal - result.maturity_value)),
                "required_monthly_contribution": money(
                    required_contribution(max(0.0, goal - initial_future), rate, months, PaymentTiming.END)
                ),
            }

        return report
