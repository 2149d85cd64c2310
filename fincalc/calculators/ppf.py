"""
PPF Calculator — Yearly deposits into a Public Provident Fund

Each year's deposit is made at the start of the year and earns the full
year's interest; interest is credited once a year at the scheme rate.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.math.compounding import PaymentTiming
from fincalc.engine.projection import project_contributions


@dataclass(frozen=True)
class PPFConfig(CalculatorConfig):
    annual_rate: float = 7.1


class PPFCalculator(Calculator):
    name = "ppf"
    config_class = PPFConfig
    RULES = {
        "fields": {
            "yearly_investment": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e9},
            "years": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 50, "label": "Investment period"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        result = project_contributions(
            values["yearly_investment"],
            self.config.annual_rate,
            values["years"],
            timing=PaymentTiming.BEGIN,
            periods_per_year=1,
        )
        return {
            "annual_rate": self.config.annual_rate,
            "maturity_amount": money(result.maturity_value),
            "total_investment": money(result.total_contributed),
            "total_interest": money(result.total_growth),
            "growth_percent": ratio(result.derived_ratios["growth_percent"]),
            "breakdown": breakdown_rows(result),
        }
