"""
Recurring Deposit Calculator — Monthly deposits credited at month end
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.math.compounding import PaymentTiming
from fincalc.engine.projection import project_contributions


@dataclass(frozen=True)
class RDConfig(CalculatorConfig):
    timing: PaymentTiming = PaymentTiming.END


class RDCalculator(Calculator):
    name = "rd"
    config_class = RDConfig
    RULES = {
        "fields": {
            "monthly_deposit": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e9},
            "annual_rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
            "years": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 50},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        result = project_contributions(
            values["monthly_deposit"],
            values["annual_rate"],
            values["years"],
            timing=self.config.timing,
        )
        return {
            "maturity_amount": money(result.maturity_value),
            "total_deposits": money(result.total_contributed),
            "total_interest": money(result.total_growth),
            "growth_percent": ratio(result.derived_ratios["growth_percent"]),
            "breakdown": breakdown_rows(result),
        }
