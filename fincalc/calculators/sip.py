"""
SIP Calculator — Monthly investment paid at the start of each month

Contributions form an annuity due; the returned ratios compare the
maturity value with the amount paid in.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.math.compounding import PaymentTiming
from fincalc.engine.projection import project_contributions


@dataclass(frozen=True)
class SIPConfig(CalculatorConfig):
    timing: PaymentTiming = PaymentTiming.BEGIN


class SIPCalculator(Calculator):
    name = "sip"
    config_class = SIPConfig
    RULES = {
        "fields": {
            "monthly_investment": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e9},
            "annual_return": {"type": "number", "required": True, "minimum": 0, "maximum": 100, "label": "Expected annual return"},
            "years": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 100, "label": "Investment period"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        result = project_contributions(
            values["monthly_investment"],
            values["annual_return"],
            values["years"],
            timing=self.config.timing,
        )
        return {
            "maturity_value": money(result.maturity_value),
            "total_invested": money(result.total_contributed),
            "estimated_returns": money(result.total_growth),
            "wealth_multiple": ratio(result.derived_ratios["wealth_multiple"]),
            "annualized_return": ratio(result.derived_ratios["annualized_return"]),
            "breakdown": breakdown_rows(result),
        }
