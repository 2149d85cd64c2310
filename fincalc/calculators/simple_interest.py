"""
Simple Interest Calculator — Interest on the principal only

FORMULAS:
    simple_interest  = principal * rate / 100 * years
    effective_rate   = simple_interest / principal * 100
    monthly_interest = simple_interest / (years * 12)
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio
from fincalc.core.domain.units import MONTHS_PER_YEAR
from fincalc.core.math.numerical_safeguards import safe_divide, safe_multiply


@dataclass(frozen=True)
class SimpleInterestConfig(CalculatorConfig):
    pass


class SimpleInterestCalculator(Calculator):
    name = "simple_interest"
    config_class = SimpleInterestConfig
    RULES = {
        "fields": {
            "principal": {"type": "number", "required": True, "minimum": 0, "maximum": 1e12, "label": "Principal amount"},
            "rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100, "label": "Interest rate"},
            "years": {"type": "number", "required": True, "minimum": 0, "maximum": 100, "label": "Time period"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        principal = values["principal"]
        interest = safe_multiply(principal * values["rate"] / 100.0, values["years"])
        return {
            "principal": money(principal),
            "simple_interest": money(interest),
            "total_amount": money(principal + interest),
            "effective_rate": ratio(safe_divide(interest * 100.0, principal)),
            "monthly_interest": money(safe_divide(interest, values["years"] * MONTHS_PER_YEAR)),
        }
