"""
Fixed Deposit Calculator — Lump sum compounded at a bank's frequency
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.domain.units import CompoundingFrequency
from fincalc.engine.projection import project_lump_sum


@dataclass(frozen=True)
class FDConfig(CalculatorConfig):
    pass


class FDCalculator(Calculator):
    name = "fd"
    config_class = FDConfig
    RULES = {
        "fields": {
            "principal": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e12, "label": "Investment amount"},
            "annual_rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100, "label": "Annual interest rate"},
            "years": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 100, "label": "Investment period"},
            "compounding_frequency": {
                "type": "enum",
                "choices": ["yearly", "annually", "semiannually", "quarterly", "monthly"],
                "default": "quarterly",
            },
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        frequency = CompoundingFrequency.parse(values["compounding_frequency"])
        result = project_lump_sum(values["principal"], values["annual_rate"], values["years"], frequency)

        return {
            "compounding_frequency": frequency.value,
            "maturity_amount": money(result.maturity_value),
            "principal": money(result.total_contributed),
            "total_interest": money(result.total_growth),
            "effective_yield": ratio(result.derived_ratios["effective_annual_rate"]),
            "breakdown": breakdown_rows(result),
        }
