"""
Lumpsum Calculator — One-time investment compounded yearly
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.domain.units import CompoundingFrequency
from fincalc.engine.projection import project_lump_sum


@dataclass(frozen=True)
class LumpsumConfig(CalculatorConfig):
    frequency: CompoundingFrequency = CompoundingFrequency.YEARLY


class LumpsumCalculator(Calculator):
    name = "lumpsum"
    config_class = LumpsumConfig
    RULES = {
        "fields": {
            "principal": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e12},
            "annual_return": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
            "years": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 100},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        result = project_lump_sum(values["principal"], values["annual_return"], values["years"], self.config.frequency)
        return {
            "maturity_value": money(result.maturity_value),
            "invested_amount": money(result.total_contributed),
            "estimated_returns": money(result.total_growth),
            "absolute_return_percent": ratio(result.derived_ratios["absolute_return_percent"]),
            "wealth_multiple": ratio(result.derived_ratios["wealth_multiple"]),
            "breakdown": breakdown_rows(result),
        }
