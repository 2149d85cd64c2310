"""
Break-Even Calculator — Units and revenue needed to cover fixed costs
"""

import math
from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio
from fincalc.scenario.metrics import break_even


@dataclass(frozen=True)
class BreakEvenConfig(CalculatorConfig):
    pass


class BreakEvenCalculator(Calculator):
    name = "break_even"
    config_class = BreakEvenConfig
    RULES = {
        "fields": {
            "fixed_costs": {"type": "number", "required": True, "minimum": 0, "maximum": 1e12},
            "selling_price": {"type": "number", "required": True, "exclusive_minimum": 0, "label": "Selling price per unit"},
            "variable_cost": {"type": "number", "required": True, "minimum": 0, "label": "Variable cost per unit"},
            "target_profit": {"type": "number", "minimum": 0, "default": 0},
            "current_sales_units": {"type": "number", "minimum": 0, "default": 0},
        },
        "checks": [
            {
                "kind": "greater_than",
                "field": "selling_price",
                "other": "variable_cost",
                "message": "Selling price must be greater than variable cost per unit",
            },
        ],
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        analysis = break_even(
            values["fixed_costs"],
            values["selling_price"],
            values["variable_cost"],
            values["target_profit"],
            values["current_sales_units"],
        )
        return {
            "break_even_units": math.ceil(analysis.break_even_units),
            "break_even_revenue": money(analysis.break_even_revenue),
            "contribution_margin": money(analysis.contribution_margin),
            "contribution_margin_ratio": ratio(analysis.contribution_margin_ratio),
            "target_profit_units": math.ceil(analysis.target_profit_units),
            "current_revenue": money(analysis.current_revenue),
            "current_total_cost": money(analysis.current_total_cost),
            "current_profit": money(analysis.current_profit),
            "margin_of_safety": ratio(analysis.margin_of_safety),
            "additional_units_needed": math.ceil(analysis.additional_units_needed),
        }
