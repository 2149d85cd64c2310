"""
Goal Planning Calculator — Is a savings goal on track?

Runs LENIENT: a zero target or horizon falls back to the defaults and the
horizon is never shorter than six months.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio
from fincalc.core.contracts.validators import ValidationMode
from fincalc.engine.projection import plan_goal


@dataclass(frozen=True)
class GoalPlanningConfig(CalculatorConfig):
    validation_mode: ValidationMode = ValidationMode.LENIENT


class GoalPlanningCalculator(Calculator):
    name = "goal_planning"
    config_class = GoalPlanningConfig
    RULES = {
        "fields": {
            "target_amount": {"type": "number", "exclusive_minimum": 0, "maximum": 1e12, "default": 100000, "absolute": True, "zero_is_missing": True},
            "time_horizon": {"type": "number", "minimum": 0.5, "maximum": 100, "default": 1, "absolute": True, "zero_is_missing": True},
            "current_savings": {"type": "number", "minimum": 0, "default": 0, "absolute": True},
            "monthly_contribution": {"type": "number", "minimum": 0, "default": 0, "absolute": True},
            "expected_return": {"type": "number", "minimum": 0, "maximum": 50, "default": 6, "absolute": True},
            "inflation_rate": {"type": "number", "minimum": 0, "maximum": 30, "default": 6, "absolute": True},
            "priority": {"type": "enum", "choices": ["high", "medium", "low"], "default": "medium"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        plan = plan_goal(
            values["target_amount"],
            values["time_horizon"],
            values["inflation_rate"],
            current_savings=values["current_savings"],
            monthly_contribution=values["monthly_contribution"],
            annual_return_percent=values["expected_return"],
        )
        return {
            "name": str(values.get("name") or "Goal"),
            "priority": values["priority"],
            "inflation_adjusted_target": money(plan.inflation_adjusted_target),
            "projected_amount": money(plan.projected_amount),
            "shortfall": money(plan.shortfall),
            "surplus": money(plan.surplus),
            "required_monthly_investment": money(plan.required_monthly_contribution),
            "feasibility_score": ratio(plan.feasibility_score),
            "on_track": plan.shortfall == 0.0,
        }
