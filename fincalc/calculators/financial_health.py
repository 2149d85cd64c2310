"""
Financial Health Calculator — Composite 0-100 score with recommendations

Runs LENIENT so that a partially filled questionnaire still gets a score.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, ratio
from fincalc.core.contracts.validators import ValidationMode
from fincalc.scenario.scores import financial_health_score


@dataclass(frozen=True)
class FinancialHealthConfig(CalculatorConfig):
    validation_mode: ValidationMode = ValidationMode.LENIENT


class FinancialHealthCalculator(Calculator):
    name = "financial_health"
    config_class = FinancialHealthConfig
    RULES = {
        "fields": {
            "monthly_income": {"type": "number", "exclusive_minimum": 0, "default": 100000, "absolute": True, "zero_is_missing": True},
            "monthly_expenses": {"type": "number", "minimum": 0, "default": 70000, "absolute": True},
            "total_debt": {"type": "number", "minimum": 0, "default": 500000, "absolute": True},
            "emergency_fund": {"type": "number", "minimum": 0, "default": 200000, "absolute": True},
            "investments": {"type": "number", "minimum": 0, "default": 300000, "absolute": True},
            "age": {"type": "integer", "minimum": 18, "maximum": 100, "default": 30},
            "credit_score": {"type": "integer", "minimum": 300, "maximum": 850, "default": 750, "zero_is_missing": True},
            "has_insurance": {"type": "enum", "choices": ["yes", "no"], "default": "no"},
            "has_retirement_plan": {"type": "enum", "choices": ["yes", "no"], "default": "no"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        report = financial_health_score(
            values["monthly_income"],
            values["monthly_expenses"],
            values["total_debt"],
            values["emergency_fund"],
            values["investments"],
            values["age"],
            values["credit_score"],
            has_insurance=values["has_insurance"] == "yes",
            has_retirement_plan=values["has_retirement_plan"] == "yes",
        )
        return {
            "overall_score": report.overall_score,
            "category": report.category.value,
            "scores": dict(report.scores),
            "values": {name: ratio(value) for name, value in report.values.items()},
            "recommendations": list(report.recommendations),
        }
