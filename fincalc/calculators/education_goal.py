"""
Education Goal Calculator — Corpus and monthly savings for a child's education

- Annual course cost inflates until the course starts
- Total cost = inflated annual cost * course duration
- Existing savings grow at the expected return and are netted out
- The remaining corpus is funded by a monthly SIP (annuity due)

A course type supplies the current cost and education inflation when
those fields are missing or zero.

Runs LENIENT.
"""

from dataclasses import dataclass
from typing import Any, Final, NamedTuple

from fincalc.calculators.base import Calculator, CalculatorConfig, money
from fincalc.core.contracts.validators import ValidationMode
from fincalc.core.domain.units import MONTHS_PER_YEAR, periodic_rate
from fincalc.core.math import compounding
from fincalc.core.math.compounding import PaymentTiming
from fincalc.engine.projection import required_contribution


class CoursePreset(NamedTuple):
    annual_cost: float
    inflation_percent: float


COURSE_PRESETS: Final[dict[str, CoursePreset]] = {
    "engineering": CoursePreset(1_500_000, 10),
    "medical": CoursePreset(2_500_000, 12),
    "management": CoursePreset(2_000_000, 11),
    "liberal": CoursePreset(800_000, 8),
    "abroad": CoursePreset(5_000_000, 15),
    "custom": CoursePreset(1_000_000, 10),
}


@dataclass(frozen=True)
class EducationGoalConfig(CalculatorConfig):
    validation_mode: ValidationMode = ValidationMode.LENIENT


class EducationGoalCalculator(Calculator):
    name = "education_goal"
    config_class = EducationGoalConfig
    RULES = {
        "fields": {
            "child_age": {"type": "number", "minimum": 0, "maximum": 30, "default": 5, "absolute": True},
            "starting_age": {"type": "number", "minimum": 1, "maximum": 40, "default": 18, "absolute": True},
            "years_to_start": {"type": "number", "minimum": 0, "maximum": 40, "absolute": True},
            "course_type": {"type": "enum", "choices": list(COURSE_PRESETS), "default": "engineering"},
            "course_duration": {"type": "number", "minimum": 1, "maximum": 10, "default": 4, "zero_is_missing": True},
            "current_cost": {"type": "number", "minimum": 0, "maximum": 1e11, "absolute": True},
            "expected_inflation": {"type": "number", "minimum": 0, "maximum": 30, "absolute": True},
            "existing_savings": {"type": "number", "minimum": 0, "default": 0, "absolute": True},
            "expected_return": {"type": "number", "minimum": 0, "maximum": 50, "default": 12, "absolute": True},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        preset = COURSE_PRESETS[values["course_type"]]
        annual_cost = values["current_cost"] or preset.annual_cost
        inflation = values["expected_inflation"] or preset.inflation_percent
        duration = values["course_duration"]

        years = values["years_to_start"] or max(0.0, values["starting_age"] - values["child_age"])
        months = years * MONTHS_PER_YEAR
        rate = periodic_rate(values["expected_return"])

        future_cost = compounding.inflate(annual_cost, inflation, years)
        total_future_cost = future_cost * duration
        future_savings = compounding.future_value_lump_sum(values["existing_savings"], rate, months)
        corpus = max(0.0, total_future_cost - future_savings)
        monthly = required_contribution(corpus, rate, months, PaymentTiming.BEGIN)

        return {
            "course_type": values["course_type"],
            "years_to_start": years,
            "current_annual_cost": money(annual_cost),
            "future_annual_cost": money(future_cost),
            "total_future_cost": money(total_future_cost),
            "future_value_of_savings": money(future_savings),
            "required_corpus": money(corpus),
            "monthly_investment": money(monthly),
            "yearly_investment": money(monthly * MONTHS_PER_YEAR),
            "inflation_impact": money(total_future_cost - annual_cost * duration),
        }
