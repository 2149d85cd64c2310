"""
SWP Calculator — How long a corpus lasts under monthly withdrawals

Runs LENIENT. A plan still funded at the 600-month cap is reported as
sustainable rather than as a duration.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio
from fincalc.core.contracts.validators import ValidationMode
from fincalc.core.domain.units import months_to_years_months
from fincalc.core.math.numerical_safeguards import safe_divide
from fincalc.engine.projection import MAX_WITHDRAWAL_PERIODS, simulate_withdrawals


@dataclass(frozen=True)
class SWPConfig(CalculatorConfig):
    validation_mode: ValidationMode = ValidationMode.LENIENT
    max_periods: int = MAX_WITHDRAWAL_PERIODS


class SWPCalculator(Calculator):
    name = "swp"
    config_class = SWPConfig
    RULES = {
        "fields": {
            "corpus": {"type": "number", "exclusive_minimum": 0, "maximum": 1e12, "default": 1000000, "absolute": True},
            "monthly_withdrawal": {"type": "number", "exclusive_minimum": 0, "maximum": 1e12, "default": 10000, "absolute": True},
            "annual_return": {"type": "number", "minimum": 0, "maximum": 50, "default": 8},
            "annual_increase": {"type": "number", "minimum": 0, "maximum": 50, "default": 0, "label": "Annual withdrawal increase"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        result = simulate_withdrawals(
            values["corpus"],
            values["monthly_withdrawal"],
            values["annual_return"],
            annual_increase_percent=values["annual_increase"],
            max_periods=self.config.max_periods,
        )
        duration = months_to_years_months(result.periods)

        return {
            "status": result.status.value,
            "sustainable": not result.depleted,
            "months": result.periods,
            "years": duration.years,
            "remaining_months": duration.months,
            "total_withdrawn": money(result.total_withdrawn),
            "remaining_corpus": money(result.remaining_corpus),
            "last_withdrawal": money(result.last_withdrawal),
            "withdrawal_rate": ratio(safe_divide(values["monthly_withdrawal"] * 12, values["corpus"]) * 100.0),
        }
