"""
EPF Calculator — Employee and employer contributions to a provident fund

Both parties contribute a percentage of the monthly basic salary. A year's
contributions are pooled at the start of the year and earn the scheme
rate for the whole year.

FORMULAS:
    yearly_contribution = basic_salary * (employee% + employer%) / 100 * 12
    maturity            = yearly annuity due of yearly_contribution at annual_rate
"""

import logging
from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, breakdown_rows, money, ratio
from fincalc.core.domain.units import MONTHS_PER_YEAR
from fincalc.core.math.compounding import PaymentTiming
from fincalc.core.math.numerical_safeguards import safe_divide, safe_multiply
from fincalc.engine.projection import project_contributions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EPFConfig(CalculatorConfig):
    annual_rate: float = 8.5


class EPFCalculator(Calculator):
    name = "epf"
    config_class = EPFConfig
    RULES = {
        "fields": {
            "basic_salary": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e9, "label": "Monthly basic salary"},
            "employee_contribution": {"type": "number", "minimum": 0, "maximum": 100, "default": 12, "label": "Employee contribution"},
            "employer_contribution": {"type": "number", "minimum": 0, "maximum": 100, "default": 12, "label": "Employer contribution"},
            "years": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 50, "label": "Service period"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        employee_percent = values["employee_contribution"]
        employer_percent = values["employer_contribution"]
        combined_percent = employee_percent + employer_percent
        yearly_contribution = safe_multiply(values["basic_salary"] * combined_percent / 100.0, MONTHS_PER_YEAR)

        result = project_contributions(
            yearly_contribution,
            self.config.annual_rate,
            values["years"],
            timing=PaymentTiming.BEGIN,
            periods_per_year=1,
        )
        employee_share = safe_divide(employee_percent, combined_percent)
        logger.debug(
            "epf yearly=%.2f employee_share=%.4f maturity=%.2f",
            yearly_contribution,
            employee_share,
            result.maturity_value,
        )

        return {
            "annual_rate": self.config.annual_rate,
            "yearly_contribution": money(yearly_contribution),
            "total_employee_contribution": money(result.total_contributed * employee_share),
            "total_employer_contribution": money(result.total_contributed * (1.0 - employee_share)),
            "total_contribution": money(result.total_contributed),
            "maturity_amount": money(result.maturity_value),
            "total_interest": money(result.total_growth),
            "growth_percent": ratio(result.derived_ratios["growth_percent"]),
            "breakdown": breakdown_rows(result),
        }
