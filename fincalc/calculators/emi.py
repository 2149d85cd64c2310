"""
EMI Calculator — Equated monthly installment with prepayments

Tenure may be given in years or months. Prepayments are applied every
month or once a year and shorten the schedule rather than the installment.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio, schedule_rows
from fincalc.core.domain.units import months_to_years_months, tenure_to_months
from fincalc.core.math.numerical_safeguards import safe_divide
from fincalc.engine.amortization import amortize


@dataclass(frozen=True)
class EMIConfig(CalculatorConfig):
    pass


class EMICalculator(Calculator):
    name = "emi"
    config_class = EMIConfig
    RULES = {
        "fields": {
            "loan_amount": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e12},
            "interest_rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
            "loan_tenure": {"type": "number", "required": True, "minimum": 1, "maximum": 600},
            "tenure_type": {"type": "enum", "choices": ["years", "months"], "default": "years"},
            "prepayment_amount": {"type": "number", "minimum": 0, "default": 0},
            "prepayment_frequency": {"type": "enum", "choices": ["none", "monthly", "yearly"], "default": "none"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        months = tenure_to_months(values["loan_tenure"], values["tenure_type"])
        result = amortize(
            values["loan_amount"],
            values["interest_rate"],
            months,
            extra_payment=values["prepayment_amount"],
            extra_payment_schedule=values["prepayment_frequency"],
        )
        payoff = months_to_years_months(result.periods)

        return {
            "monthly_emi": money(result.periodic_payment),
            "total_interest": money(result.total_interest),
            "total_amount": money(result.total_payment),
            "total_prepayment": money(result.total_extra_payment),
            "interest_to_loan_ratio": ratio(safe_divide(result.total_interest, result.principal) * 100.0),
            "contract_months": months,
            "payoff_months": result.periods,
            "payoff_years": payoff.years,
            "payoff_remaining_months": payoff.months,
            "status": result.status.value,
            "schedule": schedule_rows(result),
        }
