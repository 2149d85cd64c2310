"""
Loan Calculator — Installment loan with optional monthly prepayment

Inputs: amount, rate (annual %), years, loan_type, extra_payment (monthly).
Reports the standard EMI schedule and, when an extra payment is given, the
accelerated schedule with the interest and months it saves.
"""

from dataclasses import dataclass
from typing import Any

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio, schedule_rows
from fincalc.core.domain.schedule import ExtraPaymentSchedule
from fincalc.core.domain.units import TenureUnit, tenure_to_months
from fincalc.core.math.numerical_safeguards import safe_divide
from fincalc.engine.amortization import amortize


@dataclass(frozen=True)
class LoanConfig(CalculatorConfig):
    pass


class LoanCalculator(Calculator):
    name = "loan"
    config_class = LoanConfig
    RULES = {
        "fields": {
            "amount": {
                "type": "number",
                "required": True,
                "exclusive_minimum": 0,
                "maximum": 1e12,
                "label": "Loan amount",
                "message": "Loan amount must be greater than 0",
            },
            "rate": {
                "type": "number",
                "required": True,
                "exclusive_minimum": 0,
                "maximum": 100,
                "label": "Interest rate",
                "message": "Interest rate must be greater than 0",
            },
            "years": {
                "type": "number",
                "required": True,
                "minimum": 1,
                "maximum": 50,
                "label": "Loan term",
                "message": "Loan term must be at least 1 year",
            },
            "loan_type": {
                "type": "enum",
                "choices": ["personal", "home", "car", "business", "education"],
                "default": "personal",
            },
            "extra_payment": {"type": "number", "minimum": 0, "default": 0, "label": "Extra monthly payment"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        months = tenure_to_months(values["years"], TenureUnit.YEARS)
        standard = amortize(values["amount"], values["rate"], months)

        report: dict[str, Any] = {
            "loan_type": values["loan_type"],
            "months": months,
            "monthly_payment": money(standard.periodic_payment),
            "total_interest": money(standard.total_interest),
            "total_payment": money(standard.total_payment),
            "interest_to_principal_percent": ratio(safe_divide(standard.total_interest, standard.principal) * 100.0),
            "status": standard.status.value,
            "schedule": schedule_rows(standard),
        }

        if values["extra_payment"] > 0:
            accelerated = amortize(
                values["amount"],
                values["rate"],
                months,
                extra_payment=values["extra_payment"],
                extra_payment_schedule=ExtraPaymentSchedule.MONTHLY,
            )
            report["with_extra_payment"] = {
                "months": accelerated.periods,
                "total_interest": money(accelerated.total_interest),
                "total_payment": money(accelerated.total_payment),
                "interest_saved": money(max(0.0, standard.total_interest - accelerated.total_interest)),
                "months_saved": max(0, standard.periods - accelerated.periods),
                "status": accelerated.status.value,
                "schedule": schedule_rows(accelerated),
            }

        return report
