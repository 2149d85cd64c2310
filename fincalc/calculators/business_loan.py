"""
Business Loan Calculator — Repayment, cost and lender view of a business loan

Loan types:
- term_loan, equipment_loan: fully amortizing monthly installments
- working_capital: interest-only, principal repaid with the last payment
- line_of_credit: interest on the expected utilization only

Lender view: debt-to-revenue, loan-to-collateral, debt service coverage
(revenue * net_margin / annual debt service) and an eligibility score.
Cost view: processing fee, tax shield on interest, effective annual cost.

Runs LENIENT: every field has a default and out-of-range input is clamped,
so a partially filled form still produces a full report.

FORMULAS:
    total_cost     = total_payment + loan_amount * processing_fee / 100
    dscr           = annual_revenue * net_margin / (monthly_payment * 12), None without debt service
    tax_saving     = total_interest * tax_rate
    effective_rate = (total_cost / loan_amount) ^ (1 / years) - 1
"""

import logging
from dataclasses import dataclass
from typing import Any, Final

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio, schedule_rows
from fincalc.core.contracts.validators import ValidationMode
from fincalc.core.domain.units import MONTHS_PER_YEAR, periodic_rate, tenure_to_months
from fincalc.core.math.numerical_safeguards import is_zero, safe_multiply, safe_power
from fincalc.engine.amortization import amortize, interest_only_schedule
from fincalc.scenario.metrics import debt_service_coverage, debt_to_income, loan_to_value, percent_of
from fincalc.scenario.scores import loan_eligibility

logger = logging.getLogger(__name__)

# Share of revenue assumed available for debt service
DEFAULT_NET_MARGIN: Final[float] = 0.30

# Marginal tax rate applied to deductible interest
DEFAULT_TAX_RATE: Final[float] = 0.30

# Expected average drawdown of a credit line
DEFAULT_CREDIT_LINE_UTILIZATION: Final[float] = 0.50


@dataclass(frozen=True)
class BusinessLoanConfig(CalculatorConfig):
    validation_mode: ValidationMode = ValidationMode.LENIENT
    net_margin: float = DEFAULT_NET_MARGIN
    tax_rate: float = DEFAULT_TAX_RATE
    credit_line_utilization: float = DEFAULT_CREDIT_LINE_UTILIZATION


class BusinessLoanCalculator(Calculator):
    name = "business_loan"
    config_class = BusinessLoanConfig
    RULES = {
        "fields": {
            "loan_amount": {"type": "number", "exclusive_minimum": 0, "maximum": 1e12, "default": 100000, "absolute": True},
            "interest_rate": {"type": "number", "minimum": 0, "maximum": 100, "default": 12, "absolute": True},
            "loan_term": {"type": "number", "minimum": 1, "maximum": 30, "default": 1, "label": "Loan term (years)"},
            "loan_type": {
                "type": "enum",
                "choices": ["term_loan", "equipment_loan", "working_capital", "line_of_credit"],
                "default": "term_loan",
            },
            "processing_fee": {"type": "number", "minimum": 0, "maximum": 100, "default": 0, "label": "Processing fee (%)"},
            "collateral_value": {"type": "number", "minimum": 0, "default": 0},
            "annual_revenue": {"type": "number", "minimum": 0, "default": 1000000, "zero_is_missing": True},
            "existing_debt": {"type": "number", "minimum": 0, "default": 0},
            "credit_score": {"type": "integer", "minimum": 300, "maximum": 900, "default": 750, "zero_is_missing": True},
            "business_age": {"type": "number", "minimum": 0, "maximum": 200, "default": 1, "label": "Business age (years)"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        loan_amount = values["loan_amount"]
        years = values["loan_term"]
        months = tenure_to_months(years)
        loan_type = values["loan_type"]
        revenue = values["annual_revenue"]

        schedule: list[dict[str, Any]] = []
        if loan_type == "line_of_credit":
            utilized = safe_multiply(loan_amount, self.config.credit_line_utilization)
            monthly_payment = safe_multiply(utilized, periodic_rate(values["interest_rate"]))
            total_interest = safe_multiply(monthly_payment, months)
            total_payment = total_interest
            status = "interest_only"
        else:
            if loan_type == "working_capital":
                result = interest_only_schedule(loan_amount, values["interest_rate"], months)
            else:
                result = amortize(loan_amount, values["interest_rate"], months)
            monthly_payment = result.periodic_payment
            total_interest = result.total_interest
            total_payment = result.total_payment
            status = result.status.value
            schedule = schedule_rows(result)

        fee = loan_amount * values["processing_fee"] / 100.0
        total_cost = total_payment + fee
        annual_debt_service = monthly_payment * MONTHS_PER_YEAR

        dti = debt_to_income(values["existing_debt"] + loan_amount, max(1.0, revenue))
        ltv = loan_to_value(loan_amount, values["collateral_value"])
        if is_zero(annual_debt_service):
            dscr = None
        else:
            dscr = debt_service_coverage(revenue * self.config.net_margin, annual_debt_service)
        eligibility = loan_eligibility(values["credit_score"], values["business_age"], dti, dscr)

        annual_tax_saving = total_interest / max(1.0, years) * self.config.tax_rate
        total_tax_saving = annual_tax_saving * years
        effective_rate = max(0.0, safe_power(total_cost / max(1.0, loan_amount), 1.0 / max(1.0, years)) - 1.0) * 100.0

        logger.debug(
            "business loan type=%s amount=%.2f dscr=%s risk=%s",
            loan_type,
            loan_amount,
            dscr,
            eligibility.risk_level.value,
        )

        return {
            "loan_type": loan_type,
            "months": months,
            "monthly_payment": money(monthly_payment),
            "total_interest": money(total_interest),
            "total_payment": money(total_payment),
            "processing_fee": money(fee),
            "total_cost": money(total_cost),
            "effective_rate": ratio(effective_rate),
            "debt_to_income": ratio(dti),
            "loan_to_value": ratio(ltv),
            "dscr": None if dscr is None else ratio(dscr),
            "payment_to_revenue": ratio(percent_of(annual_debt_service, max(1.0, revenue))),
            "eligibility_score": eligibility.score,
            "risk_level": eligibility.risk_level.value,
            "risk_reasons": list(eligibility.reasons),
            "annual_tax_saving": money(annual_tax_saving),
            "total_tax_saving": money(total_tax_saving),
            "net_cost_after_tax": money(max(0.0, total_cost - total_tax_saving)),
            "status": status,
            "schedule": schedule,
        }
