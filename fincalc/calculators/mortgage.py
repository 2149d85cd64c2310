"""
Mortgage Calculator — Principal and interest plus escrow items

loan = home_price - down_payment. Property tax, insurance and PMI are
entered as ANNUAL amounts and spread over twelve months.
"""

from dataclasses import dataclass
from typing import Any, Final

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio, schedule_rows
from fincalc.core.domain.units import MONTHS_PER_YEAR, monthly_from_annual, tenure_to_months
from fincalc.engine.amortization import amortize
from fincalc.scenario.metrics import loan_to_value

# Above this loan-to-value lenders usually require PMI
PMI_LTV_THRESHOLD: Final[float] = 80.0


@dataclass(frozen=True)
class MortgageConfig(CalculatorConfig):
    pmi_ltv_threshold: float = PMI_LTV_THRESHOLD


class MortgageCalculator(Calculator):
    name = "mortgage"
    config_class = MortgageConfig
    RULES = {
        "fields": {
            "home_price": {
                "type": "number",
                "required": True,
                "exclusive_minimum": 0,
                "maximum": 1e12,
                "message": "Home price must be greater than 0",
            },
            "down_payment": {
                "type": "number",
                "minimum": 0,
                "default": 0,
                "message": "Down payment can't be negative",
            },
            "interest_rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
            "years": {"type": "number", "required": True, "minimum": 1, "maximum": 50, "label": "Loan term"},
            "property_tax": {"type": "number", "minimum": 0, "default": 0, "label": "Annual property tax"},
            "insurance": {"type": "number", "minimum": 0, "default": 0, "label": "Annual insurance"},
            "pmi": {"type": "number", "minimum": 0, "default": 0, "label": "Annual PMI"},
        },
        "checks": [
            {
                "kind": "less_than",
                "field": "down_payment",
                "other": "home_price",
                "message": "Down payment can't exceed home price",
            },
        ],
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        price = values["home_price"]
        loan_amount = max(0.0, price - values["down_payment"])
        months = tenure_to_months(values["years"])
        result = amortize(loan_amount, values["interest_rate"], months)

        monthly_tax = monthly_from_annual(values["property_tax"])
        monthly_insurance = monthly_from_annual(values["insurance"])
        monthly_pmi = monthly_from_annual(values["pmi"])
        escrow = monthly_tax + monthly_insurance + monthly_pmi
        ltv = loan_to_value(loan_amount, price)

        return {
            "loan_amount": money(loan_amount),
            "monthly_principal_interest": money(result.periodic_payment),
            "monthly_property_tax": money(monthly_tax),
            "monthly_insurance": money(monthly_insurance),
            "monthly_pmi": money(monthly_pmi),
            "total_monthly_payment": money(result.periodic_payment + escrow),
            "total_interest": money(result.total_interest),
            "total_cost": money(result.total_payment + escrow * result.periods),
            "loan_to_value": ratio(ltv),
            "pmi_recommended": ltv > self.config.pmi_ltv_threshold,
            "months": result.periods,
            "years": result.periods / MONTHS_PER_YEAR,
            "status": result.status.value,
            "schedule": schedule_rows(result),
        }
