"""
Salary Calculator — Cost-to-company into take-home pay

All inputs and intermediate figures are ANNUAL; monthly figures are the
annual ones divided by twelve.

FORMULAS:
    basic        = ctc * basic_percent / 100
    hra          = basic * hra_percent / 100
    gross        = basic + hra + other_allowances
    provident    = basic * pf_percent / 100
    taxable      = max(0, gross - standard_deduction - provident)
    take_home    = gross - provident - professional_tax - income_tax

Income tax uses progressive slabs (TAX_SLABS): each slab's rate applies
only to the part of taxable income inside it.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final, NamedTuple

from fincalc.calculators.base import Calculator, CalculatorConfig, money, ratio
from fincalc.core.domain.units import MONTHS_PER_YEAR, monthly_from_annual
from fincalc.scenario.metrics import percent_of


class TaxSlab(NamedTuple):
    """Income up to `upper` (inclusive) is taxed at `rate_percent`."""

    upper: float
    rate_percent: float


TAX_SLABS: Final[tuple[TaxSlab, ...]] = (
    TaxSlab(300_000, 0),
    TaxSlab(700_000, 5),
    TaxSlab(1_000_000, 10),
    TaxSlab(1_200_000, 15),
    TaxSlab(1_500_000, 20),
    TaxSlab(math.inf, 30),
)

STANDARD_DEDUCTION: Final[float] = 50_000.0


def slab_tax(taxable_income: float, slabs: Sequence[TaxSlab] = TAX_SLABS) -> float:
    """
    Progressive tax on taxable_income.

    Examples:
        >>> slab_tax(300000)
        0.0
        >>> slab_tax(1000000)
        50000.0
        >>> slab_tax(1600000)
        170000.0
    """
    tax = 0.0
    lower = 0.0
    for slab in slabs:
        if taxable_income <= lower:
            break
        taxed = min(taxable_income, slab.upper) - lower
        tax += taxed * slab.rate_percent / 100.0
        lower = slab.upper
    return tax


@dataclass(frozen=True)
class SalaryConfig(CalculatorConfig):
    standard_deduction: float = STANDARD_DEDUCTION
    tax_slabs: tuple[TaxSlab, ...] = TAX_SLABS


class SalaryCalculator(Calculator):
    name = "salary"
    config_class = SalaryConfig
    RULES = {
        "fields": {
            "ctc": {"type": "number", "required": True, "exclusive_minimum": 0, "maximum": 1e10, "label": "Annual CTC"},
            "basic_percent": {
                "type": "number",
                "minimum": 40,
                "maximum": 70,
                "default": 50,
                "message": "Basic salary should be between 40% and 70% of CTC",
            },
            "hra_percent": {
                "type": "number",
                "minimum": 0,
                "maximum": 50,
                "default": 40,
                "message": "HRA cannot exceed 50% of basic salary",
            },
            "pf_percent": {"type": "number", "minimum": 0, "maximum": 20, "default": 12},
            "professional_tax": {"type": "number", "minimum": 0, "maximum": 2500, "default": 2400, "label": "Annual professional tax"},
            "other_allowances": {"type": "number", "minimum": 0, "default": 50000, "label": "Annual other allowances"},
        },
    }

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        ctc = values["ctc"]
        basic = ctc * values["basic_percent"] / 100.0
        hra = basic * values["hra_percent"] / 100.0
        gross = basic + hra + values["other_allowances"]
        provident_fund = basic * values["pf_percent"] / 100.0
        taxable = max(0.0, gross - self.config.standard_deduction - provident_fund)
        income_tax = slab_tax(taxable, self.config.tax_slabs)
        deductions = provident_fund + values["professional_tax"] + income_tax
        take_home = gross - deductions

        return {
            "annual": {
                "basic": money(basic),
                "hra": money(hra),
                "other_allowances": money(values["other_allowances"]),
                "gross_salary": money(gross),
                "provident_fund": money(provident_fund),
                "professional_tax": money(values["professional_tax"]),
                "taxable_income": money(taxable),
                "income_tax": money(income_tax),
                "total_deductions": money(deductions),
                "take_home": money(take_home),
            },
            "monthly": {
                "basic": money(monthly_from_annual(basic)),
                "hra": money(monthly_from_annual(hra)),
                "gross_salary": money(monthly_from_annual(gross)),
                "provident_fund": money(monthly_from_annual(provident_fund)),
                "income_tax": money(monthly_from_annual(income_tax)),
                "take_home": money(take_home / MONTHS_PER_YEAR),
            },
            "effective_tax_rate": ratio(percent_of(income_tax, gross)),
            "take_home_percent_of_ctc": ratio(percent_of(take_home, ctc)),
        }
