"""
Calculator registry — lookup by name

    >>> calculate("loan", {"amount": 500000, "rate": 12, "years": 5}).ok
    True
"""

from collections.abc import Mapping
from typing import Any, Final

from fincalc.calculators.base import Calculator, CalculationResult
from fincalc.calculators.break_even import BreakEvenCalculator
from fincalc.calculators.business_loan import BusinessLoanCalculator
from fincalc.calculators.debt_payoff import DebtPayoffCalculator
from fincalc.calculators.debt_strategy import DebtStrategyCalculator
from fincalc.calculators.education_goal import EducationGoalCalculator
from fincalc.calculators.emi import EMICalculator
from fincalc.calculators.epf import EPFCalculator
from fincalc.calculators.fd import FDCalculator
from fincalc.calculators.financial_health import FinancialHealthCalculator
from fincalc.calculators.goal_planning import GoalPlanningCalculator
from fincalc.calculators.investment import InvestmentCalculator
from fincalc.calculators.loan import LoanCalculator
from fincalc.calculators.lumpsum import LumpsumCalculator
from fincalc.calculators.mortgage import MortgageCalculator
from fincalc.calculators.ppf import PPFCalculator
from fincalc.calculators.rd import RDCalculator
from fincalc.calculators.salary import SalaryCalculator
from fincalc.calculators.simple_interest import SimpleInterestCalculator
from fincalc.calculators.sip import SIPCalculator
from fincalc.calculators.swp import SWPCalculator
from fincalc.core.contracts.validators import ValidationMode

CALCULATORS: Final[dict[str, type[Calculator]]] = {
    calculator.name: calculator
    for calculator in (
        LoanCalculator,
        EMICalculator,
        MortgageCalculator,
        BusinessLoanCalculator,
        FDCalculator,
        RDCalculator,
        PPFCalculator,
        EPFCalculator,
        SimpleInterestCalculator,
        SIPCalculator,
        LumpsumCalculator,
        InvestmentCalculator,
        SWPCalculator,
        DebtPayoffCalculator,
        DebtStrategyCalculator,
        BreakEvenCalculator,
        EducationGoalCalculator,
        GoalPlanningCalculator,
        SalaryCalculator,
        FinancialHealthCalculator,
    )
}


class UnknownCalculatorError(ValueError):
    """No calculator is registered under the requested name."""


def get_calculator(name: str) -> Calculator:
    """
    Instantiate a registered calculator with its default config.

    Raises:
        UnknownCalculatorError: If name is not registered
    """
    try:
        calculator_class = CALCULATORS[name]
    except KeyError:
        raise UnknownCalculatorError(
            f"Unknown calculator {name!r}; expected one of: {', '.join(sorted(CALCULATORS))}"
        ) from None
    return calculator_class()


def calculate(
    name: str,
    params: Mapping[str, Any] | None,
    mode: ValidationMode | str | None = None,
) -> CalculationResult:
    """Run calculator `name` on params (mode overrides its configured policy)."""
    return get_calculator(name).calculate(params, mode)
