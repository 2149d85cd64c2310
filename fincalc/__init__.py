"""
fincalc — Personal-finance calculation engine

Coercion of untrusted input, rule-table validation (strict or lenient),
amortization, projection and debt engines, derived metrics, and one
calculator facade per personal-finance calculator.

    >>> from fincalc import calculate
    >>> result = calculate("emi", {"loan_amount": 2500000, "interest_rate": 8.5, "loan_tenure": 20})
    >>> result.ok, len(result.result["schedule"])
    (True, 240)
"""

from fincalc.calculators import (
    CALCULATORS,
    CalculationResult,
    Calculator,
    CalculatorConfig,
    UnknownCalculatorError,
    calculate,
    get_calculator,
)
from fincalc.core.contracts import FieldAdjustment, FieldIssue, RuleConfigurationError, ValidationMode
from fincalc.core.math import coerce

__version__ = "0.1.0"

__all__ = [
    "CALCULATORS",
    "CalculationResult",
    "Calculator",
    "CalculatorConfig",
    "FieldAdjustment",
    "FieldIssue",
    "RuleConfigurationError",
    "UnknownCalculatorError",
    "ValidationMode",
    "calculate",
    "coerce",
    "get_calculator",
]
