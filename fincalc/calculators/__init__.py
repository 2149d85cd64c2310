"""
Calculators — one facade per personal-finance calculator

Each facade validates a plain input record (strict or lenient, per its
config), runs an engine and returns a CalculationResult.
"""

from fincalc.calculators.base import Calculator, CalculationResult, CalculatorConfig, money, ratio
from fincalc.calculators.break_even import BreakEvenCalculator, BreakEvenConfig
from fincalc.calculators.business_loan import BusinessLoanCalculator, BusinessLoanConfig
from fincalc.calculators.debt_payoff import DebtPayoffCalculator, DebtPayoffConfig
from fincalc.calculators.debt_strategy import DEBT_RULES, DebtStrategyCalculator, DebtStrategyConfig
from fincalc.calculators.education_goal import COURSE_PRESETS, EducationGoalCalculator, EducationGoalConfig
from fincalc.calculators.emi import EMICalculator, EMIConfig
from fincalc.calculators.epf import EPFCalculator, EPFConfig
from fincalc.calculators.fd import FDCalculator, FDConfig
from fincalc.calculators.financial_health import FinancialHealthCalculator, FinancialHealthConfig
from fincalc.calculators.goal_planning import GoalPlanningCalculator, GoalPlanningConfig
from fincalc.calculators.investment import InvestmentCalculator, InvestmentConfig
from fincalc.calculators.loan import LoanCalculator, LoanConfig
from fincalc.calculators.lumpsum import LumpsumCalculator, LumpsumConfig
from fincalc.calculators.mortgage import MortgageCalculator, MortgageConfig
from fincalc.calculators.ppf import PPFCalculator, PPFConfig
from fincalc.calculators.rd import RDCalculator, RDConfig
from fincalc.calculators.registry import CALCULATORS, UnknownCalculatorError, calculate, get_calculator
from fincalc.calculators.salary import TAX_SLABS, SalaryCalculator, SalaryConfig, slab_tax
from fincalc.calculators.simple_interest import SimpleInterestCalculator, SimpleInterestConfig
from fincalc.calculators.sip import SIPCalculator, SIPConfig
from fincalc.calculators.swp import SWPCalculator, SWPConfig

__all__ = [
    # Base
    "Calculator",
    "CalculationResult",
    "CalculatorConfig",
    "money",
    "ratio",
    # Registry
    "CALCULATORS",
    "UnknownCalculatorError",
    "calculate",
    "get_calculator",
    # Lending
    "LoanCalculator",
    "LoanConfig",
    "EMICalculator",
    "EMIConfig",
    "MortgageCalculator",
    "MortgageConfig",
    "BusinessLoanCalculator",
    "BusinessLoanConfig",
    # Deposits and investments
    "FDCalculator",
    "FDConfig",
    "RDCalculator",
    "RDConfig",
    "PPFCalculator",
    "PPFConfig",
    "EPFCalculator",
    "EPFConfig",
    "SimpleInterestCalculator",
    "SimpleInterestConfig",
    "SIPCalculator",
    "SIPConfig",
    "LumpsumCalculator",
    "LumpsumConfig",
    "InvestmentCalculator",
    "InvestmentConfig",
    "SWPCalculator",
    "SWPConfig",
    # Debt
    "DEBT_RULES",
    "DebtPayoffCalculator",
    "DebtPayoffConfig",
    "DebtStrategyCalculator",
    "DebtStrategyConfig",
    # Planning
    "BreakEvenCalculator",
    "BreakEvenConfig",
    "COURSE_PRESETS",
    "EducationGoalCalculator",
    "EducationGoalConfig",
    "GoalPlanningCalculator",
    "GoalPlanningConfig",
    "TAX_SLABS",
    "SalaryCalculator",
    "SalaryConfig",
    "slab_tax",
    "FinancialHealthCalculator",
    "FinancialHealthConfig",
]
