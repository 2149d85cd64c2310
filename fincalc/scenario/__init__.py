"""Scenario — derived ratios, break-even analysis and table-driven scores."""

from fincalc.scenario.metrics import (
    BreakEvenAnalysis,
    break_even,
    contribution_margin,
    contribution_margin_percent,
    debt_service_coverage,
    debt_to_income,
    loan_to_value,
    percent_of,
    savings_rate,
)
from fincalc.scenario.scores import (
    EligibilityAssessment,
    FinancialHealthReport,
    HealthCategory,
    RiskLevel,
    ScoreBand,
    financial_health_score,
    loan_eligibility,
    step_score,
    weighted_score,
)

__all__ = [
    # Metrics
    "BreakEvenAnalysis",
    "break_even",
    "contribution_margin",
    "contribution_margin_percent",
    "debt_service_coverage",
    "debt_to_income",
    "loan_to_value",
    "percent_of",
    "savings_rate",
    # Scores
    "EligibilityAssessment",
    "FinancialHealthReport",
    "HealthCategory",
    "RiskLevel",
    "ScoreBand",
    "financial_health_score",
    "loan_eligibility",
    "step_score",
    "weighted_score",
]
