"""
Scores — Table-driven bounded scores

Every score is a step function over a band table followed by a weighted
aggregate, so thresholds live in data rather than in if-chains:

    SAVINGS_RATE_BANDS = (ScoreBand(20, 100), ScoreBand(15, 80), ...)
    step_score(17.5, SAVINGS_RATE_BANDS)  -> 80.0

Two composite scores are built on top:
- financial_health_score: seven weighted sub-scores, category, recommendations
- loan_eligibility: penalty table for a business loan, risk level

KEY INVARIANTS:
1. Every score returned is in [0, 100]
2. Weights of a weighted_score must sum to 1 (programmer error otherwise)
3. Band tables are ordered: descending thresholds when higher is better,
   ascending when lower is better
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final, NamedTuple

from fincalc.core.math.coercion import NumericInput, coerce
from fincalc.core.math.numerical_safeguards import clamp, is_close, round_to_precision, safe_divide
from fincalc.scenario.metrics import debt_to_income, savings_rate

SCORE_MIN: Final[float] = 0.0
SCORE_MAX: Final[float] = 100.0


class ScoreBand(NamedTuple):
    threshold: float
    score: float


# =============================================================================
# PRIMITIVES
# =============================================================================


def step_score(
    value: float,
    bands: Sequence[ScoreBand],
    higher_is_better: bool = True,
    default: float = SCORE_MIN,
) -> float:
    """
    Score of the first band the value reaches.

    higher_is_better: first band with value >= threshold (bands descending).
    otherwise: first band with value <= threshold (bands ascending).

    Examples:
        >>> step_score(17.5, SAVINGS_RATE_BANDS)
        80.0
        >>> step_score(30, DEBT_TO_INCOME_BANDS, higher_is_better=False)
        80.0
        >>> step_score(-5, SAVINGS_RATE_BANDS)
        0.0
    """
    for band in bands:
        reached = value >= band.threshold if higher_is_better else value <= band.threshold
        if reached:
            return clamp(float(band.score), SCORE_MIN, SCORE_MAX)
    return clamp(float(default), SCORE_MIN, SCORE_MAX)


def weighted_score(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """
    Weighted sum of sub-scores, clamped to [0, 100].

    Raises:
        ValueError: If weights do not sum to 1 or name a missing score

    Examples:
        >>> weighted_score({'a': 100, 'b': 50}, {'a': 0.5, 'b': 0.5})
        75.0
    """
    total_weight = sum(weights.values())
    if not is_close(total_weight, 1.0, abs_tol=1e-9):
        raise ValueError(f"weights must sum to 1, got {total_weight}")

    missing = set(weights) - set(scores)
    if missing:
        raise ValueError(f"no score for weighted components: {sorted(missing)}")

    total = sum(scores[name] * weight for name, weight in weights.items())
    return clamp(total, SCORE_MIN, SCORE_MAX)


# =============================================================================
# FINANCIAL HEALTH
# =============================================================================

SAVINGS_RATE_BANDS: Final[tuple[ScoreBand, ...]] = (
    ScoreBand(20, 100),
    ScoreBand(15, 80),
    ScoreBand(10, 60),
    ScoreBand(5, 40),
    ScoreBand(0, 20),
)

# Total debt as percent of annual income, lower is better
DEBT_TO_INCOME_BANDS: Final[tuple[ScoreBand, ...]] = (
    ScoreBand(20, 100),
    ScoreBand(36, 80),
    ScoreBand(50, 60),
    ScoreBand(75, 40),
    ScoreBand(100, 20),
)

# Months of expenses covered
EMERGENCY_FUND_BANDS: Final[tuple[ScoreBand, ...]] = (
    ScoreBand(6, 100),
    ScoreBand(4, 80),
    ScoreBand(3, 60),
    ScoreBand(1, 40),
    ScoreBand(0.5, 20),
)

# Investments / annual income as a fraction of the age-based expectation
INVESTMENT_RATIO_BANDS: Final[tuple[ScoreBand, ...]] = (
    ScoreBand(1.0, 100),
    ScoreBand(0.8, 80),
    ScoreBand(0.6, 60),
    ScoreBand(0.4, 40),
    ScoreBand(0.2, 20),
)

CREDIT_SCORE_BANDS: Final[tuple[ScoreBand, ...]] = (
    ScoreBand(800, 100),
    ScoreBand(750, 90),
    ScoreBand(700, 80),
    ScoreBand(650, 60),
    ScoreBand(600, 40),
    ScoreBand(550, 20),
)

# Retirement plan in place, by age (below threshold)
RETIREMENT_AGE_SCORES: Final[tuple[ScoreBand, ...]] = (
    ScoreBand(30, 100),
    ScoreBand(40, 90),
    ScoreBand(50, 80),
)
RETIREMENT_LATE_SCORE: Final[float] = 70.0

HEALTH_WEIGHTS: Final[dict[str, float]] = {
    "savings_rate": 0.20,
    "debt_to_income": 0.20,
    "emergency_fund": 0.15,
    "investment_ratio": 0.15,
    "credit_score": 0.15,
    "insurance": 0.10,
    "retirement": 0.05,
}

# Minimum expected investments as percent of annual income: max(10, 2 * age)
INVESTMENT_FLOOR_PERCENT: Final[float] = 10.0
INVESTMENT_PERCENT_PER_YEAR_OF_AGE: Final[float] = 2.0

# (sub-score, below this score -> recommendation)
HEALTH_RECOMMENDATIONS: Final[tuple[tuple[str, float, str], ...]] = (
    ("savings_rate", 60, "Increase your savings rate to at least 15-20% of income"),
    ("debt_to_income", 60, "Focus on reducing debt to improve debt-to-income ratio"),
    ("emergency_fund", 80, "Build emergency fund to cover 3-6 months of expenses"),
    ("investment_ratio", 60, "Increase investments for long-term wealth building"),
    ("credit_score", 80, "Work on improving credit score through timely payments"),
    ("insurance", 100, "Get adequate insurance coverage for financial protection"),
    ("retirement", 100, "Start retirement planning as early as possible"),
)


class HealthCategory(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    CRITICAL = "Critical"


HEALTH_CATEGORY_BANDS: Final[tuple[tuple[float, HealthCategory], ...]] = (
    (80, HealthCategory.EXCELLENT),
    (70, HealthCategory.GOOD),
    (60, HealthCategory.FAIR),
    (40, HealthCategory.POOR),
)


@dataclass(frozen=True)
class FinancialHealthReport:
    """Composite financial health score with its parts."""

    overall_score: float
    category: HealthCategory
    scores: dict[str, float]
    values: dict[str, float]
    recommendations: tuple[str, ...]


def health_category(score: float) -> HealthCategory:
    for threshold, category in HEALTH_CATEGORY_BANDS:
        if score >= threshold:
            return category
    return HealthCategory.CRITICAL


def retirement_score(has_plan: bool, age: float) -> float:
    if not has_plan:
        return SCORE_MIN
    for band in RETIREMENT_AGE_SCORES:
        if age < band.threshold:
            return float(band.score)
    return RETIREMENT_LATE_SCORE


def financial_health_score(
    monthly_income: NumericInput,
    monthly_expenses: NumericInput,
    total_debt: NumericInput,
    emergency_fund: NumericInput,
    investments: NumericInput,
    age: NumericInput,
    credit_score: NumericInput,
    has_insurance: bool,
    has_retirement_plan: bool,
) -> FinancialHealthReport:
    """
    Seven weighted sub-scores of personal financial health.

    Args:
        monthly_income: Take-home income per month
        monthly_expenses: Spending per month
        total_debt: Outstanding debt (compared with ANNUAL income)
        emergency_fund: Liquid savings set aside
        investments: Invested assets
        age: Age in years
        credit_score: Bureau score (300-900)
        has_insurance: Adequate insurance in place
        has_retirement_plan: Retirement plan in place

    Returns:
        FinancialHealthReport; overall_score is rounded to a whole number

    Examples:
        >>> report = financial_health_score(100000, 60000, 0, 600000, 2400000, 25, 820, True, True)
        >>> report.overall_score, report.category.value
        (100.0, 'Excellent')
    """
    income = coerce(monthly_income)
    expenses = coerce(monthly_expenses)
    annual_income = income * 12
    years = coerce(age)

    saving = savings_rate(income, expenses) if income > 0 else 0.0
    dti = debt_to_income(total_debt, annual_income)
    months_covered = safe_divide(emergency_fund, expenses)
    investment_percent = safe_divide(investments, annual_income) * 100.0
    expected_percent = max(INVESTMENT_FLOOR_PERCENT, years * INVESTMENT_PERCENT_PER_YEAR_OF_AGE)
    investment_ratio = safe_divide(investment_percent, expected_percent)
    credit = coerce(credit_score)

    scores = {
        "savings_rate": step_score(saving, SAVINGS_RATE_BANDS),
        "debt_to_income": step_score(dti, DEBT_TO_INCOME_BANDS, higher_is_better=False),
        "emergency_fund": step_score(months_covered, EMERGENCY_FUND_BANDS),
        "investment_ratio": step_score(investment_ratio, INVESTMENT_RATIO_BANDS),
        "credit_score": step_score(credit, CREDIT_SCORE_BANDS),
        "insurance": SCORE_MAX if has_insurance else SCORE_MIN,
        "retirement": retirement_score(has_retirement_plan, years),
    }

    overall = round_to_precision(weighted_score(scores, HEALTH_WEIGHTS), 0)

    recommendations = tuple(
        message for name, below, message in HEALTH_RECOMMENDATIONS if scores[name] < below
    )

    return FinancialHealthReport(
        overall_score=overall,
        category=health_category(overall),
        scores=scores,
        values={
            "savings_rate": max(0.0, saving),
            "debt_to_income": dti,
            "emergency_fund_months": months_covered,
            "investment_ratio": investment_percent,
            "credit_score": credit,
        },
        recommendations=recommendations,
    )


# =============================================================================
# LOAN ELIGIBILITY
# =============================================================================


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Penalty(NamedTuple):
    """Deduction applied when a metric crosses a limit."""

    metric: str
    limit: float
    below: bool  # True: applies when value < limit, False: when value > limit
    points: float
    risk: RiskLevel | None  # risk level it sets, None leaves it unchanged
    reason: str


# Within each metric the first matching penalty applies
ELIGIBILITY_PENALTIES: Final[tuple[Penalty, ...]] = (
    Penalty("credit_score", 650, True, 30, RiskLevel.HIGH, "Credit score below 650"),
    Penalty("credit_score", 750, True, 15, RiskLevel.MEDIUM, "Credit score below 750"),
    Penalty("business_age", 2, True, 20, RiskLevel.HIGH, "Business younger than 2 years"),
    Penalty("business_age", 5, True, 10, None, "Business younger than 5 years"),
    Penalty("debt_to_income", 40, False, 25, RiskLevel.HIGH, "Debt above 40% of revenue"),
    Penalty("debt_to_income", 25, False, 10, RiskLevel.MEDIUM, "Debt above 25% of revenue"),
    Penalty("dscr", 1.25, True, 20, RiskLevel.HIGH, "Debt service coverage below 1.25"),
)


@dataclass(frozen=True)
class EligibilityAssessment:
    score: float
    risk_level: RiskLevel
    reasons: tuple[str, ...]


def loan_eligibility(
    credit_score: NumericInput,
    business_age_years: NumericInput,
    debt_to_income_percent: NumericInput,
    dscr: NumericInput | None,
) -> EligibilityAssessment:
    """
    Start at 100 and deduct penalties; later penalties override the risk level.

    A dscr of None (no debt service to cover) skips the coverage penalty.

    Examples:
        >>> result = loan_eligibility(780, 6, 20, 2.0)
        >>> result.score, result.risk_level.value
        (100.0, 'Low')
        >>> loan_eligibility(600, 1, 60, 0.5).score
        5.0
    """
    metrics = {
        "credit_score": coerce(credit_score),
        "business_age": coerce(business_age_years),
        "debt_to_income": coerce(debt_to_income_percent),
        "dscr": None if dscr is None else coerce(dscr),
    }

    score = SCORE_MAX
    risk = RiskLevel.LOW
    reasons: list[str] = []
    penalized: set[str] = set()

    for penalty in ELIGIBILITY_PENALTIES:
        if penalty.metric in penalized:
            continue
        value = metrics[penalty.metric]
        if value is None:
            continue
        hit = value < penalty.limit if penalty.below else value > penalty.limit
        if not hit:
            continue
        penalized.add(penalty.metric)
        score -= penalty.points
        if penalty.risk is not None:
            risk = penalty.risk
        reasons.append(penalty.reason)

    return EligibilityAssessment(
        score=clamp(score, SCORE_MIN, SCORE_MAX),
        risk_level=risk,
        reasons=tuple(reasons),
    )
