"""
Scenario Metrics — Derived ratios and break-even analysis

Ratios are returned in PERCENT unless the name says otherwise
(debt_service_coverage is a plain multiple). Every ratio goes through
safe_divide: a zero base yields the fallback (0.0) rather than an error.
"""

from dataclasses import dataclass

from fincalc.core.math.coercion import NumericInput, coerce
from fincalc.core.math.numerical_safeguards import safe_divide, safe_multiply


# =============================================================================
# RATIOS
# =============================================================================


def percent_of(part: NumericInput, whole: NumericInput) -> float:
    """part / whole * 100, 0.0 when whole is effectively zero."""
    return safe_multiply(safe_divide(part, whole), 100.0)


def debt_to_income(total_debt: NumericInput, income: NumericInput) -> float:
    """
    Debt as a percentage of income (same period basis for both).

    Examples:
        >>> debt_to_income(300000, 1200000)
        25.0
    """
    return percent_of(total_debt, income)


def loan_to_value(loan_amount: NumericInput, asset_value: NumericInput) -> float:
    """
    Loan as a percentage of the asset securing it.

    Examples:
        >>> loan_to_value(400000, 500000)
        80.0
    """
    return percent_of(loan_amount, asset_value)


def contribution_margin(price: NumericInput, variable_cost: NumericInput) -> float:
    """Selling price minus variable cost per unit."""
    return coerce(price) - coerce(variable_cost)


def contribution_margin_percent(price: NumericInput, variable_cost: NumericInput) -> float:
    """
    Contribution margin as a percentage of the selling price.

    Examples:
        >>> contribution_margin_percent(100, 60)
        40.0
    """
    return percent_of(contribution_margin(price, variable_cost), price)


def debt_service_coverage(net_operating_income: NumericInput, annual_debt_service: NumericInput) -> float:
    """
    Income available for debt service divided by the debt service (a multiple).

    Examples:
        >>> debt_service_coverage(150000, 100000)
        1.5
    """
    return safe_divide(net_operating_income, annual_debt_service)


def savings_rate(income: NumericInput, expenses: NumericInput) -> float:
    """
    Share of income not spent, in percent (negative when overspending).

    Examples:
        >>> savings_rate(100000, 75000)
        25.0
    """
    return percent_of(coerce(income) - coerce(expenses), income)


# =============================================================================
# BREAK-EVEN
# =============================================================================


@dataclass(frozen=True)
class BreakEvenAnalysis:
    """Break-even point and position of current sales relative to it."""

    contribution_margin: float  # per unit
    contribution_margin_ratio: float  # percent of price
    break_even_units: float
    break_even_revenue: float
    target_profit_units: float
    current_revenue: float
    current_total_cost: float
    current_profit: float
    margin_of_safety: float  # percent of current sales
    additional_units_needed: float
    feasible: bool  # False when price does not exceed variable cost


def break_even(
    fixed_costs: NumericInput,
    price_per_unit: NumericInput,
    variable_cost_per_unit: NumericInput,
    target_profit: NumericInput = 0.0,
    current_sales_units: NumericInput = 0.0,
) -> BreakEvenAnalysis:
    """
    Units and revenue at which contribution margin covers fixed costs.

    A non-positive contribution margin never breaks even: the unit figures
    are reported as 0 and feasible is False.

    Args:
        fixed_costs: Fixed costs for the period
        price_per_unit: Selling price per unit
        variable_cost_per_unit: Variable cost per unit
        target_profit: Profit to reach (for target_profit_units)
        current_sales_units: Units currently sold

    Examples:
        >>> analysis = break_even(50000, 100, 60, 20000, 1500)
        >>> analysis.break_even_units, analysis.target_profit_units
        (1250.0, 1750.0)
        >>> round(analysis.margin_of_safety, 4)
        16.6667
    """
    fixed = max(0.0, coerce(fixed_costs))
    price = coerce(price_per_unit)
    variable = coerce(variable_cost_per_unit)
    profit_goal = coerce(target_profit)
    sales = max(0.0, coerce(current_sales_units))

    margin = price - variable
    feasible = margin > 0

    if feasible:
        units = safe_divide(fixed, margin)
        target_units = safe_divide(fixed + profit_goal, margin)
    else:
        units = 0.0
        target_units = 0.0

    current_revenue = safe_multiply(sales, price)
    current_total_cost = fixed + safe_multiply(sales, variable)

    return BreakEvenAnalysis(
        contribution_margin=margin,
        contribution_margin_ratio=percent_of(margin, price),
        break_even_units=units,
        break_even_revenue=safe_multiply(units, price),
        target_profit_units=max(0.0, target_units),
        current_revenue=current_revenue,
        current_total_cost=current_total_cost,
        current_profit=current_revenue - current_total_cost,
        margin_of_safety=percent_of(sales - units, sales) if feasible else 0.0,
        additional_units_needed=max(0.0, units - sales),
        feasible=feasible,
    )
