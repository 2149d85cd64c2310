"""
Tests for the debt payoff engine

Invariants checked:
1. interest_saved >= 0 and time_saved >= 0 for any extra payment
2. Payment below interest is reported as non-amortizing, never looped on
3. Strategy runs conserve money: total_paid == balances + total_interest
4. Avalanche never costs more interest than snowball
5. Simulations stop at the month cap
"""

import pytest

from fincalc.core.domain.debt import Debt, PayoffStrategy
from fincalc.core.domain.schedule import AmortizationStatus
from fincalc.engine.debt import (
    MAX_PAYOFF_MONTHS,
    compare_strategies,
    payoff_with_extra,
    priority_order,
    simulate_strategy,
)


def make_debts() -> list[Debt]:
    return [
        Debt(name="Car loan", balance=1000.0, annual_rate_percent=5.0, minimum_payment=50.0),
        Debt(name="Credit card", balance=5000.0, annual_rate_percent=20.0, minimum_payment=150.0),
    ]


# =============================================================================
# TESTS: single balance
# =============================================================================


class TestPayoffWithExtra:
    """Tests for payoff_with_extra"""

    def test_reference_minimum_only(self) -> None:
        """100000 at 18% paid at 3000 a month takes about four years"""
        result = payoff_with_extra(100000, 18, 3000)
        assert 45 <= result.minimum_only.months <= 48
        assert result.minimum_only.status is AmortizationStatus.PAID_OFF
        assert result.minimum_only.total_paid == pytest.approx(
            100000 + result.minimum_only.total_interest
        )

    @pytest.mark.parametrize("extra", [0, 500, 1000, 5000, 200000])
    def test_savings_never_negative(self, extra: float) -> None:
        """Any extra payment saves time and interest or changes nothing"""
        result = payoff_with_extra(100000, 18, 3000, extra)
        assert result.interest_saved >= 0.0
        assert result.time_saved >= 0
        assert result.with_extra.months <= result.minimum_only.months

    def test_zero_extra_changes_nothing(self) -> None:
        """Both scenarios coincide without an extra payment"""
        result = payoff_with_extra(100000, 18, 3000, 0)
        assert result.interest_saved == 0.0
        assert result.time_saved == 0
        assert result.with_extra == result.minimum_only

    def test_extra_shortens(self) -> None:
        """A meaningful extra payment shortens the payoff"""
        result = payoff_with_extra(100000, 18, 3000, 1000)
        assert result.time_saved > 0
        assert result.interest_saved > 0

    def test_non_amortizing_minimum(self) -> None:
        """A minimum below the monthly interest never pays off"""
        result = payoff_with_extra(100000, 36, 1000)
        assert result.minimum_only.status is AmortizationStatus.NON_AMORTIZING
        assert result.minimum_only.months == 0
        assert result.interest_saved == 0.0

    def test_extra_rescues_non_amortizing(self) -> None:
        """An extra payment above the interest makes the plan amortize"""
        result = payoff_with_extra(100000, 36, 1000, 4000)
        assert result.with_extra.status is AmortizationStatus.PAID_OFF
        assert result.with_extra.months > 0

    def test_zero_debt(self) -> None:
        """Nothing owed takes no time"""
        result = payoff_with_extra(0, 18, 3000, 1000)
        assert result.minimum_only.months == 0
        assert result.minimum_only.status is AmortizationStatus.PAID_OFF

    def test_cap(self) -> None:
        """Months never exceed the cap"""
        result = payoff_with_extra(1_000_000, 12, 10000.5, max_periods=24)
        assert result.minimum_only.status is AmortizationStatus.CAPPED
        assert result.minimum_only.months == 24


# =============================================================================
# TESTS: strategies
# =============================================================================


class TestPriorityOrder:
    """Tests for priority_order"""

    def test_avalanche_highest_rate_first(self) -> None:
        assert priority_order(make_debts(), PayoffStrategy.AVALANCHE) == [1, 0]

    def test_snowball_smallest_balance_first(self) -> None:
        assert priority_order(make_debts(), "snowball") == [0, 1]

    def test_ties(self) -> None:
        """Rate ties go to the smaller balance and balance ties to the higher rate"""
        debts = [
            Debt(name="A", balance=500.0, annual_rate_percent=10.0, minimum_payment=10.0),
            Debt(name="B", balance=300.0, annual_rate_percent=10.0, minimum_payment=10.0),
            Debt(name="C", balance=300.0, annual_rate_percent=15.0, minimum_payment=10.0),
        ]
        assert priority_order(debts, "avalanche") == [2, 1, 0]
        assert priority_order(debts, "snowball") == [2, 1, 0]


class TestSimulateStrategy:
    """Tests for simulate_strategy"""

    @pytest.mark.parametrize("strategy", list(PayoffStrategy))
    def test_pays_everything(self, strategy: PayoffStrategy) -> None:
        """Every debt reaches zero and money is conserved"""
        debts = make_debts()
        result = simulate_strategy(debts, 200, strategy)
        assert result.status is AmortizationStatus.PAID_OFF
        assert len(result.payoff_order) == len(debts)
        assert {event.name for event in result.payoff_order} == {"Car loan", "Credit card"}
        assert result.total_paid == pytest.approx(6000.0 + result.total_interest)
        assert 0 < result.months < MAX_PAYOFF_MONTHS

    def test_snowball_clears_small_debt_first(self) -> None:
        """Snowball focuses the surplus on the smallest balance"""
        result = simulate_strategy(make_debts(), 200, PayoffStrategy.SNOWBALL)
        assert result.payoff_order[0].name == "Car loan"

    def test_payoff_months_are_ordered(self) -> None:
        """Events are recorded in the month they happen"""
        result = simulate_strategy(make_debts(), 200, "avalanche")
        months = [event.month for event in result.payoff_order]
        assert months == sorted(months)
        assert months[-1] == result.months

    def test_extra_shortens_strategy(self) -> None:
        """More budget finishes sooner"""
        slow = simulate_strategy(make_debts(), 0, "avalanche")
        fast = simulate_strategy(make_debts(), 1000, "avalanche")
        assert fast.months < slow.months
        assert fast.total_interest < slow.total_interest

    def test_no_progress(self) -> None:
        """Minimums below the interest stop after the first month"""
        debts = [Debt(name="Loan", balance=10000.0, annual_rate_percent=36.0, minimum_payment=100.0)]
        result = simulate_strategy(debts, 0)
        assert result.status is AmortizationStatus.NON_AMORTIZING
        assert result.months == 1

    def test_cap(self) -> None:
        """The month cap ends long runs"""
        debts = [Debt(name="Loan", balance=1_000_000.0, annual_rate_percent=12.0, minimum_payment=20000.0)]
        result = simulate_strategy(debts, 0, max_periods=3)
        assert result.status is AmortizationStatus.CAPPED
        assert result.months == 3

    def test_empty(self) -> None:
        """No debts means nothing to do"""
        result = simulate_strategy([], 500)
        assert result.months == 0
        assert result.status is AmortizationStatus.PAID_OFF


class TestCompareStrategies:
    """Tests for compare_strategies"""

    def test_avalanche_not_more_expensive(self) -> None:
        """Highest rate first minimizes interest"""
        comparison = compare_strategies(make_debts(), 200)
        assert comparison.avalanche.total_interest <= comparison.snowball.total_interest + 1e-9
        assert comparison.recommended is PayoffStrategy.AVALANCHE
        assert comparison.interest_difference == pytest.approx(
            comparison.snowball.total_interest - comparison.avalanche.total_interest
        )

    def test_tie_goes_to_avalanche(self) -> None:
        """Identical orders recommend avalanche"""
        debts = [Debt(name="Only", balance=1000.0, annual_rate_percent=12.0, minimum_payment=100.0)]
        comparison = compare_strategies(debts, 50)
        assert comparison.interest_difference == 0.0
        assert comparison.recommended is PayoffStrategy.AVALANCHE
