"""
Tests for the amortization engine

Invariants checked:
1. principal + interest == payment for every entry, balance never negative
2. Sum of principal components equals the loan when paid off
3. total_payment == principal + total_interest when paid off
4. Larger prepayments never lengthen the schedule or raise interest
5. Non-amortizing plans and the iteration cap terminate with a status
"""

import logging

import pytest

from fincalc.core.domain.schedule import AmortizationStatus, ExtraPaymentSchedule
from fincalc.engine.amortization import (
    MAX_SCHEDULE_PERIODS,
    amortize,
    interest_only_schedule,
    periodic_payment,
    remaining_balance_after,
    simulate_fixed_payment,
)

# =============================================================================
# TESTS: closed forms
# =============================================================================


class TestPeriodicPayment:
    """Tests for periodic_payment"""

    def test_home_loan_reference(self) -> None:
        """2.5M at 8.5% over 20 years"""
        # P * r * (1 + r)^n / ((1 + r)^n - 1) with r = 0.085 / 12, n = 240
        assert periodic_payment(2_500_000, 0.085 / 12, 240) == pytest.approx(21695.6, abs=1.0)

    def test_zero_rate_is_straight_line(self) -> None:
        """No interest means principal / periods"""
        assert periodic_payment(12000, 0.0, 12) == 1000.0

    @pytest.mark.parametrize("principal, periods", [(0, 12), (-100, 12), (1000, 0), (1000, -1)])
    def test_nothing_to_repay(self, principal: float, periods: int) -> None:
        """No principal or no periods gives no installment"""
        assert periodic_payment(principal, 0.01, periods) == 0.0

    def test_remaining_balance_after(self) -> None:
        """Closed-form balance at the start, midway and the end"""
        assert remaining_balance_after(12000, 0.0, 12, 6) == 6000.0
        assert remaining_balance_after(12000, 0.01, 12, 0) == 12000.0
        assert remaining_balance_after(12000, 0.01, 12, 12) == 0.0

    def test_closed_form_matches_simulation(self) -> None:
        """Simulated schedule tracks the closed-form balance"""
        result = amortize(100000, 10, 60)
        expected = remaining_balance_after(100000, 10 / 1200, 60, 24)
        assert result.schedule[23].remaining_balance == pytest.approx(expected, rel=1e-9)


# =============================================================================
# TESTS: full schedules
# =============================================================================


class TestAmortize:
    """Tests for amortize"""

    @pytest.fixture(scope="class")
    def home_loan(self):
        return amortize(2_500_000, 8.5, 240)

    def test_reference_schedule(self, home_loan) -> None:
        """240 entries ending at zero"""
        assert home_loan.status is AmortizationStatus.PAID_OFF
        assert home_loan.periods == 240
        assert home_loan.schedule[-1].remaining_balance == 0.0
        # Level installment P * r * (1 + r)^n / ((1 + r)^n - 1)
        assert home_loan.periodic_payment == pytest.approx(21695.6, abs=1.0)
        assert home_loan.total_interest == pytest.approx(2_706_942, abs=500)

    def test_entry_split(self, home_loan) -> None:
        """Every entry splits exactly and balances never go negative"""
        for entry in home_loan.schedule:
            assert entry.principal_component + entry.interest_component == pytest.approx(entry.payment)
            assert entry.remaining_balance >= 0.0

    def test_balance_strictly_decreases(self, home_loan) -> None:
        """Each payment reduces the balance"""
        balances = [home_loan.principal] + [entry.remaining_balance for entry in home_loan.schedule]
        assert all(later < earlier for earlier, later in zip(balances, balances[1:]))

    def test_conservation(self, home_loan) -> None:
        """Principal repaid equals the loan, payments equal principal + interest"""
        repaid = sum(entry.principal_component for entry in home_loan.schedule)
        assert repaid == pytest.approx(2_500_000, abs=0.01)
        assert home_loan.total_payment == pytest.approx(home_loan.principal + home_loan.total_interest)
        assert home_loan.total_interest == pytest.approx(
            sum(entry.interest_component for entry in home_loan.schedule)
        )
        assert home_loan.schedule[-1].cumulative_interest == pytest.approx(home_loan.total_interest)

    def test_zero_rate(self) -> None:
        """Zero rate pays equal principal and no interest"""
        result = amortize(12000, 0, 12)
        assert result.periodic_payment == 1000.0
        assert result.periods == 12
        assert result.total_interest == 0.0
        assert all(entry.interest_component == 0.0 for entry in result.schedule)

    def test_negative_rate_treated_as_zero(self) -> None:
        """Negative rates are floored at zero"""
        assert amortize(12000, -5, 12).periodic_payment == 1000.0

    def test_raw_inputs(self) -> None:
        """Form strings are coerced"""
        result = amortize("1,20,000", "12", "12")
        assert result.principal == 120000.0
        assert result.periods == 12

    def test_zero_principal(self) -> None:
        """Nothing borrowed is already paid off"""
        result = amortize(0, 10, 12)
        assert result.status is AmortizationStatus.PAID_OFF
        assert result.schedule == ()
        assert result.total_payment == 0.0

    def test_zero_periods(self) -> None:
        """A loan without installments cannot amortize"""
        result = amortize(1000, 10, 0)
        assert result.status is AmortizationStatus.NON_AMORTIZING
        assert result.schedule == ()
        assert result.remaining_balance == 1000.0


# =============================================================================
# TESTS: prepayments
# =============================================================================


class TestPrepayments:
    """Extra payments every period or once a year"""

    @pytest.mark.parametrize("schedule", ["monthly", "yearly"])
    def test_larger_extra_never_worse(self, schedule: str) -> None:
        """Schedule length and interest are non-increasing in the extra amount"""
        results = [amortize(500000, 10, 120, extra, schedule) for extra in (0, 1000, 5000, 20000)]
        lengths = [result.periods for result in results]
        interests = [result.total_interest for result in results]
        assert lengths == sorted(lengths, reverse=True)
        assert interests == sorted(interests, reverse=True)
        assert lengths[-1] < lengths[0]

    def test_yearly_extra_lands_on_year_ends(self) -> None:
        """Yearly prepayments only appear every twelfth period"""
        result = amortize(500000, 10, 120, 20000, ExtraPaymentSchedule.YEARLY)
        extra_periods = [entry.period for entry in result.schedule if entry.extra_payment > 0]
        assert extra_periods
        assert all(period % 12 == 0 for period in extra_periods)
        assert result.total_extra_payment == pytest.approx(
            sum(entry.extra_payment for entry in result.schedule)
        )

    def test_schedule_none_ignores_extra(self) -> None:
        """An extra amount without a schedule is not applied"""
        result = amortize(100000, 10, 60, 5000, "none")
        assert result.periods == 60
        assert result.total_extra_payment == 0.0

    def test_paid_off_conservation_with_extra(self) -> None:
        """Prepayment schedules still repay exactly the principal"""
        result = amortize(300000, 9, 180, 2500, "monthly")
        assert result.paid_off
        repaid = sum(entry.principal_component for entry in result.schedule)
        assert repaid == pytest.approx(300000, abs=0.01)
        assert result.total_payment == pytest.approx(result.principal + result.total_interest)


# =============================================================================
# TESTS: termination
# =============================================================================


class TestTermination:
    """Non-amortizing plans and the iteration cap"""

    def test_payment_below_interest(self, caplog: pytest.LogCaptureFixture) -> None:
        """A payment that does not cover interest stops immediately"""
        with caplog.at_level(logging.INFO, logger="fincalc.engine.amortization"):
            schedule, status = simulate_fixed_payment(100000, 0.02, 1000)
        assert status is AmortizationStatus.NON_AMORTIZING
        assert schedule == []
        assert any("non-amortizing" in record.getMessage() for record in caplog.records)

    def test_cap(self) -> None:
        """A barely amortizing plan is truncated at the cap"""
        schedule, status = simulate_fixed_payment(100000, 0.01, 1000.5, max_periods=10)
        assert status is AmortizationStatus.CAPPED
        assert len(schedule) == 10
        assert schedule[-1].remaining_balance > 0

    def test_default_cap(self) -> None:
        """The default cap bounds every schedule"""
        schedule, status = simulate_fixed_payment(1_000_000, 0.01, 10000.01)
        assert status is AmortizationStatus.CAPPED
        assert len(schedule) == MAX_SCHEDULE_PERIODS

    def test_capped_totals(self) -> None:
        """A capped run reports what was paid, the balance stays owed"""
        result = amortize(100000, 12, 1500)
        assert result.status is AmortizationStatus.CAPPED
        assert result.periods == MAX_SCHEDULE_PERIODS
        assert result.remaining_balance > 0
        assert result.total_payment == pytest.approx(result.periodic_payment * MAX_SCHEDULE_PERIODS)
        assert result.total_payment == pytest.approx(
            result.principal - result.remaining_balance + result.total_interest
        )
        assert result.total_payment < result.principal + result.total_interest

    def test_zero_balance(self) -> None:
        """Nothing owed is paid off without entries"""
        assert simulate_fixed_payment(0, 0.01, 100) == ([], AmortizationStatus.PAID_OFF)


# =============================================================================
# TESTS: interest-only
# =============================================================================


class TestInterestOnly:
    """Tests for interest_only_schedule"""

    def test_reference(self) -> None:
        """120000 at 12% for a year"""
        result = interest_only_schedule(120000, 12, 12)
        assert result.periodic_payment == pytest.approx(1200.0)
        assert result.total_interest == pytest.approx(14400.0)
        assert result.schedule[-1].payment == pytest.approx(121200.0)
        assert result.schedule[-1].remaining_balance == 0.0
        assert all(entry.remaining_balance == 120000.0 for entry in result.schedule[:-1])
        assert result.total_payment == pytest.approx(result.principal + result.total_interest)

    def test_no_periods(self) -> None:
        """Without periods a positive principal is not repaid"""
        result = interest_only_schedule(1000, 12, 0)
        assert result.schedule == ()
        assert result.status is AmortizationStatus.NON_AMORTIZING
