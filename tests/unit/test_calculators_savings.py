"""
Tests for the savings and investment calculators: fd, rd, ppf, epf,
simple_interest, sip, lumpsum, investment, swp

Checks:
1. Reference maturity values
2. maturity == invested + returns at the report boundary
3. Payment timing per product (RD at period end, SIP at period start)
4. Goal tracking on the investment calculator
5. Withdrawal plans report depletion or the cap, never loop
6. Provident funds credit interest yearly on deposits made at the start of the year
"""

import pytest

from fincalc.calculators.epf import EPFCalculator
from fincalc.calculators.fd import FDCalculator
from fincalc.calculators.investment import InvestmentCalculator
from fincalc.calculators.lumpsum import LumpsumCalculator
from fincalc.calculators.ppf import PPFCalculator, PPFConfig
from fincalc.calculators.rd import RDCalculator
from fincalc.calculators.simple_interest import SimpleInterestCalculator
from fincalc.calculators.sip import SIPCalculator
from fincalc.calculators.swp import SWPCalculator, SWPConfig
from fincalc.core.contracts.validators import ValidationMode

# =============================================================================
# TESTS: fixed and recurring deposits
# =============================================================================


class TestFDCalculator:
    """Tests for FDCalculator"""

    def test_reference(self) -> None:
        """100000 at 6.5% compounded quarterly for 2 years"""
        report = FDCalculator().calculate({"principal": 100000, "annual_rate": 6.5, "years": 2}).result
        assert report["compounding_frequency"] == "quarterly"
        assert report["maturity_amount"] == pytest.approx(113763.90, abs=0.5)
        assert report["principal"] == 100000.0
        assert report["total_interest"] == pytest.approx(report["maturity_amount"] - 100000, abs=0.01)
        assert report["effective_yield"] == 6.66
        assert len(report["breakdown"]) == 2

    def test_annually_reported_as_yearly(self) -> None:
        """Frequency aliases are normalized"""
        report = FDCalculator().calculate(
            {"principal": 100000, "annual_rate": 10, "years": 1, "compounding_frequency": "Annually"}
        ).result
        assert report["compounding_frequency"] == "yearly"
        assert report["maturity_amount"] == 110000.0

    def test_unknown_frequency(self) -> None:
        result = FDCalculator().calculate(
            {"principal": 100000, "annual_rate": 6.5, "years": 2, "compounding_frequency": "weekly"}
        )
        assert result.ok is False
        assert result.errors[0].field == "compounding_frequency"

    def test_zero_years_rejected(self) -> None:
        """The investment period must be positive"""
        result = FDCalculator().calculate({"principal": 100000, "annual_rate": 6.5, "years": 0})
        assert result.ok is False
        assert [issue.field for issue in result.errors] == ["years"]


class TestRDCalculator:
    """Tests for RDCalculator"""

    def test_reference(self) -> None:
        """5000 a month at 6.5% for 5 years"""
        report = RDCalculator().calculate({"monthly_deposit": 5000, "annual_rate": 6.5, "years": 5}).result
        assert report["total_deposits"] == 300000.0
        assert report["maturity_amount"] > 300000.0
        assert report["total_interest"] == pytest.approx(report["maturity_amount"] - 300000.0, abs=0.01)
        assert report["growth_percent"] > 0
        assert len(report["breakdown"]) == 5

    def test_deposits_at_period_end(self) -> None:
        """A recurring deposit earns one period less than a SIP"""
        rd = RDCalculator().calculate({"monthly_deposit": 5000, "annual_rate": 12, "years": 10}).result
        sip = SIPCalculator().calculate({"monthly_investment": 5000, "annual_return": 12, "years": 10}).result
        assert sip["maturity_value"] == pytest.approx(rd["maturity_amount"] * 1.01, abs=0.05)


# =============================================================================
# TESTS: provident funds and simple interest
# =============================================================================


class TestPPFCalculator:
    """Tests for PPFCalculator"""

    def test_reference(self) -> None:
        """150000 a year for 15 years at 7.1%"""
        report = PPFCalculator().calculate({"yearly_investment": 150000, "years": 15}).result
        assert report["annual_rate"] == 7.1
        assert report["maturity_amount"] == pytest.approx(4_068_209, rel=1e-4)
        assert report["total_investment"] == 2_250_000.0
        assert report["total_interest"] == pytest.approx(report["maturity_amount"] - 2_250_000.0, abs=0.01)
        assert len(report["breakdown"]) == 15

    def test_first_deposit_earns_full_year(self) -> None:
        """Deposits are made at the start of the year"""
        breakdown = PPFCalculator().calculate({"yearly_investment": 150000, "years": 2}).result["breakdown"]
        assert breakdown[0]["closing_balance"] == pytest.approx(150000 * 1.071)
        assert breakdown[1]["closing_balance"] == pytest.approx((150000 * 1.071 + 150000) * 1.071)

    def test_configured_rate(self) -> None:
        calculator = PPFCalculator(PPFConfig(annual_rate=8.0))
        report = calculator.calculate({"yearly_investment": 1000, "years": 1}).result
        assert report["maturity_amount"] == 1080.0

    def test_missing_years(self) -> None:
        result = PPFCalculator().calculate({"yearly_investment": 150000})
        assert result.ok is False
        assert [issue.field for issue in result.errors] == ["years"]


class TestEPFCalculator:
    """Tests for EPFCalculator"""

    def test_one_year(self) -> None:
        """20000 basic at 12% + 12% pools 57600, credited 8.5% for the year"""
        report = EPFCalculator().calculate({"basic_salary": 20000, "years": 1}).result
        assert report["yearly_contribution"] == 57600.0
        assert report["total_employee_contribution"] == 28800.0
        assert report["total_employer_contribution"] == 28800.0
        assert report["maturity_amount"] == pytest.approx(62496.0, abs=0.01)
        assert report["total_interest"] == pytest.approx(4896.0, abs=0.01)

    def test_unequal_shares(self) -> None:
        """Totals split in proportion to each party's percentage"""
        report = EPFCalculator().calculate(
            {"basic_salary": 15000, "employee_contribution": 12, "employer_contribution": 8, "years": 2}
        ).result
        assert report["total_contribution"] == 72000.0
        assert report["total_employee_contribution"] == pytest.approx(43200.0)
        assert report["total_employer_contribution"] == pytest.approx(28800.0)
        assert report["maturity_amount"] == pytest.approx(
            report["total_contribution"] + report["total_interest"], abs=0.01
        )
        assert len(report["breakdown"]) == 2

    def test_no_contributions(self) -> None:
        """Zero percentages leave nothing to grow"""
        report = EPFCalculator().calculate(
            {"basic_salary": 15000, "employee_contribution": 0, "employer_contribution": 0, "years": 5}
        ).result
        assert report["maturity_amount"] == 0.0
        assert report["total_employee_contribution"] == 0.0
        assert report["total_employer_contribution"] == 0.0

    def test_percentage_above_hundred(self) -> None:
        result = EPFCalculator().calculate({"basic_salary": 15000, "employee_contribution": 120, "years": 5})
        assert result.ok is False
        assert [issue.field for issue in result.errors] == ["employee_contribution"]


class TestSimpleInterestCalculator:
    """Tests for SimpleInterestCalculator"""

    def test_reference(self) -> None:
        """100000 at 8% for 5 years"""
        report = SimpleInterestCalculator().calculate({"principal": 100000, "rate": 8, "years": 5}).result
        assert report == {
            "principal": 100000.0,
            "simple_interest": 40000.0,
            "total_amount": 140000.0,
            "effective_rate": 40.0,
            "monthly_interest": 666.67,
        }

    def test_zero_principal_and_time(self) -> None:
        """Ratios over a zero base report 0"""
        assert SimpleInterestCalculator().calculate({"principal": 0, "rate": 8, "years": 5}).result[
            "effective_rate"
        ] == 0.0
        assert SimpleInterestCalculator().calculate({"principal": 1000, "rate": 8, "years": 0}).result[
            "monthly_interest"
        ] == 0.0

    def test_negative_rate_rejected(self) -> None:
        result = SimpleInterestCalculator().calculate({"principal": 1000, "rate": -1, "years": 2})
        assert result.ok is False
        assert [issue.field for issue in result.errors] == ["rate"]

    def test_lenient_clamps_negative_principal(self) -> None:
        result = SimpleInterestCalculator().calculate(
            {"principal": -500, "rate": 8, "years": 2}, mode=ValidationMode.LENIENT
        )
        assert result.ok is True
        assert result.result["principal"] == 0.0
        assert [adjustment.field for adjustment in result.adjustments] == ["principal"]


# =============================================================================
# TESTS: market investments
# =============================================================================


class TestSIPCalculator:
    """Tests for SIPCalculator"""

    def test_reference(self) -> None:
        """5000 a month at 12% for 10 years"""
        report = SIPCalculator().calculate({"monthly_investment": 5000, "annual_return": 12, "years": 10}).result
        assert report["maturity_value"] == pytest.approx(1_161_695, rel=1e-3)
        assert report["total_invested"] == 600000.0
        assert report["estimated_returns"] == pytest.approx(report["maturity_value"] - 600000.0, abs=0.01)
        assert report["wealth_multiple"] == pytest.approx(1.94, abs=0.01)
        assert report["annualized_return"] > 0

    def test_missing_amount(self) -> None:
        result = SIPCalculator().calculate({"annual_return": 12, "years": 10})
        assert result.ok is False
        assert result.errors[0].field == "monthly_investment"


class TestLumpsumCalculator:
    """Tests for LumpsumCalculator"""

    def test_reference(self) -> None:
        """100000 at 12% for 10 years compounded yearly"""
        report = LumpsumCalculator().calculate({"principal": 100000, "annual_return": 12, "years": 10}).result
        assert report["maturity_value"] == pytest.approx(310584.82, abs=0.01)
        assert report["invested_amount"] == 100000.0
        assert report["absolute_return_percent"] == pytest.approx(210.58, abs=0.01)
        assert report["wealth_multiple"] == pytest.approx(3.11, abs=0.01)
        assert len(report["breakdown"]) == 10


class TestInvestmentCalculator:
    """Tests for InvestmentCalculator"""

    def test_zero_return(self) -> None:
        """Without growth the final value is what was paid in"""
        report = InvestmentCalculator().calculate(
            {"initial_amount": 1000, "monthly_contribution": 100, "annual_return": 0, "years": 1}
        ).result
        assert report["final_value"] == 2200.0
        assert report["total_contributions"] == 2200.0
        assert report["total_growth"] == 0.0
        assert "goal" not in report

    def test_goal_gap(self) -> None:
        """An unreachable goal reports the gap and the contribution needed"""
        report = InvestmentCalculator().calculate(
            {"initial_amount": 1000, "monthly_contribution": 100, "annual_return": 0, "years": 1, "goal": 5000}
        ).result
        goal = report["goal"]
        assert goal["target"] == 5000.0
        assert goal["reached"] is False
        assert goal["gap"] == 2800.0
        assert goal["required_monthly_contribution"] == pytest.approx(333.33, abs=0.01)

    def test_goal_reached(self) -> None:
        report = InvestmentCalculator().calculate(
            {"initial_amount": 10000, "monthly_contribution": 500, "annual_return": 7, "years": 20, "goal": 50000}
        ).result
        assert report["goal"]["reached"] is True
        assert report["goal"]["gap"] == 0.0
        assert report["total_contributions"] == 130000.0

    def test_years_below_minimum(self) -> None:
        result = InvestmentCalculator().calculate({"annual_return": 7, "years": 0.5})
        assert result.ok is False
        assert result.errors[0].field == "years"


# =============================================================================
# TESTS: withdrawals
# =============================================================================


class TestSWPCalculator:
    """Tests for SWPCalculator"""

    def test_defaults_deplete(self) -> None:
        """12% a year withdrawn against 8% growth runs out"""
        result = SWPCalculator().calculate({})
        assert result.ok is True
        assert result.mode is ValidationMode.LENIENT
        report = result.result
        assert report["status"] == "depleted"
        assert report["sustainable"] is False
        assert 100 < report["months"] < 600
        assert report["months"] == report["years"] * 12 + report["remaining_months"]
        assert report["remaining_corpus"] == 0.0
        assert report["withdrawal_rate"] == 12.0

    def test_sustainable_plan_hits_cap(self) -> None:
        """Withdrawals below the return run to the cap"""
        report = SWPCalculator().calculate({"corpus": 1000000, "monthly_withdrawal": 1000, "annual_return": 8}).result
        assert report["status"] == "capped"
        assert report["sustainable"] is True
        assert report["months"] == 600
        assert report["years"] == 50
        assert report["remaining_corpus"] > 1000000

    def test_custom_cap(self) -> None:
        calculator = SWPCalculator(SWPConfig(max_periods=12))
        report = calculator.calculate({"corpus": 1000000, "monthly_withdrawal": 1000}).result
        assert report["months"] == 12
        assert report["status"] == "capped"

    def test_negative_withdrawal_uses_magnitude(self) -> None:
        """Signs are dropped in lenient mode"""
        report = SWPCalculator().calculate({"monthly_withdrawal": "-10000"}).result
        assert report["withdrawal_rate"] == 12.0

    def test_escalation_shortens(self) -> None:
        """Rising withdrawals deplete sooner"""
        flat = SWPCalculator().calculate({"monthly_withdrawal": 8000}).result
        rising = SWPCalculator().calculate({"monthly_withdrawal": 8000, "annual_increase": 10}).result
        assert rising["months"] < flat["months"]
