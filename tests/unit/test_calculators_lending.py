"""
Tests for the lending calculators: loan, emi, mortgage, business_loan

Checks:
1. Reference installments and schedule lengths
2. Strict rejection with field messages, result withheld
3. Prepayments shorten schedules and save interest
4. Mortgage escrow items and PMI flag
5. Business loan types, lender ratios and lenient defaults
"""

from decimal import Decimal

import pytest

from fincalc.calculators.business_loan import BusinessLoanCalculator, BusinessLoanConfig
from fincalc.calculators.emi import EMICalculator
from fincalc.calculators.loan import LoanCalculator
from fincalc.calculators.mortgage import MortgageCalculator, MortgageConfig
from fincalc.core.contracts.validators import ValidationMode

# =============================================================================
# TESTS: loan
# =============================================================================


class TestLoanCalculator:
    """Tests for LoanCalculator"""

    def test_reference(self) -> None:
        """500000 at 12% over 5 years"""
        result = LoanCalculator().calculate({"amount": 500000, "rate": 12, "years": 5})
        assert result.ok is True
        assert result.mode is ValidationMode.STRICT
        report = result.result
        assert report["months"] == 60
        assert report["monthly_payment"] == pytest.approx(11122.22, abs=0.01)
        assert report["loan_type"] == "personal"
        assert report["status"] == "paid_off"
        assert len(report["schedule"]) == 60
        assert report["total_payment"] == pytest.approx(500000 + report["total_interest"], abs=0.02)
        assert "with_extra_payment" not in report

    def test_schedule_rows_are_plain_dicts(self) -> None:
        """Schedule rows are JSON-ready"""
        report = LoanCalculator().calculate({"amount": 12000, "rate": 12, "years": 1}).result
        row = report["schedule"][0]
        assert set(row) == {
            "period",
            "payment",
            "principal_component",
            "interest_component",
            "extra_payment",
            "remaining_balance",
            "cumulative_interest",
        }
        assert row["interest_component"] == pytest.approx(120.0)

    def test_extra_payment(self) -> None:
        """A monthly extra payment shortens the loan"""
        report = LoanCalculator().calculate(
            {"amount": 500000, "rate": 12, "years": 5, "extra_payment": 2000}
        ).result
        accelerated = report["with_extra_payment"]
        assert accelerated["months"] < 60
        assert accelerated["months_saved"] == 60 - accelerated["months"]
        assert accelerated["interest_saved"] > 0
        assert accelerated["status"] == "paid_off"

    @pytest.mark.parametrize(
        "params, field, message",
        [
            ({"amount": 0, "rate": 12, "years": 5}, "amount", "Loan amount must be greater than 0"),
            ({"rate": 12, "years": 5}, "amount", "Loan amount must be greater than 0"),
            ({"amount": 1000, "rate": 0, "years": 5}, "rate", "Interest rate must be greater than 0"),
            ({"amount": 1000, "rate": 12, "years": 0.5}, "years", "Loan term must be at least 1 year"),
            ({"amount": 1000, "rate": 12, "years": 5, "loan_type": "boat"}, "loan_type", None),
        ],
    )
    def test_strict_rejections(self, params: dict, field: str, message: str | None) -> None:
        """Invalid input withholds the result"""
        result = LoanCalculator().calculate(params)
        assert result.ok is False
        assert result.result is None
        errors = {issue.field: issue.message for issue in result.errors}
        assert field in errors
        if message is not None:
            assert errors[field] == message

    @pytest.mark.parametrize(
        "field, value",
        [
            ("amount", float("nan")),
            ("amount", Decimal("NaN")),
            ("rate", float("inf")),
            ("years", float("-inf")),
            ("extra_payment", float("inf")),
        ],
    )
    def test_non_finite_input_rejected(self, field: str, value: object) -> None:
        """NaN and infinities are rejected instead of computing a zero loan"""
        params = {"amount": 500000, "rate": 12, "years": 5, field: value}
        result = LoanCalculator().calculate(params)
        assert result.ok is False
        assert result.result is None
        assert [issue.field for issue in result.errors] == [field]

    def test_form_strings(self) -> None:
        """Numeric strings from a form are accepted"""
        result = LoanCalculator().calculate({"amount": "5,00,000", "rate": "12", "years": "5", "loan_type": "Car"})
        assert result.ok is True
        assert result.result["loan_type"] == "car"


# =============================================================================
# TESTS: emi
# =============================================================================


class TestEMICalculator:
    """Tests for EMICalculator"""

    def test_reference(self) -> None:
        """2.5M at 8.5% over 20 years"""
        report = EMICalculator().calculate(
            {"loan_amount": 2500000, "interest_rate": 8.5, "loan_tenure": 20}
        ).result
        assert report["monthly_emi"] == pytest.approx(21695.6, abs=1.0)
        assert report["total_interest"] == pytest.approx(2_706_942, abs=500)
        assert report["contract_months"] == 240
        assert report["payoff_months"] == 240
        assert report["payoff_years"] == 20
        assert report["payoff_remaining_months"] == 0
        assert report["total_prepayment"] == 0.0
        assert report["schedule"][-1]["remaining_balance"] == 0.0

    def test_tenure_in_months(self) -> None:
        """Month tenures are used as given"""
        report = EMICalculator().calculate(
            {"loan_amount": 100000, "interest_rate": 10, "loan_tenure": 18, "tenure_type": "months"}
        ).result
        assert report["contract_months"] == 18
        assert report["payoff_years"] == 1
        assert report["payoff_remaining_months"] == 6

    def test_zero_rate(self) -> None:
        """Zero interest splits the loan evenly"""
        report = EMICalculator().calculate(
            {"loan_amount": 2400000, "interest_rate": 0, "loan_tenure": 20}
        ).result
        assert report["monthly_emi"] == 10000.0
        assert report["total_interest"] == 0.0

    @pytest.mark.parametrize("frequency", ["monthly", "yearly"])
    def test_prepayment(self, frequency: str) -> None:
        """Prepayments finish the loan early"""
        report = EMICalculator().calculate(
            {
                "loan_amount": 2500000,
                "interest_rate": 8.5,
                "loan_tenure": 20,
                "prepayment_amount": 100000,
                "prepayment_frequency": frequency,
            }
        ).result
        assert report["payoff_months"] < report["contract_months"]
        assert report["total_prepayment"] > 0
        assert report["status"] == "paid_off"


# =============================================================================
# TESTS: mortgage
# =============================================================================


class TestMortgageCalculator:
    """Tests for MortgageCalculator"""

    PARAMS = {
        "home_price": 500000,
        "down_payment": 100000,
        "interest_rate": 7.5,
        "years": 30,
        "property_tax": 6000,
        "insurance": 1500,
    }

    def test_reference(self) -> None:
        """400000 borrowed at 7.5% over 30 years plus escrow"""
        report = MortgageCalculator().calculate(self.PARAMS).result
        assert report["loan_amount"] == 400000.0
        assert report["monthly_principal_interest"] == pytest.approx(2796.86, abs=0.01)
        assert report["monthly_property_tax"] == 500.0
        assert report["monthly_insurance"] == 125.0
        assert report["monthly_pmi"] == 0.0
        assert report["total_monthly_payment"] == pytest.approx(3421.86, abs=0.02)
        assert report["loan_to_value"] == 80.0
        assert report["pmi_recommended"] is False
        assert report["months"] == 360
        assert report["years"] == 30.0

    def test_pmi_flag(self) -> None:
        """Loan-to-value above the threshold recommends PMI"""
        report = MortgageCalculator().calculate({**self.PARAMS, "down_payment": 50000}).result
        assert report["loan_to_value"] == 90.0
        assert report["pmi_recommended"] is True

    def test_custom_threshold(self) -> None:
        """The PMI threshold is configurable"""
        calculator = MortgageCalculator(MortgageConfig(pmi_ltv_threshold=75.0))
        assert calculator.calculate(self.PARAMS).result["pmi_recommended"] is True

    def test_total_cost_includes_escrow(self) -> None:
        """Escrow is paid every month of the loan"""
        report = MortgageCalculator().calculate(self.PARAMS).result
        escrow = (6000 + 1500) / 12 * 360
        assert report["total_cost"] == pytest.approx(400000 + report["total_interest"] + escrow, abs=0.05)

    def test_down_payment_exceeds_price(self) -> None:
        """Down payment must stay below the price"""
        result = MortgageCalculator().calculate({**self.PARAMS, "down_payment": 600000})
        assert result.ok is False
        assert result.errors[0].field == "down_payment"
        assert result.errors[0].message == "Down payment can't exceed home price"

    def test_lenient_repairs_down_payment(self) -> None:
        """Lenient mode lowers the down payment below the price"""
        result = MortgageCalculator().calculate({**self.PARAMS, "down_payment": 600000}, mode="lenient")
        assert result.ok is True
        assert result.result["loan_amount"] == pytest.approx(0.01)
        assert any(adjustment.field == "down_payment" for adjustment in result.adjustments)


# =============================================================================
# TESTS: business loan
# =============================================================================


class TestBusinessLoanCalculator:
    """Tests for BusinessLoanCalculator"""

    def test_lenient_by_default(self) -> None:
        """An empty form runs on defaults"""
        result = BusinessLoanCalculator().calculate({})
        assert result.ok is True
        assert result.mode is ValidationMode.LENIENT
        assert result.adjustments
        report = result.result
        assert report["loan_type"] == "term_loan"
        assert report["months"] == 12
        assert report["monthly_payment"] == pytest.approx(8884.88, abs=0.01)
        assert report["debt_to_income"] == 10.0
        assert report["loan_to_value"] == 0.0
        assert report["dscr"] == pytest.approx(2.81, abs=0.01)
        assert len(report["schedule"]) == 12

    def test_eligibility_for_young_business(self) -> None:
        """A business under two years old is high risk"""
        report = BusinessLoanCalculator().calculate({}).result
        assert report["eligibility_score"] == 80.0
        assert report["risk_level"] == "High"
        assert report["risk_reasons"] == ["Business younger than 2 years"]

    def test_established_business(self) -> None:
        """Strong metrics carry no penalties"""
        report = BusinessLoanCalculator().calculate(
            {"loan_amount": 100000, "credit_score": 800, "business_age": 10, "annual_revenue": 5000000}
        ).result
        assert report["eligibility_score"] == 100.0
        assert report["risk_level"] == "Low"

    def test_working_capital_is_interest_only(self) -> None:
        """Working capital pays interest monthly and principal at the end"""
        report = BusinessLoanCalculator().calculate({"loan_type": "working_capital"}).result
        assert report["monthly_payment"] == 1000.0
        assert report["total_interest"] == 12000.0
        assert report["total_payment"] == 112000.0
        assert report["schedule"][-1]["principal_component"] == 100000.0

    def test_line_of_credit(self) -> None:
        """Interest only on the expected utilization, no schedule"""
        report = BusinessLoanCalculator().calculate({"loan_type": "line_of_credit"}).result
        assert report["monthly_payment"] == 500.0
        assert report["total_interest"] == 6000.0
        assert report["status"] == "interest_only"
        assert report["schedule"] == []

    @pytest.mark.parametrize("loan_type", ["line_of_credit", "working_capital"])
    def test_no_debt_service(self, loan_type: str) -> None:
        """Interest-free facilities have no coverage ratio and no coverage penalty"""
        report = BusinessLoanCalculator().calculate(
            {
                "loan_type": loan_type,
                "interest_rate": 0,
                "credit_score": 800,
                "business_age": 10,
                "annual_revenue": 10000000,
            }
        ).result
        assert report["monthly_payment"] == 0.0
        assert report["dscr"] is None
        assert report["eligibility_score"] == 100.0
        assert report["risk_level"] == "Low"
        assert report["risk_reasons"] == []

    def test_utilization_is_configurable(self) -> None:
        calculator = BusinessLoanCalculator(BusinessLoanConfig(credit_line_utilization=1.0))
        assert calculator.calculate({"loan_type": "line_of_credit"}).result["monthly_payment"] == 1000.0

    def test_costs(self) -> None:
        """Processing fee and tax shield"""
        report = BusinessLoanCalculator().calculate({"processing_fee": 2, "collateral_value": 200000}).result
        assert report["processing_fee"] == 2000.0
        assert report["total_cost"] == pytest.approx(report["total_payment"] + 2000.0, abs=0.01)
        assert report["loan_to_value"] == 50.0
        assert report["annual_tax_saving"] == pytest.approx(report["total_interest"] * 0.3, abs=0.01)
        assert report["effective_rate"] > 0

    def test_negative_amount_uses_magnitude(self) -> None:
        """Signs are dropped from the amount"""
        result = BusinessLoanCalculator().calculate({"loan_amount": -50000})
        assert result.result["total_payment"] > 50000
        assert any(adjustment.reason == "sign dropped" for adjustment in result.adjustments)

    def test_strict_override(self) -> None:
        """Strict mode can be requested per call"""
        result = BusinessLoanCalculator().calculate({"loan_amount": -50000}, mode=ValidationMode.STRICT)
        assert result.ok is False
        assert result.errors[0].field == "loan_amount"
