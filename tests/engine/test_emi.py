from decimal import Decimal

import pytest

from loan_schedule.engine.emi import (
    calculate_standard_emi,
    monthly_interest,
    round2,
    to_decimal,
    validate_loan,
)
from loan_schedule.engine.errors import InvalidLoanParameters


class TestStandardEMI:
    def test_two_year_loan(self):
        """1.2M at 9% for 2 years: ~54,821.69/month."""
        emi = calculate_standard_emi(Decimal("1200000"), Decimal("9"), Decimal("2"))
        assert round2(emi) == Decimal("54821.69")

    def test_five_year_loan(self):
        emi = calculate_standard_emi(Decimal("500000"), Decimal("10"), Decimal("5"))
        assert round2(emi) == Decimal("10623.52")

    def test_not_rounded(self):
        emi = calculate_standard_emi(Decimal("1200000"), Decimal("9"), Decimal("2"))
        assert emi != round2(emi)

    def test_zero_rate_is_simple_division(self):
        emi = calculate_standard_emi(Decimal("100000"), Decimal("0"), Decimal("1"))
        assert emi == Decimal("100000") / 12
        assert round2(emi) == Decimal("8333.33")

    def test_accepts_plain_numbers(self):
        emi = calculate_standard_emi(500000, 10, 5)
        assert round2(emi) == Decimal("10623.52")

    def test_fractional_tenure_in_whole_months(self):
        emi = calculate_standard_emi(Decimal("60000"), Decimal("0"), Decimal("2.5"))
        assert emi == Decimal("2000")

    @pytest.mark.parametrize(
        "principal, rate, years",
        [
            (Decimal("0"), Decimal("9"), Decimal("2")),
            (Decimal("-100"), Decimal("9"), Decimal("2")),
            (Decimal("1000"), Decimal("-1"), Decimal("2")),
            (Decimal("1000"), Decimal("9"), Decimal("0")),
            (Decimal("1000"), Decimal("9"), Decimal("-2")),
            (Decimal("1000"), Decimal("9"), Decimal("1.3")),
            (Decimal("NaN"), Decimal("9"), Decimal("2")),
        ],
    )
    def test_invalid_inputs_fail_fast(self, principal, rate, years):
        with pytest.raises(InvalidLoanParameters):
            calculate_standard_emi(principal, rate, years)

    def test_invalid_parameters_are_value_errors(self):
        with pytest.raises(ValueError):
            calculate_standard_emi(Decimal("0"), Decimal("9"), Decimal("2"))


class TestHelpers:
    def test_round_half_up(self):
        assert round2(Decimal("1.005")) == Decimal("1.01")
        assert round2(Decimal("1.0049")) == Decimal("1.00")

    def test_monthly_interest(self):
        # 400000 * 7% / 12 = 2333.333...
        assert monthly_interest(Decimal("400000"), Decimal("7")) == Decimal("2333.33")

    def test_monthly_interest_rounds_ties_up(self):
        # 123.06 * 10 / 1200 = 1.0255 exactly
        assert monthly_interest(Decimal("123.06"), Decimal("10")) == Decimal("1.03")

    def test_to_decimal_avoids_float_noise(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(InvalidLoanParameters):
            to_decimal("abc")

    def test_validate_loan_returns_months(self):
        assert validate_loan(Decimal("1000"), Decimal("5"), Decimal("2.5")) == 30
