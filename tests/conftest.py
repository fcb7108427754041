"""Canonical loans used across engine tests.

Fixture: 1.2M at 9% over 2 years (standard), 500K at 10% over 5 years
(step-up and prepayment scenarios), 100K at 0% over 1 year.
"""

import pytest
from decimal import Decimal

from loan_schedule.engine.strategy import calculate_repayment_schedule_with_strategy
from loan_schedule.models.schedule import LoanParameters


@pytest.fixture
def standard_loan() -> LoanParameters:
    return LoanParameters(
        principal=Decimal("1200000"),
        annual_rate=Decimal("9"),
        tenure_years=Decimal("2"),
    )


@pytest.fixture
def five_year_loan() -> LoanParameters:
    return LoanParameters(
        principal=Decimal("500000"),
        annual_rate=Decimal("10"),
        tenure_years=Decimal("5"),
    )


@pytest.fixture
def zero_rate_loan() -> LoanParameters:
    return LoanParameters(
        principal=Decimal("100000"),
        annual_rate=Decimal("0"),
        tenure_years=Decimal("1"),
    )


@pytest.fixture
def standard_result(standard_loan):
    return calculate_repayment_schedule_with_strategy(
        standard_loan.principal, standard_loan.annual_rate, standard_loan.tenure_years
    )


@pytest.fixture
def five_year_result(five_year_loan):
    return calculate_repayment_schedule_with_strategy(
        five_year_loan.principal, five_year_loan.annual_rate, five_year_loan.tenure_years
    )
