"""Month-by-month amortization: standard, step-up and prepayment schedules.

Pure functions: Decimal in, dataclass out. No I/O.

Every amount is rounded to cents as it is computed and the rounded balance
feeds the next month's interest. The month that would leave a cent or less
outstanding, and the last month of the tenure, settle the whole remaining
balance so every schedule ends at exactly 0.00.
"""

import logging
from decimal import Decimal

from loan_schedule.engine.breakdown import assemble_result
from loan_schedule.engine.emi import (
    calculate_standard_emi,
    monthly_interest,
    round2,
    to_decimal,
    validate_loan,
)
from loan_schedule.engine.errors import InvalidLoanParameters
from loan_schedule.models.schedule import CalculationResult, MonthlyPayment

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
ONE_CENT = Decimal("0.01")


def _amortize(
    principal: Decimal,
    annual_rate: Decimal,
    max_months: int,
    emi: Decimal,
    annual_increase: Decimal = ZERO,
    prepayment_month: int | None = None,
    prepayment_amount: Decimal = ZERO,
) -> list[MonthlyPayment]:
    """Walk the loan until the balance is cleared or ``max_months`` is reached."""
    balance = round2(principal)
    cumulative_principal = ZERO
    cumulative_interest = ZERO
    schedule: list[MonthlyPayment] = []

    month = 1
    while balance > 0 and month <= max_months:
        # Step-up: +annual_increase at months 13, 25, 37, ...
        payment = round2(emi + annual_increase * ((month - 1) // 12))
        interest = monthly_interest(balance, annual_rate)
        principal_payment = round2(payment - interest)

        if month == max_months or principal_payment >= balance - ONE_CENT:
            principal_payment = balance
            payment = round2(principal_payment + interest)
        elif principal_payment < 0:
            raise InvalidLoanParameters(
                f"EMI {payment} in month {month} does not cover that month's interest of {interest}"
            )

        balance = round2(balance - principal_payment)
        cumulative_principal = round2(cumulative_principal + principal_payment)
        cumulative_interest = round2(cumulative_interest + interest)

        prepaid = ZERO
        if month == prepayment_month and balance > 0:
            prepaid = round2(min(prepayment_amount, balance))
            balance = round2(balance - prepaid)
            cumulative_principal = round2(cumulative_principal + prepaid)
            logger.debug("Prepayment of %s applied in month %d, balance %s", prepaid, month, balance)

        schedule.append(MonthlyPayment(
            month=month,
            emi=payment,
            principal_payment=principal_payment,
            interest_payment=interest,
            remaining_balance=balance,
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
            prepayment=prepaid,
        ))
        month += 1

    if len(schedule) < max_months:
        logger.debug("Loan paid off in %d of %d months", len(schedule), max_months)
    return schedule


def _actual_tenure(months_paid: int) -> Decimal:
    return Decimal(months_paid) / 12


def calculate_repayment_schedule(principal, annual_rate, tenure_years, emi) -> CalculationResult:
    """Amortize a loan at a fixed EMI over ``tenure_years``.

    The final month pays off whatever balance remains, so its EMI may differ
    by a few cents from the others. An EMI larger than needed clears the loan
    early; the reported tenure is then the actual one.
    """
    principal = to_decimal(principal)
    annual_rate = to_decimal(annual_rate)
    tenure_years = to_decimal(tenure_years)
    months = validate_loan(principal, annual_rate, tenure_years)

    emi = to_decimal(emi)
    if not emi.is_finite() or emi < 0:
        raise InvalidLoanParameters(f"EMI cannot be negative, got {emi}")
    emi = round2(emi)
    first_interest = monthly_interest(round2(principal), annual_rate)
    if first_interest > 0 and emi <= first_interest:
        raise InvalidLoanParameters(
            f"EMI {emi} does not cover the first month's interest of {first_interest}"
        )

    schedule = _amortize(principal, annual_rate, months, emi)
    if len(schedule) < months:
        tenure_years = _actual_tenure(len(schedule))
    return assemble_result(principal, annual_rate, tenure_years, emi, schedule)


def calculate_step_up_schedule(principal, annual_rate, tenure_years, annual_increase) -> CalculationResult:
    """Start at the standard EMI and raise it by ``annual_increase`` every 12 months.

    Higher payments pay the loan off early, so the reported tenure is the
    number of months actually paid divided by 12. A negative increase is
    allowed as long as every stepped EMI still covers its month's interest.
    """
    principal = to_decimal(principal)
    annual_rate = to_decimal(annual_rate)
    tenure_years = to_decimal(tenure_years)
    annual_increase = to_decimal(annual_increase)
    if not annual_increase.is_finite():
        raise InvalidLoanParameters(f"Annual increase must be a number, got {annual_increase}")
    months = validate_loan(principal, annual_rate, tenure_years)

    initial_emi = round2(calculate_standard_emi(principal, annual_rate, tenure_years))
    schedule = _amortize(principal, annual_rate, months, initial_emi, annual_increase=annual_increase)
    return assemble_result(principal, annual_rate, _actual_tenure(len(schedule)), initial_emi, schedule)


def calculate_prepayment_schedule(
    principal, annual_rate, tenure_years, prepayment_amount, prepayment_year
) -> CalculationResult:
    """Standard EMI with a one-time lump sum applied at the end of ``prepayment_year``.

    The lump sum is capped at the outstanding balance and is recorded on the
    same month's row. Interest from the next month on runs on the reduced
    balance, so the loan usually finishes early.
    """
    principal = to_decimal(principal)
    annual_rate = to_decimal(annual_rate)
    tenure_years = to_decimal(tenure_years)
    prepayment_amount = to_decimal(prepayment_amount)
    prepayment_year = to_decimal(prepayment_year)
    months = validate_loan(principal, annual_rate, tenure_years)

    if not prepayment_amount.is_finite() or prepayment_amount < 0:
        raise InvalidLoanParameters(f"Prepayment amount cannot be negative, got {prepayment_amount}")
    if (
        not prepayment_year.is_finite()
        or prepayment_year != prepayment_year.to_integral_value()
        or not 1 <= prepayment_year <= tenure_years
    ):
        raise InvalidLoanParameters(
            f"Prepayment year must be a whole year between 1 and {tenure_years}, got {prepayment_year}"
        )

    standard_emi = round2(calculate_standard_emi(principal, annual_rate, tenure_years))
    schedule = _amortize(
        principal,
        annual_rate,
        months,
        standard_emi,
        prepayment_month=int(prepayment_year) * 12,
        prepayment_amount=round2(prepayment_amount),
    )
    return assemble_result(principal, annual_rate, _actual_tenure(len(schedule)), standard_emi, schedule)
