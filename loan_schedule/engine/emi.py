"""Equated monthly installment (EMI) calculation.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from loan_schedule.engine.errors import InvalidLoanParameters

TWO_PLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Coerce int/float/str input to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except ArithmeticError as e:
        raise InvalidLoanParameters(f"Not a number: {value!r}") from e


def round2(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def validate_loan(principal: Decimal, annual_rate: Decimal, tenure_years: Decimal) -> int:
    """Check loan preconditions and return the tenure in whole months."""
    if not principal.is_finite() or principal <= 0:
        raise InvalidLoanParameters(f"Principal must be positive, got {principal}")
    if not annual_rate.is_finite() or annual_rate < 0:
        raise InvalidLoanParameters(f"Annual rate cannot be negative, got {annual_rate}")
    if not tenure_years.is_finite() or tenure_years <= 0:
        raise InvalidLoanParameters(f"Tenure must be positive, got {tenure_years} years")

    months = tenure_years * 12
    if months != months.to_integral_value():
        raise InvalidLoanParameters(
            f"Tenure of {tenure_years} years is not a whole number of months"
        )
    return int(months)


def monthly_interest(balance: Decimal, annual_rate: Decimal) -> Decimal:
    """One month of interest on ``balance``, rounded to cents.

    Divides last so that half-cent ties round the same way every time.
    """
    return round2(balance * annual_rate / Decimal("1200"))


def calculate_standard_emi(principal, annual_rate, tenure_years) -> Decimal:
    """Standard annuity installment. Not rounded; callers round as needed.

    EMI = P * r * (1 + r)^n / ((1 + r)^n - 1), r = annual_rate / 12 / 100.
    A zero-rate loan is repaid in equal parts: P / n.
    """
    principal = to_decimal(principal)
    annual_rate = to_decimal(annual_rate)
    tenure_years = to_decimal(tenure_years)
    months = validate_loan(principal, annual_rate, tenure_years)

    r = annual_rate / 12 / 100
    if r == 0:
        return principal / months

    factor = (1 + r) ** months
    return principal * r * factor / (factor - 1)
