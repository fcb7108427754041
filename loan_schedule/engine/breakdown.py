"""Yearly aggregation and result assembly for repayment schedules."""

import math
from decimal import Decimal

from loan_schedule.engine.emi import round2
from loan_schedule.models.schedule import (
    CalculationResult,
    LoanDetails,
    MonthlyPayment,
    YearlyBreakdown,
)


def yearly_breakdown(monthly_schedule: list[MonthlyPayment]) -> list[YearlyBreakdown]:
    """Roll a monthly schedule into 12-month buckets. The last bucket may be partial."""
    years = math.ceil(len(monthly_schedule) / 12)
    breakdown: list[YearlyBreakdown] = []

    for year in range(1, years + 1):
        months = monthly_schedule[(year - 1) * 12:year * 12]
        breakdown.append(YearlyBreakdown(
            year=year,
            total_emi=round2(sum((m.emi for m in months), Decimal("0"))),
            total_principal=round2(sum((m.principal_payment for m in months), Decimal("0"))),
            total_interest=round2(sum((m.interest_payment for m in months), Decimal("0"))),
            remaining_balance=round2(months[-1].remaining_balance) if months else Decimal("0.00"),
            total_prepayment=round2(sum((m.prepayment for m in months), Decimal("0"))),
        ))

    return breakdown


def assemble_result(
    principal: Decimal,
    annual_rate: Decimal,
    tenure_years: Decimal,
    monthly_emi: Decimal,
    monthly_schedule: list[MonthlyPayment],
) -> CalculationResult:
    """Package loan summary, monthly rows and yearly buckets into one result."""
    details = LoanDetails(
        principal=round2(principal),
        annual_rate=round2(annual_rate),
        tenure_years=round2(tenure_years),
        monthly_emi=round2(monthly_emi),
        total_amount=round2(sum((m.emi for m in monthly_schedule), Decimal("0"))),
        total_interest=round2(sum((m.interest_payment for m in monthly_schedule), Decimal("0"))),
        total_prepayment=round2(sum((m.prepayment for m in monthly_schedule), Decimal("0"))),
    )
    return CalculationResult(
        loan_details=details,
        monthly_schedule=monthly_schedule,
        yearly_breakdown=yearly_breakdown(monthly_schedule),
    )
