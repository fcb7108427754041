"""Repayment schedule data types: loan inputs, strategy configs and results."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class StrategyType(Enum):
    STEPUP = "stepup"
    PREPAYMENT = "prepayment"
    SECURED = "secured"


@dataclass(frozen=True)
class LoanParameters:
    principal: Decimal
    annual_rate: Decimal  # Percent, e.g. Decimal("8.5")
    tenure_years: Decimal
    emi: Optional[Decimal] = None  # Fixed installment overriding the standard EMI


@dataclass(frozen=True)
class StepUpConfig:
    annual_increase: Decimal = Decimal("0")  # Added to the EMI every 12 months


@dataclass(frozen=True)
class PrepaymentConfig:
    amount: Decimal
    year: int  # Applied at month year * 12


@dataclass(frozen=True)
class SecuredConfig:
    new_rate: Optional[Decimal] = None  # Percent; falls back to the loan's own rate


@dataclass(frozen=True)
class StrategyConfig:
    stepup: Optional[StepUpConfig] = None
    prepayment: Optional[PrepaymentConfig] = None
    secured: Optional[SecuredConfig] = None


@dataclass(frozen=True)
class MonthlyPayment:
    month: int
    emi: Decimal
    principal_payment: Decimal
    interest_payment: Decimal
    remaining_balance: Decimal  # After this month's payment and any prepayment
    cumulative_principal: Decimal  # Includes prepayments
    cumulative_interest: Decimal
    prepayment: Decimal = Decimal("0")


@dataclass(frozen=True)
class YearlyBreakdown:
    year: int
    total_emi: Decimal
    total_principal: Decimal
    total_interest: Decimal
    remaining_balance: Decimal
    total_prepayment: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanDetails:
    principal: Decimal
    annual_rate: Decimal
    tenure_years: Decimal  # Actual tenure; shorter than requested on early payoff
    monthly_emi: Decimal  # Initial EMI
    total_amount: Decimal  # Sum of all EMIs paid
    total_interest: Decimal
    total_prepayment: Decimal = Decimal("0")


@dataclass
class CalculationResult:
    loan_details: LoanDetails
    monthly_schedule: list[MonthlyPayment] = field(default_factory=list)
    yearly_breakdown: list[YearlyBreakdown] = field(default_factory=list)

    @property
    def months(self) -> int:
        return len(self.monthly_schedule)

    @property
    def final_balance(self) -> Decimal:
        if not self.monthly_schedule:
            return Decimal("0")
        return self.monthly_schedule[-1].remaining_balance
