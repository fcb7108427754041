"""Pydantic schemas for the repayment schedule JSON contract.

Field names are snake_case in Python and camelCase on the wire, matching the
payloads exchanged with the HTTP layer.
"""

import hashlib
import json
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from loan_schedule.config import settings
from loan_schedule.models.schedule import (
    CalculationResult,
    LoanParameters,
    PrepaymentConfig,
    SecuredConfig,
    StepUpConfig,
    StrategyConfig,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- Request schemas ----

class StepUpRequest(CamelModel):
    annual_increase: Decimal = Field(Decimal("0"), ge=0)


class PrepaymentRequest(CamelModel):
    amount: Decimal = Field(..., ge=0)
    year: int = Field(..., ge=1)


class SecuredRequest(CamelModel):
    new_rate: Decimal | None = Field(None, ge=0)


class StrategyConfigRequest(CamelModel):
    stepup: StepUpRequest | None = None
    prepayment: PrepaymentRequest | None = None
    secured: SecuredRequest | None = None


class RepaymentScheduleRequest(CamelModel):
    principal: Decimal = Field(..., gt=0, description="Loan amount")
    annual_rate: Decimal = Field(..., ge=0, description="Annual interest rate in percent")
    tenure_years: Decimal = Field(..., gt=0)
    emi: Decimal | None = Field(None, gt=0, description="Fixed installment overriding the standard EMI")

    strategy_type: str | None = None
    strategy_config: StrategyConfigRequest | None = None

    # Customer and delivery details (used by the delivery layer, not the engine)
    name: str | None = None
    email: EmailStr | None = None
    mobile_number: str | None = None
    address: str | None = None
    from_name: str = Field(default_factory=lambda: settings.default_from_name)
    subject: str = Field(default_factory=lambda: settings.default_subject)
    message: str = Field(default_factory=lambda: settings.default_message)
    send_email: bool = True
    request_id: str | None = None

    def to_parameters(self) -> LoanParameters:
        return LoanParameters(
            principal=self.principal,
            annual_rate=self.annual_rate,
            tenure_years=self.tenure_years,
            emi=self.emi,
        )

    def to_strategy_config(self) -> StrategyConfig | None:
        cfg = self.strategy_config
        if cfg is None:
            return None
        return StrategyConfig(
            stepup=StepUpConfig(annual_increase=cfg.stepup.annual_increase) if cfg.stepup else None,
            prepayment=(
                PrepaymentConfig(amount=cfg.prepayment.amount, year=cfg.prepayment.year)
                if cfg.prepayment else None
            ),
            secured=SecuredConfig(new_rate=cfg.secured.new_rate) if cfg.secured else None,
        )

    def resolve_request_id(self) -> str:
        """Caller-supplied request id, or one derived from the payload."""
        if self.request_id:
            return self.request_id
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"request_id"})
        return request_id_from_payload(payload)


# ---- Response schemas ----

class MonthlyPaymentResponse(CamelModel):
    month: int
    emi: Decimal
    principal_payment: Decimal
    interest_payment: Decimal
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal
    prepayment: Decimal = Decimal("0")


class YearlyBreakdownResponse(CamelModel):
    year: int
    total_emi: Decimal = Field(..., alias="totalEMI")
    total_principal: Decimal
    total_interest: Decimal
    remaining_balance: Decimal
    total_prepayment: Decimal = Decimal("0")


class LoanDetailsResponse(CamelModel):
    principal: Decimal
    annual_rate: Decimal
    tenure_years: Decimal
    monthly_emi: Decimal = Field(..., alias="monthlyEMI")
    total_amount: Decimal
    total_interest: Decimal
    total_prepayment: Decimal = Decimal("0")


class RepaymentScheduleResponse(CamelModel):
    status: Literal["sent", "not-sent"] = "not-sent"
    loan_details: LoanDetailsResponse
    monthly_schedule: list[MonthlyPaymentResponse]
    yearly_breakdown: list[YearlyBreakdownResponse]
    strategy: str | None = None
    request_id: str


def request_id_from_payload(payload: dict[str, Any]) -> str:
    """Deterministic idempotency key: SHA-256 of the canonical JSON payload."""
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(raw.encode()).hexdigest()


def result_to_response(
    result: CalculationResult,
    request_id: str,
    strategy: str | None = None,
) -> RepaymentScheduleResponse:
    """Convert an engine CalculationResult to the response envelope."""
    d = result.loan_details
    return RepaymentScheduleResponse(
        loan_details=LoanDetailsResponse(
            principal=d.principal,
            annual_rate=d.annual_rate,
            tenure_years=d.tenure_years,
            monthly_emi=d.monthly_emi,
            total_amount=d.total_amount,
            total_interest=d.total_interest,
            total_prepayment=d.total_prepayment,
        ),
        monthly_schedule=[
            MonthlyPaymentResponse(
                month=m.month,
                emi=m.emi,
                principal_payment=m.principal_payment,
                interest_payment=m.interest_payment,
                remaining_balance=m.remaining_balance,
                cumulative_principal=m.cumulative_principal,
                cumulative_interest=m.cumulative_interest,
                prepayment=m.prepayment,
            )
            for m in result.monthly_schedule
        ],
        yearly_breakdown=[
            YearlyBreakdownResponse(
                year=y.year,
                total_emi=y.total_emi,
                total_principal=y.total_principal,
                total_interest=y.total_interest,
                remaining_balance=y.remaining_balance,
                total_prepayment=y.total_prepayment,
            )
            for y in result.yearly_breakdown
        ],
        strategy=strategy,
        request_id=request_id,
    )
