"""Tests for repayment strategy selection."""

import logging
from decimal import Decimal

import pytest

from loan_schedule.engine.errors import InvalidLoanParameters, UnsupportedStrategy
from loan_schedule.engine.strategy import (
    build_schedule,
    calculate_repayment_schedule_with_strategy,
    parse_strategy_type,
    strategy_display_name,
)
from loan_schedule.models.schedule import (
    LoanParameters,
    PrepaymentConfig,
    SecuredConfig,
    StepUpConfig,
    StrategyConfig,
    StrategyType,
)


def _run(loan, strategy_type=None, config=None, **kwargs):
    return calculate_repayment_schedule_with_strategy(
        loan.principal, loan.annual_rate, loan.tenure_years, strategy_type, config, **kwargs
    )


class TestDispatcher:
    def test_no_strategy_is_standard(self, five_year_loan):
        result = _run(five_year_loan)
        assert result.months == 60
        assert result.loan_details.monthly_emi == Decimal("10623.52")
        assert result.loan_details.total_interest == Decimal("137411.38")

    def test_stepup(self, five_year_loan):
        config = StrategyConfig(stepup=StepUpConfig(annual_increase=Decimal("1000")))
        result = _run(five_year_loan, "stepup", config)
        assert result.months == 51
        assert result.monthly_schedule[12].emi >= result.monthly_schedule[0].emi

    def test_stepup_without_config_has_no_increase(self, five_year_loan, five_year_result):
        result = _run(five_year_loan, StrategyType.STEPUP)
        assert result.monthly_schedule == five_year_result.monthly_schedule

    def test_prepayment(self, five_year_loan):
        config = StrategyConfig(prepayment=PrepaymentConfig(amount=Decimal("100000"), year=2))
        result = _run(five_year_loan, "prepayment", config)
        assert result.months == 48
        assert result.monthly_schedule[23].remaining_balance == Decimal("229236.15")

    def test_prepayment_without_config_is_standard(self, five_year_loan, five_year_result):
        result = _run(five_year_loan, "prepayment", StrategyConfig())
        assert result.monthly_schedule == five_year_result.monthly_schedule

    def test_secured_uses_new_rate(self, five_year_loan, five_year_result):
        config = StrategyConfig(secured=SecuredConfig(new_rate=Decimal("9")))
        result = _run(five_year_loan, "secured", config)
        assert result.loan_details.annual_rate == Decimal("9.00")
        assert result.loan_details.monthly_emi == Decimal("10379.18")
        assert result.months == 60
        assert result.loan_details.total_interest < five_year_result.loan_details.total_interest

    def test_secured_without_rate_keeps_loan_rate(self, five_year_loan, five_year_result):
        result = _run(five_year_loan, "secured", StrategyConfig(secured=SecuredConfig()))
        assert result.loan_details == five_year_result.loan_details

    def test_secured_negative_rate(self, five_year_loan):
        config = StrategyConfig(secured=SecuredConfig(new_rate=Decimal("-1")))
        with pytest.raises(InvalidLoanParameters):
            _run(five_year_loan, "secured", config)

    def test_strategy_name_case_insensitive(self, five_year_loan):
        config = StrategyConfig(stepup=StepUpConfig(annual_increase=Decimal("1000")))
        assert _run(five_year_loan, " StepUp ", config).months == 51

    def test_unknown_strategy_falls_back(self, five_year_loan, five_year_result, caplog):
        with caplog.at_level(logging.WARNING, logger="loan_schedule.engine.strategy"):
            result = _run(five_year_loan, "balloon")
        assert result.monthly_schedule == five_year_result.monthly_schedule
        assert "balloon" in caplog.text

    def test_unknown_strategy_strict(self, five_year_loan):
        with pytest.raises(UnsupportedStrategy) as exc:
            _run(five_year_loan, "balloon", strict=True)
        assert exc.value.strategy_type == "balloon"

    def test_invalid_loan_propagates(self):
        with pytest.raises(InvalidLoanParameters):
            calculate_repayment_schedule_with_strategy(Decimal("0"), Decimal("9"), Decimal("2"), "stepup")


class TestBuildSchedule:
    def test_standard(self, standard_loan, standard_result):
        assert build_schedule(standard_loan).loan_details == standard_result.loan_details

    def test_caller_emi(self):
        params = LoanParameters(
            principal=Decimal("100000"), annual_rate=Decimal("12"), tenure_years=Decimal("1"), emi=Decimal("50000")
        )
        result = build_schedule(params)
        assert result.months == 3
        assert result.loan_details.monthly_emi == Decimal("50000.00")

    def test_strategy_wins_over_emi(self, five_year_loan):
        params = LoanParameters(
            principal=five_year_loan.principal,
            annual_rate=five_year_loan.annual_rate,
            tenure_years=five_year_loan.tenure_years,
            emi=Decimal("50000"),
        )
        config = StrategyConfig(stepup=StepUpConfig(annual_increase=Decimal("1000")))
        result = build_schedule(params, "stepup", config)
        assert result.loan_details.monthly_emi == Decimal("10623.52")
        assert result.months == 51

    def test_strategy_without_config_keeps_caller_emi(self):
        params = LoanParameters(
            principal=Decimal("100000"), annual_rate=Decimal("12"), tenure_years=Decimal("1"), emi=Decimal("50000")
        )
        result = build_schedule(params, "stepup", None)
        assert result.months == 3
        assert result.loan_details.monthly_emi == Decimal("50000.00")

    def test_strategy_without_config_or_emi_is_standard(self, five_year_loan, five_year_result):
        result = build_schedule(five_year_loan, "prepayment", None)
        assert result.monthly_schedule == five_year_result.monthly_schedule


class TestStrategyNames:
    @pytest.mark.parametrize(
        "strategy, expected",
        [
            ("stepup", "Step-up EMI Strategy"),
            (StrategyType.PREPAYMENT, "Prepayment Strategy"),
            ("SECURED", "Secured Loan Option"),
            ("balloon", "Optimization Strategy"),
        ],
    )
    def test_display_name(self, strategy, expected):
        assert strategy_display_name(strategy) == expected

    def test_parse_unknown(self):
        assert parse_strategy_type("balloon") is None
        assert parse_strategy_type(None) is None
