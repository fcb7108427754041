"""Repayment strategy selection.

Routes a loan to the standard, step-up, prepayment or secured-rate schedule.
"""

import logging
from decimal import Decimal

from loan_schedule.engine.amortization import (
    calculate_prepayment_schedule,
    calculate_repayment_schedule,
    calculate_step_up_schedule,
)
from loan_schedule.engine.emi import calculate_standard_emi, to_decimal
from loan_schedule.engine.errors import InvalidLoanParameters, UnsupportedStrategy
from loan_schedule.models.schedule import (
    CalculationResult,
    LoanParameters,
    StrategyConfig,
    StrategyType,
)

logger = logging.getLogger(__name__)

STRATEGY_DISPLAY_NAMES = {
    StrategyType.STEPUP: "Step-up EMI Strategy",
    StrategyType.PREPAYMENT: "Prepayment Strategy",
    StrategyType.SECURED: "Secured Loan Option",
}


def parse_strategy_type(strategy_type: StrategyType | str | None) -> StrategyType | None:
    """Normalise a strategy name. Returns None for unknown names."""
    if strategy_type is None or isinstance(strategy_type, StrategyType):
        return strategy_type
    try:
        return StrategyType(str(strategy_type).strip().lower())
    except ValueError:
        return None


def strategy_display_name(strategy_type: StrategyType | str | None) -> str:
    return STRATEGY_DISPLAY_NAMES.get(parse_strategy_type(strategy_type), "Optimization Strategy")


def _standard_schedule(principal, annual_rate, tenure_years) -> CalculationResult:
    emi = calculate_standard_emi(principal, annual_rate, tenure_years)
    return calculate_repayment_schedule(principal, annual_rate, tenure_years, emi)


def calculate_repayment_schedule_with_strategy(
    principal,
    annual_rate,
    tenure_years,
    strategy_type: StrategyType | str | None = None,
    strategy_config: StrategyConfig | None = None,
    strict: bool = False,
) -> CalculationResult:
    """Calculate a schedule under the requested repayment strategy.

    Missing strategy configs fall back to sensible defaults: no step-up
    increase, the loan's own rate for ``secured``, and the standard schedule
    when a prepayment has no amount/year.

    An unknown ``strategy_type`` is logged and calculated as a standard loan.
    Pass ``strict=True`` to raise UnsupportedStrategy instead.
    """
    config = strategy_config or StrategyConfig()

    if strategy_type is None:
        return _standard_schedule(principal, annual_rate, tenure_years)

    strategy = parse_strategy_type(strategy_type)
    if strategy is None:
        if strict:
            raise UnsupportedStrategy(str(strategy_type))
        logger.warning("Unknown strategy %r, using standard calculation", strategy_type)
        return _standard_schedule(principal, annual_rate, tenure_years)

    logger.debug("Calculating schedule with %s", strategy.value)

    if strategy is StrategyType.STEPUP:
        annual_increase = config.stepup.annual_increase if config.stepup else Decimal("0")
        return calculate_step_up_schedule(principal, annual_rate, tenure_years, annual_increase)

    if strategy is StrategyType.PREPAYMENT:
        if config.prepayment is None:
            logger.debug("Prepayment strategy without prepayment config, using standard calculation")
            return _standard_schedule(principal, annual_rate, tenure_years)
        return calculate_prepayment_schedule(
            principal,
            annual_rate,
            tenure_years,
            config.prepayment.amount,
            config.prepayment.year,
        )

    # StrategyType.SECURED
    new_rate = annual_rate
    if config.secured and config.secured.new_rate is not None:
        new_rate = to_decimal(config.secured.new_rate)
        if not new_rate.is_finite() or new_rate < 0:
            raise InvalidLoanParameters(f"Secured rate cannot be negative, got {new_rate}")
    return _standard_schedule(principal, new_rate, tenure_years)


def build_schedule(
    params: LoanParameters,
    strategy_type: StrategyType | str | None = None,
    strategy_config: StrategyConfig | None = None,
    strict: bool = False,
) -> CalculationResult:
    """Pick the calculation a caller asked for.

    A strategy with its config wins over an EMI override; a strategy type
    without a config is ignored. Without either the standard EMI is computed.
    """
    if strategy_type and strategy_config:
        return calculate_repayment_schedule_with_strategy(
            params.principal,
            params.annual_rate,
            params.tenure_years,
            strategy_type,
            strategy_config,
            strict=strict,
        )
    if params.emi is not None:
        logger.debug("Using caller EMI %s", params.emi)
        return calculate_repayment_schedule(
            params.principal, params.annual_rate, params.tenure_years, params.emi
        )
    return _standard_schedule(params.principal, params.annual_rate, params.tenure_years)
