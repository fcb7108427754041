"""Schedule engine exceptions."""


class ScheduleError(ValueError):
    """Base exception for the repayment schedule engine"""


class InvalidLoanParameters(ScheduleError):
    """Loan or strategy inputs cannot produce a schedule"""


class UnsupportedStrategy(ScheduleError):
    """Strategy type is not one the engine knows how to calculate"""

    def __init__(self, strategy_type: str):
        super().__init__(f"Unsupported repayment strategy: {strategy_type!r}")
        self.strategy_type = strategy_type
