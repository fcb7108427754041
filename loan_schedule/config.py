from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOAN_SCHEDULE_", "extra": "ignore"}

    # App
    log_level: str = "INFO"

    # Unknown strategy types fall back to the standard schedule unless strict
    strict_strategies: bool = False

    # Request defaults for schedules delivered to the customer
    default_from_name: str = "Edumate"
    default_subject: str = "Your Loan Repayment Schedule"
    default_message: str = "Please find attached your detailed loan repayment schedule."


settings = Settings()
