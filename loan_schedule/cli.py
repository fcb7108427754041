"""CLI for calculating loan repayment schedules.

Usage:
    python -m loan_schedule.cli 1200000 9 2
    python -m loan_schedule.cli 500000 10 5 --strategy prepayment --prepayment-amount 100000 --prepayment-year 2
    python -m loan_schedule.cli 500000 10 5 --strategy stepup --annual-increase 1000 --monthly
    python -m loan_schedule.cli --payload request.json --json
"""

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pydantic import ValidationError

from loan_schedule.api.schemas import RepaymentScheduleRequest, result_to_response
from loan_schedule.config import settings
from loan_schedule.engine.errors import ScheduleError
from loan_schedule.engine.strategy import build_schedule, strategy_display_name
from loan_schedule.models.schedule import CalculationResult

logger = logging.getLogger(__name__)


def _money(v) -> str:
    return f"{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


def print_summary(result: CalculationResult, strategy: str | None = None) -> None:
    d = result.loan_details
    _header(f"Loan Summary{f' ({strategy})' if strategy else ''}")
    print(f"  Principal:        {_money(d.principal)}")
    print(f"  Annual Rate:      {d.annual_rate}%")
    print(f"  Tenure:           {d.tenure_years} years ({result.months} months)")
    print(f"  Monthly EMI:      {_money(d.monthly_emi)}")
    print(f"  Total Paid:       {_money(d.total_amount)}")
    print(f"  Total Interest:   {_money(d.total_interest)}")
    if d.total_prepayment:
        print(f"  Prepayment:       {_money(d.total_prepayment)}")


def print_yearly(result: CalculationResult) -> None:
    _header("Yearly Breakdown")
    print(f"  {'Year':>4}  {'EMI':>14}  {'Principal':>14}  {'Interest':>14}  {'Balance':>14}")
    for y in result.yearly_breakdown:
        print(
            f"  {y.year:>4}  {_money(y.total_emi):>14}  {_money(y.total_principal):>14}"
            f"  {_money(y.total_interest):>14}  {_money(y.remaining_balance):>14}"
        )


def print_monthly(result: CalculationResult) -> None:
    _header("Monthly Schedule")
    print(f"  {'Month':>5}  {'EMI':>12}  {'Principal':>12}  {'Interest':>12}  {'Prepaid':>12}  {'Balance':>14}")
    for m in result.monthly_schedule:
        print(
            f"  {m.month:>5}  {_money(m.emi):>12}  {_money(m.principal_payment):>12}"
            f"  {_money(m.interest_payment):>12}  {_money(m.prepayment):>12}  {_money(m.remaining_balance):>14}"
        )


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value.replace(",", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")


def _request_from_args(args: argparse.Namespace) -> dict:
    """Build a request payload (camelCase, as the HTTP layer sends it)."""
    payload: dict = {
        "principal": str(args.principal),
        "annualRate": str(args.rate),
        "tenureYears": str(args.years),
        "sendEmail": False,
    }
    if args.emi is not None:
        payload["emi"] = str(args.emi)
    if args.strategy:
        payload["strategyType"] = args.strategy
        config: dict = {}
        if args.annual_increase is not None:
            config["stepup"] = {"annualIncrease": str(args.annual_increase)}
        if args.prepayment_amount is not None or args.prepayment_year is not None:
            config["prepayment"] = {"amount": str(args.prepayment_amount or 0), "year": args.prepayment_year}
        if args.new_rate is not None:
            config["secured"] = {"newRate": str(args.new_rate)}
        if config:
            payload["strategyConfig"] = config
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loan-schedule", description="Loan repayment schedule calculator")
    parser.add_argument("principal", nargs="?", type=_decimal_arg, help="Loan amount")
    parser.add_argument("rate", nargs="?", type=_decimal_arg, help="Annual interest rate in percent (e.g. 8.5)")
    parser.add_argument("years", nargs="?", type=_decimal_arg, help="Tenure in years")
    parser.add_argument("--payload", type=Path, help="Read a JSON request payload instead of positional arguments")
    parser.add_argument("--emi", type=_decimal_arg, help="Fixed EMI overriding the standard installment")
    parser.add_argument("--strategy", help="Repayment strategy: stepup, prepayment or secured")
    parser.add_argument("--annual-increase", type=_decimal_arg, help="Step-up: amount added to the EMI every year")
    parser.add_argument("--prepayment-amount", type=_decimal_arg, help="Prepayment: lump sum")
    parser.add_argument("--prepayment-year", type=int, help="Prepayment: year at whose end the lump sum is paid")
    parser.add_argument("--new-rate", type=_decimal_arg, help="Secured: substitute annual rate in percent")
    parser.add_argument("--strict", action="store_true", help="Reject unknown strategies instead of falling back")
    parser.add_argument("--monthly", action="store_true", help="Print the month-by-month schedule")
    parser.add_argument("--json", action="store_true", help="Print the JSON response envelope")
    parser.add_argument("--log-level", default=settings.log_level, help=f"Logging level (default: {settings.log_level})")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s %(message)s")

    if args.payload is not None:
        try:
            payload = json.loads(args.payload.read_text())
        except (OSError, json.JSONDecodeError) as e:
            parser.error(f"cannot read payload {args.payload}: {e}")
    elif None in (args.principal, args.rate, args.years):
        parser.error("principal, rate and years are required (unless using --payload)")
    else:
        payload = _request_from_args(args)

    try:
        req = RepaymentScheduleRequest.model_validate(payload)
    except ValidationError as e:
        parser.error(f"invalid request: {e}")

    strict = args.strict or settings.strict_strategies
    try:
        result = build_schedule(req.to_parameters(), req.strategy_type, req.to_strategy_config(), strict=strict)
    except ScheduleError as e:
        parser.error(str(e))

    strategy = strategy_display_name(req.strategy_type) if req.strategy_type else None
    logger.info(
        "Calculated %d-month schedule, EMI %s, total interest %s",
        result.months,
        result.loan_details.monthly_emi,
        result.loan_details.total_interest,
    )

    if args.json:
        response = result_to_response(result, req.resolve_request_id(), strategy=strategy)
        print(response.model_dump_json(by_alias=True, indent=2))
        return 0

    print_summary(result, strategy)
    print_yearly(result)
    if args.monthly:
        print_monthly(result)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
