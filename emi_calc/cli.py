"""CLI for the EMI calculator.

Usage:
    python -m emi_calc.cli 100000 7.5 --years 5
    python -m emi_calc.cli 100000 7.5 --months 60 --currency EUR
    python -m emi_calc.cli 250000 6.25 --years 30 --summary-only --yearly
    python -m emi_calc.cli 90000 7.5 --years 5 --principal-currency EUR
"""

import argparse
import asyncio
import logging
import sys

from emi_calc.config import settings
from emi_calc.data.rates import RateSession
from emi_calc.engine.amortization import (
    calculate_loan,
    summarize_schedule,
    to_decimal,
    yearly_summary,
)
from emi_calc.engine.currency import convert_and_format, rate_available, to_base
from emi_calc.models.loan import LoanCalculation, LoanTerms


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


def print_summary(calc: LoanCalculation, fmt) -> None:
    summary = summarize_schedule(calc.schedule, calc.installment)
    _header("Loan Summary")
    print(f"  Monthly EMI:      {fmt(calc.installment)}")
    print(f"  Total interest:   {fmt(summary.total_interest)}")
    print(f"  Total paid:       {fmt(summary.total_paid)}")
    print(f"  Payments:         {summary.periods}")


def print_schedule(calc: LoanCalculation, fmt) -> None:
    _header("Amortization Schedule")
    print(f"  {'Month':>5}  {'Principal':>16}  {'Interest':>16}  {'Payment':>16}  {'Balance':>16}")
    for e in calc.schedule:
        print(
            f"  {e.period:>5}  {fmt(e.principal_portion):>16}  {fmt(e.interest_portion):>16}"
            f"  {fmt(e.total_payment):>16}  {fmt(e.remaining_balance):>16}"
        )


def print_yearly(calc: LoanCalculation, fmt) -> None:
    _header("Yearly Summary")
    print(f"  {'Year':>5}  {'Principal':>16}  {'Interest':>16}  {'Paid':>16}  {'Balance':>16}")
    for y in yearly_summary(calc.schedule):
        print(
            f"  {int(y['year']):>5}  {fmt(y['principal']):>16}  {fmt(y['interest']):>16}"
            f"  {fmt(y['payment']):>16}  {fmt(y['ending_balance']):>16}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan EMI and amortization schedule")
    parser.add_argument("principal", help="Loan amount, in --principal-currency")
    parser.add_argument("rate", help="Annual interest rate in percent, e.g. 7.5")
    duration = parser.add_mutually_exclusive_group(required=True)
    duration.add_argument("--months", type=int, help="Loan tenure in months")
    duration.add_argument("--years", type=int, help="Loan tenure in years")
    parser.add_argument(
        "--currency", default=settings.base_currency, help="Display currency code (default: base)"
    )
    parser.add_argument(
        "--principal-currency",
        default=settings.base_currency,
        help="Currency the principal is given in (default: base)",
    )
    parser.add_argument("--summary-only", action="store_true", help="Skip the monthly schedule")
    parser.add_argument("--yearly", action="store_true", help="Show per-year totals")
    return parser


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    currency = args.currency.upper()
    principal_currency = args.principal_currency.upper()
    base = settings.base_currency

    rates = None
    if currency != base or principal_currency != base:
        session = RateSession(base_currency=base)
        rates = await session.get_rates()
        if session.error:
            print(f"Warning: {session.error}", file=sys.stderr)
    table = rates if rates is not None else {}

    principal = to_decimal(args.principal)
    if principal is not None and principal_currency != base:
        principal = to_base(principal, principal_currency, table, base)
        if principal is None:
            print(f"Rate for {principal_currency} unavailable.", file=sys.stderr)
            return 1

    rate = to_decimal(args.rate)
    if args.months is not None:
        terms = LoanTerms(principal, rate, args.months)
    else:
        terms = LoanTerms.from_years(principal, rate, args.years)

    calc = calculate_loan(terms)
    if not calc.is_valid:
        print("Could not calculate EMI. Please check your inputs.", file=sys.stderr)
        return 1

    if not rate_available(currency, table, base):
        print(f"Rate for {currency} unavailable. Displaying in {base}.", file=sys.stderr)
        currency = base

    def fmt(amount) -> str:
        return convert_and_format(amount, currency, table, base)

    print_summary(calc, fmt)
    if args.yearly:
        print_yearly(calc, fmt)
    if not args.summary_only:
        print_schedule(calc, fmt)
    print()
    return 0


def run() -> None:
    logging.basicConfig(level=settings.log_level)
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
