"""CLI for the loan calculator: prints the payment summary and schedule.

Usage:
    python -m loan_calculator.cli --amount 50000 --rate 5 --years 5 --frequency monthly --scale year
    python -m loan_calculator.cli --scale month --export xlsx --out exports
    python -m loan_calculator.cli --reset

Omitted inputs fall back to the last-used values saved in the local store.
"""

import argparse
import sys
from decimal import Decimal, InvalidOperation

from loan_calculator.config import settings
from loan_calculator.data.export import FORMATS, write_schedule
from loan_calculator.data.store import SQLiteStore, load_inputs, save_inputs
from loan_calculator.engine.payment import compute_payment, total_interest
from loan_calculator.engine.periods import round2, total_periods
from loan_calculator.engine.schedule import generate_schedule, schedule_totals
from loan_calculator.engine.validation import validate
from loan_calculator.log import setup_logging
from loan_calculator.models.loan import DisplayScale, Frequency, LoanTerms, ScheduleEntry


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def print_summary(terms: LoanTerms) -> None:
    pmt = compute_payment(terms.principal, terms.annual_rate_percent, terms.term_years, terms.frequency)
    interest = total_interest(terms.principal, terms.annual_rate_percent, terms.term_years, terms.frequency)
    n = total_periods(terms.term_years, terms.frequency)

    _header("Loan Summary")
    print(f"  Loan Amount:          {_dollar(terms.principal)}")
    print(f"  Interest Rate:        {terms.annual_rate_percent}%")
    print(f"  Term:                 {terms.term_years} years ({n} {terms.frequency.value} payments)")
    print(f"  {terms.frequency.value.capitalize() + ' Payment:':<22}{_dollar(round2(pmt))}")
    print(f"  Total Interest Paid:  {_dollar(round2(interest))}")


def print_schedule(entries: list[ScheduleEntry], scale: DisplayScale) -> None:
    _header(f"Payment Breakdown ({scale.value})")
    print(f"  {'Period':>6}  {'Principal':>14}  {'Interest':>14}")
    for e in entries:
        print(f"  {e.index:>6}  {_dollar(e.principal_portion):>14}  {_dollar(e.interest_portion):>14}")
    totals = schedule_totals(entries)
    print(f"  {'Total':>6}  {_dollar(totals['principal']):>14}  {_dollar(totals['interest']):>14}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan amortization calculator")
    parser.add_argument("--amount", type=_decimal, help="Loan amount in dollars")
    parser.add_argument("--rate", type=_decimal, help="Annual interest rate in percent")
    parser.add_argument("--years", type=int, help="Loan term in years")
    parser.add_argument("--frequency", choices=[f.value for f in Frequency], help="Repayment frequency")
    parser.add_argument("--scale", choices=[s.value for s in DisplayScale], help="Schedule display scale")
    parser.add_argument("--aligned", action="store_true",
                        help="Amortize at the repayment frequency and aggregate to the scale")
    parser.add_argument("--export", choices=FORMATS, help="Write the schedule to a spreadsheet")
    parser.add_argument("--out", default=settings.export_dir, help="Export directory")
    parser.add_argument("--db", default=settings.store_path, help="SQLite store for last-used inputs")
    parser.add_argument("--reset", action="store_true", help="Ignore saved inputs and use defaults")
    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    store = SQLiteStore(args.db)

    if args.reset:
        saved, saved_scale = settings.default_terms, settings.default_scale
    else:
        saved, saved_scale = load_inputs(store)

    terms = LoanTerms(
        principal=args.amount if args.amount is not None else saved.principal,
        annual_rate_percent=args.rate if args.rate is not None else saved.annual_rate_percent,
        term_years=args.years if args.years is not None else saved.term_years,
        frequency=Frequency(args.frequency) if args.frequency else saved.frequency,
    )
    scale = DisplayScale(args.scale) if args.scale else saved_scale

    if not validate(terms.principal, terms.annual_rate_percent, terms.term_years):
        b = settings.loan_bounds
        print("Please ensure all input values are within their valid ranges:", file=sys.stderr)
        print(f"  amount {_dollar(b.min_principal)} - {_dollar(b.max_principal)}, "
              f"rate {b.min_rate_percent}% - {b.max_rate_percent}%, "
              f"term {b.min_term_years} - {b.max_term_years} years", file=sys.stderr)
        return 1

    save_inputs(store, terms, scale)

    entries = generate_schedule(
        terms.principal, terms.annual_rate_percent, terms.term_years,
        terms.frequency, scale, aligned=args.aligned,
    )
    print_summary(terms)
    print_schedule(entries, scale)

    if args.export:
        path = write_schedule(entries, scale, args.out, args.export)
        print(f"  Exported to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
