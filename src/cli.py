"""CLI for running a credit simulation locally.

Usage:
    python -m src.cli --amount 100000 --rate 0.08 --years 1
    python -m src.cli --amount 304000 --rate 0.0825 --years 20 --insurance 0.0054 --yearly
    python -m src.cli --amount 200000 --rate 0.09 --rate-type nominal --capitalization quarterly \
        --years 15 --grace partial --grace-months 6
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from src.config import settings
from src.engine.credit import calculate_credit_schedule
from src.engine.errors import CreditEngineError
from src.engine.schedule import yearly_summary
from src.models.loan import Capitalization, GracePeriodType, InterestRateType, LoanParameters


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a decimal number: {value!r}")


def _pct(v) -> str:
    return f"{float(v) * 100:.4f}%"


def _amount(v) -> str:
    return f"{float(v):,.2f}"


def print_summary(params: LoanParameters, result) -> None:
    print(f"\n{'=' * 64}")
    print(f"  Credit Simulation: {params.currency} {_amount(params.loan_amount)}")
    print(f"{'=' * 64}")
    print(f"  Term:             {params.loan_term_years} years ({params.total_periods} months)")
    print(f"  Grace:            {params.grace_period_type.value} ({params.effective_grace_months} months)")
    print(f"  Installment:      {_amount(result.fixed_installment)}")
    print(f"  Monthly rate:     {_pct(result.monthly_rate)}")
    print(f"  TEA:              {_pct(result.tea)}")
    print(f"  TCEA:             {_pct(result.tcea)}")
    print(f"  VAN:              {_amount(result.van)}")
    tir_note = "" if result.tir_converged else "  (did not converge)"
    print(f"  TIR (monthly):    {_pct(result.tir)}{tir_note}")
    print(f"  Total paid:       {_amount(result.total_paid)}")
    print()


def print_schedule(result) -> None:
    print(f"  {'#':>4}  {'Date':<10}  {'Balance':>14}  {'Principal':>12}  {'Interest':>12}"
          f"  {'Insurance':>10}  {'Payment':>12}")
    for p in result.payment_schedule:
        flag = " G" if p.is_grace_period else ""
        print(f"  {p.period_number:>4}  {p.payment_date.isoformat():<10}  {_amount(p.beginning_balance):>14}"
              f"  {_amount(p.principal_payment):>12}  {_amount(p.interest_payment):>12}"
              f"  {_amount(p.insurance_payment):>10}  {_amount(p.total_payment):>12}{flag}")
    print()


def print_yearly(result) -> None:
    print(f"  {'Year':>4}  {'Principal':>14}  {'Interest':>14}  {'Insurance':>12}"
          f"  {'Paid':>14}  {'Balance':>14}")
    for y in yearly_summary(result.payment_schedule):
        print(f"  {int(y['year']):>4}  {_amount(y['principal']):>14}  {_amount(y['interest']):>14}"
              f"  {_amount(y['insurance']):>12}  {_amount(y['total_payment']):>14}"
              f"  {_amount(y['ending_balance']):>14}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mortgage credit simulator (French method)")
    parser.add_argument("--amount", type=_decimal, required=True, help="Loan amount")
    parser.add_argument("--rate", type=_decimal, required=True, help="Annual interest rate, e.g. 0.08")
    parser.add_argument("--rate-type", choices=[t.value for t in InterestRateType], default="effective",
                        help="Rate convention (default: effective)")
    parser.add_argument("--capitalization", choices=[c.value for c in Capitalization],
                        help="Capitalization for nominal rates")
    parser.add_argument("--years", type=int, required=True, help="Loan term in years")
    parser.add_argument("--grace", choices=[g.value for g in GracePeriodType], default="none",
                        help="Grace period type (default: none)")
    parser.add_argument("--grace-months", type=int, default=0, help="Grace period length in months")
    parser.add_argument("--insurance", type=_decimal, default=Decimal("0"), help="Annual insurance rate")
    parser.add_argument("--start", type=date.fromisoformat, help="Start date, YYYY-MM-DD (default: today)")
    parser.add_argument("--currency", default=settings.default_currency, help="Currency label")
    parser.add_argument("--yearly", action="store_true", help="Show the yearly roll-up instead of every month")
    parser.add_argument("--strict", action="store_true", help="Fail if the IRR does not converge")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    params = LoanParameters(
        loan_amount=args.amount,
        annual_interest_rate=args.rate,
        interest_rate_type=InterestRateType(args.rate_type),
        loan_term_years=args.years,
        capitalization=Capitalization(args.capitalization) if args.capitalization else None,
        grace_period_type=GracePeriodType(args.grace),
        grace_period_months=args.grace_months,
        insurance_rate=args.insurance,
        start_date=args.start,
        currency=args.currency,
    )

    try:
        result = calculate_credit_schedule(params, strict=args.strict or None)
    except CreditEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(params, result)
    if args.yearly:
        print_yearly(result)
    else:
        print_schedule(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
