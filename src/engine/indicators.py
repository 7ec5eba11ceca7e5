"""Summary indicators for a credit schedule: TEA, TCEA, VAN and TIR.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.config import settings
from src.engine.irr import solve_irr
from src.engine.rates import resolve_effective_annual_rate
from src.models.loan import LoanParameters, PaymentPeriod

ONE = Decimal("1")
MONTHS_PER_YEAR = Decimal("12")


@dataclass(frozen=True)
class Indicators:
    tea: Decimal
    tcea: Decimal
    van: Decimal
    tir: Decimal
    tir_converged: bool


def effective_annual_rate(params: LoanParameters) -> Decimal:
    """TEA from the quoted annual rate, not reconstructed from the monthly rate."""
    return resolve_effective_annual_rate(
        params.annual_interest_rate, params.interest_rate_type, params.capitalization
    )


def net_present_value(
    loan_amount: Decimal, periods: tuple[PaymentPeriod, ...], annual_rate: Decimal
) -> Decimal:
    """VAN = -P + sum(payment_i / (1 + TEA)^(i/12)) for months i = 1..n.

    The annual rate is discounted with a fractional exponent rather than a
    monthly rate.
    """
    base = ONE + annual_rate
    van = -loan_amount
    for i, p in enumerate(periods):
        van += p.total_payment / base ** (Decimal(i + 1) / MONTHS_PER_YEAR)
    return van


def total_effective_annual_cost(
    loan_amount: Decimal, periods: tuple[PaymentPeriod, ...], total_periods: int
) -> Decimal:
    """TCEA = (total paid / principal)^(12/n) - 1."""
    total_paid = sum((p.total_payment for p in periods), Decimal("0"))
    return (total_paid / loan_amount) ** (MONTHS_PER_YEAR / total_periods) - ONE


def compute_indicators(
    params: LoanParameters,
    periods: tuple[PaymentPeriod, ...],
    monthly_rate: Decimal,
) -> Indicators:
    """Derive TEA, TCEA, VAN and TIR for a generated schedule.

    TIR is solved on the lender's cash flows (disbursement out, installments
    in), one flow per month, so it is a monthly rate. The solver starts from
    the loan's own monthly rate.
    """
    tea = effective_annual_rate(params)

    cash_flows = [-params.loan_amount] + [p.total_payment for p in periods]
    irr = solve_irr(
        cash_flows,
        float(monthly_rate),
        max_iterations=settings.irr_max_iterations,
        tolerance=settings.irr_tolerance,
    )

    return Indicators(
        tea=tea,
        tcea=total_effective_annual_cost(params.loan_amount, periods, params.total_periods),
        van=net_present_value(params.loan_amount, periods, tea),
        tir=irr.rate,
        tir_converged=irr.converged,
    )
