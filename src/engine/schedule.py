"""French-method amortization schedule with grace periods.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from src.config import settings
from src.engine.errors import InvalidParameterError
from src.models.loan import GracePeriodType, PaymentPeriod

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def french_installment(principal: Decimal, monthly_rate: Decimal, periods: int) -> Decimal:
    """Fixed installment (principal + interest) that retires `principal` in `periods` months.

    I = P * [r(1+r)^n] / [(1+r)^n - 1], or P / n when the rate is zero.
    """
    if periods <= 0:
        raise InvalidParameterError("Installment needs at least one payment period", {"periods": periods})
    if monthly_rate == 0:
        return principal / periods
    factor = (1 + monthly_rate) ** periods
    return principal * (monthly_rate * factor) / (factor - 1)


def generate_schedule(
    loan_amount: Decimal,
    monthly_rate: Decimal,
    total_periods: int,
    grace_period_type: GracePeriodType,
    grace_period_months: int,
    insurance_rate: Decimal,
    start_date: date,
) -> tuple[tuple[PaymentPeriod, ...], Decimal]:
    """Build the month-by-month schedule.

    The installment is derived once, before any principal is repaid, from the
    full loan amount over the months left after grace. No principal moves
    during grace, so the balance entering the payment phase is still
    `loan_amount` and the same installment holds for every payment month.

    Grace handling:
        total:   only insurance is billed; interest is waived, not capitalized
        partial: interest and insurance are billed, principal untouched

    Returns (periods, fixed_installment).
    """
    grace_period_type = GracePeriodType(grace_period_type)
    if grace_period_type == GracePeriodType.NONE:
        grace_period_months = 0

    monthly_insurance = insurance_rate / 12
    payment_periods = total_periods - grace_period_months
    fixed_installment = french_installment(loan_amount, monthly_rate, payment_periods)
    floor = settings.balance_floor

    logger.debug(
        "Generating %d periods (%d grace, %s) at monthly rate %s; installment %s",
        total_periods, grace_period_months, grace_period_type.value, monthly_rate, fixed_installment,
    )

    periods: list[PaymentPeriod] = []
    balance = loan_amount

    for period in range(1, total_periods + 1):
        is_grace = period <= grace_period_months
        interest = balance * monthly_rate
        insurance = balance * monthly_insurance

        if is_grace and grace_period_type == GracePeriodType.TOTAL:
            principal = ZERO
            total = insurance
        elif is_grace and grace_period_type == GracePeriodType.PARTIAL:
            principal = ZERO
            total = interest + insurance
        else:
            principal = fixed_installment - interest
            total = fixed_installment + insurance

        ending = balance - principal
        # Drift below a cent means the loan is paid off
        if ending <= floor:
            ending = ZERO

        periods.append(PaymentPeriod(
            period_number=period,
            payment_date=start_date + relativedelta(months=period),
            beginning_balance=balance,
            principal_payment=principal,
            interest_payment=interest,
            insurance_payment=insurance,
            total_payment=total,
            ending_balance=ending,
            is_grace_period=is_grace,
        ))
        balance = ending

    return tuple(periods), fixed_installment


def yearly_summary(periods: tuple[PaymentPeriod, ...] | list[PaymentPeriod]) -> list[dict[str, Decimal]]:
    """Aggregate a monthly schedule by loan year.

    Returns list of dicts with keys: year, principal, interest, insurance,
    total_payment, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = ZERO
    year_interest = ZERO
    year_insurance = ZERO
    year_total = ZERO

    for p in periods:
        year_principal += p.principal_payment
        year_insurance += p.insurance_payment
        # Interest billed, so waived interest in total grace is left out
        year_interest += p.total_payment - p.principal_payment - p.insurance_payment
        year_total += p.total_payment

        if p.period_number % 12 == 0 or p.period_number == len(periods):
            year_num = (p.period_number - 1) // 12 + 1
            yearly.append({
                "year": Decimal(str(year_num)),
                "principal": year_principal,
                "interest": year_interest,
                "insurance": year_insurance,
                "total_payment": year_total,
                "ending_balance": p.ending_balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_insurance = ZERO
            year_total = ZERO

    return yearly
