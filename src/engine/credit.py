"""Credit engine: validates loan terms and composes schedule + indicators.

Pure computation. No I/O. LoanParameters in, ScheduleResult out.
"""

import logging
from datetime import date
from decimal import Decimal

from src.config import settings
from src.engine.errors import InvalidParameterError, NonConvergenceError
from src.engine.indicators import compute_indicators
from src.engine.rates import resolve_monthly_rate
from src.engine.schedule import generate_schedule
from src.models.loan import GracePeriodType, InterestRateType, LoanParameters, ScheduleResult

logger = logging.getLogger(__name__)


def _is_whole(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_parameters(params: LoanParameters) -> None:
    """Reject loan terms that cannot yield a meaningful schedule."""
    # NaN cannot be compared and Infinity breaks the annuity factor
    for field in ("loan_amount", "annual_interest_rate", "insurance_rate"):
        value = getattr(params, field)
        if not Decimal(value).is_finite():
            raise InvalidParameterError(f"{field} must be a finite number", {field: value})

    if params.loan_amount <= 0:
        raise InvalidParameterError("Loan amount must be positive", {"loan_amount": params.loan_amount})
    if params.annual_interest_rate < 0:
        raise InvalidParameterError(
            "Annual interest rate cannot be negative",
            {"annual_interest_rate": params.annual_interest_rate},
        )
    if not _is_whole(params.loan_term_years):
        raise InvalidParameterError(
            "Loan term must be a whole number of years", {"loan_term_years": params.loan_term_years}
        )
    if params.loan_term_years <= 0:
        raise InvalidParameterError("Loan term must be positive", {"loan_term_years": params.loan_term_years})
    if params.insurance_rate < 0:
        raise InvalidParameterError("Insurance rate cannot be negative", {"insurance_rate": params.insurance_rate})

    try:
        InterestRateType(params.interest_rate_type)
        grace_type = GracePeriodType(params.grace_period_type)
    except ValueError as e:
        raise InvalidParameterError(str(e)) from e

    if grace_type == GracePeriodType.NONE:
        if params.grace_period_months:
            logger.debug("Ignoring %d grace months on a loan without grace", params.grace_period_months)
        return
    if not _is_whole(params.grace_period_months):
        raise InvalidParameterError(
            "Grace period must be a whole number of months", {"grace_period_months": params.grace_period_months}
        )
    if params.grace_period_months < 0:
        raise InvalidParameterError(
            "Grace months cannot be negative", {"grace_period_months": params.grace_period_months}
        )
    if params.grace_period_months >= params.total_periods:
        raise InvalidParameterError(
            "Grace period must leave at least one payment month",
            {"grace_period_months": params.grace_period_months, "total_periods": params.total_periods},
        )


def calculate_credit_schedule(params: LoanParameters, *, strict: bool | None = None) -> ScheduleResult:
    """Run a full credit simulation.

    Orchestrates: validate → monthly rate → schedule → indicators.

    With strict=True a non-converged IRR raises NonConvergenceError;
    otherwise the best estimate is returned and `tir_converged` is False.
    Defaults to settings.irr_strict.
    """
    validate_parameters(params)
    if strict is None:
        strict = settings.irr_strict

    monthly_rate = resolve_monthly_rate(
        params.annual_interest_rate, params.interest_rate_type, params.capitalization
    )
    periods, fixed_installment = generate_schedule(
        loan_amount=params.loan_amount,
        monthly_rate=monthly_rate,
        total_periods=params.total_periods,
        grace_period_type=params.grace_period_type,
        grace_period_months=params.effective_grace_months,
        insurance_rate=params.insurance_rate,
        start_date=params.start_date or date.today(),
    )
    indicators = compute_indicators(params, periods, monthly_rate)

    if strict and not indicators.tir_converged:
        raise NonConvergenceError(
            "IRR did not converge",
            estimate=indicators.tir,
            context={"max_iterations": settings.irr_max_iterations},
        )

    logger.info(
        "Simulated %s %s over %d months: installment %s, TEA %s, TCEA %s",
        params.currency, params.loan_amount, params.total_periods,
        fixed_installment.quantize(Decimal("0.01")), indicators.tea, indicators.tcea,
    )

    return ScheduleResult(
        payment_schedule=periods,
        fixed_installment=fixed_installment,
        monthly_rate=monthly_rate,
        tea=indicators.tea,
        tcea=indicators.tcea,
        van=indicators.van,
        tir=indicators.tir,
        tir_converged=indicators.tir_converged,
        currency=params.currency,
    )
