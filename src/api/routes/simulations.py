"""Credit simulation routes. Stateless: nothing is saved."""

from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    PaymentPeriodResponse,
    SimulationRequest,
    SimulationResponse,
    YearlySummaryResponse,
)
from src.config import settings
from src.engine.credit import calculate_credit_schedule
from src.engine.errors import InvalidParameterError, NonConvergenceError, NumericalDegeneracyError
from src.engine.schedule import yearly_summary
from src.models.loan import LoanParameters, ScheduleResult
from src.models.simulation import CreditSimulation

router = APIRouter(prefix="/api/v1/simulations", tags=["simulations"])

TWO_PLACES = Decimal("0.01")
SIX_PLACES = Decimal("0.000001")


def _money(v: Decimal) -> Decimal:
    return v.quantize(TWO_PLACES, ROUND_HALF_UP)


def _rate(v: Decimal) -> Decimal:
    return v.quantize(SIX_PLACES, ROUND_HALF_UP)


def _build_parameters(req: SimulationRequest) -> tuple[LoanParameters, CreditSimulation | None]:
    """Turn the request into engine input, deriving the loan amount when needed.

    Returns the parameters and, for property-based requests, the simulation
    they were derived from.
    """
    currency = req.currency or settings.default_currency

    if req.loan_amount is not None and req.property_price is not None:
        raise HTTPException(status_code=400, detail="Provide loan_amount or property_price, not both.")

    if req.loan_amount is not None:
        params = LoanParameters(
            loan_amount=req.loan_amount,
            annual_interest_rate=req.annual_interest_rate,
            interest_rate_type=req.interest_rate_type,
            loan_term_years=req.loan_term_years,
            capitalization=req.capitalization,
            grace_period_type=req.grace_period_type,
            grace_period_months=req.grace_period_months,
            insurance_rate=req.insurance_rate,
            start_date=req.start_date,
            currency=currency,
        )
        return params, None

    if req.property_price is None:
        raise HTTPException(status_code=400, detail="Provide loan_amount or property_price.")

    simulation = CreditSimulation(
        property_price=req.property_price,
        initial_payment=req.initial_payment,
        housing_bonus=req.housing_bonus,
        currency=currency,
        annual_interest_rate=req.annual_interest_rate,
        interest_rate_type=req.interest_rate_type,
        loan_term_years=req.loan_term_years,
        capitalization=req.capitalization,
        grace_period_type=req.grace_period_type,
        grace_period_months=req.grace_period_months,
        insurance_rate=req.insurance_rate,
        start_date=req.start_date,
    )
    return simulation.to_loan_parameters(), simulation


def _result_to_response(
    params: LoanParameters, result: ScheduleResult, simulation: CreditSimulation | None = None
) -> SimulationResponse:
    """Convert engine ScheduleResult to API response."""
    schedule = [
        PaymentPeriodResponse(
            period_number=p.period_number,
            payment_date=p.payment_date,
            beginning_balance=_money(p.beginning_balance),
            principal_payment=_money(p.principal_payment),
            interest_payment=_money(p.interest_payment),
            insurance_payment=_money(p.insurance_payment),
            total_payment=_money(p.total_payment),
            ending_balance=_money(p.ending_balance),
            grace_period=p.is_grace_period,
        )
        for p in result.payment_schedule
    ]

    yearly = [
        YearlySummaryResponse(
            year=int(y["year"]),
            principal=_money(y["principal"]),
            interest=_money(y["interest"]),
            insurance=_money(y["insurance"]),
            total_payment=_money(y["total_payment"]),
            ending_balance=_money(y["ending_balance"]),
        )
        for y in yearly_summary(result.payment_schedule)
    ]

    return SimulationResponse(
        currency=result.currency,
        loan_amount=_money(params.loan_amount),
        initial_payment_pct=_rate(simulation.initial_payment_pct) if simulation else None,
        fixed_installment=_money(result.fixed_installment),
        monthly_rate=_rate(result.monthly_rate),
        tea=_rate(result.tea),
        tcea=_rate(result.tcea),
        van=_money(result.van),
        tir=_rate(result.tir),
        tir_annualized=_rate(result.annualized_tir),
        tir_converged=result.tir_converged,
        total_paid=_money(result.total_paid),
        total_interest=_money(result.total_interest),
        total_insurance=_money(result.total_insurance),
        payment_schedule=schedule,
        yearly_summary=yearly,
    )


@router.post("/calculate", response_model=SimulationResponse)
async def calculate(req: SimulationRequest):
    """Loan terms → amortization schedule + TEA, TCEA, VAN, TIR."""
    params, simulation = _build_parameters(req)

    try:
        result = calculate_credit_schedule(params)
    except InvalidParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (NumericalDegeneracyError, NonConvergenceError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _result_to_response(params, result, simulation)
