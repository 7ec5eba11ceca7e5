"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.models.loan import Capitalization, GracePeriodType, InterestRateType


# ---- Request schemas ----

class SimulationRequest(BaseModel):
    """Loan terms for a simulation.

    Give either `loan_amount` directly, or `property_price` with the down
    payment (and optional housing bonus) so the financed amount is derived.
    Sending both is rejected.
    """
    loan_amount: Decimal | None = Field(None, description="Financed amount")
    property_price: Decimal | None = Field(None, description="Price of the property unit")
    initial_payment: Decimal = Field(Decimal("0"), description="Down payment")
    housing_bonus: Decimal = Field(Decimal("0"), description="Techo Propio bonus")
    currency: str | None = None

    annual_interest_rate: Decimal = Field(..., description="e.g. 0.08 for 8%")
    interest_rate_type: InterestRateType = InterestRateType.EFFECTIVE
    capitalization: Capitalization | None = None
    loan_term_years: int
    grace_period_type: GracePeriodType = GracePeriodType.NONE
    grace_period_months: int = 0
    insurance_rate: Decimal = Decimal("0")
    start_date: date | None = None


# ---- Response schemas ----

class PaymentPeriodResponse(BaseModel):
    period_number: int
    payment_date: date
    beginning_balance: Decimal
    principal_payment: Decimal
    interest_payment: Decimal
    insurance_payment: Decimal
    total_payment: Decimal
    ending_balance: Decimal
    grace_period: bool


class YearlySummaryResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    insurance: Decimal
    total_payment: Decimal
    ending_balance: Decimal


class SimulationResponse(BaseModel):
    currency: str
    loan_amount: Decimal
    initial_payment_pct: Decimal | None = None  # Only for property-based requests
    fixed_installment: Decimal
    monthly_rate: Decimal
    tea: Decimal
    tcea: Decimal
    van: Decimal
    tir: Decimal
    tir_annualized: Decimal
    tir_converged: bool
    total_paid: Decimal
    total_interest: Decimal
    total_insurance: Decimal
    payment_schedule: list[PaymentPeriodResponse]
    yearly_summary: list[YearlySummaryResponse]
