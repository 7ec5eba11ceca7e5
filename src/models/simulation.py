from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.models.loan import (
    Capitalization,
    GracePeriodType,
    InterestRateType,
    LoanParameters,
)


@dataclass(frozen=True)
class CreditSimulation:
    """A mortgage simulation as captured from a client: property side plus loan terms.

    The financed amount is whatever the buyer does not cover with the down
    payment or the Techo Propio housing bonus.
    """
    property_price: Decimal
    annual_interest_rate: Decimal
    interest_rate_type: InterestRateType
    loan_term_years: int
    initial_payment: Decimal = Decimal("0")  # Down payment
    housing_bonus: Decimal = Decimal("0")  # Techo Propio subsidy
    currency: str = "PEN"
    capitalization: Capitalization | None = None
    grace_period_type: GracePeriodType = GracePeriodType.NONE
    grace_period_months: int = 0
    insurance_rate: Decimal = Decimal("0")
    start_date: date | None = None

    @property
    def loan_amount(self) -> Decimal:
        return self.property_price - self.initial_payment - self.housing_bonus

    @property
    def initial_payment_pct(self) -> Decimal:
        if self.property_price == 0:
            return Decimal("0")
        return self.initial_payment / self.property_price

    def to_loan_parameters(self) -> LoanParameters:
        return LoanParameters(
            loan_amount=self.loan_amount,
            annual_interest_rate=self.annual_interest_rate,
            interest_rate_type=self.interest_rate_type,
            loan_term_years=self.loan_term_years,
            capitalization=self.capitalization,
            grace_period_type=self.grace_period_type,
            grace_period_months=self.grace_period_months,
            insurance_rate=self.insurance_rate,
            start_date=self.start_date,
            currency=self.currency,
        )
