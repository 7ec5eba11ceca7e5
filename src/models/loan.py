from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class InterestRateType(str, Enum):
    NOMINAL = "nominal"
    EFFECTIVE = "effective"


class Capitalization(str, Enum):
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]


_PERIODS_PER_YEAR = {
    Capitalization.MONTHLY: 12,
    Capitalization.BIMONTHLY: 6,
    Capitalization.QUARTERLY: 4,
    Capitalization.SEMIANNUAL: 2,
    Capitalization.ANNUAL: 1,
}


class GracePeriodType(str, Enum):
    NONE = "none"
    TOTAL = "total"      # No principal, no interest billed
    PARTIAL = "partial"  # Interest and insurance billed, no principal


@dataclass(frozen=True)
class LoanParameters:
    loan_amount: Decimal
    annual_interest_rate: Decimal  # e.g. Decimal("0.08") for 8%
    interest_rate_type: InterestRateType
    loan_term_years: int
    capitalization: Capitalization | None = None  # Only meaningful for nominal rates
    grace_period_type: GracePeriodType = GracePeriodType.NONE
    grace_period_months: int = 0
    insurance_rate: Decimal = Decimal("0")  # Annual, on outstanding balance
    start_date: date | None = None  # Defaults to today
    currency: str = "PEN"  # Label only, never converted

    @property
    def total_periods(self) -> int:
        return self.loan_term_years * 12

    @property
    def effective_grace_months(self) -> int:
        """Grace months actually applied. A loan without grace ignores the supplied count."""
        if self.grace_period_type == GracePeriodType.NONE:
            return 0
        return self.grace_period_months


@dataclass(frozen=True)
class PaymentPeriod:
    period_number: int
    payment_date: date
    beginning_balance: Decimal
    principal_payment: Decimal
    interest_payment: Decimal
    insurance_payment: Decimal
    total_payment: Decimal
    ending_balance: Decimal
    is_grace_period: bool


@dataclass(frozen=True)
class ScheduleResult:
    payment_schedule: tuple[PaymentPeriod, ...]
    fixed_installment: Decimal
    monthly_rate: Decimal
    tea: Decimal
    tcea: Decimal
    van: Decimal
    tir: Decimal  # Per-month rate
    tir_converged: bool = True
    currency: str = "PEN"

    @property
    def total_paid(self) -> Decimal:
        return sum((p.total_payment for p in self.payment_schedule), Decimal("0"))

    @property
    def total_interest(self) -> Decimal:
        """Interest actually billed. Waived interest during total grace is excluded."""
        return sum(
            (p.total_payment - p.principal_payment - p.insurance_payment for p in self.payment_schedule),
            Decimal("0"),
        )

    @property
    def total_insurance(self) -> Decimal:
        return sum((p.insurance_payment for p in self.payment_schedule), Decimal("0"))

    @property
    def annualized_tir(self) -> Decimal:
        return (1 + self.tir) ** 12 - 1
