"""Canonical test fixtures used across all engine tests.

Fixture: 100,000 loan at 8% effective annual, 1 year, no insurance, starting 2025-01-15.
"""

import pytest
from datetime import date
from decimal import Decimal

from src.models.loan import (
    Capitalization,
    GracePeriodType,
    InterestRateType,
    LoanParameters,
)


@pytest.fixture
def canonical_params() -> LoanParameters:
    """Plain fully-amortizing one-year loan."""
    return LoanParameters(
        loan_amount=Decimal("100000"),
        annual_interest_rate=Decimal("0.08"),
        interest_rate_type=InterestRateType.EFFECTIVE,
        loan_term_years=1,
        grace_period_type=GracePeriodType.NONE,
        grace_period_months=0,
        insurance_rate=Decimal("0"),
        start_date=date(2025, 1, 15),
    )


@pytest.fixture
def total_grace_params() -> LoanParameters:
    """Same loan with three months of total grace."""
    return LoanParameters(
        loan_amount=Decimal("100000"),
        annual_interest_rate=Decimal("0.08"),
        interest_rate_type=InterestRateType.EFFECTIVE,
        loan_term_years=1,
        grace_period_type=GracePeriodType.TOTAL,
        grace_period_months=3,
        insurance_rate=Decimal("0"),
        start_date=date(2025, 1, 15),
    )


@pytest.fixture
def mortgage_params() -> LoanParameters:
    """20-year mortgage: nominal 9% capitalized monthly, partial grace, insured."""
    return LoanParameters(
        loan_amount=Decimal("304000"),
        annual_interest_rate=Decimal("0.09"),
        interest_rate_type=InterestRateType.NOMINAL,
        capitalization=Capitalization.MONTHLY,
        loan_term_years=20,
        grace_period_type=GracePeriodType.PARTIAL,
        grace_period_months=6,
        insurance_rate=Decimal("0.0054"),
        start_date=date(2024, 7, 18),
    )
