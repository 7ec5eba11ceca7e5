"""Interest rate convention conversion.

Pure functions. Decimal in, Decimal out. No I/O.
"""

import logging
from decimal import Decimal

from src.models.loan import Capitalization, InterestRateType

logger = logging.getLogger(__name__)

ONE = Decimal("1")
MONTHS_PER_YEAR = 12
DEFAULT_PERIODS_PER_YEAR = 12


def periods_per_year(capitalization: Capitalization | str | None) -> int:
    """Capitalization periods per year. Anything unrecognized counts as monthly."""
    if capitalization is None:
        return DEFAULT_PERIODS_PER_YEAR
    try:
        return Capitalization(capitalization).periods_per_year
    except ValueError:
        return DEFAULT_PERIODS_PER_YEAR


def nominal_to_effective_annual(
    nominal_rate: Decimal, capitalization: Capitalization | str | None
) -> Decimal:
    """TEA = (1 + j/m)^m - 1 for nominal rate j capitalized m times a year."""
    m = periods_per_year(capitalization)
    return (ONE + nominal_rate / m) ** m - ONE


def effective_annual_to_monthly(effective_annual_rate: Decimal) -> Decimal:
    """TEM = (1 + TEA)^(1/12) - 1."""
    return (ONE + effective_annual_rate) ** (ONE / MONTHS_PER_YEAR) - ONE


def resolve_effective_annual_rate(
    annual_rate: Decimal,
    rate_type: InterestRateType | str,
    capitalization: Capitalization | str | None,
) -> Decimal:
    """Effective annual rate in force for a quoted rate.

    A nominal rate quoted without a capitalization frequency is taken as
    already effective.
    """
    if InterestRateType(rate_type) != InterestRateType.NOMINAL:
        return annual_rate
    if capitalization is None:
        logger.warning(
            "Nominal rate %s has no capitalization; treating it as effective annual",
            annual_rate,
        )
        return annual_rate
    return nominal_to_effective_annual(annual_rate, capitalization)


def resolve_monthly_rate(
    annual_rate: Decimal,
    rate_type: InterestRateType | str,
    capitalization: Capitalization | str | None,
) -> Decimal:
    """Monthly effective rate used by the amortization schedule."""
    tea = resolve_effective_annual_rate(annual_rate, rate_type, capitalization)
    return effective_annual_to_monthly(tea)
