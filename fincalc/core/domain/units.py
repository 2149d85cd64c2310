"""
Units — Central rate and tenure conversions

The only sanctioned way to move between:
- annual percent (8.5 means 8.5% per year)
- decimal rate (0.085)
- periodic rate (annual decimal / periods_per_year)
- tenures in years or months and counts of payment periods

Mixing units without an explicit converter from this module is a bug.
"""

from enum import Enum
from typing import Final, NamedTuple

from fincalc.core.math.numerical_safeguards import safe_divide

# =============================================================================
# CONSTANTS
# =============================================================================

MONTHS_PER_YEAR: Final[int] = 12
DAYS_PER_YEAR: Final[int] = 365


# =============================================================================
# ENUMS
# =============================================================================


class CompoundingFrequency(str, Enum):
    """How often interest is credited."""

    YEARLY = "yearly"
    SEMIANNUALLY = "semiannually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    DAILY = "daily"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @classmethod
    def parse(cls, value: "str | CompoundingFrequency | None",
              default: "CompoundingFrequency | None" = None) -> "CompoundingFrequency":
        """
        Resolve a frequency name, accepting common aliases.

        Raises:
            ValueError: Unknown name and no default given
        """
        if isinstance(value, cls):
            return value

        key = str(value or "").strip().lower().replace("-", "").replace("_", "")
        resolved = _FREQUENCY_ALIASES.get(key)
        if resolved is not None:
            return resolved

        if default is not None:
            return default
        raise ValueError(f"Unknown compounding frequency: {value!r}")


_PERIODS_PER_YEAR: Final[dict[CompoundingFrequency, int]] = {
    CompoundingFrequency.YEARLY: 1,
    CompoundingFrequency.SEMIANNUALLY: 2,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.DAILY: 365,
}

_FREQUENCY_ALIASES: Final[dict[str, CompoundingFrequency]] = {
    "yearly": CompoundingFrequency.YEARLY,
    "annually": CompoundingFrequency.YEARLY,
    "annual": CompoundingFrequency.YEARLY,
    "semiannually": CompoundingFrequency.SEMIANNUALLY,
    "semiannual": CompoundingFrequency.SEMIANNUALLY,
    "halfyearly": CompoundingFrequency.SEMIANNUALLY,
    "quarterly": CompoundingFrequency.QUARTERLY,
    "monthly": CompoundingFrequency.MONTHLY,
    "daily": CompoundingFrequency.DAILY,
}


class TenureUnit(str, Enum):
    """Unit a loan or deposit tenure is entered in."""

    YEARS = "years"
    MONTHS = "months"


# =============================================================================
# RATE CONVERTERS
# =============================================================================


def percent_to_decimal(percent: float) -> float:
    """8.5 -> 0.085"""
    return percent / 100.0


def decimal_to_percent(rate: float) -> float:
    """0.085 -> 8.5"""
    return rate * 100.0


def periodic_rate(annual_percent: float, periods_per_year: int = MONTHS_PER_YEAR) -> float:
    """
    Nominal annual percent -> decimal rate per period.

    Args:
        annual_percent: Annual rate in percent (e.g. 8.5)
        periods_per_year: Payment/compounding periods per year (> 0)

    Returns:
        Decimal periodic rate (e.g. 0.0070833 for 8.5% monthly)

    Raises:
        ValueError: If periods_per_year is not positive
    """
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be positive, got {periods_per_year}")
    return percent_to_decimal(annual_percent) / periods_per_year


# =============================================================================
# TENURE CONVERTERS
# =============================================================================


def tenure_to_months(tenure: float, unit: TenureUnit | str = TenureUnit.YEARS) -> int:
    """
    Tenure in years or months -> whole months (rounded to nearest).

    Examples:
        >>> tenure_to_months(20)
        240
        >>> tenure_to_months(18, 'months')
        18
        >>> tenure_to_months(1.5)
        18
    """
    if TenureUnit(unit) is TenureUnit.MONTHS:
        return int(round(tenure))
    return int(round(tenure * MONTHS_PER_YEAR))


def years_to_periods(years: float, periods_per_year: int) -> int:
    """Whole number of payment periods in `years` (rounded to nearest)."""
    return int(round(years * periods_per_year))


class YearsMonths(NamedTuple):
    years: int
    months: int


def months_to_years_months(months: int) -> YearsMonths:
    """
    Split a month count for display: 47 -> (3, 11).

    Examples:
        >>> months_to_years_months(47)
        YearsMonths(years=3, months=11)
    """
    total = max(0, int(months))
    return YearsMonths(years=total // MONTHS_PER_YEAR, months=total % MONTHS_PER_YEAR)


def monthly_from_annual(amount: float) -> float:
    """Annual amount spread evenly over 12 months."""
    return safe_divide(amount, MONTHS_PER_YEAR)
