"""Period and rate conversion shared by the payment and schedule engines.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from loan_calculator.exceptions import InvalidInputError
from loan_calculator.models.loan import DisplayScale, Frequency

TWO_PLACES = Decimal("0.01")

PERIODS_PER_YEAR: dict[Frequency, int] = {
    Frequency.WEEKLY: 52,
    Frequency.FORTNIGHTLY: 26,
    Frequency.MONTHLY: 12,
}

SCALE_PERIODS_PER_YEAR: dict[DisplayScale, int] = {
    DisplayScale.WEEK: 52,
    DisplayScale.FORTNIGHT: 26,
    DisplayScale.MONTH: 12,
    DisplayScale.YEAR: 1,
}

# Scale whose cadence matches each repayment frequency
MATCHING_SCALE: dict[Frequency, DisplayScale] = {
    Frequency.WEEKLY: DisplayScale.WEEK,
    Frequency.FORTNIGHTLY: DisplayScale.FORTNIGHT,
    Frequency.MONTHLY: DisplayScale.MONTH,
}


def as_decimal(value) -> Decimal:
    """Convert int/float/str to Decimal via str() so 4.9 stays 4.9."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def periods_per_year(frequency: Frequency) -> int:
    return PERIODS_PER_YEAR[frequency]


def whole_years(term_years) -> int:
    """Term as an int; raises InvalidInputError for a fractional or non-numeric term."""
    try:
        term = as_decimal(term_years)
    except InvalidOperation:
        raise InvalidInputError(f"Loan term must be a whole number of years, got {term_years!r}")
    if not term.is_finite() or term != term.to_integral_value():
        raise InvalidInputError(f"Loan term must be a whole number of years, got {term_years!r}")
    return int(term)


def total_periods(term_years: int, frequency: Frequency) -> int:
    """Number of repayments over the life of the loan."""
    return whole_years(term_years) * PERIODS_PER_YEAR[frequency]


def periodic_rate(annual_rate_percent: Decimal, frequency: Frequency) -> Decimal:
    """Nominal annual percent -> per-repayment rate, e.g. 5% monthly -> 0.0041666..."""
    return as_decimal(annual_rate_percent) / 100 / PERIODS_PER_YEAR[frequency]


def scale_periods(term_years: int, scale: DisplayScale) -> int:
    """Number of display periods the term spans at the given scale."""
    return whole_years(term_years) * SCALE_PERIODS_PER_YEAR[scale]


def display_bucket(payment_number: int, frequency: Frequency, scale: DisplayScale) -> int:
    """1-based display period that contains the due date of a 1-based payment.

    Payment k is due at k / freq_ppy years, so it lands in bucket
    ceil(k * scale_ppy / freq_ppy).
    """
    numerator = payment_number * SCALE_PERIODS_PER_YEAR[scale]
    return -(-numerator // PERIODS_PER_YEAR[frequency])
