"""Fixed periodic payment for a fully amortizing loan.

Pure functions: Decimal in, Decimal out. No I/O. Results are unrounded;
rounding to cents happens at display/export time.
"""

from decimal import Decimal

from loan_calculator.engine.periods import as_decimal, periodic_rate, total_periods
from loan_calculator.exceptions import InvalidInputError
from loan_calculator.models.loan import Frequency


def compute_payment(
    principal,
    annual_rate_percent,
    term_years: int,
    frequency: Frequency,
) -> Decimal:
    """Payment due every period at `frequency`.

    Raises InvalidInputError when the term is not a whole number of years
    or spans no periods; validated input never does.
    """
    principal = as_decimal(principal)
    n = total_periods(term_years, frequency)
    if n <= 0:
        raise InvalidInputError(
            f"Loan term must cover at least one repayment, got {n} periods "
            f"({term_years} years, {frequency.value})"
        )

    r = periodic_rate(annual_rate_percent, frequency)
    if r == 0:
        return principal / n

    # PMT = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)


def total_repaid(principal, annual_rate_percent, term_years: int, frequency: Frequency) -> Decimal:
    """Sum of every payment over the full term."""
    payment = compute_payment(principal, annual_rate_percent, term_years, frequency)
    return payment * total_periods(term_years, frequency)


def total_interest(principal, annual_rate_percent, term_years: int, frequency: Frequency) -> Decimal:
    """Interest paid over the full term (total repaid minus principal)."""
    return total_repaid(principal, annual_rate_percent, term_years, frequency) - as_decimal(principal)
