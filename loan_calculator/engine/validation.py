"""Input range checks that gate payment and schedule computation.

Out-of-range input is an expected condition, so `validate` answers with a
bool instead of raising. Callers check first, then compute.
"""

from decimal import Decimal, InvalidOperation

from loan_calculator.config import settings
from loan_calculator.engine.periods import as_decimal
from loan_calculator.models.loan import LoanBounds


def validate(
    principal,
    annual_rate_percent,
    term_years,
    bounds: LoanBounds | None = None,
) -> bool:
    """True only if principal, rate and term all fall inside the inclusive bounds.

    Blank (None) or non-numeric fields are invalid. Frequency is not checked:
    it always comes from a fixed choice list.
    """
    bounds = bounds or settings.loan_bounds
    if principal is None or annual_rate_percent is None or term_years is None:
        return False
    try:
        principal = as_decimal(principal)
        rate = as_decimal(annual_rate_percent)
        term = as_decimal(term_years)
    except InvalidOperation:
        return False
    if not (principal.is_finite() and rate.is_finite() and term.is_finite()):
        return False
    # Term is counted in whole years
    if term != term.to_integral_value():
        return False

    return (
        bounds.min_principal <= principal <= bounds.max_principal
        and bounds.min_rate_percent <= rate <= bounds.max_rate_percent
        and bounds.min_term_years <= term <= bounds.max_term_years
    )


def clamp_principal(principal, bounds: LoanBounds | None = None) -> Decimal:
    """Snap a principal into the allowed range (applied when the amount field loses focus)."""
    bounds = bounds or settings.loan_bounds
    value = as_decimal(principal)
    if value < bounds.min_principal:
        return bounds.min_principal
    if value > bounds.max_principal:
        return bounds.max_principal
    return value
