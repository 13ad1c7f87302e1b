"""Amortization schedule: per-period principal/interest split.

Pure functions: Decimal in, dataclass out. No I/O.

The default mode sizes the loop by the display scale, not by the repayment
frequency, and never stops at payoff. With a monthly loan charted weekly
the loop runs term * 52 times against a monthly payment and monthly rate,
so the balance overshoots zero and late entries go negative. Pass
``aligned=True`` to amortize over the real payment count and bucket the
results into display periods instead.
"""

import logging
from decimal import Decimal

from loan_calculator.engine.payment import compute_payment
from loan_calculator.engine.periods import (
    MATCHING_SCALE,
    as_decimal,
    display_bucket,
    periodic_rate,
    round2,
    scale_periods,
    total_periods,
)
from loan_calculator.models.loan import DisplayScale, Frequency, ScheduleEntry

logger = logging.getLogger(__name__)


def generate_schedule(
    principal,
    annual_rate_percent,
    term_years: int,
    frequency: Frequency,
    scale: DisplayScale,
    aligned: bool = False,
) -> list[ScheduleEntry]:
    """Principal/interest split for each display period, in chronological order.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual rate in percent (e.g. 5 for 5%)
        term_years: Loan term in years
        frequency: Repayment frequency; sets the payment and per-period rate
        scale: Display scale; sets how many entries are produced
        aligned: Amortize over the real repayment count and aggregate into
            display periods instead of iterating once per display period
    """
    principal = as_decimal(principal)
    payment = compute_payment(principal, annual_rate_percent, term_years, frequency)
    rate = periodic_rate(annual_rate_percent, frequency)

    if aligned:
        return _aligned_schedule(principal, payment, rate, term_years, frequency, scale)

    if MATCHING_SCALE[frequency] != scale:
        logger.debug(
            "Schedule scale %s differs from repayment frequency %s; "
            "iterating %s payments per year",
            scale.value, frequency.value, scale_periods(1, scale),
        )

    entries: list[ScheduleEntry] = []
    balance = principal
    for index in range(1, scale_periods(term_years, scale) + 1):
        interest = balance * rate
        principal_paid = payment - interest
        balance -= principal_paid

        entries.append(ScheduleEntry(
            index=index,
            principal_portion=round2(principal_paid),
            interest_portion=round2(interest),
        ))

    return entries


def _aligned_schedule(
    principal: Decimal,
    payment: Decimal,
    rate: Decimal,
    term_years: int,
    frequency: Frequency,
    scale: DisplayScale,
) -> list[ScheduleEntry]:
    n_buckets = scale_periods(term_years, scale)
    principal_sums = [Decimal("0")] * n_buckets
    interest_sums = [Decimal("0")] * n_buckets

    balance = principal
    for k in range(1, total_periods(term_years, frequency) + 1):
        interest = balance * rate
        principal_paid = payment - interest
        balance -= principal_paid

        bucket = display_bucket(k, frequency, scale) - 1
        principal_sums[bucket] += principal_paid
        interest_sums[bucket] += interest

    return [
        ScheduleEntry(
            index=i + 1,
            principal_portion=round2(principal_sums[i]),
            interest_portion=round2(interest_sums[i]),
        )
        for i in range(n_buckets)
    ]


def schedule_totals(entries: list[ScheduleEntry]) -> dict[str, Decimal]:
    """Sum of the rounded portions across a schedule.

    Returns dict with keys: principal, interest, total
    """
    principal = sum((e.principal_portion for e in entries), Decimal("0"))
    interest = sum((e.interest_portion for e in entries), Decimal("0"))
    return {"principal": principal, "interest": interest, "total": principal + interest}
