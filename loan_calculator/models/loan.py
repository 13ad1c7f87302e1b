from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Frequency(Enum):
    """How often repayments are actually made."""
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"


class DisplayScale(Enum):
    """Cadence the schedule is charted/exported at. Independent of Frequency."""
    WEEK = "week"
    FORTNIGHT = "fortnight"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class LoanTerms:
    principal: Decimal  # Major currency unit, e.g. Decimal("50000")
    annual_rate_percent: Decimal  # e.g. Decimal("5") for 5%
    term_years: int
    frequency: Frequency = Frequency.MONTHLY


@dataclass(frozen=True)
class LoanBounds:
    """Inclusive ranges accepted by the input validator."""
    min_principal: Decimal
    max_principal: Decimal
    min_rate_percent: Decimal
    max_rate_percent: Decimal
    min_term_years: int
    max_term_years: int


@dataclass(frozen=True)
class ScheduleEntry:
    index: int  # 1-based, chronological
    principal_portion: Decimal
    interest_portion: Decimal

    @property
    def total(self) -> Decimal:
        return self.principal_portion + self.interest_portion
