"""Canonical test fixtures used across the test suite.

Fixture: $50K loan, 5% annual rate, 5 year term, monthly repayments
(payment ~$943.56 over 60 periods).
"""

import pytest
from decimal import Decimal

from loan_calculator.data.store import MemoryStore, SQLiteStore
from loan_calculator.models.loan import Frequency, LoanTerms


@pytest.fixture
def standard_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("50000"),
        annual_rate_percent=Decimal("5"),
        term_years=5,
        frequency=Frequency.MONTHLY,
    )


@pytest.fixture
def large_terms() -> LoanTerms:
    """Upper bound of every validated range."""
    return LoanTerms(
        principal=Decimal("950000"),
        annual_rate_percent=Decimal("10"),
        term_years=30,
        frequency=Frequency.WEEKLY,
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sqlite_store(tmp_path) -> SQLiteStore:
    return SQLiteStore(str(tmp_path / "store.db"))
