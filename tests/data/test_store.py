import sqlite3
from decimal import Decimal

import pytest

from loan_calculator.config import settings
from loan_calculator.data.store import (
    INPUTS_KEY,
    SQLiteStore,
    load_inputs,
    load_theme,
    save_inputs,
    save_theme,
)
from loan_calculator.models.loan import DisplayScale, Frequency, LoanTerms


class TestSQLiteStore:
    def test_missing_key(self, sqlite_store):
        assert sqlite_store.get("nothing") is None

    def test_set_and_get(self, sqlite_store):
        sqlite_store.set("answer", {"value": 42, "items": [1, 2]})
        assert sqlite_store.get("answer") == {"value": 42, "items": [1, 2]}

    def test_overwrite(self, sqlite_store):
        sqlite_store.set("theme", "light")
        sqlite_store.set("theme", "dark")
        assert sqlite_store.get("theme") == "dark"

    def test_persists_across_instances(self, tmp_path):
        path = str(tmp_path / "nested" / "store.db")
        SQLiteStore(path).set("k", "v")
        assert SQLiteStore(path).get("k") == "v"

    def test_unreadable_value(self, sqlite_store):
        with sqlite3.connect(sqlite_store.db_path) as conn:
            conn.execute(
                "INSERT INTO kv_store (key, value_json, updated_at) VALUES (?, ?, ?)",
                ("broken", "{not json", "2024-01-01"),
            )
        assert sqlite_store.get("broken") is None


class TestLastInputs:
    def test_defaults_when_empty(self, memory_store):
        terms, scale = load_inputs(memory_store)
        assert terms == settings.default_terms
        assert scale == DisplayScale.YEAR

    def test_round_trip(self, sqlite_store):
        terms = LoanTerms(
            principal=Decimal("125000.50"),
            annual_rate_percent=Decimal("6.3"),
            term_years=12,
            frequency=Frequency.FORTNIGHTLY,
        )
        save_inputs(sqlite_store, terms, DisplayScale.MONTH)
        assert load_inputs(sqlite_store) == (terms, DisplayScale.MONTH)

    @pytest.mark.parametrize("stored", [
        {"principal": "abc", "annual_rate_percent": "5", "term_years": 5,
         "frequency": "monthly", "scale": "year"},
        {"principal": "50000"},
        {"principal": "50000", "annual_rate_percent": "5", "term_years": 5,
         "frequency": "daily", "scale": "year"},
        "not a dict",
    ])
    def test_malformed_falls_back_to_defaults(self, memory_store, stored):
        memory_store.set(INPUTS_KEY, stored)
        terms, scale = load_inputs(memory_store)
        assert terms == settings.default_terms
        assert scale == settings.default_scale


class TestTheme:
    def test_default_light(self, memory_store):
        assert load_theme(memory_store) == "light"

    def test_round_trip(self, sqlite_store):
        save_theme(sqlite_store, "dark")
        assert load_theme(sqlite_store) == "dark"

    def test_rejects_unknown_theme(self, memory_store):
        with pytest.raises(ValueError):
            save_theme(memory_store, "neon")

    def test_ignores_unknown_stored_theme(self, memory_store):
        memory_store.set("theme", "neon")
        assert load_theme(memory_store) == "light"
