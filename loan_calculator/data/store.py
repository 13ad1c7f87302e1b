"""Key-value storage for last-used calculator inputs and theme preference.

The engine never touches storage; presentation code gets a store injected.
"""

import functools
import json
import logging
import sqlite3
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Protocol

from loan_calculator.config import settings
from loan_calculator.models.loan import DisplayScale, Frequency, LoanTerms

logger = logging.getLogger(__name__)

INPUTS_KEY = "last_inputs"
THEME_KEY = "theme"
THEMES = ("light", "dark")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """Dict-backed store, for tests and single-session use."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class SQLiteStore:
    """Values are stored JSON-encoded, one row per key."""

    def __init__(self, db_path: str = settings.store_path):
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value_json TEXT,
                    updated_at TIMESTAMP
                )
            """)

    def get(self, key: str) -> Any | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value_json FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row["value_json"])
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable stored value for %s", key)
            return None

    def set(self, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value_json, updated_at) VALUES (?, ?, ?)",
                (key, json.dumps(value, default=str), now),
            )


def inputs_to_dict(terms: LoanTerms, scale: DisplayScale) -> dict[str, Any]:
    return {
        "principal": str(terms.principal),
        "annual_rate_percent": str(terms.annual_rate_percent),
        "term_years": terms.term_years,
        "frequency": terms.frequency.value,
        "scale": scale.value,
    }


def inputs_from_dict(data: dict[str, Any]) -> tuple[LoanTerms, DisplayScale]:
    """Inverse of inputs_to_dict. Raises ValueError/KeyError/TypeError on bad data."""
    try:
        terms = LoanTerms(
            principal=Decimal(str(data["principal"])),
            annual_rate_percent=Decimal(str(data["annual_rate_percent"])),
            term_years=int(data["term_years"]),
            frequency=Frequency(data["frequency"]),
        )
    except InvalidOperation as e:
        raise ValueError(f"Stored number is not a decimal: {e}") from e
    return terms, DisplayScale(data["scale"])


def save_inputs(store: KeyValueStore, terms: LoanTerms, scale: DisplayScale) -> None:
    store.set(INPUTS_KEY, inputs_to_dict(terms, scale))


def load_inputs(store: KeyValueStore) -> tuple[LoanTerms, DisplayScale]:
    """Last-used inputs, or the configured defaults when none are stored or they are unreadable."""
    data = store.get(INPUTS_KEY)
    if data is None:
        return settings.default_terms, settings.default_scale
    try:
        return inputs_from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Ignoring malformed stored inputs: %s", e)
        return settings.default_terms, settings.default_scale


def save_theme(store: KeyValueStore, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme}")
    store.set(THEME_KEY, theme)


def load_theme(store: KeyValueStore) -> str:
    theme = store.get(THEME_KEY)
    return theme if theme in THEMES else "light"


@functools.lru_cache(maxsize=1)
def default_store() -> SQLiteStore:
    """Process-wide store at the configured path."""
    return SQLiteStore(settings.store_path)
