"""Spreadsheet export of a payment schedule.

One row per schedule entry, columns ``period, Principal, Interest``.
"""

import io
import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pandas as pd

from loan_calculator.exceptions import ExportError
from loan_calculator.models.loan import DisplayScale, ScheduleEntry

logger = logging.getLogger(__name__)

COLUMNS = ["period", "Principal", "Interest"]
SHEET_NAME = "Payment Schedule"
FORMATS = ("xlsx", "csv")

MEDIA_TYPES = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
}


def schedule_to_frame(entries: list[ScheduleEntry]) -> pd.DataFrame:
    rows = [
        {
            "period": e.index,
            "Principal": float(e.principal_portion),
            "Interest": float(e.interest_portion),
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def export_filename(scale: DisplayScale, ext: str = "xlsx", now: datetime | None = None) -> str:
    """``<ISO timestamp> <scale> Loan Calculator.<ext>``, UTC to the second."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H:%M:%S")
    return f"{timestamp} {scale.value} Loan Calculator.{ext}"


def _check_format(fmt: str) -> None:
    if fmt not in FORMATS:
        raise ExportError(f"Unsupported export format: {fmt} (expected one of {', '.join(FORMATS)})")


def schedule_to_bytes(entries: list[ScheduleEntry], fmt: str = "xlsx") -> bytes:
    _check_format(fmt)
    df = schedule_to_frame(entries)
    if fmt == "csv":
        return df.to_csv(index=False).encode("utf-8")

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
    return buffer.getvalue()


def write_schedule(
    entries: list[ScheduleEntry],
    scale: DisplayScale,
    directory: str | Path,
    fmt: str = "xlsx",
    now: datetime | None = None,
) -> Path:
    """Write the schedule to ``directory`` and return the file path."""
    _check_format(fmt)
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(scale, fmt, now)
    path.write_bytes(schedule_to_bytes(entries, fmt))
    logger.info("Exported %d schedule rows to %s", len(entries), path)
    return path


def entries_to_records(entries: list[ScheduleEntry]) -> list[dict]:
    """JSON-safe form of a schedule (Decimals as strings)."""
    return [
        {
            "index": e.index,
            "principal_portion": str(e.principal_portion),
            "interest_portion": str(e.interest_portion),
        }
        for e in entries
    ]


def entries_from_records(records: list[dict]) -> list[ScheduleEntry]:
    return [
        ScheduleEntry(
            index=int(r["index"]),
            principal_portion=Decimal(r["principal_portion"]),
            interest_portion=Decimal(r["interest_portion"]),
        )
        for r in records
    ]
