# src/task_planner/connectors/spreadsheet_import.py

from __future__ import annotations

"""
Spreadsheet import.

Reads the first sheet of an .xlsx workbook into header-keyed rows and
normalizes each row into an ImportedRow. Column names vary between
spreadsheets, so every logical field has a prioritized alias list; header
matching is case-insensitive and ignores surrounding whitespace.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils.datetime import from_excel

from ..tasks.task_models import TaskValidationError, normalize_duration, normalize_name

logger = logging.getLogger(__name__)

# Evaluated in declared order; the first alias with a non-empty value wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("Task Name", "taskName", "Task", "Name"),
    "duration": ("Duration (hours)", "Duration hours", "durationHours", "Duration", "Hours"),
    "preferred_date": ("Preferred Date", "preferredDate", "Date"),
    "notes": ("Notes", "Note"),
    "task_type": ("Task Type", "taskType", "Type"),
}

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Loose formats tried in order after ISO parsing fails.
_LOOSE_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%d.%m.%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


@dataclass(frozen=True, slots=True)
class ImportedRow:
    name: str
    duration: float
    preferred_date: date | None
    notes: str
    task_type: str | None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def pick_field(row: Mapping[str, Any], field_name: str) -> Any:
    """Value of the first alias of `field_name` present (non-blank) in `row`."""
    by_key = {str(k).strip().lower(): v for k, v in row.items() if k is not None}
    for alias in FIELD_ALIASES[field_name]:
        value = by_key.get(alias.lower())
        if not _is_blank(value):
            return value
    return None


def normalize_date(value: Any) -> date | None:
    """
    Date cell -> date.

    Accepts date/datetime objects, spreadsheet serial numbers, ISO strings
    and a few loose text formats. Unparseable input returns None.
    """
    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        try:
            converted = from_excel(value)
        except (ValueError, OverflowError, TypeError):
            logger.warning("Unparseable spreadsheet date serial: %r", value)
            return None
        if isinstance(converted, datetime):
            return converted.date()
        if isinstance(converted, date):
            return converted
        return None

    s = str(value).strip()
    if _ISO_DATE.match(s):
        try:
            return date.fromisoformat(s)
        except ValueError:
            logger.warning("Invalid ISO date: %r", value)
            return None
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    for fmt in _LOOSE_DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue

    logger.warning("Unrecognized date format: %r; dropping field", value)
    return None


def normalize_row(row: Mapping[str, Any]) -> ImportedRow:
    """
    Map a raw row to an ImportedRow.

    Raises TaskValidationError when name or duration is missing/invalid; the
    caller skips the row.
    """
    name = normalize_name(pick_field(row, "name"))
    raw_duration = pick_field(row, "duration")
    if raw_duration is None:
        raise TaskValidationError("duration is required")
    duration = normalize_duration(raw_duration)

    notes_raw = pick_field(row, "notes")
    type_raw = pick_field(row, "task_type")
    return ImportedRow(
        name=name,
        duration=duration,
        preferred_date=normalize_date(pick_field(row, "preferred_date")),
        notes="" if notes_raw is None else str(notes_raw).strip(),
        task_type=None if type_raw is None else (str(type_raw).strip() or None),
    )


def read_xlsx_rows(path: str | Path) -> list[dict[str, Any]]:
    """
    Rows of the first worksheet as {header: value} dicts.

    Header row is row 1; fully empty rows are dropped. Cell values come from
    the cached results (data_only), so formulas yield their last value.
    """
    p = Path(path)
    wb = openpyxl.load_workbook(p, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        try:
            header_row = next(rows)
        except StopIteration:
            return []

        headers = [None if h is None else str(h).strip() for h in header_row]
        out: list[dict[str, Any]] = []
        for values in rows:
            if all(_is_blank(v) for v in values):
                continue
            record = {h: v for h, v in zip(headers, values) if h}
            out.append(record)
    finally:
        wb.close()

    logger.info("Read %d rows from %s", len(out), p)
    return out
