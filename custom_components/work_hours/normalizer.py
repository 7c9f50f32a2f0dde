"""Turn raw backend records into one work entry per calendar date."""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from .dates import enumerate_dates, to_date_key
from .models import DateRange, WorkEntry, WorkSession

_LOGGER = logging.getLogger(__name__)

EXTRA_MINUTES_KEYS = ("extraminutes", "extraMinutes")


def _as_int(value: Any) -> int:
    """Read an integer from a backend field, treating junk as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def record_extra_minutes(record: Mapping[str, Any]) -> int | None:
    """Extra minutes of a record, or None when the record doesn't carry them."""
    for key in EXTRA_MINUTES_KEYS:
        if key in record:
            return max(0, _as_int(record[key]))
    return None


def record_duration(record: Mapping[str, Any]) -> int:
    """Tracked minutes of a record (hours * 60 + minutes)."""
    return max(0, _as_int(record.get("hours")) * 60 + _as_int(record.get("minutes")))


def _load_sessions(value: Any) -> list:
    if not isinstance(value, str):
        return value if isinstance(value, list) else []

    try:
        decoded = json.loads(value)
    except json.JSONDecodeError:
        # Older scraper output sometimes wraps the array in extra text
        start = value.find("[")
        end = value.rfind("]")
        if start == -1 or end <= start:
            raise
        decoded = json.loads(value[start:end + 1])

    return decoded if isinstance(decoded, list) else []


def decode_detailed_work(value: Any) -> tuple[WorkSession, ...]:
    """Decode the sub-sessions of a day. Malformed data gives no sessions."""
    if not value:
        return ()

    try:
        items = _load_sessions(value)
    except (json.JSONDecodeError, TypeError, ValueError) as err:
        _LOGGER.debug(f"Ignoring malformed detailed work {value!r}: {err}")
        return ()

    sessions = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        sessions.append(
            WorkSession(
                start_time=str(item.get("startTime", "")),
                end_time=str(item.get("endTime", "")),
                duration=str(item.get("duration", "")),
            )
        )
    return tuple(sessions)


def entry_from_record(record: Mapping[str, Any], day: date) -> WorkEntry:
    """Build the canonical entry for a raw record."""
    return WorkEntry(
        date=day,
        duration=record_duration(record),
        extra_minutes=record_extra_minutes(record) or 0,
        start_time=_as_text(record.get("startTime")),
        end_time=_as_text(record.get("endTime")),
        description=_as_text(record.get("description")),
        detailed_work=decode_detailed_work(record.get("detailedWork")),
    )


def index_records(raw_records: Iterable[Mapping[str, Any]] | None) -> dict[date, Mapping[str, Any]]:
    """Key raw records by canonical date. Later records win."""
    indexed: dict[date, Mapping[str, Any]] = {}
    for record in raw_records or ():
        if not isinstance(record, Mapping):
            continue
        day = to_date_key(record.get("date"))
        if day is None:
            _LOGGER.debug(f"Skipping record without a usable date: {record!r}")
            continue
        indexed[day] = record
    return indexed


def normalize(raw_records: Iterable[Mapping[str, Any]] | None, date_range: DateRange) -> list[WorkEntry]:
    """
    Map raw records onto every date of a range.

    Args:
        raw_records: Records as returned by the backend, in any order and
            with ISO or DD-MM-YYYY dates
        date_range: The period to cover

    Returns:
        One entry per date of the range, ascending. Dates without a record
        get a zero-duration placeholder.
    """
    indexed = index_records(raw_records)

    entries = []
    for day in enumerate_dates(date_range):
        record = indexed.get(day)
        entries.append(entry_from_record(record, day) if record is not None else WorkEntry(date=day))
    return entries
