"""Refresh today's entry of a period from the live source."""
from __future__ import annotations

import bisect
import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from .dates import to_date_key
from .models import DateRange, TodayWidget, WorkEntry
from .normalizer import (
    decode_detailed_work,
    entry_from_record,
    record_duration,
    record_extra_minutes,
)

if TYPE_CHECKING:
    from .api import WorkDataSource

_LOGGER = logging.getLogger(__name__)


def has_data(entry: WorkEntry | None) -> bool:
    """Whether the stored entry already shows some work."""
    if entry is None:
        return False
    return entry.duration > 0 or bool(entry.description)


def live_dates_for(entries: Sequence[WorkEntry], today: date) -> list[date]:
    """
    Dates to ask the live source for.

    The tracker may not have rolled today's output into the data source
    yet, so yesterday is pulled as well while today still looks empty.
    """
    existing = next((entry for entry in entries if entry.date == today), None)
    if has_data(existing):
        return [today]
    return [today - timedelta(days=1), today]


def _apply_live_record(entry: WorkEntry, record: Mapping[str, Any]) -> WorkEntry:
    """Overwrite the live fields of an entry, keeping what the record omits."""
    changes: dict[str, Any] = {"duration": record_duration(record)}

    if "detailedWork" in record:
        changes["detailed_work"] = decode_detailed_work(record["detailedWork"])

    extra_minutes = record_extra_minutes(record)
    if extra_minutes is not None:
        changes["extra_minutes"] = extra_minutes

    for key, field in (
        ("description", "description"),
        ("startTime", "start_time"),
        ("endTime", "end_time"),
    ):
        if record.get(key) is not None:
            changes[field] = str(record[key])

    return dataclasses.replace(entry, **changes)


def merge_live_records(
    entries: Sequence[WorkEntry],
    records: Iterable[Mapping[str, Any]] | None,
    today: date,
) -> tuple[list[WorkEntry], TodayWidget | None]:
    """
    Merge live records into a normalized entry sequence.

    Args:
        entries: Normalized entries, ascending by date
        records: Live records, dates in ISO or DD-MM-YYYY form
        today: The current date

    Returns:
        The merged entries (a new list, still one per date and ascending)
        and the today snapshot when the live source returned today
    """
    merged = list(entries)
    positions = {entry.date: index for index, entry in enumerate(merged)}
    widget = None

    for record in records or ():
        if not isinstance(record, Mapping):
            continue
        day = to_date_key(record.get("date"))
        if day is None:
            _LOGGER.debug(f"Skipping live record without a usable date: {record!r}")
            continue

        if day in positions:
            index = positions[day]
            merged[index] = _apply_live_record(merged[index], record)
        else:
            index = bisect.bisect_left([entry.date for entry in merged], day)
            merged.insert(index, entry_from_record(record, day))
            positions = {entry.date: i for i, entry in enumerate(merged)}

        if day == today:
            tracked = record_duration(record)
            widget = TodayWidget(
                hours=tracked // 60,
                minutes=tracked % 60,
                total_minutes=tracked,
            )

    return merged, widget


async def async_merge_today(
    source: WorkDataSource,
    entries: Sequence[WorkEntry],
    date_range: DateRange,
    today: date,
) -> tuple[list[WorkEntry], TodayWidget | None]:
    """Patch today's live work into the period entries.

    Nothing happens when today is outside the range. A failing live source
    leaves the entries as they are.
    """
    if today not in date_range:
        return list(entries), None

    dates = live_dates_for(entries, today)

    try:
        records = await source.async_fetch_live(dates)
    except Exception as err:
        _LOGGER.debug(f"Live refresh for {today.isoformat()} failed: {err}")
        return list(entries), None

    return merge_live_records(entries, records, today)
