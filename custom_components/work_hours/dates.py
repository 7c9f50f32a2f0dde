"""Date range calculations for the Work Hours integration."""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from homeassistant.util import dt as dt_util

from .models import DateRange, ViewMode

API_DATE_FORMAT = "%d-%m-%Y"


def period_for(reference: date, mode: ViewMode | str = ViewMode.WEEK) -> DateRange:
    """
    Get the period containing a reference date.

    Args:
        reference: Any date inside the wanted period
        mode: One of 'week', 'month', 'year'

    Returns:
        Monday to Sunday for weeks, the calendar month or the calendar year
    """
    mode = ViewMode(mode)

    if mode is ViewMode.WEEK:
        start = reference - timedelta(days=reference.weekday())
        return DateRange(start, start + timedelta(days=6))

    if mode is ViewMode.MONTH:
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return DateRange(reference.replace(day=1), reference.replace(day=last_day))

    return DateRange(date(reference.year, 1, 1), date(reference.year, 12, 31))


def _shift_reference(reference: date, mode: ViewMode, steps: int) -> date:
    """Move a period start by a number of whole periods."""
    if mode is ViewMode.WEEK:
        return reference + timedelta(weeks=steps)

    if mode is ViewMode.MONTH:
        month_index = reference.year * 12 + reference.month - 1 + steps
        return date(month_index // 12, month_index % 12 + 1, 1)

    return date(reference.year + steps, 1, 1)


def previous_period(current: DateRange, mode: ViewMode | str = ViewMode.WEEK) -> DateRange:
    """Get the period right before the given one."""
    mode = ViewMode(mode)
    return period_for(_shift_reference(current.start_date, mode, -1), mode)


def next_period(current: DateRange, mode: ViewMode | str = ViewMode.WEEK) -> DateRange:
    """Get the period right after the given one."""
    mode = ViewMode(mode)
    return period_for(_shift_reference(current.start_date, mode, 1), mode)


def enumerate_dates(date_range: DateRange) -> list[date]:
    """Every calendar date from start to end, both included."""
    return [
        date_range.start_date + timedelta(days=offset)
        for offset in range(date_range.days)
    ]


def to_date_key(value) -> date | None:
    """
    Convert a backend date value to the canonical date key.

    Args:
        value: A date, a datetime, an ISO string (YYYY-MM-DD, optionally with
            a time part) or a DD-MM-YYYY string

    Returns:
        The calendar date, or None when the value can't be understood
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]

    if parsed := dt_util.parse_date(text):
        return parsed

    try:
        return datetime.strptime(text, API_DATE_FORMAT).date()
    except ValueError:
        return None


def format_api_date(day: date) -> str:
    """Format a date the way the live endpoint expects it (DD-MM-YYYY)."""
    return day.strftime(API_DATE_FORMAT)


def format_date_range(date_range: DateRange, mode: ViewMode | str = ViewMode.WEEK) -> str:
    """Human readable label for a period."""
    mode = ViewMode(mode)
    start = date_range.start_date

    if mode is ViewMode.WEEK:
        end = date_range.end_date
        return (
            f"{start.strftime('%b')} {start.day} - "
            f"{end.strftime('%b')} {end.day}, {end.year}"
        )
    if mode is ViewMode.MONTH:
        return start.strftime("%B %Y")
    return str(start.year)


def remaining_days(date_range: DateRange, day: date) -> int:
    """Days left in a range, the given day included."""
    if day > date_range.end_date:
        return 0
    if day < date_range.start_date:
        return date_range.days
    return (date_range.end_date - day).days + 1
