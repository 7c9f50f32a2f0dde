"""Earnings projections and display helpers."""
from __future__ import annotations

from collections.abc import Iterable

from .models import DateRange, WorkEntry, WorkPeriodTotals, WorkSettings


def calculate_earnings(total_minutes: int, hourly_rate: float) -> float:
    """Earnings in USD for the worked minutes."""
    return total_minutes / 60 * hourly_rate


def calculate_converted_earnings(total_minutes: int, hourly_rate: float, dollar_rate: float) -> float:
    """Earnings converted with the USD exchange rate."""
    return calculate_earnings(total_minutes, hourly_rate) * dollar_rate


def period_target_hours(weekly_target_hours: float, date_range: DateRange) -> float:
    """The weekly target scaled to the length of a period."""
    return weekly_target_hours * date_range.days / 7


def required_hours_per_day(target_hours: float, current_minutes: int, remaining_days: int) -> float:
    """
    Hours needed on each remaining day to reach the target.

    Args:
        target_hours: Target hours for the period
        current_minutes: Minutes already worked
        remaining_days: Days left, today included

    Returns:
        Hours per day, 0 when nothing is left to do
    """
    if remaining_days <= 0:
        return 0.0

    remaining_minutes = target_hours * 60 - current_minutes
    if remaining_minutes <= 0:
        return 0.0

    return remaining_minutes / 60 / remaining_days


def progress_percent(current_minutes: int, target_hours: float) -> int:
    """Progress towards the target, 0-100."""
    target_minutes = target_hours * 60
    if target_minutes <= 0:
        return 0
    return min(round(current_minutes / target_minutes * 100), 100)


def daily_totals(entries: Iterable[WorkEntry]) -> list[dict]:
    """Worked minutes per date, extra minutes included."""
    totals: dict = {}
    for entry in entries:
        totals[entry.date] = totals.get(entry.date, 0) + entry.total_minutes
    return [
        {"date": day.isoformat(), "minutes": minutes}
        for day, minutes in sorted(totals.items())
    ]


def format_duration(total_minutes: int) -> str:
    """Format minutes like 8h 30m."""
    hours, minutes = divmod(int(total_minutes), 60)
    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


def work_report(
    date_range: DateRange,
    totals: WorkPeriodTotals,
    settings: WorkSettings,
    description: str = "",
) -> str:
    """Plain text summary of a period with its earnings."""
    minutes_worked = totals.minutes_worked
    earnings = calculate_earnings(minutes_worked, settings.hourly_rate)
    converted = calculate_converted_earnings(
        minutes_worked, settings.hourly_rate, settings.dollar_rate
    )

    lines = [
        "Work Report",
        f"Period: {date_range.start_date.isoformat()} to {date_range.end_date.isoformat()}",
        "",
    ]
    if description:
        lines += [f"Description: {description}", ""]
    lines += [
        f"Total Hours: {totals.total_hours}h {totals.total_minutes}m",
        f"Hourly Rate: ${settings.hourly_rate:g}/hr",
        f"Total Earnings: ${earnings:.2f} (৳{converted:.2f})",
    ]
    return "\n".join(lines)

