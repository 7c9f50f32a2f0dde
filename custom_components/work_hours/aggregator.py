"""Fold work entries into period totals."""
from __future__ import annotations

from collections.abc import Iterable

from .models import WorkEntry, WorkPeriodTotals


def aggregate(entries: Iterable[WorkEntry]) -> WorkPeriodTotals:
    """Sum tracked and extra minutes, split into whole hours and remainder."""
    entries = tuple(sorted(entries, key=lambda entry: entry.date))
    total = sum(entry.duration + entry.extra_minutes for entry in entries)
    hours, minutes = divmod(total, 60)
    return WorkPeriodTotals(entries=entries, total_hours=hours, total_minutes=minutes)
