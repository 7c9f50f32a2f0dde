"""Helpers shared by the Work Hours tests."""
from __future__ import annotations

import asyncio
from datetime import date

from custom_components.work_hours.api import WorkDataSource
from custom_components.work_hours.dates import to_date_key
from custom_components.work_hours.models import WorkSettings


def record(day: str, hours: int = 0, minutes: int = 0, **fields) -> dict:
    """Build a raw backend record."""
    return {"date": day, "hours": hours, "minutes": minutes, **fields}


class FakeWorkDataSource(WorkDataSource):
    """In-memory work data source recording every call."""

    def __init__(self, records=None, live=None, settings=None) -> None:
        self.records = list(records or [])
        self.live = list(live or [])
        self.settings = settings or WorkSettings()
        self.range_calls: list[tuple[date, date]] = []
        self.live_calls: list[list[date]] = []
        self.extra_minutes: dict[date, int] = {}
        self.range_error: Exception | None = None
        self.live_error: Exception | None = None
        self.gates: dict[date, asyncio.Event] = {}
        self.errors: dict[date, Exception] = {}

    async def async_fetch_range(self, start, end):
        self.range_calls.append((start, end))
        if gate := self.gates.get(start):
            await gate.wait()
        if error := self.errors.get(start):
            raise error
        if self.range_error:
            raise self.range_error
        return [
            item for item in self.records
            if start <= to_date_key(item["date"]) <= end
        ]

    async def async_fetch_live(self, dates):
        self.live_calls.append(list(dates))
        if self.live_error:
            raise self.live_error
        return list(self.live)

    async def async_get_settings(self):
        return self.settings

    async def async_update_extra_minutes(self, day, minutes):
        self.extra_minutes[day] = minutes
        for item in self.records:
            if to_date_key(item["date"]) == day:
                item["extraminutes"] = minutes


async def wait_until(predicate, attempts: int = 100) -> bool:
    """Yield to the event loop until the predicate holds."""
    for _ in range(attempts):
        if predicate():
            return True
        await asyncio.sleep(0)
    return predicate()
