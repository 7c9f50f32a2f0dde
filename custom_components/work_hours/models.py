"""Data model for the Work Hours integration."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class ViewMode(StrEnum):
    """Length of the period shown on the dashboard."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class LoadStatus(StrEnum):
    """Lifecycle of a coordinator load cycle."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar dates."""

    start_date: date
    end_date: date

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start_date <= day <= self.end_date

    @property
    def days(self) -> int:
        """Number of calendar days in the range."""
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class WorkSession:
    """A single start/stop interval inside a working day. Display only."""

    start_time: str
    end_time: str
    duration: str


@dataclass(frozen=True)
class WorkEntry:
    """One calendar date's work record."""

    date: date
    duration: int = 0
    extra_minutes: int = 0
    start_time: str | None = None
    end_time: str | None = None
    description: str | None = None
    detailed_work: tuple[WorkSession, ...] = ()

    @property
    def total_minutes(self) -> int:
        """Tracked duration plus manually added minutes."""
        return self.duration + self.extra_minutes


@dataclass(frozen=True)
class WorkPeriodTotals:
    """Entries of a period with their summed worked time."""

    entries: tuple[WorkEntry, ...] = ()
    total_hours: int = 0
    total_minutes: int = 0

    @property
    def minutes_worked(self) -> int:
        return self.total_hours * 60 + self.total_minutes


@dataclass(frozen=True)
class TodayWidget:
    """Live snapshot of today's tracked time, without extra minutes."""

    hours: int
    minutes: int
    total_minutes: int


@dataclass(frozen=True)
class WorkSettings:
    """Rates and targets used for earnings projections."""

    hourly_rate: float = 0.0
    target_hours: float = 40.0
    dollar_rate: float = 0.0


@dataclass(frozen=True)
class WorkHoursViewModel:
    """Everything the dashboard shows for one load cycle."""

    view_mode: ViewMode
    date_range: DateRange
    previous_range: DateRange
    current: WorkPeriodTotals
    previous: WorkPeriodTotals
    today: TodayWidget | None = None
    settings: WorkSettings = field(default_factory=WorkSettings)
