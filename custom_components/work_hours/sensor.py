"""Sensor platform for Work Hours integration."""
from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorDeviceClass, SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfTime
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .calculations import (
    calculate_converted_earnings,
    calculate_earnings,
    daily_totals,
    format_duration,
    period_target_hours,
    progress_percent,
    required_hours_per_day,
    work_report,
)
from .const import DOMAIN
from .coordinator import WorkHoursDataUpdateCoordinator
from .dates import format_date_range, remaining_days
from .models import DateRange, WorkEntry, WorkPeriodTotals


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Work Hours sensors based on a config entry."""
    coordinator = hass.data[DOMAIN][entry.entry_id]

    async_add_entities([
        WorkHoursPeriodSensor(coordinator, entry, previous=False),
        WorkHoursPeriodSensor(coordinator, entry, previous=True),
        WorkHoursTodaySensor(coordinator, entry),
        WorkHoursEarningsSensor(coordinator, entry),
    ])


def _entry_attributes(entry: WorkEntry) -> dict[str, Any]:
    return {
        "date": entry.date.isoformat(),
        "duration": entry.duration,
        "extra_minutes": entry.extra_minutes,
        "start_time": entry.start_time,
        "end_time": entry.end_time,
        "description": entry.description,
        "detailed_work": [
            {"start_time": s.start_time, "end_time": s.end_time, "duration": s.duration}
            for s in entry.detailed_work
        ],
    }


class WorkHoursEntity(CoordinatorEntity[WorkHoursDataUpdateCoordinator], SensorEntity):
    """Common base for Work Hours sensors."""

    _attr_device_class = SensorDeviceClass.DURATION
    _attr_native_unit_of_measurement = UnitOfTime.MINUTES

    def __init__(self, coordinator: WorkHoursDataUpdateCoordinator, entry: ConfigEntry, key: str, name: str) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{key}"
        self._attr_name = name
        self._attr_icon = "mdi:briefcase-clock"
        self._entry = entry

    @property
    def available(self) -> bool:
        """Stale data stays visible while a refresh is failing."""
        return self.coordinator.data is not None

    def _status_attributes(self) -> dict[str, Any]:
        return {
            "status": self.coordinator.status.value,
            "error": self.coordinator.last_error,
        }


class WorkHoursPeriodSensor(WorkHoursEntity):
    """Worked time of the active period or the one before it."""

    def __init__(self, coordinator: WorkHoursDataUpdateCoordinator, entry: ConfigEntry, previous: bool) -> None:
        """Initialize the sensor."""
        if previous:
            super().__init__(coordinator, entry, "previous_period", "Work Hours Previous Period")
        else:
            super().__init__(coordinator, entry, "current_period", "Work Hours Current Period")
        self._previous = previous

    def _period(self) -> tuple[DateRange, WorkPeriodTotals] | None:
        data = self.coordinator.data
        if not data:
            return None
        if self._previous:
            return data.previous_range, data.previous
        return data.date_range, data.current

    @property
    def native_value(self) -> int | None:
        """Return the worked minutes."""
        period = self._period()
        if period is None:
            return None
        return period[1].minutes_worked

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return the state attributes."""
        period = self._period()
        if period is None:
            return None

        date_range, totals = period
        view_mode = self.coordinator.data.view_mode

        return {
            **self._status_attributes(),
            "view_mode": view_mode.value,
            "period": format_date_range(date_range, view_mode),
            "start_date": date_range.start_date.isoformat(),
            "end_date": date_range.end_date.isoformat(),
            "total_hours": totals.total_hours,
            "total_minutes": totals.total_minutes,
            "formatted": format_duration(totals.minutes_worked),
            "daily_breakdown": daily_totals(totals.entries),
            "entries": [_entry_attributes(entry) for entry in totals.entries],
        }


class WorkHoursTodaySensor(WorkHoursEntity):
    """Live tracked time of today."""

    def __init__(self, coordinator: WorkHoursDataUpdateCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, "today", "Work Hours Today")
        self._attr_icon = "mdi:timer"

    @property
    def native_value(self) -> int | None:
        """Return today's tracked minutes."""
        if not self.coordinator.data or not self.coordinator.data.today:
            return None
        return self.coordinator.data.today.total_minutes

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return the state attributes."""
        if not self.coordinator.data:
            return None

        today = self.coordinator.data.today
        if not today:
            return {**self._status_attributes(), "hours": None, "minutes": None}

        return {
            **self._status_attributes(),
            "hours": today.hours,
            "minutes": today.minutes,
            "formatted": format_duration(today.total_minutes),
        }


class WorkHoursEarningsSensor(WorkHoursEntity):
    """Earnings projection for the active period."""

    _attr_device_class = SensorDeviceClass.MONETARY
    _attr_native_unit_of_measurement = "USD"

    def __init__(self, coordinator: WorkHoursDataUpdateCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, "earnings", "Work Hours Earnings")
        self._attr_icon = "mdi:cash"

    @property
    def native_value(self) -> float | None:
        """Return the earnings in USD."""
        data = self.coordinator.data
        if not data:
            return None
        return round(calculate_earnings(data.current.minutes_worked, data.settings.hourly_rate), 2)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return the state attributes."""
        data = self.coordinator.data
        if not data:
            return None

        settings = data.settings
        minutes_worked = data.current.minutes_worked
        days_left = remaining_days(data.date_range, self.coordinator.today())
        target_hours = period_target_hours(settings.target_hours, data.date_range)

        return {
            **self._status_attributes(),
            "hourly_rate": settings.hourly_rate,
            "dollar_rate": settings.dollar_rate,
            "target_hours": settings.target_hours,
            "period_target_hours": round(target_hours, 2),
            "converted_earnings": round(
                calculate_converted_earnings(minutes_worked, settings.hourly_rate, settings.dollar_rate), 2
            ),
            "progress_percent": progress_percent(minutes_worked, target_hours),
            "remaining_days": days_left,
            "required_hours_per_day": round(
                required_hours_per_day(target_hours, minutes_worked, days_left), 2
            ),
            "report": work_report(data.date_range, data.current, settings),
        }
