"""Coordinator keeping the dashboard view model up to date."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, timedelta

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from .aggregator import aggregate
from .api import WorkDataSource
from .const import DEFAULT_SCAN_INTERVAL, DOMAIN
from .dates import next_period, period_for, previous_period
from .models import DateRange, LoadStatus, ViewMode, WorkHoursViewModel
from .normalizer import normalize
from .reconciler import async_merge_today

_LOGGER = logging.getLogger(__name__)


def _today() -> date:
    return dt_util.now().date()


class WorkHoursDataUpdateCoordinator(DataUpdateCoordinator[WorkHoursViewModel]):
    """Class to manage fetching and folding work data for the active period."""

    def __init__(
        self,
        hass: HomeAssistant,
        source: WorkDataSource,
        config_entry: ConfigEntry | None = None,
        view_mode: ViewMode | str = ViewMode.WEEK,
        scan_interval: int = DEFAULT_SCAN_INTERVAL,
        today: Callable[[], date] = _today,
    ) -> None:
        """Initialize."""
        self.source = source
        self.view_mode = ViewMode(view_mode)
        self._today = today
        self.date_range = period_for(today(), self.view_mode)
        self.status = LoadStatus.IDLE
        self.last_error: str | None = None
        self._generation = 0

        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=DOMAIN,
            update_interval=timedelta(seconds=scan_interval),
        )

    def today(self) -> date:
        """The current date in the configured time zone."""
        return self._today()

    def _superseded_result(self, date_range: DateRange) -> WorkHoursViewModel:
        """Data to hand back from a load that a newer one replaced."""
        if self.data is None:
            raise UpdateFailed(f"Load for {date_range} was superseded before any data was available")
        return self.data

    async def _async_update_data(self) -> WorkHoursViewModel:
        """Run one load cycle for the active period."""
        self._generation += 1
        generation = self._generation
        view_mode = self.view_mode
        date_range = self.date_range
        comparison_range = previous_period(date_range, view_mode)
        today = self._today()

        self.status = LoadStatus.LOADING

        try:
            current_records, previous_records, settings = await asyncio.gather(
                self.source.async_fetch_range(date_range.start_date, date_range.end_date),
                self.source.async_fetch_range(comparison_range.start_date, comparison_range.end_date),
                self.source.async_get_settings(),
            )
        except Exception as err:
            if generation != self._generation:
                _LOGGER.debug(f"Ignoring failure of superseded load for {date_range}: {err}")
                return self._superseded_result(date_range)
            self.status = LoadStatus.ERROR
            self.last_error = str(err)
            raise UpdateFailed(f"Error communicating with API: {err}") from err

        current_entries = normalize(current_records, date_range)
        previous_entries = normalize(previous_records, comparison_range)

        current_entries, today_widget = await async_merge_today(
            self.source, current_entries, date_range, today
        )
        # Yesterday may come back from the live source on the first day of a period
        current_entries = [entry for entry in current_entries if entry.date in date_range]

        if generation != self._generation:
            _LOGGER.debug(f"Discarding superseded load for {date_range}")
            return self._superseded_result(date_range)

        self.status = LoadStatus.READY
        self.last_error = None

        return WorkHoursViewModel(
            view_mode=view_mode,
            date_range=date_range,
            previous_range=comparison_range,
            current=aggregate(current_entries),
            previous=aggregate(previous_entries),
            today=today_widget,
            settings=settings,
        )

    async def async_next_period(self) -> None:
        """Move to the next period and reload."""
        self.date_range = next_period(self.date_range, self.view_mode)
        await self.async_refresh()

    async def async_previous_period(self) -> None:
        """Move to the previous period and reload."""
        self.date_range = previous_period(self.date_range, self.view_mode)
        await self.async_refresh()

    async def async_set_view_mode(self, view_mode: ViewMode | str) -> None:
        """Switch view mode around the start of the current range and reload."""
        self.view_mode = ViewMode(view_mode)
        self.date_range = period_for(self.date_range.start_date, self.view_mode)
        await self.async_refresh()

    async def async_go_to_today(self) -> None:
        """Jump back to the period containing today and reload."""
        self.date_range = period_for(self._today(), self.view_mode)
        await self.async_refresh()

    async def async_update_extra_minutes(self, day: date, minutes: int) -> None:
        """Store extra minutes for a day and reload."""
        await self.source.async_update_extra_minutes(day, minutes)
        await self.async_refresh()

    async def async_set_target_hours(self, hours: float) -> None:
        """Store new weekly target hours and reload."""
        await self.source.async_set_target_hours(hours)
        await self.async_refresh()
