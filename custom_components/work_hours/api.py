"""Client for the work data backend."""
from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date
from typing import Any

import aiohttp
import async_timeout

from homeassistant.exceptions import HomeAssistantError

from .const import (
    CURRENCY_RATE_TTL,
    DEFAULT_HOURLY_RATE,
    DEFAULT_TARGET_HOURS,
    REQUEST_TIMEOUT,
)
from .dates import format_api_date
from .models import WorkSettings

_LOGGER = logging.getLogger(__name__)


class WorkDataApiError(HomeAssistantError):
    """Error to indicate the backend could not be reached or answered badly."""


class WorkDataSource(ABC):
    """Read-only source of raw daily work records."""

    @abstractmethod
    async def async_fetch_range(self, start: date, end: date) -> list[dict[str, Any]]:
        """Records for every stored date between start and end."""

    @abstractmethod
    async def async_fetch_live(self, dates: Sequence[date]) -> list[dict[str, Any]]:
        """Freshly tracked records for the given dates."""

    async def async_get_settings(self) -> WorkSettings:
        """Rates and targets for earnings projections."""
        return WorkSettings()

    async def async_update_extra_minutes(self, day: date, minutes: int) -> None:
        """Store the manually added minutes of a day."""
        raise WorkDataApiError("This work data source is read-only")

    async def async_set_target_hours(self, hours: float) -> None:
        """Store new weekly target hours."""
        raise WorkDataApiError("This work data source is read-only")


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value) or default
    except (TypeError, ValueError):
        return default


class WorkDataApiClient(WorkDataSource):
    """Talk to the work data backend over HTTP."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        currency_url: str | None = None,
    ) -> None:
        """Initialize."""
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.currency_url = currency_url
        self._dollar_rate = 0.0
        self._dollar_rate_fetched = 0.0

    async def _async_request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        try:
            async with async_timeout.timeout(REQUEST_TIMEOUT):
                async with self.session.request(method, url, params=params, json=json) as response:
                    if response.status != 200:
                        raise WorkDataApiError(f"Error calling {url}: {response.status}")
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as err:
            raise WorkDataApiError(f"Error communicating with {url}: {err}") from err
        except ValueError as err:
            raise WorkDataApiError(f"Invalid response from {url}: {err}") from err

    async def async_fetch_range(self, start: date, end: date) -> list[dict[str, Any]]:
        """Get the stored records of a date range."""
        data = await self._async_request(
            "GET",
            f"{self.base_url}/work-data",
            params={"startDate": start.isoformat(), "endDate": end.isoformat()},
        )
        if isinstance(data, dict):
            data = data.get("workData")
        return data if isinstance(data, list) else []

    async def async_fetch_live(self, dates: Sequence[date]) -> list[dict[str, Any]]:
        """Get the live records of specific dates."""
        data = await self._async_request(
            "GET",
            f"{self.base_url}/worktime",
            params={"dates": ",".join(format_api_date(day) for day in dates)},
        )
        return data if isinstance(data, list) else []

    async def async_get_hourly_rate(self) -> float:
        """Get the hourly rate, 0 when the backend doesn't know it."""
        try:
            data = await self._async_request("GET", f"{self.base_url}/hourlyRate")
        except WorkDataApiError as err:
            _LOGGER.warning(f"Error getting hourly rate: {err}")
            return DEFAULT_HOURLY_RATE
        return _as_float(data, DEFAULT_HOURLY_RATE)

    async def async_get_target_hours(self) -> float:
        """Get the weekly target hours."""
        try:
            data = await self._async_request("GET", f"{self.base_url}/getTargetHours")
        except WorkDataApiError as err:
            _LOGGER.warning(f"Error getting target hours: {err}")
            return DEFAULT_TARGET_HOURS
        return _as_float(data, DEFAULT_TARGET_HOURS)

    async def async_get_settings(self) -> WorkSettings:
        """Get rates and targets, falling back to defaults."""
        hourly_rate, target_hours, dollar_rate = await asyncio.gather(
            self.async_get_hourly_rate(),
            self.async_get_target_hours(),
            self.async_get_currency_rate(),
        )
        return WorkSettings(
            hourly_rate=hourly_rate,
            target_hours=target_hours,
            dollar_rate=dollar_rate,
        )

    async def async_set_target_hours(self, hours: float) -> None:
        """Store new weekly target hours."""
        await self._async_request(
            "GET", f"{self.base_url}/setTargetHours", params={"hours": f"{hours:g}"}
        )

    async def async_update_extra_minutes(self, day: date, minutes: int) -> None:
        """Store the manually added minutes of a day."""
        await self._async_request(
            "POST",
            f"{self.base_url}/update-extra-minutes",
            json={"date": day.isoformat(), "minutes": minutes},
        )
        _LOGGER.info(f"Extra minutes for {day.isoformat()} set to {minutes}")

    async def async_get_currency_rate(self) -> float:
        """Get the USD exchange rate, cached for an hour."""
        now = time.monotonic()
        if self._dollar_rate > 0 and now - self._dollar_rate_fetched < CURRENCY_RATE_TTL:
            return self._dollar_rate

        if not self.currency_url:
            return self._dollar_rate

        try:
            data = await self._async_request("GET", self.currency_url)
        except WorkDataApiError as err:
            _LOGGER.warning(f"Error getting currency rate: {err}")
            return self._dollar_rate

        new_rate = 0.0
        if isinstance(data, dict):
            rates = data.get("rates") or {}
            if isinstance(rates, dict) and rates.get("BDT"):
                new_rate = _as_float(rates["BDT"], 0.0)
            elif data.get("geoplugin_currencyConverter"):
                new_rate = _as_float(data["geoplugin_currencyConverter"], 0.0)

        if new_rate > 0:
            self._dollar_rate = new_rate
            self._dollar_rate_fetched = now

        return self._dollar_rate
