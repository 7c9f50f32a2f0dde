"""The Work Hours integration."""
from __future__ import annotations

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import WorkDataApiClient
from .const import (
    CONF_BASE_URL,
    CONF_CURRENCY_URL,
    CONF_SCAN_INTERVAL,
    CONF_VIEW_MODE,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
    SERVICE_GO_TO_TODAY,
    SERVICE_NEXT_PERIOD,
    SERVICE_PREVIOUS_PERIOD,
    SERVICE_SET_TARGET_HOURS,
    SERVICE_SET_VIEW_MODE,
    SERVICE_UPDATE_EXTRA_MINUTES,
    SERVICES,
)
from .coordinator import WorkHoursDataUpdateCoordinator
from .models import ViewMode

PLATFORMS: list[Platform] = [Platform.SENSOR]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Work Hours from a config entry."""
    client = WorkDataApiClient(
        async_get_clientsession(hass),
        entry.data[CONF_BASE_URL],
        entry.data.get(CONF_CURRENCY_URL),
    )

    coordinator = WorkHoursDataUpdateCoordinator(
        hass,
        client,
        config_entry=entry,
        view_mode=entry.data.get(CONF_VIEW_MODE, ViewMode.WEEK),
        scan_interval=entry.data.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL),
    )

    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = coordinator

    # Register services
    await _async_register_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    if unload_ok := await hass.config_entries.async_unload_platforms(entry, PLATFORMS):
        hass.data[DOMAIN].pop(entry.entry_id)

        # Unregister services if no more instances
        if not hass.data[DOMAIN]:
            for service in SERVICES:
                hass.services.async_remove(DOMAIN, service)

    return unload_ok


# Service schemas
NAVIGATION_SCHEMA = vol.Schema({})

SET_VIEW_MODE_SCHEMA = vol.Schema({
    vol.Required(CONF_VIEW_MODE): vol.In([mode.value for mode in ViewMode]),
})

UPDATE_EXTRA_MINUTES_SCHEMA = vol.Schema({
    vol.Required("date"): cv.date,
    vol.Required("minutes"): vol.All(vol.Coerce(int), vol.Range(min=0)),
})

SET_TARGET_HOURS_SCHEMA = vol.Schema({
    vol.Required("hours"): vol.All(vol.Coerce(float), vol.Range(min=0)),
})


def _coordinators(hass: HomeAssistant) -> list[WorkHoursDataUpdateCoordinator]:
    return list(hass.data.get(DOMAIN, {}).values())


async def _async_register_services(hass: HomeAssistant) -> None:
    """Register Work Hours services."""
    if hass.services.has_service(DOMAIN, SERVICE_NEXT_PERIOD):
        return

    async def async_next_period(call: ServiceCall) -> None:
        """Handle next period service call."""
        for coordinator in _coordinators(hass):
            await coordinator.async_next_period()

    async def async_previous_period(call: ServiceCall) -> None:
        """Handle previous period service call."""
        for coordinator in _coordinators(hass):
            await coordinator.async_previous_period()

    async def async_set_view_mode(call: ServiceCall) -> None:
        """Handle view mode service call."""
        for coordinator in _coordinators(hass):
            await coordinator.async_set_view_mode(call.data[CONF_VIEW_MODE])

    async def async_go_to_today(call: ServiceCall) -> None:
        """Handle go to today service call."""
        for coordinator in _coordinators(hass):
            await coordinator.async_go_to_today()

    async def async_update_extra_minutes(call: ServiceCall) -> None:
        """Handle extra minutes service call."""
        for coordinator in _coordinators(hass):
            await coordinator.async_update_extra_minutes(call.data["date"], call.data["minutes"])

    async def async_set_target_hours(call: ServiceCall) -> None:
        """Handle target hours service call."""
        for coordinator in _coordinators(hass):
            await coordinator.async_set_target_hours(call.data["hours"])

    for service, handler, schema in (
        (SERVICE_NEXT_PERIOD, async_next_period, NAVIGATION_SCHEMA),
        (SERVICE_PREVIOUS_PERIOD, async_previous_period, NAVIGATION_SCHEMA),
        (SERVICE_SET_VIEW_MODE, async_set_view_mode, SET_VIEW_MODE_SCHEMA),
        (SERVICE_GO_TO_TODAY, async_go_to_today, NAVIGATION_SCHEMA),
        (SERVICE_UPDATE_EXTRA_MINUTES, async_update_extra_minutes, UPDATE_EXTRA_MINUTES_SCHEMA),
        (SERVICE_SET_TARGET_HOURS, async_set_target_hours, SET_TARGET_HOURS_SCHEMA),
    ):
        hass.services.async_register(DOMAIN, service, handler, schema=schema)
