"""Config flow for Work Hours integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResult
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.util import dt as dt_util

from .api import WorkDataApiClient, WorkDataApiError
from .const import (
    CONF_BASE_URL,
    CONF_CURRENCY_URL,
    CONF_SCAN_INTERVAL,
    CONF_VIEW_MODE,
    DEFAULT_BASE_URL,
    DEFAULT_CURRENCY_URL,
    DEFAULT_SCAN_INTERVAL,
    DOMAIN,
)
from .models import ViewMode

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_BASE_URL, default=DEFAULT_BASE_URL): str,
        vol.Optional(CONF_CURRENCY_URL, default=DEFAULT_CURRENCY_URL): str,
        vol.Optional(CONF_VIEW_MODE, default=ViewMode.WEEK.value): vol.In(
            [mode.value for mode in ViewMode]
        ),
        vol.Optional(CONF_SCAN_INTERVAL, default=DEFAULT_SCAN_INTERVAL): vol.All(
            vol.Coerce(int), vol.Range(min=10)
        ),
    }
)


async def validate_input(hass: HomeAssistant, data: dict[str, Any]) -> dict[str, Any]:
    """Validate the user input allows us to connect."""
    client = WorkDataApiClient(async_get_clientsession(hass), data[CONF_BASE_URL])
    today = dt_util.now().date()

    try:
        await client.async_fetch_range(today, today)
    except WorkDataApiError as err:
        raise CannotConnect from err

    return {"title": f"Work Hours - {client.base_url}"}


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Work Hours."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            try:
                info = await validate_input(self.hass, user_input)
            except CannotConnect:
                errors["base"] = "cannot_connect"
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Unexpected exception")
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(user_input[CONF_BASE_URL].rstrip("/"))
                self._abort_if_unique_id_configured()

                return self.async_create_entry(title=info["title"], data=user_input)

        return self.async_show_form(
            step_id="user", data_schema=STEP_USER_DATA_SCHEMA, errors=errors
        )


class CannotConnect(HomeAssistantError):
    """Error to indicate we cannot connect."""
