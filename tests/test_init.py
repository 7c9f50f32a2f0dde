"""Tests for setting up the Work Hours integration."""
import pytest

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import MockConfigEntry
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.work_hours.const import (
    CONF_BASE_URL,
    DOMAIN,
    SERVICE_NEXT_PERIOD,
    SERVICE_PREVIOUS_PERIOD,
    SERVICE_SET_VIEW_MODE,
)
from custom_components.work_hours.dates import format_api_date, period_for, previous_period
from custom_components.work_hours.models import ViewMode

BASE_URL = "http://backend.local"


@pytest.fixture
def today():
    return dt_util.now().date()


@pytest.fixture
def backend(aioclient_mock: AiohttpClientMocker, today) -> AiohttpClientMocker:
    aioclient_mock.get(
        f"{BASE_URL}/work-data",
        json=[{"date": today.isoformat(), "hours": 1, "minutes": 0, "extraminutes": 10}],
    )
    aioclient_mock.get(
        f"{BASE_URL}/worktime",
        json=[{"date": format_api_date(today), "hours": 1, "minutes": 30, "extraminutes": 10}],
    )
    aioclient_mock.get(f"{BASE_URL}/hourlyRate", json=50)
    aioclient_mock.get(f"{BASE_URL}/getTargetHours", json=40)
    return aioclient_mock


@pytest.fixture
async def entry(hass: HomeAssistant, custom_integrations, backend) -> MockConfigEntry:
    entry = MockConfigEntry(domain=DOMAIN, unique_id=BASE_URL, data={CONF_BASE_URL: BASE_URL})
    entry.add_to_hass(hass)

    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()

    yield entry

    if entry.state is ConfigEntryState.LOADED:
        assert await hass.config_entries.async_unload(entry.entry_id)
        await hass.async_block_till_done()


async def test_sensors(hass: HomeAssistant, entry, today):
    assert entry.state is ConfigEntryState.LOADED

    current = hass.states.get("sensor.work_hours_current_period")
    assert current.state == "100"
    assert current.attributes["status"] == "ready"
    assert current.attributes["start_date"] == period_for(today, ViewMode.WEEK).start_date.isoformat()
    assert current.attributes["formatted"] == "1h 40m"
    assert len(current.attributes["entries"]) == 7

    previous = hass.states.get("sensor.work_hours_previous_period")
    assert previous.state == "0"

    today_state = hass.states.get("sensor.work_hours_today")
    assert today_state.state == "90"
    assert today_state.attributes["hours"] == 1
    assert today_state.attributes["minutes"] == 30

    earnings = hass.states.get("sensor.work_hours_earnings")
    assert float(earnings.state) == pytest.approx(83.33)
    assert earnings.attributes["hourly_rate"] == 50
    assert earnings.attributes["target_hours"] == 40
    assert earnings.attributes["period_target_hours"] == 40
    assert earnings.attributes["progress_percent"] == 4


async def test_navigation_services(hass: HomeAssistant, entry, today):
    week = period_for(today, ViewMode.WEEK)

    await hass.services.async_call(DOMAIN, SERVICE_PREVIOUS_PERIOD, {}, blocking=True)
    await hass.async_block_till_done()

    current = hass.states.get("sensor.work_hours_current_period")
    assert current.attributes["start_date"] == previous_period(week, ViewMode.WEEK).start_date.isoformat()
    assert current.state == "0"
    assert hass.states.get("sensor.work_hours_previous_period").attributes["view_mode"] == "week"

    await hass.services.async_call(DOMAIN, SERVICE_NEXT_PERIOD, {}, blocking=True)
    await hass.async_block_till_done()

    current = hass.states.get("sensor.work_hours_current_period")
    assert current.attributes["start_date"] == week.start_date.isoformat()
    assert current.state == "100"


async def test_set_view_mode_service(hass: HomeAssistant, entry, today):
    await hass.services.async_call(DOMAIN, SERVICE_SET_VIEW_MODE, {"view_mode": "month"}, blocking=True)
    await hass.async_block_till_done()

    current = hass.states.get("sensor.work_hours_current_period")
    month = period_for(period_for(today, ViewMode.WEEK).start_date, ViewMode.MONTH)
    assert current.attributes["view_mode"] == "month"
    assert current.attributes["start_date"] == month.start_date.isoformat()
    assert len(current.attributes["entries"]) == month.days

    earnings = hass.states.get("sensor.work_hours_earnings")
    assert earnings.attributes["target_hours"] == 40
    assert earnings.attributes["period_target_hours"] == round(40 * month.days / 7, 2)
    assert earnings.attributes["progress_percent"] <= 1


async def test_unload_removes_services(hass: HomeAssistant, entry):
    assert hass.services.has_service(DOMAIN, SERVICE_NEXT_PERIOD)

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.NOT_LOADED
    assert not hass.services.has_service(DOMAIN, SERVICE_NEXT_PERIOD)


async def test_setup_retries_when_backend_is_down(
    hass: HomeAssistant, custom_integrations, aioclient_mock: AiohttpClientMocker
):
    aioclient_mock.get(f"{BASE_URL}/work-data", status=500)
    aioclient_mock.get(f"{BASE_URL}/hourlyRate", json=50)
    aioclient_mock.get(f"{BASE_URL}/getTargetHours", json=40)
    entry = MockConfigEntry(domain=DOMAIN, unique_id=BASE_URL, data={CONF_BASE_URL: BASE_URL})
    entry.add_to_hass(hass)

    await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.SETUP_RETRY
