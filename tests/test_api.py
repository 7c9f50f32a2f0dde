"""Tests for the work data backend client."""
from datetime import date

import aiohttp
import pytest

from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.work_hours.api import WorkDataApiClient, WorkDataApiError
from custom_components.work_hours.models import WorkSettings

BASE_URL = "http://backend.local"
CURRENCY_URL = "http://currency.local/json.gp"


@pytest.fixture
async def client(hass: HomeAssistant, aioclient_mock: AiohttpClientMocker) -> WorkDataApiClient:
    return WorkDataApiClient(async_get_clientsession(hass), f"{BASE_URL}/", CURRENCY_URL)


async def test_fetch_range(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/work-data", json=[{"date": "2024-01-01", "hours": 1}])

    records = await client.async_fetch_range(date(2024, 1, 1), date(2024, 1, 7))

    assert records == [{"date": "2024-01-01", "hours": 1}]
    url = aioclient_mock.mock_calls[0][1]
    assert url.query["startDate"] == "2024-01-01"
    assert url.query["endDate"] == "2024-01-07"


async def test_fetch_range_accepts_wrapped_payload(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/work-data", json={"workData": [{"date": "2024-01-01"}]})

    assert await client.async_fetch_range(date(2024, 1, 1), date(2024, 1, 1)) == [{"date": "2024-01-01"}]


async def test_fetch_live_sends_day_month_year_dates(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/worktime", json=[{"date": "10-06-2024", "hours": 2}])

    records = await client.async_fetch_live([date(2024, 6, 9), date(2024, 6, 10)])

    assert records == [{"date": "10-06-2024", "hours": 2}]
    assert aioclient_mock.mock_calls[0][1].query["dates"] == "09-06-2024,10-06-2024"


async def test_error_status_raises(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/work-data", status=500)

    with pytest.raises(WorkDataApiError):
        await client.async_fetch_range(date(2024, 1, 1), date(2024, 1, 7))


async def test_connection_error_raises(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/worktime", exc=aiohttp.ClientConnectionError())

    with pytest.raises(WorkDataApiError):
        await client.async_fetch_live([date(2024, 6, 10)])


async def test_timeout_raises(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/worktime", exc=TimeoutError())

    with pytest.raises(WorkDataApiError):
        await client.async_fetch_live([date(2024, 6, 10)])


async def test_settings(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/hourlyRate", json=50)
    aioclient_mock.get(f"{BASE_URL}/getTargetHours", json=35)
    aioclient_mock.get(CURRENCY_URL, json={"geoplugin_currencyConverter": 121.5})

    assert await client.async_get_settings() == WorkSettings(
        hourly_rate=50, target_hours=35, dollar_rate=121.5
    )


async def test_settings_fall_back_to_defaults(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/hourlyRate", status=404)
    aioclient_mock.get(f"{BASE_URL}/getTargetHours", exc=aiohttp.ClientError())
    aioclient_mock.get(CURRENCY_URL, status=500)

    assert await client.async_get_settings() == WorkSettings(
        hourly_rate=0, target_hours=40, dollar_rate=0
    )


async def test_currency_rate_is_cached(client, aioclient_mock):
    aioclient_mock.get(CURRENCY_URL, json={"rates": {"BDT": "122.335"}})

    assert await client.async_get_currency_rate() == pytest.approx(122.335)
    assert await client.async_get_currency_rate() == pytest.approx(122.335)
    assert aioclient_mock.call_count == 1


async def test_update_extra_minutes(client, aioclient_mock):
    aioclient_mock.post(f"{BASE_URL}/update-extra-minutes", json={"message": "ok"})

    await client.async_update_extra_minutes(date(2024, 6, 10), 25)

    assert aioclient_mock.call_count == 1
    assert aioclient_mock.mock_calls[0][0].upper() == "POST"


async def test_set_target_hours(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/setTargetHours", json=45)

    await client.async_set_target_hours(45)

    assert aioclient_mock.mock_calls[0][1].query["hours"] == "45"


async def test_invalid_json_raises(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/work-data", text="<html>oops</html>")

    with pytest.raises(WorkDataApiError):
        await client.async_fetch_range(date(2024, 1, 1), date(2024, 1, 7))


async def test_settings_survive_invalid_json(client, aioclient_mock):
    aioclient_mock.get(f"{BASE_URL}/hourlyRate", text="<html>oops</html>")
    aioclient_mock.get(f"{BASE_URL}/getTargetHours", json=35)
    aioclient_mock.get(CURRENCY_URL, text="not json")

    assert await client.async_get_settings() == WorkSettings(
        hourly_rate=0, target_hours=35, dollar_rate=0
    )
