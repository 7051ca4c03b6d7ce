"""Tests for the OpenWeatherMap and mock forecast sources."""
from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

from agroadvisor.forecast.factory import get_forecast_source
from agroadvisor.forecast.mock import MockForecastSource
from agroadvisor.forecast.openweather import OpenWeatherForecastSource
from agroadvisor.models.weather import (
    ForecastData,
    ForecastError,
    LocationQuery,
    UnitSystem,
    WeatherData,
)

START = datetime(2025, 7, 6, tzinfo=timezone.utc)


def forecast_payload(slots: int = 40) -> dict:
    """5 day / 3 hour payload for a city at UTC+3 (local noon = 09:00 UTC)."""
    items = []
    for i in range(slots):
        items.append({
            "dt": int((START + timedelta(hours=3 * i)).timestamp()),
            "main": {"temp": 10.0 + i, "feels_like": 9.0 + i, "humidity": 60 + (i % 30)},
            "wind": {"speed": 2.5},
            "weather": [{"description": "light rain" if i % 2 else "few clouds", "icon": "10d"}],
        })
    return {"city": {"name": "Nakuru", "timezone": 3 * 3600}, "list": items}


CURRENT_PAYLOAD = {
    "name": "Nakuru",
    "main": {"temp": 18.2, "feels_like": 17.9, "humidity": 64},
    "wind": {"speed": 3.0},
    "weather": [{"description": "scattered clouds", "icon": "03d"}],
}


def make_source(handler, **kwargs) -> OpenWeatherForecastSource:
    return OpenWeatherForecastSource(
        api_key=kwargs.pop("api_key", "test-key"),
        base_url="https://owm.test/data/2.5",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_openweather_forecast_samples_midday_per_day():
    """Test one local-midday slot is picked per calendar day."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=forecast_payload())

    result = await make_source(handler).get_forecast(LocationQuery(location="Nakuru"), days=3)

    assert isinstance(result, ForecastData)
    assert result.location == "Nakuru"
    assert [item.date for item in result.forecast] == ["2025-07-06", "2025-07-07", "2025-07-08"]
    # 09:00 UTC slots are index 3, 11, 19
    assert [item.temperature for item in result.forecast] == [13.0, 21.0, 29.0]
    first = result.forecast[0]
    assert first.wind_speed == 9.0
    assert first.unit == "Celsius"
    assert first.icon_url == "https://openweathermap.org/img/wn/10d@2x.png"

    params = requests[0].url.params
    assert requests[0].url.path.endswith("/forecast")
    assert params["q"] == "Nakuru"
    assert params["units"] == "metric"
    assert params["appid"] == "test-key"


@pytest.mark.asyncio
async def test_openweather_forecast_by_coordinates_imperial():
    """Test coordinates are sent as lat/lon and imperial wind is left in mph."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=forecast_payload())

    result = await make_source(handler).get_forecast(
        LocationQuery(lat=-0.3, lon=36.08), days=1, unit=UnitSystem.IMPERIAL
    )

    assert isinstance(result, ForecastData)
    assert result.forecast[0].wind_speed == 2.5
    assert result.forecast[0].unit == "Fahrenheit"
    params = requests[0].url.params
    assert params["lat"] == "-0.3"
    assert params["lon"] == "36.08"
    assert "q" not in params


@pytest.mark.asyncio
async def test_openweather_blank_location_uses_coordinates():
    """Test a whitespace-only place name is not sent as the q parameter."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=forecast_payload())

    result = await make_source(handler).get_forecast(
        LocationQuery(location="   ", lat=-0.3, lon=36.08), days=1
    )

    assert isinstance(result, ForecastData)
    params = requests[0].url.params
    assert "q" not in params
    assert (params["lat"], params["lon"]) == ("-0.3", "36.08")


@pytest.mark.asyncio
async def test_openweather_forecast_days_are_capped():
    """Test at most five days are returned."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=forecast_payload())

    result = await make_source(handler).get_forecast(LocationQuery(location="Nakuru"), days=9)
    assert len(result.forecast) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("status,message", [
    (404, "Location not found for forecast"),
    (500, "Could not fetch forecast"),
])
async def test_openweather_forecast_http_errors(status, message):
    """Test HTTP failures become ForecastError values."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"message": "nope"})

    result = await make_source(handler).get_forecast(LocationQuery(location="Atlantis"))

    assert isinstance(result, ForecastError)
    assert message in result.error


@pytest.mark.asyncio
async def test_openweather_network_error():
    """Test transport errors become ForecastError values."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await make_source(handler).get_forecast(LocationQuery(location="Nakuru"))

    assert isinstance(result, ForecastError)
    assert "try again later" in result.error


@pytest.mark.asyncio
async def test_openweather_not_configured():
    """Test a missing API key is reported without calling the API."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=forecast_payload())

    source = make_source(handler, api_key="")

    forecast = await source.get_forecast(LocationQuery(location="Nakuru"))
    current = await source.get_current_weather(LocationQuery(location="Nakuru"))

    assert isinstance(forecast, ForecastError)
    assert "not configured" in forecast.error
    assert isinstance(current, ForecastError)
    assert calls == []


@pytest.mark.asyncio
async def test_openweather_requires_location_or_coordinates():
    """Test an empty query is rejected."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=forecast_payload())

    result = await make_source(handler).get_forecast(LocationQuery(lat=1.0))
    assert isinstance(result, ForecastError)


@pytest.mark.asyncio
async def test_openweather_current_weather():
    """Test current weather parsing and wind conversion to km/h."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=CURRENT_PAYLOAD)

    result = await make_source(handler).get_current_weather(LocationQuery(lat=-0.3, lon=36.08))

    assert isinstance(result, WeatherData)
    assert requests[0].url.path.endswith("/weather")
    assert result.location == "Nakuru"
    assert result.wind_speed == 10.8
    assert result.icon_url == "https://openweathermap.org/img/wn/03d@2x.png"
    assert result.model_dump(by_alias=True)["iconUrl"] == result.icon_url


@pytest.mark.asyncio
async def test_openweather_current_weather_not_found():
    """Test 404 from the current weather endpoint."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "city not found"})

    result = await make_source(handler).get_current_weather(LocationQuery(location="Atlantis"))

    assert isinstance(result, ForecastError)
    assert "Location not found" in result.error


@pytest.mark.asyncio
async def test_mock_source_is_deterministic():
    """Test the mock source returns the same days for the same location."""
    source = MockForecastSource(start_date=date(2025, 7, 6))

    first = await source.get_forecast(LocationQuery(location="Nakuru"), days=5)
    second = await source.get_forecast(LocationQuery(location="nakuru"), days=5)

    assert first.forecast == second.forecast
    assert [item.date for item in first.forecast] == [
        "2025-07-06", "2025-07-07", "2025-07-08", "2025-07-09", "2025-07-10",
    ]


@pytest.mark.asyncio
async def test_mock_source_limits_and_units():
    """Test day caps, imperial labels and incomplete queries."""
    source = MockForecastSource(start_date=date(2025, 7, 6), days_available=2)

    capped = await source.get_forecast(LocationQuery(location="Nakuru"), days=5)
    imperial = await source.get_current_weather(LocationQuery(location="Nakuru"), UnitSystem.IMPERIAL)
    missing = await source.get_forecast(LocationQuery())

    assert len(capped.forecast) == 2
    assert imperial.unit == "Fahrenheit"
    assert isinstance(missing, ForecastError)


def test_forecast_source_factory():
    """Test the factory picks sources by identifier."""
    assert isinstance(get_forecast_source("mock"), MockForecastSource)
    assert isinstance(get_forecast_source("openweather"), OpenWeatherForecastSource)
    with pytest.raises(ValueError):
        get_forecast_source("crystal-ball")
