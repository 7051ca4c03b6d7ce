"""OpenWeatherMap forecast source (current weather + 5 day / 3 hour forecast)."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union

import httpx

from agroadvisor.config import settings
from agroadvisor.forecast.base import ForecastSource, MAX_FORECAST_DAYS
from agroadvisor.models.weather import (
    ForecastData,
    ForecastError,
    ForecastItem,
    LocationQuery,
    UnitSystem,
    WeatherData,
)

logger = logging.getLogger(__name__)

ICON_BASE_URL = "https://openweathermap.org/img/wn/"

# Slots between these local hours represent the day ("midday sample")
MIDDAY_START_HOUR = 10
MIDDAY_END_HOUR = 14

MS_TO_KMH = 3.6


def icon_url(icon_code: str) -> str:
    """Build the 2x icon URL for an OpenWeatherMap icon code."""
    if not icon_code:
        return ""
    return f"{ICON_BASE_URL}{icon_code}@2x.png"


def wind_speed_for_unit(speed: float, unit: UnitSystem) -> float:
    """OpenWeatherMap reports m/s for metric and mph for imperial; metric is exposed as km/h."""
    if unit is UnitSystem.METRIC:
        return round(speed * MS_TO_KMH, 1)
    return speed


class OpenWeatherForecastSource(ForecastSource):
    """OpenWeatherMap REST API source."""

    def __init__(self, source_id: str = "openweather", **kwargs):
        super().__init__(source_id, **kwargs)
        self.api_key = kwargs.get("api_key", settings.openweather_api_key)
        self.base_url = kwargs.get("base_url") or settings.openweather_base_url
        self.timeout = kwargs.get("timeout") or settings.request_timeout_seconds
        # Optional transport, used to fake the upstream API in tests
        self.transport: Optional[httpx.AsyncBaseTransport] = kwargs.get("transport")

    def _params(self, query: LocationQuery, unit: UnitSystem) -> Optional[Dict[str, Any]]:
        params: Dict[str, Any] = {"appid": self.api_key, "units": unit.value}
        if query.location:
            params["q"] = query.location
        elif query.has_coordinates:
            params["lat"] = query.lat
            params["lon"] = query.lon
        else:
            return None
        return params

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(f"{self.base_url}/{path}", params=params)
            response.raise_for_status()
            return response.json()

    async def get_current_weather(
        self,
        query: LocationQuery,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[WeatherData, ForecastError]:
        """Get current weather from the /weather endpoint."""
        if not self.api_key:
            return ForecastError(error="OpenWeatherMap API key is not configured.")

        params = self._params(query, unit)
        if params is None:
            return ForecastError(error="Either 'location' or 'lat' and 'lon' must be provided.")

        try:
            data = await self._get_json("weather", params)
            weather = data["weather"][0]
            return WeatherData(
                location=data.get("name") or query.describe(),
                temperature=data["main"]["temp"],
                feels_like=data["main"]["feels_like"],
                humidity=data["main"]["humidity"],
                description=weather["description"],
                wind_speed=wind_speed_for_unit(data["wind"]["speed"], unit),
                unit=unit.temperature_label,
                icon_url=icon_url(weather.get("icon", "")),
            )
        except httpx.HTTPStatusError as e:
            logger.error("Error fetching current weather for %s: %s", query.describe(), e)
            if e.response.status_code == 404:
                return ForecastError(error="Location not found. Please check the spelling or coordinates.")
            return ForecastError(error="Could not fetch current weather. Please try again later.")
        except httpx.HTTPError as e:
            logger.error("Error fetching current weather for %s: %s", query.describe(), e)
            return ForecastError(error="Could not fetch current weather. Please try again later.")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("Unexpected current weather payload for %s: %s", query.describe(), e)
            return ForecastError(error="Could not fetch current weather. Please try again later.")

    async def get_forecast(
        self,
        query: LocationQuery,
        days: int = 1,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[ForecastData, ForecastError]:
        """Get a daily forecast sampled from the 3-hourly /forecast endpoint."""
        if not self.api_key:
            return ForecastError(error="OpenWeatherMap API key is not configured.")

        params = self._params(query, unit)
        if params is None:
            return ForecastError(error="Either 'location' or 'lat' and 'lon' must be provided for forecast.")

        days = max(1, min(days, MAX_FORECAST_DAYS))

        try:
            data = await self._get_json("forecast", params)
            city = data.get("city", {})
            forecast = self._daily_samples(
                data["list"],
                days,
                unit,
                utc_offset_seconds=city.get("timezone", 0),
            )
        except httpx.HTTPStatusError as e:
            logger.error("Error fetching forecast for %s: %s", query.describe(), e)
            if e.response.status_code == 404:
                return ForecastError(error="Location not found for forecast. Please check coordinates.")
            return ForecastError(error="Could not fetch forecast. Please try again later.")
        except httpx.HTTPError as e:
            logger.error("Error fetching forecast for %s: %s", query.describe(), e)
            return ForecastError(error="Could not fetch forecast. Please try again later.")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("Unexpected forecast payload for %s: %s", query.describe(), e)
            return ForecastError(error="Could not fetch forecast. Please try again later.")

        logger.info(
            "Forecast fetched",
            extra={"location": query.describe(), "days_requested": days, "days_returned": len(forecast)},
        )
        return ForecastData(location=city.get("name") or query.describe(), forecast=forecast)

    @staticmethod
    def _daily_samples(
        slots: List[Dict[str, Any]],
        days: int,
        unit: UnitSystem,
        utc_offset_seconds: int = 0,
    ) -> List[ForecastItem]:
        """Pick the first midday slot of each local calendar day."""
        tz = timezone(timedelta(seconds=utc_offset_seconds))
        daily: List[ForecastItem] = []
        seen_dates = set()

        for slot in slots:
            local_time = datetime.fromtimestamp(slot["dt"], tz=tz)
            date_key = local_time.date().isoformat()

            if date_key in seen_dates:
                continue
            if not MIDDAY_START_HOUR <= local_time.hour <= MIDDAY_END_HOUR:
                continue

            weather = slot["weather"][0]
            daily.append(ForecastItem(
                date=date_key,
                temperature=slot["main"]["temp"],
                feels_like=slot["main"]["feels_like"],
                humidity=slot["main"]["humidity"],
                wind_speed=wind_speed_for_unit(slot["wind"]["speed"], unit),
                description=weather["description"],
                unit=unit.temperature_label,
                icon_url=icon_url(weather.get("icon", "")),
            ))
            seen_dates.add(date_key)

            if len(daily) >= days:
                break

        return daily
