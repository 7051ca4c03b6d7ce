"""Mock forecast source for testing and offline development."""
import random
import zlib
from datetime import date, timedelta
from typing import List, Optional, Union

from agroadvisor.forecast.base import ForecastSource, MAX_FORECAST_DAYS
from agroadvisor.models.weather import (
    ForecastData,
    ForecastError,
    ForecastItem,
    LocationQuery,
    UnitSystem,
    WeatherData,
)

# (description, icon code)
CONDITIONS = [
    ("clear sky", "01d"),
    ("few clouds", "02d"),
    ("scattered clouds", "03d"),
    ("overcast clouds", "04d"),
    ("light rain", "10d"),
    ("thunderstorm", "11d"),
]
CONDITION_WEIGHTS = [4, 4, 3, 2, 2, 1]


def _c_to_f(celsius: float) -> float:
    return round(celsius * 9 / 5 + 32, 1)


def _kmh_to_mph(kmh: float) -> float:
    return round(kmh * 0.621371, 1)


class MockForecastSource(ForecastSource):
    """Forecast source that returns deterministic data per location.

    The same location always yields the same sequence of days, so advice
    computed from it is reproducible.
    """

    def __init__(self, source_id: str = "mock", **kwargs):
        super().__init__(source_id, **kwargs)
        self.start_date: Optional[date] = kwargs.get("start_date")
        # Caps how many days the source can return, to simulate short forecasts
        self.days_available: int = kwargs.get("days_available", MAX_FORECAST_DAYS)

    def _rng(self, query: LocationQuery) -> random.Random:
        seed = zlib.crc32(query.describe().lower().encode("utf-8"))
        return random.Random(seed)

    def _sample(self, rng: random.Random, day: date, unit: UnitSystem) -> ForecastItem:
        temperature = round(rng.uniform(6.0, 28.0), 1)
        wind_kmh = round(rng.uniform(1.0, 24.0), 1)
        description, icon = rng.choices(CONDITIONS, weights=CONDITION_WEIGHTS)[0]
        feels_like = round(temperature - wind_kmh / 10, 1)

        if unit is UnitSystem.IMPERIAL:
            temperature, feels_like = _c_to_f(temperature), _c_to_f(feels_like)
            wind = _kmh_to_mph(wind_kmh)
        else:
            wind = wind_kmh

        return ForecastItem(
            date=day.isoformat(),
            temperature=temperature,
            feels_like=feels_like,
            humidity=rng.randint(40, 98),
            wind_speed=wind,
            description=description,
            unit=unit.temperature_label,
            icon_url=f"https://openweathermap.org/img/wn/{icon}@2x.png",
        )

    async def get_forecast(
        self,
        query: LocationQuery,
        days: int = 1,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[ForecastData, ForecastError]:
        """Generate a mock forecast."""
        if not query.is_complete:
            return ForecastError(error="Either 'location' or 'lat' and 'lon' must be provided for forecast.")

        start = self.start_date or date.today()
        rng = self._rng(query)
        count = max(0, min(days, MAX_FORECAST_DAYS, self.days_available))
        forecast: List[ForecastItem] = [
            self._sample(rng, start + timedelta(days=i), unit) for i in range(count)
        ]
        return ForecastData(location=query.describe(), forecast=forecast)

    async def get_current_weather(
        self,
        query: LocationQuery,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[WeatherData, ForecastError]:
        """Current weather is the first mock forecast day."""
        if not query.is_complete:
            return ForecastError(error="Either 'location' or 'lat' and 'lon' must be provided.")

        today = self._sample(self._rng(query), self.start_date or date.today(), unit)
        return WeatherData(
            location=query.describe(),
            temperature=today.temperature,
            feels_like=today.feels_like,
            humidity=today.humidity,
            description=today.description,
            wind_speed=today.wind_speed,
            unit=today.unit,
            icon_url=today.icon_url,
        )
