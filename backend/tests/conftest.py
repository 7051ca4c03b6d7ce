"""Shared fixtures: forecast items and an in-memory forecast source."""
from datetime import date, timedelta
from typing import List, Optional, Union

import pytest

from agroadvisor.forecast.base import ForecastSource
from agroadvisor.models.weather import (
    ForecastData,
    ForecastError,
    ForecastItem,
    LocationQuery,
    UnitSystem,
    WeatherData,
)

TODAY = date(2025, 7, 6)

OPTIMAL = {
    "temperature": 16.0,
    "feels_like": 15.5,
    "humidity": 70.0,
    "wind_speed": 10.0,
    "description": "few clouds",
    "icon_url": "https://openweathermap.org/img/wn/02d@2x.png",
}


def build_item(day_offset: int = 0, **overrides) -> ForecastItem:
    values = dict(OPTIMAL, date=(TODAY + timedelta(days=day_offset)).isoformat())
    values.update(overrides)
    return ForecastItem(**values)


class StubForecastSource(ForecastSource):
    """Returns fixed items (or a fixed error) and records every call."""

    def __init__(self, items: Optional[List[ForecastItem]] = None, error: Optional[str] = None):
        super().__init__("stub")
        self.items = items if items is not None else [build_item(i) for i in range(5)]
        self.error = error
        self.calls = []

    async def get_forecast(
        self,
        query: LocationQuery,
        days: int = 1,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[ForecastData, ForecastError]:
        self.calls.append((query, days, unit))
        if self.error:
            return ForecastError(error=self.error)
        return ForecastData(location="Stubville", forecast=self.items[:days])

    async def get_current_weather(
        self,
        query: LocationQuery,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[WeatherData, ForecastError]:
        self.calls.append((query, None, unit))
        if self.error:
            return ForecastError(error=self.error)
        item = self.items[0]
        return WeatherData(
            location=query.describe(),
            temperature=item.temperature,
            feels_like=item.feels_like,
            humidity=item.humidity,
            description=item.description,
            wind_speed=item.wind_speed,
            icon_url=item.icon_url,
        )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_item():
    """Factory for forecast items that default to optimal spraying weather."""
    return build_item


@pytest.fixture
def stub_source():
    """Factory for StubForecastSource instances."""
    def _make(items=None, error=None) -> StubForecastSource:
        return StubForecastSource(items=items, error=error)
    return _make
