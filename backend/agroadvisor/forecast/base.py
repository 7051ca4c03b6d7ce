"""Base forecast source interface."""
from abc import ABC, abstractmethod
from typing import Union
from agroadvisor.models.weather import (
    ForecastData,
    ForecastError,
    LocationQuery,
    UnitSystem,
    WeatherData,
)

MAX_FORECAST_DAYS = 5


class ForecastSource(ABC):
    """Abstract base class for weather forecast sources.

    Sources never raise for upstream failures; they return a
    ``ForecastError`` carrying a human-readable message instead.
    """

    def __init__(self, source_id: str, **kwargs):
        """
        Initialize the source.

        Args:
            source_id: Identifier for the source (e.g., "openweather", "mock")
            **kwargs: Additional source-specific configuration
        """
        self.source_id = source_id
        self.config = kwargs

    @abstractmethod
    async def get_forecast(
        self,
        query: LocationQuery,
        days: int = 1,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[ForecastData, ForecastError]:
        """
        Get a daily forecast.

        Args:
            query: Place name or coordinates
            days: Number of days wanted, soonest first (at most 5)
            unit: Unit system for temperatures and wind speed

        Returns:
            ForecastData with up to ``days`` items, or ForecastError
        """
        pass

    @abstractmethod
    async def get_current_weather(
        self,
        query: LocationQuery,
        unit: UnitSystem = UnitSystem.METRIC,
    ) -> Union[WeatherData, ForecastError]:
        """Get current conditions for a location."""
        pass
