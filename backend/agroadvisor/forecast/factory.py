"""Factory for creating forecast sources."""
from typing import Optional
from agroadvisor.config import settings
from agroadvisor.forecast.base import ForecastSource
from agroadvisor.forecast.mock import MockForecastSource
from agroadvisor.forecast.openweather import OpenWeatherForecastSource


def get_forecast_source(source_id: Optional[str] = None, **kwargs) -> ForecastSource:
    """
    Create a forecast source by identifier.

    Args:
        source_id: "openweather" or "mock"; defaults to the configured source
        **kwargs: Additional configuration for the source

    Returns:
        ForecastSource instance
    """
    source_id = (source_id or settings.forecast_source).lower()
    if source_id.startswith("mock"):
        return MockForecastSource(source_id, **kwargs)
    elif source_id in ("openweather", "openweathermap", "owm"):
        return OpenWeatherForecastSource(source_id, **kwargs)
    raise ValueError(f"Unknown forecast source: {source_id}")
