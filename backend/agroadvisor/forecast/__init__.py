from .base import ForecastSource, MAX_FORECAST_DAYS
from .mock import MockForecastSource
from .openweather import OpenWeatherForecastSource
from .factory import get_forecast_source

__all__ = [
    "ForecastSource",
    "MAX_FORECAST_DAYS",
    "MockForecastSource",
    "OpenWeatherForecastSource",
    "get_forecast_source",
]
