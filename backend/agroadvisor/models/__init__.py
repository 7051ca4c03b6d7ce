from .weather import (
    UnitSystem,
    LocationQuery,
    WeatherData,
    ForecastItem,
    ForecastData,
    ForecastError,
    LocationWeatherRequest,
    ForecastRequest,
)
from .advice import (
    SprayingStatus,
    SprayingDetails,
    SprayingAdvice,
    AdviceFailure,
    InputValidationError,
    ForecastUnavailableError,
    AdviceResult,
    SprayingAdviceRequest,
)
from .chat import ChatRequest, ChatResponse, ToolDeclaration

__all__ = [
    "UnitSystem",
    "LocationQuery",
    "WeatherData",
    "ForecastItem",
    "ForecastData",
    "ForecastError",
    "LocationWeatherRequest",
    "ForecastRequest",
    "SprayingStatus",
    "SprayingDetails",
    "SprayingAdvice",
    "AdviceFailure",
    "InputValidationError",
    "ForecastUnavailableError",
    "AdviceResult",
    "SprayingAdviceRequest",
    "ChatRequest",
    "ChatResponse",
    "ToolDeclaration",
]
