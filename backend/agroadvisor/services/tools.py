"""Tool set exposed to chat models: current weather, forecast and spraying advice."""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from agroadvisor.forecast.base import ForecastSource, MAX_FORECAST_DAYS
from agroadvisor.forecast.factory import get_forecast_source
from agroadvisor.models.chat import ToolDeclaration
from agroadvisor.models.weather import LocationQuery, UnitSystem
from agroadvisor.services.spraying import SprayingAdvisorService

logger = logging.getLogger(__name__)

_UNIT_PARAMETER = {
    "type": "string",
    "enum": ["metric", "imperial"],
    "description": "The unit system to use (metric for Celsius, imperial for Fahrenheit). Defaults to metric.",
}

TOOL_DECLARATIONS: List[ToolDeclaration] = [
    ToolDeclaration(
        name="getCurrentWeather",
        description="Gets the current weather for a specified location.",
        parameters={
            "type": "object",
            "properties": {
                "location": {"type": "string", "description": "The city name for which to get the weather."},
                "unit": _UNIT_PARAMETER,
            },
            "required": ["location"],
        },
    ),
    ToolDeclaration(
        name="getForecast",
        description=(
            "Gets the weather forecast for a specified number of days in a location. "
            f"Limited to a maximum of {MAX_FORECAST_DAYS} days."
        ),
        parameters={
            "type": "object",
            "properties": {
                "location": {"type": "string", "description": "The city name for which to get the forecast."},
                "days": {
                    "type": "integer",
                    "description": f"The number of days for the forecast (e.g., 1 for tomorrow, up to {MAX_FORECAST_DAYS} days).",
                },
                "unit": _UNIT_PARAMETER,
            },
            "required": ["location"],
        },
    ),
    ToolDeclaration(
        name="getSprayingAdvice",
        description=(
            "Checks if it's a good day to spray a crop field based on weather conditions like wind, "
            "temperature, humidity, and rain for a specified location and date."
        ),
        parameters={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "The city or area name for which to check spraying conditions.",
                },
                "date": {
                    "type": "string",
                    "description": "The specific date for the check (e.g., 'today', 'tomorrow', '2025-07-08').",
                },
            },
            "required": ["location", "date"],
        },
    ),
]


class WeatherToolbox:
    """Executes tool calls requested by a chat model.

    Results are plain JSON-serialisable dicts; failures come back as
    ``{"error": ...}`` so the model can explain them to the user.
    """

    def __init__(
        self,
        forecast_source: Optional[ForecastSource] = None,
        advisor: Optional[SprayingAdvisorService] = None,
    ):
        self.forecast_source = forecast_source or get_forecast_source()
        self.advisor = advisor or SprayingAdvisorService(self.forecast_source)
        self._handlers: Dict[str, Callable[..., Awaitable[Dict[str, Any]]]] = {
            "getCurrentWeather": self.get_current_weather,
            "getForecast": self.get_forecast,
            "getSprayingAdvice": self.get_spraying_advice,
        }

    @property
    def declarations(self) -> List[ToolDeclaration]:
        return TOOL_DECLARATIONS

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run the named tool with keyword arguments from the model."""
        handler = self._handlers.get(name)
        if handler is None:
            return {"error": f"Unknown function requested: {name}"}

        logger.info("Tool call requested", extra={"tool": name, "arguments": arguments or {}})
        try:
            return await handler(**(arguments or {}))
        except (TypeError, ValueError) as e:
            logger.warning("Invalid tool arguments for %s: %s", name, e)
            return {"error": f"Invalid arguments for {name}: {e}"}

    async def get_current_weather(self, location: str, unit: str = "metric") -> Dict[str, Any]:
        result = await self.forecast_source.get_current_weather(
            LocationQuery(location=location), UnitSystem(unit)
        )
        return result.model_dump(by_alias=True)

    async def get_forecast(self, location: str, days: int = 1, unit: str = "metric") -> Dict[str, Any]:
        result = await self.forecast_source.get_forecast(
            LocationQuery(location=location), int(days), UnitSystem(unit)
        )
        return result.model_dump(by_alias=True)

    async def get_spraying_advice(self, location: str, date: str) -> Dict[str, Any]:
        result = await self.advisor.get_advice(location=location, target_date=date)
        return result.model_dump(by_alias=True, mode="json")
