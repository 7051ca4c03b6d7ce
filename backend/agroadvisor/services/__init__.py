from .spraying import (
    SprayingAdvisorService,
    derive_rain_probability,
    evaluate_forecast,
)
from .prompts import PromptBuilder
from .tools import WeatherToolbox, TOOL_DECLARATIONS

__all__ = [
    "SprayingAdvisorService",
    "derive_rain_probability",
    "evaluate_forecast",
    "PromptBuilder",
    "WeatherToolbox",
    "TOOL_DECLARATIONS",
]
