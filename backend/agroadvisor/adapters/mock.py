"""Mock chat adapter for testing without API calls."""
import re
from typing import Any, Dict, Optional, Tuple
from agroadvisor.adapters.base import ChatAdapter

_LOCATION_PATTERN = re.compile(
    r"\b(?:in|at|for)\s+([A-Za-z][A-Za-z .'-]*?)(?=\s+(?:today|tomorrow|on|for|next)\b|[?.!,]|$)",
    re.IGNORECASE,
)
_DATE_PATTERN = re.compile(r"\b(today|tomorrow|\d{4}-\d{2}-\d{2})\b", re.IGNORECASE)
_DAYS_PATTERN = re.compile(r"\b(\d)\s*days?\b", re.IGNORECASE)


class MockChatAdapter(ChatAdapter):
    """Mock chat adapter that routes messages to tools by keyword.

    Replies are deterministic for a given message and forecast source.
    """

    FALLBACK_REPLY = (
        "I can check the current weather, the forecast for up to 5 days, or whether "
        "it's a good day to spray. Try: 'Can I spray in Nakuru tomorrow?'"
    )

    def _plan(self, message: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        text = message.lower()
        location_match = _LOCATION_PATTERN.search(message)
        if not location_match:
            return None
        location = location_match.group(1).strip()

        if "spray" in text:
            date_match = _DATE_PATTERN.search(message)
            target_date = date_match.group(1).lower() if date_match else "today"
            return "getSprayingAdvice", {"location": location, "date": target_date}
        if "forecast" in text:
            days_match = _DAYS_PATTERN.search(message)
            days = int(days_match.group(1)) if days_match else 1
            return "getForecast", {"location": location, "days": days}
        if "weather" in text:
            return "getCurrentWeather", {"location": location}
        return None

    async def respond(self, message: str) -> str:
        """Generate a mock reply, calling at most one tool."""
        plan = self._plan(message)
        if plan is None:
            return self.FALLBACK_REPLY

        tool_name, arguments = plan
        result = await self.toolbox.call(tool_name, arguments)
        if "error" in result:
            return f"Sorry, I couldn't complete that: {result['error']}"

        if tool_name == "getSprayingAdvice":
            reasons = " ".join(result["reasons"])
            return (
                f"Spraying conditions in {result['location']} on {result['date']}: "
                f"{result['status']}. {reasons}"
            )
        if tool_name == "getForecast":
            days = "; ".join(
                f"{day['date']}: {day['description']}, {day['temperature']}° "
                f"wind {day['wind_speed']}"
                for day in result["forecast"]
            )
            return f"Forecast for {result['location']}: {days}"
        return (
            f"Current weather in {result['location']}: {result['description']}, "
            f"{result['temperature']}° (feels like {result['feels_like']}°), "
            f"humidity {result['humidity']}%, wind {result['wind_speed']}."
        )
