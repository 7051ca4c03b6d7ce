"""Spraying suitability advisor: threshold rules over a daily forecast."""
import logging
from dataclasses import dataclass
from datetime import date
from functools import reduce
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from agroadvisor.forecast.base import ForecastSource
from agroadvisor.forecast.factory import get_forecast_source
from agroadvisor.models.advice import (
    AdviceResult,
    ForecastUnavailableError,
    InputValidationError,
    SprayingAdvice,
    SprayingDetails,
    SprayingStatus,
)
from agroadvisor.models.weather import ForecastError, ForecastItem, LocationQuery, UnitSystem
from agroadvisor.utils.dates import parse_target_date, resolve_day_offset

logger = logging.getLogger(__name__)

ALL_CLEAR_REASON = "All weather parameters appear within optimal ranges."
INVERSION_REASON = (
    "Potential for temperature inversion due to calm and clear conditions. "
    "Avoid spraying if an inversion is suspected."
)

RuleOutcome = Tuple[SprayingStatus, str]


@dataclass(frozen=True)
class RangeThreshold:
    """Optimal band nested inside a caution band; outside the caution band is unsuitable."""

    label: str
    unit: str
    optimal_min: float
    optimal_max: float
    caution_min: float
    caution_max: float
    risk: str

    def classify(self, value: float) -> SprayingStatus:
        if value < self.caution_min or value > self.caution_max:
            return SprayingStatus.UNSUITABLE
        if value < self.optimal_min or value > self.optimal_max:
            return SprayingStatus.CAUTION
        return SprayingStatus.GOOD

    def check(self, value: float) -> Optional[RuleOutcome]:
        status = self.classify(value)
        ideal = f"ideal {_fmt(self.optimal_min)}-{_fmt(self.optimal_max)}{self.unit}"
        reading = f"{self.label} ({_fmt(value)}{self.unit})"
        if status is SprayingStatus.UNSUITABLE:
            return status, f"{reading} is unsuitable ({ideal}). {self.risk}"
        if status is SprayingStatus.CAUTION:
            return status, f"{reading} is marginal ({ideal}). Exercise caution."
        return None


WIND_SPEED = RangeThreshold(
    label="Wind speed", unit=" km/h",
    optimal_min=5, optimal_max=20, caution_min=2, caution_max=25,
    risk="Risk of drift or inversion.",
)
TEMPERATURE = RangeThreshold(
    label="Temperature", unit="°C",
    optimal_min=12, optimal_max=20, caution_min=4, caution_max=25,
    risk="Risk of reduced efficacy or plant damage.",
)
HUMIDITY = RangeThreshold(
    label="Humidity", unit="%",
    optimal_min=60, optimal_max=85, caution_min=45, caution_max=95,
    risk="Risk of rapid evaporation or excessive droplet persistence.",
)

RAIN_UNSUITABLE_ABOVE = 20
RAIN_CAUTION_ABOVE = 0

# Inversion heuristic: calm air in the evening, night or early morning
INVERSION_MAX_WIND = 5
INVERSION_EVENING_HOUR = 18
INVERSION_MORNING_HOUR = 8


def _fmt(value: float) -> str:
    return f"{value:g}"


def derive_rain_probability(description: str) -> int:
    """Estimate rain probability (%) from a condition description."""
    text = description.lower()
    if "storm" in text:
        return 80
    if "rain" in text or "drizzle" in text or "shower" in text:
        return 50
    return 0


def check_rain(rain_probability: int) -> Optional[RuleOutcome]:
    if rain_probability > RAIN_UNSUITABLE_ABOVE:
        return SprayingStatus.UNSUITABLE, f"High chance of rain ({rain_probability}%). Product may wash off."
    if rain_probability > RAIN_CAUTION_ABOVE:
        return (
            SprayingStatus.CAUTION,
            f"Some chance of rain ({rain_probability}%). Consider product rainfastness and forecast.",
        )
    return None


def check_inversion(wind_speed: float, target_hour: int) -> Optional[RuleOutcome]:
    """Flag a possible temperature inversion: calm air outside daytime hours.

    Clear skies only matter under the same calm, off-hours conditions.
    """
    off_hours = target_hour >= INVERSION_EVENING_HOUR or target_hour <= INVERSION_MORNING_HOUR
    if wind_speed < INVERSION_MAX_WIND and off_hours:
        return SprayingStatus.CAUTION, INVERSION_REASON
    return None


def evaluate_forecast(item: ForecastItem, location: str, target_hour: int = 0) -> SprayingAdvice:
    """
    Evaluate one day's forecast against the spraying thresholds.

    Checks run in a fixed order (wind, temperature, humidity, rain,
    inversion) and the overall status is the most severe outcome, so an
    Unsuitable verdict can never be downgraded by a later check.

    Args:
        item: Metric forecast sample for the target day
        location: Location label echoed in the advice
        target_hour: Hour of day the caller intends to spray (0-23)

    Returns:
        SprayingAdvice with a non-empty reasons list
    """
    rain_probability = derive_rain_probability(item.description)

    checks: List[Callable[[], Optional[RuleOutcome]]] = [
        lambda: WIND_SPEED.check(item.wind_speed),
        lambda: TEMPERATURE.check(item.temperature),
        lambda: HUMIDITY.check(item.humidity),
        lambda: check_rain(rain_probability),
        lambda: check_inversion(item.wind_speed, target_hour),
    ]
    outcomes = [outcome for outcome in (check() for check in checks) if outcome is not None]

    status = reduce(lambda acc, outcome: acc.worst(outcome[0]), outcomes, SprayingStatus.GOOD)
    reasons = [reason for _, reason in outcomes] or [ALL_CLEAR_REASON]

    return SprayingAdvice(
        location=location,
        date=item.date,
        status=status,
        reasons=reasons,
        details=SprayingDetails(
            temperature=item.temperature,
            feels_like=item.feels_like,
            humidity=item.humidity,
            wind_speed=item.wind_speed,
            description=item.description,
            rain_probability=rain_probability,
            icon_url=item.icon_url,
        ),
    )


class SprayingAdvisorService:
    """Resolves the target day, fetches the forecast and evaluates it."""

    def __init__(
        self,
        forecast_source: Optional[ForecastSource] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self.forecast_source = forecast_source or get_forecast_source()
        self.today_provider = today_provider

    async def get_advice(
        self,
        location: Optional[str] = None,
        target_date: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
    ) -> AdviceResult:
        """
        Produce spraying advice for a location and date.

        Args:
            location: Place name (used when given)
            target_date: "today", "tomorrow" or an ISO date/datetime
            lat: Latitude, used with ``lon`` when no place name is given
            lon: Longitude

        Returns:
            SprayingAdvice, InputValidationError or ForecastUnavailableError
        """
        try:
            query = LocationQuery(location=location, lat=lat, lon=lon)
        except ValidationError as e:
            return InputValidationError(error=f"Invalid coordinates: {e.errors()[0]['msg']}")
        if not target_date or not target_date.strip():
            return InputValidationError(
                error="A date is required (e.g., 'today', 'tomorrow' or '2025-07-08')."
            )
        if not query.is_complete:
            return InputValidationError(
                error="Either 'location' or 'latitude' and 'longitude' must be provided."
            )

        today = self.today_provider()
        try:
            requested = parse_target_date(target_date, today)
        except ValueError as e:
            return InputValidationError(error=str(e))

        offset = resolve_day_offset(requested.date(), today)
        label = query.describe()

        forecast_result = await self.forecast_source.get_forecast(
            query, days=offset + 1, unit=UnitSystem.METRIC
        )
        if isinstance(forecast_result, ForecastError):
            logger.warning(
                "Forecast unavailable for spraying advice",
                extra={"location": label, "date": target_date, "reason": forecast_result.error},
            )
            return ForecastUnavailableError(
                error=(
                    f"Could not get weather data for spraying advice for {label} on {target_date}: "
                    f"{forecast_result.error}"
                )
            )

        if len(forecast_result.forecast) <= offset:
            logger.warning(
                "Forecast too short for requested date",
                extra={"location": label, "date": target_date, "offset": offset,
                       "days_returned": len(forecast_result.forecast)},
            )
            return ForecastUnavailableError(
                error=(
                    f"No forecast available for {target_date} in {label}. "
                    "Please ensure the date is within the next 5 days."
                )
            )

        advice = evaluate_forecast(forecast_result.forecast[offset], label, target_hour=requested.hour)
        logger.info(
            "Spraying advice evaluated",
            extra={"location": label, "date": advice.date, "offset": offset, "status": advice.status.value},
        )
        return advice
