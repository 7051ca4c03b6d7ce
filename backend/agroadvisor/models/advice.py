"""Spraying advice models and the failure values the advisor can return."""
from enum import Enum
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class SprayingStatus(str, Enum):
    """Suitability verdict, ordered Good < Caution < Unsuitable."""

    GOOD = "Good"
    CAUTION = "Caution"
    UNSUITABLE = "Unsuitable"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def worst(self, other: "SprayingStatus") -> "SprayingStatus":
        """Return the more severe of the two statuses."""
        return self if self.severity >= other.severity else other


_SEVERITY = {
    SprayingStatus.GOOD: 0,
    SprayingStatus.CAUTION: 1,
    SprayingStatus.UNSUITABLE: 2,
}


class SprayingDetails(BaseModel):
    """Snapshot of the weather values the verdict was based on."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float
    feels_like: float
    humidity: float
    wind_speed: float = Field(..., alias="windSpeed")
    description: str
    rain_probability: int = Field(..., alias="rainProbability", ge=0, le=100)
    icon_url: str = Field("", alias="iconUrl")


class SprayingAdvice(BaseModel):
    """Spraying suitability advice for one location and day."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "location": "Nakuru",
                "date": "2025-07-08",
                "status": "Caution",
                "reasons": ["Wind speed (3 km/h) is marginal (ideal 5-20 km/h). Exercise caution."],
                "details": {
                    "temperature": 16.2,
                    "feels_like": 15.8,
                    "humidity": 70,
                    "windSpeed": 3,
                    "description": "few clouds",
                    "rainProbability": 0,
                    "iconUrl": "https://openweathermap.org/img/wn/02d@2x.png",
                },
            }
        },
    )

    location: str
    date: str
    status: SprayingStatus
    reasons: List[str] = Field(..., min_length=1)
    details: SprayingDetails


class AdviceFailure(BaseModel):
    """Base for failure values returned (never raised) by the advisor."""

    kind: str
    error: str


class InputValidationError(AdviceFailure):
    """The request was missing a date or a location, or the date was unreadable."""

    kind: Literal["input_validation"] = "input_validation"


class ForecastUnavailableError(AdviceFailure):
    """The forecast source failed or had no data for the requested day."""

    kind: Literal["forecast_unavailable"] = "forecast_unavailable"


AdviceResult = Union[SprayingAdvice, InputValidationError, ForecastUnavailableError]


class SprayingAdviceRequest(BaseModel):
    """Request body for spraying advice."""

    location: Optional[str] = Field(None, description="City or area name")
    latitude: Optional[float] = Field(None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(None, ge=-180.0, le=180.0)
    date: Optional[str] = Field(None, description="'today', 'tomorrow' or an ISO date such as '2025-07-08'")
