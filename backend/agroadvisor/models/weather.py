"""Weather and forecast data models shared by all forecast sources."""
from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UnitSystem(str, Enum):
    """Unit system requested from a forecast source."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def temperature_label(self) -> str:
        return "Celsius" if self is UnitSystem.METRIC else "Fahrenheit"


TemperatureUnit = Literal["Celsius", "Fahrenheit"]


class LocationQuery(BaseModel):
    """A place name or a latitude/longitude pair."""

    location: Optional[str] = Field(None, description="Free-text place name, e.g. 'Nairobi'")
    lat: Optional[float] = Field(None, ge=-90.0, le=90.0)
    lon: Optional[float] = Field(None, ge=-180.0, le=180.0)

    @field_validator("location")
    @classmethod
    def blank_location_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Trim the place name; a blank name counts as not given."""
        if v is None:
            return None
        return v.strip() or None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None

    @property
    def is_complete(self) -> bool:
        return bool(self.location) or self.has_coordinates

    def describe(self) -> str:
        """Human readable label used in messages and logs."""
        if self.location:
            return self.location
        if self.has_coordinates:
            return f"lat:{self.lat},lon:{self.lon}"
        return "unknown location"


class WeatherData(BaseModel):
    """Current weather conditions for a location."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location: str
    temperature: float
    feels_like: float
    humidity: float = Field(..., description="Relative humidity in %")
    description: str
    wind_speed: float = Field(..., description="km/h for metric, mph for imperial")
    unit: TemperatureUnit = "Celsius"
    icon_url: str = Field("", alias="iconUrl")


class ForecastItem(BaseModel):
    """A single day's midday-representative forecast sample."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = Field(..., description="Calendar day key (ISO format)")
    temperature: float
    feels_like: float
    humidity: float = Field(..., description="Relative humidity in %")
    wind_speed: float = Field(..., description="km/h for metric, mph for imperial")
    description: str
    unit: TemperatureUnit = "Celsius"
    icon_url: str = Field("", alias="iconUrl")


class ForecastData(BaseModel):
    """Multi-day forecast; ``forecast[0]`` is the soonest day."""

    location: str
    forecast: List[ForecastItem] = Field(default_factory=list)


class ForecastError(BaseModel):
    """Failure returned by a forecast source instead of data."""

    error: str


class LocationWeatherRequest(BaseModel):
    """Request body for current weather."""

    location: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(None, ge=-180.0, le=180.0)
    unit: UnitSystem = UnitSystem.METRIC


class ForecastRequest(LocationWeatherRequest):
    """Request body for a multi-day forecast."""

    days: int = Field(default=1, ge=1, le=5, description="Number of forecast days (max 5)")
