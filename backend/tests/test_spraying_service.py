"""Tests for the spraying advisor service (day resolution and failures)."""
import pytest
from agroadvisor.forecast.mock import MockForecastSource
from agroadvisor.models.advice import (
    ForecastUnavailableError,
    InputValidationError,
    SprayingAdvice,
    SprayingStatus,
)
from agroadvisor.models.weather import UnitSystem
from agroadvisor.services.spraying import INVERSION_REASON, SprayingAdvisorService


@pytest.fixture
def advisor_for(today):
    """Build an advisor over a given source with a fixed current day."""
    def _make(source) -> SprayingAdvisorService:
        return SprayingAdvisorService(source, today_provider=lambda: today)
    return _make


@pytest.mark.asyncio
@pytest.mark.parametrize("target_date,days_requested,expected_date", [
    ("today", 1, "2025-07-06"),
    ("Tomorrow", 2, "2025-07-07"),
    ("2025-07-08", 3, "2025-07-08"),
    ("2025-07-16", 5, "2025-07-10"),
    ("2025-07-01", 1, "2025-07-06"),
])
async def test_day_offset_resolution(stub_source, advisor_for, target_date, days_requested, expected_date):
    """Test the target day is clamped to the 5-day forecast window."""
    source = stub_source()
    result = await advisor_for(source).get_advice(location="Nakuru", target_date=target_date)

    assert isinstance(result, SprayingAdvice)
    assert result.date == expected_date
    assert len(source.calls) == 1
    _, days, unit = source.calls[0]
    assert days == days_requested
    assert unit == UnitSystem.METRIC


@pytest.mark.asyncio
async def test_short_forecast_is_unavailable(stub_source, advisor_for, make_item):
    """Test a forecast without the requested day yields ForecastUnavailableError."""
    source = stub_source(items=[make_item(0), make_item(1)])
    result = await advisor_for(source).get_advice(location="Nakuru", target_date="2025-07-09")

    assert isinstance(result, ForecastUnavailableError)
    assert result.kind == "forecast_unavailable"
    assert "2025-07-09" in result.error
    assert "Nakuru" in result.error


@pytest.mark.asyncio
async def test_source_error_is_reported(stub_source, advisor_for):
    """Test an upstream failure is passed through with location and date."""
    source = stub_source(error="Location not found for forecast. Please check coordinates.")
    result = await advisor_for(source).get_advice(location="Atlantis", target_date="today")

    assert isinstance(result, ForecastUnavailableError)
    assert "Location not found" in result.error
    assert "Atlantis" in result.error
    assert "today" in result.error


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs", [
    {"location": "Nakuru"},
    {"location": "Nakuru", "target_date": "   "},
    {"target_date": "today"},
    {"target_date": "today", "lat": -0.3},
    {"location": "Nakuru", "target_date": "next week"},
    {"target_date": "today", "lat": 123.0, "lon": 36.0},
])
async def test_invalid_input(stub_source, advisor_for, kwargs):
    """Test missing or unreadable input is rejected before fetching a forecast."""
    source = stub_source()
    result = await advisor_for(source).get_advice(**kwargs)

    assert isinstance(result, InputValidationError)
    assert result.error
    assert source.calls == []


@pytest.mark.asyncio
async def test_coordinates_are_used_without_location(stub_source, advisor_for):
    """Test a lat/lon pair is accepted in place of a place name."""
    source = stub_source()
    result = await advisor_for(source).get_advice(target_date="today", lat=-0.3, lon=36.08)

    assert isinstance(result, SprayingAdvice)
    query, _, _ = source.calls[0]
    assert query.lat == -0.3 and query.lon == 36.08
    assert result.location == "lat:-0.3,lon:36.08"


@pytest.mark.asyncio
async def test_blank_location_falls_back_to_coordinates(stub_source, advisor_for):
    """Test a whitespace-only place name does not shadow a lat/lon pair."""
    source = stub_source()
    result = await advisor_for(source).get_advice(
        location="   ", target_date="today", lat=-0.3, lon=36.08
    )

    assert isinstance(result, SprayingAdvice)
    query, _, _ = source.calls[0]
    assert query.location is None
    assert result.location == "lat:-0.3,lon:36.08"


@pytest.mark.asyncio
async def test_inversion_uses_requested_hour(stub_source, advisor_for, make_item):
    """Test the inversion check reads the hour from the requested date."""
    source = stub_source(items=[make_item(0, wind_speed=3)])
    advisor = advisor_for(source)

    evening = await advisor.get_advice(location="Nakuru", target_date="2025-07-06T19:00")
    midday = await advisor.get_advice(location="Nakuru", target_date="2025-07-06T12:00")

    assert INVERSION_REASON in evening.reasons
    assert INVERSION_REASON not in midday.reasons
    assert evening.status == midday.status == SprayingStatus.CAUTION


@pytest.mark.asyncio
async def test_advice_is_idempotent(stub_source, advisor_for, make_item):
    """Test repeated requests over the same forecast give identical advice."""
    source = stub_source(items=[make_item(0, humidity=50, description="light drizzle")])
    advisor = advisor_for(source)

    first = await advisor.get_advice(location="Nakuru", target_date="today")
    second = await advisor.get_advice(location="Nakuru", target_date="today")

    assert first == second
    assert first.status == SprayingStatus.UNSUITABLE


@pytest.mark.asyncio
async def test_with_mock_source(advisor_for, today):
    """Test the advisor end to end over the deterministic mock source."""
    advisor = advisor_for(MockForecastSource(start_date=today))

    result = await advisor.get_advice(location="Nakuru", target_date="tomorrow")

    assert isinstance(result, SprayingAdvice)
    assert result.date == "2025-07-07"
    assert result.status in list(SprayingStatus)
    assert len(result.reasons) >= 1


@pytest.mark.asyncio
async def test_mock_source_with_too_few_days(advisor_for, today):
    """Test a source capped below the requested day reports unavailability."""
    advisor = advisor_for(MockForecastSource(start_date=today, days_available=2))

    result = await advisor.get_advice(location="Nakuru", target_date="2025-07-10")

    assert isinstance(result, ForecastUnavailableError)
    assert "2025-07-10" in result.error
