"""FastAPI main application."""
import logging
from fastapi import Depends, FastAPI, HTTPException, Query
from agroadvisor.config import settings
from agroadvisor.forecast.base import ForecastSource
from agroadvisor.forecast.factory import get_forecast_source
from agroadvisor.logging_config import configure_logging
from agroadvisor.models.advice import (
    InputValidationError,
    SprayingAdvice,
    SprayingAdviceRequest,
)
from agroadvisor.models.chat import ChatRequest, ChatResponse
from agroadvisor.models.weather import (
    ForecastData,
    ForecastError,
    ForecastRequest,
    LocationQuery,
    LocationWeatherRequest,
    WeatherData,
)
from agroadvisor.services.chat import ChatService
from agroadvisor.services.spraying import SprayingAdvisorService
from agroadvisor.services.tools import WeatherToolbox
from agroadvisor.storage.database import AdviceStore, get_db

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)

# Initialize services
forecast_source = get_forecast_source()
advisor_service = SprayingAdvisorService(forecast_source)
chat_service = ChatService(WeatherToolbox(forecast_source, advisor_service))


def get_source() -> ForecastSource:
    return forecast_source


def get_advisor() -> SprayingAdvisorService:
    return advisor_service


def get_chat_service() -> ChatService:
    return chat_service


def _location_query(location, latitude, longitude) -> LocationQuery:
    query = LocationQuery(location=location, lat=latitude, lon=longitude)
    if not query.is_complete:
        raise HTTPException(
            status_code=400,
            detail="Either 'location' or 'latitude' and 'longitude' are required.",
        )
    return query


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"{settings.app_name} is running!", "version": "1.0.0"}


@app.post("/api/spraying-advice", response_model=SprayingAdvice)
async def get_spraying_suggestion(
    request: SprayingAdviceRequest,
    advisor: SprayingAdvisorService = Depends(get_advisor),
    store: AdviceStore = Depends(get_db),
):
    """
    Get spraying advice for a location and date.

    The date may be "today", "tomorrow" or an ISO date such as "2025-07-08".
    Dates more than 4 days ahead use the last available forecast day.
    """
    result = await advisor.get_advice(
        location=request.location,
        target_date=request.date,
        lat=request.latitude,
        lon=request.longitude,
    )

    if isinstance(result, InputValidationError):
        raise HTTPException(status_code=400, detail=result.error)
    if not isinstance(result, SprayingAdvice):
        raise HTTPException(status_code=404, detail=result.error)

    store.save_advice(result)
    return result


@app.get("/api/spraying-advice/latest", response_model=SprayingAdvice)
async def get_latest_spraying_advice(
    location: str = Query(..., min_length=1, description="Location name used in the original request"),
    store: AdviceStore = Depends(get_db),
):
    """Get the most recent stored advice for a location."""
    advice = store.get_latest_advice(location)
    if advice is None:
        raise HTTPException(status_code=404, detail=f"No spraying advice found for {location}")
    return advice


@app.post("/api/weather", response_model=WeatherData)
async def get_location_weather(
    request: LocationWeatherRequest,
    source: ForecastSource = Depends(get_source),
):
    """Get current weather by coordinates or place name."""
    query = _location_query(request.location, request.latitude, request.longitude)
    result = await source.get_current_weather(query, request.unit)
    if isinstance(result, ForecastError):
        raise HTTPException(status_code=404, detail=result.error)
    return result


@app.post("/api/forecast", response_model=ForecastData)
async def get_location_forecast(
    request: ForecastRequest,
    source: ForecastSource = Depends(get_source),
):
    """Get a daily forecast (up to 5 days) by coordinates or place name."""
    query = _location_query(request.location, request.latitude, request.longitude)
    result = await source.get_forecast(query, request.days, request.unit)
    if isinstance(result, ForecastError):
        raise HTTPException(status_code=404, detail=result.error)
    return result


@app.post("/api/v1/chat", response_model=ChatResponse)
async def chat_with_ai(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    """Chat with the agriculture assistant."""
    try:
        reply = await service.reply(request.message, request.model_id)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RuntimeError as e:
        logger.error("Chat provider failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))
    return ChatResponse(response=reply)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
