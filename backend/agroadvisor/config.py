"""Configuration settings for the application."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Agriculture Assistant API"
    debug: bool = False
    log_level: str = "INFO"
    database_path: str = "agroadvisor.db"

    # Forecast source: "openweather" or "mock"
    forecast_source: str = "openweather"
    request_timeout_seconds: float = 10.0
    openweather_api_key: str = ""
    openweather_base_url: str = "http://api.openweathermap.org/data/2.5"

    # Chat providers (optional, only needed for /api/v1/chat)
    chat_model: str = "mock:assistant"
    gemini_api_key: str = ""
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "deepseek/deepseek-r1-0528-qwen3-8b:free"
    anthropic_api_key: str = ""
    site_url: str = "https://yourapp.com"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
