"""
Application configuration with environment-based settings.

Configuration is centralized here so the port, weather key and model
location can be swapped per environment (.env locally, env vars on the host).
"""

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Agri Assistant API"
    app_version: str = "0.1.0"
    debug: bool = False
    api_prefix: str = ""

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = Field(
        default=5000,
        validation_alias=AliasChoices("PORT", "AGRI_ASSISTANT_PORT"),
    )
    workers: int = 1

    # ML Model Configuration
    model_path: str = "model/model.pt"
    device: str = "cpu"

    # Image preprocessing
    image_size: int = 224
    input_layout: str = "NHWC"  # or "NCHW"
    max_request_size_mb: float = 10.0

    # Weather provider
    openweather_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENWEATHER_KEY", "AGRI_ASSISTANT_OPENWEATHER_KEY"),
    )
    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"
    weather_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "AGRI_ASSISTANT_"
        extra = "ignore"
        protected_namespaces = ("settings_",)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
