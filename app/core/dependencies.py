"""
FastAPI dependency injection.

Provides the shared model handle and the services built on it. Tests swap
any of these through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from app.core.config import get_settings
from app.ml.leaf_classifier import ModelHandle, load_model_handle
from app.ml.preprocessor import LeafImagePreprocessor
from app.services.leaf_service import LeafDiagnosisService
from app.services.pest_risk_service import PestRiskService
from app.services.weather_client import OpenWeatherClient


@lru_cache()
def get_model_handle() -> ModelHandle:
    """Load the leaf classifier once per process."""
    settings = get_settings()
    return load_model_handle(settings.model_path, device=settings.device)


@lru_cache()
def get_preprocessor() -> LeafImagePreprocessor:
    """Get cached image preprocessor."""
    settings = get_settings()
    return LeafImagePreprocessor(
        target_size=(settings.image_size, settings.image_size),
        layout=settings.input_layout
    )


@lru_cache()
def get_weather_client() -> OpenWeatherClient:
    """Get cached weather client."""
    settings = get_settings()
    return OpenWeatherClient(
        api_key=settings.openweather_key,
        base_url=settings.weather_api_url,
        timeout=settings.weather_timeout_seconds
    )


def get_leaf_service(
    model: ModelHandle = Depends(get_model_handle),
    preprocessor: LeafImagePreprocessor = Depends(get_preprocessor),
) -> LeafDiagnosisService:
    return LeafDiagnosisService(model, preprocessor)


def get_pest_risk_service(
    weather_client: OpenWeatherClient = Depends(get_weather_client),
) -> PestRiskService:
    return PestRiskService(weather_client)


__all__ = [
    "get_model_handle",
    "get_preprocessor",
    "get_weather_client",
    "get_leaf_service",
    "get_pest_risk_service",
]
