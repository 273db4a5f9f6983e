"""
Health check and system status endpoints.

Provides endpoints for:
- Basic health check
- Liveness check
- Readiness with model and weather provider status
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional
import time

from app.core.config import get_settings
from app.core.dependencies import get_model_handle, get_weather_client
from app.ml.leaf_classifier import ModelHandle
from app.models.enums import ModelState
from app.services.weather_client import OpenWeatherClient

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: float
    version: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check with component status."""
    status: str
    timestamp: float
    version: str
    components: dict[str, dict]
    uptime_seconds: Optional[float] = None


# Track startup time
_startup_time: Optional[float] = None


def set_startup_time() -> None:
    """Set the startup time (called on app startup)."""
    global _startup_time
    _startup_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check: the service is running."""
    return HealthResponse(
        status="healthy",
        timestamp=time.time(),
        version=get_settings().app_version
    )


@router.get("/ready", response_model=DetailedHealthResponse)
async def readiness_check(
    model: ModelHandle = Depends(get_model_handle),
    weather_client: OpenWeatherClient = Depends(get_weather_client),
) -> DetailedHealthResponse:
    """
    Readiness check including the leaf model and weather provider.

    A missing model or API key is reported as "degraded" but still returns
    200: the other endpoints keep working without them.
    """
    components = {}

    if model.state is ModelState.LOADED:
        info = model.classifier.get_model_info()
        components["leaf_classifier"] = {
            "status": "ready",
            "version": info.version,
            "architecture": info.architecture,
            "num_classes": info.num_classes,
            "device": info.device
        }
    else:
        components["leaf_classifier"] = {
            "status": "unavailable",
            "error": model.error
        }

    components["weather_provider"] = {
        "status": "ready" if weather_client.is_configured else "unconfigured",
        "url": weather_client.base_url
    }

    degraded = any(c["status"] != "ready" for c in components.values())

    uptime = None
    if _startup_time:
        uptime = time.time() - _startup_time

    return DetailedHealthResponse(
        status="degraded" if degraded else "ready",
        timestamp=time.time(),
        version=get_settings().app_version,
        components=components,
        uptime_seconds=uptime
    )


@router.get("/live")
async def liveness_check() -> dict:
    """
    Simple liveness check for Kubernetes.

    Returns 200 if the process is running.
    """
    return {"status": "alive"}
