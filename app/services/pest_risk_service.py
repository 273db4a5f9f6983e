"""
Weather-driven pest risk assessment.

Fetches current conditions for a coordinate and maps them through a fixed
decision table:

    humidity > 70 and 20 <= temp <= 30   -> HIGH_FUNGAL
    temp > 30 and humidity < 40          -> MEDIUM_HOT_DRY
    humidity > 80 and temp < 20          -> BACTERIAL
    otherwise                            -> LOW
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.errors import ErrorKind, ServiceResult
from app.models.enums import PestRisk
from app.services.weather_client import OpenWeatherClient, WeatherSnapshot

logger = logging.getLogger(__name__)


def evaluate_pest_risk(temperature: float, humidity: float) -> PestRisk:
    """Map temperature (°C) and humidity (%) to a pest risk level."""
    if humidity > 70 and 20 <= temperature <= 30:
        return PestRisk.HIGH_FUNGAL
    if temperature > 30 and humidity < 40:
        return PestRisk.MEDIUM_HOT_DRY
    if humidity > 80 and temperature < 20:
        return PestRisk.BACTERIAL
    return PestRisk.LOW


@dataclass(frozen=True)
class PestRiskAssessment:
    """Weather used for the assessment and the resulting risk."""
    weather: WeatherSnapshot
    risk: PestRisk


class PestRiskService:
    """Combines the weather client with the pest risk table."""

    def __init__(self, weather_client: OpenWeatherClient):
        self.weather_client = weather_client

    async def assess(
        self,
        lat: Optional[float],
        lon: Optional[float]
    ) -> ServiceResult[PestRiskAssessment]:
        """
        Assess pest risk at a location.

        Args:
            lat: Latitude; None means not provided
            lon: Longitude; None means not provided

        Returns:
            ServiceResult with the assessment, INVALID_INPUT for a missing
            coordinate, or the weather client's upstream error
        """
        if lat is None or lon is None:
            return ServiceResult.fail(ErrorKind.INVALID_INPUT, "Location not provided")

        weather = await self.weather_client.fetch_current(lat, lon)
        if not weather.is_ok:
            return ServiceResult.fail(weather.error, weather.message)

        snapshot = weather.value
        risk = evaluate_pest_risk(snapshot.temperature, snapshot.humidity)
        logger.info(
            f"Pest risk at ({lat}, {lon}): {risk.name} "
            f"(temp={snapshot.temperature}, humidity={snapshot.humidity})"
        )
        return ServiceResult.ok(PestRiskAssessment(weather=snapshot, risk=risk))
