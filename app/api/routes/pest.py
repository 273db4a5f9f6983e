"""
Pest risk endpoint backed by current weather.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.core.dependencies import get_pest_risk_service
from app.models.schemas import ErrorResponse, PestRiskRequest, PestRiskResponse
from app.services.pest_risk_service import PestRiskService

router = APIRouter(tags=["Pest Risk"])


@router.post(
    "/pest-risk",
    response_model=PestRiskResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Location not provided"},
        500: {"model": ErrorResponse, "description": "Weather data invalid or unreachable"},
    },
    summary="Estimate pest risk from current weather",
)
async def pest_risk(
    request: Optional[PestRiskRequest] = None,
    service: PestRiskService = Depends(get_pest_risk_service)
) -> PestRiskResponse:
    if request is None:
        request = PestRiskRequest()
    assessment = (await service.assess(request.lat, request.lon)).unwrap()
    return PestRiskResponse(
        temperature=assessment.weather.temperature,
        humidity=assessment.weather.humidity,
        pest_risk=assessment.risk.value
    )
