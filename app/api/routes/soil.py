"""
Soil condition analysis endpoint.
"""

from typing import Any

from fastapi import APIRouter, Body

from app.models.schemas import SoilRequest, SoilResponse
from app.services.soil_service import evaluate_soil

router = APIRouter(tags=["Soil"])


@router.post(
    "/analyze-soil",
    response_model=SoilResponse,
    summary="Assess soil pH and moisture",
)
async def analyze_soil(payload: Any = Body(None)) -> SoilResponse:
    """
    Always answers 200; unusable readings fall through the rule chain.

    A missing body or a non-object body is read as a reading with no values.
    """
    request = SoilRequest.model_validate(payload if isinstance(payload, dict) else {})
    verdict = evaluate_soil(request.ph, request.moisture)
    return SoilResponse(soil_result=verdict.value)
