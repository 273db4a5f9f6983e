"""
Leaf disease prediction endpoint.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.core.dependencies import get_leaf_service
from app.models.schemas import ErrorResponse, LeafRequest, LeafResponse
from app.services.leaf_service import LeafDiagnosisService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Leaf"])


@router.post(
    "/predict-leaf",
    response_model=LeafResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "No image provided"},
        500: {"model": ErrorResponse, "description": "Prediction failed"},
    },
    summary="Classify a leaf image",
    description="""
    Classify a base64-encoded leaf image as Healthy, Fungal Disease,
    Bacterial Disease or Nutrient Deficiency.

    **Image format:** data URL (`data:image/jpeg;base64,...`) or bare base64.

    When no model is installed the endpoint still answers 200 with a
    `leafStatus` explaining that the model is not loaded.
    """
)
def predict_leaf(
    request: Optional[LeafRequest] = None,
    service: LeafDiagnosisService = Depends(get_leaf_service)
) -> LeafResponse:
    # Sync handler: FastAPI runs it in the threadpool so inference does not
    # block the event loop.
    leaf_image = request.leaf_image if request is not None else None
    diagnosis = service.diagnose(leaf_image).unwrap()
    return LeafResponse(leaf_status=diagnosis.status, confidence=diagnosis.confidence)
