# Data models module
from app.models.schemas import (
    LeafRequest,
    LeafResponse,
    SoilRequest,
    SoilResponse,
    PestRiskRequest,
    PestRiskResponse,
    ErrorResponse,
)
from app.models.enums import LeafStatus, SoilVerdict, PestRisk, ModelState

__all__ = [
    "LeafRequest",
    "LeafResponse",
    "SoilRequest",
    "SoilResponse",
    "PestRiskRequest",
    "PestRiskResponse",
    "ErrorResponse",
    "LeafStatus",
    "SoilVerdict",
    "PestRisk",
    "ModelState",
]
