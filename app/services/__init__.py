# Services module
from app.services.leaf_service import LeafDiagnosisService
from app.services.pest_risk_service import PestRiskService
from app.services.soil_service import evaluate_soil
from app.services.weather_client import OpenWeatherClient

__all__ = [
    "LeafDiagnosisService",
    "PestRiskService",
    "evaluate_soil",
    "OpenWeatherClient",
]
