"""
Enumerations for the agricultural assistant.

The string values are the exact texts returned to clients.
"""

from enum import Enum


class LeafStatus(str, Enum):
    """Leaf classifier labels, in the model's output order."""
    HEALTHY = "Healthy"
    FUNGAL_DISEASE = "Fungal Disease"
    BACTERIAL_DISEASE = "Bacterial Disease"
    NUTRIENT_DEFICIENCY = "Nutrient Deficiency"

    # Not a model label; returned when no model is loaded.
    MODEL_NOT_LOADED = "⚠️ ML model not loaded. Add model in /model folder."

    @classmethod
    def model_labels(cls) -> list["LeafStatus"]:
        """Labels indexed by model output position."""
        return [
            cls.HEALTHY,
            cls.FUNGAL_DISEASE,
            cls.BACTERIAL_DISEASE,
            cls.NUTRIENT_DEFICIENCY,
        ]


class SoilVerdict(str, Enum):
    """Soil assessment outcomes."""
    ACIDIC = "Soil is acidic → Add lime"
    ALKALINE = "Soil is alkaline → Add gypsum"
    LOW_MOISTURE = "Soil moisture is low → Irrigation needed"
    TOO_WET = "Soil too wet → Risk of root rot"
    HEALTHY = "Soil is healthy ✅"


class PestRisk(str, Enum):
    """Weather-driven pest risk levels."""
    HIGH_FUNGAL = "⚠️ High fungal pest risk (humid & warm)"
    MEDIUM_HOT_DRY = "⚠️ Medium risk: hot & dry (mites, thrips)"
    BACTERIAL = "⚠️ Bacterial disease risk (too damp)"
    LOW = "✅ Low pest risk"


class ModelState(str, Enum):
    """Availability of the classification model."""
    LOADED = "loaded"
    UNAVAILABLE = "unavailable"


class InputLayout(str, Enum):
    """Tensor layout expected by the model artifact."""
    NHWC = "NHWC"
    NCHW = "NCHW"
