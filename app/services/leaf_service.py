"""
Leaf diagnosis service.

Pipeline: payload check -> model availability -> preprocess -> classify.
An unloaded model is not an error: the caller gets a MODEL_NOT_LOADED status
with no confidence. Decode and inference failures are logged here and
reported to the caller only as PREDICTION_FAILED.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.errors import ErrorKind, ServiceResult
from app.ml.leaf_classifier import ModelHandle
from app.ml.preprocessor import LeafImagePreprocessor
from app.models.enums import LeafStatus, ModelState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafDiagnosis:
    """Label and formatted confidence, or a bare status when degraded."""
    status: str
    confidence: Optional[str] = None


class LeafDiagnosisService:
    """Runs a leaf image through the preprocessor and the loaded classifier."""

    def __init__(self, model: ModelHandle, preprocessor: LeafImagePreprocessor):
        self.model = model
        self.preprocessor = preprocessor

    def diagnose(self, leaf_image: Optional[str]) -> ServiceResult[LeafDiagnosis]:
        if not leaf_image:
            return ServiceResult.fail(ErrorKind.INVALID_INPUT, "No image provided")

        if self.model.state is ModelState.UNAVAILABLE:
            return ServiceResult.ok(LeafDiagnosis(status=LeafStatus.MODEL_NOT_LOADED.value))

        try:
            preprocessed = self.preprocessor.preprocess_from_base64(leaf_image)
            result = self.model.classifier.predict(preprocessed.tensor)
        except Exception as e:
            logger.error(f"Prediction error: {e}")
            return ServiceResult.fail(ErrorKind.PREDICTION_FAILED)

        width, height = preprocessed.original_size
        logger.info(
            f"Leaf classified as {result.prediction.label} "
            f"({result.confidence:.2f}, {result.latency_ms:.1f}ms, {width}x{height} source)"
        )
        return ServiceResult.ok(LeafDiagnosis(
            status=result.prediction.label,
            confidence=f"{result.confidence:.2f}"
        ))
