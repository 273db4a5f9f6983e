"""
Leaf Disease Classifier

Wraps a pre-trained TorchScript model that scores a leaf image against a
fixed label set. The artifact is opaque: it takes one preprocessed image batch
and returns a (1, num_labels) score tensor whose column order matches
LeafStatus.model_labels().

The model is loaded once at startup through load_model_handle(). A missing or
broken artifact is not fatal; the handle is then UNAVAILABLE and the leaf
endpoint answers with a degraded status.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import torch

from app.ml.base import BaseMLComponent, LeafPrediction, ModelInfo, PredictionResult
from app.models.enums import LeafStatus, ModelState

logger = logging.getLogger(__name__)


def select_label_index(scores: Sequence[float]) -> int:
    """Index of the highest score; ties go to the lowest index."""
    return int(np.argmax(np.asarray(scores)))


class LeafClassifier(BaseMLComponent):
    """
    Leaf disease classification over a TorchScript artifact.

    Usage:
        classifier = LeafClassifier("model/model.pt")
        classifier.ensure_loaded()
        result = classifier.predict(batch)
        result.prediction.label, result.confidence
    """

    def __init__(
        self,
        model_path: Optional[str] = None,
        device: str = "cpu",
        labels: Optional[Sequence[str]] = None
    ):
        super().__init__(model_path, device)
        self.labels = list(labels) if labels is not None else [
            label.value for label in LeafStatus.model_labels()
        ]

    def load_model(self) -> None:
        """
        Load the TorchScript artifact.

        Raises:
            FileNotFoundError: If no artifact exists at model_path
            RuntimeError: If torch cannot deserialize the artifact
        """
        if not self.model_path:
            raise FileNotFoundError("No model path configured")

        path = Path(self.model_path)
        if not path.is_file():
            raise FileNotFoundError(f"Model artifact not found: {path}")

        logger.info(f"Loading leaf classifier from {path}")
        self.model = torch.jit.load(str(path), map_location=self.device)
        self.model.eval()

        self._model_info = ModelInfo(
            name="leaf_classifier",
            version=path.stem,
            architecture="torchscript",
            input_size=(224, 224),
            num_classes=len(self.labels),
            class_names=self.labels,
            device=self.device
        )
        self._is_loaded = True

    def predict(self, input_data: np.ndarray) -> PredictionResult[LeafPrediction]:
        """
        Run leaf classification.

        Args:
            input_data: Preprocessed batch of one image

        Returns:
            PredictionResult with the chosen label and its raw score

        Raises:
            ValueError: If the model output does not have one finite score per label
        """
        self.ensure_loaded()

        start_time = time.perf_counter()

        with torch.no_grad():
            batch = torch.from_numpy(np.ascontiguousarray(input_data)).to(self.device)
            output = self.model(batch)

        scores = output.detach().cpu().numpy().astype(np.float64).reshape(-1)
        if scores.shape[0] != len(self.labels):
            raise ValueError(
                f"Model returned {scores.shape[0]} scores for {len(self.labels)} labels"
            )
        if not np.all(np.isfinite(scores)):
            raise ValueError(f"Model returned non-finite scores: {scores.tolist()}")

        index = select_label_index(scores)
        latency = (time.perf_counter() - start_time) * 1000

        return PredictionResult(
            prediction=LeafPrediction(label=self.labels[index], index=index),
            confidence=float(scores[index]),
            latency_ms=latency,
            model_version=self._model_info.version if self._model_info else "unknown"
        )

    def get_model_info(self) -> ModelInfo:
        """Return model information."""
        self.ensure_loaded()
        return self._model_info


@dataclass(frozen=True)
class ModelHandle:
    """
    Process-wide view of the classification model.

    Either LOADED with a ready classifier, or UNAVAILABLE with the reason the
    load failed. Built once at startup and never mutated.
    """
    state: ModelState
    classifier: Optional[LeafClassifier] = None
    error: Optional[str] = None

    @classmethod
    def loaded(cls, classifier: LeafClassifier) -> "ModelHandle":
        return cls(state=ModelState.LOADED, classifier=classifier)

    @classmethod
    def unavailable(cls, reason: str) -> "ModelHandle":
        return cls(state=ModelState.UNAVAILABLE, error=reason)


def load_model_handle(model_path: Optional[str], device: str = "cpu") -> ModelHandle:
    """
    Load the leaf classifier, degrading to UNAVAILABLE on any failure.

    Args:
        model_path: Path to the TorchScript artifact
        device: Inference device

    Returns:
        ModelHandle in LOADED or UNAVAILABLE state
    """
    classifier = LeafClassifier(model_path=model_path, device=device)
    try:
        classifier.ensure_loaded()
    except Exception as e:
        logger.warning(
            f"⚠️ No ML model found at {model_path}: {e}. "
            "Leaf scanner will not work until you add one."
        )
        return ModelHandle.unavailable(str(e))

    logger.info("✅ ML Model Loaded")
    return ModelHandle.loaded(classifier)
