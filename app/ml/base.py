"""
Base classes and interfaces for ML components.

ML components inherit from BaseMLComponent so the route and service layers
see one interface regardless of the artifact format behind it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, TypeVar, Generic
import logging
import time

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class PredictionResult(Generic[T]):
    """
    Generic prediction result wrapper.

    Attributes:
        prediction: The actual prediction result
        confidence: Raw score of the chosen class
        latency_ms: Inference time in milliseconds
        model_version: Version of model used
    """
    prediction: T
    confidence: float
    latency_ms: float = 0.0
    model_version: str = "unknown"


@dataclass
class ModelInfo:
    """Information about a loaded model."""
    name: str
    version: str
    architecture: str
    input_size: tuple[int, int]
    num_classes: int
    class_names: list[str]
    device: str
    loaded_at: float = field(default_factory=time.time)


@dataclass(frozen=True)
class LeafPrediction:
    """Leaf classification outcome."""
    label: str
    index: int


class BaseMLComponent(ABC):
    """
    Abstract base class for ML components.

    Subclasses must implement:
        - load_model(): Load model weights and prepare for inference
        - predict(): Run inference on preprocessed input
        - get_model_info(): Return information about the loaded model
    """

    def __init__(self, model_path: Optional[str] = None, device: str = "cpu"):
        """
        Initialize the ML component.

        Args:
            model_path: Path to model artifact
            device: Device for inference ("cpu", "cuda", "mps")
        """
        self.model_path = model_path
        self.device = device
        self.model = None
        self._is_loaded = False
        self._model_info: Optional[ModelInfo] = None

    @abstractmethod
    def load_model(self) -> None:
        """
        Load the model artifact and prepare for inference.

        Implementations must set self.model, switch it to evaluation mode
        and populate self._model_info.
        """
        pass

    @abstractmethod
    def predict(self, input_data: np.ndarray) -> PredictionResult:
        """
        Run inference on preprocessed input.

        Args:
            input_data: Preprocessed input batch

        Returns:
            PredictionResult with prediction and confidence
        """
        pass

    @abstractmethod
    def get_model_info(self) -> ModelInfo:
        """Return information about the loaded model."""
        pass

    @property
    def is_loaded(self) -> bool:
        """Check if model is loaded and ready for inference."""
        return self._is_loaded

    def ensure_loaded(self) -> None:
        """Ensure model is loaded, loading if necessary."""
        if not self._is_loaded:
            logger.info(f"Loading model: {self.__class__.__name__}")
            self.load_model()
            self._is_loaded = True
