# ML module initialization
from app.ml.base import BaseMLComponent
from app.ml.preprocessor import LeafImagePreprocessor
from app.ml.leaf_classifier import LeafClassifier, ModelHandle, load_model_handle

__all__ = [
    "BaseMLComponent",
    "LeafImagePreprocessor",
    "LeafClassifier",
    "ModelHandle",
    "load_model_handle",
]
