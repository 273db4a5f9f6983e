"""
Image preprocessing pipeline for the leaf classifier.

Handles:
- Data URL / base64 decoding
- Conversion to 3-channel RGB
- Nearest-neighbour resize to the model input size
- Scaling to [0, 1] and batching

No mean/std normalization is applied: the model was trained on pixel values
divided by 255.
"""

from dataclasses import dataclass
import base64
import binascii
import io
import logging

import numpy as np
from PIL import Image

from app.models.enums import InputLayout

logger = logging.getLogger(__name__)


@dataclass
class PreprocessedImage:
    """Preprocessed image ready for model inference."""
    tensor: np.ndarray  # (1, H, W, C) or (1, C, H, W)
    original_size: tuple[int, int]


def decode_image_payload(payload: str) -> bytes:
    """
    Decode a leaf image payload to raw bytes.

    Accepts "data:image/png;base64,<data>" (everything after the first comma
    is decoded) or bare base64.

    Raises:
        ValueError: If the payload is not valid base64
    """
    if "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}")


class LeafImagePreprocessor:
    """
    Turns a submitted leaf image into the model's input tensor.

    Usage:
        preprocessor = LeafImagePreprocessor(target_size=(224, 224))
        result = preprocessor.preprocess_from_base64(data_url)
        model_input = result.tensor  # (1, 224, 224, 3) float32
    """

    def __init__(
        self,
        target_size: tuple[int, int] = (224, 224),
        layout: InputLayout = InputLayout.NHWC
    ):
        """
        Initialize the preprocessor.

        Args:
            target_size: Target image size (H, W)
            layout: Tensor layout expected by the model
        """
        self.target_size = target_size
        self.layout = InputLayout(layout)

    def preprocess_from_base64(self, payload: str) -> PreprocessedImage:
        """Preprocess an image from a data URL or base64 string."""
        image_bytes = decode_image_payload(payload)
        image = Image.open(io.BytesIO(image_bytes))
        return self.preprocess(image)

    def preprocess(self, image: Image.Image) -> PreprocessedImage:
        """
        Preprocess a PIL Image for model inference.

        Pipeline:
        1. Convert to RGB (drops alpha, expands grayscale)
        2. Resize to target size with nearest-neighbour sampling
        3. Scale to [0, 1] as float32
        4. Reorder to the model layout and add a batch dimension
        """
        original_size = image.size

        if image.mode != "RGB":
            image = image.convert("RGB")

        target_h, target_w = self.target_size
        image = image.resize((target_w, target_h), Image.Resampling.NEAREST)

        img_array = np.asarray(image, dtype=np.float32) / 255.0

        if self.layout is InputLayout.NCHW:
            img_array = np.transpose(img_array, (2, 0, 1))

        tensor = np.expand_dims(img_array, 0).astype(np.float32)

        return PreprocessedImage(
            tensor=tensor,
            original_size=original_size
        )
