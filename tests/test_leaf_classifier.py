"""
Tests for leaf image preprocessing, model loading and label selection.
"""

import numpy as np
import pytest
from PIL import Image

from app.core.errors import ErrorKind
from app.ml.leaf_classifier import LeafClassifier, load_model_handle, select_label_index
from app.ml.preprocessor import LeafImagePreprocessor, decode_image_payload
from app.models.enums import InputLayout, LeafStatus, ModelState
from app.services.leaf_service import LeafDiagnosisService


class TestPreprocessor:

    def test_nhwc_tensor(self, leaf_image):
        result = LeafImagePreprocessor().preprocess(leaf_image)

        assert result.tensor.shape == (1, 224, 224, 3)
        assert result.tensor.dtype == np.float32
        assert result.original_size == (64, 48)
        assert 0.0 <= result.tensor.min() and result.tensor.max() <= 1.0

    def test_nchw_tensor(self, leaf_image):
        preprocessor = LeafImagePreprocessor(layout=InputLayout.NCHW)
        result = preprocessor.preprocess(leaf_image)
        assert result.tensor.shape == (1, 3, 224, 224)

    def test_nearest_neighbour_keeps_source_colours(self):
        img = Image.new("RGB", (2, 2))
        img.putdata([(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)])

        tensor = LeafImagePreprocessor().preprocess(img).tensor[0]
        colours = {tuple(px) for px in (tensor * 255).round().astype(int).reshape(-1, 3)}

        assert colours == {(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)}
        assert tuple(tensor[0, 0]) == (1.0, 0.0, 0.0)
        assert tuple(tensor[223, 223]) == (1.0, 1.0, 1.0)

    def test_alpha_and_grayscale_become_rgb(self):
        rgba = Image.new("RGBA", (10, 10), color=(10, 20, 30, 0))
        gray = Image.new("L", (10, 10), color=128)

        assert LeafImagePreprocessor().preprocess(rgba).tensor.shape[-1] == 3
        assert LeafImagePreprocessor().preprocess(gray).tensor.shape[-1] == 3

    def test_decode_takes_segment_after_first_comma(self):
        assert decode_image_payload("data:image/png;base64,aGVsbG8=") == b"hello"
        assert decode_image_payload("aGVsbG8=") == b"hello"

    def test_from_data_url(self, leaf_data_url):
        result = LeafImagePreprocessor().preprocess_from_base64(leaf_data_url)
        assert result.tensor.shape == (1, 224, 224, 3)


class TestLabelSelection:

    def test_maximum(self):
        assert select_label_index([0.1, 0.2, 0.6, 0.1]) == 2

    def test_ties_pick_lowest_index(self):
        assert select_label_index([0.1, 0.4, 0.4, 0.1]) == 1
        assert select_label_index([0.25, 0.25, 0.25, 0.25]) == 0

    def test_label_order(self):
        assert [label.value for label in LeafStatus.model_labels()] == [
            "Healthy", "Fungal Disease", "Bacterial Disease", "Nutrient Deficiency"
        ]


class TestModelLoading:

    def test_missing_artifact_is_unavailable(self, tmp_path):
        handle = load_model_handle(str(tmp_path / "missing.pt"))
        assert handle.state is ModelState.UNAVAILABLE
        assert handle.classifier is None
        assert "not found" in handle.error

    def test_corrupt_artifact_is_unavailable(self, tmp_path):
        path = tmp_path / "model.pt"
        path.write_bytes(b"definitely not torchscript")
        handle = load_model_handle(str(path))
        assert handle.state is ModelState.UNAVAILABLE

    def test_loaded_artifact(self, make_model_file, leaf_image):
        handle = load_model_handle(make_model_file([0.1, 0.05, 0.8, 0.05]))
        assert handle.state is ModelState.LOADED

        batch = LeafImagePreprocessor().preprocess(leaf_image).tensor
        result = handle.classifier.predict(batch)

        assert result.prediction.label == "Bacterial Disease"
        assert result.prediction.index == 2
        assert result.confidence == pytest.approx(0.8)
        assert handle.classifier.get_model_info().num_classes == 4

    def test_predict_without_path_raises(self):
        with pytest.raises(FileNotFoundError):
            LeafClassifier(model_path=None).predict(np.zeros((1, 224, 224, 3), np.float32))


class TestLeafDiagnosisService:

    def test_unavailable_model(self, tmp_path, leaf_data_url):
        service = LeafDiagnosisService(
            load_model_handle(str(tmp_path / "missing.pt")),
            LeafImagePreprocessor()
        )
        result = service.diagnose(leaf_data_url)

        assert result.is_ok
        assert result.value.status == LeafStatus.MODEL_NOT_LOADED.value
        assert result.value.confidence is None

    def test_confidence_two_decimals(self, make_model_file, leaf_data_url):
        service = LeafDiagnosisService(
            load_model_handle(make_model_file([0.123, 0.456, 0.789, 0.0])),
            LeafImagePreprocessor()
        )
        result = service.diagnose(leaf_data_url)

        assert result.value.status == "Bacterial Disease"
        assert result.value.confidence == "0.79"

    def test_missing_image_checked_before_model(self, tmp_path):
        service = LeafDiagnosisService(
            load_model_handle(str(tmp_path / "missing.pt")),
            LeafImagePreprocessor()
        )
        result = service.diagnose(None)
        assert result.error is ErrorKind.INVALID_INPUT
        assert result.message == "No image provided"


class TestNonFiniteScores:

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_rejected(self, make_model_file, leaf_image, bad):
        handle = load_model_handle(make_model_file([0.1, bad, 0.2, 0.3]))
        batch = LeafImagePreprocessor().preprocess(leaf_image).tensor

        with pytest.raises(ValueError, match="non-finite"):
            handle.classifier.predict(batch)
