"""
Shared fixtures: sample leaf images, TorchScript stub models and a stubbed
OpenWeatherMap provider.
"""

import base64
import io

import httpx
import pytest
import torch
from fastapi.testclient import TestClient
from PIL import Image

from app.core.dependencies import get_model_handle, get_weather_client
from app.main import app
from app.ml.leaf_classifier import ModelHandle, load_model_handle
from app.services.weather_client import OpenWeatherClient


class FixedScoreModel(torch.nn.Module):
    """Returns the same score row for every image in the batch."""

    def __init__(self, scores: list[float]):
        super().__init__()
        self.register_buffer("scores", torch.tensor([scores], dtype=torch.float32))

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.scores.expand([x.size(0), -1])


@pytest.fixture
def make_model_file(tmp_path):
    """Write a scripted FixedScoreModel to disk and return its path."""
    def _make(scores, name="model.pt"):
        path = tmp_path / name
        torch.jit.script(FixedScoreModel(scores)).save(str(path))
        return str(path)
    return _make


@pytest.fixture
def leaf_image():
    """A small green leaf-like RGB image."""
    img = Image.new("RGB", (64, 48), color=(34, 139, 34))
    pixels = img.load()
    for i in range(16, 48):
        for j in range(12, 36):
            pixels[i, j] = (120, 90, 30)  # brown lesion
    return img


@pytest.fixture
def leaf_data_url(leaf_image):
    """Leaf image as a PNG data URL."""
    buffer = io.BytesIO()
    leaf_image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{encoded}"


@pytest.fixture
def make_weather_client():
    """
    Build an OpenWeatherClient whose HTTP calls go to a stub handler.

    The handler receives the httpx.Request and returns an httpx.Response.
    """
    def _make(handler, api_key="test-key"):
        return OpenWeatherClient(
            api_key=api_key,
            base_url="https://weather.test/data/2.5/weather",
            timeout=1.0,
            transport=httpx.MockTransport(handler)
        )
    return _make


@pytest.fixture
def weather_returning(make_weather_client):
    """Weather client whose provider answers with a fixed JSON body."""
    def _make(payload, status_code=200):
        return make_weather_client(lambda request: httpx.Response(status_code, json=payload))
    return _make


@pytest.fixture
def client():
    """Test client with dependency overrides cleared afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_model(make_model_file):
    """Install a loaded stub model with the given scores."""
    def _use(scores):
        handle = load_model_handle(make_model_file(scores))
        app.dependency_overrides[get_model_handle] = lambda: handle
        return handle
    return _use


@pytest.fixture
def no_model():
    handle = ModelHandle.unavailable("Model artifact not found: model/model.pt")
    app.dependency_overrides[get_model_handle] = lambda: handle
    return handle


@pytest.fixture
def use_weather(weather_returning):
    """Install a stubbed weather provider returning the given body."""
    def _use(payload, status_code=200):
        weather_client = weather_returning(payload, status_code)
        app.dependency_overrides[get_weather_client] = lambda: weather_client
        return weather_client
    return _use
