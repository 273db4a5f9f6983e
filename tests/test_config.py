"""
Tests for environment-based settings.
"""

from app.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("OPENWEATHER_KEY", raising=False)

    settings = Settings(_env_file=None)
    assert settings.port == 5000
    assert settings.openweather_key is None
    assert settings.model_path == "model/model.pt"
    assert settings.max_request_size_mb == 10.0


def test_unprefixed_environment_names(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("OPENWEATHER_KEY", "abc123")

    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.openweather_key == "abc123"


def test_prefixed_environment_names(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setenv("AGRI_ASSISTANT_PORT", "9000")
    monkeypatch.setenv("AGRI_ASSISTANT_MODEL_PATH", "/srv/models/leaf.pt")

    settings = Settings(_env_file=None)
    assert settings.port == 9000
    assert settings.model_path == "/srv/models/leaf.pt"
