"""
Unit tests for settings loading.
"""

from app.config import Settings, get_settings


def test_defaults(monkeypatch):
    """Test default values when nothing is configured."""
    monkeypatch.delenv("PERENUAL_API_KEY", raising=False)
    monkeypatch.delenv("MINIMUM_LOADING_MS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.perenual_api_key == ""
    assert settings.perenual_base_url == "https://perenual.com/api"
    assert settings.minimum_loading_ms == 3000


def test_reads_environment(monkeypatch):
    """Test that values are read from environment variables."""
    monkeypatch.setenv("PERENUAL_API_KEY", "sk-test")
    monkeypatch.setenv("MINIMUM_LOADING_MS", "500")
    settings = Settings(_env_file=None)
    assert settings.perenual_api_key == "sk-test"
    assert settings.minimum_loading_ms == 500


def test_get_settings_is_cached():
    """Test that settings are read once."""
    assert get_settings() is get_settings()
