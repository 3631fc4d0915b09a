import pytest
from pydantic import ValidationError

from src.core import config_app
from src.core.config_app import DEFAULT_OPENWEATHER_URL, Settings


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config_app, "load_dotenv", lambda *args, **kwargs: False)


def test_missing_api_key_is_fatal(monkeypatch):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

    with pytest.raises(ValueError, match="OPENWEATHER_API_KEY"):
        Settings.from_env()


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "secret")
    monkeypatch.setenv("OPENWEATHER_TIMEOUT", "2.5")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.delenv("OPENWEATHER_BASE_URL", raising=False)

    settings = Settings.from_env()

    assert settings.OPENWEATHER_API_KEY == "secret"
    assert settings.OPENWEATHER_BASE_URL == DEFAULT_OPENWEATHER_URL
    assert settings.OPENWEATHER_TIMEOUT == 2.5
    assert settings.ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]
    assert settings.has_api_key is True


def test_settings_are_immutable(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "secret")
    settings = Settings.from_env()

    with pytest.raises(ValidationError):
        settings.OPENWEATHER_API_KEY = "other"
