import pytest
from pydantic import ValidationError

from notes_backend.src.api.config import DEFAULT_SECRET_KEY, Settings


def test_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("SECRET_KEY", "s3cret")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_HOURS", "12")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings.from_env()

    assert settings.database_url == "sqlite:///./other.db"
    assert settings.secret_key == "s3cret"
    assert settings.access_token_expire_hours == 12
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins_list == ["http://a.example", "http://b.example"]
    assert settings.port == 8080
    assert not settings.uses_default_secret


def test_defaults():
    settings = Settings(database_url="sqlite://")
    assert settings.secret_key == DEFAULT_SECRET_KEY
    assert settings.uses_default_secret
    assert settings.access_token_expire_hours == 24
    assert settings.cors_origins_list == ["*"]


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", log_level="LOUD")


def test_empty_secret_rejected():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", secret_key="")
