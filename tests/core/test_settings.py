"""Tests for Settings and GeminiConfig."""

import pytest
from pydantic import ValidationError

from gymapi.config.settings import DEFAULT_GEMINI_API_URL, GeminiConfig, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GEMINI_API_URL", "GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_MAX_RETRIES", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite://")


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.gemini_api_url == DEFAULT_GEMINI_API_URL
    assert settings.gemini_api_key == ""
    assert settings.gemini_model == "gemini-1.5-flash"
    assert settings.gemini_max_retries == 0
    assert settings.log_level == "INFO"
    assert settings.database_url == "sqlite://"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash")
    monkeypatch.setenv("GEMINI_MAX_RETRIES", "2")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.gemini_api_key == "secret"
    assert settings.gemini_model == "gemini-2.0-flash"
    assert settings.gemini_max_retries == 2
    assert settings.log_level == "DEBUG"


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert Settings(_env_file=None).log_level == "INFO"


@pytest.mark.parametrize(("name", "value"), [("GEMINI_MODEL", "   "), ("GEMINI_MAX_RETRIES", "9")])
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_gemini_config_from_settings(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GEMINI_MAX_RETRIES", "1")

    config = GeminiConfig.from_settings(Settings(_env_file=None))

    assert config.api_key == "secret"
    assert config.timeout_seconds == 30.0
    assert config.user_agent == "GymAPI/1.0"
    assert config.max_retries == 1
    assert config.endpoint == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
    )


def test_endpoint_without_placeholder_is_used_as_is():
    config = GeminiConfig(api_url="https://proxy.test/generate", api_key="k", model="m")

    assert config.endpoint == "https://proxy.test/generate"
