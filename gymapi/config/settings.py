from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

# Outbound client limits for the suggestion API
GEMINI_TIMEOUT_SECONDS = 30.0
GEMINI_USER_AGENT = "GymAPI/1.0"


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues."""
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "gym.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.warning(f"Using SQLite database (LOCAL DEV ONLY): {db_url}")
    return db_url


class Settings(BaseSettings):
    gemini_api_url: str = Field(default=DEFAULT_GEMINI_API_URL, validation_alias="GEMINI_API_URL")
    gemini_api_key: str = Field(default="", validation_alias="GEMINI_API_KEY")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL, validation_alias="GEMINI_MODEL")
    gemini_max_retries: int = Field(
        default=0,
        ge=0,
        le=3,
        validation_alias="GEMINI_MAX_RETRIES",
        description="Retries on transient upstream failures (0 = single attempt)",
    )
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("gemini_api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        """Warn when the Gemini API key is missing.

        The service still starts; workout suggestions will report a
        configuration failure until the key is provided.
        """
        if not value:
            logger.warning(
                "GEMINI_API_KEY is not set. Workout suggestions will not work. "
                "Set it in .env file or environment variables."
            )
        return value

    @field_validator("gemini_api_url", "gemini_model")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


@dataclass(frozen=True)
class GeminiConfig:
    """Connection settings for the generative-text API.

    Built once from Settings and handed to the client at construction.
    """

    api_url: str
    api_key: str
    model: str
    timeout_seconds: float = GEMINI_TIMEOUT_SECONDS
    user_agent: str = GEMINI_USER_AGENT
    max_retries: int = 0

    @classmethod
    def from_settings(cls, source: Settings) -> GeminiConfig:
        return cls(
            api_url=source.gemini_api_url,
            api_key=source.gemini_api_key,
            model=source.gemini_model,
            max_retries=source.gemini_max_retries,
        )

    @property
    def endpoint(self) -> str:
        """API URL with the model identifier substituted."""
        return self.api_url.replace("{model}", self.model)


settings = Settings()
