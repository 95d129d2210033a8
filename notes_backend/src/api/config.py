"""
Application configuration read from the environment (and a ``.env`` file).
"""
import logging
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from notes_database.db import get_database_url

DEFAULT_SECRET_KEY = "temporary_dev_secret"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# PUBLIC_INTERFACE
class Settings(BaseModel):
    """Runtime settings. Build with ``Settings.from_env()`` or directly in tests."""

    database_url: str
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, min_length=1)
    access_token_expire_hours: int = Field(default=24, ge=1)
    log_level: str = "INFO"
    cors_origins: str = "*"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level '{value}'. Must be one of: {sorted(VALID_LOG_LEVELS)}")
        return upper

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load ``.env`` (if any) and read settings from environment variables."""
        load_dotenv()
        return cls(
            database_url=get_database_url(),
            secret_key=os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY),
            access_token_expire_hours=os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=os.getenv("CORS_ORIGINS", "*"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=os.getenv("PORT", "3000"),
        )
