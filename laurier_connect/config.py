"""
Runtime configuration helpers for the FastAPI application.

Loads overrides from the .env file located in the project root without
clobbering variables provided by the platform.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

ENV_PATH = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    app_name: str = Field(default="Laurier Connect", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")

    # Signup only accepts addresses ending in @<domain>
    institution_email_domain: str = Field(default="mylaurier.ca", alias="INSTITUTION_EMAIL_DOMAIN")
    symmetric_connections: bool = Field(default=True, alias="SYMMETRIC_CONNECTIONS")
    seed_directory: bool = Field(default=False, alias="SEED_DIRECTORY")
    max_message_length: int = Field(default=2000, alias="MAX_MESSAGE_LENGTH", gt=0)

    cors_origins: str | None = Field(default=None, alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def email_suffix(self) -> str:
        return "@" + self.institution_email_domain.strip().lstrip("@").lower()


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
