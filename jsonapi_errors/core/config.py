"""
Centralized configuration management.

Follows Layer 5 rules:
- Configuration comes from environment variables (or a .env file)
- Centralize configuration in this module
- Do not spread os.getenv calls all over the codebase

The documentation base URL is the only piece of process-wide state the error
constructors read. It is seeded from DOCS_URL and may be reassigned by the
hosting application, ideally once at startup:

    from jsonapi_errors.core.config import docs
    docs.url = "https://api.example.com/docs/errors"
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Documentation links ---
    DOCS_URL: str = Field(default="", description="Base URL used for links.about of every error")

    # --- Responses ---
    JSONAPI_MEDIA_TYPE: str = Field(
        default="application/vnd.api+json",
        description="Content-Type used when error documents are sent",
    )

    # --- Logging ---
    LOG_LEVEL: str = Field(default="INFO", description="Log level (DEBUG/INFO/WARNING/ERROR)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class DocsConfig(BaseModel):
    """Mutable holder for the documentation base URL."""
    url: str = ""

    model_config = ConfigDict(validate_assignment=True)


settings = Settings()
docs = DocsConfig(url=settings.DOCS_URL)
