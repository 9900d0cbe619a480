from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class AppSettings(BaseModel):
    """Runtime configuration for the catalog application."""

    database_url: str = Field(alias="DATABASE_URL")
    environment: Literal["development", "production"] = Field(default="production", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    app_title: str = Field(default="Local Library", alias="APP_TITLE")

    model_config = {"populate_by_name": True}

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, value: str | None) -> str:
        if not value:
            return "production"
        return value.strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        if not value:
            return "INFO"
        return value.strip().upper()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> AppSettings:
    """Load application configuration from environment variables."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is required; check your .env or shell environment")
    return AppSettings(
        database_url=database_url,
        environment=os.getenv("APP_ENV", "production"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        app_title=os.getenv("APP_TITLE", "Local Library"),
    )
