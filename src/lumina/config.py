"""⚙️ Configuration - Environment-based settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-based settings.

    Every field reads from ``LUMINA_<FIELD>``. The Gemini key is also picked
    up from the plain ``GEMINI_API_KEY`` variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="LUMINA_",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Assistant service
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("lumina_gemini_api_key", "gemini_api_key"),
    )
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta"
    )
    assistant_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=0.5,
        description="Sampling temperature for analysis calls",
    )
    assistant_timeout_seconds: float = Field(default=30.0, gt=0)

    # Ingestion
    connector_latency_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Simulated crawl latency for the mock connector",
    )

    # Time travel
    time_travel_max_days: int = Field(default=5, ge=0)
    time_travel_overrides: Path | None = Field(
        default=None,
        description="YAML file with the status override table",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings from environment."""
    return Settings()
