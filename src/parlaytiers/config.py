"""Environment-driven configuration helpers for the parlay engine."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: AnyUrl | str = Field(default="sqlite:///./parlaytiers.db")
    log_level: str = Field(default="INFO")

    strategy_name: str = Field(default="tiered_v2")
    default_bankroll: float = Field(default=1000.0, ge=0.0)
    max_kelly_risk: float = Field(default=0.03, ge=0.0, le=1.0)

    min_pool_size: int = Field(default=20, ge=0)
    min_combined_probability: float = Field(default=0.001, ge=0.0, le=1.0)
    positive_signal_edge_floor: float = Field(default=0.005, ge=0.0, le=1.0)
    max_expected_odds: int = Field(default=10000, ge=100)

    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, validation_alias="PORT")

    parlaytiers_api_key: str = Field(default="", validation_alias="PARLAYTIERS_API_KEY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_api_access_key() -> str:
    key = os.getenv("PARLAYTIERS_API_KEY") or get_settings().parlaytiers_api_key
    if not key:
        raise RuntimeError(
            "PARLAYTIERS_API_KEY is not configured. Set it in your environment or .env file."
        )
    return key
