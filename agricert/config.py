"""Ledger settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration: all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Database ────────────────────────────────────────────────────────────
    database_url: str = "sqlite+pysqlite:///:memory:"
    database_echo: bool = False

    # ── Authorization ───────────────────────────────────────────────────────
    registry_owner: str = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"

    # ── Lifecycle ───────────────────────────────────────────────────────────
    # Logical clock units; 52560 ten-minute blocks is roughly one year.
    validity_period: int = 52560
    max_assessments_per_farm: int = 20
    max_certificates_per_farm: int = 10
    max_batch_size: int = 5

    # ── Automated scoring ───────────────────────────────────────────────────
    automated_biodiversity_score: int = 70

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
