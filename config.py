"""Application-wide configuration (pydantic-settings singleton)."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed, validated settings loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────
    app_name: str = "Cattle Vision"
    environment: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ── Server ───────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000
    max_request_bytes: int = Field(default=50 * 1024 * 1024, ge=1)

    # ── Inference backend ────────────────────────
    inference_url: str = ""
    inference_api_key: str = ""
    inference_timeout_seconds: float = Field(default=30.0, gt=0)
    require_inference_backend: bool = False

    # ── Simulation ───────────────────────────────
    simulated_latency_ms: int = Field(default=800, ge=0)

    # ── Classification limits ────────────────────
    max_top_k: int = Field(default=20, ge=1)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper().strip()

    @field_validator("inference_url", "inference_api_key")
    @classmethod
    def strip_blank(cls, value: str) -> str:
        return value.strip()

    # ── Derived helpers ──────────────────────────

    @property
    def backend_configured(self) -> bool:
        return bool(self.inference_url)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide singleton settings."""
    return Settings()


def reset_settings() -> None:
    """Clear the singleton (for testing)."""
    get_settings.cache_clear()
