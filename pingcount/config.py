"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    host: str = Field(default="0.0.0.0", alias="PINGCOUNT_HOST")
    port: int = Field(default=3000, ge=0, le=65535, alias="PINGCOUNT_PORT")
    report_interval_seconds: float = Field(default=1.0, gt=0, alias="REPORT_INTERVAL_SECONDS")
    report_sink: Literal["stdout", "log"] = Field(default="stdout", alias="REPORT_SINK")
    trust_forwarded_headers: bool = Field(default=False, alias="TRUST_FORWARDED_HEADERS")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
