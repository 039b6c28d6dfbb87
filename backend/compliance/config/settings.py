"""Application settings loaded from the environment (and ``.env``)."""
from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the compliance audit service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Compliance Audit Service"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Database
    database_url: str = "sqlite:///./compliance.db"
    database_echo: bool = False

    # API
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = Field(default=["*"])

    # Scoring
    default_passing_score: float = Field(default=80.0, ge=0, le=100)
    # Unanswered numeric/rating and multi-choice responses count as passed
    unanswered_passes: bool = True
    # A failed response to a critical question fails the audit even when not flagged
    critical_questions_override: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
