"""
Configuration settings for the quiz engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level for the loguru stderr sink",
    )
    log_format: str = Field(
        default="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
        description="Loguru format string",
    )

    # ========================================
    # Grading
    # ========================================
    grading_max_workers: int = Field(
        default=1,
        ge=1,
        description="Thread pool size for evaluating one attempt (1 = sequential)",
    )
    matching_partial_credit_default: bool = Field(
        default=False,
        description="Partial credit for matching questions that leave the flag unset",
    )
    ordering_partial_credit_default: bool = Field(
        default=False,
        description="Partial credit for ordering questions that leave the flag unset",
    )
    essay_auto_accept: bool = Field(
        default=True,
        description="Accept any non-empty essay; when off, essays are reported ungraded",
    )
    fill_blank_answer_delimiter: str = Field(
        default="|",
        min_length=1,
        description="Separates accepted forms inside correct_answer_text",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
