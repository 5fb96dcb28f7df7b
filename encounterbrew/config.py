"""
Configuration - Environment driven settings.

Environment variables:
    ENCOUNTERBREW_ENV                 Deployment environment (development)
    ENCOUNTERBREW_LOCALIZATION_PATH   Localization JSON document
    ENCOUNTERBREW_LOG_LEVEL           Root log level for entry points (INFO)
"""

from __future__ import annotations
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "ENCOUNTERBREW_"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Runtime settings for the text engine entry points."""
    env: str = "development"
    localization_path: Optional[str] = Field(
        default=None,
        description="Path to the localization JSON document",
    )
    log_level: str = "INFO"

    @field_validator("localization_path")
    @classmethod
    def _blank_path_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


def get_settings() -> Settings:
    """Build settings from the current environment."""
    values = {
        "env": os.getenv(f"{ENV_PREFIX}ENV"),
        "localization_path": os.getenv(f"{ENV_PREFIX}LOCALIZATION_PATH"),
        "log_level": os.getenv(f"{ENV_PREFIX}LOG_LEVEL"),
    }
    return Settings(**{key: value for key, value in values.items() if value is not None})
