"""
Configuration for the authorization core

Single source of truth using Pydantic BaseSettings.
All settings can be overridden via environment variables with the
BACKOFFICE_AUTH_ prefix.

Usage:
    from backoffice_auth.config import get_settings

    settings = get_settings()
    print(settings.db_path)
"""

import logging
from pathlib import Path
from typing import Literal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """
    Authorization core configuration

    Example: BACKOFFICE_AUTH_DB_PATH=/var/lib/backoffice/app.db
    """

    model_config = SettingsConfigDict(
        env_prefix="BACKOFFICE_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # SYSTEM SETTINGS
    # ============================================

    environment: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Application environment"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_json: bool = Field(
        default=False,
        description="Emit structured JSON log lines"
    )

    # ============================================
    # STORAGE SETTINGS
    # ============================================

    db_path: Path = Field(
        default=Path("./data/backoffice.db"),
        description="SQLite database holding roles, user roles and legacy grants"
    )

    # ============================================
    # POLICY SETTINGS
    # ============================================

    settings_module: str = Field(
        default="settings",
        description="Module whose level gates the settings sub-policy"
    )

    deny_unknown_settings_actions: bool = Field(
        default=False,
        description="Refuse settings actions missing from the settings table"
    )

    perms_explain: bool = Field(
        default=False,
        description="Enable explain_permission diagnostics"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> AuthSettings:
    """Get cached settings instance"""
    return AuthSettings()


def reset_settings() -> None:
    """Clear the cached settings (tests and reconfiguration)"""
    get_settings.cache_clear()
