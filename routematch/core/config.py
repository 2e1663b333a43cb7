"""Compiler configuration using Pydantic Settings.

Configuration is loaded from environment variables.

Optionally, you may point `ENV_FILE` at a local env file (for development).
"""

import os
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    """Application environment values."""

    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """
    Compiler settings with type validation.

    Every field has a default, so the compiler works without any
    environment configured.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="", extra="ignore"
    )

    # Application
    app_env: AppEnvironment = AppEnvironment.LOCAL
    app_name: str = "routematch"
    app_log_level: str = "INFO"

    # Observability
    observability_structured_logs: bool = True
    observability_metrics_enabled: bool = True

    # Compiler
    # Unset means no nesting limit for batch compilation
    compiler_max_match_depth: int | None = None

    @field_validator("app_env", mode="before")
    @classmethod
    def validate_app_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        """Validate and parse app_env to AppEnvironment enum."""
        if isinstance(v, AppEnvironment):
            return v
        try:
            return AppEnvironment(v.lower())
        except ValueError:
            raise ValueError(
                f"app_env must be one of {[e.value for e in AppEnvironment]}, got '{v}'"
            )

    @field_validator("app_log_level")
    @classmethod
    def validate_app_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"app_log_level must be a standard logging level, got '{v}'")
        return level

    @field_validator("compiler_max_match_depth")
    @classmethod
    def validate_compiler_max_match_depth(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError(f"compiler_max_match_depth must be at least 1, got {v}")
        return v


settings = Settings()
