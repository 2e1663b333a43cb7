"""
Unit tests for compiler configuration.

Tests cover:
- Defaults with no environment configured
- Environment variable loading
- Field validation
"""

import pytest
from pydantic import ValidationError

from routematch.core.config import AppEnvironment, Settings


class TestSettings:
    """Tests for Settings."""

    @pytest.mark.anyio
    async def test_defaults(self, monkeypatch):
        for name in (
            "APP_ENV",
            "APP_LOG_LEVEL",
            "OBSERVABILITY_STRUCTURED_LOGS",
            "OBSERVABILITY_METRICS_ENABLED",
            "COMPILER_MAX_MATCH_DEPTH",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.app_env == AppEnvironment.LOCAL
        assert settings.app_log_level == "INFO"
        assert settings.observability_structured_logs is True
        assert settings.observability_metrics_enabled is True
        assert settings.compiler_max_match_depth is None

    @pytest.mark.anyio
    async def test_loads_from_environment(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "PROD")
        monkeypatch.setenv("APP_LOG_LEVEL", "debug")
        monkeypatch.setenv("COMPILER_MAX_MATCH_DEPTH", "32")
        monkeypatch.setenv("OBSERVABILITY_METRICS_ENABLED", "false")

        settings = Settings()

        assert settings.app_env == AppEnvironment.PROD
        assert settings.app_log_level == "DEBUG"
        assert settings.compiler_max_match_depth == 32
        assert settings.observability_metrics_enabled is False

    @pytest.mark.anyio
    async def test_invalid_app_env_rejected(self):
        with pytest.raises(ValidationError, match="app_env must be one of"):
            Settings(app_env="staging")

    @pytest.mark.anyio
    async def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError, match="app_log_level"):
            Settings(app_log_level="LOUD")

    @pytest.mark.anyio
    @pytest.mark.parametrize("depth", [0, -3])
    async def test_non_positive_depth_rejected(self, depth):
        with pytest.raises(ValidationError, match="compiler_max_match_depth"):
            Settings(compiler_max_match_depth=depth)
