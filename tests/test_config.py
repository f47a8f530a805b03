"""Tests for settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from chart_service.config import Settings
from chart_service.logging_config import LOGGING_CONFIG, get_logger, setup_logging


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "CHART_SERVICE_WORKERS",
            "CHART_SERVICE_VL_VERSION",
            "CHART_SERVICE_LENIENT_VL_VERSION",
            "MAX_SPEC_KB",
            "CHART_SERVICE_LOG_JSON",
            "CHART_SERVICE_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.workers == 4
        assert settings.vl_version == "5.20"
        assert settings.lenient_vl_version is False
        assert settings.max_spec_kb == 5120
        assert settings.log_level == "INFO"

    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("CHART_SERVICE_WORKERS", "8")
        monkeypatch.setenv("CHART_SERVICE_VL_VERSION", "v5_16")
        monkeypatch.setenv("CHART_SERVICE_LENIENT_VL_VERSION", "yes")
        monkeypatch.setenv("CHART_SERVICE_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.workers == 8
        assert settings.vl_version == "5.16"
        assert settings.lenient_vl_version is True
        assert settings.log_level == "DEBUG"

    def test_unsupported_version(self, monkeypatch) -> None:
        monkeypatch.setenv("CHART_SERVICE_VL_VERSION", "4.0")
        with pytest.raises(ValueError, match="CHART_SERVICE_VL_VERSION"):
            Settings.from_env()


class TestLogging:
    def test_setup_does_not_mutate_defaults(self) -> None:
        setup_logging(json_output=True, log_level="DEBUG")
        assert LOGGING_CONFIG["handlers"]["console"]["formatter"] == "console"
        assert logging.getLogger("chart_service").level == logging.DEBUG
        setup_logging()
        assert logging.getLogger("chart_service").level == logging.INFO

    def test_get_logger(self) -> None:
        assert get_logger("chart_service.x").name == "chart_service.x"
