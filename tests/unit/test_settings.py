"""Unit tests for environment-driven router settings."""

import logging

from admission_router.settings import Settings


def test_defaults(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "JSON_LOGS",
        "CORRELATION_IDS",
        "DISPATCH_LOG_LEVEL",
        "DISPATCH_NO_MATCH_CODE",
        "METRICS_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.json_logs is True
    assert settings.correlation_ids is True
    assert settings.dispatch_no_match_code == 500
    assert settings.metrics_enabled is True
    assert settings.dispatch_log_level_number == logging.INFO


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JSON_LOGS", "false")
    monkeypatch.setenv("DISPATCH_LOG_LEVEL", "debug")
    monkeypatch.setenv("DISPATCH_NO_MATCH_CODE", "503")
    monkeypatch.setenv("METRICS_ENABLED", "0")

    settings = Settings(_env_file=None)

    assert settings.json_logs is False
    assert settings.dispatch_log_level_number == logging.DEBUG
    assert settings.dispatch_no_match_code == 503
    assert settings.metrics_enabled is False


def test_unknown_dispatch_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("DISPATCH_LOG_LEVEL", "chatty")

    assert Settings(_env_file=None).dispatch_log_level_number == logging.INFO
