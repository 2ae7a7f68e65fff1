from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from ai_responder.core.logging import configure_logging
from ai_responder.core.settings import Settings


def test_settings_defaults_throttle_to_one_second() -> None:
    settings = Settings()

    assert settings.responder_flush_interval_seconds == 1.0
    assert settings.responder_error_fallback_text == "Error generating the message"


def test_settings_read_environment_aliases(monkeypatch) -> None:
    monkeypatch.setenv("RESPONDER_FLUSH_INTERVAL_SECONDS", "0.25")
    monkeypatch.setenv("CHAT_BACKEND_USE_MOCK", "true")

    settings = Settings()

    assert settings.responder_flush_interval_seconds == 0.25
    assert settings.chat_backend_use_mock is True


def test_settings_reject_non_positive_flush_interval() -> None:
    with pytest.raises(ValidationError):
        Settings(RESPONDER_FLUSH_INTERVAL_SECONDS=0)


def test_effective_log_level_depends_on_environment() -> None:
    assert Settings(APP_ENV="local").effective_log_level == "DEBUG"
    assert Settings(APP_ENV="production").effective_log_level == "INFO"
    assert Settings(APP_ENV="production", LOG_LEVEL="warning").effective_log_level == "WARNING"


def test_configure_logging_quiets_http_client_loggers() -> None:
    httpx_logger = logging.getLogger("httpx")
    previous_level = httpx_logger.level
    try:
        configure_logging("INFO")
        assert httpx_logger.level == logging.WARNING

        configure_logging("DEBUG")
        assert httpx_logger.level == logging.DEBUG
    finally:
        httpx_logger.setLevel(previous_level)
