"""Unit tests for log-level resolution and logging configuration."""

import logging

import pytest

import speech_analytics.utils.logger as logger_utils


@pytest.fixture(autouse=True)
def _restore_root_level():
    root_logger = logging.getLogger()
    original_level = root_logger.level
    yield
    root_logger.setLevel(original_level)


def test_configure_logging_defaults_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert logger_utils.configure_logging() == logging.INFO


def test_configure_logging_reads_log_level_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert logger_utils.configure_logging() == logging.WARNING


def test_configure_logging_explicit_level_overrides_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    assert logger_utils.configure_logging("debug") == logging.DEBUG


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        logger_utils.configure_logging("LOUD")


def test_get_logger_does_not_reapply_env_after_configuration(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    logger_utils.configure_logging("INFO")

    logger = logger_utils.get_logger("speech_analytics.test")

    assert logger.name == "speech_analytics.test"
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_sets_handler_level_during_first_initialization() -> None:
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_configured = logger_utils._LOGGING_CONFIGURED

    for handler in original_handlers:
        root_logger.removeHandler(handler)
    logger_utils._LOGGING_CONFIGURED = False

    try:
        applied_level = logger_utils.configure_logging("WARNING")

        assert applied_level == logging.WARNING
        assert root_logger.handlers
        assert all(handler.level == logging.WARNING for handler in root_logger.handlers)
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        for handler in original_handlers:
            root_logger.addHandler(handler)
        logger_utils._LOGGING_CONFIGURED = original_configured
