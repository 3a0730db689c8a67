from __future__ import annotations

import logging

import pytest

from school_records.config.logging import LoggingContext, build_logging_config
from school_records.config.settings import Settings


def test_log_level_is_normalised():
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValueError):
        Settings(LOG_LEVEL="chatty")


def test_environment_helpers():
    assert Settings(ENVIRONMENT="production").is_production()
    assert Settings(ENVIRONMENT="development").is_development()


def test_logging_config_targets_package_logger():
    config = build_logging_config()

    assert "school_records" in config["loggers"]
    assert "console" in config["handlers"]
    assert set(config["formatters"]) == {"standard", "json", "colored"}


def test_logging_context_adds_extra_fields():
    logger = logging.getLogger("school_records.tests")

    with LoggingContext(logger, schedule_id=7) as log:
        assert isinstance(log, logging.LoggerAdapter)
        assert log.extra == {"schedule_id": 7}
