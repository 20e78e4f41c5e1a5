"""Logger setup tests"""

import json
import logging

import pytest
from snakeops_telemetry.logger import ServiceFields, new_logger


def test_new_logger_text_format() -> None:
    logger = new_logger(level="DEBUG", format="text")
    assert logger is not None


def test_new_logger_returns_bound_logger() -> None:
    """The returned logger supports bind()."""
    logger = new_logger()
    bound = logger.bind(player_id="p-1")
    assert bound is not None


def test_service_fields_processor() -> None:
    processor = ServiceFields(service="snake-api", version="1.2.0", environment=None)
    event = processor(None, "info", {"event": "score accepted", "version": "override"})
    assert event == {"event": "score accepted", "service": "snake-api", "version": "override"}


def test_json_events_carry_service_identity(caplog: pytest.LogCaptureFixture) -> None:
    logger = new_logger(
        level="INFO", format="json", service="snake-api", version="1.2.0", environment="staging"
    )
    with caplog.at_level(logging.INFO, logger="snakeops"):
        logger.info("remote flags refreshed", remote_flags=3)
    event = json.loads(caplog.records[-1].getMessage())
    assert event["event"] == "remote flags refreshed"
    assert event["remote_flags"] == 3
    assert event["service"] == "snake-api"
    assert event["version"] == "1.2.0"
    assert event["environment"] == "staging"
    assert event["logger"] == "snakeops"
    assert event["level"] == "info"


def test_httpx_request_logs_are_quieted() -> None:
    new_logger(level="DEBUG")
    assert logging.getLogger("httpx").level == logging.WARNING
    new_logger(level="ERROR")
    assert logging.getLogger("httpx").level == logging.ERROR
