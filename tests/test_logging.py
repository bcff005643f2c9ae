"""Tests for logging helpers."""

import json
import logging

import pytest

from adyenkit.core.logging import (
    LOGGER_NAME,
    JsonFormatter,
    configure_logging,
    get_logger,
    mask_secret,
)


@pytest.fixture
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


class TestLogging:
    """Tests for configure_logging and get_logger."""

    def test_get_logger_namespacing(self) -> None:
        assert get_logger().name == "adyenkit"
        assert get_logger("http").name == "adyenkit.http"

    def test_configure_logging_replaces_handler(self, restore_logger) -> None:
        configure_logging("DEBUG")
        logger = configure_logging(logging.WARNING, json_format=True)

        assert logger is restore_logger
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
        assert logger.propagate is False

    def test_json_lines_are_parseable(self, restore_logger, capsys) -> None:
        configure_logging("DEBUG", json_format=True)
        get_logger("http").warning(
            'POST /v71/payments -> http_422 "Field amount missing"',
            extra={"http_method": "POST", "attempt": 2, "outcome": "http_422", "latency_ms": 12.5},
        )

        line = capsys.readouterr().out.strip()
        record = json.loads(line)

        assert record["message"] == 'POST /v71/payments -> http_422 "Field amount missing"'
        assert record["level"] == "WARNING"
        assert record["name"] == "adyenkit.http"
        assert record["attempt"] == 2
        assert record["outcome"] == "http_422"
        assert record["latency_ms"] == 12.5
        assert "reference" not in record

    def test_configured_output(self, restore_logger, capsys) -> None:
        configure_logging("INFO")
        get_logger("client").info("hello")

        out = capsys.readouterr().out
        assert "INFO [adyenkit.client] hello" in out


class TestMaskSecret:
    """Tests for mask_secret."""

    def test_long_secret(self) -> None:
        assert mask_secret("AQEyhmfxK4_secret_7890") == "AQEy...7890"

    def test_short_secret_fully_masked(self) -> None:
        assert mask_secret("12345678") == "****"
