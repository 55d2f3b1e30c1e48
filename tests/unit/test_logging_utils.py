"""
Tests for logging utilities.
"""

import logging

import pytest
from fetch_client.core.common.logging_utils import (
    EnvironmentTaggingFilter,
    EnvironmentTaggingFormatter,
    get_logger,
    redact,
    redact_headers,
)


class TestRedaction:
    def test_redact(self) -> None:
        assert redact("Bearer token123") == "Be***23"
        assert redact("key") == "***"
        assert redact("") == ""
        assert redact("password123", mask="[REDACTED]") == "pa[REDACTED]23"

    def test_redact_headers(self) -> None:
        headers = {
            "Authorization": "Bearer token123",
            "X-Api-Key": "abcdefgh",
            "Accept": "application/json",
        }

        result = redact_headers(headers)

        assert result["Authorization"] == "Be***23"
        assert result["X-Api-Key"] == "ab***gh"
        assert result["Accept"] == "application/json"
        assert headers["Authorization"] == "Bearer token123"

    def test_redact_headers_empty(self) -> None:
        assert redact_headers(None) == {}


class TestEnvironmentTagging:
    def test_filter_tags_records_under_pytest(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert EnvironmentTaggingFilter().filter(record) is True
        assert record.env_tag == "test"

    def test_formatter_includes_tag(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)

        output = EnvironmentTaggingFormatter().format(record)

        assert "[test]" in output
        assert "hello" in output


def test_structured_logger_routes_through_logging(
    caplog: pytest.LogCaptureFixture,
) -> None:
    logger = get_logger("fetch_client.tests")

    with caplog.at_level(logging.INFO, logger="fetch_client.tests"):
        logger.info("Something happened", status_code=201)

    assert len(caplog.records) == 1
    assert caplog.records[0].name == "fetch_client.tests"
    assert "event='Something happened'" in caplog.text
    assert "status_code=201" in caplog.text


def test_structured_logger_respects_levels(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("fetch_client.tests.quiet")

    with caplog.at_level(logging.WARNING, logger="fetch_client.tests.quiet"):
        logger.debug("Hidden")

    assert caplog.records == []


def test_structured_logger_reports_calling_location(
    caplog: pytest.LogCaptureFixture,
) -> None:
    logger = get_logger("fetch_client.tests.location")

    with caplog.at_level(logging.INFO, logger="fetch_client.tests.location"):
        logger.info("Located")

    record = caplog.records[0]
    assert record.filename == "test_logging_utils.py"
    assert record.funcName == "test_structured_logger_reports_calling_location"
    assert "level=" not in record.getMessage()


def test_structured_logger_defaults_to_calling_module() -> None:
    logger = get_logger()

    assert logger.name == __name__
