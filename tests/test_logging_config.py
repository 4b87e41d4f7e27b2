"""
Tests for sardis_limits.logging_config.
"""
from __future__ import annotations

import json
import logging

import pytest

from sardis_limits.config import LimitsSettings
from sardis_limits.limits import LimitCheckResult
from sardis_limits.logging_config import (
    CorrelationIDFilter,
    LogContext,
    StructuredFormatter,
    clear_context,
    configure_from_settings,
    generate_correlation_id,
    get_correlation_id,
    log_limit_check,
    setup_logging,
)


def make_record(msg: str = "checked", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sardis_limits.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestLogContext:
    """Tests for correlation context handling."""

    def setup_method(self):
        clear_context()

    def test_context_sets_and_restores(self):
        with LogContext(correlation_id="cor_1", client_id="client_a"):
            assert get_correlation_id() == "cor_1"
            with LogContext(correlation_id="cor_2"):
                assert get_correlation_id() == "cor_2"
            assert get_correlation_id() == "cor_1"

        assert get_correlation_id() is None

    def test_generate_correlation_id(self):
        cid = generate_correlation_id()

        assert cid.startswith("cor_")
        assert len(cid) == 20


class TestStructuredFormatter:
    """Tests for JSON log formatting."""

    def test_includes_context_and_extra_fields(self):
        record = make_record(limit_name="daily")

        with LogContext(correlation_id="cor_abc", client_id="client_a", service_id="svc_1"):
            CorrelationIDFilter().filter(record)

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "checked"
        assert data["level"] == "INFO"
        assert data["correlation_id"] == "cor_abc"
        assert data["client_id"] == "client_a"
        assert data["service_id"] == "svc_1"
        assert data["limit_name"] == "daily"

    def test_empty_context_omitted(self):
        clear_context()
        record = make_record()
        CorrelationIDFilter().filter(record)

        data = json.loads(StructuredFormatter().format(record))

        assert "correlation_id" not in data
        assert "client_id" not in data


class TestLogLimitCheck:
    """Tests for the limit verdict helper."""

    def test_exceeded_logged_as_warning(self, caplog):
        logger = logging.getLogger("sardis_limits.test")
        result = LimitCheckResult(
            exceeded=True,
            reason="price_limit_exceeded",
            price_exceeded=True,
            projected_amount=1100,
            projected_count=2,
            limit_name="office_hours",
        )

        with caplog.at_level(logging.INFO, logger="sardis_limits.test"):
            log_limit_check(logger, result, payment_id="pay_1")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.reason == "price_limit_exceeded"
        assert record.payment_id == "pay_1"
        assert record.projected_amount == 1100

    def test_allowed_logged_as_info(self, caplog):
        logger = logging.getLogger("sardis_limits.test")
        result = LimitCheckResult(exceeded=False, reason="OK")

        with caplog.at_level(logging.INFO, logger="sardis_limits.test"):
            log_limit_check(logger, result)

        assert caplog.records[-1].levelno == logging.INFO


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_json_setup(self, restore_root_logger):
        setup_logging(level="debug", json_format=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)

    def test_file_handler(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "limits.log"
        setup_logging(level="INFO", json_format=True, log_file=str(log_file))

        logging.getLogger("sardis_limits.test").info("to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert len(restore_root_logger.handlers) == 2
        assert "to file" in log_file.read_text()

    def test_configure_from_settings(self, restore_root_logger):
        configure_from_settings(LimitsSettings(log_level="WARNING", log_json=False))

        assert restore_root_logger.level == logging.WARNING
        assert not isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)
