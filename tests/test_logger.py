"""Tests for log formatting."""
import json
import logging

import pytest

from llm_compass.core.config import Settings
from llm_compass.core.logger import JsonFormatter, LoggerService, StructuredFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="llm_compass.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Catalog filtered",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extra_fields():
    formatter = JsonFormatter(Settings(_env_file=None))

    line = formatter.format(make_record(relax_level=1, request_id="req-1", raw=object()))
    payload = json.loads(line)

    assert payload["message"] == "Catalog filtered"
    assert payload["level"] == "INFO"
    assert payload["relax_level"] == 1
    assert payload["request_id"] == "req-1"
    assert payload["raw"] == "<non-serializable: object>"


def test_structured_formatter():
    formatter = StructuredFormatter(Settings(_env_file=None))

    line = formatter.format(make_record(relax_level=2))

    assert "message=Catalog filtered" in line
    assert "relax_level=2" in line


def test_unknown_log_format():
    with pytest.raises(ValueError):
        LoggerService(Settings(_env_file=None, LOG_FORMAT="xml"))


def test_get_logger_attaches_single_handler():
    service = LoggerService(Settings(_env_file=None, LOG_FORMAT="text"))

    logger = service.get_logger("llm_compass.test.single_handler")
    service.get_logger("llm_compass.test.single_handler")

    assert len(logger.handlers) == 1


def test_unknown_log_level():
    with pytest.raises(ValueError):
        LoggerService(Settings(_env_file=None, LOG_LEVEL="chatty"))


def test_quiet_loggers_stay_at_warning():
    LoggerService(
        Settings(_env_file=None, LOG_LEVEL="DEBUG", LOG_QUIET_LOGGERS="noisy.client")
    )

    assert logging.getLogger("noisy.client").level == logging.WARNING
