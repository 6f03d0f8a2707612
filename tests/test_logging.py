"""Tests for logging setup."""
import logging

from bloodconnect.core.logging import QUIET_LOGGERS, RequestIDFilter, setup_logging


def test_request_id_defaults_outside_requests():
    record = logging.LogRecord("bloodconnect", logging.INFO, __file__, 1, "hello", None, None)

    assert RequestIDFilter().filter(record)
    assert record.request_id == "N/A"


def test_request_id_from_extra_is_kept():
    record = logging.LogRecord("bloodconnect", logging.INFO, __file__, 1, "hello", None, None)
    record.request_id = "abc-123"

    RequestIDFilter().filter(record)

    assert record.request_id == "abc-123"


def test_setup_logging_configures_root():
    root = setup_logging("debug")

    assert root.level == logging.DEBUG
    assert all(any(isinstance(f, RequestIDFilter) for f in h.filters) for h in root.handlers)
    assert all(logging.getLogger(name).level == logging.WARNING for name in QUIET_LOGGERS)

    setup_logging()
