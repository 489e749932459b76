"""Tests for logging context managers."""

import logging

import pytest

from fare_engine.fare_logging import ContextFilter, LogContext, log_context, log_trip_context


@pytest.fixture
def logger():
    logger = logging.getLogger("test.context")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def captured_records(logger):
    """Capture log records for inspection."""
    records: list[logging.LogRecord] = []

    class RecordCapture(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    handler = RecordCapture()
    handler.addFilter(ContextFilter())
    logger.addHandler(handler)
    yield records
    logger.removeHandler(handler)


@pytest.mark.unit
class TestLogContext:
    def test_log_context_adds_extra_fields(self, logger, captured_records):
        with log_context(rule_id="sedan-default", zone_id="downtown"):
            logger.info("Test message")

        assert len(captured_records) == 1
        record = captured_records[0]
        assert record.rule_id == "sedan-default"
        assert record.zone_id == "downtown"

    def test_log_context_clears_on_exit(self, logger, captured_records):
        with log_context(trip_id="trip-002"):
            logger.info("inside")

        logger.info("outside")

        assert len(captured_records) == 2
        assert captured_records[0].trip_id == "trip-002"
        assert not hasattr(captured_records[1], "trip_id")

    def test_nested_contexts_restore_outer_fields(self, logger, captured_records):
        with log_context(trip_id="outer"):
            with log_context(trip_id="inner", rule_id="r1"):
                logger.info("inner")
            logger.info("outer")

        assert captured_records[0].trip_id == "inner"
        assert captured_records[1].trip_id == "outer"
        assert not hasattr(captured_records[1], "rule_id")

    def test_context_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with log_context(trip_id="trip-003"):
                raise RuntimeError("boom")

        assert LogContext.get() == {}

    def test_explicit_extra_wins_over_context(self, logger, captured_records):
        with log_context(zone_id="downtown"):
            logger.info("explicit", extra={"zone_id": "airport"})

        assert captured_records[0].zone_id == "airport"


@pytest.mark.unit
class TestLogTripContext:
    def test_sets_trip_and_correlation_id(self, logger, captured_records):
        with log_trip_context("trip-123", vehicle_class_id="sedan"):
            logger.info("pricing")

        record = captured_records[0]
        assert record.trip_id == "trip-123"
        assert record.correlation_id == "trip-123"
        assert record.vehicle_class_id == "sedan"

    def test_custom_correlation_id(self, logger, captured_records):
        with log_trip_context("trip-123", correlation_id="req-9"):
            logger.info("pricing")

        assert captured_records[0].correlation_id == "req-9"
