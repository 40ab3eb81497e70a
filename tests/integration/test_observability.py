"""
Integration tests for core/observability.py

Tests structured logging, correlation IDs, timing and metrics collection.
"""
import logging
import json

from core.observability import (
    correlation_context,
    generate_correlation_id,
    get_correlation_id,
    HumanReadableFormatter,
    MetricsCollector,
    StructuredFormatter,
    Timer,
    get_logger,
)


def _record(msg="Test message", name="test.logger", **extra):
    record = logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationId:
    """Tests for correlation ID management."""

    def test_generate_correlation_id(self):
        """Generated IDs are short and distinct."""
        first, second = generate_correlation_id(), generate_correlation_id()
        assert len(first) == 8
        assert first != second

    def test_context_sets_and_restores(self):
        before = get_correlation_id()
        with correlation_context("req-1") as cid:
            assert cid == "req-1"
            assert get_correlation_id() == "req-1"
        assert get_correlation_id() == before

    def test_context_generates_id(self):
        with correlation_context() as cid:
            assert cid
            assert get_correlation_id() == cid


class TestTimer:
    """Tests for Timer context manager."""

    def test_measures_elapsed_time(self):
        with Timer("filter_stats") as timer:
            sum(range(1000))

        assert timer.name == "filter_stats"
        assert timer.elapsed_ms >= 0

    def test_logs_completion(self, caplog):
        logger = get_logger("test.timer")
        with caplog.at_level(logging.DEBUG, logger="test.timer"):
            with Timer("fetch_stats", logger):
                pass

        assert any("fetch_stats completed" in r.getMessage() for r in caplog.records)

    def test_slow_operation_warns(self, caplog):
        logger = get_logger("test.timer.slow")
        with caplog.at_level(logging.DEBUG, logger="test.timer.slow"):
            with Timer("fetch_stats", logger, warn_threshold_ms=-1):
                pass

        assert any(r.levelno == logging.WARNING for r in caplog.records)


class TestMetricsCollector:
    """Tests for MetricsCollector class."""

    def test_record_request(self):
        metrics = MetricsCollector()
        metrics.record_request("/api/dashboard")
        metrics.record_request("/api/dashboard")
        metrics.record_request("/api/orders")

        stats = metrics.get_stats()
        assert stats["requests"] == {"/api/dashboard": 2, "/api/orders": 1}

    def test_record_error(self):
        metrics = MetricsCollector()
        metrics.record_error("OrdersConnectionError")
        metrics.record_error("OrdersConnectionError")

        assert metrics.get_stats()["errors"]["OrdersConnectionError"] == 2

    def test_record_timing(self):
        metrics = MetricsCollector()
        for duration in (100.0, 200.0, 150.0):
            metrics.record_timing("/api/dashboard", duration)

        timings = metrics.get_stats()["timing"]["/api/dashboard"]
        assert timings["count"] == 3
        assert timings["avg_ms"] == 150.0
        assert timings["min_ms"] == 100.0
        assert timings["max_ms"] == 200.0
        assert timings["p50_ms"] == 150.0

    def test_record_upstream(self):
        metrics = MetricsCollector()
        metrics.record_upstream("api/orders/stats", "ok")
        metrics.record_upstream("api/orders/stats", "unreachable")
        metrics.record_upstream("api/orders/stats", "ok")

        assert metrics.get_stats()["upstream"] == {"api/orders/stats": {"ok": 2, "unreachable": 1}}

    def test_samples_bounded(self):
        """Only the most recent samples are kept."""
        metrics = MetricsCollector(max_samples=2)
        for duration in (1.0, 2.0, 3.0):
            metrics.record_timing("op", duration)

        timings = metrics.get_stats()["timing"]["op"]
        assert timings["count"] == 2
        assert timings["min_ms"] == 2.0

    def test_reset(self):
        metrics = MetricsCollector()
        metrics.record_request("/api/orders")
        metrics.record_error("Error")
        metrics.record_timing("/api/orders", 100.0)

        metrics.reset()

        assert metrics.get_stats() == {"requests": {}, "errors": {}, "upstream": {}, "timing": {}}


class TestStructuredFormatter:
    """Tests for JSON log formatter."""

    def test_formats_as_json(self):
        parsed = json.loads(StructuredFormatter().format(_record()))

        assert parsed["message"] == "Test message"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test.logger"
        assert "T" in parsed["timestamp"]

    def test_includes_extras(self):
        parsed = json.loads(StructuredFormatter().format(_record(year="2024", status_code=502)))

        assert parsed["year"] == "2024"
        assert parsed["status_code"] == 502

    def test_includes_correlation_id(self):
        with correlation_context("test-correlation-456"):
            parsed = json.loads(StructuredFormatter().format(_record()))

        assert parsed["correlation_id"] == "test-correlation-456"


class TestHumanReadableFormatter:
    """Tests for text log formatter."""

    def test_format(self):
        with correlation_context("abc"):
            output = HumanReadableFormatter().format(_record("Stats unavailable", error_type="X"))

        assert "[abc]" in output
        assert "Stats unavailable" in output
        assert "'error_type': 'X'" in output


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger(self):
        logger = get_logger("core.aggregator")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "core.aggregator"
