"""
Observability module for structured logging, correlation IDs, and metrics.

Usage:
    from core.observability import setup_logging, get_logger, correlation_context

    # In app startup:
    setup_logging()

    # In modules:
    logger = get_logger(__name__)

    # Around a unit of work:
    with correlation_context(request_id):
        logger.info("Loading stats", extra={"year": "2024"})
"""
import json
import logging
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# Context variable for request correlation ID
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# LogRecord attributes that are not user-supplied extras
_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "asctime", "taskName",
}


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())[:8]


class correlation_context:
    """Context manager for setting correlation ID."""

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self.token = None

    def __enter__(self):
        self.token = _correlation_id.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, *args):
        _correlation_id.reset(self.token)


def _record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs logs as JSON with:
    - timestamp, level, logger, message
    - correlation_id (if set)
    - extra fields passed via ``extra=``
    - exception info (if present)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_entry["correlation_id"] = correlation_id

        log_entry.update(_record_extras(record))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable log formatter with correlation ID.

    Format: TIMESTAMP - LEVEL - LOGGER [CORRELATION_ID] - MESSAGE | extras
    """

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = get_correlation_id()
        correlation_str = f" [{correlation_id}]" if correlation_id else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        base_msg = f"{timestamp} - {record.levelname:8} - {record.name}{correlation_str} - {record.getMessage()}"

        extras = _record_extras(record)
        if extras:
            base_msg += f" | {extras}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    include_libs: bool = False
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, output JSON logs; otherwise human-readable
        include_libs: If True, also log from third-party libraries
    """
    formatter = StructuredFormatter() if json_format else HumanReadableFormatter()

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet down noisy libraries unless explicitly included
    if not include_libs:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════════════════
# TIMING METRICS
# ═══════════════════════════════════════════════════════════════════════════════

class Timer:
    """
    Context manager for timing operations.

    Usage:
        with Timer("fetch_stats", logger) as t:
            payload = await client.get_stats()
        print(f"Fetch took {t.elapsed_ms}ms")
    """

    def __init__(self, name: str, logger: Optional[logging.Logger] = None, warn_threshold_ms: float = 1000):
        self.name = name
        self.logger = logger
        self.warn_threshold_ms = warn_threshold_ms
        self.start_time: float = 0
        self.end_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()
        self.elapsed_ms = (self.end_time - self.start_time) * 1000

        if self.logger:
            level = logging.WARNING if self.elapsed_ms > self.warn_threshold_ms else logging.DEBUG
            self.logger.log(
                level,
                f"{self.name} completed",
                extra={"duration_ms": round(self.elapsed_ms, 2)}
            )


# ═══════════════════════════════════════════════════════════════════════════════
# METRICS COLLECTOR (simple in-memory stats)
# ═══════════════════════════════════════════════════════════════════════════════

class MetricsCollector:
    """
    Simple in-memory metrics collector.

    Tracks request counts by endpoint, error counts, timing samples and
    orders service call outcomes.
    """

    def __init__(self, max_samples: int = 100):
        self._request_counts: Dict[str, int] = {}
        self._upstream_counts: Dict[str, Dict[str, int]] = {}
        self._error_counts: Dict[str, int] = {}
        self._timing_samples: Dict[str, List[float]] = {}
        self._max_samples = max_samples

    def record_request(self, endpoint: str) -> None:
        self._request_counts[endpoint] = self._request_counts.get(endpoint, 0) + 1

    def record_error(self, error_type: str) -> None:
        self._error_counts[error_type] = self._error_counts.get(error_type, 0) + 1

    def record_upstream(self, endpoint: str, outcome: str) -> None:
        """Count an orders service call (ok, unreachable, http_<status>, bad_payload)."""
        outcomes = self._upstream_counts.setdefault(endpoint, {})
        outcomes[outcome] = outcomes.get(outcome, 0) + 1

    def record_timing(self, operation: str, duration_ms: float) -> None:
        samples = self._timing_samples.setdefault(operation, [])
        samples.append(duration_ms)

        # Keep only last N samples
        if len(samples) > self._max_samples:
            self._timing_samples[operation] = samples[-self._max_samples:]

    def get_stats(self) -> Dict[str, Any]:
        """Get current metrics snapshot."""
        stats = {
            "requests": dict(self._request_counts),
            "errors": dict(self._error_counts),
            "upstream": {endpoint: dict(counts) for endpoint, counts in self._upstream_counts.items()},
            "timing": {}
        }

        for operation, samples in self._timing_samples.items():
            if samples:
                sorted_samples = sorted(samples)
                stats["timing"][operation] = {
                    "count": len(samples),
                    "avg_ms": round(sum(samples) / len(samples), 2),
                    "min_ms": round(sorted_samples[0], 2),
                    "max_ms": round(sorted_samples[-1], 2),
                    "p50_ms": round(sorted_samples[len(sorted_samples) // 2], 2),
                }

        return stats

    def reset(self) -> None:
        self._request_counts.clear()
        self._error_counts.clear()
        self._upstream_counts.clear()
        self._timing_samples.clear()


# Global metrics instance
metrics = MetricsCollector()
