"""
Centralized configuration for the Order Stats Dashboard.

This module provides a single source of truth for all configuration values.
Configuration is loaded from environment variables with sensible defaults.

Usage:
    from core.config import config

    base_url = config.api.base_url
    timeout = config.api.timeout
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


@dataclass(frozen=True)
class APIConfig:
    """Upstream orders service configuration."""

    base_url: str = field(
        default_factory=lambda: os.getenv("ORDERS_API_URL", "http://localhost:5000").rstrip("/")
    )
    timeout: float = field(default_factory=lambda: _env_float("ORDERS_API_TIMEOUT", 30.0))
    max_connections: int = 20
    max_keepalive_connections: int = 10


@dataclass(frozen=True)
class WebConfig:
    """Web API configuration."""

    host: str = field(default_factory=lambda: os.getenv("WEB_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("WEB_PORT", 8080))
    # slowapi limit string applied per client address
    rate_limit: str = field(default_factory=lambda: os.getenv("RATE_LIMIT", "60/minute"))


@dataclass(frozen=True)
class LogConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))

    @property
    def json_format(self) -> bool:
        return self.format == "json"


@dataclass(frozen=True)
class StatsConfig:
    """Statistics engine configuration."""

    # Number of (snapshot, filter) results kept by the aggregator cache
    cache_size: int = field(default_factory=lambda: _env_int("STATS_CACHE_SIZE", 128))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""

    version: str = "1.0.0"
    api: APIConfig = field(default_factory=APIConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log: LogConfig = field(default_factory=LogConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)


# Global config instance
config = AppConfig()


# ─── Convenience Exports ──────────────────────────────────────────────────────
VERSION = config.version
ORDERS_API_URL = config.api.base_url
ORDERS_API_TIMEOUT = config.api.timeout
WEB_HOST = config.web.host
WEB_PORT = config.web.port
RATE_LIMIT = config.web.rate_limit
LOG_LEVEL = config.log.level
STATS_CACHE_SIZE = config.stats.cache_size


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def validate_config(app_config: AppConfig = None) -> None:
    """
    Validate that all required configuration is present and sane.

    Call this on application startup to fail fast with clear error messages
    instead of cryptic runtime failures.

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    cfg = app_config or config
    errors = []

    if not cfg.api.base_url:
        errors.append("ORDERS_API_URL is required but not set")
    elif not cfg.api.base_url.startswith(("http://", "https://")):
        errors.append(f"ORDERS_API_URL must be an http(s) URL, got {cfg.api.base_url!r}")

    if cfg.api.timeout <= 0:
        errors.append("ORDERS_API_TIMEOUT must be positive")

    if cfg.log.level not in VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {sorted(VALID_LOG_LEVELS)}")

    if cfg.stats.cache_size < 0:
        errors.append("STATS_CACHE_SIZE must not be negative")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)
