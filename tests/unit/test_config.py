"""
Tests for core.config module.
"""
import pytest

from core.config import (
    APIConfig,
    AppConfig,
    ConfigurationError,
    LogConfig,
    StatsConfig,
    validate_config,
)


def _config(**overrides):
    return AppConfig(
        api=overrides.get("api", APIConfig(base_url="http://orders.test", timeout=30.0)),
        log=overrides.get("log", LogConfig(level="INFO", format="text")),
        stats=overrides.get("stats", StatsConfig(cache_size=128)),
    )


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid(self):
        validate_config(_config())

    def test_missing_url(self):
        with pytest.raises(ConfigurationError, match="ORDERS_API_URL is required"):
            validate_config(_config(api=APIConfig(base_url="", timeout=30.0)))

    def test_non_http_url(self):
        with pytest.raises(ConfigurationError, match="http"):
            validate_config(_config(api=APIConfig(base_url="ftp://orders", timeout=30.0)))

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError, match="ORDERS_API_TIMEOUT"):
            validate_config(_config(api=APIConfig(base_url="http://orders.test", timeout=0)))

    def test_bad_log_level(self):
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            validate_config(_config(log=LogConfig(level="LOUD", format="text")))

    def test_negative_cache_size(self):
        with pytest.raises(ConfigurationError, match="STATS_CACHE_SIZE"):
            validate_config(_config(stats=StatsConfig(cache_size=-1)))

    def test_reports_all_errors(self):
        cfg = _config(
            api=APIConfig(base_url="", timeout=-1),
            log=LogConfig(level="LOUD", format="text"),
        )
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config(cfg)

        message = str(exc_info.value)
        assert "ORDERS_API_URL" in message
        assert "ORDERS_API_TIMEOUT" in message
        assert "LOG_LEVEL" in message


class TestLogConfig:
    """Tests for LogConfig dataclass."""

    def test_json_format(self):
        assert LogConfig(level="INFO", format="json").json_format
        assert not LogConfig(level="INFO", format="text").json_format


class TestEnvironment:
    """Configuration is read from the environment."""

    def test_api_from_env(self, monkeypatch):
        monkeypatch.setenv("ORDERS_API_URL", "http://stats.internal:5000/")
        monkeypatch.setenv("ORDERS_API_TIMEOUT", "12.5")

        api = APIConfig()

        assert api.base_url == "http://stats.internal:5000"
        assert api.timeout == 12.5

    def test_bad_number_falls_back(self, monkeypatch):
        monkeypatch.setenv("STATS_CACHE_SIZE", "lots")
        assert StatsConfig().cache_size == 128
