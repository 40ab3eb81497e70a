"""
Web API configuration.
"""
from core.config import (
    VERSION,
    WEB_HOST,
    WEB_PORT,
    RATE_LIMIT,
    ORDERS_API_URL,
    config,
)

LOG_LEVEL = config.log.level
LOG_JSON = config.log.json_format

# Paths that skip request logging
QUIET_PATHS = {"/api/health", "/health"}
