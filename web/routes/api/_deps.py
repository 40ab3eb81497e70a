"""Shared dependencies for API route modules."""
import logging
import time

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.orders_api import OrdersAPIClient, get_async_client
from core.validators import validate_order_id
from core.exceptions import OrdersServiceError, ValidationError
from web.config import RATE_LIMIT

# Shared limiter instance (also registered on app.state)
limiter = Limiter(key_func=get_remote_address)

# Track startup time for uptime calculation
START_TIME = time.time()


# Shared logger factory
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


async def get_orders_client() -> OrdersAPIClient:
    """Connected orders service client (overridable in tests)."""
    return await get_async_client()


__all__ = [
    "limiter",
    "RATE_LIMIT",
    "START_TIME",
    "get_logger",
    "get_orders_client",
    "validate_order_id",
    "OrdersServiceError",
    "ValidationError",
]
