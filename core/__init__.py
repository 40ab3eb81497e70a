"""
Core library for the Order Stats Dashboard.

This package contains the statistics engine and its collaborators:
- models: Snapshot, filter and order dataclasses
- options: Selectable years and months
- aggregator: Filtered view computation
- filters: Year/month transitions with auto-correction
- orders_api: Async client for the orders service
- config: Centralized configuration
"""

# Import in dependency order
from core.exceptions import (
    OrdersServiceError,
    OrdersConnectionError,
    OrdersAPIError,
    OrdersDataError,
    ValidationError,
)

from core.models import (
    ALL,
    MonthlyTotal,
    StatusCount,
    RawStats,
    FilterState,
    FilteredView,
)

from core.options import available_years, available_months
from core.aggregator import filter_stats
from core.filters import StatsFilter, apply_year, apply_month, resolve_filter

from core.config import config

__all__ = [
    # Exceptions
    "OrdersServiceError",
    "OrdersConnectionError",
    "OrdersAPIError",
    "OrdersDataError",
    "ValidationError",
    # Models
    "ALL",
    "MonthlyTotal",
    "StatusCount",
    "RawStats",
    "FilterState",
    "FilteredView",
    # Engine
    "available_years",
    "available_months",
    "filter_stats",
    "StatsFilter",
    "apply_year",
    "apply_month",
    "resolve_filter",
    # Config
    "config",
]
