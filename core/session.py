"""
Dashboard session: one fetch-once lifecycle of the stats dashboard.

The statistics snapshot is fetched once per session. That fetch is the
only await; everything after it (options, filter changes, aggregation)
is synchronous. A failed fetch leaves the session in the "no data"
state; a cancelled fetch leaves it untouched.
"""
from enum import Enum
from typing import List, Optional

from core.exceptions import OrdersServiceError
from core.filters import StatsFilter
from core.models import FilteredView, FilterState, RawStats
from core.observability import get_logger
from core.orders_api import OrdersAPIClient

logger = get_logger(__name__)


class SessionStatus(str, Enum):
    """Lifecycle of a dashboard session."""
    LOADING = "loading"
    READY = "ready"
    NO_DATA = "no_data"


async def load_stats(client: OrdersAPIClient) -> Optional[RawStats]:
    """
    Fetch the statistics snapshot.

    Returns:
        RawStats, or None if the fetch failed or the payload is malformed
    """
    try:
        return await client.fetch_stats()
    except OrdersServiceError as e:
        logger.warning(
            f"Stats unavailable: {e}",
            extra={"error_type": type(e).__name__}
        )
        return None


class DashboardSession:
    """
    Owns the snapshot and the filter selection for one dashboard view.

    Usage:
        session = DashboardSession(client)
        await session.load()
        if session.status is SessionStatus.READY:
            session.set_year("2024")
            print(session.view.total_revenue)
    """

    def __init__(self, client: OrdersAPIClient):
        self.client = client
        self.status = SessionStatus.LOADING
        self._filter: Optional[StatsFilter] = None

    async def load(self) -> SessionStatus:
        """
        Fetch the snapshot once and reset the selection.

        If the awaiting task is cancelled, asyncio.CancelledError propagates
        and the session keeps its previous snapshot and status.
        """
        raw = await load_stats(self.client)

        if raw is None:
            self._filter = None
            self.status = SessionStatus.NO_DATA
        else:
            self._filter = StatsFilter(raw)
            self.status = SessionStatus.READY

        logger.debug("Dashboard session loaded", extra={"status": self.status.value})
        return self.status

    @property
    def raw(self) -> Optional[RawStats]:
        return self._filter.raw if self._filter else None

    @property
    def state(self) -> FilterState:
        return self._filter.state if self._filter else FilterState()

    @property
    def available_years(self) -> List[str]:
        return self._filter.available_years if self._filter else []

    @property
    def available_months(self) -> List[str]:
        return self._filter.available_months if self._filter else []

    @property
    def view(self) -> Optional[FilteredView]:
        """Current filtered view, or None without data."""
        return self._filter.view if self._filter else None

    def set_year(self, year: Optional[str]) -> Optional[FilteredView]:
        """Select a year; ignored without data."""
        if self._filter is None:
            return None
        return self._filter.set_year(year)

    def set_month(self, month: Optional[str]) -> Optional[FilteredView]:
        """Select a month; ignored without data."""
        if self._filter is None:
            return None
        return self._filter.set_month(month)

    def select(self, year: Optional[str] = None, month: Optional[str] = None) -> Optional[FilteredView]:
        """Apply a full selection: year first, then month."""
        if self._filter is None:
            return None
        return self._filter.select(year, month)
