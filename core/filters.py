"""
Year/month filter transitions.

A selection is only ever moved through these functions so that the
month stays consistent with the year:

- changing the year drops a month that has no sales in the new year
- selecting a month not offered for the current year is rejected

Shared between the dashboard session and the stateless web endpoints.
"""
from typing import List, Optional

from core.aggregator import filter_stats
from core.models import ALL, FilteredView, FilterState, RawStats
from core.observability import get_logger
from core.options import available_months, available_years
from core.validators import validate_month, validate_year

logger = get_logger(__name__)


def apply_year(raw: RawStats, state: FilterState, year: Optional[str]) -> FilterState:
    """
    Select a year, resetting the month if it is no longer available.

    Raises:
        ValidationError: If the year has no sales (state is left unchanged)
    """
    year = validate_year(year, available_years(raw))
    new_state = state.with_year(year)

    if not new_state.all_months and new_state.month not in available_months(raw, year):
        logger.debug(
            "Month not available for year, resetting to all",
            extra={"year": year, "month": new_state.month},
        )
        new_state = new_state.with_month(ALL)

    return new_state


def apply_month(raw: RawStats, state: FilterState, month: Optional[str]) -> FilterState:
    """
    Select a month within the current year.

    Raises:
        ValidationError: If the month is not offered (state is left unchanged)
    """
    month = validate_month(month, available_months(raw, state.year))
    return state.with_month(month)


def resolve_filter(
    raw: RawStats,
    year: Optional[str] = None,
    month: Optional[str] = None,
) -> FilterState:
    """
    Build a selection from request parameters.

    Starts from the defaults, then applies the year and the month in the
    same order a user would pick them.
    """
    state = apply_year(raw, FilterState(), year)
    return apply_month(raw, state, month)


class StatsFilter:
    """
    Filter selection bound to one statistics snapshot.

    Usage:
        stats_filter = StatsFilter(raw)
        stats_filter.set_year("2024")
        stats_filter.set_month("Mar")
        view = stats_filter.view
    """

    def __init__(self, raw: RawStats, state: Optional[FilterState] = None):
        self.raw = raw
        self._state = FilterState()
        if state is not None:
            self._state = resolve_filter(raw, state.year, state.month)

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def available_years(self) -> List[str]:
        return available_years(self.raw)

    @property
    def available_months(self) -> List[str]:
        """Months offered for the current year."""
        return available_months(self.raw, self._state.year)

    @property
    def view(self) -> FilteredView:
        """Filtered view for the current selection."""
        return filter_stats(self.raw, self._state)

    def set_year(self, year: Optional[str]) -> FilteredView:
        self._state = apply_year(self.raw, self._state, year)
        return self.view

    def set_month(self, month: Optional[str]) -> FilteredView:
        self._state = apply_month(self.raw, self._state, month)
        return self.view

    def select(self, year: Optional[str] = None, month: Optional[str] = None) -> FilteredView:
        """Apply year then month; nothing changes if either is rejected."""
        state = apply_year(self.raw, self._state, year)
        self._state = apply_month(self.raw, state, month)
        return self.view

    def reset(self) -> FilteredView:
        self._state = FilterState()
        return self.view
