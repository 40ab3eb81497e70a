"""
Selectable filter options derived from a statistics snapshot.

Only buckets with positive revenue contribute options, so the year and
month dropdowns never offer a period without sales.
"""
from typing import List, Tuple

from core.models import ALL, RawStats


def _year_sort_key(year: str) -> Tuple[int, int, str]:
    """Numeric years compare as numbers; other labels sort after them."""
    stripped = year.strip()
    if stripped.isdigit():
        return (0, int(stripped), year)
    return (1, 0, year)


def available_years(raw: RawStats) -> List[str]:
    """
    Distinct years with sales, ascending.

    Args:
        raw: Statistics snapshot

    Returns:
        Sorted list of year labels
    """
    years = {bucket.year for bucket in raw.monthly_totals if bucket.total > 0}
    return sorted(years, key=_year_sort_key)


def available_months(raw: RawStats, year: str = ALL) -> List[str]:
    """
    Distinct months with sales within the year selection.

    Months keep the order in which they first appear in the snapshot,
    which is the chronological order the service stores them in.

    Args:
        raw: Statistics snapshot
        year: Selected year or ALL

    Returns:
        List of month labels in first-seen order
    """
    months = dict.fromkeys(
        bucket.month
        for bucket in raw.monthly_totals
        if bucket.total > 0 and (year == ALL or bucket.year == year)
    )
    return list(months)
