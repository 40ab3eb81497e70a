"""
Statistics aggregation engine.

Derives a FilteredView from a RawStats snapshot and a FilterState.
The snapshot carries revenue per month but not always an order count,
so order counts are estimated from the global average order value:

    orders ≈ revenue / avg_order_value

Results are cached per (snapshot, filter) pair; both are frozen and
hashable, so a repeated selection never recomputes.

Usage:
    from core.aggregator import filter_stats

    view = filter_stats(raw, FilterState(year="2024"))
    print(view.total_revenue, view.total_orders, view.avg_order_value)
"""
import math
from functools import lru_cache
from typing import Optional

from core.config import STATS_CACHE_SIZE
from core.models import FilteredView, FilterState, MonthlyTotal, RawStats, round_half_up
from core.observability import get_logger

logger = get_logger(__name__)


def usable_average(avg_order_value: float) -> float:
    """Return the average if it can be divided by, else 0."""
    if avg_order_value is None or not math.isfinite(avg_order_value) or avg_order_value <= 0:
        return 0.0
    return avg_order_value


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, yielding 0 for a zero denominator or a non-finite result."""
    if not denominator:
        return 0.0
    result = numerator / denominator
    return result if math.isfinite(result) else 0.0


def _aggregate(raw: RawStats, state: FilterState) -> FilteredView:
    relevant = tuple(
        bucket for bucket in raw.monthly_totals
        if state.matches_year(bucket) and bucket.total > 0
    )
    total_revenue = sum(bucket.total for bucket in relevant)

    if total_revenue > 0:
        average = usable_average(raw.avg_order_value)
        if not average:
            logger.debug(
                "No usable average order value, counting revenue as one order",
                extra={"avg_order_value": raw.avg_order_value},
            )
        total_orders = max(1, round_half_up(safe_divide(total_revenue, average or total_revenue)))
    else:
        total_orders = 0

    return FilteredView(
        total_revenue=total_revenue,
        total_orders=total_orders,
        avg_order_value=safe_divide(total_revenue, total_orders),
        monthly_totals=relevant,
        status_counts=raw.status_counts,
    )


def find_bucket(raw: RawStats, state: FilterState) -> Optional[MonthlyTotal]:
    """
    Find the bucket for a single-month selection.

    With a specific year the (year, month) key is unique. Across all years
    the first bucket in stored order that has sales wins, so an empty month
    in an earlier year does not hide the same month with sales in a later
    year. A plain first-match lookup would return the empty bucket instead;
    the empty bucket is only returned when no candidate has sales.
    """
    candidates = [
        bucket for bucket in raw.monthly_totals
        if bucket.month == state.month and state.matches_year(bucket)
    ]
    if not candidates:
        return None
    for bucket in candidates:
        if bucket.total > 0:
            return bucket
    return candidates[0]


def estimate_orders(bucket: MonthlyTotal, avg_order_value: float) -> int:
    """Order count for one bucket: explicit count if present, else estimated."""
    if bucket.order_count is not None:
        return max(0, bucket.order_count)

    average = usable_average(avg_order_value)
    if not average:
        logger.debug(
            "No usable average order value, bucket order count set to 0",
            extra={"year": bucket.year, "month": bucket.month},
        )
        return 0
    return round_half_up(bucket.total / average)


def _single_bucket(raw: RawStats, state: FilterState) -> FilteredView:
    bucket = find_bucket(raw, state)

    if bucket is None or not bucket.total > 0:
        return FilteredView(status_counts=raw.status_counts)

    total_orders = estimate_orders(bucket, raw.avg_order_value)
    return FilteredView(
        total_revenue=bucket.total,
        total_orders=total_orders,
        avg_order_value=safe_divide(bucket.total, total_orders),
        monthly_totals=(bucket,),
        status_counts=raw.status_counts,
    )


@lru_cache(maxsize=STATS_CACHE_SIZE)
def filter_stats(raw: RawStats, state: FilterState = FilterState()) -> FilteredView:
    """
    Compute the filtered view for a selection.

    Args:
        raw: Statistics snapshot
        state: Year/month selection

    Returns:
        Fully populated FilteredView; status counts are never time-filtered
    """
    if state.all_months:
        return _aggregate(raw, state)
    return _single_bucket(raw, state)
