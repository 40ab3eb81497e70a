"""
Domain models for orders service data.

Provides type-safe dataclasses for the statistics snapshot, the filter
selection, the derived filtered view, and order listings/details.
Statistics models are frozen so snapshots can be shared and cached.
"""
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.exceptions import OrdersDataError

# Filter value meaning "no restriction"
ALL = "all"


# ═══════════════════════════════════════════════════════════════════════════════
# PARSING HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _parse_number(value: Any, name: str, default: float = 0.0) -> float:
    """Strict numeric parse for statistics payloads."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise OrdersDataError(f"Invalid value for {name}", expected="number", got="bool")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise OrdersDataError(
            f"Invalid value for {name}", expected="number", got=type(value).__name__
        )
    if not math.isfinite(number):
        raise OrdersDataError(f"Invalid value for {name}", expected="finite number", got=str(value))
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _parse_count(value: Any, name: str) -> int:
    return round_half_up(_parse_number(value, name))


def _first_present(data: Dict[str, Any], keys: Iterable[str]) -> Any:
    """Return the first truthy value among keys (0 and "" fall through)."""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def _lenient_float(value: Any) -> float:
    """Lenient numeric parse for order line items; unusable values become 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _lenient_int(value: Any) -> int:
    # Whole value must be numeric: "3 pcs" counts as 0, not 3
    return int(_lenient_float(value))


# ═══════════════════════════════════════════════════════════════════════════════
# STATISTICS SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MonthlyTotal:
    """Revenue bucket for one (year, month) pair."""
    year: str
    month: str
    total: float
    order_count: Optional[int] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.year, self.month)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "MonthlyTotal":
        """Create MonthlyTotal from a stats payload entry."""
        if not isinstance(data, dict):
            raise OrdersDataError(
                "Invalid monthly total entry", expected="object", got=type(data).__name__
            )
        if data.get("year") is None or data.get("month") is None:
            raise OrdersDataError("Monthly total entry is missing year or month", got=str(data))

        order_count = data.get("orderCount")
        return cls(
            year=str(data["year"]),
            month=str(data["month"]),
            total=_parse_number(data.get("total"), "monthlyTotals.total"),
            order_count=None if order_count is None else _parse_count(order_count, "monthlyTotals.orderCount"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {"year": self.year, "month": self.month, "total": self.total}
        if self.order_count is not None:
            result["orderCount"] = self.order_count
        return result


@dataclass(frozen=True)
class StatusCount:
    """Number of orders observed with one status value."""
    status_id: str
    count: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "StatusCount":
        """Create StatusCount; accepts statusId, id or _id as the key."""
        if not isinstance(data, dict):
            raise OrdersDataError(
                "Invalid status count entry", expected="object", got=type(data).__name__
            )
        status_id = _first_present(data, ("statusId", "id", "_id"))
        return cls(
            status_id=str(status_id) if status_id is not None else "Unknown",
            count=_parse_count(data.get("count"), "statusCounts.count"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"statusId": self.status_id, "count": self.count}


@dataclass(frozen=True)
class RawStats:
    """Pre-aggregated statistics snapshot as served by the orders service."""
    total_revenue: float = 0.0
    total_orders: int = 0
    avg_order_value: float = 0.0
    status_counts: Tuple[StatusCount, ...] = ()
    monthly_totals: Tuple[MonthlyTotal, ...] = ()

    @classmethod
    def from_api(cls, data: Any) -> "RawStats":
        """
        Create RawStats from the stats endpoint body.

        Raises:
            OrdersDataError: If the body is empty, lacks statusCounts or
                monthlyTotals, or repeats a (year, month) bucket
        """
        if not data or not isinstance(data, dict):
            raise OrdersDataError("Stats payload is empty", expected="object", got=type(data).__name__)

        for name in ("statusCounts", "monthlyTotals"):
            if not isinstance(data.get(name), list):
                raise OrdersDataError(
                    f"Stats payload is missing {name}",
                    expected="list",
                    got=type(data.get(name)).__name__,
                )

        monthly_totals = tuple(MonthlyTotal.from_api(item) for item in data["monthlyTotals"])
        seen = set()
        for bucket in monthly_totals:
            if bucket.key in seen:
                raise OrdersDataError(
                    "Duplicate monthly total bucket", details=f"{bucket.month} {bucket.year}"
                )
            seen.add(bucket.key)

        return cls(
            total_revenue=_parse_number(data.get("totalRevenue"), "totalRevenue"),
            total_orders=_parse_count(data.get("totalOrders"), "totalOrders"),
            avg_order_value=_parse_number(data.get("avgOrderValue"), "avgOrderValue"),
            status_counts=tuple(StatusCount.from_api(item) for item in data["statusCounts"]),
            monthly_totals=monthly_totals,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRevenue": self.total_revenue,
            "totalOrders": self.total_orders,
            "avgOrderValue": self.avg_order_value,
            "statusCounts": [s.to_dict() for s in self.status_counts],
            "monthlyTotals": [m.to_dict() for m in self.monthly_totals],
        }


# ═══════════════════════════════════════════════════════════════════════════════
# FILTERING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FilterState:
    """Year/month selection; ALL means unrestricted."""
    year: str = ALL
    month: str = ALL

    @property
    def all_years(self) -> bool:
        return self.year == ALL

    @property
    def all_months(self) -> bool:
        return self.month == ALL

    def matches_year(self, bucket: MonthlyTotal) -> bool:
        """Check if a bucket is consistent with the year selection."""
        return self.all_years or bucket.year == self.year

    def with_year(self, year: str) -> "FilterState":
        return replace(self, year=year)

    def with_month(self, month: str) -> "FilterState":
        return replace(self, month=month)

    @property
    def label(self) -> str:
        """Chart title for the selection."""
        if self.all_months:
            return "Monthly Sales" if self.all_years else f"{self.year} Sales"
        if self.all_years:
            return f"{self.month} Sales"
        return f"{self.month} {self.year} Sales"

    def to_dict(self) -> Dict[str, str]:
        return {"year": self.year, "month": self.month}


@dataclass(frozen=True)
class FilteredView:
    """Statistics restricted to a FilterState."""
    total_revenue: float = 0.0
    total_orders: int = 0
    avg_order_value: float = 0.0
    monthly_totals: Tuple[MonthlyTotal, ...] = ()
    status_counts: Tuple[StatusCount, ...] = ()

    @property
    def has_sales(self) -> bool:
        return bool(self.monthly_totals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRevenue": self.total_revenue,
            "totalOrders": self.total_orders,
            "avgOrderValue": self.avg_order_value,
            "monthlyTotals": [m.to_dict() for m in self.monthly_totals],
            "statusCounts": [s.to_dict() for s in self.status_counts],
        }


# ═══════════════════════════════════════════════════════════════════════════════
# ORDERS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class OrderProduct:
    """Product line item within an order."""
    title: str
    price: float
    quantity: int
    brand: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "OrderProduct":
        """Create OrderProduct; price and quantity fall back through legacy keys."""
        return cls(
            title=data.get("title") or data.get("name") or "Unknown",
            price=_lenient_float(_first_present(data, ("price", "product_price", "unit_price"))),
            quantity=_lenient_int(_first_present(data, ("quantity", "qty"))),
            brand=data.get("brand"),
        )

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


def _parse_products(value: Any) -> List[OrderProduct]:
    if not isinstance(value, list):
        return []
    return [OrderProduct.from_api(item) for item in value if isinstance(item, dict)]


@dataclass
class OrderSummary:
    """Order row for the listing view."""
    order_id: Optional[str]
    purchase_date: str = "N/A"
    order_status: str = "Shipped"
    products: List[OrderProduct] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "OrderSummary":
        order_id = data.get("order_id")
        return cls(
            order_id=str(order_id) if order_id is not None else None,
            purchase_date=data.get("purchase_date") or "N/A",
            order_status=data.get("order_status") or "Shipped",
            products=_parse_products(data.get("products")),
        )

    @property
    def items(self) -> int:
        """Total quantity across products."""
        return sum(p.quantity for p in self.products)

    @property
    def total(self) -> float:
        return sum(p.line_total for p in self.products)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order_id": self.order_id,
            "purchase_date": self.purchase_date,
            "order_status": self.order_status,
            "items": self.items,
            "total": self.total,
        }


@dataclass
class ShippingAddress:
    """Destination of an order."""
    city: Optional[str] = None
    state_or_region: Optional[str] = None
    postal_code: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> Optional["ShippingAddress"]:
        if not data or not isinstance(data, dict):
            return None
        return cls(
            city=data.get("City"),
            state_or_region=data.get("StateOrRegion"),
            postal_code=data.get("PostalCode"),
        )

    @property
    def label(self) -> str:
        return f"{self.city}, {self.state_or_region} {self.postal_code}"


@dataclass
class OrderDetail:
    """Single order with products, shipping and payment."""
    order_id: str
    order_status: Optional[str] = None
    purchase_date: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None
    payment_method: str = "Other"
    products: List[OrderProduct] = field(default_factory=list)

    # Shipping is not charged separately
    shipping_cost: float = 0.0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "OrderDetail":
        if data.get("order_id") is None:
            raise OrdersDataError("Order payload is missing order_id")
        return cls(
            order_id=str(data["order_id"]),
            order_status=data.get("order_status"),
            purchase_date=data.get("purchase_date"),
            shipping_address=ShippingAddress.from_api(data.get("shipping_address")),
            payment_method=data.get("payment_method") or "Other",
            products=_parse_products(data.get("products")),
        )

    @property
    def shipping_label(self) -> str:
        return self.shipping_address.label if self.shipping_address else "Not available"

    @property
    def total_amount(self) -> float:
        """Sum of product line totals."""
        return sum(p.line_total for p in self.products)

    @property
    def order_total(self) -> float:
        return self.total_amount + self.shipping_cost
