"""
Pydantic response models for API endpoints.

Provides type-safe response models with automatic validation and documentation.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════

class UpstreamStatus(BaseModel):
    """Orders service reachability."""
    status: str = Field(description="reachable or unreachable")
    base_url: str
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="Service status: healthy or degraded")
    version: str = Field(description="Application version")
    uptime_seconds: int = Field(description="Uptime in seconds")
    correlation_id: Optional[str] = Field(None, description="Request correlation ID")
    upstream: UpstreamStatus


class TimingStats(BaseModel):
    count: int
    avg_ms: float
    min_ms: float
    max_ms: float
    p50_ms: float


class MetricsResponse(BaseModel):
    """In-memory request metrics."""
    requests: Dict[str, int]
    errors: Dict[str, int]
    upstream: Dict[str, Dict[str, int]] = Field(default_factory=dict, description="Orders service calls by endpoint and outcome")
    timing: Dict[str, TimingStats]


# ═══════════════════════════════════════════════════════════════════════════════
# DASHBOARD
# ═══════════════════════════════════════════════════════════════════════════════

class MonthlyTotalResponse(BaseModel):
    """Revenue for one month bucket."""
    year: str
    month: str
    total: float
    orderCount: Optional[int] = None


class StatusCountResponse(BaseModel):
    """Orders per status."""
    statusId: str
    count: int


class FilteredViewResponse(BaseModel):
    """Statistics for the selected period."""
    totalRevenue: float = Field(description="Revenue in the selected period")
    totalOrders: int = Field(description="Explicit or estimated order count")
    avgOrderValue: float = Field(description="Revenue divided by order count")
    monthlyTotals: List[MonthlyTotalResponse] = Field(description="Months with sales in the period")
    statusCounts: List[StatusCountResponse] = Field(description="Status breakdown (not time-filtered)")


class FilterResponse(BaseModel):
    """Effective selection after validation and auto-correction."""
    year: str
    month: str
    label: str = Field(description="Chart title for the selection")


class DashboardResponse(BaseModel):
    """Dashboard payload: options, selection and filtered view."""
    status: str = Field(description="ready or no_data")
    filter: FilterResponse
    availableYears: List[str] = Field(default_factory=list)
    availableMonths: List[str] = Field(default_factory=list, description="Months for the selected year")
    view: Optional[FilteredViewResponse] = None


# ═══════════════════════════════════════════════════════════════════════════════
# ORDERS
# ═══════════════════════════════════════════════════════════════════════════════

class OrderRowResponse(BaseModel):
    """Order listing row."""
    order_id: Optional[str] = None
    purchase_date: str
    order_status: str
    items: int = Field(description="Total quantity")
    total: float = Field(description="Sum of price * quantity")


class OrdersListResponse(BaseModel):
    """Order listing; error is set when the listing could not be fetched."""
    orders: List[OrderRowResponse] = Field(default_factory=list)
    error: Optional[str] = None


class OrderProductResponse(BaseModel):
    title: str
    brand: Optional[str] = None
    price: float
    quantity: int
    line_total: float


class OrderDetailResponse(BaseModel):
    """Single order detail with summary totals."""
    order_id: str
    order_status: Optional[str] = None
    purchase_date: Optional[str] = None
    shipping: str = Field(description="Shipping address or 'Not available'")
    payment_method: str
    products: List[OrderProductResponse]
    items_total: float
    shipping_cost: float
    order_total: float
