"""
Pytest configuration and shared fixtures.
"""
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from core.models import RawStats
from core.orders_api import OrdersAPIClient


@pytest.fixture
def sample_stats_payload() -> Dict[str, Any]:
    """Stats body as served by GET /api/orders/stats."""
    return {
        "totalRevenue": 1850.0,
        "totalOrders": 37,
        "avgOrderValue": 50.0,
        "statusCounts": [
            {"id": "Shipped", "count": 30},
            {"id": "Pending", "count": 5},
            {"id": "Cancelled", "count": 2},
        ],
        "monthlyTotals": [
            {"year": "2023", "month": "Nov", "total": 300.0},
            {"year": "2023", "month": "Dec", "total": 0},
            {"year": "2024", "month": "Jan", "total": 500.0, "orderCount": 8},
            {"year": "2024", "month": "Feb", "total": 125.0},
            {"year": "2024", "month": "Mar", "total": 925.0},
        ],
    }


@pytest.fixture
def raw_stats(sample_stats_payload) -> RawStats:
    """Parsed sample snapshot."""
    return RawStats.from_api(sample_stats_payload)


@pytest.fixture
def single_year_raw() -> RawStats:
    """Snapshot with one selling month and one empty month."""
    return RawStats.from_api({
        "totalRevenue": 500,
        "totalOrders": 10,
        "avgOrderValue": 50,
        "statusCounts": [],
        "monthlyTotals": [
            {"year": "2023", "month": "Jan", "total": 500},
            {"year": "2023", "month": "Feb", "total": 0},
        ],
    })


@pytest.fixture
def sample_orders_payload() -> List[Dict[str, Any]]:
    """Order summaries as served by GET /api/orders."""
    return [
        {
            "order_id": "112-0000001",
            "purchase_date": "2024-03-02T10:15:00Z",
            "order_status": "Delivered",
            "products": [
                {"title": "USB-C Cable", "price": 9.99, "quantity": 2},
                {"title": "Charger", "product_price": "20.00", "qty": "1"},
            ],
        },
        {
            "order_id": "112-0000002",
            "products": [{"title": "Gift Card"}],
        },
    ]


@pytest.fixture
def sample_order_detail() -> Dict[str, Any]:
    """Order detail as served by GET /api/orders/{order_id}."""
    return {
        "order_id": "112-0000001",
        "order_status": "Shipped",
        "purchase_date": "2024-03-02T10:15:00Z",
        "shipping_address": {
            "City": "Pune",
            "StateOrRegion": "Maharashtra",
            "PostalCode": "411001",
        },
        "payment_method": "Card",
        "products": [
            {"title": "USB-C Cable", "brand": "Anker", "price": 10.0, "quantity": 2},
            {"title": "Charger", "brand": "Anker", "price": 25.5, "quantity": 1},
        ],
    }


@pytest.fixture
def make_client() -> Callable[..., OrdersAPIClient]:
    """
    Build an OrdersAPIClient backed by httpx.MockTransport.

    routes maps a request path to (status_code, body) or to an exception
    instance that the transport raises.
    """
    def _make(routes: Dict[str, Any]) -> OrdersAPIClient:
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, text="Not found")
            if isinstance(route, Exception):
                raise route
            status_code, body = route
            if body is None:
                return httpx.Response(status_code)
            if isinstance(body, str):
                return httpx.Response(status_code, text=body)
            return httpx.Response(status_code, content=json.dumps(body).encode())

        client = OrdersAPIClient(base_url="http://orders.test")
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return client

    return _make
