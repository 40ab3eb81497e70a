"""
Dashboard service for turning orders service data into API payloads.

Every fetch failure is caught here and converted to a local state
("no data" for the dashboard, an error message for the listing) so the
routes never surface upstream errors as server errors.
"""
import logging
from typing import Any, Dict, Optional

from core.exceptions import OrdersServiceError
from core.models import OrderDetail
from core.orders_api import OrdersAPIClient
from core.session import DashboardSession, SessionStatus

logger = logging.getLogger(__name__)

ORDERS_UNAVAILABLE = "Failed to fetch orders. Try again"


async def get_dashboard(
    client: OrdersAPIClient,
    year: Optional[str] = None,
    month: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the dashboard payload for one page load.

    Raises:
        ValidationError: If year or month is not selectable
    """
    session = DashboardSession(client)
    await session.load()

    if session.status is SessionStatus.NO_DATA:
        state = session.state
        return {
            "status": session.status.value,
            "filter": {**state.to_dict(), "label": state.label},
            "availableYears": [],
            "availableMonths": [],
            "view": None,
        }

    view = session.select(year, month)
    state = session.state
    return {
        "status": session.status.value,
        "filter": {**state.to_dict(), "label": state.label},
        "availableYears": session.available_years,
        "availableMonths": session.available_months,
        "view": view.to_dict(),
    }


async def get_orders_list(client: OrdersAPIClient) -> Dict[str, Any]:
    """Order listing rows, or an empty listing with an error message."""
    try:
        orders = await client.fetch_orders()
    except OrdersServiceError as e:
        logger.warning(f"Orders listing unavailable: {e}")
        return {"orders": [], "error": ORDERS_UNAVAILABLE}

    return {"orders": [order.to_dict() for order in orders], "error": None}


def order_detail_payload(order: OrderDetail) -> Dict[str, Any]:
    return {
        "order_id": order.order_id,
        "order_status": order.order_status,
        "purchase_date": order.purchase_date,
        "shipping": order.shipping_label,
        "payment_method": order.payment_method,
        "products": [
            {
                "title": p.title,
                "brand": p.brand,
                "price": p.price,
                "quantity": p.quantity,
                "line_total": p.line_total,
            }
            for p in order.products
        ],
        "items_total": order.total_amount,
        "shipping_cost": order.shipping_cost,
        "order_total": order.order_total,
    }


async def get_order_detail(client: OrdersAPIClient, order_id: str) -> Optional[Dict[str, Any]]:
    """
    Order detail payload.

    Returns:
        Payload dict, or None if the order does not exist

    Raises:
        OrdersServiceError: If the order could not be fetched
    """
    order = await client.fetch_order(order_id)
    if order is None:
        return None
    return order_detail_payload(order)
