"""Order listing and order detail endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request

from core.orders_api import OrdersAPIClient
from web.schemas import OrderDetailResponse, OrdersListResponse
from web.services import dashboard_service
from ._deps import (
    limiter, RATE_LIMIT, get_orders_client, get_logger, validate_order_id,
    OrdersServiceError, ValidationError,
)

router = APIRouter()
logger = get_logger(__name__)


@router.get("/orders", response_model=OrdersListResponse)
@limiter.limit(RATE_LIMIT)
async def list_orders(request: Request, client: OrdersAPIClient = Depends(get_orders_client)):
    """Order rows with item counts and totals."""
    return await dashboard_service.get_orders_list(client)


@router.get("/orders/{order_id}", response_model=OrderDetailResponse)
@limiter.limit(RATE_LIMIT)
async def get_order(
    request: Request,
    order_id: str,
    client: OrdersAPIClient = Depends(get_orders_client),
):
    """Single order with products and totals."""
    try:
        order_id = validate_order_id(order_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        detail = await dashboard_service.get_order_detail(client, order_id)
    except OrdersServiceError as e:
        logger.warning(f"Order {order_id} unavailable: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch order")

    if detail is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return detail
