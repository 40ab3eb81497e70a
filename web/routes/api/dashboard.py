"""Dashboard statistics endpoint."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from core.orders_api import OrdersAPIClient
from web.schemas import DashboardResponse
from web.services import dashboard_service
from ._deps import limiter, RATE_LIMIT, get_orders_client, get_logger, ValidationError

router = APIRouter()
logger = get_logger(__name__)


@router.get("/dashboard", response_model=DashboardResponse)
@limiter.limit(RATE_LIMIT)
async def get_dashboard(
    request: Request,
    year: Optional[str] = Query(None, description="Year with sales, or 'all'"),
    month: Optional[str] = Query(None, description="Month with sales in the year, or 'all'"),
    client: OrdersAPIClient = Depends(get_orders_client),
):
    """Revenue, order count and average order value for the selected period."""
    try:
        return await dashboard_service.get_dashboard(client, year=year, month=month)
    except ValidationError as e:
        logger.info(f"Rejected dashboard selection: {e}")
        raise HTTPException(status_code=400, detail=str(e))
