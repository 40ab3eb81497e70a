"""Health check and metrics endpoints."""
import time

from fastapi import APIRouter, Depends

from core.exceptions import OrdersConnectionError
from core.observability import get_correlation_id, metrics, Timer
from core.orders_api import OrdersAPIClient
from web.config import VERSION
from web.schemas import HealthResponse, MetricsResponse
from ._deps import get_orders_client, get_logger, OrdersServiceError, START_TIME

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(client: OrdersAPIClient = Depends(get_orders_client)):
    """Health check endpoint for Docker/load balancer monitoring."""
    uptime_seconds = int(time.time() - START_TIME)

    upstream = {"status": "reachable", "base_url": client.base_url}
    try:
        with Timer("health_check_upstream") as timer:
            await client.get_stats()
        upstream["latency_ms"] = round(timer.elapsed_ms, 2)
    except OrdersConnectionError as e:
        upstream["status"] = "unreachable"
        upstream["error"] = str(e)
    except OrdersServiceError as e:
        upstream["status"] = "error"
        upstream["error"] = str(e)

    if upstream["status"] != "reachable":
        logger.warning(f"Upstream health check failed: {upstream['error']}")

    return {
        "status": "healthy" if upstream["status"] == "reachable" else "degraded",
        "version": VERSION,
        "uptime_seconds": uptime_seconds,
        "correlation_id": get_correlation_id(),
        "upstream": upstream,
    }


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics():
    """In-memory request counts, errors and timings."""
    return metrics.get_stats()
