"""
Async HTTP client for the orders service.

Provides a single async client for the stats snapshot, the order listing
and order details. Supports connection pooling and maps transport and
HTTP failures onto the core.exceptions hierarchy.

Failures are not retried: callers present a failed fetch as "no data".
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from core.config import config
from core.exceptions import OrdersAPIError, OrdersConnectionError, OrdersDataError
from core.models import OrderDetail, OrderSummary, RawStats
from core.observability import Timer, get_correlation_id, get_logger, metrics

logger = get_logger(__name__)

STATS_ENDPOINT = "api/orders/stats"
ORDERS_ENDPOINT = "api/orders"
ORDER_DETAIL_LABEL = "api/orders/{order_id}"


class OrdersAPIClient:
    """
    Async HTTP client for the orders service.

    Usage:
        async with OrdersAPIClient() as client:
            raw = await client.fetch_stats()

        # Or with manual lifecycle:
        client = OrdersAPIClient()
        await client.connect()
        try:
            orders = await client.fetch_orders()
        finally:
            await client.close()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize orders client.

        Args:
            base_url: Service base URL (defaults to ORDERS_API_URL env var)
            timeout: Request timeout in seconds (defaults to ORDERS_API_TIMEOUT)
        """
        self.base_url = (base_url or config.api.base_url).rstrip("/")
        self.timeout = timeout or config.api.timeout
        self._client: Optional[httpx.AsyncClient] = None

        if not self.base_url:
            raise ValueError("ORDERS_API_URL is required")

    @property
    def headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    async def connect(self) -> None:
        """Create HTTP client with connection pooling."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                limits=httpx.Limits(
                    max_keepalive_connections=config.api.max_keepalive_connections,
                    max_connections=config.api.max_connections,
                )
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "OrdersAPIClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        label: Optional[str] = None,
    ) -> Any:
        """
        Make a single HTTP request to the orders service.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL
            params: Query parameters
            label: Metrics/timer name; defaults to endpoint. Pass a fixed
                template for endpoints that embed identifiers.

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            OrdersConnectionError: Network/timeout errors
            OrdersAPIError: Service returned error response
            OrdersDataError: Body is not valid JSON
        """
        if not self._client:
            await self.connect()

        url = f"{self.base_url}/{endpoint}"
        label = label or endpoint

        # Propagate correlation ID to the upstream service
        request_headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            request_headers["X-Request-ID"] = correlation_id

        try:
            with Timer(f"orders_api {label}", logger):
                response = await self._client.request(
                    method=method,
                    url=url,
                    params=params,
                    headers=request_headers or None,
                )
        except httpx.TimeoutException as e:
            metrics.record_upstream(label, "unreachable")
            logger.error(
                f"Request timeout: {method} {endpoint}",
                extra={"endpoint": endpoint, "timeout": self.timeout}
            )
            raise OrdersConnectionError(f"Request timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            metrics.record_upstream(label, "unreachable")
            logger.error(
                f"Request failed: {method} {endpoint} - {e}",
                extra={"endpoint": endpoint, "error": str(e)}
            )
            raise OrdersConnectionError("Request failed", details=str(e)) from e

        if response.status_code >= 400:
            metrics.record_upstream(label, f"http_{response.status_code}")
            error_text = response.text[:500]
            logger.warning(
                f"API error {response.status_code}: {error_text}",
                extra={"endpoint": endpoint, "status_code": response.status_code}
            )
            raise OrdersAPIError(
                f"API returned {response.status_code}",
                status_code=response.status_code,
                details=error_text
            )

        if not response.content:
            metrics.record_upstream(label, "ok")
            return None

        try:
            data = response.json()
        except ValueError as e:
            metrics.record_upstream(label, "bad_payload")
            raise OrdersDataError(
                "Response is not valid JSON", expected="JSON", got=response.text[:100]
            ) from e

        metrics.record_upstream(label, "ok")
        return data

    # ═══════════════════════════════════════════════════════════════════════════
    # STATS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_stats(self) -> Any:
        """Get the raw statistics payload."""
        return await self._request("GET", STATS_ENDPOINT)

    async def fetch_stats(self) -> RawStats:
        """
        Get and parse the statistics snapshot.

        Raises:
            OrdersDataError: Payload is empty or missing statusCounts/monthlyTotals
        """
        return RawStats.from_api(await self.get_stats())

    # ═══════════════════════════════════════════════════════════════════════════
    # ORDERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_orders(self) -> List[Dict[str, Any]]:
        """Get order summaries."""
        data = await self._request("GET", ORDERS_ENDPOINT)
        if data is None:
            return []
        if not isinstance(data, list):
            raise OrdersDataError(
                "Orders payload is not a list", expected="list", got=type(data).__name__
            )
        return data

    async def fetch_orders(self) -> List[OrderSummary]:
        """Get order summaries as listing rows."""
        return [
            OrderSummary.from_api(item)
            for item in await self.get_orders()
            if isinstance(item, dict)
        ]

    async def get_order(self, order_id: str) -> Any:
        """Get single order by ID."""
        return await self._request(
            "GET",
            f"{ORDERS_ENDPOINT}/{quote(str(order_id), safe='')}",
            label=ORDER_DETAIL_LABEL,
        )

    async def fetch_order(self, order_id: str) -> Optional[OrderDetail]:
        """
        Get a single order detail.

        Returns:
            OrderDetail, or None if the order does not exist
        """
        try:
            data = await self.get_order(order_id)
        except OrdersAPIError as e:
            if e.is_not_found:
                return None
            raise

        if not data:
            return None
        if not isinstance(data, dict):
            raise OrdersDataError(
                "Order payload is not an object", expected="object", got=type(data).__name__
            )
        return OrderDetail.from_api(data)


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLETON INSTANCE
# ═══════════════════════════════════════════════════════════════════════════════

_client_instance: Optional[OrdersAPIClient] = None


def get_client() -> OrdersAPIClient:
    """Get singleton orders client instance."""
    global _client_instance
    if _client_instance is None:
        _client_instance = OrdersAPIClient()
    return _client_instance


async def get_async_client() -> OrdersAPIClient:
    """Get connected singleton client for async contexts."""
    client = get_client()
    await client.connect()
    return client


async def close_client() -> None:
    """Close and drop the singleton client."""
    global _client_instance
    if _client_instance is not None:
        await _client_instance.close()
        _client_instance = None
