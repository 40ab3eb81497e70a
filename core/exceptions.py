"""
Custom exception hierarchy for orders service operations.

Exception Hierarchy:
    OrdersServiceError (base)
    ├── OrdersConnectionError  - Network/timeout issues
    ├── OrdersAPIError         - Service returned error response
    └── OrdersDataError        - Invalid response structure

    ValidationError            - Input validation failed
"""
from typing import Any, Optional


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class OrdersConnectionError(OrdersServiceError):
    """
    Network-related errors (timeout, connection refused, etc.).

    Callers present these as "no data"; there is no automatic retry.
    """


class OrdersAPIError(OrdersServiceError):
    """
    Service returned an error response.

    Check status_code for specifics (404 means the resource is absent).
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class OrdersDataError(OrdersServiceError):
    """
    Response has unexpected structure.

    Raised when a payload is missing required arrays or carries values
    we cannot interpret.
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        expected: Optional[str] = None,
        got: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.expected = expected
        self.got = got


class ValidationError(Exception):
    """
    Input validation failed.

    Used for validating filter selections and request parameters.
    """

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.field}: {self.message} (got: {self.value!r})"
        return f"{self.field}: {self.message}"
