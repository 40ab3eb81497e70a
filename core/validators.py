"""
Input validation functions for filter selections and API parameters.

All validators raise ValidationError on invalid input.
"""

import re
from typing import Any, Iterable, Optional

from core.exceptions import ValidationError
from core.models import ALL

MAX_ORDER_ID_LENGTH = 64
ORDER_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def normalize_filter_value(value: Any, field: str) -> str:
    """
    Normalize a raw year/month selection.

    Surrounding whitespace is trimmed and "all" matches case-insensitively.
    None selects ALL.

    Raises:
        ValidationError: If value is empty or not a string
    """
    if value is None:
        return ALL

    if not isinstance(value, str):
        raise ValidationError(field, "Must be a string", value)

    value = value.strip()
    if not value:
        raise ValidationError(field, "Must not be empty", value)

    if value.lower() == ALL:
        return ALL
    return value


def validate_choice(
    value: Any,
    choices: Iterable[str],
    field: str,
) -> str:
    """
    Validate that a selection is ALL or one of the offered choices.

    Args:
        value: Raw selection
        choices: Currently selectable values
        field: Field name for error messages

    Returns:
        Normalized selection

    Raises:
        ValidationError: If selection is not offered
    """
    selection = normalize_filter_value(value, field)
    if selection == ALL:
        return selection

    allowed = list(choices)
    if selection not in allowed:
        if allowed:
            message = f"Must be '{ALL}' or one of {allowed}"
        else:
            message = f"Only '{ALL}' is available"
        raise ValidationError(field, message, selection)
    return selection


def validate_year(value: Any, available: Iterable[str]) -> str:
    """Validate a year selection against the years with sales."""
    return validate_choice(value, available, "year")


def validate_month(value: Any, available: Iterable[str]) -> str:
    """Validate a month selection against the months offered for the year."""
    return validate_choice(value, available, "month")


def validate_order_id(value: Optional[str], field: str = "order_id") -> str:
    """
    Validate an order identifier used in a URL path.

    Raises:
        ValidationError: If the ID is empty, too long or has unsafe characters
    """
    if value is None:
        raise ValidationError(field, "Order ID is required")

    value = str(value).strip()
    if not value:
        raise ValidationError(field, "Order ID is required", value)

    if len(value) > MAX_ORDER_ID_LENGTH:
        raise ValidationError(
            field,
            f"Must be at most {MAX_ORDER_ID_LENGTH} characters",
            f"{len(value)} characters"
        )

    if not ORDER_ID_PATTERN.match(value):
        raise ValidationError(field, "Contains invalid characters", value)

    return value
