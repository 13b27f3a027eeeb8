"""
Order Request Rules

Turns loosely-typed request input into the records sent to the data store:
    - normalize_order: canonical creation record for order placement
    - parse_order_id / build_order_update: whitelisted partial updates
    - OrderListQuery: equality filters and ordering for order listing

Missing optional fields are detected with null/membership checks, never
truthiness, so explicit falsy values such as ``total: 0`` are kept.
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from order_backend.core.exceptions import ClientError
from order_backend.models import OrderStatus, PaymentMode, PaymentStatus

# Fields a partial update may change, in the order they are copied.
UPDATABLE_FIELDS = ("status", "payment_status", "table_no", "total", "payment_mode")

RESTAURANT_REQUIRED = "restaurant_number is required"
INVALID_ORDER_ID = "invalid order id"
NO_UPDATABLE_FIELDS = "no updatable fields provided"
TOTAL_NOT_A_NUMBER = "total must be a number"

# ASCII digits only; int() alone also accepts "1_0" and non-Latin digits.
ORDER_ID_PATTERN = re.compile(r"-?[0-9]+")
# Range of the orders.id INTEGER column.
ORDER_ID_MIN = -(2 ** 31)
ORDER_ID_MAX = 2 ** 31 - 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _first_present(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def require_restaurant_number(value: Any) -> str:
    """
    Coerce a restaurant identifier to text.

    Raises:
        ClientError: If the identifier is missing or blank
    """
    if value is None:
        raise ClientError(RESTAURANT_REQUIRED)
    text = str(value).strip()
    if not text:
        raise ClientError(RESTAURANT_REQUIRED)
    return text


def _coerce_total(value: Any) -> float | int:
    if isinstance(value, bool):
        raise ClientError(TOTAL_NOT_A_NUMBER)
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise ClientError(TOTAL_NOT_A_NUMBER)
    if isinstance(value, int):
        return value
    # Finite floats only; NaN and infinities render as JSON null.
    if isinstance(value, float) and math.isfinite(value):
        return value
    raise ClientError(TOTAL_NOT_A_NUMBER)


def normalize_order(body: Mapping[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
    """
    Build the canonical order creation record.

    Args:
        body: Raw placement input (JSON object)
        now: Creation instant, defaults to the current UTC time

    Returns:
        The record to insert into the ``orders`` table

    Raises:
        ClientError: If restaurant_number is missing, or items/total have
            the wrong type

    Example:
        >>> normalize_order({"restaurant_number": 7, "table_number": 3})["table_no"]
        3
    """
    now = now or utc_now()

    items = _first_present(body.get("items"), default=[])
    if not isinstance(items, list):
        raise ClientError("items must be a list")

    return {
        "restaurant_number": require_restaurant_number(body.get("restaurant_number")),
        "table_no": _first_present(body.get("table_no"), body.get("table_number")),
        "items": items,
        "total": _coerce_total(_first_present(body.get("total"), default=0)),
        "payment_mode": _first_present(body.get("payment_mode"), default=PaymentMode.CASH.value),
        "payment_status": _first_present(
            body.get("payment_status"), default=PaymentStatus.PENDING.value
        ),
        "status": _first_present(body.get("status"), default=OrderStatus.PENDING.value),
        "created_at": now,
        "placed_at": now,
    }


def parse_order_id(raw: Any) -> int:
    """Parse an order identifier from a path segment."""
    if isinstance(raw, bool) or raw is None:
        raise ClientError(INVALID_ORDER_ID)
    if isinstance(raw, int):
        order_id = raw
    else:
        text = str(raw).strip()
        if not ORDER_ID_PATTERN.fullmatch(text):
            raise ClientError(INVALID_ORDER_ID)
        order_id = int(text)
    if not ORDER_ID_MIN <= order_id <= ORDER_ID_MAX:
        raise ClientError(INVALID_ORDER_ID)
    return order_id


def build_order_update(body: Mapping[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
    """
    Keep only whitelisted fields from a partial update and stamp ``updated_at``.

    Fields outside UPDATABLE_FIELDS are dropped silently. A field present
    with a null or zero value is still applied.

    Raises:
        ClientError: If no whitelisted field is present
    """
    changes = {field: body[field] for field in UPDATABLE_FIELDS if field in body}
    if not changes:
        raise ClientError(NO_UPDATABLE_FIELDS)

    if "total" in changes and changes["total"] is not None:
        changes["total"] = _coerce_total(changes["total"])

    changes["updated_at"] = now or utc_now()
    return changes


@dataclass(frozen=True)
class OrderListQuery:
    """
    Filter for listing a restaurant's orders.

    Attributes:
        restaurant_number: Owning restaurant, always filtered on
        status: Optional status filter; None lists every status
    """
    restaurant_number: str
    status: Optional[str] = None

    # Newest first; ids are assigned monotonically by the store.
    order_by = "id"
    descending = True

    @classmethod
    def from_params(cls, restaurant_number: Any, status: Optional[str] = None) -> "OrderListQuery":
        return cls(
            restaurant_number=require_restaurant_number(restaurant_number),
            status=status or None,
        )

    def filters(self) -> dict[str, Any]:
        """Column equality filters to apply, restaurant first."""
        filters: dict[str, Any] = {"restaurant_number": self.restaurant_number}
        if self.status is not None:
            filters["status"] = self.status
        return filters
