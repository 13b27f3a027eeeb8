"""
                        Services Module

Request rules and infrastructure used by the API:
    - orders: order normalization, update whitelist and listing filter
    - envelope: uniform error responses
    - store: data store contract with mock and PostgreSQL implementations
"""

from order_backend.services.orders import (
    UPDATABLE_FIELDS,
    OrderListQuery,
    build_order_update,
    normalize_order,
    parse_order_id,
)

__all__ = [
    "UPDATABLE_FIELDS",
    "OrderListQuery",
    "build_order_update",
    "normalize_order",
    "parse_order_id",
]
