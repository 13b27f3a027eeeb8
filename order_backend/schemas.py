"""
Pydantic Schemas for Responses

Every endpoint answers with the same envelope: ``success`` plus one
endpoint-specific key (``menu``, ``orders``, ``order`` or ``orderId`` +
``order``). Order and menu rows are passed through as the store returns
them, so their fields stay the store's concern.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MenuResponse(BaseModel):
    """Menu of one restaurant."""
    success: bool = True
    menu: List[dict[str, Any]]


class OrderCreateResponse(BaseModel):
    """Response after successfully placing an order."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    order_id: int = Field(..., alias="orderId")
    order: dict[str, Any]


class OrderListResponse(BaseModel):
    """Orders of one restaurant, newest first."""
    success: bool = True
    orders: List[dict[str, Any]]


class OrderUpdateResponse(BaseModel):
    """Updated order, or null when no order matched the id."""
    success: bool = True
    order: Optional[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Liveness probe response."""
    success: bool = True
    status: str
    uptime: float
    store: str
    store_status: str
    timestamp: datetime
