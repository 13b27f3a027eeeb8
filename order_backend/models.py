"""
SQLAlchemy Database Models

Table definitions for the two tables exposed by the hosted database:
    - menu_items: read-only menu catalogue, scoped per restaurant
    - orders: table-side orders and their lifecycle fields

The schema itself is owned by the database; these models describe it so the
store can build queries against it.
"""

import enum

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, JSON, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator

from order_backend.database import Base


class TextValue(TypeDecorator):
    """String column that stores numeric input (e.g. table 12) as text."""
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(value)


class OrderStatus(str, enum.Enum):
    """Conventional order status values (not enforced)."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Conventional payment status values (not enforced)."""
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


class PaymentMode(str, enum.Enum):
    """Conventional payment modes (not enforced)."""
    CASH = "cash"
    CARD = "card"
    UPI = "upi"


class MenuItem(Base):
    """A dish on a restaurant's menu."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    restaurant_number = Column(String(50), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    category = Column(String(50), nullable=True)
    is_available = Column(Boolean, default=True)

    def __repr__(self):
        return f"<MenuItem #{self.id} - {self.restaurant_number} - {self.name}>"


class Order(Base):
    """
    A placed order.

    Created once by placement, mutated only through whitelisted partial
    updates, never deleted.
    """
    __tablename__ = "orders"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # =========================================================================
    # SEATING
    # =========================================================================
    restaurant_number = Column(String(50), nullable=False, index=True)
    table_no = Column(TextValue(20), nullable=True)

    # =========================================================================
    # ORDER DETAILS
    # =========================================================================
    items = Column(JSON, nullable=False)
    total = Column(Float, nullable=False, default=0.0)

    # =========================================================================
    # PAYMENT INFO
    # =========================================================================
    payment_mode = Column(String(20), nullable=False, default=PaymentMode.CASH.value)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)

    # =========================================================================
    # ORDER STATUS
    # =========================================================================
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    placed_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Order #{self.id} - restaurant {self.restaurant_number} - {self.status}>"
