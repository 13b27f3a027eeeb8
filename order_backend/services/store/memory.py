"""
In-Memory Order Store

Simulates the hosted database inside the process. Used in development mode
(ENV_MODE=development) and by the test suite to:
    - Run the complete API locally without a database
    - Exercise handlers against deterministic data

Behavior:
    - Assigns monotonically increasing integer ids
    - Returns copies of rows so callers never mutate stored state
    - Seeds a small demo menu for restaurant "1" unless a menu is given
    - Applies the orders table column rules: NOT NULL columns reject null
      with StoreError, table_no is stored as text
"""

import copy
import itertools
import logging
from typing import Any, Iterable, Optional

from order_backend.core.exceptions import StoreError
from order_backend.models import Order
from order_backend.services.orders import OrderListQuery
from order_backend.services.store.base import BaseOrderStore, Record

logger = logging.getLogger(__name__)

NOT_NULL_COLUMNS = frozenset(
    column.name for column in Order.__table__.columns
    if not column.nullable and not column.primary_key
)


DEMO_MENU = [
    {"restaurant_number": "1", "name": "Masala Chai", "description": "Spiced milk tea",
     "price": 2.5, "category": "drinks", "is_available": True},
    {"restaurant_number": "1", "name": "Paneer Tikka", "description": "Grilled cottage cheese",
     "price": 8.0, "category": "starters", "is_available": True},
    {"restaurant_number": "1", "name": "Veg Biryani", "description": None,
     "price": 11.5, "category": "mains", "is_available": True},
    {"restaurant_number": "1", "name": "Gulab Jamun", "description": "Two pieces",
     "price": 4.0, "category": "desserts", "is_available": False},
]


class InMemoryOrderStore(BaseOrderStore):
    """
    Mock implementation of the order store.

    Attributes:
        menu_items: Stored menu rows
        orders: Stored order rows keyed by id
    """

    def __init__(self, menu_items: Optional[Iterable[dict[str, Any]]] = None):
        """
        Initialize the store.

        Args:
            menu_items: Menu rows to load; DEMO_MENU when omitted
        """
        self._menu_ids = itertools.count(1)
        self._order_ids = itertools.count(1)
        self.menu_items: list[Record] = []
        self.orders: dict[int, Record] = {}

        for item in DEMO_MENU if menu_items is None else menu_items:
            self.add_menu_item(item)

        logger.info(f"InMemoryOrderStore initialized ({len(self.menu_items)} menu items)")

    @property
    def provider_name(self) -> str:
        return "memory"

    def add_menu_item(self, item: dict[str, Any]) -> Record:
        row = {"id": next(self._menu_ids), **copy.deepcopy(item)}
        row["restaurant_number"] = str(row["restaurant_number"])
        self.menu_items.append(row)
        return copy.deepcopy(row)

    async def fetch_menu(self, restaurant_number: str) -> list[Record]:
        return [
            copy.deepcopy(item)
            for item in self.menu_items
            if item["restaurant_number"] == restaurant_number
        ]

    async def insert_order(self, record: Record) -> Record:
        order_id = next(self._order_ids)
        row = {"id": order_id, "updated_at": None, **self._apply_column_rules(record)}
        self.orders[order_id] = row
        logger.debug(f"Stored order #{order_id}")
        return copy.deepcopy(row)

    async def list_orders(self, query: OrderListQuery) -> list[Record]:
        filters = query.filters()
        rows = [
            row for row in self.orders.values()
            if all(row.get(key) == value for key, value in filters.items())
        ]
        rows.sort(key=lambda row: row[query.order_by], reverse=query.descending)
        return copy.deepcopy(rows)

    async def update_order(self, order_id: int, changes: Record) -> Optional[Record]:
        row = self.orders.get(order_id)
        if row is None:
            return None
        row.update(self._apply_column_rules(changes))
        return copy.deepcopy(row)

    @staticmethod
    def _apply_column_rules(values: Record) -> Record:
        for name in NOT_NULL_COLUMNS:
            if name in values and values[name] is None:
                raise StoreError(f'null value in column "{name}" of relation "orders" violates not-null constraint')
        values = copy.deepcopy(values)
        if values.get("table_no") is not None:
            values["table_no"] = str(values["table_no"])
        return values
