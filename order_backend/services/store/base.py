"""
Order Store Abstract Base Class

Defines the interface contract for every data store implementation.
Both InMemoryOrderStore and SqlOrderStore implement these methods, so the
request handlers behave identically whichever store is active.

Each method performs exactly one call against the underlying store and
returns plain dict records. Failures reported by the store surface as
``StoreError``.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from order_backend.services.orders import OrderListQuery

Record = dict[str, Any]


class BaseOrderStore(ABC):
    """
    Abstract base class for order stores.

    Example:
        >>> store = create_store(settings)
        >>> menu = await store.fetch_menu("7")
        >>> order = await store.insert_order(normalize_order(body))
        >>> await store.close()
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the store backend.

        Returns:
            str: Provider name (e.g., "memory", "postgres")
        """
        pass

    @abstractmethod
    async def fetch_menu(self, restaurant_number: str) -> list[Record]:
        """Return every menu item of one restaurant."""
        pass

    @abstractmethod
    async def insert_order(self, record: Record) -> Record:
        """
        Insert one order.

        Args:
            record: Canonical creation record from ``normalize_order``

        Returns:
            The stored row, including its assigned ``id``
        """
        pass

    @abstractmethod
    async def list_orders(self, query: OrderListQuery) -> list[Record]:
        """Return the orders matching ``query``, newest first."""
        pass

    @abstractmethod
    async def update_order(self, order_id: int, changes: Record) -> Optional[Record]:
        """
        Apply a partial update to the order with ``order_id``.

        Returns:
            The updated row, or None when no order has that id
        """
        pass

    async def health_check(self) -> bool:
        """Check that the store is reachable."""
        return True

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
