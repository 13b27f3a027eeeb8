"""
Order Store Factory

Provides a single entry point for constructing the data store.
Unlike a cached singleton, every call builds a new instance; the
application creates one in its lifespan and closes it on shutdown.

Usage:
    from order_backend.services.store import create_store

    store = create_store(settings)
    try:
        orders = await store.list_orders(OrderListQuery("7"))
    finally:
        await store.close()

Environment Switching:
    - ENV_MODE=development → InMemoryOrderStore (no database)
    - ENV_MODE=staging → SqlOrderStore (staging database)
    - ENV_MODE=production → SqlOrderStore (hosted database)
"""

import logging

from order_backend.core.config import Settings
from order_backend.services.store.base import BaseOrderStore, Record
from order_backend.services.store.memory import InMemoryOrderStore
from order_backend.services.store.postgres import SqlOrderStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> BaseOrderStore:
    """
    Build the store selected by ENV_MODE.

    Args:
        settings: Application settings

    Returns:
        BaseOrderStore: A new store; the caller owns it and must ``close()`` it
    """
    if settings.is_development:
        logger.info("Order Store: Using InMemoryOrderStore (development mode)")
        return InMemoryOrderStore()

    logger.info(f"Order Store: Using SqlOrderStore ({settings.env_mode.value} mode)")
    return SqlOrderStore.from_settings(settings)


__all__ = [
    "create_store",
    "BaseOrderStore",
    "Record",
    "InMemoryOrderStore",
    "SqlOrderStore",
]
