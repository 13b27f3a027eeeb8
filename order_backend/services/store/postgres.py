"""
PostgreSQL Order Store Implementation

Talks to the hosted database through SQLAlchemy's async Core query builder.
Used in staging and production (ENV_MODE=staging|production).

Every operation is a single statement executed in its own transaction;
INSERT and UPDATE use RETURNING so the stored row comes back in the same
round trip. Errors raised by SQLAlchemy or the driver are wrapped in
``StoreError`` with the driver's message preserved.
"""

import logging
from typing import Optional

from sqlalchemy import insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from order_backend.core.config import Settings
from order_backend.core.exceptions import StoreError
from order_backend.database import create_engine
from order_backend.models import MenuItem, Order
from order_backend.services.orders import OrderListQuery
from order_backend.services.store.base import BaseOrderStore, Record

logger = logging.getLogger(__name__)

menu_items = MenuItem.__table__
orders = Order.__table__


class SqlOrderStore(BaseOrderStore):
    """
    Order store backed by a relational database.

    Attributes:
        engine: Async engine owned by this store; disposed by ``close()``
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        logger.info(f"SqlOrderStore initialized ({engine.url.render_as_string(hide_password=True)})")

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlOrderStore":
        return cls(create_engine(settings))

    @property
    def provider_name(self) -> str:
        return self.engine.dialect.name

    async def fetch_menu(self, restaurant_number: str) -> list[Record]:
        stmt = (
            select(menu_items)
            .where(menu_items.c.restaurant_number == restaurant_number)
            .order_by(menu_items.c.id)
        )
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise self._store_error("fetch_menu", e) from e

    async def insert_order(self, record: Record) -> Record:
        stmt = insert(orders).values(**record).returning(*orders.c)
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return dict(result.mappings().one())
        except SQLAlchemyError as e:
            raise self._store_error("insert_order", e) from e

    async def list_orders(self, query: OrderListQuery) -> list[Record]:
        order_column = orders.c[query.order_by]
        stmt = (
            select(orders)
            .where(*[orders.c[key] == value for key, value in query.filters().items()])
            .order_by(order_column.desc() if query.descending else order_column.asc())
        )
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise self._store_error("list_orders", e) from e

    async def update_order(self, order_id: int, changes: Record) -> Optional[Record]:
        stmt = (
            update(orders)
            .where(orders.c.id == order_id)
            .values(**changes)
            .returning(*orders.c)
        )
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                row = result.mappings().first()
                return dict(row) if row is not None else None
        except SQLAlchemyError as e:
            raise self._store_error("update_order", e) from e

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("SqlOrderStore connections closed")

    @staticmethod
    def _store_error(operation: str, error: SQLAlchemyError) -> StoreError:
        message = str(getattr(error, "orig", None) or error)
        logger.debug(f"{operation} failed: {message}")
        return StoreError(message)
