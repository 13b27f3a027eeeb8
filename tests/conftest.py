"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Settings pinned to development mode (no .env lookup)
- In-memory stores, including recording and failing variants
- A FastAPI TestClient wired to an injected store
"""

from typing import Any, Generator, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from order_backend.core.config import EnvironmentMode, Settings
from order_backend.core.exceptions import StoreError
from order_backend.main import create_app
from order_backend.services.orders import OrderListQuery
from order_backend.services.store import InMemoryOrderStore, Record

# ============================================================================
# STORE DOUBLES
# ============================================================================


class RecordingStore(InMemoryOrderStore):
    """In-memory store that remembers every call it receives."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.inserts: list[Record] = []
        self.queries: list[OrderListQuery] = []
        self.updates: list[tuple[int, Record]] = []

    async def insert_order(self, record: Record) -> Record:
        self.inserts.append(record)
        return await super().insert_order(record)

    async def list_orders(self, query: OrderListQuery) -> list[Record]:
        self.queries.append(query)
        return await super().list_orders(query)

    async def update_order(self, order_id: int, changes: Record) -> Optional[Record]:
        self.updates.append((order_id, changes))
        return await super().update_order(order_id, changes)


class FailingStore(InMemoryOrderStore):
    """Store whose every operation fails like an unreachable database."""

    message = "connection to server at \"db\" failed: Connection refused"

    async def fetch_menu(self, restaurant_number: str) -> list[Record]:
        raise StoreError(self.message)

    async def insert_order(self, record: Record) -> Record:
        raise StoreError(self.message)

    async def list_orders(self, query: OrderListQuery) -> list[Record]:
        raise StoreError(self.message)

    async def update_order(self, order_id: int, changes: Record) -> Optional[Record]:
        raise StoreError(self.message)

    async def health_check(self) -> bool:
        return False


SAMPLE_MENU = [
    {"restaurant_number": "7", "name": "Tea", "price": 1.5, "category": "drinks"},
    {"restaurant_number": "7", "name": "Samosa", "price": 2.0, "category": "snacks"},
    {"restaurant_number": "8", "name": "Coffee", "price": 2.5, "category": "drinks"},
]


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Development settings that ignore any local .env file."""
    return Settings(_env_file=None, env_mode=EnvironmentMode.DEVELOPMENT)


@pytest.fixture
def store() -> RecordingStore:
    """Provide a recording in-memory store with a small menu."""
    return RecordingStore(menu_items=SAMPLE_MENU)


@pytest.fixture
def app(settings: Settings, store: RecordingStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings=settings, store=FailingStore())) as test_client:
        yield test_client
