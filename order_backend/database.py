"""
Database Connection Module
Builds the SQLAlchemy async engine used by the PostgreSQL store.

The engine is created explicitly from settings and owned by the store that
uses it; nothing here is instantiated at import time.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from order_backend.core.config import Settings


# Base class for all our models
class Base(DeclarativeBase):
    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Args:
        settings: Application settings carrying the database URL and pool sizing

    Returns:
        AsyncEngine: A pooled engine; dispose it when the application shuts down
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
    )
