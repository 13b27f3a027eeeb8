"""
Core module initialization.
Exports configuration, logging and error utilities.
"""

from order_backend.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from order_backend.core.exceptions import OrderBackendError, ClientError, StoreError

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "OrderBackendError",
    "ClientError",
    "StoreError",
]
