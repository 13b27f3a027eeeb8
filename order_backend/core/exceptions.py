"""
Application Exceptions

Every error raised by the request pipeline carries the HTTP status it maps to.
The exception handlers in ``order_backend.main`` turn them into the uniform
``{"success": false, "error": ...}`` envelope.
"""

from typing import Optional


class OrderBackendError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ClientError(OrderBackendError):
    """Invalid or incomplete input from the caller (HTTP 400)."""

    status_code = 400


class StoreError(OrderBackendError):
    """Failure reported by the data store (HTTP 500), message kept as-is."""

    status_code = 500
