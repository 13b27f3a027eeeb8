"""
Response Envelope

Success bodies are built by the response models in ``order_backend.schemas``;
this module produces the failure side: ``{"success": false, "error": msg}``
with the matching HTTP status, logged with the endpoint that failed.
"""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from order_backend.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def endpoint_name(request: Request) -> str:
    """Name of the matched route, or ``METHOD path`` when nothing matched."""
    route = request.scope.get("route")
    name = getattr(route, "name", None)
    if name:
        return name
    return f"{request.method} {request.url.path}"


def error_response(
    request: Request,
    message: str,
    status_code: int,
    exc_info: bool = False,
) -> JSONResponse:
    """
    Log a failure and wrap it in the error envelope.

    Client errors (4xx) are logged as warnings, server errors as errors.

    Args:
        request: The failed request, used for log context
        message: Error message returned to the caller
        status_code: HTTP status of the response
        exc_info: Attach the active traceback to the log record
    """
    level = logging.WARNING if status_code < 500 else logging.ERROR
    logger.log(
        level,
        f"{endpoint_name(request)} failed ({status_code}): {message}",
        exc_info=exc_info,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ErrorResponse(error=message)),
    )
