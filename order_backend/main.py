"""
FastAPI Application Entry Point

Restaurant Table Ordering Backend
Proxies menu and order operations to the configured data store.

Endpoints:
    - GET /health: Liveness probe
    - GET /api/menu/{restaurant_number}: Menu of a restaurant
    - POST /api/order: Place an order
    - GET /api/orders?restaurant_number=&status=: List orders (query form)
    - GET /api/orders/{restaurant_number}: List orders (path form)
    - PATCH /api/orders/{order_id}: Update whitelisted order fields

Every response uses the ``{"success": ..., ...}`` envelope; unmatched routes
answer 404 ``{"success": false, "error": "Not found"}``.

Version: 1.0.0
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_backend.core.config import Settings, get_settings, setup_logging
from order_backend.core.exceptions import ClientError, OrderBackendError
from order_backend.schemas import (
    ErrorResponse,
    HealthResponse,
    MenuResponse,
    OrderCreateResponse,
    OrderListResponse,
    OrderUpdateResponse,
)
from order_backend.services.envelope import error_response
from order_backend.services.orders import (
    OrderListQuery,
    build_order_update,
    normalize_order,
    parse_order_id,
    require_restaurant_number,
)
from order_backend.services.store import BaseOrderStore, create_store

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.

    Builds the data store unless one was injected through ``create_app``,
    and closes the store it built on shutdown.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = create_store(settings)
    logger.info(f"✅ Order Store: {app.state.store.provider_name}")

    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    app.state.started_at = time.monotonic()
    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    if owns_store:
        await app.state.store.close()
        app.state.store = None
    logger.info("✅ Cleanup complete")


# =============================================================================
# DEPENDENCIES & HELPERS
# =============================================================================

def get_store(request: Request) -> BaseOrderStore:
    """Dependency injection for the application's data store."""
    return request.app.state.store


async def read_json_object(request: Request) -> dict[str, Any]:
    """
    Read the request body as a JSON object.

    An empty body reads as ``{}``.

    Raises:
        ClientError: If the body is not valid JSON or not an object
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ClientError("invalid JSON body")
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ClientError("request body must be a JSON object")
    return payload


# =============================================================================
# ROUTES
# =============================================================================

def register_routes(app: FastAPI) -> None:

    @app.get("/", tags=["Root"])
    async def root(request: Request) -> dict[str, str]:
        """API root with navigation links."""
        settings: Settings = request.app.state.settings
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.env_mode.value,
            "documentation": "/docs",
            "health": "/health",
        }

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Liveness Probe",
    )
    async def health_check(
        request: Request,
        store: BaseOrderStore = Depends(get_store),
    ) -> HealthResponse:
        """Report uptime and whether the data store answers."""
        store_ok = await store.health_check()
        return HealthResponse(
            status="operational" if store_ok else "degraded",
            uptime=round(time.monotonic() - request.app.state.started_at, 3),
            store=store.provider_name,
            store_status="healthy" if store_ok else "unhealthy",
            timestamp=datetime.now(timezone.utc),
        )

    # -------------------------------------------------------------------------
    # MENU
    # -------------------------------------------------------------------------

    @app.get(
        "/api/menu/{restaurant_number}",
        response_model=MenuResponse,
        responses=ERROR_RESPONSES,
        tags=["Menu"],
        summary="Get Menu by Restaurant",
    )
    async def get_menu(
        restaurant_number: str,
        store: BaseOrderStore = Depends(get_store),
    ) -> MenuResponse:
        menu = await store.fetch_menu(require_restaurant_number(restaurant_number))
        return MenuResponse(menu=menu)

    # -------------------------------------------------------------------------
    # ORDERS
    # -------------------------------------------------------------------------

    @app.post(
        "/api/order",
        response_model=OrderCreateResponse,
        responses=ERROR_RESPONSES,
        tags=["Orders"],
        summary="Place Order",
    )
    async def place_order(
        request: Request,
        store: BaseOrderStore = Depends(get_store),
    ) -> OrderCreateResponse:
        """
        Place an order.

        Missing optional fields are defaulted (``total`` 0, ``payment_mode``
        "cash", ``payment_status`` and ``status`` "pending"); ``table_number``
        is accepted for ``table_no``.
        """
        record = normalize_order(await read_json_object(request))
        order = await store.insert_order(record)

        logger.info(f"Order #{order['id']} placed for restaurant {order['restaurant_number']}")
        return OrderCreateResponse(order_id=order["id"], order=order)

    @app.get(
        "/api/orders",
        response_model=OrderListResponse,
        responses=ERROR_RESPONSES,
        tags=["Orders"],
        summary="List Orders",
    )
    async def list_orders(
        restaurant_number: Optional[str] = Query(None),
        restaurant: Optional[str] = Query(None, description="Alias of restaurant_number"),
        status: Optional[str] = Query(None),
        store: BaseOrderStore = Depends(get_store),
    ) -> OrderListResponse:
        """Orders of a restaurant, newest first, optionally filtered by status."""
        query = OrderListQuery.from_params(restaurant_number or restaurant, status)
        return OrderListResponse(orders=await store.list_orders(query))

    @app.get(
        "/api/orders/{restaurant_number}",
        response_model=OrderListResponse,
        responses=ERROR_RESPONSES,
        tags=["Orders"],
        summary="List Orders by Restaurant",
    )
    async def list_restaurant_orders(
        restaurant_number: str,
        status: Optional[str] = Query(None),
        store: BaseOrderStore = Depends(get_store),
    ) -> OrderListResponse:
        query = OrderListQuery.from_params(restaurant_number, status)
        return OrderListResponse(orders=await store.list_orders(query))

    @app.patch(
        "/api/orders/{order_id}",
        response_model=OrderUpdateResponse,
        responses=ERROR_RESPONSES,
        tags=["Orders"],
        summary="Update Order Fields",
    )
    async def update_order(
        order_id: str,
        request: Request,
        store: BaseOrderStore = Depends(get_store),
    ) -> OrderUpdateResponse:
        """
        Update status, payment_status, table_no, total or payment_mode.

        Other fields in the body are ignored. ``order`` is null when no order
        has the given id.
        """
        order_pk = parse_order_id(order_id)
        changes = build_order_update(await read_json_object(request))
        order = await store.update_order(order_pk, changes)

        if order is None:
            logger.info(f"Order #{order_pk} not found for update")
        else:
            logger.info(f"Order #{order_pk} updated: {sorted(changes)}")
        return OrderUpdateResponse(order=order)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(OrderBackendError)
    async def order_backend_error_handler(request: Request, exc: OrderBackendError) -> JSONResponse:
        return error_response(
            request, exc.message, exc.status_code, exc_info=exc.status_code >= 500
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return error_response(request, message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return error_response(request, f"invalid request: {details}", 400)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        settings: Settings = request.app.state.settings
        message = str(exc) if settings.debug else "Internal Server Error"
        return error_response(request, message, 500, exc_info=True)


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[BaseOrderStore] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted
        store: Pre-built data store; when omitted the lifespan builds one from
            settings and closes it on shutdown

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Menu lookup, order placement and order tracking for table-side ordering.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.settings = settings
    application.state.store = store
    application.state.started_at = time.monotonic()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.frontend_origin != "*",
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(application)
    register_exception_handlers(application)
    return application


setup_logging()
app = create_app()


def run() -> None:
    """Start the API server with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "order_backend.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
