"""
FastAPI Application Entry Point

Food Ordering Service - REST binding of the ordering core.

Endpoints:
    - POST/DELETE /api/sessions, GET /api/session: login, logout, whoAmI
    - POST /api/users: register
    - /api/menu-items: public menu, admin maintenance
    - /api/cart: per-user cart
    - /api/orders: checkout and customer order views
    - /api/admin/orders: admin order management
    - GET /health: System health check

The session token travels in an HTTP-only cookie (``sid`` by default);
``Authorization: Bearer <token>`` is accepted as a fallback for API clients.

Author: Khalil Bannouri
Version: 3.1.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from food_ordering.core.config import get_settings, setup_logging
from food_ordering.core.errors import InvalidRequest, OrderingError
from food_ordering.models import User
from food_ordering.schemas import (
    CartItemAdd,
    CartItemQuantity,
    CartResponse,
    CartUpdate,
    DeletedResponse,
    ErrorResponse,
    HealthResponse,
    LoggedOutResponse,
    MenuItemCreate,
    MenuItemEnvelope,
    MenuItemResponse,
    MenuItemUpdate,
    MenuListResponse,
    OrderCreate,
    OrderEnvelope,
    OrderListResponse,
    OrderResponse,
    SessionStatusResponse,
    StatusUpdate,
    UsernameRequest,
    UserResponse,
)
from food_ordering.services import OrderingServices, get_services

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    services = get_services()
    logger.info(f"✅ Stores ready: {services.stores.stats()}")
    logger.info(
        "✅ Admin status changes: "
        + ("lifecycle enforced" if settings.enforce_admin_transitions else "permissive")
    )

    missing = settings.validate_production_config()
    if missing:
        logger.warning(f"⚠️ Production config needs attention: {missing}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    logger.info("Shutting down... in-memory state is discarded")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Online food ordering: menu browsing, carts and checkout for customers, "
        "menu and order fulfillment management for administrators."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_session_token(request: Request) -> Optional[str]:
    """Session token from the cookie, or from a bearer Authorization header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def current_user(
    token: Optional[str] = Depends(get_session_token),
    services: OrderingServices = Depends(get_services),
) -> User:
    return services.access.require_auth(token)


def current_admin(
    token: Optional[str] = Depends(get_session_token),
    services: OrderingServices = Depends(get_services),
) -> User:
    return services.access.require_admin(token)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"🍜 Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    services: OrderingServices = Depends(get_services),
) -> HealthResponse:
    """Report store sizes; the service is healthy whenever it can answer."""
    return HealthResponse(
        status="operational",
        environment=settings.env_mode.value,
        stores=services.stores.stats(),
        timestamp=datetime.now(timezone.utc),
    )


# =============================================================================
# IDENTITY ENDPOINTS
# =============================================================================

@app.get(
    "/api/session",
    response_model=SessionStatusResponse,
    response_model_exclude_none=True,
    tags=["Identity"],
    summary="Who am I",
)
async def who_am_i(
    token: Optional[str] = Depends(get_session_token),
    services: OrderingServices = Depends(get_services),
) -> SessionStatusResponse:
    user = services.access.who_am_i(token)
    if user is None:
        return SessionStatusResponse(logged_in=False)
    return SessionStatusResponse(logged_in=True, username=user.username, role=user.role)


@app.post(
    "/api/users",
    response_model=UserResponse,
    status_code=201,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    tags=["Identity"],
    summary="Register",
)
async def register(
    payload: Optional[UsernameRequest] = None,
    services: OrderingServices = Depends(get_services),
) -> UserResponse:
    payload = payload or UsernameRequest()
    user = services.identity.register(payload.username)
    return UserResponse.from_domain(user)


@app.post(
    "/api/sessions",
    response_model=UserResponse,
    responses=ERROR_RESPONSES,
    tags=["Identity"],
    summary="Log in",
)
async def login(
    response: Response,
    payload: Optional[UsernameRequest] = None,
    services: OrderingServices = Depends(get_services),
) -> UserResponse:
    payload = payload or UsernameRequest()
    session, user = services.identity.login(payload.username)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        httponly=True,
        samesite=settings.session_cookie_samesite,
        secure=settings.session_cookie_secure,
    )
    return UserResponse.from_domain(user)


@app.delete(
    "/api/sessions",
    response_model=LoggedOutResponse,
    tags=["Identity"],
    summary="Log out",
)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    services: OrderingServices = Depends(get_services),
) -> LoggedOutResponse:
    if token:
        services.identity.logout(token)
        response.delete_cookie(settings.session_cookie_name)
    return LoggedOutResponse()


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get(
    "/api/menu-items",
    response_model=MenuListResponse,
    tags=["Menu"],
    summary="List Menu",
)
async def list_menu(
    services: OrderingServices = Depends(get_services),
) -> MenuListResponse:
    items = services.catalog.list_items()
    logger.debug(f"Menu listed: {len(items)} item(s)")
    return MenuListResponse(items=[MenuItemResponse.from_domain(i) for i in items])


@app.post(
    "/api/menu-items",
    response_model=MenuItemEnvelope,
    status_code=201,
    responses=ERROR_RESPONSES,
    tags=["Menu"],
    summary="Create Menu Item (Admin)",
)
async def create_menu_item(
    payload: Optional[MenuItemCreate] = None,
    admin: User = Depends(current_admin),
    services: OrderingServices = Depends(get_services),
) -> MenuItemEnvelope:
    payload = payload or MenuItemCreate()
    item = services.catalog.create(payload.to_payload())
    return MenuItemEnvelope(item=MenuItemResponse.from_domain(item))


@app.patch(
    "/api/menu-items/{item_id}",
    response_model=MenuItemEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Menu"],
    summary="Update Menu Item (Admin)",
)
async def update_menu_item(
    item_id: str,
    payload: Optional[MenuItemUpdate] = None,
    admin: User = Depends(current_admin),
    services: OrderingServices = Depends(get_services),
) -> MenuItemEnvelope:
    payload = payload or MenuItemUpdate()
    item = services.catalog.update(item_id, payload.to_patch())
    return MenuItemEnvelope(item=MenuItemResponse.from_domain(item))


@app.delete(
    "/api/menu-items/{item_id}",
    response_model=DeletedResponse,
    responses=ERROR_RESPONSES,
    tags=["Menu"],
    summary="Delete Menu Item (Admin)",
)
async def delete_menu_item(
    item_id: str,
    admin: User = Depends(current_admin),
    services: OrderingServices = Depends(get_services),
) -> DeletedResponse:
    services.catalog.delete(item_id)
    return DeletedResponse()


# =============================================================================
# CART ENDPOINTS
# =============================================================================

@app.get(
    "/api/cart",
    response_model=CartResponse,
    responses=ERROR_RESPONSES,
    tags=["Cart"],
)
async def get_cart(
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> CartResponse:
    return CartResponse.from_entries(services.cart.get_cart(user.username))


@app.put(
    "/api/cart",
    response_model=CartResponse,
    responses=ERROR_RESPONSES,
    tags=["Cart"],
    summary="Replace Cart",
)
async def set_cart(
    payload: Optional[CartUpdate] = None,
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> CartResponse:
    payload = payload or CartUpdate()
    entries = services.cart.set_cart(user.username, payload.items)
    return CartResponse.from_entries(entries)


@app.post(
    "/api/cart/items",
    response_model=CartResponse,
    responses=ERROR_RESPONSES,
    tags=["Cart"],
    summary="Add Item To Cart",
)
async def add_cart_item(
    payload: Optional[CartItemAdd] = None,
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> CartResponse:
    payload = payload or CartItemAdd()
    entries = services.cart.add_item(user.username, payload.menu_item_id, payload.quantity)
    return CartResponse.from_entries(entries)


@app.patch(
    "/api/cart/items/{menu_item_id}",
    response_model=CartResponse,
    responses=ERROR_RESPONSES,
    tags=["Cart"],
    summary="Change Cart Line Quantity",
)
async def set_cart_item_quantity(
    menu_item_id: str,
    payload: Optional[CartItemQuantity] = None,
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> CartResponse:
    payload = payload or CartItemQuantity()
    entries = services.cart.set_item_quantity(user.username, menu_item_id, payload.quantity)
    return CartResponse.from_entries(entries)


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.get(
    "/api/orders",
    response_model=OrderListResponse,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="List My Orders",
)
async def list_own_orders(
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> OrderListResponse:
    return OrderListResponse.from_orders(services.orders.list_own(user.username))


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
)
async def get_own_order(
    order_id: str,
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> OrderEnvelope:
    order = services.orders.get_own(user.username, order_id)
    return OrderEnvelope(order=OrderResponse.from_domain(order))


@app.post(
    "/api/orders",
    response_model=OrderEnvelope,
    status_code=201,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Place Order",
)
async def place_order(
    payload: Optional[OrderCreate] = None,
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> OrderEnvelope:
    payload = payload or OrderCreate()
    order = services.orders.place_order(user.username, payload.items)
    return OrderEnvelope(order=OrderResponse.from_domain(order))


@app.patch(
    "/api/orders/{order_id}",
    response_model=OrderEnvelope,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Cancel My Order",
)
async def cancel_own_order(
    order_id: str,
    payload: Optional[StatusUpdate] = None,
    user: User = Depends(current_user),
    services: OrderingServices = Depends(get_services),
) -> OrderEnvelope:
    payload = payload or StatusUpdate()
    order = services.orders.cancel_own(user.username, order_id, payload.status)
    return OrderEnvelope(order=OrderResponse.from_domain(order))


# =============================================================================
# ADMIN ORDER ENDPOINTS
# =============================================================================

@app.get(
    "/api/admin/orders",
    response_model=OrderListResponse,
    responses=ERROR_RESPONSES,
    tags=["Admin"],
    summary="List All Orders",
)
async def list_all_orders(
    status: Optional[str] = Query(None),
    admin: User = Depends(current_admin),
    services: OrderingServices = Depends(get_services),
) -> OrderListResponse:
    return OrderListResponse.from_orders(services.orders.list_all(status))


@app.patch(
    "/api/admin/orders/{order_id}",
    response_model=OrderEnvelope,
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
    tags=["Admin"],
    summary="Set Order Status",
)
async def set_order_status(
    order_id: str,
    payload: Optional[StatusUpdate] = None,
    admin: User = Depends(current_admin),
    services: OrderingServices = Depends(get_services),
) -> OrderEnvelope:
    payload = payload or StatusUpdate()
    order = services.orders.set_status_as_admin(order_id, payload.status)
    return OrderEnvelope(order=OrderResponse.from_domain(order))


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def _error_response(exc: OrderingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(OrderingError)
async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    """Render named error kinds."""
    logger.debug(f"{request.method} {request.url.path} → {exc.code}")
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies that are not JSON objects never reach the services."""
    logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return _error_response(InvalidRequest())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal-error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )
