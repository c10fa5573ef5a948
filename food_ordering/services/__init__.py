"""
                        Services Module

Business logic on top of the stores. Every service raises OrderingError
subclasses and never touches HTTP.

Services:
    - access: Access Gate (session → user, auth/admin checks)
    - identity: register / login / logout
    - catalog: menu listing and admin maintenance
    - cart: snapshot carts with merge-on-add
    - orders: Order Engine (checkout, cancel, admin status)
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from food_ordering.core.config import Settings, get_settings
from food_ordering.services.access import AccessGate
from food_ordering.services.cart import CartService
from food_ordering.services.catalog import CatalogService
from food_ordering.services.identity import IdentityService
from food_ordering.services.orders import OrderEngine
from food_ordering.stores import StoreRegistry, get_stores, reset_stores

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderingServices:
    """All services wired to one StoreRegistry."""
    stores: StoreRegistry
    access: AccessGate
    identity: IdentityService
    catalog: CatalogService
    cart: CartService
    orders: OrderEngine


def build_services(stores: StoreRegistry, settings: Optional[Settings] = None) -> OrderingServices:
    settings = settings or get_settings()
    return OrderingServices(
        stores=stores,
        access=AccessGate(stores.identity, settings),
        identity=IdentityService(stores.identity, settings),
        catalog=CatalogService(stores.catalog),
        cart=CartService(stores.carts, stores.catalog),
        orders=OrderEngine(stores.orders, stores.catalog, stores.carts, settings),
    )


@lru_cache()
def get_services() -> OrderingServices:
    """Services bound to the process-wide stores (cached)."""
    return build_services(get_stores())


def reset_services() -> None:
    """Clear cached services and stores; the next call starts from scratch."""
    get_services.cache_clear()
    reset_stores()


__all__ = [
    "OrderingServices",
    "build_services",
    "get_services",
    "reset_services",
    "AccessGate",
    "IdentityService",
    "CatalogService",
    "CartService",
    "OrderEngine",
]
