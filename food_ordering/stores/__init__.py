"""
Store Factory

Provides a single entry point for obtaining the process-wide stores.
The rest of the application only sees the ``StoreRegistry`` bundle and the
abstract store contracts, never the concrete dictionaries.

Usage:
    from food_ordering.stores import get_stores

    stores = get_stores()
    item = stores.catalog.get_item("1")

Author: Khalil Bannouri
Version: 3.1.0
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from food_ordering.core.config import Settings, get_settings
from food_ordering.stores.base import (
    BaseCartStore,
    BaseCatalogStore,
    BaseIdentityStore,
    BaseOrderStore,
)
from food_ordering.stores.memory import (
    MemoryCartStore,
    MemoryCatalogStore,
    MemoryIdentityStore,
    MemoryOrderStore,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreRegistry:
    """The four independent stores of one running service."""
    identity: BaseIdentityStore
    catalog: BaseCatalogStore
    carts: BaseCartStore
    orders: BaseOrderStore

    def stats(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for store in (self.identity, self.catalog, self.carts, self.orders):
            counts.update(store.stats())
        return counts


def build_stores(settings: Optional[Settings] = None, seed_menu: Optional[bool] = None) -> StoreRegistry:
    """
    Create a fresh, independent set of in-memory stores.

    Args:
        settings: Settings to read (defaults to the cached settings)
        seed_menu: Override ``settings.seed_menu``

    Returns:
        StoreRegistry: New stores, with the admin user provisioned
    """
    settings = settings or get_settings()
    stores = StoreRegistry(
        identity=MemoryIdentityStore(admin_username=settings.admin_username),
        catalog=MemoryCatalogStore(),
        carts=MemoryCartStore(),
        orders=MemoryOrderStore(),
    )

    if settings.seed_menu if seed_menu is None else seed_menu:
        from food_ordering.seed import seed_catalog
        seed_catalog(stores.catalog)

    return stores


@lru_cache()
def get_stores() -> StoreRegistry:
    """
    Get the process-wide stores.

    The instance is cached (singleton pattern) so every request sees the
    same state.

    Returns:
        StoreRegistry: Configured stores
    """
    stores = build_stores()
    logger.info(f"Stores initialized: {stores.stats()}")
    return stores


def reset_stores() -> None:
    """
    Drop the cached stores.

    Useful for testing. The next call to get_stores() builds empty stores
    (plus the seeded menu, if enabled).
    """
    get_stores.cache_clear()
    logger.debug("Store cache cleared")


__all__ = [
    "get_stores",
    "reset_stores",
    "build_stores",
    "StoreRegistry",
    "BaseIdentityStore",
    "BaseCatalogStore",
    "BaseCartStore",
    "BaseOrderStore",
]
