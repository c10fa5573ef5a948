"""
In-Memory Store Implementations

Process-local dictionaries, each guarded by its own re-entrant lock.
State is lost on restart.

Ids for menu items and orders come from a per-store ``itertools.count``
advanced under the store lock, so they are strictly increasing and never
reused, even after deletes.

Author: Khalil Bannouri
Version: 3.1.0
"""

import itertools
import logging
import threading
import uuid
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from food_ordering.models import (
    CartEntry,
    MenuCategory,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    Role,
    Session,
    User,
)
from food_ordering.stores.base import (
    BaseCartStore,
    BaseCatalogStore,
    BaseIdentityStore,
    BaseOrderStore,
)

logger = logging.getLogger(__name__)


class MemoryIdentityStore(BaseIdentityStore):
    """
    Users and sessions in two dicts.

    The administrator account is provisioned when the store is built.
    """

    def __init__(self, admin_username: str = "admin"):
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._sessions: dict[str, Session] = {}
        self._users[admin_username] = User(username=admin_username, role=Role.ADMIN)

    def get_user(self, username: str) -> Optional[User]:
        with self._lock:
            return self._users.get(username)

    def add_user(self, user: User) -> bool:
        with self._lock:
            if user.username in self._users:
                return False
            self._users[user.username] = user
            return True

    def create_session(self, username: str) -> Session:
        session = Session(token=str(uuid.uuid4()), username=username)
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get_session(self, token: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(token)

    def remove_session(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"users": len(self._users), "sessions": len(self._sessions)}


class MemoryCatalogStore(BaseCatalogStore):
    """Menu items in insertion (= id) order."""

    def __init__(self):
        self._lock = threading.RLock()
        self._items: dict[str, MenuItem] = {}
        self._ids = itertools.count(1)

    def list_items(self) -> list[MenuItem]:
        with self._lock:
            return [replace(item) for item in self._items.values()]

    def get_item(self, item_id: str) -> Optional[MenuItem]:
        with self._lock:
            item = self._items.get(item_id)
            return replace(item) if item else None

    def create_item(
        self,
        name: str,
        price: float,
        description: str,
        category: MenuCategory,
        image_url: str = "",
    ) -> MenuItem:
        with self._lock:
            item = MenuItem(
                id=str(next(self._ids)),
                name=name,
                price=price,
                description=description,
                category=MenuCategory(category),
                image_url=image_url,
            )
            self._items[item.id] = item
            return replace(item)

    def update_item(self, item_id: str, changes: dict) -> Optional[MenuItem]:
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                return None
            updated = replace(item, **changes)
            self._items[item_id] = updated
            return replace(updated)

    def delete_item(self, item_id: str) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"menu_items": len(self._items)}


class MemoryCartStore(BaseCartStore):
    """Sparse map of username -> cart lines."""

    def __init__(self):
        self._lock = threading.RLock()
        self._carts: dict[str, tuple[CartEntry, ...]] = {}

    def get(self, username: str) -> list[CartEntry]:
        with self._lock:
            return list(self._carts.get(username, ()))

    def set(self, username: str, items: Optional[Sequence[CartEntry]]) -> None:
        entries = tuple(items) if isinstance(items, (list, tuple)) else ()
        with self._lock:
            if not entries:
                self._carts.pop(username, None)
                return
            self._carts[username] = entries

    def has_record(self, username: str) -> bool:
        with self._lock:
            return username in self._carts

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"carts": len(self._carts)}


class MemoryOrderStore(BaseOrderStore):
    """Orders in insertion (= id) order."""

    def __init__(self):
        self._lock = threading.RLock()
        self._orders: dict[str, Order] = {}
        self._ids = itertools.count(1)

    def create_order(
        self,
        owner: str,
        items: Iterable[OrderItem],
        total_price: float,
    ) -> Order:
        with self._lock:
            order = Order(
                id=str(next(self._ids)),
                owner=owner,
                items=tuple(items),
                total_price=total_price,
            )
            self._orders[order.id] = order
            return replace(order)

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return replace(order) if order else None

    def list_orders(
        self,
        owner: Optional[str] = None,
        status: Optional[OrderStatus] = None,
    ) -> list[Order]:
        with self._lock:
            return [
                replace(order)
                for order in self._orders.values()
                if (owner is None or order.owner == owner)
                and (status is None or order.status == status)
            ]

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            order.status = status
            return replace(order)

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"orders": len(self._orders)}
