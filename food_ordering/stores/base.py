"""
Store Abstract Base Classes

Defines the interface contract for the four state holders of the service:
identity (users and sessions), catalog (menu items), carts and orders.

Design Pattern: Strategy Pattern
    - Services depend on these contracts, not on a concrete backend
    - The in-memory implementation lives in ``food_ordering.stores.memory``
    - Each store owns its data and its own lock; there is no global lock

Stores do no business validation. They hand out copies, so callers can
never mutate stored state by accident.

Author: Khalil Bannouri
Version: 3.1.0
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from food_ordering.models import (
    CartEntry,
    MenuCategory,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    Session,
    User,
)


class BaseIdentityStore(ABC):
    """Users and the sessions that reference them."""

    @abstractmethod
    def get_user(self, username: str) -> Optional[User]:
        """Return the user or None."""

    @abstractmethod
    def add_user(self, user: User) -> bool:
        """
        Insert a user if the username is free.

        Returns:
            bool: False if the username was already taken
        """

    @abstractmethod
    def create_session(self, username: str) -> Session:
        """Mint a new session token bound to ``username``."""

    @abstractmethod
    def get_session(self, token: str) -> Optional[Session]:
        """Return the session for a token or None."""

    @abstractmethod
    def remove_session(self, token: str) -> bool:
        """Drop a session. Returns False if it did not exist."""

    @abstractmethod
    def stats(self) -> dict[str, int]:
        """Counts used by the health endpoint."""


class BaseCatalogStore(ABC):
    """Menu items keyed by sequence-assigned ids."""

    @abstractmethod
    def list_items(self) -> list[MenuItem]:
        """All items in id order."""

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[MenuItem]:
        """Return a copy of the item or None."""

    @abstractmethod
    def create_item(
        self,
        name: str,
        price: float,
        description: str,
        category: MenuCategory,
        image_url: str = "",
    ) -> MenuItem:
        """Assign the next id and store a new item."""

    @abstractmethod
    def update_item(self, item_id: str, changes: dict) -> Optional[MenuItem]:
        """
        Apply already-validated field changes in one step.

        Returns:
            MenuItem: Updated copy, or None if the id is unknown
        """

    @abstractmethod
    def delete_item(self, item_id: str) -> bool:
        """Remove an item. Ids are never handed out again."""

    @abstractmethod
    def stats(self) -> dict[str, int]:
        """Counts used by the health endpoint."""


class BaseCartStore(ABC):
    """Per-user cart lines. An empty cart is the absence of a record."""

    @abstractmethod
    def get(self, username: str) -> list[CartEntry]:
        """Stored entries, or an empty list."""

    @abstractmethod
    def set(self, username: str, items: Optional[Sequence[CartEntry]]) -> None:
        """Replace the whole cart; an empty or non-list value deletes the record."""

    def clear(self, username: str) -> None:
        self.set(username, None)

    @abstractmethod
    def stats(self) -> dict[str, int]:
        """Counts used by the health endpoint."""


class BaseOrderStore(ABC):
    """Orders keyed by sequence-assigned ids. Orders are never deleted."""

    @abstractmethod
    def create_order(
        self,
        owner: str,
        items: Iterable[OrderItem],
        total_price: float,
    ) -> Order:
        """Assign the next id and store a new pending order."""

    @abstractmethod
    def get_order(self, order_id: str) -> Optional[Order]:
        """Return a copy of the order or None."""

    @abstractmethod
    def list_orders(
        self,
        owner: Optional[str] = None,
        status: Optional[OrderStatus] = None,
    ) -> list[Order]:
        """Orders in id order, optionally filtered by owner and status."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Set the status. Returns the updated copy or None."""

    @abstractmethod
    def stats(self) -> dict[str, int]:
        """Counts used by the health endpoint."""
