"""
Order Engine

Checkout and order status management.

Lifecycle:
    pending → preparing → ready → completed
       └──────────┴─────────┴──→ canceled

Customers may only move their own order from pending to canceled. Admins
may set any of the five statuses from any status unless
``enforce_admin_transitions`` is switched on, in which case admin changes
must follow ``ALLOWED_TRANSITIONS``.

Author: Khalil Bannouri
Version: 3.1.0
"""

import logging
from typing import Any, Optional

from food_ordering.core.config import Settings, get_settings
from food_ordering.core.errors import (
    CannotCancel,
    InvalidOrderItems,
    InvalidStatus,
    InvalidStatusForUser,
    InvalidTransition,
    OrderNotFound,
)
from food_ordering.models import ALLOWED_TRANSITIONS, Order, OrderItem, OrderStatus
from food_ordering.services.validators import menu_item_id_of, parse_quantity, round_cents
from food_ordering.stores.base import BaseCartStore, BaseCatalogStore, BaseOrderStore

logger = logging.getLogger(__name__)


def parse_status(value: Any) -> Optional[OrderStatus]:
    if not isinstance(value, str):
        return None
    try:
        return OrderStatus(value)
    except ValueError:
        return None


class OrderEngine:
    """
    Validates checkouts against the catalog and drives order status.

    Attributes:
        orders: Order store
        catalog: Catalog store, read for validity and prices
        carts: Cart store, cleared after a successful checkout
        settings: Supplies ``enforce_admin_transitions``
    """

    def __init__(
        self,
        orders: BaseOrderStore,
        catalog: BaseCatalogStore,
        carts: BaseCartStore,
        settings: Optional[Settings] = None,
    ):
        self.orders = orders
        self.catalog = catalog
        self.carts = carts
        self.settings = settings or get_settings()

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    def validate_items(self, raw_items: Any) -> Optional[list[OrderItem]]:
        """
        All-or-nothing validation of a raw item list.

        Returns:
            list[OrderItem]: Clean items, or None if the list is empty, not a
            list, or any entry has an unknown menu item or a bad quantity
        """
        if not isinstance(raw_items, list) or not raw_items:
            return None

        items = []
        for raw in raw_items:
            item_id = menu_item_id_of(raw)
            if not item_id or self.catalog.get_item(item_id) is None:
                return None
            quantity = parse_quantity(raw.get("quantity"))
            if quantity is None:
                return None
            items.append(OrderItem(menu_item_id=item_id, quantity=quantity))
        return items

    def compute_total(self, items: list[OrderItem]) -> float:
        """Sum of current catalog price times quantity, rounded once at the end."""
        total = 0.0
        for item in items:
            menu_item = self.catalog.get_item(item.menu_item_id)
            if menu_item is None:
                raise InvalidOrderItems()
            total += menu_item.price * item.quantity
        return round_cents(total)

    def place_order(self, username: str, raw_items: Any) -> Order:
        """
        Create a pending order and clear the caller's cart.

        Raises:
            InvalidOrderItems: Validation failed; no order is created
        """
        items = self.validate_items(raw_items)
        if items is None:
            raise InvalidOrderItems()

        total = self.compute_total(items)
        order = self.orders.create_order(owner=username, items=items, total_price=total)
        self.carts.clear(username)

        logger.info(
            f"Order #{order.id} placed by {username!r}: "
            f"{len(items)} line(s), total {order.total_price:.2f}"
        )
        return order

    # =========================================================================
    # CUSTOMER VIEW
    # =========================================================================

    def list_own(self, username: str) -> list[Order]:
        return self.orders.list_orders(owner=username)

    def get_own(self, username: str, order_id: str) -> Order:
        """Missing and foreign orders both raise OrderNotFound."""
        order = self.orders.get_order(order_id)
        if order is None or order.owner != username:
            raise OrderNotFound()
        return order

    def cancel_own(self, username: str, order_id: str, status: Any = OrderStatus.CANCELED.value) -> Order:
        """
        Customer cancellation.

        Raises:
            OrderNotFound: Missing or not owned by ``username``
            InvalidStatusForUser: Requested status is not "canceled"
            CannotCancel: Order is no longer pending
        """
        order = self.get_own(username, order_id)

        if parse_status(status) != OrderStatus.CANCELED:
            raise InvalidStatusForUser()
        if order.status != OrderStatus.PENDING:
            raise CannotCancel()

        updated = self.orders.update_status(order_id, OrderStatus.CANCELED)
        if updated is None:
            raise OrderNotFound()
        logger.info(f"Order #{order_id} canceled by {username!r}")
        return updated

    # =========================================================================
    # ADMIN VIEW
    # =========================================================================

    def list_all(self, status: Any = None) -> list[Order]:
        """
        All orders, optionally filtered.

        Raises:
            InvalidStatus: Filter is set but not one of the five statuses
        """
        if not status:
            return self.orders.list_orders()
        wanted = parse_status(status)
        if wanted is None:
            raise InvalidStatus()
        return self.orders.list_orders(status=wanted)

    def set_status_as_admin(self, order_id: str, status: Any) -> Order:
        """
        Admin status change.

        Raises:
            InvalidStatus: Not one of the five statuses
            OrderNotFound: Unknown order
            InvalidTransition: Only when transitions are enforced
        """
        new_status = parse_status(status)
        if new_status is None:
            raise InvalidStatus()

        order = self.orders.get_order(order_id)
        if order is None:
            raise OrderNotFound()

        if (
            self.settings.enforce_admin_transitions
            and new_status != order.status
            and new_status not in ALLOWED_TRANSITIONS[order.status]
        ):
            raise InvalidTransition(
                f"Cannot move order from {order.status.value} to {new_status.value}."
            )

        updated = self.orders.update_status(order_id, new_status)
        if updated is None:
            raise OrderNotFound()
        logger.info(f"Order #{order_id} status {order.status.value} → {new_status.value}")
        return updated
