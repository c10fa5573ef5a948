"""
Cart Service

Turns raw client cart payloads into catalog-checked snapshot entries and
keeps the one-line-per-menu-item rule. The cart store itself only stores
what it is given.
"""

import logging
from typing import Any, Iterable, Optional

from food_ordering.core.errors import CartItemNotFound, InvalidCartItems, MenuItemNotFound
from food_ordering.models import CartEntry, MenuItem
from food_ordering.services.validators import (
    coerce_menu_item_id,
    menu_item_id_of,
    parse_quantity,
)
from food_ordering.stores.base import BaseCartStore, BaseCatalogStore

logger = logging.getLogger(__name__)


def _snapshot(item: MenuItem, quantity: int) -> CartEntry:
    return CartEntry(
        menu_item_id=item.id,
        quantity=quantity,
        name=item.name,
        price=item.price,
    )


def merge_entries(entries: Iterable[CartEntry]) -> list[CartEntry]:
    """Collapse repeated menu item ids into one line, keeping first position."""
    merged: dict[str, CartEntry] = {}
    for entry in entries:
        existing = merged.get(entry.menu_item_id)
        if existing is None:
            merged[entry.menu_item_id] = entry
        else:
            merged[entry.menu_item_id] = existing.with_quantity(existing.quantity + entry.quantity)
    return list(merged.values())


class CartService:
    def __init__(self, carts: BaseCartStore, catalog: BaseCatalogStore):
        self.carts = carts
        self.catalog = catalog

    def get_cart(self, username: str) -> list[CartEntry]:
        """Stored lines whose menu item still exists. The record is not pruned."""
        return [
            entry for entry in self.carts.get(username)
            if self.catalog.get_item(entry.menu_item_id) is not None
        ]

    def sanitize(self, raw_items: Any) -> Optional[list[CartEntry]]:
        """
        Validate a raw cart payload.

        Returns:
            list: Snapshot entries (empty for an empty list), or None when the
            payload is not a list or any entry is invalid
        """
        if not isinstance(raw_items, list):
            return None

        entries = []
        for raw in raw_items:
            item_id = menu_item_id_of(raw)
            item = self.catalog.get_item(item_id) if item_id else None
            if item is None:
                return None
            quantity = parse_quantity(raw.get("quantity"))
            if quantity is None:
                return None
            entries.append(_snapshot(item, quantity))

        return merge_entries(entries)

    def set_cart(self, username: str, raw_items: Any) -> list[CartEntry]:
        """
        Replace the cart.

        Raises:
            InvalidCartItems: Payload is not a list or has a bad entry
        """
        entries = self.sanitize(raw_items)
        if entries is None:
            raise InvalidCartItems()
        self.carts.set(username, entries)
        logger.debug(f"Cart of {username!r} set to {len(entries)} line(s)")
        return entries

    def add_item(self, username: str, menu_item_id: Any, quantity: Any = 1) -> list[CartEntry]:
        """
        Add to the cart, merging with an existing line for the same item.

        A merged line keeps its original name/price snapshot.

        Raises:
            MenuItemNotFound: Unknown menu item
            InvalidCartItems: Quantity is not a positive whole number
        """
        item_id = coerce_menu_item_id(menu_item_id)
        item = self.catalog.get_item(item_id) if item_id else None
        if item is None:
            raise MenuItemNotFound()
        qty = parse_quantity(quantity)
        if qty is None:
            raise InvalidCartItems()

        entries = self.carts.get(username)
        for index, entry in enumerate(entries):
            if entry.menu_item_id == item.id:
                entries[index] = entry.with_quantity(entry.quantity + qty)
                break
        else:
            entries.append(_snapshot(item, qty))

        self.carts.set(username, entries)
        return self.get_cart(username)

    def set_item_quantity(self, username: str, menu_item_id: Any, quantity: Any) -> list[CartEntry]:
        """
        Change one line's quantity; zero removes the line.

        Raises:
            CartItemNotFound: No line for that item
            InvalidCartItems: Negative or non-whole quantity
        """
        item_id = coerce_menu_item_id(menu_item_id)
        entries = self.carts.get(username)
        index = next(
            (i for i, entry in enumerate(entries) if entry.menu_item_id == item_id),
            None,
        )
        if index is None:
            raise CartItemNotFound()

        if quantity == 0 and not isinstance(quantity, bool):
            del entries[index]
        else:
            qty = parse_quantity(quantity)
            if qty is None:
                raise InvalidCartItems()
            entries[index] = entries[index].with_quantity(qty)

        self.carts.set(username, entries)
        return self.get_cart(username)

    def clear(self, username: str) -> None:
        self.carts.clear(username)
