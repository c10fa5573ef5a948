"""
Catalog Service

Admin-side maintenance of the menu plus the public listing.

Create validates the whole payload and reports ``invalid-menu-item``.
Partial updates validate every present field first and name the first bad
one (``invalid-name``, ``invalid-price``, ``invalid-category``); nothing is
applied unless all present fields pass.

Author: Khalil Bannouri
Version: 3.1.0
"""

import logging
from typing import Any, Mapping

from food_ordering.core.errors import InvalidMenuItem, MenuItemNotFound
from food_ordering.models import UNSET, MenuItem, MenuItemPatch
from food_ordering.services.validators import (
    DESCRIPTION_MAX_LENGTH,
    IMAGE_URL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    sanitize_category,
    sanitize_price,
    sanitize_string,
)
from food_ordering.stores.base import BaseCatalogStore

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, store: BaseCatalogStore):
        self.store = store

    def list_items(self) -> list[MenuItem]:
        return self.store.list_items()

    def get_item(self, item_id: str) -> MenuItem:
        item = self.store.get_item(item_id)
        if item is None:
            raise MenuItemNotFound()
        return item

    def create(self, payload: Mapping[str, Any]) -> MenuItem:
        """
        Add a menu item.

        Args:
            payload: Raw fields ``name``, ``price``, ``description``,
                ``category`` and optional ``image_url``

        Raises:
            InvalidMenuItem: Any required field missing or invalid
        """
        name = sanitize_string(payload.get("name"), NAME_MAX_LENGTH)
        description = sanitize_string(payload.get("description"), DESCRIPTION_MAX_LENGTH)
        price = sanitize_price(payload.get("price"))
        category = sanitize_category(payload.get("category"))
        image_url = sanitize_string(payload.get("image_url"), IMAGE_URL_MAX_LENGTH)

        if not name or not description or price is None or category is None:
            raise InvalidMenuItem()

        item = self.store.create_item(
            name=name,
            price=price,
            description=description,
            category=category,
            image_url=image_url,
        )
        logger.info(f"Menu item #{item.id} created: {item.name} ({item.price:.2f})")
        return item

    def _validate_patch(self, patch: MenuItemPatch) -> dict[str, Any]:
        changes: dict[str, Any] = {}

        # Text fields of the wrong type are ignored, not rejected.
        if isinstance(patch.name, str):
            name = sanitize_string(patch.name, NAME_MAX_LENGTH)
            if not name:
                raise InvalidMenuItem.for_field("name")
            changes["name"] = name

        if patch.price is not UNSET:
            price = sanitize_price(patch.price)
            if price is None:
                raise InvalidMenuItem.for_field("price")
            changes["price"] = price

        if isinstance(patch.description, str):
            changes["description"] = sanitize_string(patch.description, DESCRIPTION_MAX_LENGTH)

        if isinstance(patch.category, str):
            category = sanitize_category(patch.category)
            if category is None:
                raise InvalidMenuItem.for_field("category")
            changes["category"] = category

        if isinstance(patch.image_url, str):
            changes["image_url"] = sanitize_string(patch.image_url, IMAGE_URL_MAX_LENGTH)

        return changes

    def update(self, item_id: str, patch: MenuItemPatch) -> MenuItem:
        """
        Apply a partial update.

        Raises:
            MenuItemNotFound: Unknown id (checked before the fields)
            InvalidMenuItem: A present field failed validation
        """
        if self.store.get_item(item_id) is None:
            raise MenuItemNotFound()

        logger.debug(f"Menu item #{item_id} patch fields: {patch.present_fields()}")
        changes = self._validate_patch(patch)
        updated = self.store.update_item(item_id, changes)
        if updated is None:
            raise MenuItemNotFound()

        logger.info(f"Menu item #{item_id} updated: {sorted(changes)}")
        return updated

    def delete(self, item_id: str) -> None:
        if not self.store.delete_item(item_id):
            raise MenuItemNotFound()
        logger.info(f"Menu item #{item_id} deleted")
