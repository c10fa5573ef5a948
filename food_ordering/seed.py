"""
Demo Menu

Loaded into the catalog on startup when ``SEED_MENU`` is enabled.
"""

import logging

from food_ordering.models import MenuCategory
from food_ordering.stores.base import BaseCatalogStore

logger = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/{}?q=80&w=1470&auto=format&fit=crop"

DEFAULT_MENU = [
    {
        "name": "Kung Pao Chicken",
        "price": 14.5,
        "description": "Stir-fried diced chicken with peanuts in a mildly spicy sauce.",
        "category": MenuCategory.MAIN,
        "image_url": _IMG.format("photo-1604908176997-125f25cc6f3d"),
    },
    {
        "name": "Shredded Pork in Garlic Sauce",
        "price": 13.5,
        "description": "Classic sweet and sour garlicky pork, mildly spicy.",
        "category": MenuCategory.MAIN,
        "image_url": _IMG.format("photo-1658713064117-51f51ecfaf69"),
    },
    {
        "name": "Beef Fried Rice",
        "price": 12.0,
        "description": "Egg fried rice with sliced beef and mixed vegetables.",
        "category": MenuCategory.MAIN,
        "image_url": _IMG.format("photo-1723691802798-fa6efc67b2c9"),
    },
    {
        "name": "House Stir-Fried Noodles",
        "price": 11.5,
        "description": "Wok-fried noodles with mixed vegetables and sliced meat.",
        "category": MenuCategory.MAIN,
        "image_url": _IMG.format("photo-1592778024292-d6782d22add7"),
    },
    {
        "name": "Spring Rolls",
        "price": 6.0,
        "description": "Crispy fried spring rolls stuffed with vegetables.",
        "category": MenuCategory.SIDE,
        "image_url": _IMG.format("photo-1695712641569-05eee7b37b6d"),
    },
    {
        "name": "Hot and Sour Soup",
        "price": 5.0,
        "description": "Classic hot and sour soup, great as a starter.",
        "category": MenuCategory.SIDE,
        "image_url": _IMG.format("photo-1616501268826-ee9731c915d4"),
    },
    {
        "name": "Coke",
        "price": 3.0,
        "description": "Chilled carbonated soft drink.",
        "category": MenuCategory.DRINK,
        "image_url": _IMG.format("photo-1622483767028-3f66f32aef97"),
    },
    {
        "name": "Iced Lemon Tea",
        "price": 3.5,
        "description": "House-made iced lemon tea, lightly sweetened.",
        "category": MenuCategory.DRINK,
        "image_url": _IMG.format("photo-1599390719613-912787a6e65a"),
    },
    {
        "name": "Mango Pudding",
        "price": 6.5,
        "description": "Creamy mango-flavored pudding dessert.",
        "category": MenuCategory.DESSERT,
        "image_url": _IMG.format("photo-1561316960-518ca5a32e3a"),
    },
    {
        "name": "Coconut Sago Dessert",
        "price": 6.5,
        "description": "Coconut milk dessert with sago pearls and fruit.",
        "category": MenuCategory.DESSERT,
        "image_url": _IMG.format("photo-1722982971717-9c8e050facb4"),
    },
]


def seed_catalog(catalog: BaseCatalogStore) -> int:
    """Insert the demo menu. Returns the number of items created."""
    for entry in DEFAULT_MENU:
        catalog.create_item(**entry)
    logger.info(f"Seeded catalog with {len(DEFAULT_MENU)} menu items")
    return len(DEFAULT_MENU)
