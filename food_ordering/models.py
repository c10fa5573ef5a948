"""
Domain Models

Plain dataclasses held by the in-memory stores:
- Users and sessions (identity)
- Menu items and partial updates (catalog)
- Cart entries (per-user snapshot of catalog rows)
- Orders and the order status lifecycle

Author: Khalil Bannouri
Version: 3.1.0
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
import enum


class Role(str, enum.Enum):
    """Authorization role of a user."""
    USER = "user"
    ADMIN = "admin"


class MenuCategory(str, enum.Enum):
    """Menu sections shown to customers."""
    MAIN = "main"
    SIDE = "side"
    DRINK = "drink"
    DESSERT = "dessert"


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELED = "canceled"


# Lifecycle table: intermediate states may be skipped, terminal states have no exits.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({
        OrderStatus.PREPARING,
        OrderStatus.READY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELED,
    }),
    OrderStatus.PREPARING: frozenset({
        OrderStatus.READY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELED,
    }),
    OrderStatus.READY: frozenset({
        OrderStatus.COMPLETED,
        OrderStatus.CANCELED,
    }),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELED: frozenset(),
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# IDENTITY
# =============================================================================

@dataclass(frozen=True)
class User:
    """A registered identity. Role is fixed at creation."""
    username: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class Session:
    """Opaque token bound to a username until logout."""
    token: str
    username: str


# =============================================================================
# CATALOG
# =============================================================================

@dataclass
class MenuItem:
    """
    A purchasable catalog row.

    Attributes:
        id: Sequence-assigned identifier ("1", "2", ...)
        name: Display name
        price: Unit price, rounded to 2 decimal places
        description: Short description
        category: One of the MenuCategory values
        image_url: Optional picture (may be empty)
    """
    id: str
    name: str
    price: float
    description: str
    category: MenuCategory
    image_url: str = ""


class _Unset:
    """Marker for a patch field that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class MenuItemPatch:
    """
    Partial update of a menu item.

    Each field is either ``UNSET`` (absent from the request) or the raw value
    the client supplied. Validation happens in the catalog service, field by
    field, before anything is applied.
    """
    name: Any = UNSET
    price: Any = UNSET
    description: Any = UNSET
    category: Any = UNSET
    image_url: Any = UNSET

    @classmethod
    def from_mapping(cls, data: dict) -> "MenuItemPatch":
        """Build a patch from a dict, keeping only keys that were present."""
        known = {"name", "price", "description", "category", "image_url"}
        return cls(**{k: v for k, v in data.items() if k in known})

    def present_fields(self) -> list[str]:
        return [
            name for name in ("name", "price", "description", "category", "image_url")
            if getattr(self, name) is not UNSET
        ]


# =============================================================================
# CART
# =============================================================================

@dataclass(frozen=True)
class CartEntry:
    """
    One cart line. Name and price are copied from the catalog when the line
    is written, so later catalog edits do not change the cart.
    """
    menu_item_id: str
    quantity: int
    name: str
    price: float

    def with_quantity(self, quantity: int) -> "CartEntry":
        return replace(self, quantity=quantity)


# =============================================================================
# ORDERS
# =============================================================================

@dataclass(frozen=True)
class OrderItem:
    """Menu item id and quantity captured at checkout."""
    menu_item_id: str
    quantity: int


@dataclass
class Order:
    """
    A checked-out order. Only ``status`` changes after creation.
    """
    id: str
    owner: str
    items: tuple[OrderItem, ...]
    total_price: float
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)

    def __repr__(self):
        return f"<Order #{self.id} - {self.owner} - {self.status.value} - {self.total_price:.2f}>"
