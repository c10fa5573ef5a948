"""
Pydantic Schemas for Request/Response Validation

Wire format is camelCase JSON (``menuItemId``, ``imageUrl``, ``totalPrice``,
``createdAt``); Python code uses snake_case field names.

Request bodies are typed loosely on purpose: the services own validation
so that every rejection is reported as a named error kind (for example
``invalid-cart-items``) instead of a generic schema error.

Author: Khalil Bannouri
Version: 3.1.0
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from food_ordering.models import (
    CartEntry,
    MenuCategory,
    MenuItem,
    MenuItemPatch,
    Order,
    OrderStatus,
    Role,
    User,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class UsernameRequest(CamelModel):
    """Body of register and login."""
    username: Any = Field(None, examples=["alice"])


class MenuItemCreate(CamelModel):
    """Request schema for creating a menu item."""
    name: Any = Field(None, examples=["Kung Pao Chicken"])
    price: Any = Field(None, examples=[14.5])
    description: Any = Field(None, examples=["Stir-fried diced chicken with peanuts."])
    category: Any = Field(None, examples=["main"])
    image_url: Any = Field(None, examples=["https://example.com/kung-pao.jpg"])

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class MenuItemUpdate(MenuItemCreate):
    """Partial update: only keys present in the JSON body are considered."""

    def to_patch(self) -> MenuItemPatch:
        return MenuItemPatch.from_mapping(
            {name: getattr(self, name) for name in self.model_fields_set}
        )


class CartUpdate(CamelModel):
    """Replace the whole cart."""
    items: Any = Field(None, examples=[[{"menuItemId": "1", "quantity": 2}]])


class CartItemAdd(CamelModel):
    """Add one menu item to the cart (merges with an existing line)."""
    menu_item_id: Any = Field(None, examples=["1"])
    quantity: Any = Field(1, examples=[1])


class CartItemQuantity(CamelModel):
    """Set one line's quantity; 0 removes it."""
    quantity: Any = Field(None, examples=[3])


class OrderCreate(CamelModel):
    """Request schema for placing an order."""
    items: Any = Field(None, examples=[[{"menuItemId": "1", "quantity": 2}]])


class StatusUpdate(CamelModel):
    """Order status change (customer cancel or admin update)."""
    status: Any = Field(None, examples=["canceled"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserResponse(CamelModel):
    username: str
    role: Role

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(username=user.username, role=user.role)


class SessionStatusResponse(CamelModel):
    """Answer of whoAmI."""
    logged_in: bool
    username: Optional[str] = None
    role: Optional[Role] = None


class LoggedOutResponse(CamelModel):
    logged_out: bool = True


class MenuItemResponse(CamelModel):
    """Response schema for a single menu item."""
    id: str
    name: str
    price: float
    description: str
    category: MenuCategory
    image_url: str

    @classmethod
    def from_domain(cls, item: MenuItem) -> "MenuItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            description=item.description,
            category=item.category,
            image_url=item.image_url,
        )


class MenuItemEnvelope(CamelModel):
    item: MenuItemResponse


class MenuListResponse(CamelModel):
    items: List[MenuItemResponse]


class DeletedResponse(CamelModel):
    deleted: bool = True


class CartEntryResponse(CamelModel):
    menu_item_id: str
    quantity: int
    name: str
    price: float

    @classmethod
    def from_domain(cls, entry: CartEntry) -> "CartEntryResponse":
        return cls(
            menu_item_id=entry.menu_item_id,
            quantity=entry.quantity,
            name=entry.name,
            price=entry.price,
        )


class CartResponse(CamelModel):
    items: List[CartEntryResponse]

    @classmethod
    def from_entries(cls, entries: list[CartEntry]) -> "CartResponse":
        return cls(items=[CartEntryResponse.from_domain(e) for e in entries])


class OrderItemResponse(CamelModel):
    menu_item_id: str
    quantity: int


class OrderResponse(CamelModel):
    """Response schema for a single order."""
    id: str
    owner: str
    items: List[OrderItemResponse]
    total_price: float
    status: OrderStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            owner=order.owner,
            items=[
                OrderItemResponse(menu_item_id=i.menu_item_id, quantity=i.quantity)
                for i in order.items
            ],
            total_price=order.total_price,
            status=order.status,
            created_at=order.created_at,
        )


class OrderEnvelope(CamelModel):
    order: OrderResponse


class OrderListResponse(CamelModel):
    """Response for listing multiple orders."""
    orders: List[OrderResponse]

    @classmethod
    def from_orders(cls, orders: list[Order]) -> "OrderListResponse":
        return cls(orders=[OrderResponse.from_domain(o) for o in orders])


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    stores: dict[str, int]
    timestamp: datetime
