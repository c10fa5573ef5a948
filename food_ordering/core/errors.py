"""
Typed Error Kinds

Every failure the ordering core can report is an ``OrderingError`` subclass
with a stable kebab-case ``code`` and the HTTP status the API answers with.
Services raise these; ``food_ordering.main`` renders them as ErrorResponse
bodies. Nothing else should escape a service call.
"""

from typing import Optional


class OrderingError(Exception):
    """
    Base class for all named error kinds.

    Attributes:
        code: Machine-readable error code (e.g. "order-not-found")
        status_code: HTTP status used by the REST binding
        message: Human readable description
    """

    code: str = "ordering-error"
    status_code: int = 400
    default_message: str = "The request could not be completed."

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        if code is not None:
            self.code = code
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": False,
            "error": self.code,
            "detail": self.message,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code}: {self.message}>"


# =============================================================================
# AUTHENTICATION / AUTHORIZATION
# =============================================================================

class AuthMissing(OrderingError):
    code = "auth-missing"
    status_code = 401
    default_message = "You need to log in first."


class AuthForbidden(OrderingError):
    code = "auth-forbidden"
    status_code = 403
    default_message = "This identity is not allowed to log in."


class NotAdmin(OrderingError):
    code = "not-admin"
    status_code = 403
    default_message = "Administrator role required."


# =============================================================================
# IDENTITY
# =============================================================================

class InvalidUsername(OrderingError):
    code = "invalid-username"
    status_code = 400
    default_message = "Username must be 2-20 letters, digits or underscores."


class ForbiddenUsername(OrderingError):
    code = "forbidden-username"
    status_code = 403
    default_message = "This username is not allowed."


class UserExists(OrderingError):
    code = "user-exists"
    status_code = 409
    default_message = "That username is already registered."


class UserNotFound(OrderingError):
    code = "user-not-found"
    status_code = 401
    default_message = "No user with that username."


# =============================================================================
# CATALOG
# =============================================================================

class InvalidMenuItem(OrderingError):
    """
    Raised for rejected menu item payloads.

    Creation reports ``invalid-menu-item``; partial updates name the offending
    field with ``invalid-name``, ``invalid-price`` or ``invalid-category``.
    """
    code = "invalid-menu-item"
    status_code = 400
    default_message = "Menu item needs a name, description, positive price and valid category."

    @classmethod
    def for_field(cls, field: str) -> "InvalidMenuItem":
        return cls(f"Invalid value for {field}.", code=f"invalid-{field}")


class MenuItemNotFound(OrderingError):
    code = "menu-item-not-found"
    status_code = 404
    default_message = "Menu item not found."


# =============================================================================
# CART
# =============================================================================

class InvalidCartItems(OrderingError):
    code = "invalid-cart-items"
    status_code = 400
    default_message = "Cart items must reference existing menu items with positive whole quantities."


class CartItemNotFound(OrderingError):
    code = "cart-item-not-found"
    status_code = 404
    default_message = "That item is not in your cart."


# =============================================================================
# ORDERS
# =============================================================================

class InvalidOrderItems(OrderingError):
    code = "invalid-order-items"
    status_code = 400
    default_message = "Order needs at least one existing menu item with a positive whole quantity."


class OrderNotFound(OrderingError):
    code = "order-not-found"
    status_code = 404
    default_message = "Order not found."


class InvalidStatusForUser(OrderingError):
    code = "invalid-status-for-user"
    status_code = 400
    default_message = "Customers can only cancel their orders."


class CannotCancel(OrderingError):
    code = "cannot-cancel"
    status_code = 400
    default_message = "Only pending orders can be canceled."


class InvalidStatus(OrderingError):
    code = "invalid-status"
    status_code = 400
    default_message = "Unknown order status."


class InvalidTransition(OrderingError):
    code = "invalid-transition"
    status_code = 409
    default_message = "That status change is not allowed from the current status."


# =============================================================================
# TRANSPORT
# =============================================================================

class InvalidRequest(OrderingError):
    code = "invalid-request"
    status_code = 400
    default_message = "Request body must be a JSON object."
