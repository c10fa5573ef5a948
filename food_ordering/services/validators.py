"""
Input Sanitizers

Shared coercion helpers for the raw JSON values that reach the services.
Each returns a clean value or ``None`` (or an empty string for text), and
never raises; callers decide which error kind to report.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional

from food_ordering.models import MenuCategory

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 300
IMAGE_URL_MAX_LENGTH = 300
CATEGORY_MAX_LENGTH = 50

CENT = Decimal("0.01")


def normalize_username(raw: Any) -> str:
    if not isinstance(raw, str):
        return ""
    return raw.strip()


def is_valid_username(username: str) -> bool:
    if not username:
        return False
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return False
    return bool(USERNAME_PATTERN.match(username))


def sanitize_string(value: Any, max_length: int = 200) -> str:
    """Trimmed and truncated text; anything that is not a string becomes ''."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length]


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def round_cents(amount: float) -> float:
    """Round to 2 places, ties away from zero (0.125 -> 0.13)."""
    return float(Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


def sanitize_price(value: Any) -> Optional[float]:
    """Finite price above zero, rounded to cents."""
    number = _to_number(value)
    if number is None or not math.isfinite(number) or number <= 0:
        return None
    rounded = round_cents(number)
    return rounded if rounded > 0 else None


def sanitize_category(value: Any) -> Optional[MenuCategory]:
    category = sanitize_string(value, CATEGORY_MAX_LENGTH)
    try:
        return MenuCategory(category)
    except ValueError:
        return None


def parse_quantity(value: Any) -> Optional[int]:
    """
    Whole positive quantity.

    Accepts ints, integral floats (``2.0``) and numeric strings (``"3"``).
    Booleans, fractions, zero and negatives are rejected.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else None
    number = _to_number(value)
    if number is None or not math.isfinite(number) or not number.is_integer():
        return None
    quantity = int(number)
    return quantity if quantity > 0 else None


def menu_item_id_of(raw: Any) -> Optional[str]:
    """Extract the menu item id from a raw cart/order entry."""
    if not isinstance(raw, Mapping):
        return None
    value = raw.get("menuItemId", raw.get("menu_item_id"))
    return coerce_menu_item_id(value)


def coerce_menu_item_id(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return None
